"""
Item line extraction.

Receipt item lines usually read "<name> [<qty> x <unit price>] <extended price>",
so the last number on the line is taken as the amount and everything before
the first number is the name.
"""

from typing import Optional, Tuple
import logging
import re

from billscan.models.bill import BillItem
from billscan.services.categorizer import categorize
from billscan.utils.money import find_amount_tokens, normalize_amount, parse_amount
from billscan.utils.patterns import PatternSpec

logger = logging.getLogger(__name__)


MIN_ITEM_LINE_LENGTH = 5
DEFAULT_ITEM_NAME = 'Item'

HEADER_FOOTER = PatternSpec(
    name='header_footer',
    pattern=r'\b(?:item|product|description|total|tổng|qty|price)\b',
    example='ITEM QTY PRICE',
    notes='Column headers and summary lines',
)

QUANTITY_UNIT_PRICE = PatternSpec(
    name='quantity_x_unit_price',
    pattern=r'(\d+)\s*x\s*(\d[\d.,]*)',
    example='2 x 25.000',
)

ORDINAL_PREFIX = re.compile(r'^\s*\d+\s*[.)]\s+')


def _split_ordinal(line: str) -> Tuple[int, str]:
    """Offset where the content starts once a "1. " style prefix is dropped."""
    match = ORDINAL_PREFIX.match(line)
    return (match.end(), line[match.end():]) if match else (0, line)


def clean_item_name(raw_name: str) -> str:
    """
    Tidy the text in front of the first number.

    Examples:
        >>> clean_item_name("2.  Tra   sua ")
        'Tra sua'
        >>> clean_item_name("  ")
        'Item'
    """
    name = ORDINAL_PREFIX.sub('', raw_name or '')
    name = re.sub(r'\s+', ' ', name).strip(' \t:-*|')
    return name or DEFAULT_ITEM_NAME


def extract_quantity(line: str) -> Tuple[Optional[int], Optional[int]]:
    """
    Quantity and unit price from a "<qty> x <price>" fragment.

    Returns:
        (quantity, unit_price), both None when the fragment is absent
    """
    match = QUANTITY_UNIT_PRICE.search(line)
    if not match:
        return None, None

    quantity = int(match.group(1))
    unit_price = normalize_amount(match.group(2))
    return quantity, unit_price


def is_candidate_line(line: str) -> bool:
    """Cheap filters applied before any extraction."""
    if not line or len(line) < MIN_ITEM_LINE_LENGTH:
        return False
    if not re.search(r'\d', line):
        return False
    if HEADER_FOOTER.search(line):
        return False
    return True


def parse_item_line(line: str, next_line: Optional[str] = None) -> Optional[BillItem]:
    """
    Parse one receipt line into an item.

    Args:
        line: Trimmed line of receipt text
        next_line: Following line; accepted for continuation lines, not used yet

    Returns:
        BillItem, or None when the line is not an item

    Examples:
        >>> parse_item_line("Cơm tấm 1 x 45.000 45.000").amount
        45000
    """
    if not is_candidate_line(line):
        return None

    # Ordinals like "1. " are not prices; look for numbers after them
    offset, content = _split_ordinal(line)
    tokens = find_amount_tokens(content)
    if not tokens:
        return None

    amount = parse_amount(tokens[-1].group(0))
    if amount is None:
        logger.debug("Item amount out of range", extra={'line': line})
        return None

    name = clean_item_name(line[:offset + tokens[0].start()])
    quantity, unit_price = extract_quantity(content)

    return BillItem(
        name=name,
        amount=amount,
        category=categorize(name),
        quantity=quantity,
        unit_price=unit_price,
    )
