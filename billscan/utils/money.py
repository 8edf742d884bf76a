"""
Shared money parsing utilities for Vietnamese receipt and note text.

Handles the formats that show up in recognized text:
- Dot thousands: 150.000
- Comma thousands: 150,000
- Plain digits: 150000
- Free text from generative summaries: 1.000,50 or 1,000.50
"""

from typing import List, Optional
import re


MIN_AMOUNT = 0
MAX_AMOUNT = 100_000_000

# Groups of exactly three digits after the separator, otherwise a plain run.
# Requiring at least one group in the first branch keeps "45000" in one piece.
NUMBER_PATTERN = re.compile(r'\d{1,3}(?:[.,]\d{3})+(?!\d)|\d+')


def normalize_amount(token: str) -> Optional[int]:
    """
    Turn a numeric token into an integer by dropping every separator.

    Args:
        token: Token matching NUMBER_PATTERN (e.g., "45.000", "1,250,000")

    Returns:
        Integer amount, or None when nothing numeric is left

    Examples:
        >>> normalize_amount("45.000")
        45000
        >>> normalize_amount("1,250,000")
        1250000
    """
    if not token or not isinstance(token, str):
        return None

    cleaned = re.sub(r'[.,]', '', token.strip())
    if not cleaned.isdigit():
        return None

    return int(cleaned)


def is_valid_amount(amount: Optional[int]) -> bool:
    """Reject line numbers, page numbers and runaway totals (upper bound exclusive)."""
    return amount is not None and MIN_AMOUNT < amount < MAX_AMOUNT


def parse_amount(token: str) -> Optional[int]:
    """Normalize a token and range-check it in one step."""
    amount = normalize_amount(token)
    return amount if is_valid_amount(amount) else None


def find_amount_tokens(line: str) -> List[re.Match]:
    """All numeric tokens on a line, in order of appearance."""
    return list(NUMBER_PATTERN.finditer(line or ''))


def first_amount(line: str) -> Optional[int]:
    """Normalize the first numeric token on a line; None when there is none."""
    tokens = find_amount_tokens(line)
    return normalize_amount(tokens[0].group(0)) if tokens else None


def extract_amounts(text: str) -> List[int]:
    """
    Pull every in-range amount out of a block of text.

    Examples:
        >>> extract_amounts("Cafe 35.000\\nBanh mi 20.000")
        [35000, 20000]
    """
    if not text:
        return []

    amounts = []
    for match in find_amount_tokens(text):
        amount = parse_amount(match.group(0))
        if amount is not None:
            amounts.append(amount)
    return amounts


def parse_loose_amount(amount_str: str) -> int:
    """
    Parse an amount written by a generative model, where the separators
    are not guaranteed to be thousands separators.

    - Both "," and "." present: the later one is the decimal separator
    - Only ",": thousands when repeated or followed by more than 2 digits,
      decimal otherwise
    - Result is rounded to the nearest integer; unparsable input gives 0

    Examples:
        >>> parse_loose_amount("50,000")
        50000
        >>> parse_loose_amount("1.000,50")
        1001
        >>> parse_loose_amount("12,5")
        13
    """
    if amount_str is None:
        return 0

    cleaned = str(amount_str).strip()
    if not cleaned:
        return 0

    if ',' in cleaned and '.' in cleaned:
        if cleaned.rindex(',') < cleaned.rindex('.'):
            cleaned = cleaned.replace(',', '')
        else:
            cleaned = cleaned.replace('.', '').replace(',', '.')
    elif ',' in cleaned:
        after_comma = len(cleaned.split(',')[-1])
        if cleaned.count(',') > 1 or after_comma > 2:
            cleaned = cleaned.replace(',', '')
        else:
            cleaned = cleaned.replace(',', '.')
    elif cleaned.count('.') > 1 or (
        '.' in cleaned and len(cleaned.split('.')[-1]) == 3
    ):
        # "50.000" is Vietnamese thousands grouping, not 50.0
        cleaned = cleaned.replace('.', '')

    match = re.match(r'^\d+(?:\.\d+)?', cleaned)
    if not match:
        return 0

    try:
        # Round half up, matching how the amounts are read aloud
        return int(float(match.group(0)) + 0.5)
    except ValueError:
        return 0


def format_money(amount: Optional[int], currency: str = 'VND') -> str:
    """
    Format an integer amount with Vietnamese grouping.

    Examples:
        >>> format_money(50000)
        '50.000 VND'
        >>> format_money(1250000, 'đ')
        '1.250.000 đ'
    """
    if amount is None:
        return 'N/A'

    formatted = f"{int(amount):,}".replace(',', '.')
    return f"{formatted} {currency}" if currency else formatted
