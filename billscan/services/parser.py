"""
Receipt parser service for extracting structured bill data from OCR text.

One left-to-right pass over the non-empty lines collects items, tax, store,
address, date and time. Explicit total lines are collected during the pass
and applied afterwards: the last one seen replaces the summed item total.
"""

from dataclasses import dataclass, field
from typing import List, Optional
import logging
import re
import unicodedata

from billscan.config import settings
from billscan.models.bill import BillData, BillItem
from billscan.services.item_parser import parse_item_line
from billscan.services.line_roles import (
    LineRole,
    classify_line,
    extract_store_name,
    extract_tax,
    extract_total,
)
from billscan.utils.dates import extract_date, extract_time
from billscan.utils.scoring import calculate_confidence

logger = logging.getLogger(__name__)


@dataclass
class _ScanState:
    """Accumulator local to one parse call."""
    items: List[BillItem] = field(default_factory=list)
    store_name: Optional[str] = None
    store_address: Optional[str] = None
    tax: int = 0
    date: Optional[str] = None
    time: Optional[str] = None
    explicit_totals: List[int] = field(default_factory=list)

    @property
    def items_total(self) -> int:
        return sum(item.amount for item in self.items)


def clean_text(text: str) -> str:
    """
    Trim every line and drop the empty ones.

    Examples:
        >>> clean_text("  Phở bò 50.000 \\n\\n  Trà đá 5.000")
        'Phở bò 50.000\\nTrà đá 5.000'
    """
    if not text:
        return ''
    return '\n'.join(split_lines(text))


def split_lines(text: str) -> List[str]:
    """Non-empty trimmed lines, NFC-normalized so keyword patterns match."""
    if not text:
        return []
    normalized = unicodedata.normalize('NFC', text)
    return [line.strip() for line in normalized.split('\n') if line.strip()]


def empty_bill(text: Optional[str]) -> BillData:
    """Zero-confidence result used for blank input and failed parses."""
    return BillData(raw_text=text or '', currency=settings.DEFAULT_CURRENCY)


def _scan_line(state: _ScanState, line: str, index: int, next_line: Optional[str]) -> None:
    roles = classify_line(line, index, next_line)

    if LineRole.STORE_NAME in roles and state.store_name is None:
        state.store_name = extract_store_name(line, index)

    if LineRole.ADDRESS in roles and state.store_address is None:
        state.store_address = re.sub(r'\s{2,}', ' ', line)

    if LineRole.DATE in roles and state.date is None:
        state.date = extract_date(line)

    if LineRole.TIME in roles and state.time is None:
        state.time = extract_time(line)

    if LineRole.TOTAL in roles:
        total = extract_total(line)
        if total:
            state.explicit_totals.append(total)

    if LineRole.TAX in roles:
        tax = extract_tax(line)
        if tax:
            state.tax = tax

    if LineRole.ITEM in roles:
        item = parse_item_line(line, next_line)
        if item is not None:
            state.items.append(item)


def parse_bill_text(text: Optional[str]) -> BillData:
    """
    Parse receipt text and extract all available fields.

    Args:
        text: OCR-extracted text from a receipt

    Returns:
        BillData; blank or unparsable input gives an empty result with
        confidence 0 rather than an error
    """
    if not text or not text.strip():
        return empty_bill(text)

    try:
        lines = split_lines(text)
        state = _ScanState()

        for index, line in enumerate(lines):
            next_line = lines[index + 1] if index + 1 < len(lines) else None
            _scan_line(state, line, index, next_line)

        total_amount = state.items_total
        if state.explicit_totals:
            # Last explicit total wins over the item sum
            total_amount = state.explicit_totals[-1]

        confidence = calculate_confidence(
            items=state.items,
            store_name=state.store_name,
            date=state.date,
            total_amount=total_amount,
        )

        logger.debug("Parsed bill", extra={
            'line_count': len(lines),
            'item_count': len(state.items),
            'explicit_totals': len(state.explicit_totals),
            'confidence': confidence,
        })

        return BillData(
            items=state.items,
            store_name=state.store_name,
            store_address=state.store_address,
            total_amount=total_amount,
            tax=state.tax,
            currency=settings.DEFAULT_CURRENCY,
            date=state.date,
            time=state.time,
            confidence=confidence,
            raw_text=text,
        )

    except (re.error, ValueError, AttributeError, IndexError, TypeError):
        # pydantic's ValidationError is a ValueError
        logger.warning("Error parsing bill text", exc_info=True)
        return empty_bill(text)
