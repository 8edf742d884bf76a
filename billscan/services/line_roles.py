"""
Line role detection for receipt text.

Each check is independent: a single line can be both a total and a tax line,
or carry an address and a date. The assembler decides what to do with the
combination.
"""

from enum import Enum
from typing import Optional, Set
import re

from billscan.utils.dates import extract_date, extract_time
from billscan.utils.money import first_amount
from billscan.utils.patterns import PatternSpec


class LineRole(str, Enum):
    STORE_NAME = "store_name"
    ADDRESS = "address"
    DATE = "date"
    TIME = "time"
    ITEM = "item"
    TOTAL = "total"
    TAX = "tax"
    NOISE = "noise"


STORE_NAME_MIN_LENGTH = 10
STORE_NAME_MAX_LENGTH = 50

STORE_PREFIX = PatternSpec(
    name='store_prefix',
    pattern=r'^\s*(?:store|shop|receipt|hóa đơn|hoá đơn)\b\s*[:\-]?\s*',
    example='HÓA ĐƠN: Circle K',
    notes='Labels printed in front of the merchant name',
)

ADDRESS_LINE = PatternSpec(
    name='address_keywords',
    pattern=(
        r'(?:\b(?:địa chỉ|đ/c|đc|address|addr|đường|street|st|phố|ngõ|hẻm|phường|'
        r'xã|quận|huyện|district|ward|tỉnh|province|thành phố|city|tp)\b)'
    ),
    example='123 Lê Lợi, Phường Bến Thành, Quận 1, TP.HCM',
)

TOTAL_LINE = PatternSpec(
    name='total_prefix',
    pattern=r'^\s*(?:total|tổng|thanh toán)',
    example='TỔNG CỘNG: 150.000',
    notes='Anchored to line start so "Subtotal" does not qualify',
)

TAX_LINE = PatternSpec(
    name='tax_keywords',
    pattern=r'\b(?:vat|tax|thuế)\b',
    example='VAT 10%: 13.636',
)


def extract_store_name(line: str, index: int) -> Optional[str]:
    """
    Store name from the first line of a receipt.

    Args:
        line: Trimmed line
        index: Position of the line among non-empty lines

    Returns:
        Cleaned store name (at most 50 characters) or None
    """
    if index != 0 or len(line) <= STORE_NAME_MIN_LENGTH:
        return None

    name = STORE_PREFIX.compiled.sub('', line, count=1).strip()
    name = re.sub(r'\s{2,}', ' ', name)
    return name[:STORE_NAME_MAX_LENGTH] or None


def is_address_line(line: str) -> bool:
    return bool(ADDRESS_LINE.search(line))


def is_total_line(line: str) -> bool:
    return bool(TOTAL_LINE.search(line))


def is_tax_line(line: str) -> bool:
    return bool(TAX_LINE.search(line))


def extract_total(line: str) -> Optional[int]:
    """Explicit total from a TOTAL/TỔNG/THANH TOÁN line, if positive."""
    if not is_total_line(line):
        return None

    amount = first_amount(line)
    return amount if amount and amount > 0 else None


def extract_tax(line: str) -> Optional[int]:
    """Tax value from a VAT/TAX/THUẾ line: the first number on it."""
    if not is_tax_line(line):
        return None

    amount = first_amount(line)
    return amount if amount and amount > 0 else None


def classify_line(line: str, index: int, next_line: Optional[str] = None) -> Set[LineRole]:
    """
    All roles a line can play.

    ITEM is reported for every digit-bearing line that is not a total or tax
    line, alongside any other role (an item line can contain "đường" or a
    date); whether the line really parses as an item is up to the item
    parser. Lines that end up with no role at all are NOISE.

    Args:
        line: Trimmed, non-empty line
        index: Position among non-empty lines
        next_line: Following line (reserved for continuation handling)

    Returns:
        Set of LineRole values
    """
    roles: Set[LineRole] = set()

    if extract_store_name(line, index):
        roles.add(LineRole.STORE_NAME)
    if is_address_line(line):
        roles.add(LineRole.ADDRESS)
    if extract_date(line):
        roles.add(LineRole.DATE)
    if extract_time(line):
        roles.add(LineRole.TIME)
    if is_total_line(line):
        roles.add(LineRole.TOTAL)
    if is_tax_line(line):
        roles.add(LineRole.TAX)

    if not roles & {LineRole.TOTAL, LineRole.TAX} and re.search(r'\d', line):
        roles.add(LineRole.ITEM)
    if not roles:
        roles.add(LineRole.NOISE)

    return roles
