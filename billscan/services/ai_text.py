"""
Helpers for free-text summaries returned by the generative receipt prompt.

Those summaries look like:

    🏪 Cửa hàng: NGUYEN THI TU UYEN
    🕐 Giờ: 21:05:19
    📅 Ngày: 04/11/2025
    💰 Tổng: 300.000 VND

or a looser "Nhà hàng XYZ - Cơm gà: 50000 VND, Nước: 20000 VND. Tổng: 70000".
"""

from typing import Optional
import logging
import re

from billscan.models.note import AIParseItem, AIParseResult
from billscan.utils.money import format_money, parse_loose_amount

logger = logging.getLogger(__name__)


MERCHANT = re.compile(r'^([^-\n:]+?)(?:\s*[-:]|$)', re.MULTILINE)
TOTAL = re.compile(
    r'(?:tổng cộng|tổng|total|amount|sum)[:\s]*([0-9][0-9,.]*)\s*(?:vnd|đồng|đ)?',
    re.IGNORECASE,
)
ITEM = re.compile(r'([^:\-\n,.]+?)\s*(?::|\bx\b|-)\s*([0-9][0-9,.]*)\s*(?:vnd|đồng|đ)?', re.IGNORECASE)
DATE = re.compile(r'(?:date|ngày|hôm|lúc)[:\s]*([0-9/.|-]+\s*[0-9:]*)', re.IGNORECASE)
PAYMENT = re.compile(r'(?:payment|thanh toán|trả tiền)[:\s]*([^,\n]+)', re.IGNORECASE)

SUMMARY_TOTAL_KEYWORDS = re.compile(r'^(?:tổng|total|amount|sum)\b', re.IGNORECASE)

PROCESSED_MERCHANT = re.compile(r'🏪\s*Cửa hàng:\s*([^\n]+)', re.IGNORECASE)
PROCESSED_TIME = re.compile(r'🕐\s*Giờ:\s*([^\n]+)', re.IGNORECASE)
PROCESSED_TOTAL = re.compile(r'💰\s*Tổng:\s*([^\n]+)', re.IGNORECASE)

# Tried in order by extract_amount_from_processed_text
PROCESSED_AMOUNT_PATTERNS = [
    re.compile(r'💰\s*Tổng:\s*([0-9.,]+)\s*(?:VND)?', re.IGNORECASE),
    re.compile(r'(?:Tổng|Total):\s*([0-9.,]+)\s*(?:VND)?', re.IGNORECASE),
    re.compile(r'([0-9]{1,3}(?:[.,][0-9]{3})+)\s*VND', re.IGNORECASE),
    re.compile(r'([0-9]+)\s*VND', re.IGNORECASE),
]

DESCRIPTION_FALLBACK_LENGTH = 100


def parse_ai_result(text: Optional[str]) -> AIParseResult:
    """
    Recover merchant, total, items, date and payment method from a summary.

    Args:
        text: Free text written by the generative service

    Returns:
        AIParseResult; success is True when a merchant, a total or at least
        one item was found
    """
    if not text or not text.strip():
        logger.warning("Summary text is empty")
        return AIParseResult()

    merchant = None
    merchant_match = MERCHANT.search(text.strip())
    if merchant_match:
        merchant = merchant_match.group(1).strip() or None

    total_amount = None
    total_match = TOTAL.search(text)
    if total_match:
        amount = parse_loose_amount(total_match.group(1))
        if amount > 0:
            total_amount = amount

    items = []
    for match in ITEM.finditer(text):
        name = match.group(1).strip()
        if not name or (merchant and name.lower() == merchant.lower()):
            continue
        if SUMMARY_TOTAL_KEYWORDS.match(name):
            continue
        amount = parse_loose_amount(match.group(2))
        items.append(AIParseItem(name=name, amount=amount if amount > 0 else None))

    date = None
    date_match = DATE.search(text)
    if date_match:
        date = date_match.group(1).strip() or None

    payment_method = None
    payment_match = PAYMENT.search(text)
    if payment_match:
        payment_method = payment_match.group(1).strip() or None

    return AIParseResult(
        merchant=merchant,
        total_amount=total_amount,
        items=items,
        date=date,
        payment_method=payment_method,
        success=bool(merchant or total_amount or items),
    )


def create_description(result: AIParseResult) -> str:
    """
    Human-readable summary of a parsed result.

    Examples:
        >>> create_description(AIParseResult())
        'OCR Data'
    """
    if not result.success:
        return 'OCR Data'

    parts = []
    if result.merchant:
        parts.append(f"🏪 {result.merchant}")

    if result.items:
        parts.append('\n'.join(
            f"  • {item.name}" + (f": {format_money(item.amount)}" if item.amount else '')
            for item in result.items
        ))

    if result.total_amount:
        parts.append(f"\n💰 Tổng: {format_money(result.total_amount)}")
    if result.date:
        parts.append(f"📅 {result.date}")
    if result.payment_method:
        parts.append(f"💳 {result.payment_method}")

    return '\n'.join(parts)


def extract_description_from_processed_text(processed_text: Optional[str]) -> str:
    """
    Short "merchant - time (total)" description from a structured summary.

    Falls back to the first 100 characters when none of the labelled lines
    are present.
    """
    if not processed_text:
        return ''

    def _field(pattern: re.Pattern) -> str:
        match = pattern.search(processed_text)
        return match.group(1).strip() if match else ''

    merchant = _field(PROCESSED_MERCHANT)
    time = _field(PROCESSED_TIME)
    total = _field(PROCESSED_TOTAL)

    description = merchant
    if time:
        description += f" - {time}"
    if total:
        description += f" ({total})"

    return description or processed_text[:DESCRIPTION_FALLBACK_LENGTH]


def extract_amount_from_processed_text(processed_text: Optional[str]) -> int:
    """
    Total amount from a structured summary; 0 when none is found.

    Examples:
        >>> extract_amount_from_processed_text("💰 Tổng: 300.000 VND")
        300000
    """
    if not processed_text:
        return 0

    for pattern in PROCESSED_AMOUNT_PATTERNS:
        match = pattern.search(processed_text)
        if match:
            cleaned = re.sub(r'[.,]', '', match.group(1).strip())
            return int(cleaned) if cleaned.isdigit() else 0

    logger.warning("Could not find amount in processed text")
    return 0
