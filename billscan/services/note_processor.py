"""
Note path: prompt construction and handling of the generative JSON reply.

The generative service itself is called by the client; this module only
builds the instruction text and turns the reply into a NoteResult whose
category is already canonical.
"""

from typing import Any, Dict, List, Optional, Union
import json
import logging
import re

from billscan.models.note import NoteItem, NoteResult, TransactionType
from billscan.services.category_mapper import fallback_category, map_category
from billscan.utils.money import parse_loose_amount

logger = logging.getLogger(__name__)


EXPENSE_PROMPT_CATEGORIES = (
    'Ăn uống', 'Vận chuyển', 'Mua sắm', 'Giải trí', 'Sức khỏe', 'Giáo dục', 'Nhà cửa', 'Khác',
)
INCOME_PROMPT_CATEGORIES = ('Lương', 'Thưởng', 'Đầu tư', 'Thu nhập khác')

CONFIDENCE_LEVELS = ('high', 'medium', 'low')

JSON_BLOCK = re.compile(r'\{[\s\S]*\}')


def build_note_prompt(
    text: str,
    transaction_type: Union[TransactionType, str] = TransactionType.EXPENSE,
) -> str:
    """
    Instruction text asking the generative service for a JSON summary of a note.

    Args:
        text: The user's note, e.g. "ăn sáng 30 ăn trưa 30"
        transaction_type: Expense or income; selects the allowed categories

    Returns:
        Prompt string
    """
    is_income = str(getattr(transaction_type, 'value', transaction_type)) == 'income'
    kind = 'THU NHẬP' if is_income else 'CHI TIÊU'
    categories = INCOME_PROMPT_CATEGORIES if is_income else EXPENSE_PROMPT_CATEGORIES

    return f"""
Bạn là trợ lý xử lý thông tin tài chính cho ứng dụng quản lý chi tiêu.

Phân tích ghi chú {kind} sau (có thể gồm nhiều khoản) và tính TỔNG số tiền.

Ghi chú: "{text}"

Chỉ trả về JSON:
{{
  "totalAmount": <tổng số tiền, chỉ là số, ví dụ 150000>,
  "items": [{{"item": "<mô tả khoản>", "amount": <số tiền>}}],
  "category": "<một trong: {', '.join(categories)}>",
  "description": "<mô tả ngắn gọn>",
  "confidence": "<high/medium/low>"
}}

Quy tắc:
- totalAmount là tổng của tất cả items; không có số tiền thì đặt 0
- "30" hoặc "30k" trong ghi chú nghĩa là 30000
- category phải nằm trong danh sách trên
- Không giải thích thêm ngoài JSON
""".strip()


def extract_json_block(response_text: Optional[str]) -> Optional[str]:
    """First "{...}" span in a reply, or None."""
    if not response_text:
        return None
    match = JSON_BLOCK.search(response_text)
    return match.group(0) if match else None


def fallback_note(
    response_text: Optional[str],
    transaction_type: Union[TransactionType, str] = TransactionType.EXPENSE,
) -> NoteResult:
    """Result used when the reply carries no usable JSON."""
    return NoteResult(
        total_amount=0,
        items=[],
        category=fallback_category(transaction_type),
        description=response_text or '',
        confidence='low',
    )


def _coerce_items(raw_items: Any) -> List[NoteItem]:
    if not isinstance(raw_items, list):
        return []

    items = []
    for raw in raw_items:
        if not isinstance(raw, dict):
            continue
        items.append(NoteItem(
            item=str(raw.get('item') or raw.get('name') or ''),
            amount=parse_loose_amount(raw.get('amount')),
        ))
    return items


def normalize_note_payload(
    payload: Dict[str, Any],
    transaction_type: Union[TransactionType, str] = TransactionType.EXPENSE,
) -> NoteResult:
    """
    Apply defaults and canonical category mapping to a parsed reply.

    Args:
        payload: Decoded JSON object from the generative service
        transaction_type: Expense or income

    Returns:
        NoteResult
    """
    confidence = str(payload.get('confidence') or 'low').strip().lower()
    if confidence not in CONFIDENCE_LEVELS:
        confidence = 'low'

    return NoteResult(
        total_amount=parse_loose_amount(payload.get('totalAmount')),
        items=_coerce_items(payload.get('items')),
        category=map_category(payload.get('category'), transaction_type),
        description=str(payload.get('description') or ''),
        confidence=confidence,
    )


def parse_note_response(
    response_text: Optional[str],
    transaction_type: Union[TransactionType, str] = TransactionType.EXPENSE,
) -> NoteResult:
    """
    Turn a raw generative reply into a NoteResult.

    Missing or malformed JSON gives the fallback result instead of an error.
    """
    block = extract_json_block(response_text)
    if block is None:
        logger.warning("No JSON found in note response")
        return fallback_note(response_text, transaction_type)

    try:
        payload = json.loads(block)
    except json.JSONDecodeError:
        logger.warning("Malformed JSON in note response", exc_info=True)
        return fallback_note(response_text, transaction_type)

    if not isinstance(payload, dict):
        return fallback_note(response_text, transaction_type)

    result = normalize_note_payload(payload, transaction_type)
    logger.info("Parsed note response", extra={
        'total_amount': result.total_amount,
        'item_count': len(result.items),
        'category': result.category,
    })
    return result
