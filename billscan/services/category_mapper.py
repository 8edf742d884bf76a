"""
Canonical category mapping for labels produced outside the bill parser.

The generative note path (and the keyword classifier) return loose labels
such as "Ăn uống", "ăn uống 🍔" or "Giao thông". The rest of the
application only understands the emoji-suffixed canonical names, so every
label is resolved here:

1. Strip decorative symbols (emoji, check marks, variation selectors)
2. Exact lookup in the alias table for the transaction type
3. Case-insensitive retry
4. Type-specific fallback

Nothing in here raises; an unknown label is a fallback, not an error.
"""

from typing import Dict, Optional, Union
import logging
import re
import unicodedata

from billscan.models.note import TransactionType

logger = logging.getLogger(__name__)


# Canonical taxonomy
FOOD = 'Ăn uống 🍔'
TRANSPORT = 'Vận chuyển 🚗'
SHOPPING = 'Mua sắm 🛍️'
ENTERTAINMENT = 'Giải trí 🎮'
HEALTH = 'Sức khỏe 💊'
EDUCATION = 'Giáo dục 📚'
HOUSING = 'Nhà cửa 🏠'
EXPENSE_OTHER = 'Khác 📦'

SALARY = 'Lương 💼'
BONUS = 'Thưởng 🎁'
INVESTMENT = 'Đầu tư 📈'
INCOME_OTHER = 'Khác 💰'

EXPENSE_CATEGORIES = (
    FOOD, TRANSPORT, SHOPPING, ENTERTAINMENT, HEALTH, EDUCATION, HOUSING, EXPENSE_OTHER,
)
INCOME_CATEGORIES = (SALARY, BONUS, INVESTMENT, INCOME_OTHER)

FALLBACK_CATEGORIES = {
    TransactionType.EXPENSE: '📝 Ghi chú',
    TransactionType.INCOME: '💰 Thu nhập',
}


EXPENSE_ALIASES: Dict[str, str] = {
    'Ăn uống': FOOD,
    'Food': FOOD,
    'Vận chuyển': TRANSPORT,
    'Giao thông': TRANSPORT,
    'Di chuyển': TRANSPORT,
    'Transport': TRANSPORT,
    'Mua sắm': SHOPPING,
    'Shopping': SHOPPING,
    'Giải trí': ENTERTAINMENT,
    'Du lịch': ENTERTAINMENT,
    'Entertainment': ENTERTAINMENT,
    'Travel': ENTERTAINMENT,
    'Sức khỏe': HEALTH,
    'Sức khoẻ': HEALTH,
    'Y tế': HEALTH,
    'Health': HEALTH,
    'Giáo dục': EDUCATION,
    'Education': EDUCATION,
    'Nhà cửa': HOUSING,
    'Nhà ở': HOUSING,
    'Tiện ích': HOUSING,
    'Housing': HOUSING,
    'Utilities': HOUSING,
    'Khác': EXPENSE_OTHER,
    'Other': EXPENSE_OTHER,
}

INCOME_ALIASES: Dict[str, str] = {
    'Lương': SALARY,
    'Salary': SALARY,
    'Thưởng': BONUS,
    'Bonus': BONUS,
    'Đầu tư': INVESTMENT,
    'Investment': INVESTMENT,
    'Thu nhập khác': INCOME_OTHER,
    'Khác': INCOME_OTHER,
    'Other': INCOME_OTHER,
}

ALIASES_BY_TYPE = {
    TransactionType.EXPENSE: EXPENSE_ALIASES,
    TransactionType.INCOME: INCOME_ALIASES,
}

# Zero-width joiners and variation selectors glue emoji sequences together
_INVISIBLE = {'\u200d', '\ufe0e', '\ufe0f'}


def strip_decorations(label: str) -> str:
    """
    Remove emoji and other pictographic symbols from a label.

    Examples:
        >>> strip_decorations("Mua sắm 🛍️")
        'Mua sắm'
        >>> strip_decorations("✓ Lương")
        'Lương'
    """
    if not label:
        return ''

    text = unicodedata.normalize('NFC', label)
    kept = [
        ch for ch in text
        if ch not in _INVISIBLE and unicodedata.category(ch) not in ('So', 'Sk', 'Cs')
    ]
    return re.sub(r'\s+', ' ', ''.join(kept)).strip()


def _coerce_type(transaction_type: Union[TransactionType, str, None]) -> TransactionType:
    if isinstance(transaction_type, TransactionType):
        return transaction_type
    if isinstance(transaction_type, str) and transaction_type.strip().lower() == 'income':
        return TransactionType.INCOME
    return TransactionType.EXPENSE


def fallback_category(transaction_type: Union[TransactionType, str, None]) -> str:
    """Default label when nothing maps."""
    return FALLBACK_CATEGORIES[_coerce_type(transaction_type)]


def map_category(
    raw_category: Optional[str],
    transaction_type: Union[TransactionType, str, None] = TransactionType.EXPENSE,
) -> str:
    """
    Resolve a loose category label to the application's canonical label.

    Args:
        raw_category: Label as produced upstream (may carry emoji)
        transaction_type: "expense" or "income"; anything else is treated as expense

    Returns:
        Canonical emoji-suffixed label, or the type-specific fallback

    Examples:
        >>> map_category("Ăn uống")
        'Ăn uống 🍔'
        >>> map_category("Giao thông 🚗")
        'Vận chuyển 🚗'
        >>> map_category("lương", "income")
        'Lương 💼'
        >>> map_category(None, "income")
        '💰 Thu nhập'
    """
    tx_type = _coerce_type(transaction_type)

    if not isinstance(raw_category, str) or not raw_category.strip():
        return fallback_category(tx_type)

    cleaned = strip_decorations(raw_category)
    if not cleaned:
        return fallback_category(tx_type)

    # Own type first, then the other type so a misfiled label still resolves
    tables = [ALIASES_BY_TYPE[tx_type]] + [
        table for t, table in ALIASES_BY_TYPE.items() if t is not tx_type
    ]

    for table in tables:
        if cleaned in table:
            return table[cleaned]

    folded = cleaned.casefold()
    for table in tables:
        for alias, canonical in table.items():
            if alias.casefold() == folded:
                return canonical

    logger.debug("Unmapped category, using fallback", extra={
        'raw_category': raw_category,
        'transaction_type': tx_type.value,
    })
    return fallback_category(tx_type)
