"""
Keyword-based category classifier for item and note descriptions.

The groups form a priority list: the first group with a matching keyword
wins, so a description like "vé xe" lands in Transport before Travel.
"""

import logging
import unicodedata

from billscan.utils.patterns import PatternSpec

logger = logging.getLogger(__name__)


FOOD = 'Ăn uống'
TRANSPORT = 'Giao thông'
HEALTH = 'Sức khỏe'
SHOPPING = 'Mua sắm'
UTILITIES = 'Tiện ích'
TRAVEL = 'Du lịch'
ENTERTAINMENT = 'Giải trí'
OTHER = 'Khác'


# Order matters; do not sort.
CATEGORY_RULES = [
    PatternSpec(
        name='food',
        label=FOOD,
        pattern=(
            r'\b(?:ăn|uống|cơm|phở|bún|miến|mì|bánh|cháo|xôi|lẩu|nướng|gà|bò|heo|'
            r'trà|sữa|cà phê|cafe|coffee|nước ngọt|nước suối|bia|beer|'
            r'nhà hàng|quán|food|drink|lunch|dinner|breakfast|snack|pizza|burger)\b'
        ),
        example='Cơm tấm sườn',
    ),
    PatternSpec(
        name='transport',
        label=TRANSPORT,
        pattern=(
            r'\b(?:xăng|dầu|xe|grab|taxi|gojek|xe buýt|bus|gửi xe|đỗ xe|'
            r'parking|petrol|fuel|metro|train|tàu)\b'
        ),
        example='Xăng RON95',
    ),
    PatternSpec(
        name='health',
        label=HEALTH,
        pattern=(
            r'\b(?:thuốc|nhà thuốc|bệnh viện|phòng khám|khám|y tế|vitamin|'
            r'pharmacy|hospital|clinic|medicine|doctor|dental|nha khoa)\b'
        ),
        example='Nhà thuốc Long Châu',
    ),
    PatternSpec(
        name='shopping',
        label=SHOPPING,
        pattern=(
            r'\b(?:quần|áo|giày|dép|túi|váy|mũ|nón|thời trang|'
            r'clothes|clothing|shirt|shoes|fashion|jeans)\b'
        ),
        example='Áo thun',
    ),
    PatternSpec(
        name='utilities',
        label=UTILITIES,
        pattern=(
            r'\b(?:điện|tiền nước|nước sinh hoạt|gas|internet|wifi|cước|'
            r'hóa đơn|thanh toán|electric|electricity|water bill|utility|payment)\b'
        ),
        example='Tiền điện tháng 5',
    ),
    PatternSpec(
        name='travel',
        label=TRAVEL,
        pattern=(
            r'\b(?:du lịch|khách sạn|homestay|resort|tour|vé máy bay|vé|'
            r'hotel|flight|ticket|travel|booking)\b'
        ),
        example='Khách sạn Mường Thanh',
    ),
    PatternSpec(
        name='entertainment',
        label=ENTERTAINMENT,
        pattern=(
            r'\b(?:phim|xem phim|rạp|game|sách|truyện|karaoke|nhạc|'
            r'movie|cinema|netflix|spotify|book|concert)\b'
        ),
        example='Xem phim CGV',
        notes='"vé" alone is claimed by Travel first',
    ),
]


def _normalize(description: str) -> str:
    # Recognized text may arrive decomposed (NFD); keywords are composed
    return unicodedata.normalize('NFC', description).lower()


def categorize(description: str) -> str:
    """
    Map a free-form description to a category label.

    Args:
        description: Item name or note text

    Returns:
        Label of the first matching keyword group, or "Khác"

    Examples:
        >>> categorize("ĂN SÁNG")
        'Ăn uống'
        >>> categorize("Tiền điện tháng 5")
        'Tiện ích'
    """
    if not description or not description.strip():
        return OTHER

    text = _normalize(description)

    for rule in CATEGORY_RULES:
        if rule.search(text):
            logger.debug("Category matched", extra={'rule': rule.name})
            return rule.label

    return OTHER
