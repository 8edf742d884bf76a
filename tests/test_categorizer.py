"""
Tests for the ordered keyword classifier.
"""

import unicodedata

import pytest

from billscan.services.categorizer import (
    CATEGORY_RULES,
    ENTERTAINMENT,
    FOOD,
    HEALTH,
    OTHER,
    SHOPPING,
    TRANSPORT,
    TRAVEL,
    UTILITIES,
    categorize,
)


class TestCategorize:

    @pytest.mark.parametrize("description", ["ĂN SÁNG", "ăn sáng", "Ăn Sáng"])
    def test_case_insensitive(self, description):
        assert categorize(description) == FOOD

    def test_decomposed_input(self):
        decomposed = unicodedata.normalize('NFD', "Phở bò")
        assert categorize(decomposed) == FOOD

    @pytest.mark.parametrize("description,expected", [
        ("Cơm tấm sườn", FOOD),
        ("Cà phê sữa đá", FOOD),
        ("Xăng RON95", TRANSPORT),
        ("Grab đi làm", TRANSPORT),
        ("Nhà thuốc Long Châu", HEALTH),
        ("Khám răng", HEALTH),
        ("Áo thun", SHOPPING),
        ("Giày thể thao", SHOPPING),
        ("Tiền điện tháng 5", UTILITIES),
        ("Internet FPT", UTILITIES),
        ("Khách sạn Mường Thanh", TRAVEL),
        ("Xem phim CGV", ENTERTAINMENT),
        ("Mua sách", ENTERTAINMENT),
    ])
    def test_groups(self, description, expected):
        assert categorize(description) == expected

    def test_default_other(self):
        assert categorize("Chuyển khoản cho mẹ") == OTHER
        assert categorize("") == OTHER
        assert categorize("   ") == OTHER


class TestPriorityOrder:
    """First matching group wins."""

    def test_rule_order(self):
        assert [rule.name for rule in CATEGORY_RULES] == [
            'food', 'transport', 'health', 'shopping',
            'utilities', 'travel', 'entertainment',
        ]

    def test_food_beats_transport(self):
        # "cơm" (food) and "xe" (transport) both present
        assert categorize("Cơm hộp giao xe") == FOOD

    def test_transport_beats_travel(self):
        # "vé" alone is travel, "xe" is transport
        assert categorize("Vé xe khách") == TRANSPORT

    def test_travel_beats_entertainment(self):
        assert categorize("Vé xem phim") == TRAVEL
