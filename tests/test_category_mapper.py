"""
Tests for canonical category mapping.
"""

import pytest

from billscan.models.note import TransactionType
from billscan.services.categorizer import CATEGORY_RULES, OTHER
from billscan.services.category_mapper import (
    EDUCATION,
    ENTERTAINMENT,
    EXPENSE_CATEGORIES,
    EXPENSE_OTHER,
    FOOD,
    HEALTH,
    HOUSING,
    INCOME_CATEGORIES,
    INCOME_OTHER,
    SALARY,
    TRANSPORT,
    fallback_category,
    map_category,
    strip_decorations,
)


class TestExactAliases:

    def test_plain_label(self):
        assert map_category("Ăn uống") == FOOD
        assert map_category("Ăn uống") == "Ăn uống 🍔"

    def test_transport_synonyms(self):
        assert map_category("Giao thông") == TRANSPORT
        assert map_category("Vận chuyển") == TRANSPORT

    def test_health_synonym(self):
        assert map_category("Y tế") == HEALTH

    def test_housing_synonyms(self):
        assert map_category("Nhà ở") == HOUSING
        assert map_category("Tiện ích") == HOUSING

    def test_english_names(self):
        assert map_category("Education") == EDUCATION
        assert map_category("Travel") == ENTERTAINMENT

    def test_income_labels(self):
        assert map_category("Lương", TransactionType.INCOME) == SALARY
        assert map_category("Thu nhập khác", "income") == INCOME_OTHER

    def test_other_depends_on_type(self):
        assert map_category("Khác", "expense") == EXPENSE_OTHER
        assert map_category("Khác", "income") == INCOME_OTHER


class TestDecorationsAndCase:

    def test_emoji_stripped(self):
        assert map_category("🍔 Ăn uống") == FOOD
        assert map_category("Giao thông 🚗") == TRANSPORT
        assert map_category("✓ Lương 💼", "income") == SALARY

    def test_case_insensitive_retry(self):
        assert map_category("ăn uống") == FOOD
        assert map_category("LƯƠNG", "income") == SALARY
        assert map_category("food") == FOOD

    def test_strip_decorations(self):
        assert strip_decorations("Mua sắm 🛍️") == "Mua sắm"
        assert strip_decorations("  Nhà   cửa 🏠 ") == "Nhà cửa"
        assert strip_decorations("") == ""


class TestIdempotence:

    @pytest.mark.parametrize("label", EXPENSE_CATEGORIES)
    def test_expense_canonical_is_fixed_point(self, label):
        assert map_category(label, "expense") == label

    @pytest.mark.parametrize("label", INCOME_CATEGORIES)
    def test_income_canonical_is_fixed_point(self, label):
        assert map_category(label, "income") == label

    def test_double_mapping(self):
        once = map_category("Giao thông", "expense")
        assert map_category(once, "expense") == once

    def test_fallback_is_fixed_point(self):
        for tx_type in ("expense", "income"):
            fallback = fallback_category(tx_type)
            assert map_category(fallback, tx_type) == fallback


class TestFallback:

    def test_unknown_label(self):
        assert map_category("Từ thiện") == "📝 Ghi chú"
        assert map_category("Từ thiện", "income") == "💰 Thu nhập"

    def test_empty_or_missing(self):
        assert map_category(None) == "📝 Ghi chú"
        assert map_category("", "income") == "💰 Thu nhập"
        assert map_category("🎉") == "📝 Ghi chú"

    def test_non_string_never_raises(self):
        assert map_category(42) == "📝 Ghi chú"

    def test_unknown_type_treated_as_expense(self):
        assert map_category("Ăn uống", "transfer") == FOOD
        assert fallback_category(None) == "📝 Ghi chú"


class TestClassifierLabelsFold:
    """Every label the keyword classifier emits resolves to the taxonomy."""

    def test_all_classifier_labels_map(self):
        labels = [rule.label for rule in CATEGORY_RULES] + [OTHER]
        for label in labels:
            assert map_category(label, "expense") in EXPENSE_CATEGORIES
