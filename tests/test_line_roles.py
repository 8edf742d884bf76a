"""
Tests for per-line role detection.
"""

from billscan.services.line_roles import (
    LineRole,
    classify_line,
    extract_store_name,
    extract_tax,
    extract_total,
    is_address_line,
)


class TestStoreName:

    def test_only_first_line(self):
        assert extract_store_name("SIÊU THỊ CO.OPMART", 0) == "SIÊU THỊ CO.OPMART"
        assert extract_store_name("SIÊU THỊ CO.OPMART", 1) is None

    def test_minimum_length(self):
        assert extract_store_name("Quán Ốc", 0) is None
        assert extract_store_name("1234567890", 0) is None

    def test_prefixes_removed(self):
        assert extract_store_name("RECEIPT - Highlands Coffee", 0) == "Highlands Coffee"
        assert extract_store_name("Shop: Thế Giới Di Động", 0) == "Thế Giới Di Động"
        assert extract_store_name("hóa đơn Bách Hóa Xanh", 0) == "Bách Hóa Xanh"


class TestAddress:

    def test_vietnamese_keywords(self):
        assert is_address_line("123 Lê Lợi, Phường Bến Thành, Quận 1")
        assert is_address_line("Đ/C: 45 Trần Phú")

    def test_english_keywords(self):
        assert is_address_line("Address: 12 Main Street")
        assert is_address_line("District 7, HCM City")

    def test_plain_item(self):
        assert not is_address_line("Cơm tấm 45.000")


class TestTotalAndTax:

    def test_total_prefixes(self):
        assert extract_total("TOTAL 150.000") == 150000
        assert extract_total("Tổng cộng: 75.000") == 75000
        assert extract_total("THANH TOÁN 60,000") == 60000

    def test_total_must_lead(self):
        assert extract_total("Subtotal 150.000") is None
        assert extract_total("Phở bò 50.000") is None

    def test_total_without_number(self):
        assert extract_total("TỔNG CỘNG") is None

    def test_tax(self):
        assert extract_tax("VAT 8.000") == 8000
        assert extract_tax("Tax 5,000") == 5000

    def test_tax_takes_first_number(self):
        assert extract_tax("Thuế GTGT (10%): 13.636") == 10
        assert extract_tax("VAT 13.636 (10%)") == 13636

    def test_not_tax(self):
        assert extract_tax("Phở bò 50.000") is None


class TestClassifyLine:

    def test_item_line(self):
        assert classify_line("Cơm tấm 1 x 45.000 45.000", 3) == {LineRole.ITEM}

    def test_noise_line(self):
        assert classify_line("Cảm ơn quý khách", 5) == {LineRole.NOISE}

    def test_multiple_roles(self):
        roles = classify_line("TOTAL (incl. VAT) 150.000", 4)
        assert LineRole.TOTAL in roles
        assert LineRole.TAX in roles
        assert LineRole.ITEM not in roles

    def test_date_and_time_line_is_also_tried_as_item(self):
        roles = classify_line("12/05/2024 10:15", 2)
        assert roles == {LineRole.DATE, LineRole.TIME, LineRole.ITEM}

    def test_address_keyword_line_is_also_tried_as_item(self):
        roles = classify_line("Trà sữa đường đen 45.000", 1)
        assert roles == {LineRole.ADDRESS, LineRole.ITEM}

    def test_tax_line_is_not_an_item(self):
        roles = classify_line("VAT 10%: 3.500", 6)
        assert roles == {LineRole.TAX}

    def test_store_line_can_be_item(self):
        roles = classify_line("Bánh mì Huỳnh Hoa 60.000", 0)
        assert roles == {LineRole.STORE_NAME, LineRole.ITEM}
