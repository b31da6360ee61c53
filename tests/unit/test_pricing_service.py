"""
Unit tests for the quotation pricing calculator.
"""

from decimal import Decimal

import pytest

from app.services.pricing_service import calculate_totals, line_total


class TestLineTotal:

    def test_whole_numbers(self):
        assert line_total(2, 50000) == Decimal('100000.00')

    def test_rounds_half_up_to_cents(self):
        # 3 x 0.335 = 1.005 -> 1.01
        assert line_total(Decimal('3'), Decimal('0.335')) == Decimal('1.01')

    def test_fractional_quantity(self):
        assert line_total(Decimal('2.5'), Decimal('1200')) == Decimal('3000.00')


class TestCalculateTotals:

    def test_discount_then_vat(self):
        """VAT is charged on the discounted amount."""
        result = calculate_totals([(2, 50000)], discount_percent=10, vat_percent=7.5)

        assert result.subtotal == Decimal('100000.00')
        assert result.discount_amount == Decimal('10000.00')
        assert result.taxable == Decimal('90000.00')
        assert result.vat_amount == Decimal('6750.00')
        assert result.grand_total == Decimal('96750.00')

    def test_no_lines_gives_zero_totals(self):
        result = calculate_totals([], discount_percent=10, vat_percent=7.5)

        assert result.subtotal == 0
        assert result.discount_amount == 0
        assert result.vat_amount == 0
        assert result.grand_total == 0
        assert result.line_totals == []

    def test_missing_percentages_default_to_zero(self):
        result = calculate_totals([(1, 1500)], discount_percent=None, vat_percent=None)

        assert result.discount_percent == 0
        assert result.vat_percent == 0
        assert result.grand_total == Decimal('1500.00')

    def test_subtotal_is_sum_of_rounded_lines(self):
        lines = [(Decimal('3'), Decimal('0.335')), (Decimal('3'), Decimal('0.335'))]
        result = calculate_totals(lines)

        assert result.line_totals == [Decimal('1.01'), Decimal('1.01')]
        assert result.subtotal == Decimal('2.02')

    @pytest.mark.parametrize('lines,discount,vat', [
        ([(1, 999.99)], 0, 0),
        ([(3, 1250), (2, 80.5)], 12.5, 7.5),
        ([(Decimal('0.333'), 1000)], 33.333, 15),
        ([(10, 1)], 150, 0),
    ])
    def test_total_identity(self, lines, discount, vat):
        """grand_total == subtotal - discount_amount + vat_amount, to the cent."""
        result = calculate_totals(lines, discount_percent=discount, vat_percent=vat)

        assert result.grand_total == result.subtotal - result.discount_amount + result.vat_amount
        assert result.grand_total == result.grand_total.quantize(Decimal('0.01'))

    def test_header_fields_use_total_column(self):
        fields = calculate_totals([(1, 100)], vat_percent=10).as_header_fields()

        assert fields['total'] == Decimal('110.00')
        assert set(fields) == {
            'subtotal', 'discount_percent', 'discount_amount', 'vat_percent', 'vat_amount', 'total'
        }
