"""
Unit tests for formatting and number parsing helpers.
"""

from datetime import datetime, timezone, timedelta
from decimal import Decimal

import pytest

from app.exceptions import ValidationError
from app.utils.formatters import amount_in_words, iso_utc, money, quantity, to_number
from app.utils.number_format import parse_decimal, parse_int_id


class TestAmountInWords:

    def test_whole_naira(self):
        assert amount_in_words(96750) == 'Ninety Six Thousand Seven Hundred and Fifty Naira Only'

    def test_naira_and_kobo(self):
        assert amount_in_words(Decimal('12.50')) == 'Twelve Naira and Fifty Kobo Only'

    def test_millions(self):
        assert amount_in_words(2000005) == 'Two Million Five Naira Only'

    @pytest.mark.parametrize('value', [0, None, -5])
    def test_zero_or_negative(self, value):
        assert amount_in_words(value) == 'Zero Naira Only'


class TestMoneyAndQuantity:

    def test_money(self):
        assert money(96750) == 'N96,750.00'
        assert money(Decimal('1234.5'), symbol='') == '1,234.50'
        assert money(None) == 'N0.00'

    def test_quantity(self):
        assert quantity(Decimal('2.000')) == '2'
        assert quantity(Decimal('2.500')) == '2.5'


class TestSerialization:

    def test_to_number(self):
        assert to_number(Decimal('96750.00')) == 96750
        assert isinstance(to_number(Decimal('96750.00')), int)
        assert to_number(Decimal('7.5')) == 7.5
        assert to_number(None) == 0

    def test_iso_utc(self):
        aware = datetime(2026, 1, 2, 4, 5, 6, tzinfo=timezone(timedelta(hours=1)))
        assert iso_utc(aware) == '2026-01-02T03:05:06Z'
        assert iso_utc(datetime(2026, 1, 2, 3, 4, 5)) == '2026-01-02T03:04:05Z'
        assert iso_utc(None) is None


class TestParseDecimal:

    def test_numbers_and_strings(self):
        assert parse_decimal(7.5, 'vat') == Decimal('7.5')
        assert parse_decimal('1,500.50', 'price') == Decimal('1500.50')

    def test_empty_uses_default(self):
        assert parse_decimal(None, 'vat', default=0) == 0
        assert parse_decimal('', 'vat', default=Decimal('7.5')) == Decimal('7.5')
        assert parse_decimal(None, 'vat') is None

    @pytest.mark.parametrize('value', ['abc', True, 'NaN', 'Infinity', [1]])
    def test_rejects_non_numbers(self, value):
        with pytest.raises(ValidationError) as exc:
            parse_decimal(value, 'vat_percent')
        assert 'vat_percent' in exc.value.message

    def test_negative_rejected_when_not_allowed(self):
        with pytest.raises(ValidationError):
            parse_decimal(-1, 'quantity', allow_negative=False)
        assert parse_decimal(-1, 'discount') == Decimal('-1')


class TestParseIntId:

    @pytest.mark.parametrize('value', [None, '', 0, '0'])
    def test_no_id(self, value):
        assert parse_int_id(value, 'material_id') is None

    def test_valid(self):
        assert parse_int_id('12', 'material_id') == 12

    @pytest.mark.parametrize('value', ['x', -3, True])
    def test_invalid(self, value):
        with pytest.raises(ValidationError):
            parse_int_id(value, 'material_id')
