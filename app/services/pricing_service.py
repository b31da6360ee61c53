"""Pricing calculator for quotations.

Turns an ordered list of (quantity, unit_price) lines plus discount and VAT
percentages into the stored financial fields of a quotation.
"""
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Tuple

CENT = Decimal('0.01')
HUNDRED = Decimal('100')


def _money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def line_total(quantity, unit_price) -> Decimal:
    """Total of one line, rounded to cents."""
    return _money(Decimal(str(quantity)) * Decimal(str(unit_price)))


@dataclass(frozen=True)
class PricingResult:
    subtotal: Decimal
    discount_percent: Decimal
    discount_amount: Decimal
    taxable: Decimal
    vat_percent: Decimal
    vat_amount: Decimal
    grand_total: Decimal
    line_totals: List[Decimal] = field(default_factory=list)

    def as_header_fields(self) -> dict:
        """Column values for the quotation header."""
        return {
            'subtotal': self.subtotal,
            'discount_percent': self.discount_percent,
            'discount_amount': self.discount_amount,
            'vat_percent': self.vat_percent,
            'vat_amount': self.vat_amount,
            'total': self.grand_total,
        }


def calculate_totals(lines: Iterable[Tuple[Decimal, Decimal]], discount_percent=0, vat_percent=0) -> PricingResult:
    """
    Compute subtotal, discount, VAT and grand total.

    VAT is charged on the discounted amount. Percentages outside 0-100 are
    not rejected here; the caller decides what it accepts.
    """
    discount_pct = Decimal(str(discount_percent or 0))
    vat_pct = Decimal(str(vat_percent or 0))

    totals = [line_total(qty, price) for qty, price in lines]
    subtotal = sum(totals, Decimal('0.00'))

    discount_amount = _money(subtotal * discount_pct / HUNDRED)
    taxable = subtotal - discount_amount
    vat_amount = _money(taxable * vat_pct / HUNDRED)

    return PricingResult(
        subtotal=subtotal,
        discount_percent=discount_pct,
        discount_amount=discount_amount,
        taxable=taxable,
        vat_percent=vat_pct,
        vat_amount=vat_amount,
        grand_total=taxable + vat_amount,
        line_totals=totals,
    )
