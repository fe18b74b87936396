"""Invoice Totals

Decimal arithmetic for line totals and invoice totals. Line amounts are summed
unrounded; stored values are kept at storage precision (6 decimal places,
matching the Numeric(18, 6) columns). Rounding to currency precision happens
only at display time.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Union
from pydantic import BaseModel

STORAGE_PRECISION = Decimal("0.000001")
HUNDRED = Decimal("100")

Number = Union[Decimal, int, str]


def to_storage(value: Number) -> Decimal:
    return Decimal(value).quantize(STORAGE_PRECISION, rounding=ROUND_HALF_UP)


def line_total(quantity: Number, unit_price: Number) -> Decimal:
    """total_price of a single line"""
    return to_storage(Decimal(quantity) * Decimal(unit_price))


class TaxLine(BaseModel):
    rate: Decimal
    amount: Decimal


class InvoiceTotals(BaseModel):
    subtotal: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    total_amount: Decimal

    @property
    def tax_line(self) -> Optional[TaxLine]:
        """VAT line for presentation; None when the rate is zero"""
        if self.tax_rate == 0:
            return None
        return TaxLine(rate=self.tax_rate, amount=self.tax_amount)


def _amount(item) -> Decimal:
    amount = getattr(item, "amount", None)
    if amount is not None:
        return amount
    return Decimal(item.quantity) * Decimal(item.unit_price)


def calculate_totals(items: Iterable, tax_rate: Number) -> InvoiceTotals:
    """
    Compute subtotal, tax and total

    Args:
        items: Objects exposing quantity and unit_price, and optionally an
            unrounded amount that takes precedence
        tax_rate: VAT rate in percent (0 is valid)

    Returns:
        InvoiceTotals where total_amount == subtotal + tax_amount exactly
    """
    rate = Decimal(tax_rate)
    if rate < 0:
        raise ValueError(f"Tax rate must not be negative: {rate}")

    subtotal = to_storage(sum((_amount(item) for item in items), Decimal("0")))
    tax_amount = to_storage(subtotal * rate / HUNDRED)

    return InvoiceTotals(
        subtotal=subtotal,
        tax_rate=rate,
        tax_amount=tax_amount,
        total_amount=subtotal + tax_amount,
    )
