"""
GST splitting.

Splits an amount into base and tax for a percentage rate, for amounts
quoted either inclusive or exclusive of tax. The currency has no
fractional unit here, so every result is rounded to a whole rupee with
ties going away from zero (ordinary rounding, not banker's rounding).
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

from ledgerly.models.transaction import TaxSplit

WHOLE_UNIT = Decimal("1")
HUNDRED = Decimal("100")


def round_half_up(value: Union[Decimal, int, str]) -> int:
    """Round to the nearest whole unit, ties away from zero."""
    return int(Decimal(value).quantize(WHOLE_UNIT, rounding=ROUND_HALF_UP))


class TaxSplitter:
    """Computes {base, tax, total} for an amount and a GST rate."""

    def split(self, amount: int, rate: int, inclusive: bool) -> TaxSplit:
        """
        Split an amount into base and tax.

        Args:
            amount: Amount as quoted by the user
            rate: GST rate in percent
            inclusive: True if the amount already contains the tax

        Raises:
            ValueError: If amount or rate is negative
        """
        if amount < 0:
            raise ValueError(f"Amount cannot be negative: {amount}")
        if rate < 0:
            raise ValueError(f"GST rate cannot be negative: {rate}")

        if rate == 0:
            return TaxSplit(base=amount, tax=0, total=amount)

        rate_d = Decimal(rate)
        if inclusive:
            base = round_half_up(Decimal(amount) * HUNDRED / (HUNDRED + rate_d))
            return TaxSplit(base=base, tax=amount - base, total=amount)

        tax = round_half_up(Decimal(amount) * rate_d / HUNDRED)
        return TaxSplit(base=amount, tax=tax, total=amount + tax)
