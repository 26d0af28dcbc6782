"""Decimal helpers for currency and hours.

Payroll amounts are rounded half-up to the cent, the convention used on
paystubs and in IRS Pub 15-T worksheets. Intermediate values (rates,
category subtotals) are rounded before they are summed.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

CENT = Decimal("0.01")
ZERO = Decimal("0")

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number) -> Decimal:
    """Coerce a number to Decimal without binary float artifacts.

    Floats go through str() so 0.1 becomes Decimal("0.1"), not
    Decimal("0.1000000000000000055511151231257827021181583404541015625").
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    try:
        return Decimal(value)
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f"Not a number: {value!r}") from e


def round_cents(amount: Number) -> Decimal:
    """Round to 2 decimal places, half-up.

    Example: 37.295 -> 37.30, 161.846 -> 161.85
    """
    return to_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)
