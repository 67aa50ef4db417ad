"""Shared high-precision Decimal utilities for token amounts.

Every amount that flows through routing is an integer number of base units
stored in a Decimal. Intermediate products of u64 values reach ~10^43, so all
arithmetic must run under a context wide enough to keep them exact.
"""

from __future__ import annotations

import decimal
from decimal import ROUND_CEILING, ROUND_FLOOR, Decimal

# 78 digits of precision, enough for products of several u64/u128 values
DECIMAL_HIGH_PREC_CONTEXT = decimal.Context(prec=78)

_ONE = Decimal(1)


def d(value: Decimal | int | str | float | None = None) -> Decimal:
    """Coerce a value into a Decimal.

    Floats go through ``str`` so that ``0.05`` becomes ``Decimal("0.05")``
    rather than its binary expansion. ``None`` becomes zero.
    """
    if value is None:
        return Decimal(0)
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def floor_int(value: Decimal) -> Decimal:
    """Round toward negative infinity to an integral Decimal."""
    if not value.is_finite():
        return value
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        return value.quantize(_ONE, rounding=ROUND_FLOOR)


def ceil_int(value: Decimal) -> Decimal:
    """Round toward positive infinity to an integral Decimal."""
    if not value.is_finite():
        return value
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        return value.quantize(_ONE, rounding=ROUND_CEILING)


def to_amount_str(value: Decimal) -> str:
    """Render an integral amount without exponent notation."""
    return format(floor_int(value), "f")


__all__ = [
    "DECIMAL_HIGH_PREC_CONTEXT",
    "ceil_int",
    "d",
    "floor_int",
    "to_amount_str",
]
