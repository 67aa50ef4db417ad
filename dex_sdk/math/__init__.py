"""Decimal arithmetic helpers."""

from dex_sdk.math.decimal_utils import (
    DECIMAL_HIGH_PREC_CONTEXT,
    ceil_int,
    d,
    floor_int,
)

__all__ = ["DECIMAL_HIGH_PREC_CONTEXT", "ceil_int", "d", "floor_int"]
