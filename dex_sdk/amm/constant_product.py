"""Constant-product AMM math.

The pools use the constant product formula ``x * y = k`` with a proportional
fee taken from the input amount. Fees are expressed in units out of 10,000
(30 = 0.3%). Results are floored to integers exactly the way the on-chain
module does it, so that a simulated trade is one the chain will accept.
"""

from __future__ import annotations

import decimal
from collections.abc import Sequence
from decimal import Decimal
from enum import Enum

from dex_sdk.constants import FEE_SCALE, U64_MAX
from dex_sdk.math.decimal_utils import DECIMAL_HIGH_PREC_CONTEXT, ceil_int, d, floor_int
from dex_sdk.pools.types import CoinType, LiquidityPoolResource

_FEE_SCALE = Decimal(FEE_SCALE)
_INFINITY = Decimal("Infinity")


class SlippageMode(str, Enum):
    """Direction in which a slippage tolerance is applied."""

    MINUS = "minus"
    PLUS = "plus"


class ConstantProductAMM:
    """Constant product math and per-pool hop simulation.

    Formula: amount_out = (in * (10000 - fee) * res_out) / (res_in * 10000 + in * (10000 - fee))
    """

    def get_amount_out(
        self,
        amount_in: Decimal,
        reserve_in: Decimal,
        reserve_out: Decimal,
        fee: Decimal | int,
    ) -> Decimal:
        """Calculate output amount using constant product formula.

        Args:
            amount_in: Input coin amount
            reserve_in: Reserve of input coin in pool
            reserve_out: Reserve of output coin in pool
            fee: Swap fee in units out of 10,000

        Returns:
            Output amount, floored. Callers must reject results that are
            negative or exceed ``reserve_out``.
        """
        with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
            fee_multiplier = _FEE_SCALE - d(fee)
            amount_in_with_fee = d(amount_in) * fee_multiplier
            denominator = d(reserve_in) * _FEE_SCALE + amount_in_with_fee
            if denominator == 0:
                return Decimal(0)
            return floor_int(amount_in_with_fee * d(reserve_out) / denominator)

    def get_amount_in(
        self,
        amount_out: Decimal,
        reserve_out: Decimal,
        reserve_in: Decimal,
        fee: Decimal | int,
    ) -> Decimal:
        """Calculate required input for desired output.

        Formula: amount_in = (out * 10000 * res_in) / ((res_out - out) * (10000 - fee)) + 1

        The trailing ``+ 1`` rounds in the pool's favour so the returned input
        is always enough to buy ``amount_out`` on-chain.

        Args:
            amount_out: Desired output coin amount
            reserve_out: Reserve of output coin in pool
            reserve_in: Reserve of input coin in pool
            fee: Swap fee in units out of 10,000

        Returns:
            Required input amount. ``Infinity`` when ``amount_out`` would drain
            the pool; callers must reject results that are negative or above u64.
        """
        amount_out = d(amount_out)
        reserve_out = d(reserve_out)
        if amount_out >= reserve_out:
            # Can't extract the whole reserve
            return _INFINITY
        with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
            numerator = amount_out * _FEE_SCALE * d(reserve_in)
            denominator = (reserve_out - amount_out) * (_FEE_SCALE - d(fee))
            if denominator <= 0:
                return _INFINITY
            return floor_int(numerator / denominator) + 1

    @staticmethod
    def is_valid_amount_out(amount_out: Decimal, reserve_out: Decimal) -> bool:
        """An output is usable when it lies in ``[0, reserve_out]``."""
        return 0 <= amount_out <= reserve_out

    @staticmethod
    def is_valid_amount_in(amount_in: Decimal) -> bool:
        """An input is usable when it lies in ``[0, u64::MAX]``."""
        return 0 <= amount_in <= U64_MAX

    def swap_exact_in(
        self,
        pool: LiquidityPoolResource,
        coin_in: CoinType,
        amount_in: Decimal,
        fee: Decimal | int,
    ) -> Decimal | None:
        """Simulate selling ``amount_in`` of ``coin_in`` into ``pool``.

        Returns:
            Output amount, or None if the pool cannot serve this hop
        """
        reserve_in, reserve_out = pool.get_reserves(coin_in)
        amount_out = self.get_amount_out(amount_in, reserve_in, reserve_out, fee)
        if not self.is_valid_amount_out(amount_out, reserve_out):
            return None
        return amount_out

    def swap_exact_out(
        self,
        pool: LiquidityPoolResource,
        coin_out: CoinType,
        amount_out: Decimal,
        fee: Decimal | int,
    ) -> Decimal | None:
        """Simulate buying ``amount_out`` of ``coin_out`` from ``pool``.

        Returns:
            Required input amount, or None if the pool cannot serve this hop
        """
        if d(amount_out) < 0:
            return None
        reserve_out, reserve_in = pool.get_reserves(coin_out)
        amount_in = self.get_amount_in(amount_out, reserve_out, reserve_in, fee)
        if not self.is_valid_amount_in(amount_in):
            return None
        return amount_in


# Singleton instance
constant_product = ConstantProductAMM()


def with_slippage(
    amount: Decimal | int | str,
    slippage: Decimal | float | str,
    mode: SlippageMode | str,
) -> Decimal:
    """Apply a slippage tolerance to an amount.

    ``minus`` floors ``amount * (1 - slippage)`` (minimum acceptable output);
    ``plus`` ceils ``amount * (1 + slippage)`` (maximum acceptable input).
    """
    mode = SlippageMode(mode)
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        amount = d(amount)
        slippage = d(slippage)
        if mode is SlippageMode.MINUS:
            return floor_int(amount * (1 - slippage))
        return ceil_int(amount * (1 + slippage))


def quote(
    amount_x: Decimal | int | str,
    reserve_x: Decimal | int | str,
    reserve_y: Decimal | int | str,
) -> Decimal:
    """Amount of Y matching ``amount_x`` of X at the pool ratio, floored."""
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        return floor_int(d(amount_x) * d(reserve_y) / d(reserve_x))


def price_impact(
    coin_in: CoinType,
    pools: Sequence[LiquidityPoolResource],
    amounts: Sequence[Decimal],
    fee: Decimal | int,
) -> Decimal:
    """Relative deviation of a trade from its no-impact outcome.

    The no-impact output carries the input amount through every hop at that
    pool's current fee-adjusted spot rate, ``res_out / res_in * (10000 - fee) / 10000``.

    Args:
        coin_in: Coin the trade starts from
        pools: Pools of the trade in route order
        amounts: Realized amounts, ``len(pools) + 1`` long
        fee: Swap fee in units out of 10,000

    Returns:
        ``|ideal - realized| / ideal`` (zero when the ideal output is zero)
    """
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        fee_rate = (_FEE_SCALE - d(fee)) / _FEE_SCALE
        ideal = d(amounts[0])
        current = coin_in
        for pool in pools:
            reserve_in, reserve_out = pool.get_reserves(current)
            ideal = ideal * reserve_out / reserve_in * fee_rate
            current = pool.other_coin(current)
        if ideal == 0:
            return Decimal(0)
        return abs(ideal - d(amounts[-1])) / ideal


__all__ = [
    "ConstantProductAMM",
    "SlippageMode",
    "constant_product",
    "price_impact",
    "quote",
    "with_slippage",
]
