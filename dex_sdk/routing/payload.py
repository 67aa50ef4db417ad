"""Entry-function payloads for routed swaps.

Amounts in the payload are bounded by the caller's slippage tolerance: an
exact-input swap carries the minimum acceptable output, an exact-output swap
the maximum acceptable input.
"""

from __future__ import annotations

import math
import time
from decimal import Decimal, InvalidOperation

from dex_sdk.amm.constant_product import SlippageMode, with_slippage
from dex_sdk.config import NetworkOptions
from dex_sdk.constants import MAX_PAYLOAD_HOPS, MIN_PAYLOAD_HOPS
from dex_sdk.errors import InvalidArgumentError
from dex_sdk.math.decimal_utils import d, to_amount_str
from dex_sdk.models.payload import EntryFunctionPayload
from dex_sdk.resources.compose import compose_type
from dex_sdk.routing.types import Trade, TradeType

# Entry function per (trade type, number of pairs)
SWAP_ENTRY_FUNCTIONS: dict[TradeType, dict[int, str]] = {
    TradeType.EXACT_IN: {
        1: "swap_exact_coins_for_coins_entry",
        2: "swap_exact_coins_for_coins_2_pair_entry",
        3: "swap_exact_coins_for_coins_3_pair_entry",
    },
    TradeType.EXACT_OUT: {
        1: "swap_coins_for_exact_coins_entry",
        2: "swap_coins_for_exact_coins_2_pair_entry",
        3: "swap_coins_for_exact_coins_3_pair_entry",
    },
}


def validate_slippage(slippage: Decimal | float | str) -> Decimal:
    """Slippage must lie strictly between 0 and 1.

    Raises:
        InvalidArgumentError: If it does not
    """
    try:
        value = d(slippage)
    except InvalidOperation as err:
        raise InvalidArgumentError(f"Invalid slippage ({slippage}) value") from err
    if not value.is_finite() or value <= 0 or value >= 1:
        raise InvalidArgumentError(f"Invalid slippage ({slippage}) value")
    return value


def deadline_timestamp(deadline_minutes: int | float, now: float | None = None) -> int:
    """Unix timestamp ``deadline_minutes`` from now, in whole seconds."""
    if now is None:
        now = time.time()
    return math.floor(now) + int(deadline_minutes * 60)


def build_swap_payload(
    trade: Trade,
    trade_type: TradeType | str,
    to_address: str,
    slippage: Decimal | float | str,
    deadline_minutes: int | float,
    options: NetworkOptions,
    now: float | None = None,
) -> EntryFunctionPayload:
    """Build the swap call for a routed trade.

    Args:
        trade: Trade chosen from a routing result
        trade_type: Which side of the trade is fixed
        to_address: Recipient of the output coin
        slippage: Tolerance, strictly between 0 and 1
        deadline_minutes: Validity window of the transaction
        options: Network the payload targets
        now: Current unix time (defaults to the system clock)

    Returns:
        The unsigned entry-function payload

    Raises:
        InvalidArgumentError: If the route has an unsupported length or the
            slippage is out of range
    """
    trade_type = TradeType(trade_type)
    if not MIN_PAYLOAD_HOPS <= trade.hops <= MAX_PAYLOAD_HOPS:
        raise InvalidArgumentError(f"Invalid coin pair length ({trade.hops}) value")
    slippage = validate_slippage(slippage)

    function = compose_type(options.scripts, SWAP_ENTRY_FUNCTIONS[trade_type][trade.hops])
    if trade_type is TradeType.EXACT_IN:
        fixed_amount = trade.amount_in
        bound_amount = with_slippage(trade.amount_out, slippage, SlippageMode.MINUS)
    else:
        fixed_amount = trade.amount_out
        bound_amount = with_slippage(trade.amount_in, slippage, SlippageMode.PLUS)

    return EntryFunctionPayload(
        function=function,
        type_arguments=list(trade.coin_type_list),
        arguments=[
            options.resource_account_address,
            to_amount_str(fixed_amount),
            to_amount_str(bound_amount),
            to_address,
            str(deadline_timestamp(deadline_minutes, now)),
        ],
    )


def build_swap_exact_in_payload(
    trade: Trade,
    to_address: str,
    slippage: Decimal | float | str,
    deadline_minutes: int | float,
    options: NetworkOptions,
    now: float | None = None,
) -> EntryFunctionPayload:
    """Swap payload selling exactly ``trade.amount_in``."""
    return build_swap_payload(
        trade, TradeType.EXACT_IN, to_address, slippage, deadline_minutes, options, now
    )


def build_swap_exact_out_payload(
    trade: Trade,
    to_address: str,
    slippage: Decimal | float | str,
    deadline_minutes: int | float,
    options: NetworkOptions,
    now: float | None = None,
) -> EntryFunctionPayload:
    """Swap payload buying exactly ``trade.amount_out``."""
    return build_swap_payload(
        trade, TradeType.EXACT_OUT, to_address, slippage, deadline_minutes, options, now
    )


__all__ = [
    "SWAP_ENTRY_FUNCTIONS",
    "build_swap_exact_in_payload",
    "build_swap_exact_out_payload",
    "build_swap_payload",
    "deadline_timestamp",
    "validate_slippage",
]
