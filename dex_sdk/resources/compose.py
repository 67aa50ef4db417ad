"""Composition of on-chain type strings.

Type strings look like ``<address>::<module>::<Struct><<T1>, <T2>>``. Pools
are stored under their coin types in sorted order, so helpers that take an
arbitrary ``(coin_x, coin_y)`` pair check ``is_sorted_symbols`` first.
"""

from __future__ import annotations

from collections.abc import Sequence

LP_COIN_MODULE = "LPCoinV1"
LP_COIN_TYPE = "LPCoin"
LIQUIDITY_POOL = "LiquidityPool"
ADMIN_DATA = "AdminData"
PAIR_INFO = "PairInfo"


def compose_type(*parts: str, type_args: Sequence[str] = ()) -> str:
    """Join path segments with ``::`` and append type arguments if any."""
    base = "::".join(parts)
    if type_args:
        return f"{base}<{', '.join(type_args)}>"
    return base


def compose_lp_coin(deployer: str, coin_x: str, coin_y: str) -> str:
    return compose_type(deployer, LP_COIN_MODULE, LP_COIN_TYPE, type_args=[coin_x, coin_y])


def compose_lp(scripts: str, coin_x: str, coin_y: str) -> str:
    return compose_type(scripts, LIQUIDITY_POOL, type_args=[coin_x, coin_y])


def compose_lp_coin_type(deployer: str) -> str:
    return compose_type(deployer, LP_COIN_MODULE, LP_COIN_TYPE)


def compose_swap_pool_data(scripts: str) -> str:
    return compose_type(scripts, ADMIN_DATA)


def compose_pair_info(scripts: str) -> str:
    return compose_type(scripts, PAIR_INFO)


def compose_coin_store(coin_store: str, coin_type: str) -> str:
    return compose_type(coin_store, type_args=[coin_type])


def is_sorted_symbols(coin_x: str, coin_y: str) -> bool:
    """Whether ``(coin_x, coin_y)`` is already in pool storage order."""
    return coin_x < coin_y


def extract_address_from_type(type_string: str) -> str:
    """The account address a type is published under."""
    return type_string.split("::", 1)[0]


def split_type_args(type_string: str) -> tuple[str, list[str]]:
    """Split a type string into its base and top-level type arguments.

    ``"0x1::coin::CoinStore<0x2::a::B<0x3::c::D>>"`` gives
    ``("0x1::coin::CoinStore", ["0x2::a::B<0x3::c::D>"])``.

    Raises:
        ValueError: If angle brackets are unbalanced
    """
    start = type_string.find("<")
    if start == -1:
        return type_string, []
    if not type_string.endswith(">"):
        raise ValueError(f"Malformed type string: {type_string}")

    base = type_string[:start]
    inner = type_string[start + 1 : -1]
    args: list[str] = []
    depth = 0
    current: list[str] = []
    for char in inner:
        if char == "<":
            depth += 1
        elif char == ">":
            depth -= 1
            if depth < 0:
                raise ValueError(f"Malformed type string: {type_string}")
        if char == "," and depth == 0:
            args.append("".join(current).strip())
            current = []
        else:
            current.append(char)
    if depth != 0:
        raise ValueError(f"Malformed type string: {type_string}")
    args.append("".join(current).strip())
    return base, args


__all__ = [
    "compose_coin_store",
    "compose_lp",
    "compose_lp_coin",
    "compose_lp_coin_type",
    "compose_pair_info",
    "compose_swap_pool_data",
    "compose_type",
    "extract_address_from_type",
    "is_sorted_symbols",
    "split_type_args",
]
