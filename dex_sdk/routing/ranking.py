"""Ordering of trade candidates and the bounded best-trade list."""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from dex_sdk.routing.types import Trade

T = TypeVar("T")


def trade_comparator(a: Trade, b: Trade) -> int:
    """Total order over trades; negative means ``a`` is better.

    Smaller input wins. On equal inputs the larger output wins, and on equal
    outputs the trade with fewer hops wins.
    """
    if a.amount_in != b.amount_in:
        return -1 if a.amount_in < b.amount_in else 1
    if a.amount_out != b.amount_out:
        return -1 if a.amount_out > b.amount_out else 1
    return a.hops - b.hops


def sorted_insert(
    items: list[T],
    item: T,
    max_size: int,
    comparator: Callable[[T, T], int],
) -> None:
    """Insert ``item`` before the first entry it does not lose to, then truncate.

    Args:
        items: List already sorted under ``comparator``, updated in place
        item: Candidate to insert
        max_size: Length ``items`` is cut back to after insertion
        comparator: Three-way comparison, negative when the left side ranks first
    """
    index = 0
    while index < len(items) and comparator(items[index], item) < 0:
        index += 1
    items.insert(index, item)
    if len(items) > max_size:
        items.pop()


def insert_trade(best_trades: list[Trade], trade: Trade, max_size: int) -> None:
    """Insert ``trade`` into a best-trade list bounded to ``max_size``."""
    sorted_insert(best_trades, trade, max_size, trade_comparator)


__all__ = ["insert_trade", "sorted_insert", "trade_comparator"]
