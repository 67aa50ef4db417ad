"""Pool edge and pool snapshot types.

A CoinPair is an edge of the pool graph. Its identity is the unordered set of
its two coin types: ``CoinPair(a, b) == CoinPair(b, a)``. The ``coin_x`` /
``coin_y`` fields still keep the order they were constructed with, which is
the order the chain stores the pool under and the order resource types must
be composed in.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import TypeAlias

from dex_sdk.math.decimal_utils import d

CoinType: TypeAlias = str


@dataclass(frozen=True, eq=False)
class CoinPair:
    """An unordered tradable pair of two distinct coin types."""

    coin_x: CoinType
    coin_y: CoinType

    def __post_init__(self) -> None:
        if self.coin_x == self.coin_y:
            raise ValueError(f"CoinPair needs two distinct coins, got {self.coin_x} twice")

    @property
    def key(self) -> frozenset[CoinType]:
        """Order-insensitive identity of the edge."""
        return frozenset((self.coin_x, self.coin_y))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CoinPair):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def has_coin(self, coin_type: CoinType) -> bool:
        return coin_type == self.coin_x or coin_type == self.coin_y

    def other_coin(self, coin_type: CoinType) -> CoinType:
        """Get the coin on the opposite side of ``coin_type``."""
        if coin_type == self.coin_x:
            return self.coin_y
        if coin_type == self.coin_y:
            return self.coin_x
        raise ValueError(f"Coin {coin_type} not in pair")

    def as_pair(self) -> CoinPair:
        """Strip any reserve data, keeping only the edge."""
        return CoinPair(self.coin_x, self.coin_y)


@dataclass(frozen=True, eq=False)
class LiquidityPoolResource(CoinPair):
    """Snapshot of a pool: an edge plus its two reserves.

    Reserves are integer base-unit amounts held as Decimals. A snapshot is
    treated as immutable for the duration of one routing computation.
    Equality and hash are inherited from the edge, so two snapshots of the
    same pool compare equal whatever their reserves.
    """

    coin_x_reserve: Decimal = field(default_factory=Decimal)
    coin_y_reserve: Decimal = field(default_factory=Decimal)

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(self, "coin_x_reserve", d(self.coin_x_reserve))
        object.__setattr__(self, "coin_y_reserve", d(self.coin_y_reserve))
        if self.coin_x_reserve < 0 or self.coin_y_reserve < 0:
            raise ValueError(f"Negative reserve in pool {self.coin_x}/{self.coin_y}")

    @property
    def is_tradable(self) -> bool:
        """A pool with either reserve at zero cannot be routed through."""
        return self.coin_x_reserve > 0 and self.coin_y_reserve > 0

    def get_reserves(self, coin_in: CoinType) -> tuple[Decimal, Decimal]:
        """Get reserves ordered as (reserve_in, reserve_out)."""
        if coin_in == self.coin_x:
            return self.coin_x_reserve, self.coin_y_reserve
        if coin_in == self.coin_y:
            return self.coin_y_reserve, self.coin_x_reserve
        raise ValueError(f"Coin {coin_in} not in pool")

    def reserve_of(self, coin_type: CoinType) -> Decimal:
        return self.get_reserves(coin_type)[0]


__all__ = ["CoinPair", "CoinType", "LiquidityPoolResource"]
