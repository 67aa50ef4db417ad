"""Pydantic models for on-chain account resources.

Shapes follow the JSON the ledger REST API returns for the swap module's
resources and for the coin framework structs.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from dex_sdk.errors import InvalidResourceError
from dex_sdk.math.decimal_utils import d
from dex_sdk.models.types import U64, U128, decode_move_string
from dex_sdk.pools.types import CoinType, LiquidityPoolResource

ModelT = TypeVar("ModelT", bound=BaseModel)


class CoinValue(BaseModel):
    """``Coin<T>`` as rendered by the API."""

    value: U128


class SwapPoolResource(BaseModel):
    """``LiquidityPool<X, Y>`` data."""

    coin_x_reserve: CoinValue
    coin_y_reserve: CoinValue
    k_last: U128 | None = None
    last_block_timestamp: U64 | None = None
    last_price_x_cumulative: U128 | None = None
    last_price_y_cumulative: U128 | None = None


class AdminData(BaseModel):
    """``AdminData`` of the swap module, holding the protocol fees."""

    swap_fee: U64
    dev_fee: U64 | None = None
    dev_fee_on: bool = False
    fee_to: str | None = None
    fee_to_setter: str | None = None


class TypeInfo(BaseModel):
    """``0x1::type_info::TypeInfo`` with hex-encoded names."""

    account_address: str
    module_name: str
    struct_name: str

    def to_type_string(self) -> str:
        """Render as ``address::module::Struct``."""
        return "::".join(
            (
                self.account_address,
                decode_move_string(self.module_name),
                decode_move_string(self.struct_name),
            )
        )


class PairMeta(BaseModel):
    """One registered pair."""

    coin_x: TypeInfo
    coin_y: TypeInfo


class PairInfo(BaseModel):
    """``PairInfo``: the list of every pair created on the exchange."""

    pair_list: list[PairMeta]


class CoinStoreResource(BaseModel):
    """``0x1::coin::CoinStore<T>`` data."""

    coin: CoinValue
    frozen: bool = False


class _IntegerValue(BaseModel):
    value: U128
    limit: U128 | None = None


class _OptionInteger(BaseModel):
    vec: list[_IntegerValue] = []


class _OptionalAggregator(BaseModel):
    integer: _OptionInteger = _OptionInteger()
    aggregator: dict[str, Any] | None = None


class _OptionSupply(BaseModel):
    vec: list[_OptionalAggregator] = []


class CoinInfoResource(BaseModel):
    """``0x1::coin::CoinInfo<T>`` data."""

    decimals: int
    name: str
    symbol: str
    supply: _OptionSupply = _OptionSupply()

    @property
    def total_supply(self) -> int:
        """Tracked supply of the coin.

        Raises:
            InvalidResourceError: If the coin does not track its supply as an integer
        """
        if not self.supply.vec or not self.supply.vec[0].integer.vec:
            raise InvalidResourceError(f"Coin {self.symbol} has no integer supply")
        return int(self.supply.vec[0].integer.vec[0].value)


def parse_resource(model: type[ModelT], data: Any) -> ModelT:
    """Validate resource data into ``model``.

    Raises:
        InvalidResourceError: If the data does not match the model
    """
    try:
        return model.model_validate(data)
    except ValidationError as err:
        raise InvalidResourceError(f"Invalid {model.__name__} resource: {err}") from err


def pool_from_resource(coin_x: CoinType, coin_y: CoinType, data: Any) -> LiquidityPoolResource:
    """Build a pool snapshot from ``LiquidityPool<coin_x, coin_y>`` data."""
    pool = parse_resource(SwapPoolResource, data)
    return LiquidityPoolResource(
        coin_x,
        coin_y,
        coin_x_reserve=d(pool.coin_x_reserve.value),
        coin_y_reserve=d(pool.coin_y_reserve.value),
    )


__all__ = [
    "AdminData",
    "CoinInfoResource",
    "CoinStoreResource",
    "CoinValue",
    "PairInfo",
    "PairMeta",
    "SwapPoolResource",
    "TypeInfo",
    "parse_resource",
    "pool_from_resource",
]
