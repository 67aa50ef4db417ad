"""Single-pool operations of the exchange.

Pair discovery, pool and fee lookup, single-pair quotes, liquidity
provision rates and the payloads for adding liquidity, removing liquidity
and swapping through one pool.
"""

from __future__ import annotations

import asyncio
import decimal
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

import structlog

from dex_sdk.amm.constant_product import (
    SlippageMode,
    constant_product,
    price_impact,
    quote,
    with_slippage,
)
from dex_sdk.config import NetworkOptions
from dex_sdk.errors import InvalidArgumentError, ResourceNotFoundError
from dex_sdk.math.decimal_utils import DECIMAL_HIGH_PREC_CONTEXT, d, to_amount_str
from dex_sdk.models.payload import EntryFunctionPayload
from dex_sdk.models.resources import (
    AdminData,
    CoinInfoResource,
    CoinStoreResource,
    PairInfo,
    parse_resource,
    pool_from_resource,
)
from dex_sdk.pools.types import CoinPair, CoinType, LiquidityPoolResource
from dex_sdk.resources.client import ResourceFetcher
from dex_sdk.resources.compose import (
    LIQUIDITY_POOL,
    compose_coin_store,
    compose_lp,
    compose_lp_coin,
    compose_lp_coin_type,
    compose_pair_info,
    compose_swap_pool_data,
    compose_type,
    extract_address_from_type,
    is_sorted_symbols,
    split_type_args,
)
from dex_sdk.routing.payload import deadline_timestamp, validate_slippage

logger = structlog.get_logger()


class FixedCoin(str, Enum):
    """Side of a single-pair swap whose amount is fixed."""

    FROM = "from"
    TO = "to"


class FixedLiquidityCoin(str, Enum):
    """Side of a deposit whose amount is fixed."""

    X = "X"
    Y = "Y"


@dataclass(frozen=True)
class SwapRates:
    """Single-pair swap quote.

    Attributes:
        amount: Computed amount on the side that is not fixed
        amount_with_slippage: ``amount`` bounded by the slippage tolerance
        price_impact: Relative deviation from the no-impact outcome
        coin_from_div_coin_to: Realized from/to exchange rate
        coin_to_div_coin_from: Realized to/from exchange rate
    """

    amount: Decimal
    amount_with_slippage: Decimal
    price_impact: Decimal
    coin_from_div_coin_to: Decimal
    coin_to_div_coin_from: Decimal


@dataclass(frozen=True)
class AddLiquidityRates:
    amount: Decimal
    coin_x_div_coin_y: Decimal
    coin_y_div_coin_x: Decimal
    share_of_pool: Decimal


@dataclass(frozen=True)
class RemoveLiquidityRates:
    amount_x: Decimal
    amount_y: Decimal


@dataclass(frozen=True)
class LPCoinAmount:
    """LP coin balance of an account for one pair."""

    coin_x: CoinType
    coin_y: CoinType
    lp_coin: str
    value: Decimal


class SwapModule:
    """Reads pools of one exchange deployment and builds single-pool payloads.

    Args:
        fetcher: Source of on-chain resources
        options: Addresses and module paths of the deployment
    """

    def __init__(self, fetcher: ResourceFetcher, options: NetworkOptions) -> None:
        self.fetcher = fetcher
        self.options = options

    async def get_pool(self, pair: CoinPair) -> LiquidityPoolResource | None:
        """Fetch the reserves of the pool behind ``pair``.

        ``pair`` must be in storage order, as returned by ``get_all_pairs``.

        Returns:
            Pool snapshot, or None if the pool does not exist
        """
        resource_type = compose_lp(self.options.scripts, pair.coin_x, pair.coin_y)
        resource = await self.fetcher.fetch_account_resource(
            self.options.resource_account_address, resource_type
        )
        if resource is None:
            return None
        return pool_from_resource(pair.coin_x, pair.coin_y, resource["data"])

    async def _require_pool(self, coin_a: CoinType, coin_b: CoinType) -> LiquidityPoolResource:
        if not is_sorted_symbols(coin_a, coin_b):
            coin_a, coin_b = coin_b, coin_a
        pair = CoinPair(coin_a, coin_b)
        pool = await self.get_pool(pair)
        if pool is None:
            raise ResourceNotFoundError(
                compose_lp(self.options.scripts, pair.coin_x, pair.coin_y),
                self.options.resource_account_address,
            )
        return pool

    async def check_pair_exist(self, coin_x: CoinType, coin_y: CoinType) -> bool:
        """Whether a pool exists for the two coins, in either order."""
        if not is_sorted_symbols(coin_x, coin_y):
            coin_x, coin_y = coin_y, coin_x
        resource = await self.fetcher.fetch_account_resource(
            self.options.resource_account_address,
            compose_lp(self.options.scripts, coin_x, coin_y),
        )
        return resource is not None

    async def get_swap_fee(self) -> Decimal:
        """Current swap fee in units out of 10,000.

        Raises:
            ResourceNotFoundError: If the module's AdminData is missing
        """
        resource_type = compose_swap_pool_data(self.options.scripts)
        resource = await self.fetcher.fetch_account_resource(
            self.options.deployer_address, resource_type
        )
        if resource is None:
            raise ResourceNotFoundError(resource_type, self.options.deployer_address)
        return d(parse_resource(AdminData, resource["data"]).swap_fee)

    async def get_all_pairs(self) -> list[CoinPair]:
        """Every pair registered on the exchange, in storage order.

        Raises:
            ResourceNotFoundError: If the PairInfo resource is missing
        """
        resource_type = compose_pair_info(self.options.scripts)
        resource = await self.fetcher.fetch_account_resource(
            self.options.resource_account_address, resource_type
        )
        if resource is None:
            raise ResourceNotFoundError(resource_type, self.options.resource_account_address)

        pair_info = parse_resource(PairInfo, resource["data"])
        pairs = [
            CoinPair(meta.coin_x.to_type_string(), meta.coin_y.to_type_string())
            for meta in pair_info.pair_list
        ]
        logger.debug("pairs_fetched", count=len(pairs))
        return pairs

    async def get_all_lp_coin_resources_with_admin(self) -> list[LiquidityPoolResource]:
        """Every pool of the exchange with its reserves.

        Raises:
            ResourceNotFoundError: If the resource account does not exist
        """
        address = self.options.resource_account_address
        resources = await self.fetcher.fetch_account_resources(address)
        if resources is None:
            raise ResourceNotFoundError("account resources", address)

        pool_type = compose_type(self.options.scripts, LIQUIDITY_POOL)
        pools: list[LiquidityPoolResource] = []
        for resource in resources:
            base, type_args = split_type_args(resource["type"])
            if base != pool_type or len(type_args) != 2:
                continue
            pools.append(pool_from_resource(type_args[0], type_args[1], resource["data"]))

        logger.debug("pools_fetched", count=len(pools))
        return pools

    async def calculate_swap_rates(
        self,
        coin_from: CoinType,
        coin_to: CoinType,
        amount: Decimal | int | str,
        fixed_coin: FixedCoin | str,
        slippage: Decimal | float | str,
    ) -> SwapRates:
        """Quote a swap through the direct pool of two coins.

        Args:
            coin_from: Coin being sold
            coin_to: Coin being bought
            amount: Amount of the fixed side
            fixed_coin: ``"from"`` for an exact input, ``"to"`` for an exact output
            slippage: Tolerance applied to the computed amount

        Returns:
            The quote

        Raises:
            ResourceNotFoundError: If the pool or the fee data is missing
            InvalidArgumentError: If the pool cannot serve the amount
        """
        fixed_coin = FixedCoin(fixed_coin)
        slippage = validate_slippage(slippage)
        amount = d(amount)
        pool, fee = await asyncio.gather(
            self._require_pool(coin_from, coin_to), self.get_swap_fee()
        )
        if not pool.is_tradable:
            raise InvalidArgumentError(f"Pool {coin_from}/{coin_to} has no liquidity")

        if fixed_coin is FixedCoin.FROM:
            computed = constant_product.swap_exact_in(pool, coin_from, amount, fee)
            mode = SlippageMode.MINUS
        else:
            computed = constant_product.swap_exact_out(pool, coin_to, amount, fee)
            mode = SlippageMode.PLUS
        if computed is None or computed == 0:
            raise InvalidArgumentError(f"Insufficient liquidity for amount ({amount})")

        if fixed_coin is FixedCoin.FROM:
            amount_from, amount_to = amount, computed
        else:
            amount_from, amount_to = computed, amount
        with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
            return SwapRates(
                amount=computed,
                amount_with_slippage=with_slippage(computed, slippage, mode),
                price_impact=price_impact(coin_from, [pool], [amount_from, amount_to], fee),
                coin_from_div_coin_to=amount_from / amount_to,
                coin_to_div_coin_from=amount_to / amount_from,
            )

    async def calculate_add_liquidity_rates(
        self,
        coin_x: CoinType,
        coin_y: CoinType,
        amount: Decimal | int | str,
        fixed_coin: FixedLiquidityCoin | str,
    ) -> AddLiquidityRates:
        """Amount of the other coin matching a deposit at the pool ratio.

        ``share_of_pool`` is measured against the reserve of the fixed coin.

        Raises:
            ResourceNotFoundError: If the pool is missing
            InvalidArgumentError: If the pool holds no liquidity yet
        """
        fixed_coin = FixedLiquidityCoin(fixed_coin)
        amount = d(amount)
        pool = await self._require_pool(coin_x, coin_y)
        if not pool.is_tradable:
            raise InvalidArgumentError(f"Pool {coin_x}/{coin_y} has no liquidity")
        reserve_x, reserve_y = pool.get_reserves(coin_x)

        if fixed_coin is FixedLiquidityCoin.X:
            matched = quote(amount, reserve_x, reserve_y)
            fixed_reserve = reserve_x
        else:
            matched = quote(amount, reserve_y, reserve_x)
            fixed_reserve = reserve_y

        with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
            return AddLiquidityRates(
                amount=matched,
                coin_x_div_coin_y=reserve_x / reserve_y,
                coin_y_div_coin_x=reserve_y / reserve_x,
                share_of_pool=amount / (fixed_reserve + amount),
            )

    async def calculate_remove_liquidity_rates(
        self,
        coin_x: CoinType,
        coin_y: CoinType,
        amount: Decimal | int | str,
    ) -> RemoveLiquidityRates:
        """Coins returned for burning ``amount`` LP coins.

        Raises:
            ResourceNotFoundError: If the pool or its LP coin info is missing
            InvalidArgumentError: If ``amount`` exceeds the LP coin supply
        """
        amount = d(amount)
        if is_sorted_symbols(coin_x, coin_y):
            lp_coin = compose_lp_coin(self.options.deployer_address, coin_x, coin_y)
        else:
            lp_coin = compose_lp_coin(self.options.deployer_address, coin_y, coin_x)

        pool, lp_coin_info = await asyncio.gather(
            self._require_pool(coin_x, coin_y), self.get_coin_info(lp_coin)
        )
        if lp_coin_info is None:
            raise ResourceNotFoundError(
                compose_type(self.options.coin_info, type_args=[lp_coin]),
                extract_address_from_type(lp_coin),
            )
        lp_supply = d(lp_coin_info.total_supply)
        if amount > lp_supply or lp_supply == 0:
            raise InvalidArgumentError(
                f"Invalid amount ({amount}) value, larger than total LP coin supply"
            )

        reserve_x, reserve_y = pool.get_reserves(coin_x)
        return RemoveLiquidityRates(
            amount_x=quote(amount, lp_supply, reserve_x),
            amount_y=quote(amount, lp_supply, reserve_y),
        )

    def create_add_liquidity_payload(
        self,
        coin_x: CoinType,
        coin_y: CoinType,
        amount_x: Decimal | int | str,
        amount_y: Decimal | int | str,
        slippage: Decimal | float | str,
        deadline_minutes: int | float,
        now: float | None = None,
    ) -> EntryFunctionPayload:
        """Deposit up to ``amount_x`` / ``amount_y``, accepting ``slippage`` less of each."""
        slippage = validate_slippage(slippage)
        return EntryFunctionPayload(
            function=compose_type(self.options.scripts, "add_liquidity_entry"),
            type_arguments=[coin_x, coin_y],
            arguments=[
                self.options.resource_account_address,
                to_amount_str(d(amount_x)),
                to_amount_str(d(amount_y)),
                to_amount_str(with_slippage(amount_x, slippage, SlippageMode.MINUS)),
                to_amount_str(with_slippage(amount_y, slippage, SlippageMode.MINUS)),
                str(deadline_timestamp(deadline_minutes, now)),
            ],
        )

    def create_remove_liquidity_payload(
        self,
        coin_x: CoinType,
        coin_y: CoinType,
        amount: Decimal | int | str,
        amount_x_desired: Decimal | int | str,
        amount_y_desired: Decimal | int | str,
        slippage: Decimal | float | str,
        deadline_minutes: int | float,
        now: float | None = None,
    ) -> EntryFunctionPayload:
        """Burn ``amount`` LP coins, accepting ``slippage`` less than the desired amounts."""
        slippage = validate_slippage(slippage)
        return EntryFunctionPayload(
            function=compose_type(self.options.scripts, "remove_liquidity_entry"),
            type_arguments=[coin_x, coin_y],
            arguments=[
                self.options.resource_account_address,
                to_amount_str(d(amount)),
                to_amount_str(with_slippage(amount_x_desired, slippage, SlippageMode.MINUS)),
                to_amount_str(with_slippage(amount_y_desired, slippage, SlippageMode.MINUS)),
                str(deadline_timestamp(deadline_minutes, now)),
            ],
        )

    def create_swap_payload(
        self,
        coin_from: CoinType,
        coin_to: CoinType,
        from_amount: Decimal | int | str,
        to_amount: Decimal | int | str,
        fixed_coin: FixedCoin | str,
        to_address: str,
        slippage: Decimal | float | str,
        deadline_minutes: int | float,
        now: float | None = None,
    ) -> EntryFunctionPayload:
        """Swap through the direct pool of two coins.

        With ``fixed_coin="from"`` the payload sells exactly ``from_amount``
        and requires at least ``to_amount`` less slippage. With ``"to"`` it
        buys exactly ``to_amount`` and spends at most ``from_amount`` plus
        slippage.
        """
        fixed_coin = FixedCoin(fixed_coin)
        slippage = validate_slippage(slippage)
        if fixed_coin is FixedCoin.FROM:
            function = "swap_exact_coins_for_coins_entry"
            fixed_amount = d(from_amount)
            bound_amount = with_slippage(to_amount, slippage, SlippageMode.MINUS)
        else:
            function = "swap_coins_for_exact_coins_entry"
            fixed_amount = d(to_amount)
            bound_amount = with_slippage(from_amount, slippage, SlippageMode.PLUS)

        return EntryFunctionPayload(
            function=compose_type(self.options.scripts, function),
            type_arguments=[coin_from, coin_to],
            arguments=[
                self.options.resource_account_address,
                to_amount_str(fixed_amount),
                to_amount_str(bound_amount),
                to_address,
                str(deadline_timestamp(deadline_minutes, now)),
            ],
        )

    async def get_coin_info(self, coin_type: CoinType) -> CoinInfoResource | None:
        """CoinInfo of a coin, read from the account that published it."""
        resource = await self.fetcher.fetch_account_resource(
            extract_address_from_type(coin_type),
            compose_type(self.options.coin_info, type_args=[coin_type]),
        )
        if resource is None:
            return None
        return parse_resource(CoinInfoResource, resource["data"])

    async def get_lp_coin_amount(
        self, address: str, coin_x: CoinType, coin_y: CoinType
    ) -> LPCoinAmount:
        """LP coin balance of ``address`` for a pair given in storage order.

        Raises:
            ResourceNotFoundError: If the account holds no such LP coin
        """
        lp_coin = compose_lp_coin(self.options.deployer_address, coin_x, coin_y)
        store_type = compose_coin_store(self.options.coin_store, lp_coin)
        resource = await self.fetcher.fetch_account_resource(address, store_type)
        if resource is None:
            raise ResourceNotFoundError(store_type, address)
        store = parse_resource(CoinStoreResource, resource["data"])
        return LPCoinAmount(
            coin_x=coin_x, coin_y=coin_y, lp_coin=lp_coin, value=d(store.coin.value)
        )

    async def get_all_lp_coin_resources_by_address(self, address: str) -> list[LPCoinAmount]:
        """Every LP coin balance held by ``address``.

        Raises:
            ResourceNotFoundError: If the account does not exist
        """
        resources = await self.fetcher.fetch_account_resources(address)
        if resources is None:
            raise ResourceNotFoundError("account resources", address)

        lp_coin_type = compose_lp_coin_type(self.options.deployer_address)
        amounts: list[LPCoinAmount] = []
        for resource in resources:
            base, type_args = split_type_args(resource["type"])
            if base != self.options.coin_store or len(type_args) != 1:
                continue
            lp_coin = type_args[0]
            lp_base, lp_args = split_type_args(lp_coin)
            if lp_base != lp_coin_type or len(lp_args) != 2:
                continue
            store = parse_resource(CoinStoreResource, resource["data"])
            amounts.append(
                LPCoinAmount(
                    coin_x=lp_args[0],
                    coin_y=lp_args[1],
                    lp_coin=lp_coin,
                    value=d(store.coin.value),
                )
            )
        return amounts


__all__ = [
    "AddLiquidityRates",
    "FixedCoin",
    "FixedLiquidityCoin",
    "LPCoinAmount",
    "RemoveLiquidityRates",
    "SwapModule",
    "SwapRates",
]
