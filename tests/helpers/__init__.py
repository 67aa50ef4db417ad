"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Coin types, accounts and a fixed clock
- factories: Pool, trade and resource JSON factory functions
"""

from tests.helpers.constants import (
    APT,
    COIN_A,
    COIN_B,
    COIN_C,
    COIN_D,
    COIN_E,
    NOW,
    USDC,
    USDT,
    USER,
    WETH,
)
from tests.helpers.factories import (
    admin_data_resource,
    coin_info_resource,
    coin_store_resource,
    make_pool,
    make_trade,
    pair_info_resource,
    pool_resource,
    pool_snapshots,
    seed_exchange,
)

__all__ = [
    # Constants
    "APT",
    "USDC",
    "USDT",
    "WETH",
    "COIN_A",
    "COIN_B",
    "COIN_C",
    "COIN_D",
    "COIN_E",
    "USER",
    "NOW",
    # Factories
    "make_pool",
    "make_trade",
    "pool_resource",
    "pool_snapshots",
    "pair_info_resource",
    "admin_data_resource",
    "coin_info_resource",
    "coin_store_resource",
    "seed_exchange",
]
