"""Protocol constants for the AMM SDK.

Centralizes fee scale, on-chain integer bounds and well-known coin types.
"""

from decimal import Decimal

# Fees are expressed in units out of FEE_SCALE (30 = 0.3%)
FEE_SCALE = 10_000

# Default swap fee when the AdminData resource is not consulted
DEFAULT_SWAP_FEE = 30

# Largest amount accepted by Move's u64
U64_MAX = Decimal(2**64 - 1)

# Route v1 (interleaved search) defaults
DEFAULT_MAX_HOPS_V1 = 3
DEFAULT_MAX_RESULTS_V1 = 3

# Route v2 (enumerate-then-sample) defaults
DEFAULT_MAX_HOPS_V2 = 2
DEFAULT_ROUTE = 5

# Swap payloads exist for 1, 2 and 3 pair routes only
MIN_PAYLOAD_HOPS = 1
MAX_PAYLOAD_HOPS = 3

# Guard against exponential DFS on dense graphs
DEFAULT_MAX_SEARCH_VISITS = 100_000

APTOS_COIN = "0x1::aptos_coin::AptosCoin"
COIN_INFO = "0x1::coin::CoinInfo"
COIN_STORE = "0x1::coin::CoinStore"

ENTRY_FUNCTION_PAYLOAD = "entry_function_payload"
