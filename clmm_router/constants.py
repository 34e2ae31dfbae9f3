"""Protocol constants for concentrated-liquidity routing.

Centralizes fixed-point widths, tick bounds and basis-point denominators.
"""

# Fixed-point widths
Q64 = 1 << 64
U64_MAX = 2**64 - 1
U128_MAX = 2**128 - 1

# Tick bounds (sqrt prices at these ticks still fit in u128 as Q64.64)
MIN_TICK = -443636
MAX_TICK = 443636

# Number of ticks stored per tick array account
TICK_ARRAY_SIZE = 60

# Basis-point denominators
BPS_DENOMINATOR = 10_000
FEE_RATE_DENOMINATOR = 10_000

# Slippage bounds (in bps). An account without a stored policy gets the default.
MAX_SLIPPAGE_BPS = 500
DEFAULT_SLIPPAGE_BPS = 500
