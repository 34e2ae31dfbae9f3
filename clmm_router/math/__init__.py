"""Fixed-point math kernel for concentrated-liquidity pools.

Pure functions over Q64.64 sqrt prices and u128 liquidity. No shared state;
safe to call from any number of threads.
"""

from clmm_router.math.liquidity_math import add_liquidity_delta
from clmm_router.math.sqrt_price_math import (
    get_amount_a_delta,
    get_amount_b_delta,
    get_next_sqrt_price_from_input,
    get_next_sqrt_price_from_output,
)
from clmm_router.math.swap_math import SwapStep, compute_swap_step
from clmm_router.math.tick_math import (
    MAX_SQRT_PRICE_X64,
    MIN_SQRT_PRICE_X64,
    sqrt_price_x64_to_price,
    sqrt_price_x64_to_tick,
    tick_array_start_index,
    tick_to_sqrt_price_x64,
)

__all__ = [
    # Tick math
    "MIN_SQRT_PRICE_X64",
    "MAX_SQRT_PRICE_X64",
    "tick_to_sqrt_price_x64",
    "sqrt_price_x64_to_tick",
    "sqrt_price_x64_to_price",
    "tick_array_start_index",
    # Price movement
    "get_amount_a_delta",
    "get_amount_b_delta",
    "get_next_sqrt_price_from_input",
    "get_next_sqrt_price_from_output",
    # Swap step
    "SwapStep",
    "compute_swap_step",
    # Liquidity
    "add_liquidity_delta",
]
