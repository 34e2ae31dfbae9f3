"""Test helpers module for shared test utilities.

- constants: Mint addresses and default pool parameters
- factories: Pool, tick-array, quote and payload factory functions
"""

from tests.helpers.constants import (
    DEFAULT_FEE_BPS,
    DEFAULT_LIQUIDITY,
    DEFAULT_TICK_SPACING,
    MINT_DECIMALS,
    RAY,
    SOL,
    SQRT_PRICE_ONE,
    USDC,
    WIDE_TICK_LOWER,
    WIDE_TICK_UPPER,
)
from tests.helpers.factories import (
    StubQuoter,
    candidate_to_payload,
    make_candidate,
    make_mint,
    make_pool,
    make_quote,
    make_selection,
    make_tick_arrays,
)

__all__ = [
    # Constants
    "SOL",
    "USDC",
    "RAY",
    "MINT_DECIMALS",
    "SQRT_PRICE_ONE",
    "DEFAULT_TICK_SPACING",
    "DEFAULT_LIQUIDITY",
    "DEFAULT_FEE_BPS",
    "WIDE_TICK_LOWER",
    "WIDE_TICK_UPPER",
    # Factories
    "make_mint",
    "make_pool",
    "make_tick_arrays",
    "make_candidate",
    "make_quote",
    "make_selection",
    "candidate_to_payload",
    "StubQuoter",
]
