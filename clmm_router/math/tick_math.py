"""Conversions between ticks and Q64.64 square-root prices.

A tick t corresponds to price 1.0001^t, stored as sqrt(1.0001^t) * 2^64.
The forward conversion multiplies precomputed Q128.128 factors
sqrt(1.0001)^-(2^i) for every set bit of |t|, inverts for positive ticks,
then narrows to Q64.64 rounding up. The factors are the ones used by
Uniswap V3's TickMath.sol; narrowing by 64 bits instead of 32 gives the
Q64 variant.

The inverse is exact: it returns the greatest tick whose sqrt price is
less than or equal to the input.
"""

from __future__ import annotations

import math

from clmm_router.constants import MAX_TICK, MIN_TICK, Q64, TICK_ARRAY_SIZE
from clmm_router.errors import MathOverflow

__all__ = [
    "MIN_SQRT_PRICE_X64",
    "MAX_SQRT_PRICE_X64",
    "tick_to_sqrt_price_x64",
    "sqrt_price_x64_to_tick",
    "tick_array_start_index",
    "sqrt_price_x64_to_price",
]

_MAX_U256 = 2**256 - 1

# sqrt(1.0001)^-(2^i) in Q128.128, for i = 0..19
_RATIO_FACTORS = (
    0xFFFCB933BD6FAD37AA2D162D1A594001,
    0xFFF97272373D413259A46990580E213A,
    0xFFF2E50F5F656932EF12357CF3C7FDCC,
    0xFFE5CACA7E10E4E61C3624EAA0941CD0,
    0xFFCB9843D60F6159C9DB58835C926644,
    0xFF973B41FA98C081472E6896DFB254C0,
    0xFF2EA16466C96A3843EC78B326B52861,
    0xFE5DEE046A99A2A811C461F1969C3053,
    0xFCBE86C7900A88AEDCFFC83B479AA3A4,
    0xF987A7253AC413176F2B074CF7815E54,
    0xF3392B0822B70005940C7A398E4B70F3,
    0xE7159475A2C29B7443B29C7FA6E889D9,
    0xD097F3BDFD2022B8845AD8F792AA5825,
    0xA9F746462D870FDF8A65DC1F90E061E5,
    0x70D869A156D2A1B890BB3DF62BAF32F7,
    0x31BE135F97D08FD981231505542FCFA6,
    0x9AA508B5B7A84E1C677DE54F3E99BC9,
    0x5D6AF8DEDB81196699C329225EE604,
    0x2216E584F5FA1EA926041BEDFE98,
    0x48A170391F7DC42444E8FA2,
)

_LOG_BASE = math.log(1.0001)


def tick_to_sqrt_price_x64(tick: int) -> int:
    """Calculate sqrt(1.0001^tick) * 2^64.

    Args:
        tick: Tick index in [MIN_TICK, MAX_TICK]

    Returns:
        Square-root price in Q64.64, rounded up

    Raises:
        MathOverflow: If tick is outside the supported range
    """
    if tick < MIN_TICK or tick > MAX_TICK:
        raise MathOverflow(f"Tick {tick} outside [{MIN_TICK}, {MAX_TICK}]")

    abs_tick = abs(tick)
    ratio = 1 << 128
    for bit, factor in enumerate(_RATIO_FACTORS):
        if abs_tick & (1 << bit):
            ratio = (ratio * factor) >> 128

    if tick > 0:
        ratio = _MAX_U256 // ratio

    # Q128.128 -> Q64.64, rounding up so the price never under-reports
    return (ratio >> 64) + (1 if ratio & (Q64 - 1) else 0)


MIN_SQRT_PRICE_X64 = tick_to_sqrt_price_x64(MIN_TICK)
MAX_SQRT_PRICE_X64 = tick_to_sqrt_price_x64(MAX_TICK)


def sqrt_price_x64_to_tick(sqrt_price_x64: int) -> int:
    """Return the greatest tick whose sqrt price is <= sqrt_price_x64.

    A floating-point logarithm gives a starting estimate; the result is then
    corrected against tick_to_sqrt_price_x64 so the answer is exact and
    monotonic in the input.

    Raises:
        MathOverflow: If the price is outside [MIN_SQRT_PRICE_X64, MAX_SQRT_PRICE_X64]
    """
    if sqrt_price_x64 < MIN_SQRT_PRICE_X64 or sqrt_price_x64 > MAX_SQRT_PRICE_X64:
        raise MathOverflow(f"Sqrt price {sqrt_price_x64} outside supported range")

    ratio = sqrt_price_x64 / Q64
    estimate = math.floor(2 * math.log(ratio) / _LOG_BASE)
    tick = max(MIN_TICK, min(MAX_TICK, estimate))

    while tick > MIN_TICK and tick_to_sqrt_price_x64(tick) > sqrt_price_x64:
        tick -= 1
    while tick < MAX_TICK and tick_to_sqrt_price_x64(tick + 1) <= sqrt_price_x64:
        tick += 1
    return tick


def tick_array_start_index(tick: int, tick_spacing: int, array_size: int = TICK_ARRAY_SIZE) -> int:
    """Start index of the tick array that contains `tick`.

    Arrays are aligned to tick_spacing * array_size; negative ticks round
    toward negative infinity.
    """
    if tick_spacing <= 0:
        raise ValueError(f"Tick spacing must be positive, got {tick_spacing}")
    span = tick_spacing * array_size
    return (tick // span) * span


def sqrt_price_x64_to_price(sqrt_price_x64: int, decimals_a: int, decimals_b: int) -> float:
    """Human-readable price of A in units of B, adjusted for mint decimals."""
    raw = (sqrt_price_x64 / Q64) ** 2
    return raw * 10 ** (decimals_a - decimals_b)
