"""Tick-stepping swap simulation for concentrated-liquidity pools.

The simulator walks the price from the pool's current sqrt price toward the
price limit, one initialized tick at a time. Inside each range the active
liquidity is constant and compute_swap_step does the arithmetic; crossing an
initialized tick applies its liquidity_net. Nothing here mutates the pool
snapshot or performs I/O, so distinct pools can be simulated concurrently.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from clmm_router.constants import BPS_DENOMINATOR, MAX_TICK, MIN_TICK, TICK_ARRAY_SIZE
from clmm_router.errors import InsufficientTickData, InvalidPriceLimit, InvalidSwapAmount, ZeroLiquidity
from clmm_router.math import (
    MAX_SQRT_PRICE_X64,
    MIN_SQRT_PRICE_X64,
    add_liquidity_delta,
    compute_swap_step,
    sqrt_price_x64_to_tick,
    tick_to_sqrt_price_x64,
)
from clmm_router.safe_int import S

from .pool import PoolCandidate, PoolSnapshot, TickArray
from .quote import Quote, StopReason, SwapDirection
from .tick_array import TickArraySequence

logger = structlog.get_logger()


def resolve_price_limit(sqrt_price_x64: int, sqrt_price_limit_x64: int, a_to_b: bool) -> int:
    """Turn a caller price limit into the bound the loop runs against.

    Zero means unbounded, which maps to one unit inside the supported range.

    Raises:
        InvalidPriceLimit: If a non-zero limit is not strictly on the
            direction-of-travel side of the current price, or is out of range
    """
    if sqrt_price_limit_x64 == 0:
        return MIN_SQRT_PRICE_X64 + 1 if a_to_b else MAX_SQRT_PRICE_X64 - 1

    if a_to_b:
        if not MIN_SQRT_PRICE_X64 < sqrt_price_limit_x64 < sqrt_price_x64:
            raise InvalidPriceLimit(
                f"Limit {sqrt_price_limit_x64} must be below current price {sqrt_price_x64}"
            )
    elif not sqrt_price_x64 < sqrt_price_limit_x64 < MAX_SQRT_PRICE_X64:
        raise InvalidPriceLimit(
            f"Limit {sqrt_price_limit_x64} must be above current price {sqrt_price_x64}"
        )
    return sqrt_price_limit_x64


def price_impact_bps(sqrt_price_before: int, sqrt_price_after: int) -> int:
    """Relative sqrt price deviation in basis points, rounded up."""
    return S(abs(sqrt_price_after - sqrt_price_before)).mul_div_ceil(
        BPS_DENOMINATOR, sqrt_price_before
    ).value


def _touched_array_starts(
    sequence: TickArraySequence, final_tick: int, a_to_b: bool
) -> tuple[int, ...]:
    """Covered array starts from the current array to the one holding final_tick."""
    low, high = sequence.coverage
    final_start = min(max(sequence.start_index_of(final_tick), low), high)
    step = -sequence.span if a_to_b else sequence.span
    if (final_start - sequence.current_start) * step < 0:
        return (sequence.current_start,)
    return tuple(range(sequence.current_start, final_start + step, step))


def simulate_swap(
    pool: PoolSnapshot,
    tick_arrays: Sequence[TickArray],
    direction: SwapDirection,
    amount_specified: int,
    sqrt_price_limit_x64: int = 0,
    array_size: int = TICK_ARRAY_SIZE,
) -> Quote:
    """Simulate a swap against a pool snapshot.

    Args:
        pool: Pool state to simulate against (not modified)
        tick_arrays: Tick arrays supplied for the pool; must include the one
            holding the current tick
        direction: Swap mode and direction of travel
        amount_specified: Input amount (exact in) or desired output (exact out)
        sqrt_price_limit_x64: Price the swap may not pass, 0 for unbounded
        array_size: Ticks per tick array

    Returns:
        Quote with accumulated amounts. complete is False when the supplied
        tick data, the price limit or the tick range ran out first.

    Raises:
        InvalidSwapAmount: If amount_specified is not positive
        InvalidPriceLimit: If the price limit is on the wrong side
        InsufficientTickData: If the current tick array is not supplied
        ZeroLiquidity: If active liquidity is zero with an amount outstanding
        MathOverflow: If any fixed-point result overflows its width
    """
    if amount_specified <= 0:
        raise InvalidSwapAmount(f"Swap amount must be positive, got {amount_specified}")
    S(amount_specified).to_u64()

    a_to_b = direction.a_to_b
    exact_in = direction.is_exact_in
    limit = resolve_price_limit(pool.sqrt_price_x64, sqrt_price_limit_x64, a_to_b)
    sequence = TickArraySequence(tick_arrays, pool.tick_spacing, pool.current_tick, array_size)

    remaining = amount_specified
    total_in = 0
    total_out = 0
    total_fee = 0
    sqrt_price = pool.sqrt_price_x64
    tick = pool.current_tick
    liquidity = pool.liquidity
    stop_reason: StopReason | None = None

    while remaining > 0 and sqrt_price != limit:
        boundary = sequence.next_boundary(tick, a_to_b)
        tick_next = min(max(boundary.index, MIN_TICK), MAX_TICK)
        sqrt_next = tick_to_sqrt_price_x64(tick_next)

        if boundary.is_coverage_edge and sqrt_price == sqrt_next:
            stop_reason = StopReason.TICK_DATA_EXHAUSTED
            break
        if liquidity == 0:
            raise ZeroLiquidity(
                f"Pool {pool.pool_id} has no active liquidity at tick {tick} "
                f"with {remaining} outstanding"
            )

        target = max(sqrt_next, limit) if a_to_b else min(sqrt_next, limit)
        step = compute_swap_step(
            sqrt_price, target, liquidity, remaining, pool.fee_rate_bps, exact_in
        )

        if exact_in:
            remaining = (S(remaining) - step.amount_in_with_fee).value
        else:
            remaining = (S(remaining) - step.amount_out).value
        total_in += step.amount_in_with_fee
        total_out += step.amount_out
        total_fee += step.fee_amount

        previous_price = sqrt_price
        sqrt_price = step.sqrt_price_next
        if sqrt_price == sqrt_next:
            if boundary.initialized:
                delta = -boundary.liquidity_net if a_to_b else boundary.liquidity_net
                liquidity = add_liquidity_delta(liquidity, delta)
            tick = tick_next - 1 if a_to_b else tick_next
        elif sqrt_price != previous_price:
            tick = sqrt_price_x64_to_tick(sqrt_price)

    if remaining == 0:
        stop_reason = StopReason.FILLED
    elif stop_reason is None:
        stop_reason = StopReason.PRICE_LIMIT if sqrt_price_limit_x64 else StopReason.PRICE_BOUND

    quote = Quote(
        amount_in=S(total_in).to_u64(),
        amount_out=S(total_out).to_u64(),
        fee_paid=S(total_fee).to_u64(),
        sqrt_price_after=sqrt_price,
        tick_after=tick,
        price_impact_bps=price_impact_bps(pool.sqrt_price_x64, sqrt_price),
        crossed_tick_array_starts=_touched_array_starts(sequence, tick, a_to_b),
        complete=remaining == 0,
        stop_reason=stop_reason,
    )

    logger.debug(
        "swap_simulated",
        pool_id=pool.pool_id,
        mode=direction.mode.value,
        a_to_b=a_to_b,
        amount_specified=amount_specified,
        amount_in=quote.amount_in,
        amount_out=quote.amount_out,
        complete=quote.complete,
        stop_reason=stop_reason.value,
    )
    return quote


class ClmmQuoter:
    """Quotes swaps against pool candidates with a fixed tick-array size."""

    def __init__(self, array_size: int = TICK_ARRAY_SIZE):
        self.array_size = array_size

    def quote(
        self,
        candidate: PoolCandidate,
        direction: SwapDirection,
        amount: int,
        sqrt_price_limit_x64: int = 0,
    ) -> Quote:
        """Simulate a swap against a candidate's pool and tick arrays.

        Raises:
            InsufficientTickData: If the candidate has no tick-array bundle
        """
        if candidate.tick_arrays is None:
            raise InsufficientTickData(f"No tick arrays supplied for pool {candidate.pool_id}")
        return simulate_swap(
            candidate.pool,
            candidate.tick_arrays,
            direction,
            amount,
            sqrt_price_limit_x64,
            self.array_size,
        )

    def quote_exact_input(
        self, candidate: PoolCandidate, a_to_b: bool, amount_in: int, sqrt_price_limit_x64: int = 0
    ) -> Quote:
        return self.quote(candidate, SwapDirection.exact_in(a_to_b), amount_in, sqrt_price_limit_x64)

    def quote_exact_output(
        self, candidate: PoolCandidate, a_to_b: bool, amount_out: int, sqrt_price_limit_x64: int = 0
    ) -> Quote:
        return self.quote(
            candidate, SwapDirection.exact_out(a_to_b), amount_out, sqrt_price_limit_x64
        )


__all__ = ["ClmmQuoter", "simulate_swap", "resolve_price_limit", "price_impact_bps"]
