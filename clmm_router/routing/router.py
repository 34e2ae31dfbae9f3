"""Multi-pool routing for a single asset pair.

Every candidate pool is simulated independently and returns its own
CandidateOutcome; nothing is shared between simulations. Once all outcomes
are collected a single deterministic ranking picks the winner, so the
selection does not depend on completion order.

Per-pool failures (bad data, overflow, insufficient tick arrays, timeouts)
exclude that pool and are reported on the RouteSelection. The request only
fails, with NoLiquidityAvailable, when no pool survives.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, cast

import structlog

from clmm_router.clmm.pool import PoolCandidate, PoolSnapshot
from clmm_router.clmm.quote import Quote, StopReason, SwapDirection
from clmm_router.clmm.quoter import ClmmQuoter
from clmm_router.config import DEFAULT_ROUTER_CONFIG, RouterConfig
from clmm_router.constants import U64_MAX
from clmm_router.errors import (
    ClmmRouterError,
    InsufficientTickData,
    InvalidPriceLimit,
    InvalidSnapshot,
    InvalidSwapAmount,
    MathOverflow,
    NoLiquidityAvailable,
    ZeroLiquidity,
)
from clmm_router.routing.ranking import rank_outcomes
from clmm_router.routing.types import (
    CandidateOutcome,
    ExclusionReason,
    PoolExclusion,
    RouteSelection,
    SwapRequest,
)

if TYPE_CHECKING:
    from clmm_router.ports.snapshot import SnapshotProvider

logger = structlog.get_logger()

# Checked in order; the first matching error type decides the reason
_ERROR_REASONS: tuple[tuple[type[ClmmRouterError], ExclusionReason], ...] = (
    (InsufficientTickData, ExclusionReason.INSUFFICIENT_TICK_DATA),
    (ZeroLiquidity, ExclusionReason.ZERO_LIQUIDITY),
    (MathOverflow, ExclusionReason.MATH_OVERFLOW),
    (InvalidSnapshot, ExclusionReason.INVALID_SNAPSHOT),
    (InvalidPriceLimit, ExclusionReason.INVALID_PRICE_LIMIT),
)


def exclusion_reason_for(error: ClmmRouterError) -> ExclusionReason:
    for error_type, reason in _ERROR_REASONS:
        if isinstance(error, error_type):
            return reason
    return ExclusionReason.SIMULATION_ERROR


def _excluded(
    pool: PoolSnapshot,
    reason: ExclusionReason,
    detail: str | None = None,
    direction: SwapDirection | None = None,
) -> CandidateOutcome:
    logger.debug("pool_excluded", pool_id=pool.pool_id, reason=reason.value, detail=detail)
    return CandidateOutcome(
        pool=pool,
        direction=direction,
        exclusion=PoolExclusion(pool.pool_id, reason, detail),
    )


def _screen(pool: PoolSnapshot, request: SwapRequest) -> CandidateOutcome | None:
    """Exclusion for a pool that cannot trade the request at all, else None."""
    if (
        request.input_mint == request.output_mint
        or not pool.has_mint(request.input_mint)
        or not pool.has_mint(request.output_mint)
    ):
        return _excluded(pool, ExclusionReason.MINT_MISMATCH)
    if not pool.swap_enabled:
        direction = SwapDirection(request.mode, pool.is_a_to_b(request.input_mint))
        return _excluded(pool, ExclusionReason.SWAP_DISABLED, direction=direction)
    return None


def _validate_request(request: SwapRequest) -> None:
    if request.amount <= 0 or request.amount > U64_MAX:
        raise InvalidSwapAmount(f"Swap amount must be in [1, {U64_MAX}], got {request.amount}")


class PoolRouter:
    """Selects the best pool for a swap among candidates for the same pair.

    Args:
        quoter: Simulator used for every candidate. Defaults to a ClmmQuoter
                using the config's tick-array size.
        config: Parallelism and timeout settings
    """

    def __init__(
        self,
        quoter: ClmmQuoter | None = None,
        config: RouterConfig = DEFAULT_ROUTER_CONFIG,
    ) -> None:
        self.config = config
        self.quoter = quoter if quoter is not None else ClmmQuoter(config.tick_array_size)

    def evaluate(self, candidate: PoolCandidate, request: SwapRequest) -> CandidateOutcome:
        """Simulate one candidate, turning any per-pool failure into an exclusion."""
        pool = candidate.pool
        screened = _screen(pool, request)
        if screened is not None:
            return screened

        direction = SwapDirection(request.mode, pool.is_a_to_b(request.input_mint))
        if not candidate.tick_arrays:
            return _excluded(pool, ExclusionReason.NO_TICK_ARRAYS, direction=direction)

        try:
            quote = self.quoter.quote(
                candidate, direction, request.amount, request.sqrt_price_limit_x64
            )
        except ClmmRouterError as err:
            return _excluded(pool, exclusion_reason_for(err), str(err), direction)
        except Exception as err:
            logger.exception("pool_simulation_failed", pool_id=pool.pool_id)
            return _excluded(pool, ExclusionReason.SIMULATION_ERROR, repr(err), direction)

        if not quote.complete:
            reason = (
                ExclusionReason.INSUFFICIENT_TICK_DATA
                if quote.stop_reason == StopReason.TICK_DATA_EXHAUSTED
                else ExclusionReason.INCOMPLETE
            )
            return _excluded(pool, reason, quote.stop_reason.value, direction)

        return CandidateOutcome(pool=pool, direction=direction, quote=quote)

    def select_route(
        self, candidates: Sequence[PoolCandidate], request: SwapRequest
    ) -> RouteSelection:
        """Route a swap across caller-supplied pools and tick arrays.

        Simulations run on a thread pool capped at config.max_parallelism.

        Raises:
            InvalidSwapAmount: If the requested amount is not a positive u64
            NoLiquidityAvailable: If no candidate yields a complete quote
        """
        _validate_request(request)
        if not candidates:
            return self._select([], request)

        workers = min(self.config.max_parallelism, len(candidates))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            outcomes = list(executor.map(lambda c: self.evaluate(c, request), candidates))
        return self._select(outcomes, request)

    async def route(self, provider: SnapshotProvider, request: SwapRequest) -> RouteSelection:
        """Route a swap using pools and tick arrays pulled from a provider.

        Tick arrays are fetched concurrently, at most config.max_parallelism
        pools at a time. Each pool's fetch plus simulation runs under
        config.per_pool_timeout_seconds; a pool that fails or times out is
        excluded and the rest proceed.

        Simulations run on a pool of config.max_parallelism threads. A
        simulation abandoned by a timeout keeps its thread until it finishes,
        so it still counts against the cap.

        Raises:
            InvalidSwapAmount: If the requested amount is not a positive u64
            NoLiquidityAvailable: If no pool yields a complete quote
        """
        _validate_request(request)
        pools = await provider.list_pools_for_pair(request.input_mint, request.output_mint)
        semaphore = asyncio.Semaphore(self.config.max_parallelism)
        executor = ThreadPoolExecutor(max_workers=self.config.max_parallelism)
        timeout = self.config.per_pool_timeout_seconds

        async def bounded(pool: PoolSnapshot) -> CandidateOutcome:
            async with semaphore:
                try:
                    return await asyncio.wait_for(
                        self._fetch_and_evaluate(provider, pool, request, executor),
                        timeout=timeout,
                    )
                except TimeoutError:
                    logger.warning(
                        "pool_timeout", pool_id=pool.pool_id, timeout_seconds=timeout
                    )
                    return _excluded(pool, ExclusionReason.TIMEOUT, f"exceeded {timeout}s")

        try:
            outcomes = await asyncio.gather(*(bounded(pool) for pool in pools))
        finally:
            executor.shutdown(wait=False, cancel_futures=True)
        return self._select(list(outcomes), request)

    async def _fetch_and_evaluate(
        self,
        provider: SnapshotProvider,
        pool: PoolSnapshot,
        request: SwapRequest,
        executor: ThreadPoolExecutor,
    ) -> CandidateOutcome:
        # No fetch for pools that cannot trade the request
        screened = _screen(pool, request)
        if screened is not None:
            return screened

        try:
            tick_arrays = await provider.fetch_tick_arrays(pool.pool_id, pool.current_tick)
        except ClmmRouterError as err:
            return _excluded(pool, exclusion_reason_for(err), str(err))
        except Exception as err:
            logger.warning("tick_array_fetch_failed", pool_id=pool.pool_id, error=repr(err))
            return _excluded(pool, ExclusionReason.FETCH_ERROR, repr(err))

        candidate = PoolCandidate(
            pool, tuple(tick_arrays) if tick_arrays is not None else None
        )
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(executor, self.evaluate, candidate, request)

    def _select(self, outcomes: list[CandidateOutcome], request: SwapRequest) -> RouteSelection:
        exclusions = tuple(
            sorted(
                (o.exclusion for o in outcomes if o.exclusion is not None),
                key=lambda e: e.pool_id,
            )
        )
        ranked = rank_outcomes(outcomes)
        if not ranked:
            logger.info(
                "no_liquidity_available",
                input_mint=request.input_mint,
                output_mint=request.output_mint,
                candidates=len(outcomes),
                reasons={e.pool_id: e.reason.value for e in exclusions},
            )
            raise NoLiquidityAvailable(
                f"No eligible pool for {request.input_mint} -> {request.output_mint} "
                f"among {len(outcomes)} candidates"
            )

        best = ranked[0]
        # rank_outcomes only returns eligible outcomes
        quote = cast(Quote, best.quote)
        direction = cast(SwapDirection, best.direction)
        logger.info(
            "route_selected",
            pool_id=best.pool_id,
            mode=request.mode.value,
            amount_in=quote.amount_in,
            amount_out=quote.amount_out,
            candidates=len(outcomes),
            excluded=len(exclusions),
        )
        return RouteSelection(
            pool=best.pool,
            quote=quote,
            direction=direction,
            candidates_considered=len(outcomes),
            exclusions=exclusions,
            sqrt_price_limit_x64=request.sqrt_price_limit_x64,
        )


__all__ = ["PoolRouter", "exclusion_reason_for"]
