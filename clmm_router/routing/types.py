"""Type definitions for routing module."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from clmm_router.clmm.pool import MintInfo, PoolSnapshot
from clmm_router.clmm.quote import Quote, SwapDirection, SwapMode


class ExclusionReason(str, Enum):
    """Why a candidate pool was dropped from ranking."""

    SWAP_DISABLED = "swap_disabled"
    NO_TICK_ARRAYS = "no_tick_arrays"
    MINT_MISMATCH = "mint_mismatch"
    INSUFFICIENT_TICK_DATA = "insufficient_tick_data"
    ZERO_LIQUIDITY = "zero_liquidity"
    MATH_OVERFLOW = "math_overflow"
    INVALID_SNAPSHOT = "invalid_snapshot"
    INVALID_PRICE_LIMIT = "invalid_price_limit"
    INCOMPLETE = "incomplete"
    FETCH_ERROR = "fetch_error"
    SIMULATION_ERROR = "simulation_error"
    TIMEOUT = "timeout"


@dataclass(frozen=True)
class SwapRequest:
    """A swap to route between two mints.

    Attributes:
        input_mint: Mint paid into the pool
        output_mint: Mint received from the pool
        mode: Whether amount is the exact input or the exact output
        amount: Input amount (exact in) or desired output (exact out)
        sqrt_price_limit_x64: Price bound forwarded to every simulation, 0 for none
    """

    input_mint: str
    output_mint: str
    mode: SwapMode
    amount: int
    sqrt_price_limit_x64: int = 0


@dataclass(frozen=True)
class PoolExclusion:
    """A pool that was not ranked, and why."""

    pool_id: str
    reason: ExclusionReason
    detail: str | None = None


@dataclass(frozen=True)
class CandidateOutcome:
    """Result of evaluating one candidate: a quote or an exclusion.

    Each simulation task returns one of these; ranking runs afterwards over
    the collected outcomes. direction is None when the pool does not trade
    the requested pair.
    """

    pool: PoolSnapshot
    direction: SwapDirection | None = None
    quote: Quote | None = None
    exclusion: PoolExclusion | None = None

    @property
    def pool_id(self) -> str:
        return self.pool.pool_id

    @property
    def eligible(self) -> bool:
        return self.quote is not None and self.exclusion is None


@dataclass(frozen=True)
class RouteSelection:
    """The chosen pool and quote, with ranking diagnostics.

    Attributes:
        pool: Selected pool snapshot
        quote: Complete quote for the selected pool
        direction: Swap direction oriented for the selected pool
        candidates_considered: Number of pools offered to the router
        exclusions: Pools dropped before ranking, ordered by pool id
        sqrt_price_limit_x64: Price bound the quote was simulated with (0 = none)
    """

    pool: PoolSnapshot
    quote: Quote
    direction: SwapDirection
    candidates_considered: int
    exclusions: tuple[PoolExclusion, ...] = ()
    sqrt_price_limit_x64: int = 0

    @property
    def pool_id(self) -> str:
        return self.pool.pool_id

    @property
    def input_mint(self) -> MintInfo:
        return self.pool.mints_for(self.direction.a_to_b)[0]

    @property
    def output_mint(self) -> MintInfo:
        return self.pool.mints_for(self.direction.a_to_b)[1]

    def execution_rate(self) -> Decimal:
        """Output per unit of input, in UI units of each mint."""
        amount_in = self.input_mint.to_ui_amount(self.quote.amount_in)
        if amount_in == 0:
            return Decimal(0)
        return self.output_mint.to_ui_amount(self.quote.amount_out) / amount_in


__all__ = [
    "SwapRequest",
    "ExclusionReason",
    "PoolExclusion",
    "CandidateOutcome",
    "RouteSelection",
]
