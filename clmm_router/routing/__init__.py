"""Pool selection across candidate concentrated-liquidity pools."""

from clmm_router.routing.ranking import rank_outcomes, ranking_key
from clmm_router.routing.router import PoolRouter, exclusion_reason_for
from clmm_router.routing.types import (
    CandidateOutcome,
    ExclusionReason,
    PoolExclusion,
    RouteSelection,
    SwapRequest,
)

__all__ = [
    "PoolRouter",
    "SwapRequest",
    "RouteSelection",
    "CandidateOutcome",
    "PoolExclusion",
    "ExclusionReason",
    "exclusion_reason_for",
    "ranking_key",
    "rank_outcomes",
]
