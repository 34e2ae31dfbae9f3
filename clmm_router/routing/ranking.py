"""Deterministic ranking of candidate quotes.

The ranking key is a total order over (quote, pool id), so the selected pool
does not depend on the order in which concurrent simulations finish.
"""

from __future__ import annotations

from collections.abc import Iterable

from clmm_router.routing.types import CandidateOutcome


def ranking_key(outcome: CandidateOutcome) -> tuple[int, int, str]:
    """Sort key where smaller is better.

    Exact in: most output, then lowest fee, then smallest pool id.
    Exact out: least input, then lowest fee, then smallest pool id.
    """
    quote = outcome.quote
    if quote is None or outcome.direction is None:
        raise ValueError(f"Pool {outcome.pool_id} has no quote to rank")
    if outcome.direction.is_exact_in:
        return (-quote.amount_out, quote.fee_paid, outcome.pool_id)
    return (quote.amount_in, quote.fee_paid, outcome.pool_id)


def rank_outcomes(outcomes: Iterable[CandidateOutcome]) -> list[CandidateOutcome]:
    """Eligible outcomes, best first."""
    return sorted((o for o in outcomes if o.eligible), key=ranking_key)


__all__ = ["ranking_key", "rank_outcomes"]
