"""Execution envelope: the bounded parameters handed to settlement."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from clmm_router.clmm.quote import SwapDirection
from clmm_router.errors import InvalidSwapAmount
from clmm_router.routing.types import RouteSelection

from .slippage import SlippagePolicy, compute_slippage_threshold

logger = structlog.get_logger()


@dataclass(frozen=True)
class ExecutionEnvelope:
    """Parameters the settlement layer needs to execute a routed swap.

    Attributes:
        pool_id: Pool to swap against
        direction: Swap mode and direction of travel
        amount: Exact input (exact in) or exact output (exact out)
        threshold_amount: Minimum output (exact in) or maximum input (exact out)
        sqrt_price_limit_x64: Price bound, 0 for unbounded
        expected_other_amount: Quoted counter-amount the threshold derives from
        slippage_bps: Tolerance used to derive the threshold
        tick_array_starts: Tick arrays the quoted swap touches
    """

    pool_id: str
    direction: SwapDirection
    amount: int
    threshold_amount: int
    sqrt_price_limit_x64: int = 0
    expected_other_amount: int = 0
    slippage_bps: int = 0
    tick_array_starts: tuple[int, ...] = ()

    @property
    def is_exact_in(self) -> bool:
        return self.direction.is_exact_in


def build_execution_envelope(
    selection: RouteSelection, policy: SlippagePolicy
) -> ExecutionEnvelope:
    """Apply a slippage policy to a selected route.

    Args:
        selection: Router output with a complete quote
        policy: Account's slippage tolerance

    Returns:
        Immutable ExecutionEnvelope

    Raises:
        InvalidSwapAmount: If the swap amount or the expected counter-amount is zero
        InvalidSlippageConfig: If the policy's bps is out of range
        MathOverflow: If the maximum input overflows u64
    """
    quote = selection.quote
    exact_in = selection.direction.is_exact_in
    if exact_in:
        amount, expected_other = quote.amount_in, quote.amount_out
    else:
        amount, expected_other = quote.amount_out, quote.amount_in

    if amount <= 0:
        raise InvalidSwapAmount(f"Swap amount must be positive, got {amount}")
    if expected_other <= 0:
        raise InvalidSwapAmount(f"Expected counter-amount must be positive, got {expected_other}")

    threshold = compute_slippage_threshold(expected_other, policy.bps, exact_in)

    envelope = ExecutionEnvelope(
        pool_id=selection.pool_id,
        direction=selection.direction,
        amount=amount,
        threshold_amount=threshold,
        sqrt_price_limit_x64=selection.sqrt_price_limit_x64,
        expected_other_amount=expected_other,
        slippage_bps=policy.bps,
        tick_array_starts=quote.crossed_tick_array_starts,
    )

    logger.info(
        "execution_envelope_built",
        pool_id=envelope.pool_id,
        amount=amount,
        expected_other_amount=expected_other,
        threshold=threshold,
        slippage_bps=policy.bps,
        exact_in=exact_in,
    )
    return envelope


__all__ = ["ExecutionEnvelope", "build_execution_envelope"]
