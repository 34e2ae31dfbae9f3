"""Single swap step within one constant-liquidity price range."""

from __future__ import annotations

from dataclasses import dataclass

from clmm_router.constants import FEE_RATE_DENOMINATOR
from clmm_router.errors import MathOverflow
from clmm_router.safe_int import S

from .sqrt_price_math import (
    _amount_a_delta,
    _amount_b_delta,
    get_next_sqrt_price_from_input,
    get_next_sqrt_price_from_output,
)

__all__ = ["SwapStep", "compute_swap_step"]


@dataclass(frozen=True)
class SwapStep:
    """Result of swapping within a single price range.

    Attributes:
        sqrt_price_next: Price reached by the step (the target, or short of it)
        amount_in: Input consumed by the price movement, excluding fee
        amount_out: Output produced
        fee_amount: Fee taken from the input leg
    """

    sqrt_price_next: int
    amount_in: int
    amount_out: int
    fee_amount: int

    @property
    def amount_in_with_fee(self) -> int:
        return self.amount_in + self.fee_amount


def compute_swap_step(
    sqrt_price_current: int,
    sqrt_price_target: int,
    liquidity: int,
    amount_remaining: int,
    fee_rate_bps: int,
    exact_in: bool,
) -> SwapStep:
    """Swap as far toward the target price as `amount_remaining` allows.

    The fee is taken from the input before the price movement is computed.
    If the step reaches its target, the fee is charged on the amount that
    moved the price (rounded up). If an exact-input step stops short of the
    target, all leftover input is kept as fee.

    Args:
        sqrt_price_current: Current sqrt price (Q64.64)
        sqrt_price_target: Price the step may not pass (next tick or limit)
        liquidity: Active liquidity in this range
        amount_remaining: Input left (exact in) or output still required (exact out)
        fee_rate_bps: Fee in basis points of the input leg
        exact_in: True when amount_remaining is an input amount

    Returns:
        SwapStep with the price reached and amounts

    Raises:
        MathOverflow: On width overflow or invalid fee rate
    """
    if fee_rate_bps < 0 or fee_rate_bps >= FEE_RATE_DENOMINATOR:
        raise MathOverflow(f"Fee rate {fee_rate_bps} bps outside [0, {FEE_RATE_DENOMINATOR})")

    a_to_b = sqrt_price_current >= sqrt_price_target
    amount_in = 0
    amount_out = 0

    if exact_in:
        remaining_less_fee = S(amount_remaining).mul_div_floor(
            FEE_RATE_DENOMINATOR - fee_rate_bps, FEE_RATE_DENOMINATOR
        )
        if a_to_b:
            amount_in = _amount_a_delta(sqrt_price_target, sqrt_price_current, liquidity, True)
        else:
            amount_in = _amount_b_delta(sqrt_price_current, sqrt_price_target, liquidity, True)

        if remaining_less_fee >= amount_in:
            sqrt_price_next = sqrt_price_target
        else:
            sqrt_price_next = get_next_sqrt_price_from_input(
                sqrt_price_current, liquidity, remaining_less_fee.value, a_to_b
            )
    else:
        if a_to_b:
            amount_out = _amount_b_delta(sqrt_price_target, sqrt_price_current, liquidity, False)
        else:
            amount_out = _amount_a_delta(sqrt_price_current, sqrt_price_target, liquidity, False)

        if amount_remaining >= amount_out:
            sqrt_price_next = sqrt_price_target
        else:
            sqrt_price_next = get_next_sqrt_price_from_output(
                sqrt_price_current, liquidity, amount_remaining, a_to_b
            )

    reached_target = sqrt_price_next == sqrt_price_target

    if a_to_b:
        if not (reached_target and exact_in):
            amount_in = _amount_a_delta(sqrt_price_next, sqrt_price_current, liquidity, True)
        if not (reached_target and not exact_in):
            amount_out = _amount_b_delta(sqrt_price_next, sqrt_price_current, liquidity, False)
    else:
        if not (reached_target and exact_in):
            amount_in = _amount_b_delta(sqrt_price_current, sqrt_price_next, liquidity, True)
        if not (reached_target and not exact_in):
            amount_out = _amount_a_delta(sqrt_price_current, sqrt_price_next, liquidity, False)

    # Rounding on the price can overshoot the requested output by a unit
    if not exact_in and amount_out > amount_remaining:
        amount_out = amount_remaining

    if exact_in and not reached_target:
        fee_amount = (S(amount_remaining) - amount_in).value
    else:
        fee_amount = S(amount_in).mul_div_ceil(
            fee_rate_bps, FEE_RATE_DENOMINATOR - fee_rate_bps
        ).value

    return SwapStep(
        sqrt_price_next=sqrt_price_next,
        amount_in=S(amount_in).to_u64(),
        amount_out=S(amount_out).to_u64(),
        fee_amount=S(fee_amount).to_u64(),
    )
