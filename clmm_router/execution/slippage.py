"""Slippage policy and threshold computation."""

from __future__ import annotations

from dataclasses import dataclass

from clmm_router.constants import BPS_DENOMINATOR, DEFAULT_SLIPPAGE_BPS, MAX_SLIPPAGE_BPS
from clmm_router.errors import InvalidSlippageConfig
from clmm_router.safe_int import S


def validate_slippage_bps(bps: int) -> int:
    """Return bps if it is an allowed tolerance.

    Raises:
        InvalidSlippageConfig: If bps is not an integer in [0, MAX_SLIPPAGE_BPS]
    """
    if isinstance(bps, bool) or not isinstance(bps, int):
        raise InvalidSlippageConfig(f"Slippage bps must be an integer, got {bps!r}")
    if not 0 <= bps <= MAX_SLIPPAGE_BPS:
        raise InvalidSlippageConfig(f"Slippage bps must be in [0, {MAX_SLIPPAGE_BPS}], got {bps}")
    return bps


@dataclass(frozen=True)
class SlippagePolicy:
    """Per-account slippage tolerance in basis points.

    Validated on construction, so a SlippagePolicy value is always usable.
    """

    bps: int = DEFAULT_SLIPPAGE_BPS

    def __post_init__(self) -> None:
        validate_slippage_bps(self.bps)

    @classmethod
    def default(cls) -> SlippagePolicy:
        return cls(DEFAULT_SLIPPAGE_BPS)


def compute_slippage_threshold(expected_amount: int, bps: int, exact_in: bool) -> int:
    """Worst acceptable counter-amount for a quoted swap.

    Exact in: minimum output, floor(expected * (10000 - bps) / 10000).
    Exact out: maximum input, ceil(expected * (10000 + bps) / 10000).
    Both round toward the safer side for the settlement layer.

    Raises:
        InvalidSlippageConfig: If bps is out of range
        MathOverflow: If the maximum input does not fit in u64
    """
    validate_slippage_bps(bps)
    if exact_in:
        return S(expected_amount).mul_div_floor(BPS_DENOMINATOR - bps, BPS_DENOMINATOR).to_u64()
    return S(expected_amount).mul_div_ceil(BPS_DENOMINATOR + bps, BPS_DENOMINATOR).to_u64()


def realized_slippage_bps(expected_amount: int, actual_amount: int, exact_in: bool) -> int:
    """Slippage actually experienced, in bps of the expected amount.

    Positive means worse than quoted (less output, or more input); negative
    means better. Rounded up, toward the adverse side.
    """
    if expected_amount <= 0:
        raise ValueError(f"Expected amount must be positive, got {expected_amount}")
    shortfall = expected_amount - actual_amount if exact_in else actual_amount - expected_amount
    return -((-shortfall * BPS_DENOMINATOR) // expected_amount)


__all__ = [
    "SlippagePolicy",
    "validate_slippage_bps",
    "compute_slippage_threshold",
    "realized_slippage_bps",
]
