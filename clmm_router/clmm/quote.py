"""Swap direction and quote result types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from clmm_router.errors import InsufficientTickData


class SwapMode(str, Enum):
    """Which side of the swap the caller fixes."""

    EXACT_IN = "exact_in"
    EXACT_OUT = "exact_out"


@dataclass(frozen=True)
class SwapDirection:
    """Swap mode combined with the direction of travel.

    a_to_b means mint A is paid in and the price (B per A) decreases.
    """

    mode: SwapMode
    a_to_b: bool

    @property
    def is_exact_in(self) -> bool:
        return self.mode == SwapMode.EXACT_IN

    @classmethod
    def exact_in(cls, a_to_b: bool) -> SwapDirection:
        return cls(SwapMode.EXACT_IN, a_to_b)

    @classmethod
    def exact_out(cls, a_to_b: bool) -> SwapDirection:
        return cls(SwapMode.EXACT_OUT, a_to_b)


class StopReason(str, Enum):
    """Why the simulation loop ended."""

    FILLED = "filled"
    PRICE_LIMIT = "price_limit"
    TICK_DATA_EXHAUSTED = "tick_data_exhausted"
    PRICE_BOUND = "price_bound"


@dataclass(frozen=True)
class Quote:
    """Simulated outcome of a swap against one pool snapshot.

    Attributes:
        amount_in: Total input paid, fee included
        amount_out: Total output received
        fee_paid: Portion of amount_in taken as fee
        sqrt_price_after: Pool sqrt price when the simulation stopped
        tick_after: Pool tick when the simulation stopped
        price_impact_bps: Relative sqrt price deviation from the snapshot, rounded up
        crossed_tick_array_starts: Tick arrays touched, in order of travel
        complete: True if the specified amount was fully satisfied
        stop_reason: Why the simulation stopped
    """

    amount_in: int
    amount_out: int
    fee_paid: int
    sqrt_price_after: int
    tick_after: int
    price_impact_bps: int
    crossed_tick_array_starts: tuple[int, ...]
    complete: bool
    stop_reason: StopReason

    def require_complete(self) -> Quote:
        """Return self, or raise if the quote did not satisfy the request."""
        if not self.complete:
            raise InsufficientTickData(
                f"Quote incomplete ({self.stop_reason.value}): "
                f"in={self.amount_in} out={self.amount_out}"
            )
        return self


__all__ = ["SwapMode", "SwapDirection", "StopReason", "Quote"]
