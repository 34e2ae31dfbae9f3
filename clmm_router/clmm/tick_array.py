"""Tick-array coverage and initialized-tick search.

The quoter only knows the tick arrays the caller supplied. Starting from the
array that holds the current tick, coverage extends over the contiguous run
of supplied arrays in both directions; anything past a gap is unknown and
the search reports the coverage edge instead of a tick.
"""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Iterable
from dataclasses import dataclass

from clmm_router.constants import TICK_ARRAY_SIZE
from clmm_router.errors import InsufficientTickData, InvalidSnapshot
from clmm_router.math.tick_math import tick_array_start_index

from .pool import Tick, TickArray


@dataclass(frozen=True)
class TickBoundary:
    """Next stopping point for a swap step.

    Attributes:
        index: Tick index of the boundary
        initialized: True if crossing it changes active liquidity
        liquidity_net: Signed liquidity change when crossing upward
        array_start: Start index of the tick array the boundary lies in
        is_coverage_edge: True if the boundary is the end of known tick data
    """

    index: int
    initialized: bool
    liquidity_net: int
    array_start: int
    is_coverage_edge: bool = False


class TickArraySequence:
    """Contiguous tick arrays around a pool's current tick.

    Args:
        tick_arrays: Arrays supplied for the pool, in any order
        tick_spacing: Pool tick spacing
        current_tick: Pool's current tick
        array_size: Ticks per array

    Raises:
        InsufficientTickData: If the array holding current_tick is missing
        InvalidSnapshot: If arrays are misaligned, duplicated, or hold
            ticks outside their window
    """

    def __init__(
        self,
        tick_arrays: Iterable[TickArray],
        tick_spacing: int,
        current_tick: int,
        array_size: int = TICK_ARRAY_SIZE,
    ) -> None:
        self.tick_spacing = tick_spacing
        self.span = tick_spacing * array_size

        by_start: dict[int, TickArray] = {}
        for array in tick_arrays:
            start = array.start_tick_index
            if start % self.span != 0:
                raise InvalidSnapshot(f"Tick array start {start} not aligned to span {self.span}")
            if start in by_start:
                raise InvalidSnapshot(f"Duplicate tick array start {start}")
            by_start[start] = array

        self.current_start = tick_array_start_index(current_tick, tick_spacing, array_size)
        if self.current_start not in by_start:
            raise InsufficientTickData(
                f"Tick array {self.current_start} holding current tick {current_tick} not supplied"
            )

        low = self.current_start
        while low - self.span in by_start:
            low -= self.span
        high = self.current_start
        while high + self.span in by_start:
            high += self.span
        self.low_start = low
        self.high_start = high

        ticks: list[Tick] = []
        for start in range(low, high + self.span, self.span):
            for tick in by_start[start].initialized_ticks():
                if not start <= tick.index < start + self.span:
                    raise InvalidSnapshot(f"Tick {tick.index} outside array starting at {start}")
                if tick.index % tick_spacing != 0:
                    raise InvalidSnapshot(
                        f"Tick {tick.index} not a multiple of spacing {tick_spacing}"
                    )
                ticks.append(tick)

        self._ticks = ticks
        self._indices = [t.index for t in ticks]

    @property
    def coverage(self) -> tuple[int, int]:
        """(lowest, highest) start index of the contiguous covered arrays."""
        return self.low_start, self.high_start

    @property
    def array_count(self) -> int:
        return (self.high_start - self.low_start) // self.span + 1

    def start_index_of(self, tick: int) -> int:
        return (tick // self.span) * self.span

    def next_boundary(self, tick: int, a_to_b: bool) -> TickBoundary:
        """Find the next initialized tick in the direction of travel.

        Moving down (a_to_b) the search includes `tick` itself, since the
        current tick's lower bound is crossed on the way down. Moving up it
        starts strictly above `tick`.

        Returns:
            The nearest initialized tick, or the coverage edge if none is
            known in that direction
        """
        if a_to_b:
            pos = bisect_right(self._indices, tick) - 1
            if pos >= 0:
                found = self._ticks[pos]
                return TickBoundary(
                    index=found.index,
                    initialized=True,
                    liquidity_net=found.liquidity_net,
                    array_start=self.start_index_of(found.index),
                )
            return TickBoundary(
                index=self.low_start,
                initialized=False,
                liquidity_net=0,
                array_start=self.low_start,
                is_coverage_edge=True,
            )

        pos = bisect_right(self._indices, tick)
        if pos < len(self._ticks):
            found = self._ticks[pos]
            return TickBoundary(
                index=found.index,
                initialized=True,
                liquidity_net=found.liquidity_net,
                array_start=self.start_index_of(found.index),
            )
        return TickBoundary(
            index=self.high_start + self.span,
            initialized=False,
            liquidity_net=0,
            array_start=self.high_start,
            is_coverage_edge=True,
        )


__all__ = ["TickBoundary", "TickArraySequence"]
