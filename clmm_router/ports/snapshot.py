"""Pool snapshot provider port.

The router pulls pool state through this interface. Results are treated as
a point-in-time read; detecting staleness is the provider's job.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, Protocol

import structlog

from clmm_router.clmm.parsing import parse_pool_bundle
from clmm_router.clmm.pool import PoolCandidate, PoolSnapshot, TickArray
from clmm_router.constants import TICK_ARRAY_SIZE
from clmm_router.errors import InvalidSnapshot

logger = structlog.get_logger()


class SnapshotProvider(Protocol):
    """Source of pool snapshots and tick arrays."""

    async def list_pools_for_pair(self, mint_a: str, mint_b: str) -> Sequence[PoolSnapshot]:
        """Pools trading the two mints, in either order."""
        ...

    async def fetch_tick_arrays(
        self, pool_id: str, around_tick: int
    ) -> Sequence[TickArray] | None:
        """Tick arrays for a pool near a tick.

        Returns:
            Tick arrays, or None if the source has none for this pool
        """
        ...


class InMemorySnapshotProvider:
    """Snapshot provider backed by an in-process pool map.

    Useful for tests, offline quoting, and as the settlement simulator's view
    of live pool state.

    Args:
        candidates: Initial pools with their tick arrays
        array_radius: If set, fetch_tick_arrays returns only arrays within this
                      many arrays of the requested tick. None returns all.
        array_size: Ticks per tick array
    """

    def __init__(
        self,
        candidates: Iterable[PoolCandidate] = (),
        array_radius: int | None = None,
        array_size: int = TICK_ARRAY_SIZE,
    ) -> None:
        self.array_radius = array_radius
        self.array_size = array_size
        self._candidates: dict[str, PoolCandidate] = {}
        for candidate in candidates:
            self.upsert(candidate)

    @classmethod
    def from_payloads(
        cls,
        payloads: Iterable[dict[str, Any]],
        array_radius: int | None = None,
        array_size: int = TICK_ARRAY_SIZE,
    ) -> InMemorySnapshotProvider:
        """Build a provider from raw pool bundle payloads.

        Raises:
            InvalidSnapshot: If any payload is malformed
        """
        candidates = [parse_pool_bundle(payload, array_size) for payload in payloads]
        return cls(candidates, array_radius=array_radius, array_size=array_size)

    def upsert(self, candidate: PoolCandidate) -> None:
        """Add or replace a pool's state."""
        self._candidates[candidate.pool_id] = candidate

    def candidate(self, pool_id: str) -> PoolCandidate | None:
        return self._candidates.get(pool_id)

    def __len__(self) -> int:
        return len(self._candidates)

    async def list_pools_for_pair(self, mint_a: str, mint_b: str) -> list[PoolSnapshot]:
        pools = [
            c.pool
            for c in self._candidates.values()
            if mint_a != mint_b and c.pool.has_mint(mint_a) and c.pool.has_mint(mint_b)
        ]
        pools.sort(key=lambda p: p.pool_id)
        logger.debug("pools_listed", mint_a=mint_a, mint_b=mint_b, count=len(pools))
        return pools

    async def fetch_tick_arrays(self, pool_id: str, around_tick: int) -> list[TickArray] | None:
        candidate = self._candidates.get(pool_id)
        if candidate is None:
            raise InvalidSnapshot(f"Unknown pool {pool_id}")
        if candidate.tick_arrays is None:
            return None

        arrays = sorted(candidate.tick_arrays, key=lambda a: a.start_tick_index)
        if self.array_radius is None:
            return arrays

        span = candidate.pool.tick_spacing * self.array_size
        center = (around_tick // span) * span
        reach = self.array_radius * span
        return [a for a in arrays if abs(a.start_tick_index - center) <= reach]


__all__ = ["SnapshotProvider", "InMemorySnapshotProvider"]
