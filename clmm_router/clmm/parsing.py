"""Parsing of raw pool and tick-array payloads into snapshots.

Loosely-typed provider responses are validated here, at the boundary, so
the simulator only ever sees well-formed PoolSnapshot and TickArray values.
Every rejection raises InvalidSnapshot.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import structlog
from pydantic import BaseModel, ValidationError

from clmm_router.constants import TICK_ARRAY_SIZE
from clmm_router.errors import InvalidSnapshot
from clmm_router.math.tick_math import (
    MAX_SQRT_PRICE_X64,
    MIN_SQRT_PRICE_X64,
    sqrt_price_x64_to_tick,
    tick_to_sqrt_price_x64,
)
from clmm_router.models.pool_data import (
    PoolBundlePayload,
    PoolSnapshotPayload,
    TickArrayPayload,
)

from .pool import MintInfo, PoolCandidate, PoolSnapshot, Tick, TickArray

logger = structlog.get_logger()

# Bit 0 of the pool status field marks swaps as enabled
SWAP_ENABLED_STATUS_BIT = 1


def _validate_model(model: type[BaseModel], raw: Any, kind: str) -> Any:
    if isinstance(raw, model):
        return raw
    try:
        return model.model_validate(raw)
    except ValidationError as err:
        logger.debug("payload_rejected", kind=kind, errors=err.error_count())
        raise InvalidSnapshot(f"Malformed {kind} payload: {err}") from err


def swap_enabled_from_payload(payload: PoolSnapshotPayload) -> bool:
    """Resolve swap status from an explicit flag or the status bitfield.

    A payload carrying neither is treated as enabled.
    """
    if payload.swap_enabled is not None:
        return payload.swap_enabled
    if payload.status is not None:
        return bool(payload.status & SWAP_ENABLED_STATUS_BIT)
    return True


def parse_pool_snapshot(raw: PoolSnapshotPayload | dict[str, Any]) -> PoolSnapshot:
    """Parse a pool payload into a PoolSnapshot.

    Args:
        raw: Payload dict (camelCase keys) or an already-validated model

    Returns:
        Validated PoolSnapshot

    Raises:
        InvalidSnapshot: If the payload is malformed or inconsistent
    """
    payload = _validate_model(PoolSnapshotPayload, raw, "pool")

    if payload.mint_a.address == payload.mint_b.address:
        raise InvalidSnapshot(f"Pool {payload.pool_id} has identical mints")

    sqrt_price = int(payload.sqrt_price_x64)
    if not MIN_SQRT_PRICE_X64 <= sqrt_price <= MAX_SQRT_PRICE_X64:
        raise InvalidSnapshot(f"Pool {payload.pool_id} sqrt price {sqrt_price} out of range")

    # After crossing tick T downward the price sits exactly on T while the
    # current tick is T - 1; any other mismatch is corrupt state
    price_tick = sqrt_price_x64_to_tick(sqrt_price)
    on_crossed_boundary = (
        payload.tick_current == price_tick - 1
        and tick_to_sqrt_price_x64(price_tick) == sqrt_price
    )
    if payload.tick_current != price_tick and not on_crossed_boundary:
        logger.debug(
            "pool_tick_price_mismatch",
            pool_id=payload.pool_id,
            tick=payload.tick_current,
            sqrt_price_x64=sqrt_price,
        )
        raise InvalidSnapshot(
            f"Pool {payload.pool_id} tick {payload.tick_current} does not match its sqrt price"
        )

    return PoolSnapshot(
        pool_id=payload.pool_id,
        mint_a=MintInfo(payload.mint_a.address, payload.mint_a.decimals),
        mint_b=MintInfo(payload.mint_b.address, payload.mint_b.decimals),
        vault_a=payload.vault_a,
        vault_b=payload.vault_b,
        current_tick=payload.tick_current,
        tick_spacing=payload.tick_spacing,
        sqrt_price_x64=sqrt_price,
        liquidity=int(payload.liquidity),
        fee_rate_bps=payload.fee_rate_bps,
        swap_enabled=swap_enabled_from_payload(payload),
    )


def parse_tick_array(
    raw: TickArrayPayload | dict[str, Any],
    tick_spacing: int,
    array_size: int = TICK_ARRAY_SIZE,
) -> TickArray:
    """Parse a tick-array payload for a pool with the given spacing.

    Raises:
        InvalidSnapshot: If the start is misaligned or a tick falls outside
            the array window or off the spacing grid
    """
    payload = _validate_model(TickArrayPayload, raw, "tick_array")
    span = tick_spacing * array_size
    start = payload.start_tick_index
    if start % span != 0:
        raise InvalidSnapshot(f"Tick array start {start} not aligned to span {span}")

    ticks = []
    seen: set[int] = set()
    for entry in payload.ticks:
        if not start <= entry.tick < start + span:
            raise InvalidSnapshot(f"Tick {entry.tick} outside array starting at {start}")
        if entry.tick % tick_spacing != 0:
            raise InvalidSnapshot(f"Tick {entry.tick} not a multiple of spacing {tick_spacing}")
        if entry.tick in seen:
            raise InvalidSnapshot(f"Duplicate tick {entry.tick} in array starting at {start}")
        seen.add(entry.tick)
        ticks.append(
            Tick(
                index=entry.tick,
                liquidity_net=int(entry.liquidity_net),
                liquidity_gross=int(entry.liquidity_gross),
                initialized=entry.is_initialized,
            )
        )

    return TickArray(start_tick_index=start, ticks=tuple(ticks))


def parse_tick_arrays(
    raws: Iterable[TickArrayPayload | dict[str, Any]],
    tick_spacing: int,
    array_size: int = TICK_ARRAY_SIZE,
) -> tuple[TickArray, ...]:
    return tuple(parse_tick_array(raw, tick_spacing, array_size) for raw in raws)


def parse_pool_bundle(
    raw: PoolBundlePayload | dict[str, Any], array_size: int = TICK_ARRAY_SIZE
) -> PoolCandidate:
    """Parse a pool together with its tick arrays into a routing candidate."""
    payload = _validate_model(PoolBundlePayload, raw, "pool_bundle")
    pool = parse_pool_snapshot(payload.pool)
    if payload.tick_arrays is None:
        return PoolCandidate(pool=pool, tick_arrays=None)
    return PoolCandidate(
        pool=pool,
        tick_arrays=parse_tick_arrays(payload.tick_arrays, pool.tick_spacing, array_size),
    )


__all__ = [
    "parse_pool_snapshot",
    "parse_tick_array",
    "parse_tick_arrays",
    "parse_pool_bundle",
    "swap_enabled_from_payload",
]
