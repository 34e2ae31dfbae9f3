"""Pydantic models for pool and tick-array payloads."""

from clmm_router.models.pool_data import (
    MintPayload,
    PoolBundlePayload,
    PoolSnapshotPayload,
    TickArrayPayload,
    TickPayload,
)
from clmm_router.models.types import I128, U64, U128, Pubkey, TickIndex

__all__ = [
    # Types
    "U64",
    "U128",
    "I128",
    "TickIndex",
    "Pubkey",
    # Payloads
    "MintPayload",
    "PoolSnapshotPayload",
    "TickPayload",
    "TickArrayPayload",
    "PoolBundlePayload",
]
