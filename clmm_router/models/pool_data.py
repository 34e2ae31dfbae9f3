"""Pydantic models for raw pool and tick-array payloads.

These mirror what a pool index or RPC layer returns. They are validated
for shape and integer ranges here; cross-field checks (tick alignment,
swap status, mint decimals) happen in clmm_router.clmm.parsing.
"""

from pydantic import BaseModel, Field

from clmm_router.models.types import I128, U128, Pubkey, TickIndex


class MintPayload(BaseModel):
    """Token mint reference with decimal precision."""

    address: Pubkey
    decimals: int = Field(ge=0, le=18)


class PoolSnapshotPayload(BaseModel):
    """Raw concentrated-liquidity pool state.

    Swap status may arrive as an explicit swapEnabled flag or as the
    protocol's status bitfield, where bit 0 set means swaps are enabled.
    """

    pool_id: Pubkey = Field(alias="id")
    mint_a: MintPayload = Field(alias="mintA")
    mint_b: MintPayload = Field(alias="mintB")
    vault_a: Pubkey = Field(alias="vaultA")
    vault_b: Pubkey = Field(alias="vaultB")
    tick_current: TickIndex = Field(alias="tickCurrent")
    tick_spacing: int = Field(alias="tickSpacing", gt=0, le=65535)
    sqrt_price_x64: U128 = Field(alias="sqrtPriceX64")
    liquidity: U128
    fee_rate_bps: int = Field(alias="feeRateBps", ge=0, lt=10_000)
    swap_enabled: bool | None = Field(default=None, alias="swapEnabled")
    status: int | None = Field(default=None, ge=0, le=255)

    model_config = {"populate_by_name": True}


class TickPayload(BaseModel):
    """A single tick entry. initialized defaults to liquidityGross > 0."""

    tick: int
    liquidity_net: I128 = Field(default="0", alias="liquidityNet")
    liquidity_gross: U128 = Field(default="0", alias="liquidityGross")
    initialized: bool | None = None

    model_config = {"populate_by_name": True}

    @property
    def is_initialized(self) -> bool:
        if self.initialized is not None:
            return self.initialized
        return int(self.liquidity_gross) > 0


class TickArrayPayload(BaseModel):
    """A tick array: aligned start index plus its ticks."""

    start_tick_index: int = Field(alias="startTickIndex")
    ticks: list[TickPayload] = Field(default_factory=list)

    model_config = {"populate_by_name": True}


class PoolBundlePayload(BaseModel):
    """A pool together with the tick arrays fetched for it.

    tickArrays is None when the source has no bundle for the pool.
    """

    pool: PoolSnapshotPayload
    tick_arrays: list[TickArrayPayload] | None = Field(default=None, alias="tickArrays")

    model_config = {"populate_by_name": True}


__all__ = [
    "MintPayload",
    "PoolSnapshotPayload",
    "TickPayload",
    "TickArrayPayload",
    "PoolBundlePayload",
]
