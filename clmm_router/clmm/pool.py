"""Immutable pool and tick-array snapshots for concentrated-liquidity pools."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class MintInfo:
    """A token mint and its decimal precision."""

    address: str
    decimals: int

    def to_ui_amount(self, raw_amount: int) -> Decimal:
        """Convert a raw integer amount to UI units (e.g. lamports -> SOL)."""
        return Decimal(raw_amount).scaleb(-self.decimals)


@dataclass(frozen=True)
class Tick:
    """A single tick inside a tick array.

    Attributes:
        index: Tick index (a multiple of the pool's tick spacing)
        liquidity_net: Signed liquidity change when crossing upward
        liquidity_gross: Total liquidity referencing this tick
        initialized: True if any position uses this tick as a bound
    """

    index: int
    liquidity_net: int = 0
    liquidity_gross: int = 0
    initialized: bool = False


@dataclass(frozen=True)
class TickArray:
    """A fixed-size aligned window of consecutive ticks.

    Only initialized ticks need to be listed; absent indices are
    uninitialized.
    """

    start_tick_index: int
    ticks: tuple[Tick, ...] = ()

    def initialized_ticks(self) -> list[Tick]:
        """Initialized ticks ordered by index."""
        return sorted((t for t in self.ticks if t.initialized), key=lambda t: t.index)


@dataclass(frozen=True)
class PoolSnapshot:
    """Point-in-time state of a concentrated-liquidity pool.

    Never mutated by the quoter or router; one snapshot is read per request.

    Attributes:
        pool_id: Pool account address
        mint_a: Token A (the price is B per A)
        mint_b: Token B
        vault_a: Pool vault holding token A
        vault_b: Pool vault holding token B
        current_tick: Tick containing the current price
        tick_spacing: Distance between usable ticks
        sqrt_price_x64: sqrt(price) * 2^64
        liquidity: Active liquidity at the current tick
        fee_rate_bps: Trade fee in basis points of the input
        swap_enabled: Whether the pool currently accepts swaps
    """

    pool_id: str
    mint_a: MintInfo
    mint_b: MintInfo
    vault_a: str
    vault_b: str
    current_tick: int
    tick_spacing: int
    sqrt_price_x64: int
    liquidity: int
    fee_rate_bps: int
    swap_enabled: bool = True

    def has_mint(self, mint: str) -> bool:
        return mint in (self.mint_a.address, self.mint_b.address)

    def is_a_to_b(self, input_mint: str) -> bool:
        """Direction flag for a swap paying `input_mint` into the pool."""
        if input_mint == self.mint_a.address:
            return True
        if input_mint == self.mint_b.address:
            return False
        raise ValueError(f"Mint {input_mint} not in pool {self.pool_id}")

    def mints_for(self, a_to_b: bool) -> tuple[MintInfo, MintInfo]:
        """(input mint, output mint) for a swap direction."""
        if a_to_b:
            return self.mint_a, self.mint_b
        return self.mint_b, self.mint_a


@dataclass(frozen=True)
class PoolCandidate:
    """A pool snapshot paired with the tick arrays supplied for it.

    tick_arrays is None when no bundle was supplied at all, which makes the
    pool ineligible for routing.
    """

    pool: PoolSnapshot
    tick_arrays: tuple[TickArray, ...] | None = field(default=None)

    @property
    def pool_id(self) -> str:
        return self.pool.pool_id


__all__ = ["MintInfo", "Tick", "TickArray", "PoolSnapshot", "PoolCandidate"]
