"""Concentrated-liquidity pool model and swap simulation."""

from clmm_router.clmm.parsing import (
    parse_pool_bundle,
    parse_pool_snapshot,
    parse_tick_array,
    parse_tick_arrays,
)
from clmm_router.clmm.pool import MintInfo, PoolCandidate, PoolSnapshot, Tick, TickArray
from clmm_router.clmm.quote import Quote, StopReason, SwapDirection, SwapMode
from clmm_router.clmm.quoter import ClmmQuoter, simulate_swap
from clmm_router.clmm.tick_array import TickArraySequence, TickBoundary

__all__ = [
    # Pool model
    "MintInfo",
    "Tick",
    "TickArray",
    "PoolSnapshot",
    "PoolCandidate",
    # Simulation
    "SwapMode",
    "SwapDirection",
    "StopReason",
    "Quote",
    "TickArraySequence",
    "TickBoundary",
    "ClmmQuoter",
    "simulate_swap",
    # Parsing
    "parse_pool_snapshot",
    "parse_tick_array",
    "parse_tick_arrays",
    "parse_pool_bundle",
]
