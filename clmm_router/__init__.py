"""Concentrated-liquidity swap router.

Simulates swaps tick by tick against pool snapshots, selects the best pool
among candidates for a pair, and derives slippage-bounded execution
parameters for settlement.
"""

from clmm_router.clmm import (
    ClmmQuoter,
    MintInfo,
    PoolCandidate,
    PoolSnapshot,
    Quote,
    StopReason,
    SwapDirection,
    SwapMode,
    Tick,
    TickArray,
    simulate_swap,
)
from clmm_router.config import DEFAULT_ROUTER_CONFIG, RouterConfig
from clmm_router.errors import (
    ClmmRouterError,
    ExecutionReverted,
    InsufficientTickData,
    InvalidPriceLimit,
    InvalidSlippageConfig,
    InvalidSnapshot,
    InvalidSwapAmount,
    MathOverflow,
    NoLiquidityAvailable,
    StaleSnapshot,
    ZeroLiquidity,
)
from clmm_router.execution import ExecutionEnvelope, SlippagePolicy, build_execution_envelope
from clmm_router.routing import PoolRouter, RouteSelection, SwapRequest
from clmm_router.service import PreparedSwap, SwapService

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Pool model and simulation
    "MintInfo",
    "Tick",
    "TickArray",
    "PoolSnapshot",
    "PoolCandidate",
    "SwapMode",
    "SwapDirection",
    "StopReason",
    "Quote",
    "ClmmQuoter",
    "simulate_swap",
    # Routing
    "PoolRouter",
    "SwapRequest",
    "RouteSelection",
    # Execution
    "SlippagePolicy",
    "ExecutionEnvelope",
    "build_execution_envelope",
    # Service
    "SwapService",
    "PreparedSwap",
    # Config
    "RouterConfig",
    "DEFAULT_ROUTER_CONFIG",
    # Errors
    "ClmmRouterError",
    "MathOverflow",
    "InsufficientTickData",
    "ZeroLiquidity",
    "InvalidPriceLimit",
    "InvalidSnapshot",
    "NoLiquidityAvailable",
    "InvalidSlippageConfig",
    "InvalidSwapAmount",
    "ExecutionReverted",
    "StaleSnapshot",
]
