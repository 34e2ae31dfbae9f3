"""Error classes for quoting, routing and execution.

Per-pool errors (MathOverflow, InsufficientTickData, ZeroLiquidity,
InvalidSnapshot) are recovered by the router and turned into exclusion
reasons. Request-level errors (NoLiquidityAvailable, InvalidSlippageConfig,
InvalidSwapAmount) and settlement errors are surfaced to the caller.
"""


class ClmmRouterError(Exception):
    """Base error for all routing operations."""

    pass


class MathOverflow(ClmmRouterError, ArithmeticError):
    """Fixed-point result does not fit its integer width."""

    pass


class InsufficientTickData(ClmmRouterError):
    """Supplied tick arrays do not cover the range the swap needs."""

    pass


class ZeroLiquidity(ClmmRouterError):
    """Active liquidity is zero while an amount is still outstanding."""

    pass


class InvalidPriceLimit(ClmmRouterError, ValueError):
    """Price limit is on the wrong side of the current price or out of range."""

    pass


class InvalidSnapshot(ClmmRouterError, ValueError):
    """Pool or tick-array payload failed validation at the provider boundary."""

    pass


class NoLiquidityAvailable(ClmmRouterError):
    """No candidate pool produced a complete quote."""

    pass


class InvalidSlippageConfig(ClmmRouterError, ValueError):
    """Slippage tolerance outside the allowed basis-point range."""

    pass


class InvalidSwapAmount(ClmmRouterError, ValueError):
    """Swap amount or expected counter-amount is zero or negative."""

    pass


class ExecutionReverted(ClmmRouterError):
    """Settlement rejected the swap because the threshold was violated."""

    pass


class StaleSnapshot(ClmmRouterError):
    """Pool state at settlement no longer matches the routed snapshot."""

    pass


__all__ = [
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
