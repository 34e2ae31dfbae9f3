"""Router configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from clmm_router.constants import DEFAULT_SLIPPAGE_BPS, MAX_SLIPPAGE_BPS, TICK_ARRAY_SIZE


@dataclass(frozen=True)
class RouterConfig:
    """Centralized configuration for routing and execution.

    Passed explicitly to the router and service; there is no global mutable
    configuration.

    Attributes:
        max_parallelism: Maximum pools fetched or simulated at once (default: 8)
        per_pool_timeout_seconds: Budget for one pool's fetch and simulation
            (default: 5.0). A pool that exceeds it is dropped.
        default_slippage_bps: Tolerance for accounts without a stored policy
            (default: 500)
        tick_array_size: Ticks per tick array (default: 60)
    """

    max_parallelism: int = 8
    per_pool_timeout_seconds: float = 5.0
    default_slippage_bps: int = DEFAULT_SLIPPAGE_BPS
    tick_array_size: int = TICK_ARRAY_SIZE

    def __post_init__(self) -> None:
        if self.max_parallelism < 1:
            raise ValueError(f"max_parallelism must be >= 1, got {self.max_parallelism}")
        if self.per_pool_timeout_seconds <= 0:
            raise ValueError(
                f"per_pool_timeout_seconds must be positive, got {self.per_pool_timeout_seconds}"
            )
        if not 0 <= self.default_slippage_bps <= MAX_SLIPPAGE_BPS:
            raise ValueError(
                f"default_slippage_bps must be in [0, {MAX_SLIPPAGE_BPS}], "
                f"got {self.default_slippage_bps}"
            )
        if self.tick_array_size < 1:
            raise ValueError(f"tick_array_size must be >= 1, got {self.tick_array_size}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> RouterConfig:
        """Build a config from environment variables, falling back to defaults.

        - CLMM_ROUTER_MAX_PARALLELISM
        - CLMM_ROUTER_POOL_TIMEOUT (seconds)
        - CLMM_ROUTER_DEFAULT_SLIPPAGE_BPS
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            max_parallelism=int(env.get("CLMM_ROUTER_MAX_PARALLELISM", defaults.max_parallelism)),
            per_pool_timeout_seconds=float(
                env.get("CLMM_ROUTER_POOL_TIMEOUT", defaults.per_pool_timeout_seconds)
            ),
            default_slippage_bps=int(
                env.get("CLMM_ROUTER_DEFAULT_SLIPPAGE_BPS", defaults.default_slippage_bps)
            ),
        )


# Default configuration instance
DEFAULT_ROUTER_CONFIG = RouterConfig()

__all__ = ["RouterConfig", "DEFAULT_ROUTER_CONFIG"]
