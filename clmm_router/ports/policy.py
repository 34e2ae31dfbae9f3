"""Slippage policy store port."""

from __future__ import annotations

from typing import Protocol

import structlog

from clmm_router.constants import DEFAULT_SLIPPAGE_BPS
from clmm_router.execution.slippage import SlippagePolicy

logger = structlog.get_logger()


class SlippagePolicyStore(Protocol):
    """Source of per-account slippage policies."""

    async def get_policy(self, account_id: str) -> SlippagePolicy:
        """Policy for an account; accounts without one get the default."""
        ...


class InMemorySlippagePolicyStore:
    """Policy store backed by a dict.

    Args:
        default_bps: Tolerance returned for accounts without a stored policy
    """

    def __init__(self, default_bps: int = DEFAULT_SLIPPAGE_BPS) -> None:
        self._default = SlippagePolicy(default_bps)
        self._policies: dict[str, SlippagePolicy] = {}

    async def get_policy(self, account_id: str) -> SlippagePolicy:
        return self._policies.get(account_id, self._default)

    def set_policy(self, account_id: str, bps: int) -> SlippagePolicy:
        """Store an account's tolerance.

        Raises:
            InvalidSlippageConfig: If bps is outside the allowed range
        """
        policy = SlippagePolicy(bps)
        self._policies[account_id] = policy
        logger.info("slippage_policy_set", owner=account_id, slippage_bps=bps)
        return policy


__all__ = ["SlippagePolicyStore", "InMemorySlippagePolicyStore"]
