"""End-to-end swap flow: route, apply slippage policy, settle.

    provider -> PoolRouter -> RouteSelection
    policy store -> SlippagePolicy
    RouteSelection + SlippagePolicy -> ExecutionEnvelope -> SettlementPort

Each call is stateless; nothing is retained between requests.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from clmm_router.clmm.quote import SwapMode
from clmm_router.config import DEFAULT_ROUTER_CONFIG, RouterConfig
from clmm_router.execution.envelope import ExecutionEnvelope, build_execution_envelope
from clmm_router.execution.slippage import SlippagePolicy
from clmm_router.ports.policy import SlippagePolicyStore
from clmm_router.ports.settlement import SettlementPort, SettlementResult
from clmm_router.ports.snapshot import SnapshotProvider
from clmm_router.routing.router import PoolRouter
from clmm_router.routing.types import RouteSelection, SwapRequest

logger = structlog.get_logger()


@dataclass(frozen=True)
class PreparedSwap:
    """A routed swap with its slippage-bounded envelope, ready to settle."""

    selection: RouteSelection
    policy: SlippagePolicy
    envelope: ExecutionEnvelope


class SwapService:
    """Routes, bounds and settles swaps through the configured ports.

    Args:
        provider: Pool snapshot source
        policy_store: Per-account slippage policies
        settlement: Executor for prepared swaps
        router: Pool router; built from config if omitted
        config: Router configuration
    """

    def __init__(
        self,
        provider: SnapshotProvider,
        policy_store: SlippagePolicyStore,
        settlement: SettlementPort,
        router: PoolRouter | None = None,
        config: RouterConfig = DEFAULT_ROUTER_CONFIG,
    ) -> None:
        self.provider = provider
        self.policy_store = policy_store
        self.settlement = settlement
        self.config = config
        self.router = router if router is not None else PoolRouter(config=config)

    async def quote(
        self,
        input_mint: str,
        output_mint: str,
        mode: SwapMode,
        amount: int,
        sqrt_price_limit_x64: int = 0,
    ) -> RouteSelection:
        """Pick the best pool for a swap.

        Raises:
            InvalidSwapAmount: If amount is not a positive u64
            NoLiquidityAvailable: If no pool can fill the swap
        """
        request = SwapRequest(input_mint, output_mint, mode, amount, sqrt_price_limit_x64)
        return await self.router.route(self.provider, request)

    async def prepare(
        self,
        account_id: str,
        input_mint: str,
        output_mint: str,
        mode: SwapMode,
        amount: int,
        sqrt_price_limit_x64: int = 0,
    ) -> PreparedSwap:
        """Route a swap and bound it by the account's slippage policy."""
        selection = await self.quote(input_mint, output_mint, mode, amount, sqrt_price_limit_x64)
        policy = await self.policy_store.get_policy(account_id)
        envelope = build_execution_envelope(selection, policy)
        return PreparedSwap(selection=selection, policy=policy, envelope=envelope)

    async def execute(
        self,
        account_id: str,
        input_mint: str,
        output_mint: str,
        mode: SwapMode,
        amount: int,
        sqrt_price_limit_x64: int = 0,
    ) -> SettlementResult:
        """Prepare a swap and hand it to settlement.

        Settlement errors (ExecutionReverted, StaleSnapshot) propagate unchanged.
        """
        prepared = await self.prepare(
            account_id, input_mint, output_mint, mode, amount, sqrt_price_limit_x64
        )
        result = await self.settlement.execute(prepared.envelope)
        logger.info(
            "swap_executed",
            account_id=account_id,
            pool_id=result.pool_id,
            amount_in=result.amount_in,
            amount_out=result.amount_out,
            realized_slippage_bps=result.realized_slippage_bps(
                prepared.envelope.expected_other_amount, prepared.envelope.is_exact_in
            ),
        )
        return result


__all__ = ["SwapService", "PreparedSwap"]
