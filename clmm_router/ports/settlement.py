"""Settlement port.

The router never builds settlement-layer transactions itself; it hands an
ExecutionEnvelope to a SettlementPort and surfaces the outcome unchanged.
Retrying with a fresh snapshot is left to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import structlog

from clmm_router.clmm.quoter import ClmmQuoter
from clmm_router.errors import ClmmRouterError, ExecutionReverted, StaleSnapshot
from clmm_router.execution.envelope import ExecutionEnvelope
from clmm_router.execution.slippage import realized_slippage_bps

from .snapshot import InMemorySnapshotProvider

logger = structlog.get_logger()


@dataclass(frozen=True)
class SettlementResult:
    """Amounts actually moved by a settled swap."""

    pool_id: str
    amount_in: int
    amount_out: int

    def realized_slippage_bps(self, expected_amount: int, exact_in: bool) -> int:
        """Slippage versus the quoted counter-amount, in bps.

        Compares amount_out for exact-in swaps and amount_in for exact-out.
        """
        actual = self.amount_out if exact_in else self.amount_in
        return realized_slippage_bps(expected_amount, actual, exact_in)


class SettlementPort(Protocol):
    """Executes a routed swap."""

    async def execute(self, envelope: ExecutionEnvelope) -> SettlementResult:
        """Settle the swap described by the envelope.

        Raises:
            ExecutionReverted: If the outcome violates envelope.threshold_amount
            StaleSnapshot: If the pool's state no longer supports the quote
        """
        ...


class SimulatedSettlementPort:
    """Settles by re-simulating against the provider's current pool state.

    Stands in for an on-chain executor: the swap succeeds only if a fresh
    simulation meets the envelope's threshold.

    Args:
        provider: Live pool state, looked up by pool id at execution time
        quoter: Simulator for the re-run
    """

    def __init__(self, provider: InMemorySnapshotProvider, quoter: ClmmQuoter | None = None):
        self.provider = provider
        self.quoter = quoter if quoter is not None else ClmmQuoter(provider.array_size)
        self.settled: list[SettlementResult] = []

    async def execute(self, envelope: ExecutionEnvelope) -> SettlementResult:
        candidate = self.provider.candidate(envelope.pool_id)
        if candidate is None:
            raise StaleSnapshot(f"Pool {envelope.pool_id} no longer exists")
        if not candidate.pool.swap_enabled:
            raise StaleSnapshot(f"Pool {envelope.pool_id} has swaps disabled")

        try:
            quote = self.quoter.quote(
                candidate, envelope.direction, envelope.amount, envelope.sqrt_price_limit_x64
            )
        except ClmmRouterError as err:
            raise StaleSnapshot(f"Pool {envelope.pool_id} state cannot fill the swap: {err}") from err
        if not quote.complete:
            raise StaleSnapshot(
                f"Pool {envelope.pool_id} cannot fill the swap ({quote.stop_reason.value})"
            )

        if envelope.is_exact_in:
            violated = quote.amount_out < envelope.threshold_amount
            actual = quote.amount_out
        else:
            violated = quote.amount_in > envelope.threshold_amount
            actual = quote.amount_in
        if violated:
            logger.warning(
                "swap_reverted",
                pool=envelope.pool_id,
                actual=actual,
                threshold=envelope.threshold_amount,
                exact_in=envelope.is_exact_in,
            )
            raise ExecutionReverted(
                f"Pool {envelope.pool_id}: {actual} violates threshold {envelope.threshold_amount}"
            )

        result = SettlementResult(
            pool_id=envelope.pool_id, amount_in=quote.amount_in, amount_out=quote.amount_out
        )
        self.settled.append(result)
        logger.info(
            "swap_settled",
            pool=envelope.pool_id,
            amount_in=result.amount_in,
            amount_out=result.amount_out,
            expected_amount=envelope.expected_other_amount,
            slippage_bps=envelope.slippage_bps,
            exact_in=envelope.is_exact_in,
        )
        return result


__all__ = ["SettlementResult", "SettlementPort", "SimulatedSettlementPort"]
