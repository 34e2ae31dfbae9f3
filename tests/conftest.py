"""Pytest configuration and fixtures."""

import pytest

from clmm_router.clmm.pool import PoolCandidate
from clmm_router.config import RouterConfig
from clmm_router.ports.policy import InMemorySlippagePolicyStore
from clmm_router.ports.settlement import SimulatedSettlementPort
from clmm_router.ports.snapshot import InMemorySnapshotProvider
from clmm_router.routing.router import PoolRouter
from clmm_router.service import SwapService
from tests.helpers import make_candidate


@pytest.fixture
def wide_candidate() -> PoolCandidate:
    """A pool at tick 0 with one wide position and default fee."""
    return make_candidate("PoolA")


@pytest.fixture
def zero_fee_candidate() -> PoolCandidate:
    """A pool at tick 0 with one wide position and no fee."""
    return make_candidate("PoolZ", fee_rate_bps=0)


@pytest.fixture
def router_config() -> RouterConfig:
    return RouterConfig(max_parallelism=4, per_pool_timeout_seconds=2.0)


@pytest.fixture
def pool_router(router_config: RouterConfig) -> PoolRouter:
    return PoolRouter(config=router_config)


@pytest.fixture
def market() -> InMemorySnapshotProvider:
    """Four SOL/USDC pools covering the routing scenarios.

    - PoolA: 5 bps fee, full tick data (best eligible)
    - PoolB: 30 bps fee, full tick data
    - PoolC: no fee, deepest liquidity, swaps disabled
    - PoolD: no fee, only the current tick array supplied
    """
    return InMemorySnapshotProvider(
        [
            make_candidate("PoolA", fee_rate_bps=5),
            make_candidate("PoolB", fee_rate_bps=30),
            make_candidate(
                "PoolC",
                positions=[(-6000, 6000, 10**13)],
                fee_rate_bps=0,
                swap_enabled=False,
            ),
            make_candidate("PoolD", fee_rate_bps=0, array_starts=[0]),
        ]
    )


@pytest.fixture
def policy_store() -> InMemorySlippagePolicyStore:
    return InMemorySlippagePolicyStore()


@pytest.fixture
def swap_service(
    market: InMemorySnapshotProvider,
    policy_store: InMemorySlippagePolicyStore,
    pool_router: PoolRouter,
) -> SwapService:
    return SwapService(
        provider=market,
        policy_store=policy_store,
        settlement=SimulatedSettlementPort(market),
        router=pool_router,
        config=pool_router.config,
    )
