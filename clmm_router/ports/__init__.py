"""Interfaces to the external collaborators: pool data, policies, settlement."""

from clmm_router.ports.policy import InMemorySlippagePolicyStore, SlippagePolicyStore
from clmm_router.ports.settlement import SettlementPort, SettlementResult, SimulatedSettlementPort
from clmm_router.ports.snapshot import InMemorySnapshotProvider, SnapshotProvider

__all__ = [
    "SnapshotProvider",
    "InMemorySnapshotProvider",
    "SlippagePolicyStore",
    "InMemorySlippagePolicyStore",
    "SettlementPort",
    "SettlementResult",
    "SimulatedSettlementPort",
]
