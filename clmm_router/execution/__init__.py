"""Execution parameter building from a selected route."""

from clmm_router.execution.envelope import ExecutionEnvelope, build_execution_envelope
from clmm_router.execution.slippage import (
    SlippagePolicy,
    compute_slippage_threshold,
    realized_slippage_bps,
    validate_slippage_bps,
)

__all__ = [
    "SlippagePolicy",
    "ExecutionEnvelope",
    "build_execution_envelope",
    "compute_slippage_threshold",
    "realized_slippage_bps",
    "validate_slippage_bps",
]
