"""Active-liquidity updates when the price crosses an initialized tick."""

from __future__ import annotations

from clmm_router.errors import MathOverflow
from clmm_router.safe_int import S


def add_liquidity_delta(liquidity: int, delta: int) -> int:
    """Apply a signed liquidity delta.

    Args:
        liquidity: Current active liquidity (u128)
        delta: Signed change, e.g. a tick's liquidity_net

    Returns:
        New active liquidity

    Raises:
        MathOverflow: If the result is negative or exceeds u128
    """
    if delta < 0:
        if -delta > liquidity:
            raise MathOverflow(f"Liquidity underflow: {liquidity} + ({delta})")
        return (S(liquidity) - (-delta)).to_u128()
    return (S(liquidity) + delta).to_u128()


__all__ = ["add_liquidity_delta"]
