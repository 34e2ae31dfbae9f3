"""Tests for the single-range swap step."""

import pytest

from clmm_router.constants import Q64
from clmm_router.errors import MathOverflow
from clmm_router.math.swap_math import SwapStep, compute_swap_step

LIQUIDITY = 1000


class TestExactInputStep:
    """Tests for compute_swap_step with exact input."""

    def test_reaches_target(self):
        """Enough input moves the price all the way to the target."""
        step = compute_swap_step(Q64, 2 * Q64, LIQUIDITY, 2000, 0, exact_in=True)
        assert step == SwapStep(sqrt_price_next=2 * Q64, amount_in=1000, amount_out=500, fee_amount=0)

    def test_reaches_target_with_fee(self):
        """Fee on a completed step is charged on the amount that moved the price."""
        step = compute_swap_step(Q64, 2 * Q64, LIQUIDITY, 2000, 25, exact_in=True)
        assert step.sqrt_price_next == 2 * Q64
        assert step.amount_in == 1000
        assert step.fee_amount == 3  # ceil(1000 * 25 / 9975)
        assert step.amount_in_with_fee == 1003

    def test_stops_short_of_target(self):
        step = compute_swap_step(Q64, 2 * Q64, LIQUIDITY, 500, 0, exact_in=True)
        assert step.sqrt_price_next == 3 * Q64 // 2
        assert step.amount_in == 500
        assert step.amount_out == 333
        assert step.fee_amount == 0

    def test_partial_step_consumes_all_input(self):
        """Leftover input of a partial step is kept as fee."""
        step = compute_swap_step(Q64, 2 * Q64, LIQUIDITY, 500, 30, exact_in=True)
        assert step.amount_in_with_fee == 500
        assert step.fee_amount >= 1

    def test_a_to_b_direction(self):
        """Target below current price swaps token A in for token B."""
        step = compute_swap_step(2 * Q64, Q64, LIQUIDITY, 10_000, 0, exact_in=True)
        assert step.sqrt_price_next == Q64
        assert step.amount_in == 500
        assert step.amount_out == 1000


class TestExactOutputStep:
    """Tests for compute_swap_step with exact output."""

    def test_reaches_target(self):
        step = compute_swap_step(Q64, 2 * Q64, LIQUIDITY, 10_000, 0, exact_in=False)
        assert step.sqrt_price_next == 2 * Q64
        assert step.amount_out == 500
        assert step.amount_in == 1000

    def test_stops_short_of_target(self):
        """Output is satisfied exactly and input is rounded against the trader."""
        step = compute_swap_step(Q64, 2 * Q64, LIQUIDITY, 250, 0, exact_in=False)
        assert step.amount_out == 250
        assert step.amount_in == 334
        assert Q64 < step.sqrt_price_next < 2 * Q64

    def test_fee_added_on_top(self):
        step = compute_swap_step(Q64, 2 * Q64, LIQUIDITY, 10_000, 25, exact_in=False)
        assert step.amount_in == 1000
        assert step.fee_amount == 3


class TestStepInvariants:
    """Properties that hold for every step."""

    @pytest.mark.parametrize("amount", [1, 7, 333, 999, 1000, 5000])
    @pytest.mark.parametrize("fee_bps", [0, 1, 25, 100])
    def test_exact_in_never_exceeds_remaining(self, amount, fee_bps):
        step = compute_swap_step(Q64, 2 * Q64, LIQUIDITY, amount, fee_bps, exact_in=True)
        assert step.amount_in_with_fee <= amount

    @pytest.mark.parametrize("amount", [1, 7, 250, 499, 500, 5000])
    def test_exact_out_never_exceeds_remaining(self, amount):
        step = compute_swap_step(Q64, 2 * Q64, LIQUIDITY, amount, 25, exact_in=False)
        assert step.amount_out <= amount

    def test_price_never_passes_target(self):
        step = compute_swap_step(Q64, Q64 + 10**10, LIQUIDITY * 10**9, 10**15, 0, exact_in=True)
        assert step.sqrt_price_next == Q64 + 10**10

    @pytest.mark.parametrize("fee_bps", [-1, 10_000])
    def test_invalid_fee_rate_raises(self, fee_bps):
        with pytest.raises(MathOverflow):
            compute_swap_step(Q64, 2 * Q64, LIQUIDITY, 100, fee_bps, exact_in=True)
