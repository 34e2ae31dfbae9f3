"""Tests for the tick-stepping swap simulator."""

import math

import pytest

from clmm_router.clmm.pool import PoolCandidate
from clmm_router.clmm.quote import StopReason, SwapDirection, SwapMode
from clmm_router.clmm.quoter import (
    ClmmQuoter,
    price_impact_bps,
    resolve_price_limit,
    simulate_swap,
)
from clmm_router.constants import Q64, U64_MAX
from clmm_router.errors import (
    InsufficientTickData,
    InvalidPriceLimit,
    InvalidSwapAmount,
    MathOverflow,
    ZeroLiquidity,
)
from clmm_router.math.tick_math import (
    MAX_SQRT_PRICE_X64,
    MIN_SQRT_PRICE_X64,
    tick_to_sqrt_price_x64,
)
from tests.helpers import make_candidate

L = 10**12


@pytest.fixture
def quoter() -> ClmmQuoter:
    return ClmmQuoter()


@pytest.fixture
def crossing_candidate() -> PoolCandidate:
    """Wide position plus an inner position over [-600, 600], no fee."""
    return make_candidate(
        "PoolX",
        positions=[(-6000, 6000, L), (-600, 600, L)],
        fee_rate_bps=0,
    )


class TestWithinOneRange:
    """Swaps that never leave the current price range."""

    def test_exact_in_b_to_a(self, quoter, zero_fee_candidate):
        quote = quoter.quote_exact_input(zero_fee_candidate, a_to_b=False, amount_in=1_000_000)
        assert quote.amount_in == 1_000_000
        assert quote.amount_out == 999_999
        assert quote.fee_paid == 0
        assert quote.tick_after == 0
        assert quote.price_impact_bps == 1
        assert quote.crossed_tick_array_starts == (0,)
        assert quote.complete
        assert quote.stop_reason == StopReason.FILLED

    def test_exact_in_with_fee(self, quoter, wide_candidate):
        quote = quoter.quote_exact_input(wide_candidate, a_to_b=False, amount_in=1_000_000)
        assert quote.amount_in == 1_000_000
        assert quote.fee_paid == 2_500
        assert quote.amount_out == 997_499

    def test_exact_out_with_fee(self, quoter, wide_candidate):
        """Asking for the exact-in output back costs the same input."""
        quote = quoter.quote_exact_output(wide_candidate, a_to_b=False, amount_out=997_499)
        assert quote.amount_out == 997_499
        assert quote.amount_in == 1_000_000
        assert quote.complete

    def test_exact_out_no_fee(self, quoter, zero_fee_candidate):
        quote = quoter.quote_exact_output(zero_fee_candidate, a_to_b=False, amount_out=999_999)
        assert quote.amount_in == 1_000_000
        assert quote.fee_paid == 0

    def test_a_to_b_lowers_price(self, quoter, wide_candidate):
        quote = quoter.quote_exact_input(wide_candidate, a_to_b=True, amount_in=1_000_000)
        assert quote.sqrt_price_after < Q64
        assert quote.tick_after < 0
        # The first unit of movement leaves tick 0 for tick -1, in the array below
        assert quote.tick_after == -1
        assert quote.crossed_tick_array_starts == (0, -600)

    def test_snapshot_is_not_mutated(self, quoter, wide_candidate):
        before = wide_candidate.pool
        quoter.quote_exact_input(wide_candidate, a_to_b=False, amount_in=10**9)
        assert wide_candidate.pool == before
        assert wide_candidate.pool.sqrt_price_x64 == Q64


class TestTickCrossing:
    """Swaps that cross initialized ticks and change active liquidity."""

    def test_b_to_a_crosses_upward(self, quoter, crossing_candidate):
        quote = quoter.quote_exact_input(crossing_candidate, a_to_b=False, amount_in=10**11)
        assert quote.complete
        assert quote.amount_in == 10**11
        assert quote.crossed_tick_array_starts == (0, 600, 1200)
        assert 1200 <= quote.tick_after < 1800

    def test_a_to_b_crosses_downward(self, quoter, crossing_candidate):
        quote = quoter.quote_exact_input(crossing_candidate, a_to_b=True, amount_in=10**11)
        assert quote.complete
        assert quote.crossed_tick_array_starts == (0, -600, -1200, -1800)
        assert -1800 <= quote.tick_after < -1200

    def test_exact_out_across_ticks_delivers_exact_amount(self, quoter, crossing_candidate):
        quote = quoter.quote_exact_output(crossing_candidate, a_to_b=False, amount_out=8 * 10**10)
        assert quote.complete
        assert quote.amount_out == 8 * 10**10
        assert quote.tick_after > 600
        assert 600 in quote.crossed_tick_array_starts

    def test_liquidity_drop_worsens_rate(self, quoter, crossing_candidate):
        """Once the inner position is left behind, each unit of input buys less."""
        small = quoter.quote_exact_input(crossing_candidate, a_to_b=False, amount_in=10**10)
        large = quoter.quote_exact_input(crossing_candidate, a_to_b=False, amount_in=10**11)
        assert large.amount_out * small.amount_in < small.amount_out * large.amount_in

    def test_zero_liquidity_after_crossing_raises(self, quoter):
        candidate = make_candidate("PoolZ", positions=[(-600, 600, L)], fee_rate_bps=0)
        with pytest.raises(ZeroLiquidity):
            quoter.quote_exact_input(candidate, a_to_b=False, amount_in=10**11)


class TestIncompleteQuotes:
    """Simulations that stop before the amount is satisfied."""

    def test_tick_data_exhausted(self, quoter):
        candidate = make_candidate("PoolD", fee_rate_bps=0, array_starts=[0])
        quote = quoter.quote_exact_input(candidate, a_to_b=False, amount_in=10**11)
        assert not quote.complete
        assert quote.stop_reason == StopReason.TICK_DATA_EXHAUSTED
        assert quote.tick_after == 600
        assert quote.sqrt_price_after == tick_to_sqrt_price_x64(600)
        assert 0 < quote.amount_in < 10**11
        assert quote.crossed_tick_array_starts == (0,)

    def test_price_on_lowest_covered_tick_cannot_move_down(self, quoter):
        """The price sits exactly on the start of the only array supplied."""
        candidate = make_candidate("PoolD", fee_rate_bps=0, array_starts=[0])
        quote = quoter.quote_exact_input(candidate, a_to_b=True, amount_in=10**6)
        assert not quote.complete
        assert quote.stop_reason == StopReason.TICK_DATA_EXHAUSTED
        assert quote.amount_in == 0
        assert quote.amount_out == 0

    def test_price_limit_stops_swap(self, quoter, zero_fee_candidate):
        limit = tick_to_sqrt_price_x64(10)
        quote = quoter.quote_exact_input(
            zero_fee_candidate, a_to_b=False, amount_in=10**9, sqrt_price_limit_x64=limit
        )
        assert not quote.complete
        assert quote.stop_reason == StopReason.PRICE_LIMIT
        assert quote.sqrt_price_after == limit
        assert quote.tick_after == 10
        assert quote.amount_in < 10**9

    def test_require_complete_raises_on_partial(self, quoter):
        candidate = make_candidate("PoolD", fee_rate_bps=0, array_starts=[0])
        quote = quoter.quote_exact_input(candidate, a_to_b=False, amount_in=10**11)
        with pytest.raises(InsufficientTickData):
            quote.require_complete()

    def test_require_complete_returns_self(self, quoter, wide_candidate):
        quote = quoter.quote_exact_input(wide_candidate, a_to_b=False, amount_in=10**6)
        assert quote.require_complete() is quote


class TestInputValidation:
    """Tests for rejected simulation inputs."""

    @pytest.mark.parametrize("amount", [0, -1])
    def test_non_positive_amount_raises(self, quoter, wide_candidate, amount):
        with pytest.raises(InvalidSwapAmount):
            quoter.quote_exact_input(wide_candidate, a_to_b=False, amount_in=amount)

    def test_amount_beyond_u64_raises(self, wide_candidate):
        with pytest.raises(MathOverflow):
            simulate_swap(
                wide_candidate.pool,
                wide_candidate.tick_arrays,
                SwapDirection(SwapMode.EXACT_IN, False),
                U64_MAX + 1,
            )

    def test_missing_bundle_raises(self, quoter, wide_candidate):
        candidate = PoolCandidate(wide_candidate.pool, None)
        with pytest.raises(InsufficientTickData):
            quoter.quote_exact_input(candidate, a_to_b=False, amount_in=10**6)

    def test_missing_current_array_raises(self, quoter):
        candidate = make_candidate("PoolA", array_starts=[600])
        with pytest.raises(InsufficientTickData):
            quoter.quote_exact_input(candidate, a_to_b=False, amount_in=10**6)

    def test_limit_on_wrong_side_raises(self, quoter, wide_candidate):
        with pytest.raises(InvalidPriceLimit):
            quoter.quote_exact_input(
                wide_candidate,
                a_to_b=False,
                amount_in=10**6,
                sqrt_price_limit_x64=tick_to_sqrt_price_x64(-10),
            )


class TestQuoteProperties:
    """Monotonicity and consistency across amounts."""

    def test_output_monotonic_in_input(self, quoter, crossing_candidate):
        amounts = [10**6, 10**8, 10**10, 5 * 10**10, 10**11]
        quotes = [
            quoter.quote_exact_input(crossing_candidate, a_to_b=False, amount_in=a) for a in amounts
        ]
        outs = [q.amount_out for q in quotes]
        impacts = [q.price_impact_bps for q in quotes]
        assert outs == sorted(outs)
        assert impacts == sorted(impacts)

    def test_required_input_monotonic_in_output(self, quoter, crossing_candidate):
        amounts = [10**6, 10**8, 10**10, 5 * 10**10, 8 * 10**10]
        inputs = [
            quoter.quote_exact_output(crossing_candidate, a_to_b=False, amount_out=a).amount_in
            for a in amounts
        ]
        assert inputs == sorted(inputs)

    @pytest.mark.parametrize(
        "pool_fixture,a_to_b,amount_in",
        [
            ("zero_fee_candidate", False, 2),
            ("zero_fee_candidate", True, 100),
            ("wide_candidate", False, 1_000),
            ("wide_candidate", True, 10**7),
            ("crossing_candidate", True, 10**10),
            ("crossing_candidate", True, 10**11),
            ("crossing_candidate", False, 10**11),
        ],
    )
    def test_exact_out_round_trip_stays_close(
        self, request, quoter, pool_fixture, a_to_b, amount_in
    ):
        """Buying back the exact-in output costs X, up to a fee step's rounding."""
        candidate = request.getfixturevalue(pool_fixture)
        forward = quoter.quote_exact_input(candidate, a_to_b=a_to_b, amount_in=amount_in)
        assert forward.amount_out > 0

        backward = quoter.quote_exact_output(
            candidate, a_to_b=a_to_b, amount_out=forward.amount_out
        )
        tolerance = max(2, math.ceil(amount_in * candidate.pool.fee_rate_bps / 10_000) + 1)
        assert backward.complete
        assert backward.amount_out == forward.amount_out
        assert backward.amount_in > 0
        assert abs(amount_in - backward.amount_in) <= tolerance

    @pytest.mark.parametrize("amount", [10**3, 10**6, 10**9])
    def test_fee_within_amount_in(self, quoter, wide_candidate, amount):
        quote = quoter.quote_exact_input(wide_candidate, a_to_b=True, amount_in=amount)
        assert 0 < quote.fee_paid < quote.amount_in


class TestPriceLimitResolution:
    """Tests for resolve_price_limit."""

    def test_zero_means_unbounded(self):
        assert resolve_price_limit(Q64, 0, a_to_b=True) == MIN_SQRT_PRICE_X64 + 1
        assert resolve_price_limit(Q64, 0, a_to_b=False) == MAX_SQRT_PRICE_X64 - 1

    def test_valid_limit_passes_through(self):
        assert resolve_price_limit(Q64, Q64 - 1, a_to_b=True) == Q64 - 1
        assert resolve_price_limit(Q64, Q64 + 1, a_to_b=False) == Q64 + 1

    @pytest.mark.parametrize(
        "limit,a_to_b",
        [
            (Q64, True),
            (Q64 + 1, True),
            (MIN_SQRT_PRICE_X64, True),
            (Q64, False),
            (Q64 - 1, False),
            (MAX_SQRT_PRICE_X64, False),
        ],
    )
    def test_invalid_limits_raise(self, limit, a_to_b):
        with pytest.raises(InvalidPriceLimit):
            resolve_price_limit(Q64, limit, a_to_b)


class TestPriceImpact:
    """Tests for price_impact_bps."""

    def test_no_move(self):
        assert price_impact_bps(Q64, Q64) == 0

    def test_rounds_up(self):
        assert price_impact_bps(Q64, Q64 + 1) == 1

    def test_symmetric_magnitude(self):
        assert price_impact_bps(Q64, Q64 + Q64 // 100) == 100
        assert price_impact_bps(Q64, Q64 - Q64 // 100) == 100
