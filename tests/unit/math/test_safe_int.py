"""Tests for SafeInt checked arithmetic wrapper."""

import pytest

from clmm_router.constants import U64_MAX, U128_MAX
from clmm_router.errors import MathOverflow
from clmm_router.safe_int import (
    DivisionByZero,
    S,
    SafeInt,
    SafeIntError,
    Underflow,
    WidthOverflow,
)


class TestSafeIntConstruction:
    """Tests for SafeInt construction."""

    def test_from_int(self):
        """SafeInt can be constructed from int."""
        assert SafeInt(42).value == 42

    def test_from_safeint(self):
        """SafeInt can be constructed from another SafeInt."""
        assert SafeInt(SafeInt(42)).value == 42

    def test_from_invalid_type_raises(self):
        """SafeInt rejects floats, strings and bools."""
        with pytest.raises(TypeError):
            SafeInt("42")  # type: ignore
        with pytest.raises(TypeError):
            SafeInt(3.14)  # type: ignore
        with pytest.raises(TypeError):
            SafeInt(True)

    def test_alias_s(self):
        """S is an alias for SafeInt."""
        assert S is SafeInt


class TestSafeIntArithmetic:
    """Tests for SafeInt arithmetic operations."""

    def test_add(self):
        assert (S(10) + S(5)).value == 15
        assert (S(10) + 5).value == 15
        assert (5 + S(10)).value == 15

    def test_sub(self):
        assert (S(10) - 4).value == 6
        assert (10 - S(4)).value == 6

    def test_sub_underflow_raises(self):
        """Subtraction below zero raises Underflow."""
        with pytest.raises(Underflow):
            S(5) - 10
        with pytest.raises(Underflow):
            5 - S(10)

    def test_mul_and_shift(self):
        assert (S(7) * 6).value == 42
        assert (S(1) << 64).value == 2**64
        assert (S(2**64) >> 63).value == 2

    def test_floordiv(self):
        assert (S(10) // 3).value == 3

    def test_floordiv_by_zero_raises(self):
        with pytest.raises(DivisionByZero):
            S(10) // 0

    def test_ceiling_div(self):
        """ceiling_div rounds up only when there is a remainder."""
        assert S(10).ceiling_div(3).value == 4
        assert S(9).ceiling_div(3).value == 3
        assert S(0).ceiling_div(3).value == 0

    def test_ceiling_div_by_zero_raises(self):
        with pytest.raises(DivisionByZero):
            S(10).ceiling_div(0)


class TestMulDiv:
    """Tests for full-precision multiply-then-divide."""

    def test_floor_and_ceil_differ_on_remainder(self):
        assert S(10).mul_div_floor(10, 3).value == 33
        assert S(10).mul_div_ceil(10, 3).value == 34

    def test_exact_division_rounds_the_same(self):
        assert S(12).mul_div_floor(5, 4).value == 15
        assert S(12).mul_div_ceil(5, 4).value == 15

    def test_no_intermediate_truncation(self):
        """Products beyond 256 bits are kept exactly before dividing."""
        big = U128_MAX
        assert S(big).mul_div_floor(big, big).value == big


class TestWidthChecks:
    """Tests for u64/u128 narrowing."""

    def test_to_u64_boundaries(self):
        assert S(0).to_u64() == 0
        assert S(U64_MAX).to_u64() == U64_MAX

    def test_to_u64_overflow_raises(self):
        with pytest.raises(WidthOverflow):
            S(U64_MAX + 1).to_u64()

    def test_to_u128_overflow_raises(self):
        with pytest.raises(WidthOverflow):
            S(U128_MAX + 1).to_u128()

    def test_negative_cannot_narrow(self):
        with pytest.raises(WidthOverflow):
            S(-1).to_u128()


class TestErrorHierarchy:
    """SafeInt errors surface as MathOverflow to callers."""

    @pytest.mark.parametrize("error_type", [DivisionByZero, Underflow, WidthOverflow])
    def test_subclasses_math_overflow(self, error_type):
        assert issubclass(error_type, SafeIntError)
        assert issubclass(error_type, MathOverflow)

    def test_comparisons_with_int(self):
        assert S(5) == 5
        assert S(5) < 6
        assert S(5) >= S(5)
        assert not S(0)
