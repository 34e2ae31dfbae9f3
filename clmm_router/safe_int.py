"""Checked integer wrapper for fixed-point arithmetic.

Python integers never wrap, so the risk in porting fixed-point math is not
silent overflow during a computation but a result that no longer fits the
width the protocol stores it in. SafeInt makes that explicit:

- Division by zero raises DivisionByZero
- Subtraction underflow raises Underflow
- Width violations raise WidthOverflow on to_u64() / to_u128()

All three are MathOverflow subclasses, so a kernel failure always surfaces
as MathOverflow to the simulator.

Usage pattern:
    from clmm_router.safe_int import S

    def next_price(sqrt_price: int, liquidity: int, amount: int) -> int:
        sp, liq = S(sqrt_price), S(liquidity)
        numerator = liq << 64
        return numerator.mul_div_ceil(sp, numerator + sp * amount).to_u128()
"""

from __future__ import annotations

from clmm_router.constants import U64_MAX, U128_MAX
from clmm_router.errors import MathOverflow


class SafeIntError(MathOverflow):
    """Base class for SafeInt arithmetic errors."""

    pass


class DivisionByZero(SafeIntError):
    """Division by zero."""

    pass


class Underflow(SafeIntError):
    """Subtraction would produce a negative result."""

    pass


class WidthOverflow(SafeIntError):
    """Value does not fit the requested unsigned width."""

    pass


class SafeInt:
    """Non-negative integer with checked arithmetic.

    Attributes:
        value: The underlying integer value (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeInt) -> None:
        if isinstance(value, SafeInt):
            self._value = value._value
        elif isinstance(value, int) and not isinstance(value, bool):
            self._value = value
        else:
            raise TypeError(f"SafeInt requires int, got {type(value).__name__}")

    @property
    def value(self) -> int:
        """The underlying integer value."""
        return self._value

    def __repr__(self) -> str:
        return f"SafeInt({self._value})"

    def __hash__(self) -> int:
        return hash(self._value)

    # --- Arithmetic ---

    def __add__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value + _extract_value(other))

    def __radd__(self, other: int) -> SafeInt:
        return SafeInt(other + self._value)

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        """Subtract other from self.

        Raises:
            Underflow: If result would be negative
        """
        other_val = _extract_value(other)
        result = self._value - other_val
        if result < 0:
            raise Underflow(f"Underflow: {self._value} - {other_val} = {result}")
        return SafeInt(result)

    def __rsub__(self, other: int) -> SafeInt:
        result = other - self._value
        if result < 0:
            raise Underflow(f"Underflow: {other} - {self._value} = {result}")
        return SafeInt(result)

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value * _extract_value(other))

    def __rmul__(self, other: int) -> SafeInt:
        return SafeInt(other * self._value)

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Integer division, rounding down.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Division by zero: {self._value} // 0")
        return SafeInt(self._value // other_val)

    def __lshift__(self, bits: int) -> SafeInt:
        return SafeInt(self._value << bits)

    def __rshift__(self, bits: int) -> SafeInt:
        return SafeInt(self._value >> bits)

    # --- Comparison ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeInt):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _extract_value(other)

    def __le__(self, other: SafeInt | int) -> bool:
        return self._value <= _extract_value(other)

    def __gt__(self, other: SafeInt | int) -> bool:
        return self._value > _extract_value(other)

    def __ge__(self, other: SafeInt | int) -> bool:
        return self._value >= _extract_value(other)

    def __int__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    # --- Named operations ---

    def ceiling_div(self, other: SafeInt | int) -> SafeInt:
        """Division rounding up.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Ceiling division by zero: {self._value}")
        return SafeInt(-(-self._value // other_val))

    def mul_div_floor(self, num: SafeInt | int, denom: SafeInt | int) -> SafeInt:
        """Compute floor(self * num / denom) without intermediate truncation."""
        return (self * num) // denom

    def mul_div_ceil(self, num: SafeInt | int, denom: SafeInt | int) -> SafeInt:
        """Compute ceil(self * num / denom) without intermediate truncation."""
        return (self * num).ceiling_div(denom)

    def to_u64(self) -> int:
        """Return the value, validating it fits in u64.

        Raises:
            WidthOverflow: If value is negative or exceeds 2^64-1
        """
        return _check_width(self._value, U64_MAX, "u64")

    def to_u128(self) -> int:
        """Return the value, validating it fits in u128.

        Raises:
            WidthOverflow: If value is negative or exceeds 2^128-1
        """
        return _check_width(self._value, U128_MAX, "u128")


def _check_width(value: int, max_value: int, name: str) -> int:
    if value < 0:
        raise WidthOverflow(f"Negative value cannot be {name}: {value}")
    if value > max_value:
        raise WidthOverflow(f"Value exceeds {name} max: {value}")
    return value


def _extract_value(x: SafeInt | int) -> int:
    if isinstance(x, SafeInt):
        return x._value
    return x


# Convenience alias for concise code
S = SafeInt
