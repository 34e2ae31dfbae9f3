"""Shared type definitions for pool wire models.

Amounts, sqrt prices and liquidity travel as decimal strings because they
exceed the range JSON numbers can carry exactly. Integers are accepted too.
"""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from clmm_router.constants import MAX_TICK, MIN_TICK, U64_MAX, U128_MAX

I128_MIN = -(2**127)
I128_MAX = 2**127 - 1


def _decimal_int(value: Any, type_name: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{type_name} must be string or int, got bool")
    if isinstance(value, int):
        return value
    if not isinstance(value, str):
        raise ValueError(f"{type_name} must be string or int, got {type(value).__name__}")
    try:
        return int(value)
    except ValueError as err:
        raise ValueError(f"{type_name} must be a decimal integer string: '{value}'") from err


def _validate_unsigned(value: Any, max_value: int, type_name: str) -> str:
    int_value = _decimal_int(value, type_name)
    if int_value < 0:
        raise ValueError(f"{type_name} cannot be negative: {value}")
    if int_value > max_value:
        raise ValueError(f"{type_name} overflow: {value}")
    return str(int_value)


def validate_u64(value: Any) -> str:
    """Validate a u64 decimal string (or int) and return it as a string.

    Raises:
        ValueError: If value is not a non-negative integer within u64 range
    """
    return _validate_unsigned(value, U64_MAX, "U64")


def validate_u128(value: Any) -> str:
    """Validate a u128 decimal string (or int) and return it as a string."""
    return _validate_unsigned(value, U128_MAX, "U128")


def validate_i128(value: Any) -> str:
    """Validate a signed 128-bit decimal string (liquidity_net can be negative)."""
    int_value = _decimal_int(value, "I128")
    if not I128_MIN <= int_value <= I128_MAX:
        raise ValueError(f"I128 out of range: {value}")
    return str(int_value)


# 64-bit unsigned amount as decimal string
U64 = Annotated[
    str,
    BeforeValidator(validate_u64),
    Field(description="64-bit unsigned integer as decimal string"),
]

# 128-bit unsigned value (sqrt price, liquidity) as decimal string
U128 = Annotated[
    str,
    BeforeValidator(validate_u128),
    Field(description="128-bit unsigned integer as decimal string"),
]

# Signed 128-bit liquidity delta as decimal string
I128 = Annotated[
    str,
    BeforeValidator(validate_i128),
    Field(description="128-bit signed integer as decimal string"),
]

# Tick index within the supported range
TickIndex = Annotated[int, Field(ge=MIN_TICK, le=MAX_TICK)]

# Account address (pool, mint, vault)
Pubkey = Annotated[str, Field(min_length=1, max_length=64)]

__all__ = [
    "U64",
    "U128",
    "I128",
    "TickIndex",
    "Pubkey",
    "validate_u64",
    "validate_u128",
    "validate_i128",
]
