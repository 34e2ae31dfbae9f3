"""Constant-liquidity price movement and token amount deltas.

Within a price range where active liquidity L is constant:

    amount_a = L * (sqrt_upper - sqrt_lower) / (sqrt_upper * sqrt_lower)
    amount_b = L * (sqrt_upper - sqrt_lower)

so moving by dx of token A changes 1/sqrt(P) by dx / L, and moving by dy of
token B changes sqrt(P) by dy / L. Prices are Q64.64; every division picks
its rounding direction so the pool never pays out more than it receives.
"""

from __future__ import annotations

from clmm_router.errors import MathOverflow
from clmm_router.safe_int import S

__all__ = [
    "get_amount_a_delta",
    "get_amount_b_delta",
    "get_next_sqrt_price_from_input",
    "get_next_sqrt_price_from_output",
]


def _amount_a_delta(sqrt_price_0: int, sqrt_price_1: int, liquidity: int, round_up: bool) -> int:
    lower, upper = sorted((sqrt_price_0, sqrt_price_1))
    if lower == 0:
        raise MathOverflow("Sqrt price must be positive")

    numerator_1 = S(liquidity) << 64
    numerator_2 = S(upper) - lower
    if round_up:
        return numerator_1.mul_div_ceil(numerator_2, upper).ceiling_div(lower).value
    return (numerator_1.mul_div_floor(numerator_2, upper) // lower).value


def _amount_b_delta(sqrt_price_0: int, sqrt_price_1: int, liquidity: int, round_up: bool) -> int:
    lower, upper = sorted((sqrt_price_0, sqrt_price_1))
    delta = S(upper) - lower
    if round_up:
        return S(liquidity).mul_div_ceil(delta, 1 << 64).value
    return S(liquidity).mul_div_floor(delta, 1 << 64).value


def get_amount_a_delta(sqrt_price_0: int, sqrt_price_1: int, liquidity: int, round_up: bool) -> int:
    """Amount of token A between two sqrt prices at constant liquidity.

    Args:
        sqrt_price_0: One bound of the range (Q64.64)
        sqrt_price_1: The other bound (Q64.64)
        liquidity: Active liquidity
        round_up: Round up for amounts the trader pays, down for amounts received

    Returns:
        Token A amount

    Raises:
        MathOverflow: If the amount does not fit in u64
    """
    return S(_amount_a_delta(sqrt_price_0, sqrt_price_1, liquidity, round_up)).to_u64()


def get_amount_b_delta(sqrt_price_0: int, sqrt_price_1: int, liquidity: int, round_up: bool) -> int:
    """Amount of token B between two sqrt prices at constant liquidity.

    Raises:
        MathOverflow: If the amount does not fit in u64
    """
    return S(_amount_b_delta(sqrt_price_0, sqrt_price_1, liquidity, round_up)).to_u64()


def _next_sqrt_price_from_amount_a_rounding_up(
    sqrt_price: int, liquidity: int, amount: int, add: bool
) -> int:
    """Price after adding (or removing) `amount` of token A.

    Always rounds up: adding A lowers the price, so rounding up keeps the
    price from moving further than the input pays for; removing A raises the
    price, so rounding up makes the trader pay at least enough.
    """
    if amount == 0:
        return sqrt_price

    numerator_1 = S(liquidity) << 64
    product = S(amount) * sqrt_price
    if add:
        denominator = numerator_1 + product
        return numerator_1.mul_div_ceil(sqrt_price, denominator).to_u128()

    if product >= numerator_1:
        raise MathOverflow("Output amount exceeds the token A reserve of the range")
    denominator = numerator_1 - product
    return numerator_1.mul_div_ceil(sqrt_price, denominator).to_u128()


def _next_sqrt_price_from_amount_b_rounding_down(
    sqrt_price: int, liquidity: int, amount: int, add: bool
) -> int:
    """Price after adding (or removing) `amount` of token B.

    Always rounds down, the conservative direction for both adding
    (price rises less) and removing (price falls further).
    """
    if add:
        quotient = (S(amount) << 64) // liquidity
        return (S(sqrt_price) + quotient).to_u128()

    quotient = (S(amount) << 64).ceiling_div(liquidity)
    if quotient >= sqrt_price:
        raise MathOverflow("Output amount exceeds the token B reserve of the range")
    return (S(sqrt_price) - quotient).to_u128()


def get_next_sqrt_price_from_input(
    sqrt_price: int, liquidity: int, amount_in: int, a_to_b: bool
) -> int:
    """Sqrt price after swapping `amount_in` into the pool.

    Args:
        sqrt_price: Current sqrt price (Q64.64), must be positive
        liquidity: Active liquidity, must be positive
        amount_in: Input amount (token A if a_to_b, else token B)
        a_to_b: True when token A is paid in (price decreases)

    Returns:
        Next sqrt price, rounded so the trader is not favoured

    Raises:
        MathOverflow: On non-positive price/liquidity or width overflow
    """
    if sqrt_price <= 0 or liquidity <= 0:
        raise MathOverflow("Sqrt price and liquidity must be positive")
    if a_to_b:
        return _next_sqrt_price_from_amount_a_rounding_up(sqrt_price, liquidity, amount_in, True)
    return _next_sqrt_price_from_amount_b_rounding_down(sqrt_price, liquidity, amount_in, True)


def get_next_sqrt_price_from_output(
    sqrt_price: int, liquidity: int, amount_out: int, a_to_b: bool
) -> int:
    """Sqrt price after taking `amount_out` out of the pool.

    Args:
        sqrt_price: Current sqrt price (Q64.64), must be positive
        liquidity: Active liquidity, must be positive
        amount_out: Output amount (token B if a_to_b, else token A)
        a_to_b: True when token A is paid in (price decreases)

    Raises:
        MathOverflow: On non-positive price/liquidity, reserve exhaustion or width overflow
    """
    if sqrt_price <= 0 or liquidity <= 0:
        raise MathOverflow("Sqrt price and liquidity must be positive")
    if a_to_b:
        return _next_sqrt_price_from_amount_b_rounding_down(sqrt_price, liquidity, amount_out, False)
    return _next_sqrt_price_from_amount_a_rounding_up(sqrt_price, liquidity, amount_out, False)
