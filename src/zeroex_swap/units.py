"""Conversion between human-readable amounts and on-chain base units.

Ethereum only stores integers, so a token amount is kept as an integer plus
the token's number of decimals. USDC has 6 decimals and DAI has 18:

    to_base_units(5, 6)       -> 5000000
    to_base_units("20.5", 18) -> 20500000000000000000

Base-unit amounts are plain Python ints, which never overflow. Neither
direction goes through the decimal context, so there is no rounding at 28
significant digits.
"""

from decimal import Decimal
from typing import Union

Numeric = Union[Decimal, int, float, str]


def to_decimal(amount: Numeric) -> Decimal:
    """Coerce an amount to Decimal.

    Floats go through str() so 20.5 becomes Decimal("20.5") rather than the
    nearest binary fraction.
    """
    if isinstance(amount, Decimal):
        return amount
    if isinstance(amount, float):
        return Decimal(str(amount))
    return Decimal(amount)


def _check_decimals(decimals: int) -> None:
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")


def to_base_units(amount: Numeric, decimals: int) -> int:
    """Scale a human amount by 10**decimals, truncating extra fractional digits."""
    _check_decimals(decimals)
    value = to_decimal(amount)
    if not value.is_finite():
        raise ValueError(f"Cannot convert {value} to base units")

    sign, digits, exponent = value.as_tuple()
    coefficient = int("".join(map(str, digits))) if digits else 0
    shift = exponent + decimals
    if shift >= 0:
        scaled = coefficient * 10**shift
    else:
        # Truncate toward zero
        scaled = coefficient // 10**-shift
    return -scaled if sign else scaled


def from_base_units(amount: int, decimals: int) -> Decimal:
    """Convert base units back to a human amount."""
    _check_decimals(decimals)
    sign, digits, exponent = Decimal(int(amount)).as_tuple()
    return Decimal((sign, digits, exponent - decimals))
