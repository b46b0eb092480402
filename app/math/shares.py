# app/math/shares.py

from fractions import Fraction
from typing import Tuple

# Anything at or below this (in currency units) counts as nothing left over.
REMAINDER_TOLERANCE = 0.01
# Float noise below this is treated as an exact zero share.
FLOAT_EPSILON = 1e-9

ONE_EIGHTH = Fraction(1, 8)
ONE_SIXTH = Fraction(1, 6)
ONE_QUARTER = Fraction(1, 4)
ONE_THIRD = Fraction(1, 3)
ONE_HALF = Fraction(1, 2)
TWO_THIRDS = Fraction(2, 3)


def fraction_of(value: float, fraction: Fraction) -> float:
    """
    Apply a Quranic fraction to a value without going through a rounded decimal
    (1/6 is never 0.1667 here).
    """
    return value * fraction.numerator / fraction.denominator


def format_fraction(fraction: Fraction) -> str:
    if fraction.denominator == 1:
        return str(fraction.numerator)
    return f"{fraction.numerator}/{fraction.denominator}"


def format_amount(value: float) -> str:
    return f"{value:,.2f}"


def percent_of(amount: float, estate_value: float) -> float:
    return amount / estate_value * 100


def is_effectively_zero(value: float, tolerance: float = REMAINDER_TOLERANCE) -> bool:
    return abs(value) <= tolerance


def capped_share(estate_value: float, fraction: Fraction, remaining: float) -> Tuple[float, bool]:
    """
    Fixed share taken from the original estate but never more than what is still
    undistributed. Returns (amount, was_capped).
    """
    computed = fraction_of(estate_value, fraction)
    available = max(remaining, 0.0)
    if computed > available:
        return available, True
    return computed, False


def group_fixed_fraction(person_count: int) -> Fraction:
    """1/2 for a single daughter or sister, 2/3 shared by two or more."""
    if person_count < 1:
        raise ValueError("person_count must be at least 1")
    return ONE_HALF if person_count == 1 else TWO_THIRDS


def split_two_to_one(pool: float, male_count: int, female_count: int) -> Tuple[float, float]:
    """
    Divide a residuary pool so each male takes twice what each female takes.
    Returns (males_total, females_total); the two always add up to the pool.
    """
    if male_count < 0 or female_count < 0:
        raise ValueError("head counts cannot be negative")
    total_units = 2 * male_count + female_count
    if total_units == 0:
        raise ValueError("cannot split a pool among nobody")

    per_unit = pool / total_units
    females_total = per_unit * female_count
    males_total = pool - females_total
    return males_total, females_total


def strip_thousands_separators(value):
    """Turn "100,000" into "100000"; anything that is not a string comes back untouched."""
    if isinstance(value, str):
        return value.strip().replace(",", "")
    return value
