# test_shares.py

from fractions import Fraction

import pytest

from app.math.shares import (
    ONE_SIXTH,
    TWO_THIRDS,
    capped_share,
    format_fraction,
    fraction_of,
    group_fixed_fraction,
    is_effectively_zero,
    split_two_to_one,
    strip_thousands_separators,
)


def test_fraction_of_is_exact_for_sixths():
    # 1/6 of 90,000 is 15,000, not 15,003 as with a rounded 0.1667
    assert fraction_of(90_000, ONE_SIXTH) == 15_000

def test_format_fraction():
    assert format_fraction(Fraction(1, 8)) == "1/8"
    assert format_fraction(ONE_SIXTH / 2) == "1/12"
    assert format_fraction(Fraction(4, 2)) == "2"

def test_group_fixed_fraction():
    assert group_fixed_fraction(1) == Fraction(1, 2)
    assert group_fixed_fraction(4) == TWO_THIRDS
    with pytest.raises(ValueError):
        group_fixed_fraction(0)

def test_capped_share_within_remaining():
    amount, capped = capped_share(60_000, TWO_THIRDS, 50_000)
    assert amount == 40_000
    assert not capped

def test_capped_share_over_remaining():
    amount, capped = capped_share(60_000, TWO_THIRDS, 25_000)
    assert amount == 25_000
    assert capped

def test_capped_share_never_negative():
    amount, capped = capped_share(60_000, TWO_THIRDS, -3.0)
    assert amount == 0
    assert capped

# 2 sons,, 1 daughter -> 5 units
def test_split_two_to_one():
    males, females = split_two_to_one(100_000, 2, 1)
    assert males == pytest.approx(80_000)
    assert females == pytest.approx(20_000)

def test_split_two_to_one_exhausts_pool():
    pool = 87_500
    males, females = split_two_to_one(pool, 1, 1)
    assert males + females == pytest.approx(pool)
    assert males == pytest.approx(58_333.33, abs=0.01)

def test_split_two_to_one_males_only():
    assert split_two_to_one(900, 3, 0) == (900, 0)

def test_split_two_to_one_rejects_nobody():
    with pytest.raises(ValueError):
        split_two_to_one(100, 0, 0)

def test_is_effectively_zero():
    assert is_effectively_zero(0.004)
    assert is_effectively_zero(-0.01)
    assert not is_effectively_zero(0.02)

def test_strip_thousands_separators():
    assert strip_thousands_separators(" 100,000 ") == "100000"
    assert strip_thousands_separators(2500.5) == 2500.5
