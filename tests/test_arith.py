# tests/test_arith.py
"""
Totient, Möbius and divisor functions against brute force and sympy.

Run: pytest -v
"""

from __future__ import annotations

from math import gcd

import pytest
from sympy import divisor_sigma, mobius as sympy_mobius

from primality64.arith import (
    divisor_count,
    divisor_sum,
    divisors,
    euler_totient,
    for_all_divisors,
    mobius,
)
from primality64.factor import factor
from primality64.primality import MAX_U64_PRIME
from primality64.utility import U64_MAX, PreconditionError

# ---------- totient -----------------------------------------------------------


def test_totient_brute_force():
    for n in range(1, 1000):
        brute = sum(1 for k in range(1, n + 1) if gcd(k, n) == 1)
        assert euler_totient(factor(n)) == brute, f"φ({n})"
        assert euler_totient(n) == brute


def test_totient_examples():
    assert euler_totient(180) == 48
    assert euler_totient(1) == 1
    assert euler_totient(MAX_U64_PRIME) == MAX_U64_PRIME - 1
    assert euler_totient(2**63) == 2**62


def test_totient_of_zero():
    with pytest.raises(PreconditionError):
        euler_totient(0)


# ---------- mobius -----------------------------------------------------------------


@pytest.mark.parametrize(("x", "y", "expected"), [
    (90, 2, 0),
    (90, 3, -1),
    (90, 6, 1),
    (90, 1, 0),
    (90, 7, 0),    # 7 does not divide 90
    (0, 5, 0),
    (1, 1, 1),
    (30, 1, -1),
    (30, 30, 1),
])
def test_mobius_ratio(x, y, expected):
    assert mobius(x, y) == expected


def test_mobius_zero_denominator():
    with pytest.raises(PreconditionError):
        mobius(90, 0)
    with pytest.raises(ValueError):
        mobius(0, 0)


def test_mobius_matches_sympy():
    for n in range(1, 2000):
        assert mobius(n) == int(sympy_mobius(n)), f"μ({n})"
        assert mobius(factor(n)) == int(sympy_mobius(n))


def test_mobius_large():
    # U64_MAX is the product of 7 distinct primes
    assert mobius(U64_MAX) == -1
    assert mobius(MAX_U64_PRIME) == -1


# ---------- divisors ---------------------------------------------------------------


def test_for_all_divisors_brute_force():
    for n in range(1, 1001):
        seen: list[int] = []
        for_all_divisors(factor(n), seen.append)
        brute = [d for d in range(1, n + 1) if n % d == 0]
        assert len(seen) == len(set(seen)), f"duplicate divisor for {n}"
        assert sorted(seen) == brute, f"divisors of {n}"


def test_divisors_sorted():
    assert list(divisors(factor(60))) == [1, 2, 3, 4, 5, 6, 10, 12, 15, 20, 30, 60]
    assert list(divisors(factor(1))) == [1]


def test_divisor_count_and_sum():
    for n in (1, 2, 12, 360, 997, 2**20, 720720):
        pf = factor(n)
        assert divisor_count(pf) == len(list(divisors(pf)))
        assert divisor_sum(pf) == int(divisor_sigma(n))


def test_divisor_sum_can_exceed_u64():
    n = 2**8 * 3**4 * 5**2 * 7 * 11 * 13 * 17 * 19 * 23 * 29 * 31 * 37 * 41
    assert n <= U64_MAX
    s = divisor_sum(factor(n))
    assert isinstance(s, int)
    assert s == int(divisor_sigma(n))
    assert s > U64_MAX
