# tests/test_sequence.py
"""
Certified primes and the wheel-driven prime sequences.

Run: pytest -v
"""

from __future__ import annotations

import copy
import pickle
from itertools import islice, takewhile

import pytest
from sympy import sieve

from primality64.prime import Prime, certified_prime_from, certified_prime_value
from primality64.primality import MAX_U64_PRIME, is_prime
from primality64.sequence import (
    PRIME_JUMPS,
    WHEEL_MODULUS,
    CertIter,
    PrimeIter,
    certified_prime_sequence_from,
    prime_sequence_from,
    primes_below,
)
from primality64.utility import U64_MAX, NotPrimeError, PrimeCeilingError

LIMIT = 1_000_000

# literal gap table (first j >= 1 with gcd(i + j, 210) == 1)
EXPECTED_JUMPS = [
    1, 10, 9, 8, 7, 6, 5, 4, 3, 2, 1, 2, 1, 4, 3, 2, 1, 2, 1, 4, 3,
    2, 1, 6, 5, 4, 3, 2, 1, 2, 1, 6, 5, 4, 3, 2, 1, 4, 3, 2, 1, 2, 1, 4, 3, 2, 1, 6, 5, 4, 3, 2, 1,
    6, 5, 4, 3, 2, 1, 2, 1, 6, 5, 4, 3, 2, 1, 4, 3, 2, 1, 2, 1, 6, 5, 4, 3, 2, 1, 4, 3, 2, 1, 6, 5,
    4, 3, 2, 1, 8, 7, 6, 5, 4, 3, 2, 1, 4, 3, 2, 1, 2, 1, 4, 3, 2, 1, 2, 1, 4, 3, 2, 1, 8, 7, 6, 5,
    4, 3, 2, 1, 6, 5, 4, 3, 2, 1, 4, 3, 2, 1, 6, 5, 4, 3, 2, 1, 2, 1, 4, 3, 2, 1, 6, 5, 4, 3, 2, 1,
    2, 1, 6, 5, 4, 3, 2, 1, 6, 5, 4, 3, 2, 1, 4, 3, 2, 1, 2, 1, 4, 3, 2, 1, 6, 5, 4, 3, 2, 1, 2, 1,
    6, 5, 4, 3, 2, 1, 4, 3, 2, 1, 2, 1, 4, 3, 2, 1, 2, 1, 10, 9, 8, 7, 6, 5, 4, 3, 2, 1, 2,
]


# ---------- certified primes --------------------------------------------------


def test_certified_prime_from():
    p = certified_prime_from(97)
    assert p is not None
    assert certified_prime_value(p) == 97
    assert certified_prime_from(91) is None
    assert certified_prime_from(1) is None
    assert certified_prime_from(0) is None


def test_prime_constructor_rejects_composites():
    assert Prime(MAX_U64_PRIME).get() == MAX_U64_PRIME
    with pytest.raises(NotPrimeError):
        Prime(U64_MAX)
    with pytest.raises(ValueError):
        Prime(4)


def test_prime_order_equality_and_hash():
    a, b = Prime(5), Prime(7)
    assert a < b and b > a and a <= Prime(5)
    assert a == Prime(5) and a != b
    assert len({Prime(5), Prime(5), Prime(7)}) == 2
    assert sorted([Prime(13), Prime(2), Prime(7)]) == [Prime(2), Prime(7), Prime(13)]
    assert int(b) == 7 and str(b) == "7" and repr(b) == "Prime(7)"
    assert [10, 20, 30, 40, 50, 60][Prime(3)] == 40


def test_prime_is_immutable():
    p = Prime(11)
    with pytest.raises(AttributeError):
        p._n = 12
    assert pickle.loads(pickle.dumps(p)) == p


# ---------- wheel -------------------------------------------------------------


def test_wheel_table():
    assert WHEEL_MODULUS == 210
    assert len(PRIME_JUMPS) == 210
    assert list(PRIME_JUMPS) == EXPECTED_JUMPS


# ---------- sequences ---------------------------------------------------------


def test_small_primes_example():
    assert list(takewhile(lambda n: n < 20, PrimeIter.from_(5))) == [5, 7, 11, 13, 17, 19]


def test_compare_with_sieve():
    ours = list(takewhile(lambda n: n < LIMIT, PrimeIter.all()))
    assert ours == list(sieve.primerange(0, LIMIT))


@pytest.mark.parametrize("start", [0, 1, 2, 3, 4, 200, 209, 210, 211, 212, 1_000_003, 1_000_004, 2**32 - 5])
def test_starts_at_first_prime_at_or_above(start):
    got = list(islice(prime_sequence_from(start), 5))
    expected = list(islice((n for n in range(max(start, 2), start + 10_000) if is_prime(n)), 5))
    assert got == expected


def test_strictly_ascending_and_all_prime():
    got = list(islice(PrimeIter.from_(10**12), 200))
    assert all(a < b for a, b in zip(got, got[1:]))
    assert all(is_prime(p) for p in got)


def test_certified_sequence_mirrors_plain_sequence():
    plain = list(islice(PrimeIter.from_(10**9), 50))
    cert = list(islice(certified_prime_sequence_from(10**9), 50))
    assert all(isinstance(p, Prime) for p in cert)
    assert [p.get() for p in cert] == plain
    wrapped = CertIter.from_pi(PrimeIter.from_(10**9))
    assert [p.get() for p in islice(wrapped, 50)] == plain


def test_copy_restarts_from_same_cursor():
    it = PrimeIter.from_(1000)
    next(it)
    dup = copy.copy(it)
    assert list(islice(it, 10)) == list(islice(dup, 10))


def test_includes_biggest():
    assert MAX_U64_PRIME in PrimeIter.from_(U64_MAX - 1000)


def test_run_past_end():
    ps = PrimeIter.from_(U64_MAX - 1000)
    got = []
    with pytest.raises(PrimeCeilingError):
        for p in ps:
            got.append(p)
    assert got[-1] == MAX_U64_PRIME


def test_ceiling_is_an_overflow_error():
    it = CertIter.from_(MAX_U64_PRIME)
    assert next(it).get() == MAX_U64_PRIME
    with pytest.raises(OverflowError):
        next(it)


def test_primes_below():
    assert [p.get() for p in primes_below(30)] == [2, 3, 5, 7, 11, 13, 17, 19, 23, 29]
    assert primes_below(2) == ()
