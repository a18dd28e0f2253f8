# -----------------------------------------------------------------------------
#  factor.py
#  Complete factorization of u64 values: trial division + Pollard's rho
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections.abc import Iterator, Mapping
from math import gcd

from primality64.powmod import WIDTH_64, WIDTH_128, fits_width
from primality64.prime import Prime
from primality64.runtime import CFG, trace
from primality64.sequence import primes_below
from primality64.utility import FactorizationStalled, PreconditionError, as_u64

TRIAL_DIVISION_LIMIT = 100


class PrimeFactorization(Mapping):
    """
    Read-only mapping Prime -> exponent (>= 1), iterated in ascending prime order.

    Absent primes have exponent 0; zero exponents are never stored. The empty
    factorization stands for 1. Instances come out of factor(); the mutating
    helpers are for construction only.
    """

    __slots__ = ("_facs",)

    def __init__(self) -> None:
        self._facs: dict[Prime, int] = {}

    # --- construction (internal) ---

    def _add(self, prime: Prime, power: int) -> None:
        if power:
            self._facs[prime] = self._facs.get(prime, 0) + power

    def _add_pf(self, other: PrimeFactorization, multiplier: int = 1) -> None:
        for p, e in other.items():
            self._add(p, e * multiplier)

    # --- Mapping ---

    def __getitem__(self, prime: Prime) -> int:
        return self._facs[prime]

    def __iter__(self) -> Iterator[Prime]:
        return iter(sorted(self._facs))

    def __len__(self) -> int:
        return len(self._facs)

    def items(self) -> Iterator[tuple[Prime, int]]:
        """(prime, exponent) pairs in ascending prime order."""
        for p in sorted(self._facs):
            yield p, self._facs[p]

    def exponent(self, prime: int) -> int:
        """Exponent of prime (a Prime or plain int); 0 if absent."""
        n = int(prime)
        for p, e in self._facs.items():
            if p.get() == n:
                return e
        return 0

    def product(self) -> int:
        """Multiply out the factors, giving back the factored number."""
        res = 1
        for p, e in self._facs.items():
            res *= p.get() ** e
        return res

    def as_dict(self) -> dict[int, int]:
        return {p.get(): e for p, e in self.items()}

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PrimeFactorization):
            return self._facs == other._facs
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        inner = ", ".join(f"{p}: {e}" for p, e in self.items())
        return f"PrimeFactorization({{{inner}}})"


class _IncompleteFactorization:
    """
    Work queue of composites still to split, plus the primes found so far.

    Every key of `comps` is composite; add() routes primes into `primes`
    and drops 1.
    """

    __slots__ = ("comps", "primes")

    def __init__(self) -> None:
        self.comps: dict[int, int] = {}
        self.primes = PrimeFactorization()

    def add(self, n: int, multiplicity: int) -> None:
        if n == 1:
            return
        p = Prime.new(n)
        if p is not None:
            self.primes._add(p, multiplicity)
        else:
            self.comps[n] = self.comps.get(n, 0) + multiplicity

    def add_pf(self, pf: PrimeFactorization) -> None:
        self.primes._add_pf(pf, 1)

    def done(self) -> bool:
        return not self.comps

    def take_composite(self) -> tuple[int, int]:
        if not self.comps:
            raise PreconditionError("no composite left to take")
        n = min(self.comps)
        return n, self.comps.pop(n)

    def take(self) -> PrimeFactorization:
        if not self.done():
            raise PreconditionError(f"factorization still has composites: {sorted(self.comps)}")
        return self.primes

    def __repr__(self) -> str:
        return f"IncFac(comps={self.comps}, primes={self.primes.as_dict()})"


def trial_div(n: int, limit: int = TRIAL_DIVISION_LIMIT) -> tuple[int, PrimeFactorization]:
    """
    Divide out every prime <= limit. Returns (cofactor, factorization found).

    Stops early once p*p exceeds the cofactor, which is then prime itself
    and moved into the factorization (cofactor becomes 1).
    """
    if n == 0:
        raise PreconditionError("trial_div cannot factor 0")
    res = PrimeFactorization()
    for p in primes_below(limit + 1):
        if n == 1:
            break
        pp = p.get()
        if pp * pp > n:
            res._add(Prime(n), 1)
            return 1, res
        while n % pp == 0:
            res._add(p, 1)
            n //= pp
    return n, res


def rho_width(m: int, c: int) -> int:
    """Width needed for x*x + c with x < m."""
    return WIDTH_64 if fits_width(m * m + c, WIDTH_64) else WIDTH_128


def _rho_attempt(m: int, c: int, width: int) -> int:
    """
    One run of Pollard's rho on m with x -> x*x + c, both walkers from 2.

    Returns a divisor g of m with 1 < g < m, or m if this polynomial failed.
    """
    # every intermediate is < m*m + c
    if not fits_width(m * m + c, width):
        raise PreconditionError(f"rho on {m} with c={c} overflows {width}-bit arithmetic")
    hare = 2
    tortoise = 2
    while True:
        hare = (hare * hare + c) % m
        hare = (hare * hare + c) % m
        tortoise = (tortoise * tortoise + c) % m
        g = gcd(m, abs(hare - tortoise))
        if g != 1:
            return g


def rho_step(fac: _IncompleteFactorization, c: int) -> bool:
    """Take one composite from fac and try to split it. True if it split."""
    m, multiplicity = fac.take_composite()
    width = rho_width(m, c)
    g = _rho_attempt(m, c, width)
    if g == m:
        fac.add(m, multiplicity)
        return False
    assert m % g == 0, f"rho: {g} does not divide {m}"
    trace(f"rho c={c} ({width}-bit): {m} = {g} × {m // g}")
    fac.add(g, multiplicity)
    fac.add(m // g, multiplicity)
    return True


def factor_rho(n: int) -> PrimeFactorization:
    """Factor n with Pollard's rho alone (n should have no tiny factors)."""
    fac = _IncompleteFactorization()
    fac.add(n, 1)
    max_attempts = int(CFG("FACTOR.MAX_RHO_ATTEMPTS", 0) or 0)
    c = 1
    while not fac.done():
        if max_attempts and c > max_attempts:
            raise FactorizationStalled(
                f"gave up after {max_attempts} rho polynomials; unsplit: {sorted(fac.comps)}"
            )
        if c > 1:
            trace(f"rho retry c={c}, fac={fac!r}")
        rho_step(fac, c)
        c += 1
    return fac.take()


def factor(n: int) -> PrimeFactorization:
    """
    Prime factorization of n in [1, 2**64 - 1].

    factor(0) raises PreconditionError. factor(1) is empty.

    >>> factor(360).as_dict()
    {2: 3, 3: 2, 5: 1}
    """
    n = as_u64(n)
    if n == 0:
        raise PreconditionError("cannot factor 0")
    n_left, pf = trial_div(n, TRIAL_DIVISION_LIMIT)
    if n_left == 1:
        return pf
    pf2 = factor_rho(n_left)
    pf2._add_pf(pf, 1)
    return pf2


def factorization_product(f: PrimeFactorization) -> int:
    return f.product()


def factorization_iterate(f: PrimeFactorization) -> Iterator[tuple[Prime, int]]:
    return f.items()
