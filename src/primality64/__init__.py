from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

# Version
try:
    __version__ = _pkg_version("primality64")
except PackageNotFoundError:
    __version__ = "0+unknown"

# Public API re-exports
from .arith import divisor_count, divisor_sum, divisors, euler_totient, for_all_divisors, mobius
from .config import load_settings
from .factor import PrimeFactorization, factor, factorization_iterate, factorization_product
from .prime import Prime, certified_prime_from, certified_prime_value
from .primality import MAX_U64_PRIME, is_prime, max_representable_prime
from .runtime import APPLY, CFG
from .sequence import CertIter, PrimeIter, certified_prime_sequence_from, prime_sequence_from
from .utility import (
    DomainError,
    FactorizationStalled,
    NotPrimeError,
    PreconditionError,
    Primality64Error,
    PrimeCeilingError,
    WidthOverflowError,
)

__all__ = [
    "APPLY",
    "CFG",
    "MAX_U64_PRIME",
    "CertIter",
    "DomainError",
    "FactorizationStalled",
    "NotPrimeError",
    "PreconditionError",
    "Primality64Error",
    "Prime",
    "PrimeCeilingError",
    "PrimeFactorization",
    "PrimeIter",
    "WidthOverflowError",
    "__version__",
    "certified_prime_from",
    "certified_prime_sequence_from",
    "certified_prime_value",
    "divisor_count",
    "divisor_sum",
    "divisors",
    "euler_totient",
    "factor",
    "factorization_iterate",
    "factorization_product",
    "for_all_divisors",
    "is_prime",
    "load_settings",
    "max_representable_prime",
    "mobius",
    "prime_sequence_from",
]
