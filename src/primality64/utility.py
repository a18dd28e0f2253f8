# -----------------------------------------------------------------------------
#  Utility functions
# -----------------------------------------------------------------------------

from __future__ import annotations

import operator
import re

# --- Domain bounds ------------------------------------------------------------

U64_BITS = 64
U128_BITS = 128
U32_MAX = (1 << 32) - 1
U64_MAX = (1 << U64_BITS) - 1
U128_MAX = (1 << U128_BITS) - 1


# --- Exceptions ---------------------------------------------------------------

class Primality64Error(Exception):
    pass


class PreconditionError(Primality64Error, ValueError):
    """A caller broke a documented precondition. Not meant to be retried."""


class DomainError(PreconditionError):
    pass


class WidthOverflowError(PreconditionError, OverflowError):
    pass


class PrimeCeilingError(Primality64Error, OverflowError):
    pass


class NotPrimeError(Primality64Error, ValueError):
    pass


class FactorizationStalled(Primality64Error, RuntimeError):
    pass


class UserInputError(Primality64Error):
    pass


# --- Argument checks ----------------------------------------------------------

def as_u64(n: object, name: str = "n") -> int:
    """Return n as a plain int in [0, 2**64 - 1] or raise DomainError."""
    if isinstance(n, bool):
        raise DomainError(f"{name} must be an integer, not bool")
    try:
        v = operator.index(n)
    except TypeError:
        raise DomainError(f"{name} must be an integer, got {typename(n)}") from None
    if v < 0 or v > U64_MAX:
        raise DomainError(f"{name}={v} is outside the u64 range [0, {U64_MAX}]")
    return v


def typename(v: object) -> str:
    return type(v).__name__


# --- Integer parsing (CLI) ----------------------------------------------------

_SEP_RE = re.compile(r"[ ,_\u00A0\u2009\u202F]")
_POWER_RE = re.compile(r"^(\d+)\s*(?:\^|\*\*)\s*(\d+)\s*(?:([+-])\s*(\d+))?$")


def parse_u64(text: str, label: str = "number") -> int:
    """
    Parse user text into a u64.

    Accepts digit grouping (1_000_000, 1,000,000) and the power forms
    a^b, a**b with an optional trailing +k / -k (e.g. 2^64-59).
    """
    s = _SEP_RE.sub("", (text or "").strip())
    if not s:
        raise UserInputError(f"{label} is empty.")
    if s.isdigit():
        v = int(s)
    else:
        m = _POWER_RE.match(s)
        if not m:
            raise UserInputError(f"Invalid input: {label} {text!r} is not an integer.")
        base, exp, sign, off = m.groups()
        if int(exp) > U64_BITS and int(base) > 1:
            raise UserInputError(f"{label} {text!r} is far beyond the u64 range.")
        v = int(base) ** int(exp)
        if sign == "+":
            v += int(off)
        elif sign == "-":
            v -= int(off)
    if v < 0 or v > U64_MAX:
        raise UserInputError(f"{label} {text!r} is outside the u64 range [0, 2^64-1].")
    return v
