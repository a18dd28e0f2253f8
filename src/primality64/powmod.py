# -----------------------------------------------------------------------------
#  powmod.py
#  Modular arithmetic under an explicit intermediate width (64 or 128 bits)
# -----------------------------------------------------------------------------

from __future__ import annotations

from primality64.utility import U64_BITS, U128_BITS, DomainError, WidthOverflowError

WIDTH_64 = U64_BITS
WIDTH_128 = U128_BITS
WIDTHS = (WIDTH_64, WIDTH_128)


def width_max(width: int) -> int:
    if width not in WIDTHS:
        raise WidthOverflowError(f"unsupported arithmetic width {width!r}; expected one of {WIDTHS}")
    return (1 << width) - 1


def fits_width(value: int, width: int) -> bool:
    """True if 0 <= value fits an unsigned integer of `width` bits."""
    return 0 <= value <= width_max(width)


def _require_safe_modulus(modulus: int, width: int) -> None:
    if modulus < 1:
        raise WidthOverflowError(f"modulus must be >= 1, got {modulus}")
    if not fits_width(modulus * modulus, width):
        raise WidthOverflowError(
            f"modulus {modulus} squared does not fit {width}-bit arithmetic"
        )


def mul_mod(a: int, b: int, modulus: int, width: int = WIDTH_64) -> int:
    """a * b mod modulus; operands are reduced first so the product fits `width`."""
    _require_safe_modulus(modulus, width)
    return ((a % modulus) * (b % modulus)) % modulus


def pow_mod(base: int, exponent: int, modulus: int, width: int = WIDTH_64) -> int:
    """
    base**exponent mod modulus by square-and-multiply.

    Every intermediate product is below modulus**2, so the caller picks the
    width such that modulus**2 fits; WidthOverflowError otherwise.
    """
    _require_safe_modulus(modulus, width)
    if base < 0 or exponent < 0:
        raise DomainError("pow_mod works on unsigned operands only")

    x = base % modulus
    p = exponent
    res = 1 % modulus
    # loop invariant: res * x**p is congruent to base**exponent
    while p > 0:
        if p & 1:
            res = (res * x) % modulus
        x = (x * x) % modulus
        p >>= 1
    return res
