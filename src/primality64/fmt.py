# src/primality64/fmt.py
from __future__ import annotations

from collections.abc import Iterable

from colorama import Fore, Style

from primality64.factor import PrimeFactorization
from primality64.runtime import CFG


def _color() -> bool:
    return bool(CFG("OUTPUT.COLOR", True))


def format_factorization(pf: PrimeFactorization) -> str:
    """
    Turn a factorization into a tidy string like: 2^3 × 3 × 5^2
    """
    parts: list[str] = []
    for p, e in pf.items():
        parts.append(f"{p}^{e}" if e > 1 else f"{p}")
    return " × ".join(parts) if parts else "1"


def format_verdict(n: int, prime: bool) -> str:
    if not _color():
        return f"{n}: {'prime' if prime else 'composite'}"
    if prime:
        tag = f"{Fore.GREEN}{Style.BRIGHT}prime{Style.RESET_ALL}"
    else:
        tag = f"{Style.DIM}composite{Style.RESET_ALL}"
    return f"{n}: {tag}"


def format_int_list(values: Iterable[int], *, per_line: int = 10) -> str:
    """Space-separated ints, `per_line` per row."""
    rows: list[str] = []
    row: list[str] = []
    for v in values:
        row.append(str(v))
        if len(row) == per_line:
            rows.append(" ".join(row))
            row = []
    if row:
        rows.append(" ".join(row))
    return "\n".join(rows)


def label(text: str) -> str:
    if not _color():
        return text
    return f"{Fore.CYAN}{text}{Style.RESET_ALL}"
