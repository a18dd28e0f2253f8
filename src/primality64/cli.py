# src/primality64/cli.py

"""
primality64 - primality, prime sequences and factorization for u64 integers

usage: primality64 -h
"""

from __future__ import annotations

import argparse
import sys
import textwrap
from itertools import islice

from colorama import Fore, Style
from colorama import init as colorama_init

from primality64 import __version__ as _ver
from primality64.arith import divisor_count, divisor_sum, divisors, euler_totient, mobius
from primality64.config import load_settings
from primality64.factor import factor
from primality64.fmt import format_factorization, format_int_list, format_verdict, label
from primality64.primality import is_prime
from primality64.runtime import APPLY, CFG, trace
from primality64.runtime import current as _rt_current
from primality64.sequence import PrimeIter
from primality64.utility import (
    FactorizationStalled,
    PrimeCeilingError,
    PreconditionError,
    UserInputError,
    parse_u64,
)


def _print_user_error(msg: str) -> None:
    """Uniform, one-line friendly error."""
    prefix = f"{Fore.RED}Error:{Style.RESET_ALL}"
    if not (msg.startswith("Invalid input:") or msg.startswith("Error:")):
        msg = f"{prefix} {msg}"
    print(msg, file=sys.stderr)


# ---- commands ----

def _cmd_isprime(args) -> int:
    for item in args.numbers:
        n = parse_u64(item)
        print(format_verdict(n, is_prime(n)))
    return 0


def _cmd_factor(args) -> int:
    for item in args.numbers:
        n = parse_u64(item)
        if n == 0:
            raise UserInputError("0 has no prime factorization.")
        print(f"{label(str(n))} = {format_factorization(factor(n))}")
    return 0


def _cmd_primes(args) -> int:
    start = parse_u64(args.start, "start")
    count = args.count if args.count is not None else int(CFG("OUTPUT.MAX_PRIMES", 20))
    if count < 1:
        raise UserInputError("--count must be at least 1.")
    out: list[int] = []
    try:
        for p in islice(PrimeIter.from_(start), count):
            out.append(p)
    except PrimeCeilingError:
        trace(f"prime sequence hit the u64 ceiling after {len(out)} value(s)")
    print(format_int_list(out))
    return 0


def _cmd_totient(args) -> int:
    n = parse_u64(args.number)
    if n == 0:
        raise UserInputError("φ(0) is undefined.")
    print(f"φ({n}) = {euler_totient(n)}")
    return 0


def _cmd_mobius(args) -> int:
    x = parse_u64(args.x, "x")
    y = parse_u64(args.y, "y") if args.y is not None else 1
    if y == 0:
        raise UserInputError("the denominator y must not be 0.")
    shown = f"{x}/{y}" if y != 1 else f"{x}"
    print(f"μ({shown}) = {mobius(x, y)}")
    return 0


def _cmd_divisors(args) -> int:
    n = parse_u64(args.number)
    if n == 0:
        raise UserInputError("every integer divides 0; pick n >= 1.")
    pf = factor(n)
    print(f"{label('τ')}({n}) = {divisor_count(pf)}   {label('σ')}({n}) = {divisor_sum(pf)}")
    print(format_int_list(divisors(pf)))
    return 0


# ---- argparse ----
def _build_parser() -> argparse.ArgumentParser:

    epilog = textwrap.dedent("""\
    integers:
      Plain digits (grouping with _ or , allowed) or powers such as
      2^64-59, 2**61-1, 10^18+3. Values must fit in [0, 2^64-1].

    profiles:
      --profile PATH, else $PRIMALITY64_PROFILE, else the packaged default.
    """)

    p = argparse.ArgumentParser(
        prog="primality64",
        description="Primality, prime sequences and factorization for u64 integers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {_ver}")
    p.add_argument("--profile", default=None, help="TOML profile to load")
    p.add_argument("--debug", action="store_true", help="Trace rho retries/splits and show full tracebacks")
    p.add_argument("--no-color", action="store_true", help="Plain output without ANSI colors")

    sub = p.add_subparsers(dest="command", metavar="COMMAND", required=True)

    sp = sub.add_parser("isprime", help="test one or more integers for primality")
    sp.add_argument("numbers", nargs="+")
    sp.set_defaults(func=_cmd_isprime)

    sp = sub.add_parser("factor", help="print the prime factorization")
    sp.add_argument("numbers", nargs="+")
    sp.set_defaults(func=_cmd_factor)

    sp = sub.add_parser("primes", help="list primes >= START")
    sp.add_argument("start")
    sp.add_argument("--count", type=int, default=None, help="how many (default: OUTPUT.MAX_PRIMES)")
    sp.set_defaults(func=_cmd_primes)

    sp = sub.add_parser("totient", help="Euler's totient φ(n)")
    sp.add_argument("number")
    sp.set_defaults(func=_cmd_totient)

    sp = sub.add_parser("mobius", help="Möbius function μ(x/y)")
    sp.add_argument("x")
    sp.add_argument("y", nargs="?", default=None)
    sp.set_defaults(func=_cmd_mobius)

    sp = sub.add_parser("divisors", help="all divisors of n, with τ(n) and σ(n)")
    sp.add_argument("number")
    sp.set_defaults(func=_cmd_divisors)

    return p


def main(argv=None) -> int:
    """Thin wrapper: catch friendly errors, hide tracebacks unless debug."""
    try:
        return _main_impl(argv)
    except (UserInputError, PreconditionError) as e:
        _print_user_error(str(e))
        return 2
    except FactorizationStalled as e:
        _print_user_error(f"{e} (raise FACTOR.MAX_RHO_ATTEMPTS or set it to 0)")
        return 1
    except KeyboardInterrupt:
        print("Aborted by user.", file=sys.stderr)
        return 130
    except Exception as e:
        debug = "--debug" in (argv if argv is not None else sys.argv)
        if debug:
            raise
        print(f"Unexpected error: {e.__class__.__name__}: {e}", file=sys.stderr)
        print("Run with --debug for a full traceback.", file=sys.stderr)
        return 1


# ---- main ----
def _main_impl(argv=None) -> int:
    colorama_init(autoreset=True)

    parser = _build_parser()
    args = parser.parse_args(argv)

    selected = load_settings(args.profile)
    APPLY(selected)

    rt = _rt_current()
    if args.debug:
        rt.debug = True
    if args.no_color:
        rt.settings.setdefault("OUTPUT", {})["COLOR"] = False

    trace(f"active profile: {rt.profile_name} ({getattr(selected, '_source', None)})")
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
