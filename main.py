#!/usr/bin/env python3
"""
Invoice Generator — Command Line
=================================

Spell out amounts in Indonesian, or write the default DOCX template.

Usage:
    python main.py                          # Show a table of sample amounts
    python main.py 1500000 -250 1250.75     # Spell out the given amounts
    python main.py --init-template [PATH]   # Write the default invoice template
"""

from __future__ import annotations

import sys
from decimal import Decimal, InvalidOperation

from dotenv import load_dotenv

from invoice_generator import terbilang
from invoice_generator.exceptions import OutOfRangeError
from invoice_generator.formatting import format_number
from invoice_generator.settings import Settings, configure_logging
from invoice_generator.template import write_default_template

load_dotenv()


# ─── Sample Amounts ─────────────────────────────────────────────────

SAMPLE_AMOUNTS = [
    0, 1, 11, 25, 100, 101, 1000, 1001, 1500, 10000, 15000, 100000,
    1000000, 1500000, 1000000000, 1500000000,
]


# ─── ANSI Color Constants ───────────────────────────────────────────

_RED = "\033[91m"
_CYAN = "\033[96m"
_DIM = "\033[2m"
_BOLD = "\033[1m"
_RESET = "\033[0m"
_WIDTH = 72


# ─── Pretty Printer ─────────────────────────────────────────────────


def print_amounts(amounts: list[Decimal | int]) -> int:
    """Print each amount next to its terbilang.

    Returns:
        0 if every amount could be spelled out, 1 otherwise.
    """
    print(f"\n{'=' * _WIDTH}")
    print(f"{_BOLD}{_CYAN}  TERBILANG{_RESET}")
    print(f"{'=' * _WIDTH}")

    failures = 0
    for amount in amounts:
        try:
            words = terbilang.convert(amount)
        except OutOfRangeError as e:
            failures += 1
            print(f"  {str(amount).rjust(24)} {_DIM}->{_RESET} {_RED}[{e.code}] {e}{_RESET}")
            continue
        print(f"  {format_number(amount).rjust(24)} {_DIM}->{_RESET} {words}")

    print(f"{'=' * _WIDTH}\n")
    return 1 if failures else 0


def _parse_amount(text: str) -> Decimal:
    try:
        value = Decimal(text.replace("_", ""))
    except InvalidOperation:
        raise SystemExit(f"Not a number: {text!r}") from None
    if not value.is_finite():
        raise SystemExit(f"Not a finite number: {text!r}")
    return value


# ─── Main ────────────────────────────────────────────────────────────


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    settings = Settings.from_env()
    configure_logging(settings.log_level)

    if args and args[0] == "--init-template":
        path = write_default_template(args[1] if len(args) > 1 else settings.template_path)
        print(f"  Template written to {path}")
        return 0

    amounts = [_parse_amount(a) for a in args] if args else SAMPLE_AMOUNTS
    return print_amounts(amounts)


if __name__ == "__main__":
    sys.exit(main())
