# main.py
from __future__ import annotations

import argparse
import sys
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from config_reader import apply_setup, build_machine, load_machine, parse_config
from debug import Debug
from errors import EnigmaError, SetupError
from machine import Machine
from suites import DEFAULT_SUITE, SUITES
from utilities import group_blocks, preprocess_message

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration & logging
# ────────────────────────────────────────────────────────────────────────


debug = Debug()


@dataclass(slots=True)
class Config:
    """Runtime switches for the message stream."""

    block: int = 5                              # output group size
    debug: list[str] = field(default_factory=list)
    log_file: Path | None = None


# ────────────────────────────────────────────────────────────────────────
#  1. Machine loading
# ────────────────────────────────────────────────────────────────────────


def machine_from_suite(name: str = DEFAULT_SUITE) -> Machine:
    try:
        text = SUITES[name]
    except KeyError:
        raise SystemExit(f"Unknown suite '{name}'. Expected one of {list(SUITES)}")
    return build_machine(parse_config(text))


# ────────────────────────────────────────────────────────────────────────
#  2. Message stream
# ────────────────────────────────────────────────────────────────────────


def process(machine: Machine, lines: Iterable[str], out: TextIO, cfg: Config) -> None:
    """Apply ``*`` setup lines to `machine` and convert every message line.

    Blank lines are copied through; a message before the first setup is an
    error.
    """
    is_set_up = False
    for raw in lines:
        line = raw.rstrip("\r\n")
        if not line.strip():
            out.write("\n")
            continue

        if line.lstrip().startswith("*"):
            apply_setup(machine, line)
            is_set_up = True
            continue

        if not is_set_up:
            raise SetupError("The input must start with a setting line")

        converted = machine.convert_message(preprocess_message(line))
        out.write(group_blocks(converted, cfg.block) + "\n")


# ────────────────────────────────────────────────────────────────────────
#  3. CLI helpers
# ────────────────────────────────────────────────────────────────────────


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Encrypt or decrypt messages with a rotor machine")
    p.add_argument("config", nargs="?", type=Path, help="Machine configuration file. Default: built-in naval wheels.")
    p.add_argument("input", nargs="?", type=Path, help="Message file. Default: standard input.")
    p.add_argument("output", nargs="?", type=Path, help="Output file. Default: standard output.")
    p.add_argument("--block", type=int, default=5, help="Output group size. Default: 5")
    p.add_argument(
        "--debug", nargs="+", default=[], metavar="COMPONENT", choices=sorted(debug.status()),
        help="Enable debug logging for the given components."
    )
    p.add_argument("--log-file", type=Path, help="Also write debug messages to this file.")
    return p.parse_args(argv)


# ────────────────────────────────────────────────────────────────────────
#  4. Main entry point
# ────────────────────────────────────────────────────────────────────────


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    cfg = Config(block=args.block, debug=list(args.debug), log_file=args.log_file)
    if cfg.block <= 0:
        raise SystemExit("Error: --block must be positive")

    dbg = Debug(log_to=str(cfg.log_file) if cfg.log_file else None)
    if cfg.debug:
        dbg.enable(*cfg.debug)

    try:
        machine = load_machine(args.config) if args.config else machine_from_suite()

        src = open(args.input, encoding="utf-8") if args.input else sys.stdin
        try:
            dst = open(args.output, "w", encoding="utf-8") if args.output else sys.stdout
            try:
                process(machine, src, dst, cfg)
            finally:
                if dst is not sys.stdout:
                    dst.close()
        finally:
            if src is not sys.stdin:
                src.close()
    except EnigmaError as excp:
        sys.exit(f"Error: {excp}")
    except OSError as excp:
        sys.exit(f"Error: could not open {excp.filename}")


if __name__ == "__main__":
    main()
