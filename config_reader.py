# config_reader.py
"""Read the machine configuration format and apply ``*`` setup lines.

Configuration layout::

    A-Z                          alphabet: range X-Y or explicit list
    5 3                          rotor slots, pawls
    I MQ   (AELTPHQXRU) (BKNW)   name, type, cycles
    B R    (AE) (BN) (CK) ...
           (RX) (SZ) (TV)        cycles may continue on lines starting "("

Type is ``M<notches>`` (moving), ``N`` (fixed) or ``R`` (reflector).
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List

from alphabet import Alphabet, parse_alphabet
from debug import Debug
from errors import ConfigurationError, SetupError
from machine import Machine
from permutation import Permutation
from rotor_and_reflector import FixedRotor, MovingRotor, Reflector, Rotor

debug = Debug()

_int_re = re.compile(r"^[+-]?\d+$")


@dataclass(frozen=True)
class RotorDescriptor:
    """One wheel line of the configuration, before it is built."""

    name: str
    kind: str          # "M", "N" or "R"
    notches: str
    cycles: str


@dataclass(frozen=True)
class MachineConfig:
    alphabet: Alphabet
    num_rotors: int
    pawls: int
    descriptors: tuple[RotorDescriptor, ...]


# ────────────────────────────────────────────────────────────────────────
#  1. Configuration file
# ────────────────────────────────────────────────────────────────────────


def _parse_int(token: str, what: str) -> int:
    if not _int_re.match(token):
        raise ConfigurationError(f"Expected an integer {what}, got {token!r}")
    return int(token)


def parse_descriptors(text: str) -> List[RotorDescriptor]:
    """Split the rotor section of a configuration into descriptors.

    A line starting with ``(`` continues the cycles of the previous rotor.
    """
    entries: List[str] = []
    for raw in text.splitlines():
        line = raw.strip()
        if not line:
            continue
        if line.startswith("("):
            if not entries:
                raise ConfigurationError(f"Cycles without a rotor: {line!r}")
            entries[-1] += " " + line
        else:
            entries.append(line)

    out: List[RotorDescriptor] = []
    for entry in entries:
        parts = entry.split(None, 2)
        if len(parts) < 2 or "(" in parts[1]:
            raise ConfigurationError(f"Bad rotor description: {entry!r}")

        name, tag = parts[0].upper(), parts[1]
        cycles = parts[2] if len(parts) > 2 else ""
        kind = tag[0].upper()
        if kind not in "MNR":
            raise ConfigurationError(f"Unknown rotor type {tag!r} for {name}")
        if kind != "M" and len(tag) > 1:
            raise ConfigurationError(f"Only moving rotors take notches ({name} {tag})")

        out.append(RotorDescriptor(name, kind, tag[1:], cycles))
    return out


def parse_config(text: str) -> MachineConfig:
    lines = text.splitlines()
    while lines and not lines[0].strip():
        lines.pop(0)
    if not lines:
        raise ConfigurationError("configuration file truncated")

    alphabet = parse_alphabet(lines[0])

    rest = "\n".join(lines[1:])
    head = rest.split(None, 2)
    if len(head) < 2:
        raise ConfigurationError("configuration file truncated")
    num_rotors = _parse_int(head[0], "rotor count")
    pawls = _parse_int(head[1], "pawl count")
    body = head[2] if len(head) > 2 else ""

    descriptors = parse_descriptors(body)
    names = [d.name for d in descriptors]
    dups = sorted({n for n in names if names.count(n) > 1})
    if dups:
        raise ConfigurationError(f"Duplicate rotor name(s): {', '.join(dups)}")

    debug.log("config", f"{alphabet!r} slots={num_rotors} pawls={pawls} rotors={names}")
    return MachineConfig(alphabet, num_rotors, pawls, tuple(descriptors))


def build_rotor(desc: RotorDescriptor, alphabet: Alphabet) -> Rotor:
    perm = Permutation(desc.cycles, alphabet)
    if desc.kind == "M":
        return MovingRotor(desc.name, perm, desc.notches)
    if desc.kind == "N":
        return FixedRotor(desc.name, perm)
    return Reflector(desc.name, perm)


def build_catalog(cfg: MachineConfig) -> Dict[str, Rotor]:
    return {d.name: build_rotor(d, cfg.alphabet) for d in cfg.descriptors}


def build_machine(cfg: MachineConfig) -> Machine:
    return Machine(cfg.alphabet, cfg.num_rotors, cfg.pawls, build_catalog(cfg))


def load_machine(path: str | Path) -> Machine:
    """Build a machine from the configuration file at `path`."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"could not open {path}: {exc.strerror}") from exc
    return build_machine(parse_config(text))


# ────────────────────────────────────────────────────────────────────────
#  2. Setup lines
# ────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Setup:
    rotors: tuple[str, ...]
    positions: str
    plugboard: str


def parse_setup(line: str, num_rotors: int) -> Setup:
    """Split ``* B BETA III IV I AXLE (HQ) (EX)`` into its three parts."""
    text = line.strip()
    if not text.startswith("*"):
        raise SetupError("Setup line must start with '*'")

    tokens = text[1:].split(None, num_rotors + 1)
    if len(tokens) < num_rotors + 1:
        raise SetupError(
            f"Setup line needs {num_rotors} rotor names and a position string"
        )

    names = tuple(tokens[:num_rotors])
    if any(n.startswith("(") for n in names) or tokens[num_rotors].startswith("("):
        raise SetupError(f"Setup line needs {num_rotors} rotor names and a position string")
    plugboard = tokens[num_rotors + 1] if len(tokens) > num_rotors + 1 else ""
    return Setup(names, tokens[num_rotors], plugboard.strip())


def apply_setup(machine: Machine, line: str) -> None:
    """Parse `line` and set `machine` up from it; no change on failure."""
    setup = parse_setup(line, machine.num_rotors())
    plugboard = None
    if setup.plugboard:
        try:
            plugboard = Permutation(setup.plugboard, machine.alphabet)
        except ConfigurationError as exc:
            raise SetupError(f"Bad plugboard: {exc}") from exc
    machine.setup(setup.rotors, setup.positions, plugboard)
