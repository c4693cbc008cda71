# machine.py  ─────────────────────────────────────────────────────
from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from copy import deepcopy
from types import MappingProxyType

from alphabet import Alphabet
from debug import Debug
from errors import ConfigurationError, SetupError
from permutation import Permutation
from rotor_and_reflector import Rotor

debug = Debug()


class Machine:
    """A rotor machine: reflector at slot 0, moving rotors on the right.

    `all_rotors` is the catalog of wheels the machine may draw from; every
    insertion takes fresh copies, so catalog entries are never mutated.
    """

    def __init__(
        self,
        alphabet: Alphabet,
        num_rotors: int,
        pawls: int,
        all_rotors: Mapping[str, Rotor] | Iterable[Rotor],
    ) -> None:
        if num_rotors <= 1:
            raise ConfigurationError("Machine needs more than one rotor slot")
        if not (0 <= pawls < num_rotors):
            raise ConfigurationError(f"Pawl count must be in 0..{num_rotors - 1}")

        if not isinstance(all_rotors, Mapping):
            catalog: dict[str, Rotor] = {}
            for rotor in all_rotors:
                if rotor.name in catalog:
                    raise ConfigurationError(f"Duplicate rotor name {rotor.name}")
                catalog[rotor.name] = rotor
            all_rotors = catalog

        for rotor in all_rotors.values():
            if rotor.alphabet != alphabet:
                raise ConfigurationError(f"Rotor {rotor.name} uses a different alphabet")

        self.alphabet = alphabet
        self._num_rotors = num_rotors
        self._pawls = pawls
        self._all_rotors: Mapping[str, Rotor] = MappingProxyType(
            {name.upper(): rotor for name, rotor in all_rotors.items()}
        )
        self._rotors: list[Rotor] = []
        self._plugboard: Permutation | None = None

    # ── accessors ───────────────────────────────────────────────

    def num_rotors(self) -> int:
        return self._num_rotors

    def num_pawls(self) -> int:
        return self._pawls

    @property
    def all_rotors(self) -> Mapping[str, Rotor]:
        return self._all_rotors

    @property
    def rotors(self) -> tuple[Rotor, ...]:
        return tuple(self._rotors)

    @property
    def plugboard(self) -> Permutation | None:
        return self._plugboard

    def positions(self) -> str:
        """Window letters of every rotor right of the reflector."""
        return "".join(r.window for r in self._rotors[1:])

    # ── setup ───────────────────────────────────────────────────

    def insert_rotors(self, names: Sequence[str]) -> None:
        """Replace the rotor stack with the rotors called `names`
        (names[0] is the reflector). All rotors start at setting 0."""
        self._rotors = self._build_stack(names)
        debug.log("config", f"inserted {[r.name for r in self._rotors]}")

    def set_rotors(self, setting: str) -> None:
        """Set rotors 1.. from `setting`, leftmost first."""
        self._check_setting(setting)
        self._apply_setting(self._rotors, setting)

    def set_plugboard(self, plugboard: Permutation | None) -> None:
        self._check_plugboard(plugboard)
        self._plugboard = plugboard

    def setup(
        self,
        names: Sequence[str],
        setting: str,
        plugboard: Permutation | None = None,
    ) -> None:
        """Insert, position and plug in one step; nothing changes on failure."""
        stack = self._build_stack(names)
        self._check_setting(setting)
        self._check_plugboard(plugboard)

        self._apply_setting(stack, setting)
        self._rotors = stack
        self._plugboard = plugboard
        debug.log("config", f"setup {[r.name for r in stack]} at {setting} plugboard={plugboard!r}")

    def _build_stack(self, names: Sequence[str]) -> list[Rotor]:
        if len(names) != self._num_rotors:
            raise SetupError(
                f"Expected {self._num_rotors} rotors, got {len(names)}"
            )

        stack: list[Rotor] = []
        seen: set[str] = set()
        for name in names:
            key = name.upper()
            if key in seen:
                raise SetupError(f"Rotor {name} used more than once")
            seen.add(key)
            try:
                blueprint = self._all_rotors[key]
            except KeyError:
                raise SetupError(f"Unknown rotor {name!r}") from None
            rotor = deepcopy(blueprint)
            rotor.reset()
            stack.append(rotor)

        if not stack[0].reflecting():
            raise SetupError(f"First rotor {stack[0].name} must be a reflector")

        first_moving = self._num_rotors - self._pawls
        for i, rotor in enumerate(stack[1:], start=1):
            if rotor.reflecting():
                raise SetupError(f"Reflector {rotor.name} can only sit in slot 0")
            if rotor.rotates() != (i >= first_moving):
                raise SetupError(
                    f"Need exactly {self._pawls} moving rotors in the rightmost slots"
                )
        return stack

    def _check_setting(self, setting: str) -> None:
        if len(setting) != self._num_rotors - 1:
            raise SetupError("Initial positions string wrong length")
        for ch in setting:
            if not self.alphabet.contains(ch):
                raise SetupError(f"Initial position {ch!r} not in alphabet")

    def _check_plugboard(self, plugboard: Permutation | None) -> None:
        if plugboard is not None and plugboard.alphabet != self.alphabet:
            raise SetupError("Plugboard uses a different alphabet")

    @staticmethod
    def _apply_setting(stack: list[Rotor], setting: str) -> None:
        if not stack:
            raise SetupError("No rotors inserted")
        for rotor, ch in zip(stack[1:], setting):
            rotor.set(ch)

    # ── stepping logic  ─────────────────────────────────────────

    def _advance_rotors(self) -> None:
        """Advance rotors one key-press.

        Decide every step from the current positions first, then apply, so
        a rotor at its own notch carries its left neighbour and steps itself
        in the same key-press (double step).
        """
        if self._pawls == 0:
            return

        rotors = self._rotors
        last = self._num_rotors - 1
        stepping = [
            i
            for i in range(self._num_rotors - self._pawls, last)
            if (rotors[i].at_notch() and rotors[i - 1].rotates())
            or rotors[i + 1].at_notch()
        ]
        stepping.append(last)

        for i in stepping:
            rotors[i].advance()
        if debug.active("stepping"):
            debug.log("stepping", f"stepped {stepping} -> {self.positions()}")

    # ── encipher  ───────────────────────────────────────────────

    def convert(self, c: int) -> int:
        """Advance the machine, then run index `c` through the signal path."""
        if not self._rotors:
            raise SetupError("Machine has no rotors inserted")
        self.alphabet.to_char(c)

        self._advance_rotors()

        signal = c
        if self._plugboard is not None:
            signal = self._plugboard.permute(signal)
            debug.log("plugboard", f"in  {c} -> {signal}")

        for rotor in reversed(self._rotors):
            signal = rotor.convert_forward(signal)

        for rotor in self._rotors[1:]:
            signal = rotor.convert_backward(signal)

        if self._plugboard is not None:
            out = self._plugboard.permute(signal)
            debug.log("plugboard", f"out {signal} -> {out}")
            signal = out

        if debug.active("encipher"):
            debug.log("encipher", f"{c} -> {signal} at {self.positions()}")
        return signal

    def convert_message(self, msg: str) -> str:
        """Encipher `msg`; whitespace is dropped, characters outside the
        alphabet pass through without stepping the rotors."""
        out: list[str] = []
        for ch in msg:
            if ch.isspace():
                continue
            if self.alphabet.contains(ch):
                out.append(self.alphabet.to_char(self.convert(self.alphabet.to_int(ch))))
            else:
                out.append(ch)
        return "".join(out)

    def __repr__(self) -> str:
        names = " ".join(r.name for r in self._rotors) or "-"
        return f"<Machine slots={self._num_rotors} pawls={self._pawls} rotors={names}>"
