# rotor_and_reflector.py
from __future__ import annotations

from alphabet import Alphabet
from debug import Debug
from errors import ConfigurationError, SetupError
from permutation import Permutation

debug = Debug()


class Rotor:
    """Shared contract of the three wheel kinds.

    Only `MovingRotor`, `FixedRotor` and `Reflector` are instantiated; this
    base holds the wiring, the rotational setting and the signal paths.
    """

    def __init__(self, name: str, perm: Permutation) -> None:
        self.name = name.upper()
        self.perm = perm
        self.setting = 0

    @property
    def alphabet(self) -> Alphabet:
        return self.perm.alphabet

    # ── kind queries ----------------------------------------------
    def rotates(self) -> bool:
        return False

    def reflecting(self) -> bool:
        return False

    def at_notch(self) -> bool:
        return False

    # ── position ---------------------------------------------------
    def set(self, posn: int | str) -> None:
        """Set the setting from an index or from an alphabet character."""
        if isinstance(posn, str):
            posn = self.alphabet.to_int(posn)
        else:
            self.alphabet.to_char(posn)
        self.setting = posn

    def reset(self) -> None:
        self.setting = 0

    def advance(self) -> None:
        """Non-advancing wheels ignore this."""

    @property
    def window(self) -> str:
        """The character currently showing at the setting."""
        return self.alphabet.to_char(self.setting)

    # ── signal paths ---------------------------------------------
    def convert_forward(self, p: int) -> int:
        wrap = self.perm.wrap
        return wrap(self.perm.permute(wrap(p + self.setting)) - self.setting)

    def convert_backward(self, c: int) -> int:
        wrap = self.perm.wrap
        return wrap(self.perm.invert(wrap(c + self.setting)) - self.setting)

    # ── niceties --------------------------------------------------
    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name} pos={self.setting}>"


class MovingRotor(Rotor):
    def __init__(self, name: str, perm: Permutation, notches: str) -> None:
        super().__init__(name, perm)
        if not set(notches) <= set(perm.alphabet.chars):
            raise ConfigurationError(f"Notch characters of {self.name} must be in the alphabet")
        self.notches = frozenset(notches)

    def rotates(self) -> bool:
        return True

    def at_notch(self) -> bool:
        return self.window in self.notches

    def advance(self) -> None:
        self.setting = self.perm.wrap(self.setting + 1)
        debug.log("rotor", f"{self.name} -> {self.window}")

    def __repr__(self) -> str:
        notches = "".join(sorted(self.notches))
        return f"<MovingRotor {self.name} pos={self.setting} notches={notches!r}>"


class FixedRotor(Rotor):
    """Stationary wheel (e.g. the naval Beta/Gamma); may be set, never steps."""


class Reflector(Rotor):
    def __init__(self, name: str, perm: Permutation) -> None:
        super().__init__(name, perm)
        if not perm.derangement():
            raise ConfigurationError(f"Reflector {self.name} wiring must have no fixed points")

    def reflecting(self) -> bool:
        return True

    def set(self, posn: int | str) -> None:
        if isinstance(posn, str):
            posn = self.alphabet.to_int(posn)
        else:
            self.alphabet.to_char(posn)
        if posn != 0:
            raise SetupError(f"Reflector {self.name} has only one position")
        self.setting = 0
