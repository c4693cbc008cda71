# permutation.py
from __future__ import annotations

import re

from alphabet import Alphabet
from debug import Debug
from errors import ConfigurationError

debug = Debug()

_cycle_re = re.compile(r"\s*\(([^()\s]*)\)\s*")


def parse_cycles(cycles: str) -> list[str]:
    """Split ``"(ABC) (DE)"`` into ``["ABC", "DE"]``.

    Whitespace between groups is ignored; anything else outside a group,
    an empty group, or an unbalanced parenthesis is an error.
    """
    out: list[str] = []
    pos = 0
    while pos < len(cycles):
        m = _cycle_re.match(cycles, pos)
        if m is None:
            if cycles[pos:].isspace():
                break
            raise ConfigurationError(f"Malformed cycle notation near {cycles[pos:]!r}")
        if not m.group(1):
            raise ConfigurationError("Empty cycle '()' in permutation")
        out.append(m.group(1))
        pos = m.end()
    return out


class Permutation:
    """A permutation of the alphabet's indices given in cycle notation.

    Characters that appear in no cycle map to themselves.
    """

    def __init__(self, cycles: str, alphabet: Alphabet) -> None:
        self.alphabet = alphabet
        self._cycles: tuple[str, ...] = tuple(parse_cycles(cycles))

        size = alphabet.size()
        self._fwd = list(range(size))
        self._rev = list(range(size))
        used: set[str] = set()

        for cycle in self._cycles:
            for ch in cycle:
                if not alphabet.contains(ch):
                    raise ConfigurationError(f"Symbol {ch!r} in cycle ({cycle}) not in alphabet")
                if ch in used:
                    raise ConfigurationError(f"Character {ch!r} appears in more than one cycle")
                used.add(ch)

        for cycle in self._cycles:
            for i, ch in enumerate(cycle):
                nxt = cycle[(i + 1) % len(cycle)]
                a, b = alphabet.to_int(ch), alphabet.to_int(nxt)
                self._fwd[a] = b
                self._rev[b] = a

        debug.log("permutation", f"{self!r}")

    # ── helpers ---------------------------------------------------
    def size(self) -> int:
        return self.alphabet.size()

    def wrap(self, p: int) -> int:
        """Return `p` modulo the alphabet size, never negative."""
        return p % self.size()

    @property
    def cycles(self) -> tuple[str, ...]:
        return self._cycles

    # ── index forms ----------------------------------------------
    def permute(self, p: int) -> int:
        return self._fwd[self.wrap(p)]

    def invert(self, c: int) -> int:
        return self._rev[self.wrap(c)]

    # ── character forms ------------------------------------------
    def permute_char(self, p: str) -> str:
        return self.alphabet.to_char(self.permute(self.alphabet.to_int(p)))

    def invert_char(self, c: str) -> str:
        return self.alphabet.to_char(self.invert(self.alphabet.to_int(c)))

    def derangement(self) -> bool:
        """True iff no character maps to itself."""
        return all(i != j for i, j in enumerate(self._fwd))

    # ── niceties --------------------------------------------------
    def __repr__(self) -> str:
        body = " ".join(f"({c})" for c in self._cycles)
        return f"<Permutation {body}>"
