# alphabet.py
from __future__ import annotations

from debug import Debug
from errors import AlphabetError, ConfigurationError

debug = Debug()


# ── Alphabet (explicit character list) ───────────────────────────
class Alphabet:
    """An ordered set of distinct characters, indexed 0..size-1."""

    def __init__(self, chars: str) -> None:
        if not chars:
            raise ConfigurationError("Alphabet must contain at least one character")

        seen: set[str] = set()
        for ch in chars:
            if ch in seen:
                raise ConfigurationError(f"Duplicate character {ch!r} in alphabet")
            if ch.isspace() or ch in "()*":
                raise ConfigurationError(f"Character {ch!r} not allowed in alphabet")
            seen.add(ch)

        self._chars: str = chars
        self._index: dict[str, int] = {ch: i for i, ch in enumerate(chars)}

    @property
    def chars(self) -> str:
        return self._chars

    def size(self) -> int:
        return len(self._chars)

    def contains(self, ch: str) -> bool:
        return ch in self._index

    # letter → integer signal
    def to_int(self, ch: str) -> int:
        try:
            return self._index[ch]
        except KeyError:
            raise AlphabetError(
                f"Invalid character {ch!r} for current alphabet."
            ) from None

    # integer signal → letter
    def to_char(self, index: int) -> str:
        if not (0 <= index < len(self._chars)):
            hi = len(self._chars) - 1
            raise AlphabetError(f"Signal {index} out of range 0–{hi}")
        return self._chars[index]

    # ── niceties --------------------------------------------------
    __len__ = size
    __contains__ = contains

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Alphabet) and other._chars == self._chars

    def __hash__(self) -> int:
        return hash(self._chars)

    def __repr__(self) -> str:
        return f"<Alphabet {self._chars!r}>"


# ── CharacterRange ───────────────────────────────────────────────
class CharacterRange(Alphabet):
    """All characters from `first` to `last` inclusive, e.g. A-Z."""

    def __init__(self, first: str, last: str) -> None:
        if len(first) != 1 or len(last) != 1:
            raise ConfigurationError("Range ends must be single characters")
        if ord(first) > ord(last):
            raise ConfigurationError(f"Inverted character range {first}-{last}")

        super().__init__("".join(chr(c) for c in range(ord(first), ord(last) + 1)))
        self.first = first
        self.last = last

    def __repr__(self) -> str:
        return f"<CharacterRange {self.first}-{self.last}>"


def parse_alphabet(text: str) -> Alphabet:
    """Build an alphabet from a configuration line: ``X-Y`` is a range,
    anything else is the explicit list of characters."""
    line = text.strip()
    if not line:
        raise ConfigurationError("Missing alphabet")
    if len(line) == 3 and line[1] == "-":
        alpha: Alphabet = CharacterRange(line[0], line[2])
    else:
        alpha = Alphabet(line)
    debug.log("alphabet", f"{alpha!r} size={alpha.size()}")
    return alpha
