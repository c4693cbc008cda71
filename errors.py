# errors.py
from __future__ import annotations


class EnigmaError(ValueError):
    """Base class for every error raised by the machine core."""


class ConfigurationError(EnigmaError):
    """Bad alphabet, slot counts, rotor descriptor or cycle notation."""


class SetupError(EnigmaError):
    """A setup line (rotor choice, positions, plugboard) cannot be applied."""


class AlphabetError(EnigmaError, LookupError):
    """A character or index outside the alphabet's domain."""
