import pytest

from alphabet import Alphabet, CharacterRange, parse_alphabet
from errors import AlphabetError, ConfigurationError


def test_range_round_trip(upper):
    assert upper.size() == 26
    assert len(upper) == 26
    for i in range(upper.size()):
        assert upper.to_int(upper.to_char(i)) == i
    assert upper.to_char(0) == "A"
    assert upper.to_int("Z") == 25


def test_explicit_list_keeps_order():
    alpha = Alphabet("ZYX-!")
    assert alpha.to_int("Z") == 0
    assert alpha.to_char(3) == "-"
    assert alpha.contains("!")
    assert "a" not in alpha


def test_lookups_outside_alphabet(upper):
    with pytest.raises(AlphabetError):
        upper.to_int("a")
    with pytest.raises(AlphabetError):
        upper.to_char(26)
    with pytest.raises(AlphabetError):
        upper.to_char(-1)
    # also usable as a plain LookupError
    with pytest.raises(LookupError):
        upper.to_int("1")


def test_bad_alphabets():
    with pytest.raises(ConfigurationError):
        Alphabet("ABCA")
    with pytest.raises(ConfigurationError):
        Alphabet("")
    with pytest.raises(ConfigurationError):
        Alphabet("AB(C)")
    with pytest.raises(ConfigurationError):
        CharacterRange("Z", "A")


def test_parse_alphabet():
    assert isinstance(parse_alphabet("A-Z"), CharacterRange)
    assert parse_alphabet(" A-E \n").chars == "ABCDE"
    assert parse_alphabet("ABC123").chars == "ABC123"
    assert parse_alphabet("A-Z") == Alphabet("ABCDEFGHIJKLMNOPQRSTUVWXYZ")
    with pytest.raises(ConfigurationError):
        parse_alphabet("   ")
