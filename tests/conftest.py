import pytest

from alphabet import CharacterRange
from config_reader import build_machine, parse_config
from suites import NAVAL


@pytest.fixture
def upper():
    return CharacterRange("A", "Z")


@pytest.fixture
def naval_config():
    return parse_config(NAVAL)


@pytest.fixture
def naval(naval_config):
    return build_machine(naval_config)
