import logging

import pytest

from debug import Debug


@pytest.fixture
def dbg():
    d = Debug()
    saved = d.status()
    yield d
    for name, state in saved.items():
        (d.enable if state else d.disable)(name)
    d.toggle_global(True)


def test_switches_are_shared(dbg):
    other = Debug()
    dbg.enable("stepping")
    assert other.status()["stepping"] is True
    other.toggle("stepping")
    assert dbg.status()["stepping"] is False


def test_unknown_component(dbg):
    with pytest.raises(ValueError):
        dbg.enable("flux-capacitor")


def test_log_respects_switches(dbg, caplog):
    caplog.set_level(logging.DEBUG, logger="ENIGMA")
    dbg.log("rotor", "hidden")
    dbg.enable("rotor")
    dbg.log("rotor", "shown")
    dbg.toggle_global(False)
    dbg.log("rotor", "muted")
    messages = [r.getMessage() for r in caplog.records]
    assert messages == ["[ROTOR] shown"]


def test_stepping_log_from_machine(dbg, naval, caplog):
    caplog.set_level(logging.DEBUG, logger="ENIGMA")
    dbg.enable("stepping")
    naval.setup(["B", "BETA", "I", "II", "III"], "AADU")
    naval.convert_message("AAA")
    stepping = [r.getMessage() for r in caplog.records if "[STEPPING]" in r.getMessage()]
    assert len(stepping) == 3
    assert stepping[-1].endswith("ABFX")
