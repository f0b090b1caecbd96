import copy

import pytest

from termbank.config import DEFAULT_SETTINGS
from termbank.store import Record, Store


class SequenceRandom:
    """Stand-in for random.Random returning scripted randrange results."""

    def __init__(self, values):
        self.values = list(values)

    def randrange(self, n):
        value = self.values.pop(0)
        assert 0 <= value < n, f"scripted value {value} out of range({n})"
        return value


@pytest.fixture
def sequence_random():
    return SequenceRandom


@pytest.fixture(autouse=True)
def plain_output(monkeypatch):
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.setenv("ANSI_COLORS_DISABLED", "1")


@pytest.fixture
def settings():
    return copy.deepcopy(DEFAULT_SETTINGS)


@pytest.fixture
def animals():
    return Store.from_records([
        Record("apple", ["fruit"]),
        Record("bus", ["vehicle"]),
        Record("cat", ["pet", "meows"]),
        Record("dog", ["hound"]),
        Record("eel", ["fish"]),
    ])


@pytest.fixture
def raw_glossary(tmp_path):
    path = tmp_path / "slang.txt"
    path.write_text(
        "Slag`Meaning\n"
        "cat`small pet|meows\n"
        "big house\n"
        "dog`Loyal friend\n"
        "yolo`you only live once\n",
        encoding="utf-8",
    )
    return path
