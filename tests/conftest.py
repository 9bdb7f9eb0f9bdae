"""Shared fixtures: every test gets its own config and data directories."""

import pytest

import braindump.categorizer as categorizer_module
from braindump.categorizer import Categorizer
from braindump.db import Database


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Point config and data dirs at tmp_path and disable colors."""
    home = tmp_path / "braindump"
    monkeypatch.setenv("BRAINDUMP_HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.setattr(categorizer_module, "_default_categorizer", None)
    return home


@pytest.fixture
def categorizer():
    return Categorizer()


@pytest.fixture
def db(tmp_path):
    return Database(tmp_path / "test.db")
