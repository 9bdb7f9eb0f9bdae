"""Tests for configuration loading."""

import pytest

from braindump.categorizer import Categorizer
from braindump.config import (
    get_config_path,
    get_db_path,
    get_default_config,
    load_config,
    merge_config,
)
from braindump.errors import ConfigError


def write_config(text: str) -> None:
    path = get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def test_paths_follow_environment(tmp_path, isolated_home):
    assert get_config_path() == tmp_path / "config" / "braindump" / "config.toml"
    assert get_db_path() == isolated_home / "braindump.db"


def test_defaults_without_file():
    config = load_config()

    assert config == get_default_config()
    assert config["categorizer"]["fallback"] == "notatka"
    assert config["categorizer"]["confidence_divisor"] == 15


def test_file_merged_over_defaults():
    write_config("""
[categorizer]
confidence_divisor = 10

[categories.zakupy]
keywords = ["Biedronka"]
patterns = ['(?i)\\bkoszyk\\b']
""")

    config = load_config()

    assert config["categorizer"] == {"fallback": "notatka", "confidence_divisor": 10}
    assert config["display"]["limit"] == 50
    assert config["categories"]["zakupy"]["keywords"] == ["Biedronka"]

    categorizer = Categorizer.from_config(config)
    assert categorizer.categorize("mam koszyk").category == "zakupy"
    assert categorizer.categorize("mam koszyk").confidence == pytest.approx(3 / 10)


def test_invalid_toml():
    write_config("[categorizer\nfallback = ")

    with pytest.raises(ConfigError):
        load_config()


def test_merge_config_does_not_mutate_base():
    base = {"a": {"b": 1, "c": 2}}

    merged = merge_config(base, {"a": {"b": 5}, "d": 1})

    assert merged == {"a": {"b": 5, "c": 2}, "d": 1}
    assert base == {"a": {"b": 1, "c": 2}}
