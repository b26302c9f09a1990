"""Tests for configuration checks and command-line options."""

from pathlib import Path

import pytest

import main
from backend import config


# --- Decimal separator ---

@pytest.mark.parametrize("value", [",", "."])
def test_valid_separators(value):
    assert config.decimal_separator(value) == value


@pytest.mark.parametrize("value", ["", ";", "1"])
def test_invalid_separator(value):
    with pytest.raises(ValueError):
        config.decimal_separator(value)


def test_env_separator_used(monkeypatch):
    monkeypatch.setenv("CALC_DECIMAL_SEPARATOR", ".")
    assert config._separator_from_env() == "."


@pytest.mark.parametrize("value", ["", ";"])
def test_bad_env_separator_falls_back(monkeypatch, caplog, value):
    monkeypatch.setenv("CALC_DECIMAL_SEPARATOR", value)
    with caplog.at_level("WARNING", logger="backend.config"):
        assert config._separator_from_env() == ","
    assert "CALC_DECIMAL_SEPARATOR" in caplog.text


# --- Command line ---

def test_parse_args_defaults():
    args = main.parse_args([])
    assert args.decimal_separator in config.DECIMAL_SEPARATORS
    assert args.history_file == config.HISTORY_FILE
    assert not args.debug


def test_parse_args_options(tmp_path):
    args = main.parse_args(["--decimal-separator", ".", "--history-file", str(tmp_path / "h.json"), "--debug"])
    assert args.decimal_separator == "."
    assert args.history_file == Path(tmp_path / "h.json")
    assert args.debug


@pytest.mark.parametrize("value", ["", ";"])
def test_parse_args_rejects_separator(value):
    with pytest.raises(SystemExit):
        main.parse_args(["--decimal-separator", value])
