"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from hexwizards.config import Settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("HEXWIZARDS_BOARD_WIDTH", raising=False)

    settings = Settings(_env_file=None)

    assert settings.board_width == 30
    assert settings.max_automatic_turns == 64
    assert settings.seed is None


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("HEXWIZARDS_BOARD_WIDTH", "12")
    monkeypatch.setenv("HEXWIZARDS_SEED", "fixed")

    settings = Settings(_env_file=None)

    assert settings.board_width == 12
    assert settings.seed == "fixed"


def test_continent_widths_validated():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, min_continent_width=4, max_continent_width=4)


def test_board_width_bounds():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, board_width=1)
