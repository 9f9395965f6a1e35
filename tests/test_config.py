"""
Tests for Game Configuration
"""

import dataclasses

import pytest
from detective_quest.config import (
    GAME_CONFIG,
    GameConfig,
    get_case_file_path,
    is_debug_enabled,
)


class TestGameConfig:
    def test_defaults(self):
        assert GAME_CONFIG.hash_table_size == 101
        assert GAME_CONFIG.guilty_threshold == 2

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            GAME_CONFIG.guilty_threshold = 1

    def test_override(self):
        assert GameConfig(hash_table_size=7).hash_table_size == 7


class TestEnvironment:
    """Test settings read from environment variables."""

    @pytest.mark.parametrize("value", ["1", "true", "YES", " on "])
    def test_debug_enabled(self, monkeypatch, value):
        monkeypatch.setenv("DETECTIVE_DEBUG", value)
        assert is_debug_enabled() == True

    @pytest.mark.parametrize("value", ["", "0", "no", "false"])
    def test_debug_disabled(self, monkeypatch, value):
        monkeypatch.setenv("DETECTIVE_DEBUG", value)
        assert is_debug_enabled() == False

    def test_case_file_path(self, monkeypatch):
        monkeypatch.setenv("DETECTIVE_CASE_FILE", " cases/boathouse.yaml ")
        assert get_case_file_path() == "cases/boathouse.yaml"

    def test_case_file_unset(self, monkeypatch):
        monkeypatch.delenv("DETECTIVE_CASE_FILE", raising=False)
        assert get_case_file_path() is None
