"""Tests for configuration management."""

from __future__ import annotations

from pathlib import Path

import pytest

from dnd_companion.core.config import (
    GameSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from dnd_companion.core.exceptions import ConfigurationError


class TestGameSettings:
    """Tests for GameSettings configuration."""

    def test_default_values(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test default rules-engine settings."""
        monkeypatch.chdir(tmp_path)

        settings = GameSettings()

        assert settings.dice_parse_policy == "lenient"
        assert settings.initiative_tiebreak == "bonus"
        assert settings.hp_gain_mode == "average"
        assert settings.rng_seed is None

    def test_env_overrides(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test game settings read their own env prefix."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("DND_COMPANION_GAME_DICE_PARSE_POLICY", "strict")
        monkeypatch.setenv("DND_COMPANION_GAME_RNG_SEED", "99")

        settings = GameSettings()

        assert settings.dice_parse_policy == "strict"
        assert settings.rng_seed == 99


class TestSettings:
    """Tests for main Settings configuration."""

    def test_default_settings(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test default settings initialization."""
        monkeypatch.chdir(tmp_path)

        settings = Settings()

        assert settings.app_name == "D&D 5E Companion"
        assert settings.debug is False
        assert settings.log_level == "INFO"
        assert settings.log_json is False
        assert isinstance(settings.game, GameSettings)

    def test_env_vars(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        mock_env_vars: dict[str, str],
    ) -> None:
        """Test settings pick up environment variables."""
        monkeypatch.chdir(tmp_path)

        settings = Settings()

        assert settings.debug is True
        assert settings.log_level == "DEBUG"
        assert settings.game.dice_parse_policy == "strict"
        assert settings.game.initiative_tiebreak == "insertion"
        assert settings.game.rng_seed == 1234


class TestGetSettings:
    """Tests for get_settings singleton function."""

    def test_caching(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that settings are cached."""
        monkeypatch.chdir(tmp_path)

        assert get_settings() is get_settings()

    def test_cache_clear(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that cache can be cleared."""
        monkeypatch.chdir(tmp_path)

        settings1 = get_settings()
        clear_settings_cache()
        settings2 = get_settings()

        assert settings1 is not settings2

    def test_invalid_value_raises_configuration_error(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test invalid settings are wrapped in ConfigurationError."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("DND_COMPANION_LOG_LEVEL", "LOUD")

        with pytest.raises(ConfigurationError) as exc_info:
            get_settings()

        assert "original_error" in exc_info.value.details
        assert exc_info.value.details["config_key"] == "log_level"
