"""Configuration management for the companion rules engine.

Settings are loaded with pydantic-settings from environment variables and
an optional ``.env`` file. The game settings carry the product decisions
the rules leave open (how to treat malformed dice, how to break initiative
ties) so that callers can change them without code changes.

Example:
    >>> from dnd_companion.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.game.dice_parse_policy
    'lenient'

Environment Variables:
    DND_COMPANION_DEBUG: Force DEBUG logging
    DND_COMPANION_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    DND_COMPANION_LOG_JSON: Emit JSON log lines
    DND_COMPANION_GAME_DICE_PARSE_POLICY: 'lenient' or 'strict'
    DND_COMPANION_GAME_INITIATIVE_TIEBREAK: 'bonus' or 'insertion'
    DND_COMPANION_GAME_HP_GAIN_MODE: 'average' or 'rolled'
    DND_COMPANION_GAME_RNG_SEED: Optional integer seed for reproducible rolls
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from dnd_companion.core.exceptions import ConfigurationError


class GameSettings(BaseSettings):
    """Configuration for rules-engine behaviour.

    Attributes:
        dice_parse_policy: How malformed dice expressions are handled.
        initiative_tiebreak: How equal initiative totals are ordered.
        hp_gain_mode: Default hit-point gain method on level-up.
        rng_seed: Seed for the default randomness source, if any.
    """

    model_config = SettingsConfigDict(
        env_prefix="DND_COMPANION_GAME_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    dice_parse_policy: Literal["lenient", "strict"] = Field(
        default="lenient",
        description="Degrade malformed dice to zero, or raise DiceRollError",
    )
    initiative_tiebreak: Literal["bonus", "insertion"] = Field(
        default="bonus",
        description="Initiative tie-break rule",
    )
    hp_gain_mode: Literal["average", "rolled"] = Field(
        default="average",
        description="Default hit-point gain on level-up",
    )
    rng_seed: int | None = Field(
        default=None,
        description="Seed for reproducible rolls",
    )


class Settings(BaseSettings):
    """Main engine settings.

    Attributes:
        app_name: Application name.
        debug: Force DEBUG logging regardless of log_level.
        log_level: Application logging level.
        log_json: Emit logs as JSON lines.
        game: Rules-engine settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="DND_COMPANION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="D&D 5E Companion",
        description="Application name",
    )
    debug: bool = Field(
        default=False,
        description="Force DEBUG logging",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_json: bool = Field(
        default=False,
        description="Emit JSON log lines",
    )

    game: GameSettings = Field(default_factory=GameSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the settings singleton.

    Returns:
        The cached Settings instance.

    Raises:
        ConfigurationError: If configuration values are invalid.
    """
    try:
        return Settings()
    except ValidationError as exc:
        errors = exc.errors()
        config_key = ".".join(str(part) for part in errors[0]["loc"]) if errors else None
        raise ConfigurationError(
            f"Invalid setting {config_key}: {exc}",
            config_key=config_key,
            details={"original_error": str(exc)},
        ) from exc
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access.

    Primarily useful for tests that change environment variables.
    """
    get_settings.cache_clear()


__all__ = [
    "GameSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
