"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        DndCompanionError: Base exception for all engine errors.
        ConfigurationError: Configuration-related errors.

    Configuration:
        Settings: Main settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Identifiers:
        IdGenerator: Callable supplying ids for new records.
        uuid_id_generator: Default uuid4 id generator.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from dnd_companion.core.config import (
    GameSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from dnd_companion.core.exceptions import (
    CatalogLookupError,
    CombatError,
    ConfigurationError,
    DiceRollError,
    DndCompanionError,
    GameEngineError,
    SpellSlotError,
    TurnManagementError,
)
from dnd_companion.core.ids import IdGenerator, uuid_id_generator
from dnd_companion.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)


__all__ = [
    # Base exception
    "DndCompanionError",
    # Configuration exceptions
    "ConfigurationError",
    # Game engine exceptions
    "GameEngineError",
    "CombatError",
    "DiceRollError",
    "TurnManagementError",
    "SpellSlotError",
    "CatalogLookupError",
    # Configuration
    "Settings",
    "GameSettings",
    "get_settings",
    "clear_settings_cache",
    # Identifiers
    "IdGenerator",
    "uuid_id_generator",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
