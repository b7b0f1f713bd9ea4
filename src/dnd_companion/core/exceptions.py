"""Custom exception hierarchy for the D&D 5E companion rules engine.

The engine favours total functions: malformed dice degrade to zero, weapon
resolution returns ``None`` and capacity limits come back as structured
results. The exceptions below cover the remaining cases where a caller
passed something the engine cannot act on. All of them inherit from
DndCompanionError so callers can catch engine errors in one place.

Example:
    >>> from dnd_companion.core.exceptions import DiceRollError
    >>> raise DiceRollError("Unparseable dice", expression="2x6")
"""

from __future__ import annotations

from typing import Any


class DndCompanionError(Exception):
    """Base exception for all companion engine errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Game Engine Domain Exceptions
# =============================================================================


class GameEngineError(DndCompanionError):
    """Base exception for rules-engine errors."""


class DiceRollError(GameEngineError):
    """Raised when a dice expression cannot be used.

    Only raised under the strict dice-parse policy; the lenient policy
    degrades malformed input to a zero result instead.
    """

    def __init__(
        self,
        message: str,
        *,
        expression: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize dice roll error with expression context.

        Args:
            message: Human-readable error description.
            expression: The dice expression that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if expression is not None:
            combined_details["expression"] = expression
        super().__init__(message, details=combined_details)


class CombatError(GameEngineError):
    """Raised when combat resolution is asked to do something impossible.

    This includes applying negative damage or conditions with an invalid
    duration.
    """

    def __init__(
        self,
        message: str,
        *,
        combatant_id: str | None = None,
        round_number: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize combat error with combat context.

        Args:
            message: Human-readable error description.
            combatant_id: Identifier of the combatant involved.
            round_number: Current combat round when error occurred.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if combatant_id:
            combined_details["combatant_id"] = combatant_id
        if round_number is not None:
            combined_details["round_number"] = round_number
        super().__init__(message, details=combined_details)


class TurnManagementError(GameEngineError):
    """Raised when turn order bookkeeping is given an unknown combatant."""


class SpellSlotError(GameEngineError):
    """Raised when a spell slot is expended that is not available."""

    def __init__(
        self,
        message: str,
        *,
        slot_level: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize spell slot error with slot context.

        Args:
            message: Human-readable error description.
            slot_level: The slot tier (1-9) involved.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if slot_level is not None:
            combined_details["slot_level"] = slot_level
        super().__init__(message, details=combined_details)


class CatalogLookupError(GameEngineError):
    """Raised when a required reference-catalog entry does not exist."""

    def __init__(
        self,
        message: str,
        *,
        entry_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if entry_id:
            combined_details["entry_id"] = entry_id
        super().__init__(message, details=combined_details)


# =============================================================================
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(DndCompanionError):
    """Raised when engine configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


__all__ = [
    # Base exception
    "DndCompanionError",
    # Game engine exceptions
    "GameEngineError",
    "DiceRollError",
    "CombatError",
    "TurnManagementError",
    "SpellSlotError",
    "CatalogLookupError",
    # Configuration exceptions
    "ConfigurationError",
]
