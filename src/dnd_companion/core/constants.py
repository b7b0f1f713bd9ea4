"""Rules constants for the D&D 5E companion engine."""

from __future__ import annotations

# =============================================================================
# Ability Scores
# =============================================================================

PC_ABILITY_SCORE_CAP = 20
"""Maximum ability score reachable through ability score improvements."""

MONSTER_ABILITY_SCORE_CAP = 30
"""Maximum ability score for any creature."""

MIN_ABILITY_SCORE = 1
"""Minimum ability score."""

# =============================================================================
# Levels
# =============================================================================

MAX_CHARACTER_LEVEL = 20
"""Maximum character level in D&D 5E."""

MIN_CHARACTER_LEVEL = 1
"""Minimum character level."""

# =============================================================================
# Dice & Combat
# =============================================================================

D20_SIDES = 20
"""Faces on the d20; a natural roll of this value is a critical hit."""

NATURAL_FUMBLE = 1
"""A natural roll of 1 on an attack is an automatic miss."""

SPELL_SAVE_DC_BASE = 8
"""Base of the spell save DC formula."""

MIN_CONCENTRATION_DC = 10
"""Concentration checks never have a DC below this."""

INDEFINITE_DURATION = -1
"""Condition duration marker for effects that never tick down."""

MAX_SPELL_LEVEL = 9
"""Highest spell slot tier."""


__all__ = [
    "PC_ABILITY_SCORE_CAP",
    "MONSTER_ABILITY_SCORE_CAP",
    "MIN_ABILITY_SCORE",
    "MAX_CHARACTER_LEVEL",
    "MIN_CHARACTER_LEVEL",
    "D20_SIDES",
    "NATURAL_FUMBLE",
    "SPELL_SAVE_DC_BASE",
    "MIN_CONCENTRATION_DC",
    "INDEFINITE_DURATION",
    "MAX_SPELL_LEVEL",
]
