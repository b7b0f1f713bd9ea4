"""dnd-companion - D&D 5E rules engine.

The deterministic core of a tabletop companion: dice, combat arithmetic,
level progression, spell slots and spell-list caps, concentration, and
encounter turn order. Callers own their characters and encounters; the
engine takes snapshots and returns updated ones.

Example:
    >>> from dnd_companion import EncounterState, Combatant, HitPoints
    >>> from dnd_companion.engine import add_combatant, roll_initiative_for_all
    >>>
    >>> state = EncounterState()
    >>> goblin = Combatant(id="g1", name="Goblin", hit_points=HitPoints(current=7, max=7))
    >>> state = add_combatant(state, goblin)
    >>> state = roll_initiative_for_all(state)

Modules:
    core: Configuration, logging, ids and base exceptions.
    models: Pydantic V2 schemas, reference catalog and progression rules.
    engine: Dice, combat math, concentration and turn management.
"""

from __future__ import annotations

# Core
from dnd_companion.core.config import Settings, get_settings
from dnd_companion.core.exceptions import DndCompanionError
from dnd_companion.core.logging import configure_logging, get_logger

# Models
from dnd_companion.models import (
    Ability,
    AbilityScores,
    Character,
    Combatant,
    Condition,
    EncounterState,
    HitPoints,
    SpellSlotTable,
    StaticCatalog,
)

# Engine
from dnd_companion.engine import (
    RandomnessSource,
    SeededRandomnessSource,
    parse_dice_expression,
    roll_d20,
)


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "DndCompanionError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "Ability",
    "AbilityScores",
    "Character",
    "Combatant",
    "Condition",
    "EncounterState",
    "HitPoints",
    "SpellSlotTable",
    "StaticCatalog",
    # Engine
    "RandomnessSource",
    "SeededRandomnessSource",
    "parse_dice_expression",
    "roll_d20",
]
