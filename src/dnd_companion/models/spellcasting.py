"""D&D 5E spellcasting rules.

Spell-slot tables for full, half and pact casters, slot expenditure and
recovery on rests, and the known/prepared spell caps that limit how many
leveled spells a character may hold. Caps are reported as structured
``CapacityCheck`` results so callers can show the limit and current usage.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from dnd_companion.core.constants import MAX_CHARACTER_LEVEL, MAX_SPELL_LEVEL, MIN_CHARACTER_LEVEL
from dnd_companion.core.exceptions import SpellSlotError
from dnd_companion.core.logging import get_logger
from dnd_companion.models.catalog import ReferenceCatalog, default_catalog, require_class
from dnd_companion.models.character import KnownSpell, SpellSlot, SpellSlotTable
from dnd_companion.models.enums import CasterShape, Skill, SpellcastingMode
from dnd_companion.models.progression import ability_modifier


logger = get_logger(__name__)


# =============================================================================
# Spell Slot Tables (PHB)
# =============================================================================

# Bard, Cleric, Druid, Sorcerer, Wizard
FULL_CASTER_SLOTS: dict[int, dict[int, int]] = {
    1:  {1: 2},
    2:  {1: 3},
    3:  {1: 4, 2: 2},
    4:  {1: 4, 2: 3},
    5:  {1: 4, 2: 3, 3: 2},
    6:  {1: 4, 2: 3, 3: 3},
    7:  {1: 4, 2: 3, 3: 3, 4: 1},
    8:  {1: 4, 2: 3, 3: 3, 4: 2},
    9:  {1: 4, 2: 3, 3: 3, 4: 3, 5: 1},
    10: {1: 4, 2: 3, 3: 3, 4: 3, 5: 2},
    11: {1: 4, 2: 3, 3: 3, 4: 3, 5: 2, 6: 1},
    12: {1: 4, 2: 3, 3: 3, 4: 3, 5: 2, 6: 1},
    13: {1: 4, 2: 3, 3: 3, 4: 3, 5: 2, 6: 1, 7: 1},
    14: {1: 4, 2: 3, 3: 3, 4: 3, 5: 2, 6: 1, 7: 1},
    15: {1: 4, 2: 3, 3: 3, 4: 3, 5: 2, 6: 1, 7: 1, 8: 1},
    16: {1: 4, 2: 3, 3: 3, 4: 3, 5: 2, 6: 1, 7: 1, 8: 1},
    17: {1: 4, 2: 3, 3: 3, 4: 3, 5: 2, 6: 1, 7: 1, 8: 1, 9: 1},
    18: {1: 4, 2: 3, 3: 3, 4: 3, 5: 3, 6: 1, 7: 1, 8: 1, 9: 1},
    19: {1: 4, 2: 3, 3: 3, 4: 3, 5: 3, 6: 2, 7: 1, 8: 1, 9: 1},
    20: {1: 4, 2: 3, 3: 3, 4: 3, 5: 3, 6: 2, 7: 2, 8: 1, 9: 1},
}

# Paladin, Ranger (no slots at level 1)
HALF_CASTER_SLOTS: dict[int, dict[int, int]] = {
    1:  {},
    2:  {1: 2},
    3:  {1: 3},
    4:  {1: 3},
    5:  {1: 4, 2: 2},
    6:  {1: 4, 2: 2},
    7:  {1: 4, 2: 3},
    8:  {1: 4, 2: 3},
    9:  {1: 4, 2: 3, 3: 2},
    10: {1: 4, 2: 3, 3: 2},
    11: {1: 4, 2: 3, 3: 3},
    12: {1: 4, 2: 3, 3: 3},
    13: {1: 4, 2: 3, 3: 3, 4: 1},
    14: {1: 4, 2: 3, 3: 3, 4: 1},
    15: {1: 4, 2: 3, 3: 3, 4: 2},
    16: {1: 4, 2: 3, 3: 3, 4: 2},
    17: {1: 4, 2: 3, 3: 3, 4: 3, 5: 1},
    18: {1: 4, 2: 3, 3: 3, 4: 3, 5: 1},
    19: {1: 4, 2: 3, 3: 3, 4: 3, 5: 2},
    20: {1: 4, 2: 3, 3: 3, 4: 3, 5: 2},
}

# Warlock pact magic: level -> (slot tier, slot count)
PACT_MAGIC_SLOTS: dict[int, tuple[int, int]] = {
    1:  (1, 1),
    2:  (1, 2),
    3:  (2, 2),
    4:  (2, 2),
    5:  (3, 2),
    6:  (3, 2),
    7:  (4, 2),
    8:  (4, 2),
    9:  (5, 2),
    10: (5, 2),
    11: (5, 3),
    12: (5, 3),
    13: (5, 3),
    14: (5, 3),
    15: (5, 3),
    16: (5, 3),
    17: (5, 4),
    18: (5, 4),
    19: (5, 4),
    20: (5, 4),
}


def _clamp_level(level: int) -> int:
    return max(MIN_CHARACTER_LEVEL, min(MAX_CHARACTER_LEVEL, level))


def _fill_slots(counts: dict[int, int]) -> SpellSlotTable:
    return SpellSlotTable(
        **{f"level{tier}": SpellSlot(current=count, max=count) for tier, count in counts.items()}
    )


def empty_spell_slots() -> SpellSlotTable:
    """An all-zero spell slot table."""
    return SpellSlotTable()


def default_spell_slots(shape: CasterShape | str, level: int) -> SpellSlotTable:
    """Full spell slots for a caster shape at a character level.

    Args:
        shape: Spell-slot progression of the class.
        level: Character level, clamped to 1-20.

    Returns:
        A slot table with every tier full. Non-casters get an all-zero table.
    """
    caster_shape = CasterShape(shape)
    clamped = _clamp_level(level)

    if caster_shape == CasterShape.FULL:
        return _fill_slots(FULL_CASTER_SLOTS[clamped])
    if caster_shape == CasterShape.HALF:
        return _fill_slots(HALF_CASTER_SLOTS[clamped])
    if caster_shape == CasterShape.PACT:
        tier, count = PACT_MAGIC_SLOTS[clamped]
        return _fill_slots({tier: count})
    return empty_spell_slots()


def spell_slots_for_class(
    class_name: str,
    level: int,
    catalog: ReferenceCatalog | None = None,
) -> SpellSlotTable:
    """Full spell slots for a class at a level; all-zero for unknown classes."""
    definition = (catalog or default_catalog()).get_class(class_name)
    if definition is None:
        logger.warning("Unknown class, no spell slots", class_name=class_name)
        return empty_spell_slots()
    return default_spell_slots(definition.caster_shape, level)


def highest_slot_level(slots: SpellSlotTable) -> int:
    """Highest tier with a nonzero maximum, or 0 when there are none."""
    for level in range(MAX_SPELL_LEVEL, 0, -1):
        if slots.slot(level).max > 0:
            return level
    return 0


# =============================================================================
# Slot Resources
# =============================================================================


def expend_slot(slots: SpellSlotTable, level: int) -> SpellSlotTable:
    """Spend one slot of a tier.

    Args:
        slots: Current slot table.
        level: Slot tier, 1-9.

    Returns:
        Updated slot table.

    Raises:
        SpellSlotError: If the tier is invalid or has no slots remaining.
    """
    if not 1 <= level <= MAX_SPELL_LEVEL:
        raise SpellSlotError(f"Invalid spell slot level {level}", slot_level=level)
    slot = slots.slot(level)
    if slot.current <= 0:
        raise SpellSlotError(f"No level {level} spell slots remaining", slot_level=level)
    return slots.with_slot(level, SpellSlot(current=slot.current - 1, max=slot.max))


def long_rest(slots: SpellSlotTable) -> SpellSlotTable:
    """Restore every tier to its maximum."""
    return SpellSlotTable(
        **{f"level{level}": SpellSlot(current=slot.max, max=slot.max) for level, slot in slots.tiers()}
    )


def short_rest(slots: SpellSlotTable, shape: CasterShape | str) -> SpellSlotTable:
    """Restore slots that recover on a short rest.

    Only pact magic slots come back on a short rest; other tables are
    returned unchanged.
    """
    if CasterShape(shape) != CasterShape.PACT:
        return slots
    return long_rest(slots)


# =============================================================================
# Known & Prepared Spell Caps
# =============================================================================

# Leveled spells known by class level, index 0 is level 1
KNOWN_SPELLS: dict[str, tuple[int, ...]] = {
    "bard": (4, 5, 6, 7, 8, 9, 10, 11, 12, 14, 15, 15, 16, 18, 19, 19, 20, 22, 22, 22),
    "ranger": (0, 2, 3, 3, 4, 4, 5, 5, 6, 6, 7, 7, 8, 8, 9, 9, 10, 10, 11, 11),
    "sorcerer": (2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 12, 13, 13, 14, 14, 15, 15, 15, 15),
    "warlock": (2, 3, 4, 5, 6, 7, 8, 9, 10, 10, 11, 11, 12, 12, 13, 13, 14, 14, 15, 15),
}


@dataclass(frozen=True)
class SpellSelectionState:
    """How full a character's leveled spell list is.

    Attributes:
        mode: Known, prepared, or none.
        label: Display label for the spell list.
        max_leveled_spells: Cap on leveled spells; 0 when the class has none.
        current_leveled_spells: Leveled spells currently on the list.
        remaining_leveled_spells: Room left under the cap.
        is_at_limit: The list is full.
        is_over_limit: The list holds more than the cap allows.
    """

    mode: SpellcastingMode
    label: str
    max_leveled_spells: int
    current_leveled_spells: int
    remaining_leveled_spells: int
    is_at_limit: bool
    is_over_limit: bool


@dataclass(frozen=True)
class CapacityCheck:
    """Whether one more entry fits under a cap.

    Attributes:
        can_add: The entry fits.
        reason: Why it does not fit, for display.
        current: Entries already counted against the cap.
        limit: The cap, or None when nothing is capped.
    """

    can_add: bool
    reason: str | None = None
    current: int = 0
    limit: int | None = None


def spellcasting_mode(class_name: str, catalog: ReferenceCatalog | None = None) -> SpellcastingMode:
    """How a class acquires leveled spells; NONE for unknown classes."""
    definition = (catalog or default_catalog()).get_class(class_name)
    return definition.spellcasting_mode if definition else SpellcastingMode.NONE


def max_leveled_spells(
    class_name: str,
    level: int,
    ability_score: int,
    catalog: ReferenceCatalog | None = None,
) -> int:
    """Cap on leveled spells a class may know or prepare.

    Known casters read the per-level table. Full preparers get
    ``max(1, level + modifier)`` and half preparers
    ``max(1, level // 2 + modifier)``.

    Args:
        class_name: Class id or name.
        level: Character level, clamped to 1-20.
        ability_score: Spellcasting ability score.
        catalog: Catalog for class lookups.

    Returns:
        The cap, 0 for classes without spellcasting.
    """
    definition = (catalog or default_catalog()).get_class(class_name)
    if definition is None:
        return 0

    clamped = _clamp_level(level)
    mode = definition.spellcasting_mode
    if mode == SpellcastingMode.KNOWN:
        table = KNOWN_SPELLS.get(definition.id.lower())
        return table[clamped - 1] if table else 0
    if mode == SpellcastingMode.PREPARED:
        modifier = ability_modifier(ability_score)
        if definition.caster_shape == CasterShape.HALF:
            return max(1, clamped // 2 + modifier)
        return max(1, clamped + modifier)
    return 0


def _count_leveled(spells: Iterable[KnownSpell | int]) -> int:
    count = 0
    for spell in spells:
        spell_level = spell if isinstance(spell, int) else spell.level
        if spell_level > 0:
            count += 1
    return count


def spell_selection_state(
    class_name: str,
    level: int,
    ability_score: int,
    spells: Sequence[KnownSpell | int],
    catalog: ReferenceCatalog | None = None,
) -> SpellSelectionState:
    """Summarize a spell list against the class cap.

    Args:
        class_name: Class id or name.
        level: Character level.
        ability_score: Spellcasting ability score.
        spells: The spell list, as entries or bare spell levels. Cantrips
            are not counted.
        catalog: Catalog for class lookups.

    Returns:
        The selection state.
    """
    mode = spellcasting_mode(class_name, catalog)
    limit = max_leveled_spells(class_name, level, ability_score, catalog)
    current = _count_leveled(spells)
    capped = mode != SpellcastingMode.NONE
    return SpellSelectionState(
        mode=mode,
        label=mode.label,
        max_leveled_spells=limit,
        current_leveled_spells=current,
        remaining_leveled_spells=max(0, limit - current),
        is_at_limit=capped and current >= limit,
        is_over_limit=capped and current > limit,
    )


def validate_spell_selection(
    class_name: str,
    level: int,
    ability_score: int,
    spells: Sequence[KnownSpell | int],
    new_spell_level: int,
    catalog: ReferenceCatalog | None = None,
) -> CapacityCheck:
    """Check whether a spell can be added to a spell list.

    Cantrips always fit. Classes without spellcasting are not capped.

    Returns:
        CapacityCheck with the current usage and limit.
    """
    state = spell_selection_state(class_name, level, ability_score, spells, catalog)
    if new_spell_level == 0 or state.mode == SpellcastingMode.NONE:
        return CapacityCheck(can_add=True, current=state.current_leveled_spells)

    if state.is_at_limit:
        reason = f"{state.label} limit reached ({state.current_leveled_spells}/{state.max_leveled_spells})"
        logger.info(
            "Spell selection rejected",
            class_name=class_name,
            current=state.current_leveled_spells,
            limit=state.max_leveled_spells,
        )
        return CapacityCheck(
            can_add=False,
            reason=reason,
            current=state.current_leveled_spells,
            limit=state.max_leveled_spells,
        )

    return CapacityCheck(
        can_add=True,
        current=state.current_leveled_spells,
        limit=state.max_leveled_spells,
    )


def validate_skill_selection(
    class_name: str,
    selected: Iterable[Skill | str],
    catalog: ReferenceCatalog | None = None,
) -> CapacityCheck:
    """Check a class-skill selection against the class skill choices.

    Args:
        class_name: Class id or name.
        selected: Chosen skills.
        catalog: Catalog for class lookups.

    Returns:
        CapacityCheck; ``can_add`` is False when a skill is not on the class
        list or more skills are chosen than the class allows.

    Raises:
        CatalogLookupError: If the class is unknown.
    """
    definition = require_class(class_name, catalog)
    choices = definition.skill_choices
    chosen = [Skill(s) for s in selected]

    not_offered = [s for s in chosen if s not in choices.options]
    if not_offered:
        return CapacityCheck(
            can_add=False,
            reason=f"{not_offered[0].value} is not a {definition.name} skill",
            current=len(chosen),
            limit=choices.choose,
        )
    if len(chosen) > choices.choose:
        return CapacityCheck(
            can_add=False,
            reason=f"Skill limit reached ({len(chosen)}/{choices.choose})",
            current=len(chosen),
            limit=choices.choose,
        )
    return CapacityCheck(can_add=True, current=len(chosen), limit=choices.choose)


__all__ = [
    "FULL_CASTER_SLOTS",
    "HALF_CASTER_SLOTS",
    "PACT_MAGIC_SLOTS",
    "empty_spell_slots",
    "default_spell_slots",
    "spell_slots_for_class",
    "highest_slot_level",
    "expend_slot",
    "long_rest",
    "short_rest",
    "KNOWN_SPELLS",
    "SpellSelectionState",
    "CapacityCheck",
    "spellcasting_mode",
    "max_leveled_spells",
    "spell_selection_state",
    "validate_spell_selection",
    "validate_skill_selection",
]
