"""Pydantic V2 schemas and progression rules for the D&D 5E companion.

Submodules:
    enums: Enumeration types (Ability, Skill, ConditionType, CasterShape, etc.)
    character: Character snapshots (AbilityScores, HitPoints, SpellSlotTable, inventory)
    combat: Combat snapshots (Combatant, Condition, EncounterState)
    catalog: Read-only reference catalog and the built-in SRD subset
    progression: Proficiency, XP, hit-point gain and ability score improvements
    spellcasting: Spell-slot tables, rests and spell-list caps

Example:
    >>> from dnd_companion.models import AbilityScores, Ability, proficiency_bonus
    >>> AbilityScores(dexterity=16).modifier(Ability.DEX)
    3
    >>> proficiency_bonus(5)
    3
"""

from __future__ import annotations

# =============================================================================
# Enumerations
# =============================================================================
from dnd_companion.models.enums import (
    Ability,
    CasterShape,
    CombatantType,
    ConditionType,
    EquipmentSlot,
    HPGainMode,
    InitiativeTiebreak,
    Skill,
    SpellcastingMode,
    SpellSchool,
    WeaponCategory,
    WeaponRange,
)

# =============================================================================
# Characters
# =============================================================================
from dnd_companion.models.character import (
    AbilityScores,
    CatalogWeaponItem,
    Character,
    GearItem,
    HitPoints,
    InlineWeaponItem,
    InventoryItem,
    KnownSpell,
    SpellSlot,
    SpellSlotTable,
)

# =============================================================================
# Combat
# =============================================================================
from dnd_companion.models.combat import (
    Combatant,
    Condition,
    EncounterState,
    EquippedWeaponStats,
)

# =============================================================================
# Reference Catalog
# =============================================================================
from dnd_companion.models.catalog import (
    ClassDefinition,
    ClassFeature,
    ClassSpellcasting,
    ReferenceCatalog,
    SkillChoices,
    SpellDefinition,
    StaticCatalog,
    WeaponDefinition,
    class_hit_die,
    class_saving_throws,
    default_catalog,
    require_class,
    to_inventory_item,
    to_known_spell,
)

# =============================================================================
# Progression
# =============================================================================
from dnd_companion.models.progression import (
    XP_THRESHOLDS,
    ASIChoice,
    HPGain,
    SingleASI,
    SplitASI,
    XPProgress,
    ability_modifier,
    apply_asi,
    asi_levels,
    average_hp_gain,
    can_level_up,
    features_at_level,
    hit_dice_max,
    is_asi_level,
    level_for_xp,
    level_one_hit_points,
    new_max_hp,
    proficiency_bonus,
    roll_hp_gain,
    xp_for_level,
    xp_progress,
)

# =============================================================================
# Spellcasting
# =============================================================================
from dnd_companion.models.spellcasting import (
    FULL_CASTER_SLOTS,
    HALF_CASTER_SLOTS,
    KNOWN_SPELLS,
    PACT_MAGIC_SLOTS,
    CapacityCheck,
    SpellSelectionState,
    default_spell_slots,
    empty_spell_slots,
    expend_slot,
    highest_slot_level,
    long_rest,
    max_leveled_spells,
    short_rest,
    spell_selection_state,
    spell_slots_for_class,
    spellcasting_mode,
    validate_skill_selection,
    validate_spell_selection,
)


__all__ = [
    # Enumerations
    "Ability",
    "CasterShape",
    "CombatantType",
    "ConditionType",
    "EquipmentSlot",
    "HPGainMode",
    "InitiativeTiebreak",
    "Skill",
    "SpellcastingMode",
    "SpellSchool",
    "WeaponCategory",
    "WeaponRange",
    # Characters
    "AbilityScores",
    "CatalogWeaponItem",
    "Character",
    "GearItem",
    "HitPoints",
    "InlineWeaponItem",
    "InventoryItem",
    "KnownSpell",
    "SpellSlot",
    "SpellSlotTable",
    # Combat
    "Combatant",
    "Condition",
    "EncounterState",
    "EquippedWeaponStats",
    # Reference Catalog
    "ClassDefinition",
    "ClassFeature",
    "ClassSpellcasting",
    "ReferenceCatalog",
    "SkillChoices",
    "SpellDefinition",
    "StaticCatalog",
    "WeaponDefinition",
    "class_hit_die",
    "class_saving_throws",
    "default_catalog",
    "require_class",
    "to_inventory_item",
    "to_known_spell",
    # Progression
    "XP_THRESHOLDS",
    "ASIChoice",
    "HPGain",
    "SingleASI",
    "SplitASI",
    "XPProgress",
    "ability_modifier",
    "apply_asi",
    "asi_levels",
    "average_hp_gain",
    "can_level_up",
    "features_at_level",
    "hit_dice_max",
    "is_asi_level",
    "level_for_xp",
    "level_one_hit_points",
    "new_max_hp",
    "proficiency_bonus",
    "roll_hp_gain",
    "xp_for_level",
    "xp_progress",
    # Spellcasting
    "FULL_CASTER_SLOTS",
    "HALF_CASTER_SLOTS",
    "KNOWN_SPELLS",
    "PACT_MAGIC_SLOTS",
    "CapacityCheck",
    "SpellSelectionState",
    "default_spell_slots",
    "empty_spell_slots",
    "expend_slot",
    "highest_slot_level",
    "long_rest",
    "max_leveled_spells",
    "short_rest",
    "spell_selection_state",
    "spell_slots_for_class",
    "spellcasting_mode",
    "validate_skill_selection",
    "validate_spell_selection",
]
