"""Pydantic V2 schemas for character snapshots.

The engine never owns a character. Callers hand in these snapshots and
receive updated copies, so every model here is a plain value: ability
scores, hit points, spell slots, the spell list and the inventory.

Inventory items are a tagged union on ``kind`` so that the weapon
resolution code can branch on an inline weapon, a catalog reference, or
ordinary gear without guessing from which optional fields are set.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from dnd_companion.core.constants import MAX_CHARACTER_LEVEL, MIN_ABILITY_SCORE, MONSTER_ABILITY_SCORE_CAP
from dnd_companion.models.enums import Ability, EquipmentSlot, Skill


ScoreValue = Annotated[int, Field(ge=MIN_ABILITY_SCORE, le=MONSTER_ABILITY_SCORE_CAP)]


class AbilityScores(BaseModel):
    """The six ability scores of a creature.

    Modifiers are always derived from the score and never stored.

    Attributes:
        strength: Strength score (1-30).
        dexterity: Dexterity score (1-30).
        constitution: Constitution score (1-30).
        intelligence: Intelligence score (1-30).
        wisdom: Wisdom score (1-30).
        charisma: Charisma score (1-30).
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    strength: ScoreValue = Field(default=10, description="Strength score")
    dexterity: ScoreValue = Field(default=10, description="Dexterity score")
    constitution: ScoreValue = Field(default=10, description="Constitution score")
    intelligence: ScoreValue = Field(default=10, description="Intelligence score")
    wisdom: ScoreValue = Field(default=10, description="Wisdom score")
    charisma: ScoreValue = Field(default=10, description="Charisma score")

    def score(self, ability: Ability) -> int:
        """Get the raw score for an ability."""
        return getattr(self, ability.value)

    def modifier(self, ability: Ability) -> int:
        """Calculate the ability modifier for a given ability.

        Args:
            ability: The ability to get the modifier for.

        Returns:
            The ability modifier, ``(score - 10) // 2``.
        """
        return (self.score(ability) - 10) // 2


class HitPoints(BaseModel):
    """Current and maximum hit points.

    Attributes:
        current: Remaining hit points, never above max.
        max: Hit point maximum.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    current: Annotated[int, Field(ge=0)]
    max: Annotated[int, Field(ge=0)]

    @model_validator(mode="after")
    def _check_bounds(self) -> HitPoints:
        if self.current > self.max:
            raise ValueError(f"current HP {self.current} exceeds max HP {self.max}")
        return self


class SpellSlot(BaseModel):
    """One spell-slot tier: slots remaining out of slots available."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    current: Annotated[int, Field(ge=0)] = 0
    max: Annotated[int, Field(ge=0)] = 0

    @model_validator(mode="after")
    def _check_bounds(self) -> SpellSlot:
        if self.current > self.max:
            raise ValueError(f"current slots {self.current} exceed max slots {self.max}")
        return self


class SpellSlotTable(BaseModel):
    """Spell slots for tiers 1 through 9."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    level1: SpellSlot = Field(default_factory=SpellSlot)
    level2: SpellSlot = Field(default_factory=SpellSlot)
    level3: SpellSlot = Field(default_factory=SpellSlot)
    level4: SpellSlot = Field(default_factory=SpellSlot)
    level5: SpellSlot = Field(default_factory=SpellSlot)
    level6: SpellSlot = Field(default_factory=SpellSlot)
    level7: SpellSlot = Field(default_factory=SpellSlot)
    level8: SpellSlot = Field(default_factory=SpellSlot)
    level9: SpellSlot = Field(default_factory=SpellSlot)

    def slot(self, level: int) -> SpellSlot:
        """Get the slot record for a tier.

        Args:
            level: Slot tier, 1-9.

        Returns:
            The slot record.

        Raises:
            ValueError: If the tier is outside 1-9.
        """
        if not 1 <= level <= 9:
            raise ValueError(f"Spell slot level must be 1-9, got {level}")
        return getattr(self, f"level{level}")

    def with_slot(self, level: int, slot: SpellSlot) -> SpellSlotTable:
        """Return a copy of the table with one tier replaced.

        The copy is re-validated, so a slot outside 0 <= current <= max is
        rejected.
        """
        self.slot(level)
        return type(self).model_validate({**self.model_dump(), f"level{level}": slot.model_dump()})

    def tiers(self) -> list[tuple[int, SpellSlot]]:
        """List ``(level, slot)`` pairs in tier order."""
        return [(level, self.slot(level)) for level in range(1, 10)]


class KnownSpell(BaseModel):
    """A spell on a character's known or prepared list.

    Attributes:
        id: Unique identifier of this list entry.
        source_spell_id: Reference into the spell catalog.
        name: Spell name.
        level: Spell level, 0 for cantrips.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str
    source_spell_id: str | None = None
    name: str = Field(min_length=1)
    level: Annotated[int, Field(ge=0, le=9)]


# =============================================================================
# Inventory
# =============================================================================


class _InventoryBase(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str
    name: str = Field(min_length=1)
    quantity: Annotated[int, Field(ge=0)] = 1
    weight: Annotated[float, Field(ge=0)] = 0.0
    equipped: bool = False
    equipment_slot: EquipmentSlot | None = None


class InlineWeaponItem(_InventoryBase):
    """A weapon whose stats are written directly on the item."""

    kind: Literal["inline"] = "inline"
    damage_dice: str = ""
    damage_type: str = ""
    weapon_attack_bonus: int = 0


class CatalogWeaponItem(_InventoryBase):
    """A weapon that takes its stats from a reference-catalog entry.

    ``damage_dice`` and ``damage_type`` are only used when the referenced
    entry is missing from the catalog.
    """

    kind: Literal["catalog"] = "catalog"
    source_item_id: str = Field(min_length=1)
    weapon_attack_bonus: int = 0
    damage_dice: str = ""
    damage_type: str = ""


class GearItem(_InventoryBase):
    """Anything carried that is not a weapon."""

    kind: Literal["gear"] = "gear"
    source_item_id: str | None = None
    description: str = ""


InventoryItem = Annotated[
    Union[InlineWeaponItem, CatalogWeaponItem, GearItem],
    Field(discriminator="kind"),
]


class Character(BaseModel):
    """A player-character snapshot as far as the rules engine needs it.

    Attributes:
        id: Unique character identifier.
        name: Character name.
        class_name: Class name as it appears in the catalog (e.g., 'Wizard').
        level: Character level (1-20).
        experience_points: Total XP earned.
        ability_scores: The six ability scores.
        hit_points: Current and maximum hit points.
        spell_slots: Spell slots for tiers 1-9.
        spells: Known or prepared spells, cantrips included.
        inventory: Carried items.
        saving_throw_proficiencies: Abilities with save proficiency.
        skill_proficiencies: Skills with proficiency.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str
    name: str = Field(min_length=1, max_length=100)
    class_name: str = Field(min_length=1)
    level: Annotated[int, Field(ge=1, le=MAX_CHARACTER_LEVEL)] = 1
    experience_points: Annotated[int, Field(ge=0)] = 0
    ability_scores: AbilityScores = Field(default_factory=AbilityScores)
    hit_points: HitPoints
    spell_slots: SpellSlotTable = Field(default_factory=SpellSlotTable)
    spells: list[KnownSpell] = Field(default_factory=list)
    inventory: list[InventoryItem] = Field(default_factory=list)
    saving_throw_proficiencies: frozenset[Ability] = Field(default_factory=frozenset)
    skill_proficiencies: frozenset[Skill] = Field(default_factory=frozenset)

    def main_hand_item(self) -> InlineWeaponItem | CatalogWeaponItem | GearItem | None:
        """Get the item equipped in the main hand, if any."""
        for item in self.inventory:
            if item.equipped and item.equipment_slot == EquipmentSlot.MAIN_HAND:
                return item
        return None


__all__ = [
    "AbilityScores",
    "HitPoints",
    "SpellSlot",
    "SpellSlotTable",
    "KnownSpell",
    "InlineWeaponItem",
    "CatalogWeaponItem",
    "GearItem",
    "InventoryItem",
    "Character",
]
