"""Pydantic V2 schemas for combat encounters.

This module defines combatants, the conditions attached to them, the
resolved weapon stats used for attack panels, and the encounter snapshot
that the turn manager advances. All models are frozen; engine operations
return updated copies.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator

from dnd_companion.core.constants import INDEFINITE_DURATION
from dnd_companion.models.character import AbilityScores, HitPoints
from dnd_companion.models.enums import Ability, CombatantType, ConditionType


class Condition(BaseModel):
    """A condition instance applied to a combatant.

    Attributes:
        id: Unique identifier of this condition instance.
        type: The condition (e.g., poisoned, prone).
        duration: Rounds remaining; -1 means indefinite.
        notes: Optional notes about the source of the condition.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str
    type: ConditionType
    duration: int = Field(default=INDEFINITE_DURATION, description="Rounds remaining, -1 indefinite")
    notes: str | None = None

    @field_validator("duration")
    @classmethod
    def _check_duration(cls, value: int) -> int:
        if value < INDEFINITE_DURATION:
            raise ValueError(f"duration must be >= -1, got {value}")
        return value

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_indefinite(self) -> bool:
        """Check whether the condition never expires on its own."""
        return self.duration == INDEFINITE_DURATION


class EquippedWeaponStats(BaseModel):
    """Attack and damage figures for the weapon a combatant wields.

    Derived from the equipped item, ability scores, proficiency bonus and
    weapon proficiencies; recomputed on equip changes, never hand-edited.

    Attributes:
        name: Weapon name.
        damage_dice: Damage dice expression (e.g., '1d8').
        damage_type: Damage type (e.g., 'slashing').
        attack_bonus: Total bonus to attack rolls.
        damage_bonus: Flat bonus to damage rolls.
        is_finesse: Whether the weapon has the finesse property.
        is_ranged: Whether the weapon is a ranged weapon.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    damage_dice: str
    damage_type: str = ""
    attack_bonus: int = 0
    damage_bonus: int = 0
    is_finesse: bool = False
    is_ranged: bool = False


class Combatant(BaseModel):
    """Participant in a combat encounter.

    Attributes:
        id: Unique combatant identifier.
        name: Display name in the initiative order.
        type: Player, ally or enemy.
        hit_points: Current and maximum hit points.
        armor_class: Armor class.
        initiative: Current initiative score.
        initiative_bonus: Bonus added to initiative rolls.
        ability_scores: Ability scores, when known.
        proficiency_bonus: Proficiency bonus, when known.
        saving_throw_proficiencies: Abilities with save proficiency.
        weapon: Resolved stats of the wielded weapon.
        conditions: Active conditions.
        concentration_spell: Spell being concentrated on, if any.
        character_id: Reference to the underlying character, if any.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str
    name: str = Field(min_length=1, max_length=100)
    type: CombatantType = CombatantType.ENEMY
    hit_points: HitPoints
    armor_class: Annotated[int, Field(ge=0, le=30)] = 10
    initiative: int = 0
    initiative_bonus: int = 0
    ability_scores: AbilityScores | None = None
    proficiency_bonus: int | None = None
    saving_throw_proficiencies: frozenset[Ability] = Field(default_factory=frozenset)
    weapon: EquippedWeaponStats | None = None
    conditions: tuple[Condition, ...] = ()
    concentration_spell: Annotated[str, Field(min_length=1)] | None = None
    character_id: str | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_concentrating(self) -> bool:
        """Check whether the combatant is maintaining a concentration spell."""
        return self.concentration_spell is not None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_down(self) -> bool:
        """Check whether the combatant has dropped to 0 hit points."""
        return self.hit_points.current == 0

    def has_condition(self, condition_type: ConditionType) -> bool:
        """Check whether a condition of the given type is active."""
        return any(c.type == condition_type for c in self.conditions)


class EncounterState(BaseModel):
    """Snapshot of an encounter's turn order.

    Attributes:
        combatants: Combatants in turn order.
        current_turn: Zero-based index of the acting combatant.
        round: Round counter, starting at 1.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    combatants: tuple[Combatant, ...] = ()
    current_turn: Annotated[int, Field(ge=0)] = 0
    round: Annotated[int, Field(ge=1)] = 1

    @model_validator(mode="after")
    def _check_turn_pointer(self) -> EncounterState:
        if not self.combatants:
            if self.current_turn != 0:
                raise ValueError("current_turn must be 0 for an empty encounter")
        elif self.current_turn >= len(self.combatants):
            raise ValueError(
                f"current_turn {self.current_turn} out of range for "
                f"{len(self.combatants)} combatants"
            )
        return self

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_empty(self) -> bool:
        """Check whether the encounter has no combatants."""
        return not self.combatants

    def index_of(self, combatant_id: str) -> int | None:
        """Find a combatant's position in the turn order."""
        for index, combatant in enumerate(self.combatants):
            if combatant.id == combatant_id:
                return index
        return None


__all__ = [
    "Condition",
    "EquippedWeaponStats",
    "Combatant",
    "EncounterState",
]
