"""Enumeration types for the D&D 5E companion rules engine.

Closed vocabularies used across the engine: abilities, skills, damage
types, conditions, combatant sides, weapon categories, caster shapes and
the initiative tie-break rule. An unknown key fails at validation time
instead of silently falling through a lookup table.
"""

from __future__ import annotations

from enum import StrEnum


class Ability(StrEnum):
    """D&D 5E ability scores.

    Values match the field names of ``AbilityScores`` so an ability can be
    used directly with ``getattr``.
    """

    STR = "strength"
    DEX = "dexterity"
    CON = "constitution"
    INT = "intelligence"
    WIS = "wisdom"
    CHA = "charisma"

    @property
    def full_name(self) -> str:
        """Get the full name of the ability.

        Returns:
            Full ability name (e.g., 'Strength' for STR).
        """
        return self.value.capitalize()

    @property
    def abbreviation(self) -> str:
        """Get the three-letter abbreviation.

        Returns:
            Three-letter abbreviation (e.g., 'STR').
        """
        return self.name

    @classmethod
    def from_name(cls, name: str) -> Ability:
        """Look up an ability by full name or abbreviation, ignoring case.

        Args:
            name: 'Strength', 'strength' or 'STR' style name.

        Returns:
            The matching ability.

        Raises:
            ValueError: If no ability matches.
        """
        key = name.strip().lower()
        for ability in cls:
            if key in (ability.value, ability.name.lower()):
                return ability
        raise ValueError(f"Unknown ability: {name!r}")


class Skill(StrEnum):
    """D&D 5E skills."""

    # Strength skills
    ATHLETICS = "Athletics"

    # Dexterity skills
    ACROBATICS = "Acrobatics"
    SLEIGHT_OF_HAND = "Sleight of Hand"
    STEALTH = "Stealth"

    # Intelligence skills
    ARCANA = "Arcana"
    HISTORY = "History"
    INVESTIGATION = "Investigation"
    NATURE = "Nature"
    RELIGION = "Religion"

    # Wisdom skills
    ANIMAL_HANDLING = "Animal Handling"
    INSIGHT = "Insight"
    MEDICINE = "Medicine"
    PERCEPTION = "Perception"
    SURVIVAL = "Survival"

    # Charisma skills
    DECEPTION = "Deception"
    INTIMIDATION = "Intimidation"
    PERFORMANCE = "Performance"
    PERSUASION = "Persuasion"

    @property
    def ability(self) -> Ability:
        """Get the ability that governs this skill.

        Returns:
            The governing ability.
        """
        return _SKILL_ABILITIES[self]


_SKILL_ABILITIES: dict[Skill, Ability] = {
    Skill.ATHLETICS: Ability.STR,
    Skill.ACROBATICS: Ability.DEX,
    Skill.SLEIGHT_OF_HAND: Ability.DEX,
    Skill.STEALTH: Ability.DEX,
    Skill.ARCANA: Ability.INT,
    Skill.HISTORY: Ability.INT,
    Skill.INVESTIGATION: Ability.INT,
    Skill.NATURE: Ability.INT,
    Skill.RELIGION: Ability.INT,
    Skill.ANIMAL_HANDLING: Ability.WIS,
    Skill.INSIGHT: Ability.WIS,
    Skill.MEDICINE: Ability.WIS,
    Skill.PERCEPTION: Ability.WIS,
    Skill.SURVIVAL: Ability.WIS,
    Skill.DECEPTION: Ability.CHA,
    Skill.INTIMIDATION: Ability.CHA,
    Skill.PERFORMANCE: Ability.CHA,
    Skill.PERSUASION: Ability.CHA,
}


class ConditionType(StrEnum):
    """D&D 5E conditions that can be tracked on a combatant."""

    BLINDED = "blinded"
    CHARMED = "charmed"
    DEAFENED = "deafened"
    FRIGHTENED = "frightened"
    GRAPPLED = "grappled"
    INCAPACITATED = "incapacitated"
    INVISIBLE = "invisible"
    PARALYZED = "paralyzed"
    PETRIFIED = "petrified"
    POISONED = "poisoned"
    PRONE = "prone"
    RESTRAINED = "restrained"
    STUNNED = "stunned"
    UNCONSCIOUS = "unconscious"


class CombatantType(StrEnum):
    """Which side of the encounter a combatant fights on."""

    PLAYER = "player"
    ALLY = "ally"
    ENEMY = "enemy"


class WeaponCategory(StrEnum):
    """Weapon training category."""

    SIMPLE = "simple"
    MARTIAL = "martial"


class WeaponRange(StrEnum):
    """Melee or ranged weapon."""

    MELEE = "melee"
    RANGED = "ranged"


class EquipmentSlot(StrEnum):
    """Body slots an inventory item can be equipped to."""

    MAIN_HAND = "mainHand"
    OFF_HAND = "offHand"
    ARMOR = "armor"
    HELMET = "helmet"
    CLOAK = "cloak"
    BOOTS = "boots"
    RING_1 = "ring1"
    RING_2 = "ring2"
    AMULET = "amulet"
    NONE = "none"


class SpellSchool(StrEnum):
    """D&D 5E schools of magic."""

    ABJURATION = "abjuration"
    CONJURATION = "conjuration"
    DIVINATION = "divination"
    ENCHANTMENT = "enchantment"
    EVOCATION = "evocation"
    ILLUSION = "illusion"
    NECROMANCY = "necromancy"
    TRANSMUTATION = "transmutation"


class CasterShape(StrEnum):
    """Spell-slot progression a class follows."""

    NONE = "none"
    FULL = "full"
    HALF = "half"
    PACT = "pact"


class SpellcastingMode(StrEnum):
    """How a class acquires leveled spells."""

    NONE = "none"
    PREPARED = "prepared"
    KNOWN = "known"

    @property
    def label(self) -> str:
        """Display label for the class spell list.

        Returns:
            'Known Spells', 'Prepared Spells' or 'Spells'.
        """
        labels = {
            SpellcastingMode.NONE: "Spells",
            SpellcastingMode.PREPARED: "Prepared Spells",
            SpellcastingMode.KNOWN: "Known Spells",
        }
        return labels[self]


class InitiativeTiebreak(StrEnum):
    """How combatants with equal initiative are ordered."""

    BONUS = "bonus"
    INSERTION = "insertion"


class HPGainMode(StrEnum):
    """Hit-point gain method on level-up."""

    AVERAGE = "average"
    ROLLED = "rolled"


__all__ = [
    "Ability",
    "Skill",
    "ConditionType",
    "CombatantType",
    "WeaponCategory",
    "WeaponRange",
    "EquipmentSlot",
    "SpellSchool",
    "CasterShape",
    "SpellcastingMode",
    "InitiativeTiebreak",
    "HPGainMode",
]
