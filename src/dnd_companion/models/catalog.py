"""Read-only reference catalog of classes, weapons and spells.

The rules engine looks up static game content through the
``ReferenceCatalog`` protocol and never mutates it. ``StaticCatalog`` is a
small SRD subset so the engine works out of the box; callers with their
own compendium pass any object that satisfies the protocol.

Lookups are by id or by name, ignoring case and surrounding whitespace.
Missing entries come back as ``None``; use ``require_class`` where a
missing class is a caller error.
"""

from __future__ import annotations

from collections.abc import Iterable
from functools import lru_cache
from typing import Annotated, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from dnd_companion.core.exceptions import CatalogLookupError
from dnd_companion.core.ids import IdGenerator, uuid_id_generator
from dnd_companion.models.character import CatalogWeaponItem, KnownSpell
from dnd_companion.models.enums import (
    Ability,
    CasterShape,
    Skill,
    SpellcastingMode,
    SpellSchool,
    WeaponCategory,
    WeaponRange,
)


DEFAULT_HIT_DIE = 8
ASI_FEATURE_NAME = "Ability Score Improvement"


def _normalize(value: str) -> str:
    return value.strip().lower()


# =============================================================================
# Catalog Entries
# =============================================================================


class ClassFeature(BaseModel):
    """A feature a class gains at a given level."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    level: Annotated[int, Field(ge=1, le=20)]
    name: str
    description: str = ""


class ClassSpellcasting(BaseModel):
    """Spellcasting details of a class.

    Attributes:
        ability: Spellcasting ability.
        mode: Whether the class prepares or learns spells.
        shape: Spell-slot progression.
        ritual_casting: Whether the class can cast rituals.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    ability: Ability
    mode: SpellcastingMode
    shape: CasterShape
    ritual_casting: bool = False


class SkillChoices(BaseModel):
    """How many class skills a character picks, and from which."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    choose: Annotated[int, Field(ge=0)] = 0
    options: tuple[Skill, ...] = ()


class ClassDefinition(BaseModel):
    """Static definition of a character class.

    Attributes:
        id: Catalog identifier (e.g., 'wizard').
        name: Display name (e.g., 'Wizard').
        hit_die: Hit die size.
        saving_throws: Abilities with save proficiency.
        armor_proficiencies: Armor training, as written.
        weapon_proficiencies: Weapon training, as written.
        skill_choices: Class skill choices.
        spellcasting: Spellcasting details, or None for non-casters.
        features: Class features by level.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str
    name: str
    hit_die: Annotated[int, Field(ge=4, le=12)] = DEFAULT_HIT_DIE
    saving_throws: tuple[Ability, ...] = ()
    armor_proficiencies: tuple[str, ...] = ()
    weapon_proficiencies: tuple[str, ...] = ()
    skill_choices: SkillChoices = Field(default_factory=SkillChoices)
    spellcasting: ClassSpellcasting | None = None
    features: tuple[ClassFeature, ...] = ()

    @property
    def caster_shape(self) -> CasterShape:
        """Spell-slot progression, NONE for non-casters."""
        return self.spellcasting.shape if self.spellcasting else CasterShape.NONE

    @property
    def spellcasting_mode(self) -> SpellcastingMode:
        """Spell acquisition mode, NONE for non-casters."""
        return self.spellcasting.mode if self.spellcasting else SpellcastingMode.NONE


class WeaponDefinition(BaseModel):
    """Static definition of a weapon.

    ``damage_dice`` may be a flat number ('1') or empty for weapons that
    deal no damage (the net).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str
    name: str
    category: WeaponCategory
    weapon_type: WeaponRange
    damage_dice: str = ""
    damage_type: str = ""
    properties: tuple[str, ...] = ()
    weight: float = 0.0

    @property
    def is_finesse(self) -> bool:
        """Check for the finesse property."""
        return any("finesse" in prop.lower() for prop in self.properties)

    @property
    def is_ranged(self) -> bool:
        """Check whether this is a ranged weapon."""
        return self.weapon_type == WeaponRange.RANGED


class SpellDefinition(BaseModel):
    """Static definition of a spell."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str
    name: str
    level: Annotated[int, Field(ge=0, le=9)]
    school: SpellSchool
    concentration: bool = False
    ritual: bool = False
    classes: tuple[str, ...] = ()

    @property
    def is_cantrip(self) -> bool:
        return self.level == 0


# =============================================================================
# Catalog Protocol
# =============================================================================


@runtime_checkable
class ReferenceCatalog(Protocol):
    """Read-only lookup of static game content."""

    def get_class(self, name: str) -> ClassDefinition | None:
        """Look up a class by id or name."""
        ...

    def get_weapon(self, weapon_id: str) -> WeaponDefinition | None:
        """Look up a weapon by id or name."""
        ...

    def get_spell(self, spell_id: str) -> SpellDefinition | None:
        """Look up a spell by id or name."""
        ...

    def class_spells(self, class_name: str) -> list[SpellDefinition]:
        """List spells on a class's spell list, by level then name."""
        ...


class StaticCatalog:
    """In-memory catalog built from lists of definitions.

    Example:
        >>> catalog = StaticCatalog.srd()
        >>> catalog.get_class("wizard").hit_die
        6
    """

    def __init__(
        self,
        classes: Iterable[ClassDefinition] = (),
        weapons: Iterable[WeaponDefinition] = (),
        spells: Iterable[SpellDefinition] = (),
    ) -> None:
        self._classes = self._index(classes)
        self._weapons = self._index(weapons)
        self._spells = self._index(spells)

    @staticmethod
    def _index(entries: Iterable[ClassDefinition | WeaponDefinition | SpellDefinition]) -> dict:
        index = {}
        for entry in entries:
            index[_normalize(entry.id)] = entry
            index[_normalize(entry.name)] = entry
        return index

    @classmethod
    def srd(cls) -> StaticCatalog:
        """Build the built-in SRD subset."""
        return cls(classes=SRD_CLASSES, weapons=SRD_WEAPONS, spells=SRD_SPELLS)

    def get_class(self, name: str) -> ClassDefinition | None:
        return self._classes.get(_normalize(name))

    def get_weapon(self, weapon_id: str) -> WeaponDefinition | None:
        return self._weapons.get(_normalize(weapon_id))

    def get_spell(self, spell_id: str) -> SpellDefinition | None:
        return self._spells.get(_normalize(spell_id))

    def class_spells(self, class_name: str) -> list[SpellDefinition]:
        wanted = _normalize(class_name)
        spells = {
            spell.id: spell
            for spell in self._spells.values()
            if any(_normalize(c) == wanted for c in spell.classes)
        }
        return sorted(spells.values(), key=lambda s: (s.level, s.name))


@lru_cache(maxsize=1)
def default_catalog() -> StaticCatalog:
    """Get the shared built-in SRD catalog."""
    return StaticCatalog.srd()


# =============================================================================
# Lookup Helpers
# =============================================================================


def require_class(class_name: str, catalog: ReferenceCatalog | None = None) -> ClassDefinition:
    """Look up a class that must exist.

    Args:
        class_name: Class id or name.
        catalog: Catalog to search; the built-in SRD catalog by default.

    Returns:
        The class definition.

    Raises:
        CatalogLookupError: If the class is not in the catalog.
    """
    definition = (catalog or default_catalog()).get_class(class_name)
    if definition is None:
        raise CatalogLookupError(f"Unknown class: {class_name}", entry_id=class_name)
    return definition


def class_hit_die(class_name: str, catalog: ReferenceCatalog | None = None) -> int:
    """Hit die of a class, d8 when the class is unknown."""
    definition = (catalog or default_catalog()).get_class(class_name)
    return definition.hit_die if definition else DEFAULT_HIT_DIE


def class_saving_throws(class_name: str, catalog: ReferenceCatalog | None = None) -> frozenset[Ability]:
    """Saving-throw proficiencies granted by a class, empty when unknown."""
    definition = (catalog or default_catalog()).get_class(class_name)
    return frozenset(definition.saving_throws) if definition else frozenset()


def to_known_spell(spell: SpellDefinition, id_generator: IdGenerator = uuid_id_generator) -> KnownSpell:
    """Create a spell-list entry referencing a catalog spell."""
    return KnownSpell(
        id=id_generator(),
        source_spell_id=spell.id,
        name=spell.name,
        level=spell.level,
    )


def to_inventory_item(
    weapon: WeaponDefinition,
    quantity: int = 1,
    id_generator: IdGenerator = uuid_id_generator,
) -> CatalogWeaponItem:
    """Create an inventory entry referencing a catalog weapon."""
    return CatalogWeaponItem(
        id=id_generator(),
        source_item_id=weapon.id,
        name=weapon.name,
        quantity=quantity,
        weight=weapon.weight,
    )


# =============================================================================
# SRD Data
# =============================================================================


def _asi_features(*levels: int) -> tuple[ClassFeature, ...]:
    return tuple(
        ClassFeature(
            level=level,
            name=ASI_FEATURE_NAME,
            description="Increase one ability score by 2, or two ability scores by 1.",
        )
        for level in levels
    )


def _features(*entries: tuple[int, str], asi: tuple[int, ...] = (4, 8, 12, 16, 19)) -> tuple[ClassFeature, ...]:
    features = [ClassFeature(level=level, name=name) for level, name in entries]
    features.extend(_asi_features(*asi))
    return tuple(sorted(features, key=lambda f: f.level))


_SIMPLE_MARTIAL = ("Simple weapons", "Martial weapons")
_ARCANE_WEAPONS = ("Daggers", "Darts", "Slings", "Quarterstaffs", "Light crossbows")
_FINESSE_WEAPONS = ("Simple weapons", "Hand crossbows", "Longswords", "Rapiers", "Shortswords")

SRD_CLASSES: tuple[ClassDefinition, ...] = (
    ClassDefinition(
        id="barbarian",
        name="Barbarian",
        hit_die=12,
        saving_throws=(Ability.STR, Ability.CON),
        armor_proficiencies=("Light armor", "Medium armor", "Shields"),
        weapon_proficiencies=_SIMPLE_MARTIAL,
        skill_choices=SkillChoices(
            choose=2,
            options=(Skill.ANIMAL_HANDLING, Skill.ATHLETICS, Skill.INTIMIDATION,
                     Skill.NATURE, Skill.PERCEPTION, Skill.SURVIVAL),
        ),
        features=_features((1, "Rage"), (1, "Unarmored Defense"), (2, "Reckless Attack"),
                           (5, "Extra Attack"), (9, "Brutal Critical"), (20, "Primal Champion")),
    ),
    ClassDefinition(
        id="bard",
        name="Bard",
        hit_die=8,
        saving_throws=(Ability.DEX, Ability.CHA),
        armor_proficiencies=("Light armor",),
        weapon_proficiencies=_FINESSE_WEAPONS,
        skill_choices=SkillChoices(choose=3, options=tuple(Skill)),
        spellcasting=ClassSpellcasting(
            ability=Ability.CHA, mode=SpellcastingMode.KNOWN, shape=CasterShape.FULL, ritual_casting=True,
        ),
        features=_features((1, "Spellcasting"), (1, "Bardic Inspiration"), (2, "Jack of All Trades"),
                           (3, "Expertise"), (5, "Font of Inspiration"), (10, "Magical Secrets")),
    ),
    ClassDefinition(
        id="cleric",
        name="Cleric",
        hit_die=8,
        saving_throws=(Ability.WIS, Ability.CHA),
        armor_proficiencies=("Light armor", "Medium armor", "Shields"),
        weapon_proficiencies=("Simple weapons",),
        skill_choices=SkillChoices(
            choose=2,
            options=(Skill.HISTORY, Skill.INSIGHT, Skill.MEDICINE, Skill.PERSUASION, Skill.RELIGION),
        ),
        spellcasting=ClassSpellcasting(
            ability=Ability.WIS, mode=SpellcastingMode.PREPARED, shape=CasterShape.FULL, ritual_casting=True,
        ),
        features=_features((1, "Spellcasting"), (1, "Divine Domain"), (2, "Channel Divinity"),
                           (5, "Destroy Undead"), (10, "Divine Intervention")),
    ),
    ClassDefinition(
        id="druid",
        name="Druid",
        hit_die=8,
        saving_throws=(Ability.INT, Ability.WIS),
        armor_proficiencies=("Light armor", "Medium armor", "Shields (non-metal)"),
        weapon_proficiencies=("Simple weapons", "Scimitars", "Druidic weapons"),
        skill_choices=SkillChoices(
            choose=2,
            options=(Skill.ARCANA, Skill.ANIMAL_HANDLING, Skill.INSIGHT, Skill.MEDICINE,
                     Skill.NATURE, Skill.PERCEPTION, Skill.RELIGION, Skill.SURVIVAL),
        ),
        spellcasting=ClassSpellcasting(
            ability=Ability.WIS, mode=SpellcastingMode.PREPARED, shape=CasterShape.FULL, ritual_casting=True,
        ),
        features=_features((1, "Druidic"), (1, "Spellcasting"), (2, "Wild Shape"), (20, "Archdruid")),
    ),
    ClassDefinition(
        id="fighter",
        name="Fighter",
        hit_die=10,
        saving_throws=(Ability.STR, Ability.CON),
        armor_proficiencies=("All armor", "Shields"),
        weapon_proficiencies=_SIMPLE_MARTIAL,
        skill_choices=SkillChoices(
            choose=2,
            options=(Skill.ACROBATICS, Skill.ANIMAL_HANDLING, Skill.ATHLETICS, Skill.HISTORY,
                     Skill.INSIGHT, Skill.INTIMIDATION, Skill.PERCEPTION, Skill.SURVIVAL),
        ),
        features=_features((1, "Fighting Style"), (1, "Second Wind"), (2, "Action Surge"),
                           (5, "Extra Attack"), (9, "Indomitable"),
                           asi=(4, 6, 8, 12, 14, 16, 19)),
    ),
    ClassDefinition(
        id="monk",
        name="Monk",
        hit_die=8,
        saving_throws=(Ability.STR, Ability.DEX),
        weapon_proficiencies=("Simple weapons", "Shortswords"),
        skill_choices=SkillChoices(
            choose=2,
            options=(Skill.ACROBATICS, Skill.ATHLETICS, Skill.HISTORY, Skill.INSIGHT,
                     Skill.RELIGION, Skill.STEALTH),
        ),
        features=_features((1, "Martial Arts"), (1, "Unarmored Defense"), (2, "Ki"),
                           (5, "Extra Attack"), (5, "Stunning Strike"), (20, "Perfect Self")),
    ),
    ClassDefinition(
        id="paladin",
        name="Paladin",
        hit_die=10,
        saving_throws=(Ability.WIS, Ability.CHA),
        armor_proficiencies=("All armor", "Shields"),
        weapon_proficiencies=_SIMPLE_MARTIAL,
        skill_choices=SkillChoices(
            choose=2,
            options=(Skill.ATHLETICS, Skill.INSIGHT, Skill.INTIMIDATION, Skill.MEDICINE,
                     Skill.PERSUASION, Skill.RELIGION),
        ),
        spellcasting=ClassSpellcasting(
            ability=Ability.CHA, mode=SpellcastingMode.PREPARED, shape=CasterShape.HALF,
        ),
        features=_features((1, "Divine Sense"), (1, "Lay on Hands"), (2, "Spellcasting"),
                           (2, "Divine Smite"), (5, "Extra Attack"), (6, "Aura of Protection")),
    ),
    ClassDefinition(
        id="ranger",
        name="Ranger",
        hit_die=10,
        saving_throws=(Ability.STR, Ability.DEX),
        armor_proficiencies=("Light armor", "Medium armor", "Shields"),
        weapon_proficiencies=_SIMPLE_MARTIAL,
        skill_choices=SkillChoices(
            choose=3,
            options=(Skill.ANIMAL_HANDLING, Skill.ATHLETICS, Skill.INSIGHT, Skill.INVESTIGATION,
                     Skill.NATURE, Skill.PERCEPTION, Skill.STEALTH, Skill.SURVIVAL),
        ),
        spellcasting=ClassSpellcasting(
            ability=Ability.WIS, mode=SpellcastingMode.KNOWN, shape=CasterShape.HALF, ritual_casting=True,
        ),
        features=_features((1, "Favored Enemy"), (1, "Natural Explorer"), (2, "Spellcasting"),
                           (5, "Extra Attack"), (20, "Foe Slayer")),
    ),
    ClassDefinition(
        id="rogue",
        name="Rogue",
        hit_die=8,
        saving_throws=(Ability.DEX, Ability.INT),
        armor_proficiencies=("Light armor",),
        weapon_proficiencies=_FINESSE_WEAPONS,
        skill_choices=SkillChoices(
            choose=4,
            options=(Skill.ACROBATICS, Skill.ATHLETICS, Skill.DECEPTION, Skill.INSIGHT,
                     Skill.INTIMIDATION, Skill.INVESTIGATION, Skill.PERCEPTION, Skill.PERFORMANCE,
                     Skill.PERSUASION, Skill.SLEIGHT_OF_HAND, Skill.STEALTH),
        ),
        features=_features((1, "Expertise"), (1, "Sneak Attack"), (2, "Cunning Action"),
                           (5, "Uncanny Dodge"), (7, "Evasion"),
                           asi=(4, 8, 10, 12, 16, 19)),
    ),
    ClassDefinition(
        id="sorcerer",
        name="Sorcerer",
        hit_die=6,
        saving_throws=(Ability.CON, Ability.CHA),
        weapon_proficiencies=_ARCANE_WEAPONS,
        skill_choices=SkillChoices(
            choose=2,
            options=(Skill.ARCANA, Skill.DECEPTION, Skill.INSIGHT, Skill.INTIMIDATION,
                     Skill.PERSUASION, Skill.RELIGION),
        ),
        spellcasting=ClassSpellcasting(
            ability=Ability.CHA, mode=SpellcastingMode.KNOWN, shape=CasterShape.FULL,
        ),
        features=_features((1, "Spellcasting"), (1, "Sorcerous Origin"), (2, "Font of Magic"),
                           (3, "Metamagic"), (20, "Sorcerous Restoration")),
    ),
    ClassDefinition(
        id="warlock",
        name="Warlock",
        hit_die=8,
        saving_throws=(Ability.WIS, Ability.CHA),
        armor_proficiencies=("Light armor",),
        weapon_proficiencies=("Simple weapons",),
        skill_choices=SkillChoices(
            choose=2,
            options=(Skill.ARCANA, Skill.DECEPTION, Skill.HISTORY, Skill.INTIMIDATION,
                     Skill.INVESTIGATION, Skill.NATURE, Skill.RELIGION),
        ),
        spellcasting=ClassSpellcasting(
            ability=Ability.CHA, mode=SpellcastingMode.KNOWN, shape=CasterShape.PACT,
        ),
        features=_features((1, "Otherworldly Patron"), (1, "Pact Magic"), (2, "Eldritch Invocations"),
                           (3, "Pact Boon"), (11, "Mystic Arcanum"), (20, "Eldritch Master")),
    ),
    ClassDefinition(
        id="wizard",
        name="Wizard",
        hit_die=6,
        saving_throws=(Ability.INT, Ability.WIS),
        weapon_proficiencies=_ARCANE_WEAPONS,
        skill_choices=SkillChoices(
            choose=2,
            options=(Skill.ARCANA, Skill.HISTORY, Skill.INSIGHT, Skill.INVESTIGATION,
                     Skill.MEDICINE, Skill.RELIGION),
        ),
        spellcasting=ClassSpellcasting(
            ability=Ability.INT, mode=SpellcastingMode.PREPARED, shape=CasterShape.FULL, ritual_casting=True,
        ),
        features=_features((1, "Spellcasting"), (1, "Arcane Recovery"), (2, "Arcane Tradition"),
                           (18, "Spell Mastery"), (20, "Signature Spells")),
    ),
)


def _weapon(
    weapon_id: str,
    name: str,
    category: WeaponCategory,
    weapon_type: WeaponRange,
    dice: str,
    damage_type: str,
    *properties: str,
    weight: float = 0.0,
) -> WeaponDefinition:
    return WeaponDefinition(
        id=weapon_id,
        name=name,
        category=category,
        weapon_type=weapon_type,
        damage_dice=dice,
        damage_type=damage_type,
        properties=properties,
        weight=weight,
    )


_S, _M = WeaponCategory.SIMPLE, WeaponCategory.MARTIAL
_MELEE, _RANGED = WeaponRange.MELEE, WeaponRange.RANGED

SRD_WEAPONS: tuple[WeaponDefinition, ...] = (
    _weapon("battleaxe", "Battleaxe", _M, _MELEE, "1d8", "slashing", "Versatile (1d10)", weight=4),
    _weapon("blowgun", "Blowgun", _M, _RANGED, "1", "piercing", "Ammunition", "Loading", weight=1),
    _weapon("club", "Club", _S, _MELEE, "1d4", "bludgeoning", "Light", weight=2),
    _weapon("dagger", "Dagger", _S, _MELEE, "1d4", "piercing", "Finesse", "Light", "Thrown (20/60)", weight=1),
    _weapon("dart", "Dart", _S, _RANGED, "1d4", "piercing", "Finesse", "Thrown (20/60)", weight=0.25),
    _weapon("flail", "Flail", _M, _MELEE, "1d8", "bludgeoning", weight=2),
    _weapon("glaive", "Glaive", _M, _MELEE, "1d10", "slashing", "Heavy", "Reach", "Two-Handed", weight=6),
    _weapon("greataxe", "Greataxe", _M, _MELEE, "1d12", "slashing", "Heavy", "Two-Handed", weight=7),
    _weapon("greatclub", "Greatclub", _S, _MELEE, "1d8", "bludgeoning", "Two-Handed", weight=10),
    _weapon("greatsword", "Greatsword", _M, _MELEE, "2d6", "slashing", "Heavy", "Two-Handed", weight=6),
    _weapon("halberd", "Halberd", _M, _MELEE, "1d10", "slashing", "Heavy", "Reach", "Two-Handed", weight=6),
    _weapon("hand-crossbow", "Hand Crossbow", _M, _RANGED, "1d6", "piercing", "Ammunition", "Light", "Loading",
            weight=3),
    _weapon("handaxe", "Handaxe", _S, _MELEE, "1d6", "slashing", "Light", "Thrown (20/60)", weight=2),
    _weapon("heavy-crossbow", "Heavy Crossbow", _M, _RANGED, "1d10", "piercing", "Ammunition", "Heavy", "Loading",
            "Two-Handed", weight=18),
    _weapon("javelin", "Javelin", _S, _MELEE, "1d6", "piercing", "Thrown (30/120)", weight=2),
    _weapon("lance", "Lance", _M, _MELEE, "1d12", "piercing", "Reach", "Special", weight=6),
    _weapon("light-crossbow", "Light Crossbow", _S, _RANGED, "1d8", "piercing", "Ammunition", "Loading",
            "Two-Handed", weight=5),
    _weapon("light-hammer", "Light Hammer", _S, _MELEE, "1d4", "bludgeoning", "Light", "Thrown (20/60)", weight=2),
    _weapon("longbow", "Longbow", _M, _RANGED, "1d8", "piercing", "Ammunition", "Heavy", "Two-Handed", weight=2),
    _weapon("longsword", "Longsword", _M, _MELEE, "1d8", "slashing", "Versatile (1d10)", weight=3),
    _weapon("mace", "Mace", _S, _MELEE, "1d6", "bludgeoning", weight=4),
    _weapon("maul", "Maul", _M, _MELEE, "2d6", "bludgeoning", "Heavy", "Two-Handed", weight=10),
    _weapon("morningstar", "Morningstar", _M, _MELEE, "1d8", "piercing", weight=4),
    _weapon("net", "Net", _M, _RANGED, "", "", "Special", "Thrown (5/15)", weight=3),
    _weapon("pike", "Pike", _M, _MELEE, "1d10", "piercing", "Heavy", "Reach", "Two-Handed", weight=18),
    _weapon("quarterstaff", "Quarterstaff", _S, _MELEE, "1d6", "bludgeoning", "Versatile (1d8)", weight=4),
    _weapon("rapier", "Rapier", _M, _MELEE, "1d8", "piercing", "Finesse", weight=2),
    _weapon("scimitar", "Scimitar", _M, _MELEE, "1d6", "slashing", "Finesse", "Light", weight=3),
    _weapon("shortbow", "Shortbow", _S, _RANGED, "1d6", "piercing", "Ammunition", "Two-Handed", weight=2),
    _weapon("shortsword", "Shortsword", _M, _MELEE, "1d6", "piercing", "Finesse", "Light", weight=2),
    _weapon("sickle", "Sickle", _S, _MELEE, "1d4", "slashing", "Light", weight=2),
    _weapon("sling", "Sling", _S, _RANGED, "1d4", "bludgeoning", "Ammunition"),
    _weapon("spear", "Spear", _S, _MELEE, "1d6", "piercing", "Thrown (20/60)", "Versatile (1d8)", weight=3),
    _weapon("trident", "Trident", _M, _MELEE, "1d6", "piercing", "Thrown (20/60)", "Versatile (1d8)", weight=4),
    _weapon("war-pick", "War Pick", _M, _MELEE, "1d8", "piercing", weight=2),
    _weapon("warhammer", "Warhammer", _M, _MELEE, "1d8", "bludgeoning", "Versatile (1d10)", weight=2),
    _weapon("whip", "Whip", _M, _MELEE, "1d4", "slashing", "Finesse", "Reach", weight=3),
)


def _spell(
    spell_id: str,
    name: str,
    level: int,
    school: SpellSchool,
    classes: tuple[str, ...],
    *,
    concentration: bool = False,
    ritual: bool = False,
) -> SpellDefinition:
    return SpellDefinition(
        id=spell_id,
        name=name,
        level=level,
        school=school,
        classes=classes,
        concentration=concentration,
        ritual=ritual,
    )


SRD_SPELLS: tuple[SpellDefinition, ...] = (
    _spell("fire-bolt", "Fire Bolt", 0, SpellSchool.EVOCATION, ("Sorcerer", "Wizard")),
    _spell("eldritch-blast", "Eldritch Blast", 0, SpellSchool.EVOCATION, ("Warlock",)),
    _spell("sacred-flame", "Sacred Flame", 0, SpellSchool.EVOCATION, ("Cleric",)),
    _spell("vicious-mockery", "Vicious Mockery", 0, SpellSchool.ENCHANTMENT, ("Bard",)),
    _spell("bless", "Bless", 1, SpellSchool.ENCHANTMENT, ("Cleric", "Paladin"), concentration=True),
    _spell("cure-wounds", "Cure Wounds", 1, SpellSchool.EVOCATION,
           ("Bard", "Cleric", "Druid", "Paladin", "Ranger")),
    _spell("detect-magic", "Detect Magic", 1, SpellSchool.DIVINATION,
           ("Bard", "Cleric", "Druid", "Paladin", "Ranger", "Sorcerer", "Wizard"),
           concentration=True, ritual=True),
    _spell("hex", "Hex", 1, SpellSchool.ENCHANTMENT, ("Warlock",), concentration=True),
    _spell("hunters-mark", "Hunter's Mark", 1, SpellSchool.DIVINATION, ("Ranger",), concentration=True),
    _spell("magic-missile", "Magic Missile", 1, SpellSchool.EVOCATION, ("Sorcerer", "Wizard")),
    _spell("shield", "Shield", 1, SpellSchool.ABJURATION, ("Sorcerer", "Wizard")),
    _spell("healing-word", "Healing Word", 1, SpellSchool.EVOCATION, ("Bard", "Cleric", "Druid")),
    _spell("hold-person", "Hold Person", 2, SpellSchool.ENCHANTMENT,
           ("Bard", "Cleric", "Druid", "Sorcerer", "Warlock", "Wizard"), concentration=True),
    _spell("spiritual-weapon", "Spiritual Weapon", 2, SpellSchool.EVOCATION, ("Cleric",)),
    _spell("fireball", "Fireball", 3, SpellSchool.EVOCATION, ("Sorcerer", "Wizard")),
    _spell("haste", "Haste", 3, SpellSchool.TRANSMUTATION, ("Sorcerer", "Wizard"), concentration=True),
)


__all__ = [
    "DEFAULT_HIT_DIE",
    "ASI_FEATURE_NAME",
    "ClassFeature",
    "ClassSpellcasting",
    "SkillChoices",
    "ClassDefinition",
    "WeaponDefinition",
    "SpellDefinition",
    "ReferenceCatalog",
    "StaticCatalog",
    "default_catalog",
    "require_class",
    "class_hit_die",
    "class_saving_throws",
    "to_known_spell",
    "to_inventory_item",
    "SRD_CLASSES",
    "SRD_WEAPONS",
    "SRD_SPELLS",
]
