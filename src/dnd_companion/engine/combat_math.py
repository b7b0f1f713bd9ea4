"""Combat arithmetic for D&D 5E.

Attack rolls and hit checks, damage rolls with critical dice, saving
throws, spell save DCs and attack bonuses, concentration DCs, and the
resolution of an equipped inventory item into attack and damage figures.

Every function here is pure apart from the dice it rolls through the
injected randomness source.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from dnd_companion.core.constants import D20_SIDES, MIN_CONCENTRATION_DC, NATURAL_FUMBLE, SPELL_SAVE_DC_BASE
from dnd_companion.core.logging import get_logger
from dnd_companion.engine.dice import (
    D20Result,
    DiceParsePolicy,
    RandomnessSource,
    parse_dice_expression,
    roll_d20,
    roll_dice,
)
from dnd_companion.models.catalog import ReferenceCatalog, default_catalog
from dnd_companion.models.character import (
    AbilityScores,
    CatalogWeaponItem,
    GearItem,
    InlineWeaponItem,
)
from dnd_companion.models.combat import EquippedWeaponStats
from dnd_companion.models.enums import Ability, EquipmentSlot, WeaponCategory


logger = get_logger(__name__)


# =============================================================================
# Result Types
# =============================================================================


@dataclass(frozen=True)
class AttackRollResult:
    """Outcome of an attack roll.

    Attributes:
        d20: The d20 roll, including advantage details.
        attack_bonus: Bonus added to the die.
        total: Die plus bonus.
        is_crit: Natural 20.
        is_fumble: Natural 1.
    """

    d20: D20Result
    attack_bonus: int
    total: int
    is_crit: bool
    is_fumble: bool


@dataclass(frozen=True)
class DamageRollBreakdown:
    """Outcome of a damage roll.

    Attributes:
        dice: Individual die results.
        crit_dice: Extra dice from a critical hit, same count as ``dice``.
        bonus: Flat bonus, applied once.
        total: Sum of all dice plus the bonus.
        dice_expression: The expression that was rolled.
        damage_type: Damage type label.
    """

    dice: tuple[int, ...]
    crit_dice: tuple[int, ...]
    bonus: int
    total: int
    dice_expression: str
    damage_type: str = ""


@dataclass(frozen=True)
class SavingThrowResult:
    """Outcome of a saving throw against a DC."""

    roll: int
    bonus: int
    total: int
    dc: int
    success: bool


@dataclass(frozen=True)
class WeaponAttackOutcome:
    """An attack with an equipped weapon, with damage when it hits."""

    attack: AttackRollResult
    hit: bool
    damage: DamageRollBreakdown | None = None


# =============================================================================
# Attacks
# =============================================================================


def calc_attack_bonus(ability_mod: int, prof_bonus: int, magic_bonus: int = 0) -> int:
    """Total attack bonus: ability modifier + proficiency + magic bonus."""
    return ability_mod + prof_bonus + magic_bonus


def roll_attack(
    attack_bonus: int,
    advantage: bool = False,
    disadvantage: bool = False,
    rng: RandomnessSource | None = None,
) -> AttackRollResult:
    """Roll an attack: d20 + attack bonus.

    Args:
        attack_bonus: Bonus added to the d20.
        advantage: Roll with advantage.
        disadvantage: Roll with disadvantage.
        rng: Randomness source; the default source if omitted.

    Returns:
        AttackRollResult with crit and fumble flags from the natural roll.
    """
    d20 = roll_d20(advantage, disadvantage, rng)
    result = AttackRollResult(
        d20=d20,
        attack_bonus=attack_bonus,
        total=d20.roll + attack_bonus,
        is_crit=d20.roll == D20_SIDES,
        is_fumble=d20.roll == NATURAL_FUMBLE,
    )
    logger.debug(
        "Attack rolled",
        roll=d20.roll,
        attack_bonus=attack_bonus,
        total=result.total,
        is_crit=result.is_crit,
        is_fumble=result.is_fumble,
    )
    return result


def check_hit(result: AttackRollResult, target_ac: int) -> bool:
    """Check whether an attack roll hits an armor class.

    A natural 20 always hits and a natural 1 always misses.
    """
    if result.is_crit:
        return True
    if result.is_fumble:
        return False
    return result.total >= target_ac


# =============================================================================
# Damage
# =============================================================================


def roll_damage(
    dice_expr: str,
    bonus: int = 0,
    is_crit: bool = False,
    damage_type: str = "",
    rng: RandomnessSource | None = None,
    *,
    policy: DiceParsePolicy | str | None = None,
) -> DamageRollBreakdown:
    """Roll damage dice.

    On a critical hit a second, independent set of the same dice is rolled.
    The flat bonus (expression bonus plus ``bonus``) is never doubled.

    Args:
        dice_expr: Damage dice (e.g., '1d8', '2d6+1', flat '1').
        bonus: Extra flat bonus (ability modifier, magic bonus).
        is_crit: Whether the attack was a critical hit.
        damage_type: Damage type label carried into the result.
        rng: Randomness source; the default source if omitted.
        policy: Dice parse policy for malformed expressions.

    Returns:
        DamageRollBreakdown of the roll.
    """
    parsed = parse_dice_expression(dice_expr, policy)
    total_bonus = parsed.bonus + bonus

    if parsed.is_flat:
        return DamageRollBreakdown(
            dice=(),
            crit_dice=(),
            bonus=total_bonus,
            total=total_bonus,
            dice_expression=dice_expr,
            damage_type=damage_type,
        )

    dice = tuple(roll_dice(parsed.count, parsed.sides, rng))
    crit_dice = tuple(roll_dice(parsed.count, parsed.sides, rng)) if is_crit else ()
    total = sum(dice) + sum(crit_dice) + total_bonus

    logger.debug(
        "Damage rolled",
        expression=dice_expr,
        dice=list(dice),
        crit_dice=list(crit_dice),
        bonus=total_bonus,
        total=total,
    )
    return DamageRollBreakdown(
        dice=dice,
        crit_dice=crit_dice,
        bonus=total_bonus,
        total=total,
        dice_expression=dice_expr,
        damage_type=damage_type,
    )


# =============================================================================
# Saving Throws & Spellcasting
# =============================================================================


def calc_saving_throw_bonus(ability_mod: int, prof_bonus: int, proficient: bool) -> int:
    """Saving throw bonus: ability modifier plus proficiency when proficient."""
    return ability_mod + (prof_bonus if proficient else 0)


def roll_saving_throw(
    dc: int,
    ability_mod: int,
    prof_bonus: int,
    proficient: bool,
    rng: RandomnessSource | None = None,
    *,
    advantage: bool = False,
    disadvantage: bool = False,
) -> SavingThrowResult:
    """Roll a saving throw against a DC.

    Meeting the DC exactly is a success.

    Args:
        dc: Difficulty class to meet.
        ability_mod: Modifier of the saving ability.
        prof_bonus: Proficiency bonus.
        proficient: Whether the creature is proficient in this save.
        rng: Randomness source; the default source if omitted.
        advantage: Roll with advantage.
        disadvantage: Roll with disadvantage.

    Returns:
        SavingThrowResult with the roll, bonus and success flag.
    """
    roll = roll_d20(advantage, disadvantage, rng).roll
    bonus = calc_saving_throw_bonus(ability_mod, prof_bonus, proficient)
    total = roll + bonus
    result = SavingThrowResult(roll=roll, bonus=bonus, total=total, dc=dc, success=total >= dc)
    logger.debug("Saving throw rolled", roll=roll, bonus=bonus, dc=dc, success=result.success)
    return result


def calc_spell_save_dc(prof_bonus: int, spellcasting_mod: int) -> int:
    """Spell save DC = 8 + proficiency bonus + spellcasting modifier."""
    return SPELL_SAVE_DC_BASE + prof_bonus + spellcasting_mod


def calc_spell_attack_bonus(prof_bonus: int, spellcasting_mod: int) -> int:
    """Spell attack bonus = proficiency bonus + spellcasting modifier."""
    return prof_bonus + spellcasting_mod


def calc_concentration_dc(damage_taken: int) -> int:
    """Concentration check DC = max(10, half the damage taken, rounded down)."""
    return max(MIN_CONCENTRATION_DC, damage_taken // 2)


# =============================================================================
# Weapon Resolution
# =============================================================================


def has_weapon_proficiency(
    proficiencies: Iterable[str],
    category: WeaponCategory | str | None,
    weapon_name: str,
) -> bool:
    """Check whether a proficiency list covers a weapon.

    A proficiency covers the weapon when it names the weapon's category
    ('Simple weapons', or 'Martial weapons' which also covers simple) or
    contains the weapon's name ('Longswords' covers 'Longsword').

    Args:
        proficiencies: Weapon proficiencies as written on the sheet.
        category: The weapon's category, if known.
        weapon_name: The weapon's name.

    Returns:
        True if proficient.
    """
    name = weapon_name.lower()
    weapon_category = WeaponCategory(category) if category else None
    for proficiency in proficiencies:
        entry = proficiency.lower()
        if entry == "simple weapons" and weapon_category == WeaponCategory.SIMPLE:
            return True
        if entry == "martial weapons" and weapon_category is not None:
            return True
        if name and name in entry:
            return True
    return False


def resolve_weapon_stats(
    item: InlineWeaponItem | CatalogWeaponItem | GearItem,
    ability_scores: AbilityScores,
    prof_bonus: int,
    weapon_proficiencies: Sequence[str],
    catalog: ReferenceCatalog | None = None,
) -> EquippedWeaponStats | None:
    """Resolve attack and damage figures for a wielded item.

    Catalog weapons take dice, damage type, finesse, range and category
    from the catalog, falling back to any dice written on the item when the
    entry is missing; inline weapons use the values written on the item.
    Finesse weapons use the better of Strength and Dexterity, ranged
    weapons use Dexterity, everything else Strength. Proficiency is added
    to the attack bonus only when proficient; the magic bonus is added to
    both attack and damage.

    Args:
        item: The inventory item being wielded.
        ability_scores: The wielder's ability scores.
        prof_bonus: The wielder's proficiency bonus.
        weapon_proficiencies: The wielder's weapon proficiencies.
        catalog: Catalog for weapon lookups; the built-in SRD catalog by default.

    Returns:
        The resolved stats, or None when no damage dice can be determined.
    """
    if isinstance(item, GearItem):
        return None

    damage_dice = ""
    damage_type = ""
    is_finesse = False
    is_ranged = False
    category: WeaponCategory | None = None

    if isinstance(item, CatalogWeaponItem):
        weapon = (catalog or default_catalog()).get_weapon(item.source_item_id)
        if weapon is None:
            logger.warning(
                "Catalog weapon not found",
                item=item.name,
                source_item_id=item.source_item_id,
                fallback_dice=item.damage_dice or None,
            )
            damage_dice = item.damage_dice
            damage_type = item.damage_type
        else:
            damage_dice = weapon.damage_dice
            damage_type = weapon.damage_type
            is_finesse = weapon.is_finesse
            is_ranged = weapon.is_ranged
            category = weapon.category
    else:
        damage_dice = item.damage_dice
        damage_type = item.damage_type

    if not damage_dice:
        return None

    str_mod = ability_scores.modifier(Ability.STR)
    dex_mod = ability_scores.modifier(Ability.DEX)
    if is_finesse:
        ability_mod = max(str_mod, dex_mod)
    elif is_ranged:
        ability_mod = dex_mod
    else:
        ability_mod = str_mod

    proficient = has_weapon_proficiency(weapon_proficiencies, category, item.name)
    magic_bonus = item.weapon_attack_bonus

    return EquippedWeaponStats(
        name=item.name,
        damage_dice=damage_dice,
        damage_type=damage_type,
        attack_bonus=ability_mod + (prof_bonus if proficient else 0) + magic_bonus,
        damage_bonus=ability_mod + magic_bonus,
        is_finesse=is_finesse,
        is_ranged=is_ranged,
    )


def resolve_equipped_weapon(
    inventory: Iterable[InlineWeaponItem | CatalogWeaponItem | GearItem],
    ability_scores: AbilityScores,
    prof_bonus: int,
    weapon_proficiencies: Sequence[str],
    catalog: ReferenceCatalog | None = None,
) -> EquippedWeaponStats | None:
    """Resolve the weapon equipped in the main hand, if any.

    Returns:
        The resolved stats, or None when nothing usable is wielded.
    """
    for item in inventory:
        if item.equipped and item.equipment_slot == EquipmentSlot.MAIN_HAND:
            return resolve_weapon_stats(item, ability_scores, prof_bonus, weapon_proficiencies, catalog)
    return None


def resolve_weapon_attack(
    weapon: EquippedWeaponStats,
    target_ac: int,
    advantage: bool = False,
    disadvantage: bool = False,
    rng: RandomnessSource | None = None,
) -> WeaponAttackOutcome:
    """Attack with a resolved weapon and roll damage if it hits.

    Args:
        weapon: The attacker's resolved weapon stats.
        target_ac: Armor class of the target.
        advantage: Roll the attack with advantage.
        disadvantage: Roll the attack with disadvantage.
        rng: Randomness source; the default source if omitted.

    Returns:
        The attack roll, whether it hit, and the damage on a hit.
    """
    attack = roll_attack(weapon.attack_bonus, advantage, disadvantage, rng)
    hit = check_hit(attack, target_ac)
    damage = None
    if hit:
        damage = roll_damage(
            weapon.damage_dice,
            weapon.damage_bonus,
            attack.is_crit,
            weapon.damage_type,
            rng,
        )
    logger.info(
        "Weapon attack resolved",
        weapon=weapon.name,
        total=attack.total,
        target_ac=target_ac,
        hit=hit,
        damage=damage.total if damage else None,
    )
    return WeaponAttackOutcome(attack=attack, hit=hit, damage=damage)


__all__ = [
    "AttackRollResult",
    "DamageRollBreakdown",
    "SavingThrowResult",
    "WeaponAttackOutcome",
    "calc_attack_bonus",
    "roll_attack",
    "check_hit",
    "roll_damage",
    "calc_saving_throw_bonus",
    "roll_saving_throw",
    "calc_spell_save_dc",
    "calc_spell_attack_bonus",
    "calc_concentration_dc",
    "has_weapon_proficiency",
    "resolve_weapon_stats",
    "resolve_equipped_weapon",
    "resolve_weapon_attack",
]
