"""Rules engine for the D&D 5E companion.

Submodules:
    dice: Randomness sources, dice parsing, d20 rolls and the roll history
    combat_math: Attacks, damage, saving throws, DCs and weapon resolution
    concentration: Concentration state machine
    turn_manager: Encounter turn order, hit points and conditions

Example:
    >>> from dnd_companion.engine import roll_attack, check_hit, SeededRandomnessSource
    >>> rng = SeededRandomnessSource(7)
    >>> result = roll_attack(5, rng=rng)
    >>> check_hit(result, 15) in (True, False)
    True
"""

from __future__ import annotations

# =============================================================================
# Dice Rolling
# =============================================================================
from dnd_companion.engine.dice import (
    D20RandomnessSource,
    D20Result,
    DiceParsePolicy,
    DiceRoll,
    DiceType,
    ParsedDice,
    RandomnessSource,
    RollMode,
    SeededRandomnessSource,
    create_dice_roll,
    default_rng,
    format_modifier,
    format_roll_result,
    parse_dice_expression,
    reset_default_rng,
    roll_d20,
    roll_dice,
    roll_die,
)

# =============================================================================
# Combat Math
# =============================================================================
from dnd_companion.engine.combat_math import (
    AttackRollResult,
    DamageRollBreakdown,
    SavingThrowResult,
    WeaponAttackOutcome,
    calc_attack_bonus,
    calc_concentration_dc,
    calc_saving_throw_bonus,
    calc_spell_attack_bonus,
    calc_spell_save_dc,
    check_hit,
    has_weapon_proficiency,
    resolve_equipped_weapon,
    resolve_weapon_attack,
    resolve_weapon_stats,
    roll_attack,
    roll_damage,
    roll_saving_throw,
)

# =============================================================================
# Concentration
# =============================================================================
from dnd_companion.engine.concentration import (
    ConcentrationCheckOutcome,
    Concentrating,
    ConcentrationState,
    Idle,
    PendingCheck,
    concentration_state,
    end_concentration,
    on_damage,
    resolve_check,
    start_concentration,
)

# =============================================================================
# Turn Management
# =============================================================================
from dnd_companion.engine.turn_manager import (
    DamageOutcome,
    add_combatant,
    add_condition,
    apply_damage,
    apply_healing,
    current_combatant,
    next_turn,
    remove_combatant,
    remove_condition,
    replace_combatant,
    reset_encounter,
    roll_initiative_for_all,
    sort_by_initiative,
)


__all__ = [
    # Dice
    "D20RandomnessSource",
    "D20Result",
    "DiceParsePolicy",
    "DiceRoll",
    "DiceType",
    "ParsedDice",
    "RandomnessSource",
    "RollMode",
    "SeededRandomnessSource",
    "create_dice_roll",
    "default_rng",
    "format_modifier",
    "format_roll_result",
    "parse_dice_expression",
    "reset_default_rng",
    "roll_d20",
    "roll_dice",
    "roll_die",
    # Combat math
    "AttackRollResult",
    "DamageRollBreakdown",
    "SavingThrowResult",
    "WeaponAttackOutcome",
    "calc_attack_bonus",
    "calc_concentration_dc",
    "calc_saving_throw_bonus",
    "calc_spell_attack_bonus",
    "calc_spell_save_dc",
    "check_hit",
    "has_weapon_proficiency",
    "resolve_equipped_weapon",
    "resolve_weapon_attack",
    "resolve_weapon_stats",
    "roll_attack",
    "roll_damage",
    "roll_saving_throw",
    # Concentration
    "ConcentrationCheckOutcome",
    "Concentrating",
    "ConcentrationState",
    "Idle",
    "PendingCheck",
    "concentration_state",
    "end_concentration",
    "on_damage",
    "resolve_check",
    "start_concentration",
    # Turn management
    "DamageOutcome",
    "add_combatant",
    "add_condition",
    "apply_damage",
    "apply_healing",
    "current_combatant",
    "next_turn",
    "remove_combatant",
    "remove_condition",
    "replace_combatant",
    "reset_encounter",
    "roll_initiative_for_all",
    "sort_by_initiative",
]
