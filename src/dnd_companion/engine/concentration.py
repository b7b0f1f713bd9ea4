"""Concentration protocol for combatants.

A combatant is either idle or concentrating on one spell. Taking damage
while concentrating opens a pending Constitution save whose DC is fixed by
that single damage event; resolving it keeps the spell or drops it. Losing
concentration clears the spell and nothing else on the combatant.

Example:
    >>> caster = start_concentration(caster, "Bless")
    >>> check = on_damage(caster, 22)
    >>> check.dc
    11
    >>> outcome = resolve_check(caster, check, forced=False)
    >>> outcome.combatant.concentration_spell is None
    True
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from dnd_companion.core.exceptions import CombatError
from dnd_companion.core.logging import get_logger
from dnd_companion.engine.combat_math import SavingThrowResult, calc_concentration_dc, roll_saving_throw
from dnd_companion.engine.dice import RandomnessSource
from dnd_companion.models.combat import Combatant
from dnd_companion.models.enums import Ability


logger = get_logger(__name__)


# =============================================================================
# States
# =============================================================================


@dataclass(frozen=True)
class Idle:
    """Not concentrating on anything."""


@dataclass(frozen=True)
class Concentrating:
    """Concentrating on a spell."""

    spell: str


@dataclass(frozen=True)
class PendingCheck:
    """A concentration save owed after taking damage.

    Attributes:
        spell: The spell at risk.
        dc: Save DC, fixed from the triggering damage.
        damage: Damage that triggered the check.
    """

    spell: str
    dc: int
    damage: int


ConcentrationState = Union[Idle, Concentrating, PendingCheck]


@dataclass(frozen=True)
class ConcentrationCheckOutcome:
    """Result of resolving a pending check.

    Attributes:
        combatant: The combatant after the check.
        maintained: Whether concentration held.
        save: The saving throw, or None when the result was forced.
    """

    combatant: Combatant
    maintained: bool
    save: SavingThrowResult | None = None


# =============================================================================
# Transitions
# =============================================================================


def concentration_state(combatant: Combatant) -> Idle | Concentrating:
    """Current concentration state of a combatant."""
    if combatant.is_concentrating:
        return Concentrating(spell=combatant.concentration_spell)
    return Idle()


def start_concentration(combatant: Combatant, spell: str) -> Combatant:
    """Begin concentrating on a spell, replacing any previous one.

    Raises:
        CombatError: If the spell name is blank.
    """
    if not spell.strip():
        raise CombatError("Concentration needs a spell name", combatant_id=combatant.id)
    if combatant.is_concentrating:
        logger.info(
            "Concentration replaced",
            combatant=combatant.name,
            previous=combatant.concentration_spell,
            spell=spell,
        )
    return combatant.model_copy(update={"concentration_spell": spell})


def end_concentration(combatant: Combatant) -> Combatant:
    """Drop concentration voluntarily."""
    if combatant.is_concentrating:
        logger.info("Concentration ended", combatant=combatant.name, spell=combatant.concentration_spell)
    return combatant.model_copy(update={"concentration_spell": None})


def on_damage(combatant: Combatant, damage: int) -> PendingCheck | None:
    """Open a concentration check when a concentrating combatant is hurt.

    Args:
        combatant: The combatant taking damage.
        damage: Damage from this single event.

    Returns:
        The pending check, or None if not concentrating or no damage.
    """
    if not combatant.is_concentrating or damage <= 0:
        return None
    check = PendingCheck(
        spell=combatant.concentration_spell,
        dc=calc_concentration_dc(damage),
        damage=damage,
    )
    logger.debug("Concentration check pending", combatant=combatant.name, spell=check.spell, dc=check.dc)
    return check


def resolve_check(
    combatant: Combatant,
    check: PendingCheck,
    rng: RandomnessSource | None = None,
    *,
    forced: bool | None = None,
) -> ConcentrationCheckOutcome:
    """Resolve a pending concentration check.

    Rolls a Constitution save with the combatant's CON modifier, proficiency
    bonus and CON save proficiency. Missing ability scores or proficiency
    bonus count as zero. A check for a spell the combatant no longer holds
    leaves the combatant unchanged and reports ``maintained=False``.

    Args:
        combatant: The concentrating combatant.
        check: The check opened by ``on_damage``.
        rng: Randomness source for the save.
        forced: Skip the roll and force success (True) or failure (False).

    Returns:
        The outcome, with the combatant updated on failure.
    """
    if combatant.concentration_spell != check.spell:
        logger.debug("Concentration check is stale", combatant=combatant.name, spell=check.spell)
        return ConcentrationCheckOutcome(combatant=combatant, maintained=False)

    save = None
    if forced is None:
        con_mod = combatant.ability_scores.modifier(Ability.CON) if combatant.ability_scores else 0
        save = roll_saving_throw(
            check.dc,
            con_mod,
            combatant.proficiency_bonus or 0,
            Ability.CON in combatant.saving_throw_proficiencies,
            rng,
        )
        maintained = save.success
    else:
        maintained = forced

    if maintained:
        logger.info("Concentration maintained", combatant=combatant.name, spell=check.spell, dc=check.dc)
        return ConcentrationCheckOutcome(combatant=combatant, maintained=True, save=save)

    logger.info("Concentration lost", combatant=combatant.name, spell=check.spell, dc=check.dc)
    return ConcentrationCheckOutcome(
        combatant=combatant.model_copy(update={"concentration_spell": None}),
        maintained=False,
        save=save,
    )


__all__ = [
    "Idle",
    "Concentrating",
    "PendingCheck",
    "ConcentrationState",
    "ConcentrationCheckOutcome",
    "concentration_state",
    "start_concentration",
    "end_concentration",
    "on_damage",
    "resolve_check",
]
