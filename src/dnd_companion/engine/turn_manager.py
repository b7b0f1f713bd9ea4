"""Turn and initiative management for combat encounters.

Every operation takes an ``EncounterState`` and returns a new one; nothing
is held between calls. Callers replace their stored encounter with the
returned snapshot in one step.

Turn order is sorted by initiative, highest first. Advancing past the last
combatant starts a new round and ticks down condition durations. Damage to
a concentrating combatant returns the concentration check it triggers so
the caller can resolve it.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from dnd_companion.core.config import get_settings
from dnd_companion.core.constants import D20_SIDES
from dnd_companion.core.exceptions import CombatError, TurnManagementError
from dnd_companion.core.ids import IdGenerator, uuid_id_generator
from dnd_companion.core.logging import get_logger
from dnd_companion.engine.concentration import PendingCheck, on_damage
from dnd_companion.engine.dice import RandomnessSource, roll_die
from dnd_companion.models.combat import Combatant, Condition, EncounterState
from dnd_companion.models.enums import ConditionType, InitiativeTiebreak


logger = get_logger(__name__)


@dataclass(frozen=True)
class DamageOutcome:
    """Encounter after damage, plus any concentration check it opened."""

    state: EncounterState
    pending_check: PendingCheck | None = None


# =============================================================================
# Helpers
# =============================================================================


def _resolve_tiebreak(tiebreak: InitiativeTiebreak | str | None) -> InitiativeTiebreak:
    if tiebreak is None:
        return InitiativeTiebreak(get_settings().game.initiative_tiebreak)
    return InitiativeTiebreak(tiebreak)


def _sorted(combatants: Iterable[Combatant], tiebreak: InitiativeTiebreak) -> tuple[Combatant, ...]:
    # sorted() is stable, so equal keys keep insertion order
    if tiebreak == InitiativeTiebreak.BONUS:
        return tuple(sorted(combatants, key=lambda c: (-c.initiative, -c.initiative_bonus)))
    return tuple(sorted(combatants, key=lambda c: -c.initiative))


def _require_index(state: EncounterState, combatant_id: str) -> int:
    index = state.index_of(combatant_id)
    if index is None:
        raise TurnManagementError(
            f"Combatant not found in encounter: {combatant_id}",
            details={"combatant_id": combatant_id},
        )
    return index


def _with_combatant(state: EncounterState, index: int, combatant: Combatant) -> EncounterState:
    combatants = list(state.combatants)
    combatants[index] = combatant
    return state.model_copy(update={"combatants": tuple(combatants)})


# =============================================================================
# Initiative
# =============================================================================


def sort_by_initiative(
    state: EncounterState,
    tiebreak: InitiativeTiebreak | str | None = None,
) -> EncounterState:
    """Sort combatants by their current initiative and reset the turn pointer.

    Args:
        state: The encounter.
        tiebreak: Tie-break rule; the configured rule if omitted.

    Returns:
        The sorted encounter with the pointer on the first combatant.
    """
    rule = _resolve_tiebreak(tiebreak)
    return EncounterState(
        combatants=_sorted(state.combatants, rule),
        current_turn=0,
        round=state.round,
    )


def roll_initiative_for_all(
    state: EncounterState,
    rng: RandomnessSource | None = None,
    tiebreak: InitiativeTiebreak | str | None = None,
) -> EncounterState:
    """Roll 1d20 + initiative bonus for every combatant and sort.

    Args:
        state: The encounter.
        rng: Randomness source; the default source if omitted.
        tiebreak: Tie-break rule; the configured rule if omitted.

    Returns:
        The encounter in initiative order with the pointer reset to 0.
    """
    rolled = [
        c.model_copy(update={"initiative": roll_die(D20_SIDES, rng) + c.initiative_bonus})
        for c in state.combatants
    ]
    result = sort_by_initiative(state.model_copy(update={"combatants": tuple(rolled)}), tiebreak)
    logger.info(
        "Initiative rolled",
        order=[(c.name, c.initiative) for c in result.combatants],
        round=result.round,
    )
    return result


# =============================================================================
# Turn Progression
# =============================================================================


def _tick_conditions(combatant: Combatant) -> Combatant:
    if not combatant.conditions:
        return combatant
    remaining = []
    for condition in combatant.conditions:
        if condition.is_indefinite:
            remaining.append(condition)
        elif condition.duration > 1:
            remaining.append(condition.model_copy(update={"duration": condition.duration - 1}))
        else:
            logger.debug("Condition expired", combatant=combatant.name, condition=condition.type.value)
    return combatant.model_copy(update={"conditions": tuple(remaining)})


def next_turn(state: EncounterState) -> EncounterState:
    """Advance to the next combatant.

    Wrapping back to the first combatant starts a new round: every finite
    condition loses one round and those that reach zero are removed.
    Indefinite conditions are untouched. An empty encounter is returned
    unchanged.

    Args:
        state: The encounter.

    Returns:
        The encounter on the next turn.
    """
    if state.is_empty:
        return state

    next_index = (state.current_turn + 1) % len(state.combatants)
    if next_index != 0:
        return state.model_copy(update={"current_turn": next_index})

    new_round = state.round + 1
    logger.info("New round started", round=new_round)
    return EncounterState(
        combatants=tuple(_tick_conditions(c) for c in state.combatants),
        current_turn=0,
        round=new_round,
    )


def current_combatant(state: EncounterState) -> Combatant | None:
    """The combatant whose turn it is, or None for an empty encounter."""
    if state.is_empty:
        return None
    return state.combatants[state.current_turn]


# =============================================================================
# Roster
# =============================================================================


def add_combatant(state: EncounterState, combatant: Combatant) -> EncounterState:
    """Append a combatant to the end of the turn order.

    Raises:
        TurnManagementError: If a combatant with the same id is present.
    """
    if state.index_of(combatant.id) is not None:
        raise TurnManagementError(
            f"Combatant already in encounter: {combatant.id}",
            details={"combatant_id": combatant.id},
        )
    logger.info("Combatant added", combatant=combatant.name, type=combatant.type.value)
    return state.model_copy(update={"combatants": (*state.combatants, combatant)})


def remove_combatant(state: EncounterState, combatant_id: str) -> EncounterState:
    """Remove a combatant and keep the turn pointer consistent.

    If the removed combatant came before the current one the pointer moves
    back by one so the same combatant keeps the turn. Removing the current
    combatant hands the turn to whoever was next, wrapping to 0 past the
    end.

    Args:
        state: The encounter.
        combatant_id: Id of the combatant to remove.

    Returns:
        The encounter without the combatant.

    Raises:
        TurnManagementError: If the combatant is not in the encounter.
    """
    removed_index = _require_index(state, combatant_id)
    removed = state.combatants[removed_index]
    remaining = tuple(c for c in state.combatants if c.id != combatant_id)

    if not remaining:
        current = 0
    elif removed_index < state.current_turn:
        current = state.current_turn - 1
    elif state.current_turn >= len(remaining):
        current = 0
    else:
        current = state.current_turn

    logger.info("Combatant removed", combatant=removed.name, round=state.round)
    return EncounterState(combatants=remaining, current_turn=current, round=state.round)


def replace_combatant(state: EncounterState, combatant: Combatant) -> EncounterState:
    """Swap in an updated snapshot of a combatant, matched by id.

    Raises:
        TurnManagementError: If the combatant is not in the encounter.
    """
    index = _require_index(state, combatant.id)
    return _with_combatant(state, index, combatant)


def reset_encounter() -> EncounterState:
    """A fresh, empty encounter at round 1."""
    logger.info("Encounter reset")
    return EncounterState()


# =============================================================================
# Hit Points
# =============================================================================


def apply_damage(state: EncounterState, combatant_id: str, amount: int) -> DamageOutcome:
    """Apply damage to a combatant, never below 0 hit points.

    Damage to a concentrating combatant opens a concentration check with a
    DC from this damage alone.

    Args:
        state: The encounter.
        combatant_id: Id of the damaged combatant.
        amount: Damage dealt.

    Returns:
        DamageOutcome with the updated encounter and any pending check.

    Raises:
        CombatError: If the amount is negative.
        TurnManagementError: If the combatant is not in the encounter.
    """
    if amount < 0:
        raise CombatError(
            f"Damage must not be negative, got {amount}",
            combatant_id=combatant_id,
            round_number=state.round,
        )
    index = _require_index(state, combatant_id)
    combatant = state.combatants[index]
    hp = combatant.hit_points
    new_current = max(0, hp.current - amount)
    updated = combatant.model_copy(
        update={"hit_points": hp.model_copy(update={"current": new_current})}
    )

    logger.info(
        "Damage applied",
        combatant=combatant.name,
        amount=amount,
        hp=new_current,
        max_hp=hp.max,
    )
    return DamageOutcome(
        state=_with_combatant(state, index, updated),
        pending_check=on_damage(combatant, amount),
    )


def apply_healing(state: EncounterState, combatant_id: str, amount: int) -> EncounterState:
    """Restore hit points to a combatant, never above their maximum.

    Raises:
        CombatError: If the amount is negative.
        TurnManagementError: If the combatant is not in the encounter.
    """
    if amount < 0:
        raise CombatError(
            f"Healing must not be negative, got {amount}",
            combatant_id=combatant_id,
            round_number=state.round,
        )
    index = _require_index(state, combatant_id)
    combatant = state.combatants[index]
    hp = combatant.hit_points
    new_current = min(hp.max, hp.current + amount)
    logger.info("Healing applied", combatant=combatant.name, amount=amount, hp=new_current, max_hp=hp.max)
    return _with_combatant(
        state,
        index,
        combatant.model_copy(update={"hit_points": hp.model_copy(update={"current": new_current})}),
    )


# =============================================================================
# Conditions
# =============================================================================


def add_condition(
    state: EncounterState,
    combatant_id: str,
    condition_type: ConditionType | str,
    duration: int = -1,
    notes: str | None = None,
    id_generator: IdGenerator = uuid_id_generator,
) -> EncounterState:
    """Attach a condition to a combatant.

    Args:
        state: The encounter.
        combatant_id: Id of the affected combatant.
        condition_type: The condition.
        duration: Rounds remaining, or -1 for indefinite.
        notes: Optional free-text notes.
        id_generator: Supplies the condition id.

    Returns:
        The updated encounter.

    Raises:
        CombatError: If the duration is below -1.
        TurnManagementError: If the combatant is not in the encounter.
    """
    if duration < -1:
        raise CombatError(
            f"Condition duration must be -1 or greater, got {duration}",
            combatant_id=combatant_id,
            round_number=state.round,
        )
    index = _require_index(state, combatant_id)
    combatant = state.combatants[index]
    condition = Condition(
        id=id_generator(),
        type=ConditionType(condition_type),
        duration=duration,
        notes=notes,
    )
    logger.info(
        "Condition added",
        combatant=combatant.name,
        condition=condition.type.value,
        duration=duration,
    )
    return _with_combatant(
        state,
        index,
        combatant.model_copy(update={"conditions": (*combatant.conditions, condition)}),
    )


def remove_condition(state: EncounterState, combatant_id: str, condition_id: str) -> EncounterState:
    """Remove a condition from a combatant by condition id.

    Raises:
        CombatError: If the combatant has no such condition.
        TurnManagementError: If the combatant is not in the encounter.
    """
    index = _require_index(state, combatant_id)
    combatant = state.combatants[index]
    remaining = tuple(c for c in combatant.conditions if c.id != condition_id)
    if len(remaining) == len(combatant.conditions):
        raise CombatError(
            f"Condition not found: {condition_id}",
            combatant_id=combatant_id,
            round_number=state.round,
        )
    logger.info("Condition removed", combatant=combatant.name, condition_id=condition_id)
    return _with_combatant(state, index, combatant.model_copy(update={"conditions": remaining}))


__all__ = [
    "DamageOutcome",
    "sort_by_initiative",
    "roll_initiative_for_all",
    "next_turn",
    "current_combatant",
    "add_combatant",
    "remove_combatant",
    "replace_combatant",
    "reset_encounter",
    "apply_damage",
    "apply_healing",
    "add_condition",
    "remove_condition",
]
