"""Tests for encounter turn order management."""

from __future__ import annotations

import pytest

from dnd_companion.core.exceptions import CombatError, TurnManagementError
from dnd_companion.engine.turn_manager import (
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
from dnd_companion.models.character import HitPoints
from dnd_companion.models.combat import Combatant, Condition, EncounterState
from dnd_companion.models.enums import ConditionType, InitiativeTiebreak


def _combatant(cid: str, initiative: int = 0, bonus: int = 0) -> Combatant:
    return Combatant(
        id=cid,
        name=cid.upper(),
        hit_points=HitPoints(current=10, max=10),
        initiative=initiative,
        initiative_bonus=bonus,
    )


def _ids(state: EncounterState) -> list[str]:
    return [c.id for c in state.combatants]


class TestInitiative:
    """Tests for rolling and sorting initiative."""

    def test_roll_adds_bonus_and_sorts_descending(self, scripted_rng) -> None:
        """Test initiative is 1d20 + bonus and the order is highest first."""
        state = EncounterState(
            combatants=(_combatant("a", bonus=1), _combatant("b", bonus=3), _combatant("c")),
            current_turn=2,
        )

        result = roll_initiative_for_all(state, scripted_rng(5, 15, 10))

        assert _ids(result) == ["b", "c", "a"]
        assert [c.initiative for c in result.combatants] == [18, 10, 6]
        assert result.current_turn == 0

    def test_tie_breaks_by_bonus(self) -> None:
        """Test equal initiative puts the higher bonus first."""
        state = EncounterState(combatants=(_combatant("a", 12, 1), _combatant("b", 12, 4), _combatant("c", 12, 1)))

        result = sort_by_initiative(state, InitiativeTiebreak.BONUS)

        assert _ids(result) == ["b", "a", "c"]

    def test_tie_keeps_insertion_order(self) -> None:
        """Test the insertion rule keeps equal initiatives in their original order."""
        state = EncounterState(combatants=(_combatant("a", 12, 1), _combatant("b", 12, 4), _combatant("c", 15)))

        result = sort_by_initiative(state, "insertion")

        assert _ids(result) == ["c", "a", "b"]

    def test_tiebreak_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the configured tie-break rule applies by default."""
        monkeypatch.setenv("DND_COMPANION_GAME_INITIATIVE_TIEBREAK", "insertion")
        state = EncounterState(combatants=(_combatant("a", 12, 1), _combatant("b", 12, 4)))

        assert _ids(sort_by_initiative(state)) == ["a", "b"]


class TestNextTurn:
    """Tests for turn and round progression."""

    def test_advances_pointer(self, three_combatant_encounter: EncounterState) -> None:
        """Test the pointer moves to the next combatant within a round."""
        result = next_turn(three_combatant_encounter)

        assert result.current_turn == 1
        assert result.round == 1

    def test_wrap_increments_round_and_ticks_conditions(self) -> None:
        """Test wrapping decrements finite durations, drops expired ones, keeps indefinite."""
        conditions = (
            Condition(id="c1", type=ConditionType.POISONED, duration=3),
            Condition(id="c2", type=ConditionType.PRONE, duration=1),
            Condition(id="c3", type=ConditionType.CHARMED, duration=-1),
        )
        state = EncounterState(
            combatants=(_combatant("a").model_copy(update={"conditions": conditions}), _combatant("b")),
            current_turn=1,
            round=2,
        )

        result = next_turn(state)

        assert result.current_turn == 0
        assert result.round == 3
        remaining = {c.id: c.duration for c in result.combatants[0].conditions}
        assert remaining == {"c1": 2, "c3": -1}

    def test_conditions_tick_only_on_wrap(self) -> None:
        """Test durations are untouched mid-round."""
        conditions = (Condition(id="c1", type=ConditionType.POISONED, duration=1),)
        state = EncounterState(
            combatants=(_combatant("a").model_copy(update={"conditions": conditions}), _combatant("b")),
        )

        result = next_turn(state)

        assert result.combatants[0].conditions[0].duration == 1

    def test_empty_encounter_unchanged(self) -> None:
        """Test an empty encounter does not advance."""
        state = EncounterState()
        assert next_turn(state) == state

    def test_current_combatant(self, three_combatant_encounter: EncounterState) -> None:
        """Test the acting combatant follows the pointer."""
        acting = current_combatant(next_turn(three_combatant_encounter))

        assert acting is not None
        assert acting.id == "b"
        assert current_combatant(EncounterState()) is None


class TestRemoveCombatant:
    """Tests for removing combatants mid-encounter."""

    def test_remove_current_hands_turn_to_next(self, three_combatant_encounter: EncounterState) -> None:
        """Test removing the active combatant at index 1 makes the next one active."""
        state = three_combatant_encounter.model_copy(update={"current_turn": 1})

        result = remove_combatant(state, "b")

        assert _ids(result) == ["a", "c"]
        assert result.combatants[result.current_turn].id == "c"

    def test_remove_before_current_shifts_pointer(self, three_combatant_encounter: EncounterState) -> None:
        """Test removing an earlier combatant keeps the same combatant active."""
        state = three_combatant_encounter.model_copy(update={"current_turn": 2})

        result = remove_combatant(state, "a")

        assert result.current_turn == 1
        assert result.combatants[1].id == "c"

    def test_remove_last_while_active_wraps(self, three_combatant_encounter: EncounterState) -> None:
        """Test removing the active last combatant wraps the pointer to 0."""
        state = three_combatant_encounter.model_copy(update={"current_turn": 2})

        result = remove_combatant(state, "c")

        assert result.current_turn == 0

    def test_remove_only_combatant(self) -> None:
        """Test emptying the encounter resets the pointer."""
        state = EncounterState(combatants=(_combatant("a"),))

        result = remove_combatant(state, "a")

        assert result.is_empty
        assert result.current_turn == 0

    def test_remove_unknown_raises(self, three_combatant_encounter: EncounterState) -> None:
        """Test removing an unknown id raises TurnManagementError."""
        with pytest.raises(TurnManagementError):
            remove_combatant(three_combatant_encounter, "zzz")


class TestRoster:
    """Tests for adding, replacing and resetting."""

    def test_add_combatant(self, three_combatant_encounter: EncounterState) -> None:
        """Test a new combatant is appended."""
        result = add_combatant(three_combatant_encounter, _combatant("d"))

        assert _ids(result) == ["a", "b", "c", "d"]

    def test_add_duplicate_raises(self, three_combatant_encounter: EncounterState) -> None:
        """Test adding a combatant twice raises."""
        with pytest.raises(TurnManagementError):
            add_combatant(three_combatant_encounter, _combatant("a"))

    def test_replace_combatant(self, three_combatant_encounter: EncounterState) -> None:
        """Test a snapshot is swapped in by id."""
        renamed = three_combatant_encounter.combatants[1].model_copy(update={"name": "Borin the Bold"})

        result = replace_combatant(three_combatant_encounter, renamed)

        assert result.combatants[1].name == "Borin the Bold"

    def test_reset(self) -> None:
        """Test reset gives an empty encounter at round 1."""
        state = reset_encounter()

        assert state.is_empty
        assert state.round == 1
        assert state.current_turn == 0


class TestHitPoints:
    """Tests for damage and healing."""

    def test_damage_clamps_at_zero(self, three_combatant_encounter: EncounterState) -> None:
        """Test damage never drops hit points below 0."""
        outcome = apply_damage(three_combatant_encounter, "c", 50)

        assert outcome.state.combatants[2].hit_points.current == 0
        assert outcome.state.combatants[2].is_down is True
        assert outcome.pending_check is None

    def test_damage_to_concentrating_opens_check(self, sample_caster: Combatant) -> None:
        """Test damaging a concentrating combatant returns the pending check."""
        state = EncounterState(combatants=(sample_caster,))

        outcome = apply_damage(state, "caster", 24)

        assert outcome.pending_check is not None
        assert outcome.pending_check.dc == 12
        assert outcome.state.combatants[0].hit_points.current == 6

    def test_negative_damage_raises(self, three_combatant_encounter: EncounterState) -> None:
        """Test negative damage is rejected."""
        with pytest.raises(CombatError):
            apply_damage(three_combatant_encounter, "a", -1)

    def test_healing_clamps_at_max(self, three_combatant_encounter: EncounterState) -> None:
        """Test healing never exceeds maximum hit points."""
        hurt = apply_damage(three_combatant_encounter, "a", 5).state

        assert apply_healing(hurt, "a", 3).combatants[0].hit_points.current == 18
        assert apply_healing(hurt, "a", 30).combatants[0].hit_points.current == 20


class TestConditions:
    """Tests for adding and removing conditions."""

    def test_add_condition(self, three_combatant_encounter: EncounterState, id_sequence) -> None:
        """Test a condition is attached with a generated id."""
        result = add_condition(
            three_combatant_encounter, "a", ConditionType.FRIGHTENED, 2, "Dragon's presence", id_sequence,
        )

        condition = result.combatants[0].conditions[0]
        assert condition.id == "id-1"
        assert condition.type == ConditionType.FRIGHTENED
        assert condition.duration == 2
        assert condition.notes == "Dragon's presence"

    def test_add_condition_rejects_bad_duration(self, three_combatant_encounter: EncounterState) -> None:
        """Test durations below -1 raise CombatError."""
        with pytest.raises(CombatError) as exc_info:
            add_condition(three_combatant_encounter, "a", "poisoned", -2)

        assert exc_info.value.details["combatant_id"] == "a"

    def test_remove_condition(self, three_combatant_encounter: EncounterState, id_sequence) -> None:
        """Test a condition is removed by id."""
        state = add_condition(three_combatant_encounter, "a", "prone", id_generator=id_sequence)

        result = remove_condition(state, "a", "id-1")

        assert result.combatants[0].conditions == ()

    def test_remove_unknown_condition_raises(self, three_combatant_encounter: EncounterState) -> None:
        """Test removing a missing condition raises CombatError."""
        with pytest.raises(CombatError):
            remove_condition(three_combatant_encounter, "a", "nope")
