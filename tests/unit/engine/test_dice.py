"""Tests for dice rolling mechanics."""

from __future__ import annotations

import pytest

from dnd_companion.core.exceptions import DiceRollError
from dnd_companion.engine.dice import (
    D20RandomnessSource,
    DiceParsePolicy,
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
    roll_d20,
    roll_dice,
    roll_die,
)


class TestRandomnessSources:
    """Tests for the built-in randomness sources."""

    def test_d20_source_in_range(self) -> None:
        """Test the d20-backed source stays within the die."""
        source = D20RandomnessSource()
        for _ in range(50):
            assert 1 <= source.randint(6) <= 6

    def test_seeded_source_is_reproducible(self) -> None:
        """Test equal seeds give equal sequences."""
        first = SeededRandomnessSource(42)
        second = SeededRandomnessSource(42)
        assert [first.randint(20) for _ in range(10)] == [second.randint(20) for _ in range(10)]

    def test_zero_sides_rejected(self) -> None:
        """Test a die with no sides raises DiceRollError."""
        with pytest.raises(DiceRollError):
            SeededRandomnessSource(1).randint(0)

    def test_sources_satisfy_protocol(self, scripted_rng) -> None:
        """Test all sources satisfy the RandomnessSource protocol."""
        assert isinstance(D20RandomnessSource(), RandomnessSource)
        assert isinstance(SeededRandomnessSource(), RandomnessSource)
        assert isinstance(scripted_rng(1), RandomnessSource)

    def test_default_rng_uses_configured_seed(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the default source is seeded from settings."""
        monkeypatch.setenv("DND_COMPANION_GAME_RNG_SEED", "7")

        source = default_rng()

        assert isinstance(source, SeededRandomnessSource)
        assert source.seed == 7
        assert default_rng() is source

    def test_default_rng_without_seed(self) -> None:
        """Test the default source falls back to the d20 library."""
        assert isinstance(default_rng(), D20RandomnessSource)


class TestRollDie:
    """Tests for single and multiple dice."""

    def test_roll_die_uses_source(self, scripted_rng) -> None:
        """Test roll_die returns the source value and asks for the right die."""
        rng = scripted_rng(4)
        assert roll_die(8, rng) == 4
        assert rng.requested_sides == [8]

    def test_roll_dice_count(self, scripted_rng) -> None:
        """Test roll_dice rolls the requested number of dice."""
        assert roll_dice(3, 6, scripted_rng(1, 2, 3)) == [1, 2, 3]


class TestRollD20:
    """Tests for d20 rolls with advantage and disadvantage."""

    def test_normal_roll(self, scripted_rng) -> None:
        """Test a plain roll uses one die."""
        rng = scripted_rng(13)
        result = roll_d20(rng=rng)

        assert result.roll == 13
        assert result.all_rolls is None
        assert rng.calls == 1

    def test_advantage_keeps_higher(self, scripted_rng) -> None:
        """Test advantage keeps the higher of two dice."""
        result = roll_d20(advantage=True, rng=scripted_rng(8, 15))

        assert result.roll == 15
        assert result.had_advantage is True
        assert result.all_rolls == (8, 15)

    def test_disadvantage_keeps_lower(self, scripted_rng) -> None:
        """Test disadvantage keeps the lower of two dice."""
        result = roll_d20(disadvantage=True, rng=scripted_rng(8, 15))

        assert result.roll == 8
        assert result.had_disadvantage is True
        assert result.all_rolls == (8, 15)

    def test_advantage_and_disadvantage_cancel(self, scripted_rng) -> None:
        """Test both flags behave exactly like neither."""
        both_rng = scripted_rng(11, 19)
        neither_rng = scripted_rng(11, 19)

        both = roll_d20(True, True, both_rng)
        neither = roll_d20(False, False, neither_rng)

        assert both == neither
        assert both.had_advantage is False
        assert both.had_disadvantage is False
        assert both_rng.calls == neither_rng.calls == 1


class TestParseDiceExpression:
    """Tests for dice expression parsing."""

    @pytest.mark.parametrize(
        ("expr", "expected"),
        [
            ("2d6+3", ParsedDice(2, 6, 3)),
            ("1d8", ParsedDice(1, 8, 0)),
            ("1d4-1", ParsedDice(1, 4, -1)),
            ("  2D6  ", ParsedDice(2, 6, 0)),
            ("2d6 + 3", ParsedDice(2, 6, 3)),
            ("1", ParsedDice(0, 0, 1)),
        ],
    )
    def test_valid_expressions(self, expr: str, expected: ParsedDice) -> None:
        """Test well-formed expressions parse to (count, sides, bonus)."""
        assert parse_dice_expression(expr) == expected

    @pytest.mark.parametrize("expr", ["invalid", "", "d6", "2d", "1d6+", "1d0", "2d00+1"])
    def test_invalid_lenient_is_zero(self, expr: str) -> None:
        """Test malformed input degrades to all zeros under the lenient policy."""
        assert parse_dice_expression(expr, DiceParsePolicy.LENIENT) == ParsedDice(0, 0, 0)

    def test_invalid_strict_raises(self) -> None:
        """Test malformed input raises under the strict policy."""
        with pytest.raises(DiceRollError) as exc_info:
            parse_dice_expression("2x6", "strict")

        assert exc_info.value.details["expression"] == "2x6"

    def test_zero_sided_die_strict_raises(self) -> None:
        """Test a zero-sided die is rejected at parse time under the strict policy."""
        with pytest.raises(DiceRollError):
            parse_dice_expression("1d0", "strict")

    def test_policy_defaults_to_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the configured policy applies when none is passed."""
        monkeypatch.setenv("DND_COMPANION_GAME_DICE_PARSE_POLICY", "strict")

        with pytest.raises(DiceRollError):
            parse_dice_expression("invalid")

    @pytest.mark.parametrize("expr", ["2d6+3", "1d4-1", "1d8", "5"])
    def test_str_reproduces_expression(self, expr: str) -> None:
        """Test re-serializing a parsed expression gives the same expression."""
        parsed = parse_dice_expression(expr)
        assert str(parsed) == expr
        assert parse_dice_expression(str(parsed)) == parsed


class TestCreateDiceRoll:
    """Tests for dice roller history records."""

    def test_normal_roll_sums(self, scripted_rng, id_sequence) -> None:
        """Test normal mode sums every die and adds the modifier."""
        roll = create_dice_roll(
            DiceType.D6, 2, 3, description="Shortsword", rng=scripted_rng(4, 5), id_generator=id_sequence,
        )

        assert roll.id == "id-1"
        assert roll.results == (4, 5)
        assert roll.total == 12
        assert roll.description == "Shortsword"

    def test_advantage_rolls_two_keeps_max(self, scripted_rng) -> None:
        """Test advantage mode rolls two dice and keeps the higher."""
        roll = create_dice_roll("d20", 1, 2, RollMode.ADVANTAGE, rng=scripted_rng(8, 15))

        assert roll.results == (8, 15)
        assert roll.kept == 15
        assert roll.total == 17

    def test_disadvantage_rolls_two_keeps_min(self, scripted_rng) -> None:
        """Test disadvantage mode rolls two dice and keeps the lower."""
        roll = create_dice_roll("d20", 1, 0, "disadvantage", rng=scripted_rng(8, 15))

        assert roll.total == 8


class TestFormatting:
    """Tests for roll formatting."""

    @pytest.mark.parametrize(("value", "expected"), [(3, "+3"), (-1, "-1"), (0, "+0")])
    def test_format_modifier(self, value: int, expected: str) -> None:
        """Test modifiers carry an explicit sign."""
        assert format_modifier(value) == expected

    def test_format_normal_roll(self, scripted_rng) -> None:
        """Test formatting a multi-die roll."""
        roll = create_dice_roll("d6", 2, 3, rng=scripted_rng(4, 5))
        assert format_roll_result(roll) == "2d6 +3: [4, 5] +3 = 12"

    def test_format_single_die(self, scripted_rng) -> None:
        """Test a single die prints without brackets."""
        roll = create_dice_roll("d20", 1, 0, rng=scripted_rng(14))
        assert format_roll_result(roll) == "1d20: 14 = 14"

    def test_format_advantage_roll(self, scripted_rng) -> None:
        """Test advantage rolls show both dice and the kept one."""
        roll = create_dice_roll("d20", 1, 2, "advantage", rng=scripted_rng(8, 15))
        assert format_roll_result(roll) == "1d20 +2 (Advantage): [8, 15] → 15 +2 = 17"
