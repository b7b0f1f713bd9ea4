"""Dice rolling mechanics for D&D 5E.

This module owns every source of randomness in the engine. Rolls go
through a ``RandomnessSource`` so that callers (and tests) can inject a
seeded or scripted source; the default source rolls through the d20
library.

It also parses the simple dice expressions used by weapons and spells
('2d6+3', '1d4-1', flat '1'), resolves d20 rolls with advantage and
disadvantage, and builds the roll-history records shown by the dice
roller.
"""

from __future__ import annotations

import random
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import StrEnum
from typing import Protocol, runtime_checkable

import d20

from dnd_companion.core.config import get_settings
from dnd_companion.core.constants import D20_SIDES
from dnd_companion.core.exceptions import DiceRollError
from dnd_companion.core.ids import IdGenerator, uuid_id_generator
from dnd_companion.core.logging import get_logger


logger = get_logger(__name__)

_DICE_PATTERN = re.compile(r"^(\d+)d([1-9]\d*)([+-]\d+)?$")
_FLAT_PATTERN = re.compile(r"^[+-]?\d+$")


class RollMode(StrEnum):
    """Advantage state of a roll."""

    NORMAL = "normal"
    ADVANTAGE = "advantage"
    DISADVANTAGE = "disadvantage"


class DiceType(StrEnum):
    """Standard polyhedral dice."""

    D4 = "d4"
    D6 = "d6"
    D8 = "d8"
    D10 = "d10"
    D12 = "d12"
    D20 = "d20"
    D100 = "d100"

    @property
    def sides(self) -> int:
        """Number of faces on the die."""
        return int(self.value[1:])


class DiceParsePolicy(StrEnum):
    """What to do with a dice expression that does not parse."""

    LENIENT = "lenient"
    STRICT = "strict"


# =============================================================================
# Randomness Sources
# =============================================================================


@runtime_checkable
class RandomnessSource(Protocol):
    """Produces uniformly distributed integers in ``[1, sides]``."""

    def randint(self, sides: int) -> int:
        """Roll one die with the given number of sides."""
        ...


class D20RandomnessSource:
    """Randomness source backed by the d20 library."""

    def randint(self, sides: int) -> int:
        if sides < 1:
            raise DiceRollError(f"A die needs at least one side, got {sides}")
        return d20.roll(f"1d{sides}").total


class SeededRandomnessSource:
    """Reproducible randomness source wrapping ``random.Random``.

    Example:
        >>> rng = SeededRandomnessSource(42)
        >>> rng.randint(20) == SeededRandomnessSource(42).randint(20)
        True
    """

    def __init__(self, seed: int | None = None) -> None:
        self._seed = seed
        self._random = random.Random(seed)

    @property
    def seed(self) -> int | None:
        return self._seed

    def randint(self, sides: int) -> int:
        if sides < 1:
            raise DiceRollError(f"A die needs at least one side, got {sides}")
        return self._random.randint(1, sides)


_default_source: RandomnessSource | None = None


def default_rng() -> RandomnessSource:
    """Get the process-wide default randomness source.

    Seeded from ``DND_COMPANION_GAME_RNG_SEED`` when that is set, otherwise
    backed by the d20 library.

    Returns:
        The shared randomness source.
    """
    global _default_source  # noqa: PLW0603
    if _default_source is None:
        seed = get_settings().game.rng_seed
        if seed is not None:
            _default_source = SeededRandomnessSource(seed)
        else:
            _default_source = D20RandomnessSource()
        logger.debug("Default randomness source created", seed=seed)
    return _default_source


def reset_default_rng() -> None:
    """Forget the default randomness source so settings are re-read."""
    global _default_source  # noqa: PLW0603
    _default_source = None


# =============================================================================
# Roll Results
# =============================================================================


@dataclass(frozen=True)
class D20Result:
    """Outcome of a d20 roll.

    Attributes:
        roll: The kept die (highest with advantage, lowest with disadvantage).
        had_advantage: Whether advantage applied after cancellation.
        had_disadvantage: Whether disadvantage applied after cancellation.
        all_rolls: Both dice when advantage or disadvantage applied.
    """

    roll: int
    had_advantage: bool = False
    had_disadvantage: bool = False
    all_rolls: tuple[int, int] | None = None


@dataclass(frozen=True)
class ParsedDice:
    """A parsed ``<count>d<sides>[+|-<bonus>]`` expression.

    Flat numbers parse to ``count=0, sides=0, bonus=N``.
    """

    count: int = 0
    sides: int = 0
    bonus: int = 0

    @property
    def is_flat(self) -> bool:
        """Check whether the expression rolls no dice."""
        return self.count == 0

    def __str__(self) -> str:
        if self.is_flat:
            return str(self.bonus)
        if self.bonus:
            return f"{self.count}d{self.sides}{format_modifier(self.bonus)}"
        return f"{self.count}d{self.sides}"


@dataclass(frozen=True)
class DiceRoll:
    """A roll made from the dice roller, kept for roll history.

    Attributes:
        id: Unique identifier of this roll.
        timestamp: When the roll was made.
        dice_type: Die rolled.
        number_of_dice: Dice requested (advantage modes always roll two).
        modifier: Flat modifier added to the total.
        mode: Normal, advantage or disadvantage.
        results: Individual die results.
        total: Final total including the modifier.
        description: Optional label (e.g., 'Stealth check').
    """

    id: str
    timestamp: datetime
    dice_type: DiceType
    number_of_dice: int
    modifier: int
    mode: RollMode
    results: tuple[int, ...]
    total: int
    description: str | None = field(default=None)

    @property
    def kept(self) -> int:
        """Dice total before the modifier.

        The kept die in advantage or disadvantage mode, the sum otherwise.
        """
        if self.mode == RollMode.ADVANTAGE:
            return max(self.results)
        if self.mode == RollMode.DISADVANTAGE:
            return min(self.results)
        return sum(self.results)


# =============================================================================
# Rolling
# =============================================================================


def roll_die(sides: int, rng: RandomnessSource | None = None) -> int:
    """Roll a single die.

    Args:
        sides: Number of faces (e.g., 6 for a d6).
        rng: Randomness source; the default source if omitted.

    Returns:
        An integer in ``[1, sides]``.
    """
    return (rng if rng is not None else default_rng()).randint(sides)


def roll_dice(count: int, sides: int, rng: RandomnessSource | None = None) -> list[int]:
    """Roll ``count`` independent dice of the same size."""
    source = rng if rng is not None else default_rng()
    return [source.randint(sides) for _ in range(count)]


def roll_d20(
    advantage: bool = False,
    disadvantage: bool = False,
    rng: RandomnessSource | None = None,
) -> D20Result:
    """Roll a d20 with optional advantage or disadvantage.

    If both are set they cancel and a single die is rolled.

    Args:
        advantage: Roll twice and keep the higher die.
        disadvantage: Roll twice and keep the lower die.
        rng: Randomness source; the default source if omitted.

    Returns:
        D20Result with the kept die and, when two dice were rolled, both.
    """
    source = rng if rng is not None else default_rng()
    has_advantage = advantage and not disadvantage
    has_disadvantage = disadvantage and not advantage

    if has_advantage or has_disadvantage:
        first = source.randint(D20_SIDES)
        second = source.randint(D20_SIDES)
        kept = max(first, second) if has_advantage else min(first, second)
        logger.debug(
            "d20 rolled",
            rolls=[first, second],
            kept=kept,
            advantage=has_advantage,
            disadvantage=has_disadvantage,
        )
        return D20Result(
            roll=kept,
            had_advantage=has_advantage,
            had_disadvantage=has_disadvantage,
            all_rolls=(first, second),
        )

    result = source.randint(D20_SIDES)
    logger.debug("d20 rolled", roll=result)
    return D20Result(roll=result)


def _resolve_policy(policy: DiceParsePolicy | str | None) -> DiceParsePolicy:
    if policy is None:
        return DiceParsePolicy(get_settings().game.dice_parse_policy)
    return DiceParsePolicy(policy)


def parse_dice_expression(
    expr: str,
    policy: DiceParsePolicy | str | None = None,
) -> ParsedDice:
    """Parse a dice expression like '2d6', '1d8+3' or '1d4-1'.

    Parsing ignores case and whitespace. A bare integer ('1' for a blowgun)
    yields a zero-dice flat bonus.

    Args:
        expr: The expression to parse.
        policy: What to do with malformed input. Lenient returns an
            all-zero result and logs a warning; strict raises. Defaults to
            the configured ``dice_parse_policy``.

    Returns:
        The parsed expression.

    Raises:
        DiceRollError: If the input is malformed and the policy is strict.

    Example:
        >>> parse_dice_expression("2d6 + 3")
        ParsedDice(count=2, sides=6, bonus=3)
    """
    normalized = re.sub(r"\s", "", (expr or "").lower())
    match = _DICE_PATTERN.match(normalized)
    if match:
        return ParsedDice(
            count=int(match.group(1)),
            sides=int(match.group(2)),
            bonus=int(match.group(3)) if match.group(3) else 0,
        )

    if _FLAT_PATTERN.match(normalized):
        return ParsedDice(bonus=int(normalized))

    if _resolve_policy(policy) == DiceParsePolicy.STRICT:
        raise DiceRollError("Invalid dice expression", expression=expr)

    logger.warning("Invalid dice expression treated as zero", expression=expr)
    return ParsedDice()


def create_dice_roll(
    dice_type: DiceType | str,
    number_of_dice: int = 1,
    modifier: int = 0,
    mode: RollMode | str = RollMode.NORMAL,
    description: str | None = None,
    *,
    rng: RandomnessSource | None = None,
    id_generator: IdGenerator = uuid_id_generator,
) -> DiceRoll:
    """Roll dice for the dice roller and record the result.

    Advantage and disadvantage always roll two dice and keep the higher or
    lower one; normal mode rolls ``number_of_dice`` dice and sums them.

    Args:
        dice_type: Die to roll (e.g., 'd20').
        number_of_dice: How many dice to roll in normal mode.
        modifier: Flat modifier added to the total.
        mode: Normal, advantage or disadvantage.
        description: Optional label for the roll.
        rng: Randomness source; the default source if omitted.
        id_generator: Supplies the roll id.

    Returns:
        The recorded roll.

    Example:
        >>> roll = create_dice_roll("d6", 2, 3, description="Shortsword damage")
        >>> roll.total == sum(roll.results) + 3
        True
    """
    die = DiceType(dice_type)
    roll_mode = RollMode(mode)
    source = rng if rng is not None else default_rng()

    if roll_mode == RollMode.ADVANTAGE:
        results = tuple(roll_dice(2, die.sides, source))
        kept = max(results)
    elif roll_mode == RollMode.DISADVANTAGE:
        results = tuple(roll_dice(2, die.sides, source))
        kept = min(results)
    else:
        results = tuple(roll_dice(number_of_dice, die.sides, source))
        kept = sum(results)

    roll = DiceRoll(
        id=id_generator(),
        timestamp=datetime.now(timezone.utc),
        dice_type=die,
        number_of_dice=number_of_dice,
        modifier=modifier,
        mode=roll_mode,
        results=results,
        total=kept + modifier,
        description=description,
    )

    logger.info(
        "Dice rolled",
        dice=f"{number_of_dice}{die.value}",
        mode=roll_mode.value,
        results=list(results),
        total=roll.total,
        description=description,
    )
    return roll


# =============================================================================
# Formatting
# =============================================================================


def format_modifier(value: int) -> str:
    """Format a modifier with an explicit sign ('+3', '-1', '+0')."""
    return f"+{value}" if value >= 0 else str(value)


def _join(results: Sequence[int]) -> str:
    return ", ".join(str(r) for r in results)


def format_roll_result(roll: DiceRoll) -> str:
    """Format a recorded roll for display.

    Args:
        roll: The roll to format.

    Returns:
        Text such as ``'2d6 +3: [4, 5] +3 = 12'`` or
        ``'1d20 +2 (Advantage): [8, 15] → 15 +2 = 17'``.
    """
    mode_text = ""
    if roll.mode == RollMode.ADVANTAGE:
        mode_text = " (Advantage)"
    elif roll.mode == RollMode.DISADVANTAGE:
        mode_text = " (Disadvantage)"

    modifier_text = f" {format_modifier(roll.modifier)}" if roll.modifier else ""
    roll_text = f"{roll.number_of_dice}{roll.dice_type.value}{modifier_text}{mode_text}"

    if roll.mode == RollMode.NORMAL:
        results_text = f"{roll.results[0]}" if len(roll.results) == 1 else f"[{_join(roll.results)}]"
    else:
        results_text = f"[{_join(roll.results)}] → {roll.kept}"

    return f"{roll_text}: {results_text}{modifier_text} = {roll.total}"


__all__ = [
    "RollMode",
    "DiceType",
    "DiceParsePolicy",
    "RandomnessSource",
    "D20RandomnessSource",
    "SeededRandomnessSource",
    "default_rng",
    "reset_default_rng",
    "D20Result",
    "ParsedDice",
    "DiceRoll",
    "roll_die",
    "roll_dice",
    "roll_d20",
    "parse_dice_expression",
    "create_dice_roll",
    "format_modifier",
    "format_roll_result",
]
