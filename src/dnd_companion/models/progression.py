"""D&D 5E level progression rules.

Ability modifiers, proficiency bonus by level, experience thresholds,
hit-point gain on level-up, ability score improvements, and class-feature
lookups by level. Everything here is a pure function of its inputs; rolled
hit points take an injected randomness source.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from dnd_companion.core.config import get_settings
from dnd_companion.core.constants import MAX_CHARACTER_LEVEL, MIN_CHARACTER_LEVEL, PC_ABILITY_SCORE_CAP
from dnd_companion.core.logging import get_logger
from dnd_companion.engine.dice import RandomnessSource, roll_die
from dnd_companion.models.catalog import ASI_FEATURE_NAME, ClassFeature
from dnd_companion.models.character import AbilityScores
from dnd_companion.models.enums import Ability, HPGainMode


logger = get_logger(__name__)


# =============================================================================
# Ability Modifiers & Proficiency Bonus
# =============================================================================


def ability_modifier(score: int) -> int:
    """Ability modifier for a score: ``floor((score - 10) / 2)``.

    Example:
        >>> ability_modifier(8)
        -1
    """
    return (score - 10) // 2


def proficiency_bonus(level: int) -> int:
    """Proficiency bonus for a character level: +2 at 1, +6 at 17."""
    return (level - 1) // 4 + 2


# =============================================================================
# Experience Points (PHB p.15)
# =============================================================================

XP_THRESHOLDS: tuple[int, ...] = (
    0,
    300,
    900,
    2700,
    6500,
    14000,
    23000,
    34000,
    48000,
    64000,
    85000,
    100000,
    120000,
    140000,
    165000,
    195000,
    225000,
    265000,
    305000,
    355000,
)
"""Total XP needed to reach each level; index 0 is level 1."""


@dataclass(frozen=True)
class XPProgress:
    """Progress through the current level, for a progress bar.

    Attributes:
        level: Level the XP total corresponds to.
        current: XP earned within the current level.
        total: XP span of the current level.
        percentage: Whole-number percentage through the level, capped at 100.
        xp_to_next: XP still needed for the next level.
    """

    level: int
    current: int
    total: int
    percentage: int
    xp_to_next: int


def level_for_xp(xp: int) -> int:
    """Character level for a total XP amount (1-20)."""
    level = MIN_CHARACTER_LEVEL
    for index, threshold in enumerate(XP_THRESHOLDS):
        if xp >= threshold:
            level = index + 1
        else:
            break
    return level


def xp_for_level(level: int) -> int:
    """Total XP needed to reach a level, with the level clamped to 1-20."""
    clamped = max(MIN_CHARACTER_LEVEL, min(MAX_CHARACTER_LEVEL, level))
    return XP_THRESHOLDS[clamped - 1]


def xp_progress(xp: int) -> XPProgress:
    """Compute progress through the level a total XP amount reaches.

    Args:
        xp: Total experience points.

    Returns:
        XPProgress for the level. At level 20 the bar is full.
    """
    level = level_for_xp(xp)
    if level >= MAX_CHARACTER_LEVEL:
        return XPProgress(level=level, current=xp, total=xp, percentage=100, xp_to_next=0)

    start = xp_for_level(level)
    end = xp_for_level(level + 1)
    current = xp - start
    total = end - start
    return XPProgress(
        level=level,
        current=current,
        total=total,
        percentage=min(100, current * 100 // total),
        xp_to_next=max(0, end - xp),
    )


def can_level_up(level: int, xp: int) -> bool:
    """Check whether a character has the XP for their next level."""
    if level >= MAX_CHARACTER_LEVEL:
        return False
    return xp >= XP_THRESHOLDS[level]


# =============================================================================
# Hit Points
# =============================================================================


@dataclass(frozen=True)
class HPGain:
    """Result of a level-up hit-point gain."""

    new_max_hp: int
    hp_gained: int


def average_hp_gain(hit_die: int, con_mod: int) -> int:
    """Fixed hit-point gain: half the hit die plus one plus CON, minimum 1."""
    return max(1, hit_die // 2 + 1 + con_mod)


def roll_hp_gain(hit_die: int, con_mod: int, rng: RandomnessSource | None = None) -> int:
    """Rolled hit-point gain: one hit die plus CON, minimum 1."""
    roll = roll_die(hit_die, rng)
    gained = max(1, roll + con_mod)
    logger.debug("Hit die rolled", hit_die=hit_die, roll=roll, con_mod=con_mod, gained=gained)
    return gained


def level_one_hit_points(hit_die: int, con_score: int) -> int:
    """Maximum hit points at level 1: the full hit die plus CON, minimum 1."""
    return max(1, hit_die + ability_modifier(con_score))


def new_max_hp(
    current_max: int,
    hit_die: int,
    con_mod: int,
    use_average: bool | None = None,
    rng: RandomnessSource | None = None,
) -> HPGain:
    """Compute maximum hit points after gaining a level.

    Args:
        current_max: Maximum hit points before the level-up.
        hit_die: The class hit die.
        con_mod: Constitution modifier.
        use_average: Take the fixed average instead of rolling; the
            configured hit-point gain mode if omitted.
        rng: Randomness source for rolled gains.

    Returns:
        HPGain with the new maximum and the amount gained.
    """
    if use_average is None:
        use_average = HPGainMode(get_settings().game.hp_gain_mode) == HPGainMode.AVERAGE
    if use_average:
        gained = average_hp_gain(hit_die, con_mod)
    else:
        gained = roll_hp_gain(hit_die, con_mod, rng)
    return HPGain(new_max_hp=current_max + gained, hp_gained=gained)


def hit_dice_max(level: int) -> int:
    """Number of hit dice a character has (one per level)."""
    return max(1, level)


# =============================================================================
# Ability Score Improvements
# =============================================================================


class SingleASI(BaseModel):
    """+2 to a single ability."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["single"] = "single"
    ability: Ability


class SplitASI(BaseModel):
    """+1 to each of two abilities."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["split"] = "split"
    first: Ability
    second: Ability


ASIChoice = Annotated[Union[SingleASI, SplitASI], Field(discriminator="kind")]


def apply_asi(scores: AbilityScores, choice: SingleASI | SplitASI) -> AbilityScores:
    """Apply an ability score improvement.

    Each increase is capped at 20. Choosing the same ability twice for a
    split improvement adds +2 to it, still capped at 20.

    Args:
        scores: Current ability scores.
        choice: The improvement to apply.

    Returns:
        New ability scores.
    """
    increases: dict[Ability, int] = {}
    if isinstance(choice, SingleASI):
        increases[choice.ability] = 2
    else:
        increases[choice.first] = increases.get(choice.first, 0) + 1
        increases[choice.second] = increases.get(choice.second, 0) + 1

    update = {
        ability.value: min(PC_ABILITY_SCORE_CAP, scores.score(ability) + amount)
        for ability, amount in increases.items()
    }
    logger.debug("Ability score improvement applied", update=update)
    return scores.model_copy(update=update)


# =============================================================================
# Class Features
# =============================================================================


def asi_levels(features: Iterable[ClassFeature]) -> list[int]:
    """Levels at which a class gains an ability score improvement."""
    return sorted({f.level for f in features if f.name == ASI_FEATURE_NAME})


def is_asi_level(features: Iterable[ClassFeature], level: int) -> bool:
    return level in asi_levels(features)


def features_at_level(features: Iterable[ClassFeature], level: int) -> list[ClassFeature]:
    """Class features gained at exactly ``level``."""
    return [f for f in features if f.level == level]


__all__ = [
    "ability_modifier",
    "proficiency_bonus",
    "XP_THRESHOLDS",
    "XPProgress",
    "level_for_xp",
    "xp_for_level",
    "xp_progress",
    "can_level_up",
    "HPGain",
    "average_hp_gain",
    "roll_hp_gain",
    "level_one_hit_points",
    "new_max_hp",
    "hit_dice_max",
    "SingleASI",
    "SplitASI",
    "ASIChoice",
    "apply_asi",
    "asi_levels",
    "is_asi_level",
    "features_at_level",
]
