"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the D&D companion rules-engine test suite. Randomness is always
injected, so every test is deterministic.
"""

from __future__ import annotations

import itertools
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

import pytest

from dnd_companion.models.character import AbilityScores, HitPoints
from dnd_companion.models.combat import Combatant, EncounterState
from dnd_companion.models.enums import Ability, CombatantType


if TYPE_CHECKING:
    from collections.abc import Generator


class ScriptedRandomness:
    """Randomness source that returns scripted values in order.

    The script repeats once exhausted. Every request is recorded so tests
    can assert which dice were rolled.
    """

    def __init__(self, values: Iterable[int]) -> None:
        self._values = list(values)
        if not self._values:
            raise ValueError("ScriptedRandomness needs at least one value")
        self._cycle = itertools.cycle(self._values)
        self.requested_sides: list[int] = []

    def randint(self, sides: int) -> int:
        self.requested_sides.append(sides)
        return next(self._cycle)

    @property
    def calls(self) -> int:
        return len(self.requested_sides)


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache and default dice source around each test."""
    from dnd_companion.core.config import clear_settings_cache
    from dnd_companion.engine.dice import reset_default_rng

    clear_settings_cache()
    reset_default_rng()
    yield
    clear_settings_cache()
    reset_default_rng()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "DND_COMPANION_DEBUG": "true",
        "DND_COMPANION_LOG_LEVEL": "DEBUG",
        "DND_COMPANION_GAME_DICE_PARSE_POLICY": "strict",
        "DND_COMPANION_GAME_INITIATIVE_TIEBREAK": "insertion",
        "DND_COMPANION_GAME_RNG_SEED": "1234",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


# =============================================================================
# Randomness Fixtures
# =============================================================================


@pytest.fixture
def scripted_rng() -> Callable[..., ScriptedRandomness]:
    """Factory for scripted randomness sources.

    Example:
        >>> rng = scripted_rng(20, 3)
    """

    def factory(*values: int) -> ScriptedRandomness:
        return ScriptedRandomness(values)

    return factory


@pytest.fixture
def id_sequence() -> Callable[[], str]:
    """Id generator yielding 'id-1', 'id-2', ..."""
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def sample_ability_scores() -> AbilityScores:
    """Provide sample character ability scores.

    Returns:
        STR 16, DEX 14, CON 15, INT 10, WIS 12, CHA 8.
    """
    return AbilityScores(
        strength=16,
        dexterity=14,
        constitution=15,
        intelligence=10,
        wisdom=12,
        charisma=8,
    )


@pytest.fixture
def sample_caster(sample_ability_scores: AbilityScores) -> Combatant:
    """A concentrating player caster with CON save proficiency."""
    return Combatant(
        id="caster",
        name="Elowen",
        type=CombatantType.PLAYER,
        hit_points=HitPoints(current=30, max=30),
        armor_class=13,
        initiative_bonus=2,
        ability_scores=sample_ability_scores,
        proficiency_bonus=3,
        saving_throw_proficiencies=frozenset({Ability.CON, Ability.WIS}),
        concentration_spell="Bless",
    )


@pytest.fixture
def sample_combatant() -> Combatant:
    """A goblin enemy."""
    return Combatant(
        id="goblin",
        name="Goblin",
        hit_points=HitPoints(current=7, max=7),
        armor_class=15,
        initiative_bonus=2,
    )


@pytest.fixture
def three_combatant_encounter() -> EncounterState:
    """An encounter with Aria, Borin and Cade in that order, round 1, turn 0."""
    return EncounterState(
        combatants=(
            Combatant(id="a", name="Aria", type=CombatantType.PLAYER, hit_points=HitPoints(current=20, max=20)),
            Combatant(id="b", name="Borin", type=CombatantType.ALLY, hit_points=HitPoints(current=25, max=25)),
            Combatant(id="c", name="Cade", hit_points=HitPoints(current=11, max=11)),
        ),
    )
