"""Tests for combat arithmetic."""

from __future__ import annotations

import pytest

from dnd_companion.engine.combat_math import (
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
from dnd_companion.models.catalog import StaticCatalog, WeaponDefinition
from dnd_companion.models.character import AbilityScores, CatalogWeaponItem, GearItem, InlineWeaponItem
from dnd_companion.models.combat import EquippedWeaponStats
from dnd_companion.models.enums import EquipmentSlot, WeaponCategory, WeaponRange


class TestAttackRolls:
    """Tests for attack rolls and hit checks."""

    def test_attack_bonus(self) -> None:
        """Test attack bonus adds ability, proficiency and magic."""
        assert calc_attack_bonus(3, 2) == 5
        assert calc_attack_bonus(3, 2, 1) == 6

    def test_total_adds_bonus(self, scripted_rng) -> None:
        """Test the total is the natural roll plus the bonus."""
        result = roll_attack(5, rng=scripted_rng(12))

        assert result.total == 17
        assert result.is_crit is False
        assert result.is_fumble is False

    def test_natural_twenty_always_hits(self, scripted_rng) -> None:
        """Test a natural 20 hits regardless of armor class."""
        result = roll_attack(-5, rng=scripted_rng(20))

        assert result.is_crit is True
        assert check_hit(result, 30) is True

    def test_natural_one_always_misses(self, scripted_rng) -> None:
        """Test a natural 1 misses regardless of attack bonus."""
        result = roll_attack(50, rng=scripted_rng(1))

        assert result.is_fumble is True
        assert check_hit(result, 5) is False

    def test_meeting_ac_hits(self, scripted_rng) -> None:
        """Test a total equal to AC hits and one below misses."""
        assert check_hit(roll_attack(4, rng=scripted_rng(11)), 15) is True
        assert check_hit(roll_attack(4, rng=scripted_rng(10)), 15) is False

    def test_advantage_crit_uses_kept_die(self, scripted_rng) -> None:
        """Test crit detection looks at the kept die."""
        result = roll_attack(0, advantage=True, rng=scripted_rng(3, 20))

        assert result.d20.all_rolls == (3, 20)
        assert result.is_crit is True


class TestDamageRolls:
    """Tests for damage rolls."""

    def test_normal_damage(self, scripted_rng) -> None:
        """Test dice plus expression bonus plus extra bonus."""
        result = roll_damage("2d6+1", 3, rng=scripted_rng(4, 5))

        assert result.dice == (4, 5)
        assert result.crit_dice == ()
        assert result.bonus == 4
        assert result.total == 13

    def test_crit_doubles_dice_not_bonus(self, scripted_rng) -> None:
        """Test a critical 1d8 rolls exactly two dice and applies the bonus once."""
        rng = scripted_rng(6, 3)
        result = roll_damage("1d8", 2, is_crit=True, damage_type="slashing", rng=rng)

        assert result.dice == (6,)
        assert result.crit_dice == (3,)
        assert result.bonus == 2
        assert result.total == 11
        assert result.damage_type == "slashing"
        assert rng.requested_sides == [8, 8]

    def test_flat_damage(self, scripted_rng) -> None:
        """Test a zero-dice expression yields the flat bonus only."""
        rng = scripted_rng(6)
        result = roll_damage("1", 2, is_crit=True, rng=rng)

        assert result.dice == ()
        assert result.crit_dice == ()
        assert result.total == 3
        assert rng.calls == 0

    def test_malformed_damage_is_bonus_only(self, scripted_rng) -> None:
        """Test malformed dice degrade to the extra bonus."""
        result = roll_damage("garbage", 2, rng=scripted_rng(6), policy="lenient")

        assert result.total == 2

    def test_zero_sided_die_degrades_under_lenient_policy(self, scripted_rng) -> None:
        """Test a zero-sided die rolls nothing and yields only the extra bonus."""
        rng = scripted_rng(6)
        result = roll_damage("1d0", 2, is_crit=True, rng=rng, policy="lenient")

        assert result.dice == ()
        assert result.total == 2
        assert rng.calls == 0



class TestSavingThrows:
    """Tests for saving throws and spellcasting numbers."""

    def test_saving_throw_bonus(self) -> None:
        """Test proficiency is added only when proficient."""
        assert calc_saving_throw_bonus(2, 3, True) == 5
        assert calc_saving_throw_bonus(2, 3, False) == 2

    def test_tie_succeeds(self, scripted_rng) -> None:
        """Test roll plus bonus equal to the DC is a success."""
        result = roll_saving_throw(15, 2, 3, True, scripted_rng(10))

        assert result.total == 15
        assert result.success is True

    def test_below_dc_fails(self, scripted_rng) -> None:
        """Test one below the DC fails."""
        assert roll_saving_throw(15, 2, 3, True, scripted_rng(9)).success is False

    def test_spell_numbers(self) -> None:
        """Test spell save DC and spell attack bonus."""
        assert calc_spell_save_dc(3, 4) == 15
        assert calc_spell_attack_bonus(3, 4) == 7

    @pytest.mark.parametrize(
        ("damage", "dc"),
        [(1, 10), (19, 10), (20, 10), (21, 10), (22, 11), (23, 11), (40, 20)],
    )
    def test_concentration_dc(self, damage: int, dc: int) -> None:
        """Test concentration DC is the greater of 10 and half the damage."""
        assert calc_concentration_dc(damage) == dc


class TestWeaponProficiency:
    """Tests for weapon proficiency matching."""

    def test_simple_category(self) -> None:
        """Test simple weapon training covers simple weapons only."""
        assert has_weapon_proficiency(["Simple weapons"], WeaponCategory.SIMPLE, "Dagger") is True
        assert has_weapon_proficiency(["Simple weapons"], WeaponCategory.MARTIAL, "Longsword") is False

    def test_martial_subsumes_simple(self) -> None:
        """Test martial weapon training covers simple weapons too."""
        assert has_weapon_proficiency(["Martial weapons"], WeaponCategory.MARTIAL, "Longsword") is True
        assert has_weapon_proficiency(["Martial weapons"], WeaponCategory.SIMPLE, "Club") is True

    def test_name_containment(self) -> None:
        """Test a proficiency naming the weapon grants it, ignoring case."""
        assert has_weapon_proficiency(["Longswords"], WeaponCategory.MARTIAL, "longsword") is True
        assert has_weapon_proficiency(["Rapiers"], None, "Rapier") is True
        assert has_weapon_proficiency(["Rapiers"], None, "Whip") is False


class TestResolveWeaponStats:
    """Tests for weapon stat resolution."""

    @pytest.fixture
    def fighter_scores(self) -> AbilityScores:
        return AbilityScores(strength=16, dexterity=14)

    def test_catalog_martial_melee(self, fighter_scores: AbilityScores) -> None:
        """Test a proficient longsword uses STR and adds proficiency."""
        item = CatalogWeaponItem(id="w1", name="Longsword", source_item_id="longsword")

        stats = resolve_weapon_stats(item, fighter_scores, 2, ["Martial weapons"])

        assert stats == EquippedWeaponStats(
            name="Longsword",
            damage_dice="1d8",
            damage_type="slashing",
            attack_bonus=5,
            damage_bonus=3,
            is_finesse=False,
            is_ranged=False,
        )

    def test_finesse_uses_better_ability(self) -> None:
        """Test finesse weapons take the better of STR and DEX."""
        item = CatalogWeaponItem(id="w1", name="Rapier", source_item_id="rapier")
        scores = AbilityScores(strength=8, dexterity=18)

        stats = resolve_weapon_stats(item, scores, 2, ["Rapiers"])

        assert stats is not None
        assert stats.is_finesse is True
        assert stats.attack_bonus == 6
        assert stats.damage_bonus == 4

    def test_ranged_uses_dex(self, fighter_scores: AbilityScores) -> None:
        """Test ranged weapons use DEX."""
        item = CatalogWeaponItem(id="w1", name="Longbow", source_item_id="longbow")

        stats = resolve_weapon_stats(item, fighter_scores, 2, ["Martial weapons"])

        assert stats is not None
        assert stats.is_ranged is True
        assert stats.damage_bonus == 2

    def test_not_proficient_skips_proficiency(self, fighter_scores: AbilityScores) -> None:
        """Test proficiency is not added without training; damage never includes it."""
        item = CatalogWeaponItem(id="w1", name="Longsword", source_item_id="longsword", weapon_attack_bonus=1)

        stats = resolve_weapon_stats(item, fighter_scores, 2, ["Simple weapons"])

        assert stats is not None
        assert stats.attack_bonus == 4
        assert stats.damage_bonus == 4

    def test_inline_weapon(self, fighter_scores: AbilityScores) -> None:
        """Test an inline weapon uses the dice written on the item."""
        item = InlineWeaponItem(
            id="w1", name="Sunblade", damage_dice="1d8", damage_type="radiant", weapon_attack_bonus=2,
        )

        stats = resolve_weapon_stats(item, fighter_scores, 3, ["Sunblades"])

        assert stats is not None
        assert stats.damage_type == "radiant"
        assert stats.attack_bonus == 3 + 3 + 2
        assert stats.damage_bonus == 3 + 2

    def test_no_damage_dice_returns_none(self, fighter_scores: AbilityScores) -> None:
        """Test items without damage dice resolve to None."""
        net = CatalogWeaponItem(id="w1", name="Net", source_item_id="net")
        unknown = CatalogWeaponItem(id="w2", name="Mystery", source_item_id="not-a-weapon")
        blank = InlineWeaponItem(id="w3", name="Stick")
        gear = GearItem(id="g1", name="Rope")

        for item in (net, unknown, blank, gear):
            assert resolve_weapon_stats(item, fighter_scores, 2, ["Martial weapons"]) is None

    def test_missing_catalog_entry_uses_item_dice(self, fighter_scores: AbilityScores) -> None:
        """Test a catalog weapon missing from the catalog falls back to its own dice."""
        item = CatalogWeaponItem(
            id="w1",
            name="Heirloom Axe",
            source_item_id="heirloom-axe",
            damage_dice="1d12",
            damage_type="slashing",
            weapon_attack_bonus=1,
        )

        stats = resolve_weapon_stats(item, fighter_scores, 2, ["Heirloom Axes"])

        assert stats is not None
        assert stats.damage_dice == "1d12"
        assert stats.damage_type == "slashing"
        assert stats.is_finesse is False
        assert stats.attack_bonus == 3 + 2 + 1
        assert stats.damage_bonus == 3 + 1

    def test_catalog_entry_wins_over_item_dice(self, fighter_scores: AbilityScores) -> None:
        """Test item dice are ignored when the catalog has the weapon."""
        item = CatalogWeaponItem(
            id="w1", name="Longsword", source_item_id="longsword", damage_dice="1d4", damage_type="fire",
        )

        stats = resolve_weapon_stats(item, fighter_scores, 2, ["Martial weapons"])

        assert stats is not None
        assert stats.damage_dice == "1d8"
        assert stats.damage_type == "slashing"


    def test_custom_catalog(self, fighter_scores: AbilityScores) -> None:
        """Test a caller-supplied catalog is used for lookups."""
        catalog = StaticCatalog(
            weapons=[
                WeaponDefinition(
                    id="glaive",
                    name="Glaive",
                    category=WeaponCategory.MARTIAL,
                    weapon_type=WeaponRange.MELEE,
                    damage_dice="1d10",
                    damage_type="slashing",
                ),
            ],
        )
        item = CatalogWeaponItem(id="w1", name="Glaive", source_item_id="glaive")

        stats = resolve_weapon_stats(item, fighter_scores, 2, ["Martial weapons"], catalog)

        assert stats is not None
        assert stats.damage_dice == "1d10"

    def test_resolve_equipped_weapon(self, fighter_scores: AbilityScores) -> None:
        """Test only the equipped main-hand item is resolved."""
        inventory = [
            CatalogWeaponItem(id="w1", name="Dagger", source_item_id="dagger"),
            CatalogWeaponItem(
                id="w2", name="Warhammer", source_item_id="warhammer",
                equipped=True, equipment_slot=EquipmentSlot.MAIN_HAND,
            ),
        ]

        stats = resolve_equipped_weapon(inventory, fighter_scores, 2, ["Martial weapons"])

        assert stats is not None
        assert stats.name == "Warhammer"
        assert resolve_equipped_weapon(inventory[:1], fighter_scores, 2, ["Martial weapons"]) is None


class TestResolveWeaponAttack:
    """Tests for the combined attack and damage roll."""

    @pytest.fixture
    def longsword(self) -> EquippedWeaponStats:
        return EquippedWeaponStats(name="Longsword", damage_dice="1d8", damage_type="slashing",
                                   attack_bonus=5, damage_bonus=3)

    def test_hit_rolls_damage(self, scripted_rng, longsword: EquippedWeaponStats) -> None:
        """Test a hit rolls damage with the damage bonus."""
        outcome = resolve_weapon_attack(longsword, 15, rng=scripted_rng(12, 6))

        assert outcome.hit is True
        assert outcome.damage is not None
        assert outcome.damage.total == 9

    def test_miss_rolls_no_damage(self, scripted_rng, longsword: EquippedWeaponStats) -> None:
        """Test a miss rolls no damage."""
        outcome = resolve_weapon_attack(longsword, 15, rng=scripted_rng(2))

        assert outcome.hit is False
        assert outcome.damage is None

    def test_crit_rolls_crit_dice(self, scripted_rng, longsword: EquippedWeaponStats) -> None:
        """Test a critical hit adds a second set of damage dice."""
        outcome = resolve_weapon_attack(longsword, 25, rng=scripted_rng(20, 4, 7))

        assert outcome.damage is not None
        assert outcome.damage.crit_dice == (7,)
        assert outcome.damage.total == 14
