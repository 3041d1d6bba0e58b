"""Tests for the Stat Aggregator."""

import logging

import pytest
from pydantic import ValidationError

from gear_effects.core.equipment_registry import EquipmentRegistry
from gear_effects.core.stat_calculator import (
    PlayerStats,
    StatAggregator,
    combine_values,
    group_effects,
    skill_values,
)
from gear_effects.data.models import (
    BaseStats,
    Effect,
    EffectCategory,
    EffectType,
    EquippedItem,
    SkillLevels,
)


def make_record(item_id: str, effect_type: str, value: float, rarity: str = "common") -> dict:
    """Create a raw item record with one declared effect."""
    return {
        "id": item_id,
        "name": item_id,
        "rarity": rarity,
        "game_effect": {"type": effect_type, "value": value},
    }


@pytest.fixture
def registry():
    """Create an empty registry."""
    return EquipmentRegistry()


@pytest.fixture
def aggregator():
    """Create a stat aggregator."""
    return StatAggregator()


@pytest.fixture
def base():
    """Default base stats (health 100, fire rate 500...)."""
    return BaseStats()


class TestNoEquipment:
    """With nothing equipped every stat keeps its base value."""

    def test_base_values(self, registry, aggregator, base):
        stats = aggregator.recompute(registry, base)

        assert stats == PlayerStats.from_base(base)
        assert stats.max_health == 100
        assert stats.current_health == 100
        assert stats.fire_rate == 500
        assert stats.projectile_count == 1
        assert stats.critical_chance == 0
        assert stats.shield_strength == 0


class TestScenarios:
    """End-to-end equip and recompute scenarios."""

    def test_single_common_health_item(self, registry, aggregator, base):
        """Scenario A: raw 10, common, scaling 1.5 -> +15%."""
        registry.equip(make_record("a", "health_boost", 10))

        stats = aggregator.recompute(registry, base)
        assert stats.max_health == pytest.approx(115)
        assert stats.current_health == pytest.approx(115)

    def test_common_and_rare_health_items_stack(self, registry, aggregator, base):
        """Scenario B: 15 + 33.75 = 48.75%."""
        registry.equip(make_record("a", "health_boost", 10))
        registry.equip(make_record("b", "health_boost", 15, rarity="rare"))

        stats = aggregator.recompute(registry, base)
        assert stats.max_health == pytest.approx(148.75)

    def test_projectiles_take_maximum(self, registry, aggregator, base):
        """Scenario C: legendary capped at 5 and common 1 -> 5, not 6."""
        registry.equip(make_record("legendary", "multiple_projectiles", 2, rarity="legendary"))
        registry.equip(make_record("common", "multiple_projectiles", 1))

        stats = aggregator.recompute(registry, base)
        assert stats.projectile_count == 5

    def test_shield_gone_after_unequip(self, registry, aggregator, base):
        """Scenario D: unequipping the only shield item resets shield to 0."""
        registry.equip(make_record("shield", "shield_strength", 10))
        registry.equip(make_record("boots", "movement_speed", 10))
        assert aggregator.recompute(registry, base).shield_strength == pytest.approx(18)

        registry.unequip("shield")
        stats = aggregator.recompute(registry, base)
        assert stats.shield_strength == 0
        assert stats.speed == pytest.approx(224)


class TestCombinationTable:
    """Tests for each formula of the combination table."""

    def test_weapon_damage(self, registry, aggregator, base):
        registry.equip(make_record("a", "weapon_damage_boost", 10))  # 13%
        assert aggregator.recompute(registry, base).damage == pytest.approx(11.3)

    def test_fire_rate_reduces_delay(self, registry, aggregator, base):
        registry.equip(make_record("a", "fire_rate", 10))  # 13%
        assert aggregator.recompute(registry, base).fire_rate == pytest.approx(435)

    def test_fire_rate_floor(self, registry, aggregator, base):
        for i in range(3):
            registry.equip(make_record(f"fr{i}", "fire_rate", 100, rarity="legendary"))  # 60% each
        assert aggregator.recompute(registry, base).fire_rate == 100

    def test_critical_chance_capped_at_100(self, registry, aggregator, base):
        for i in range(5):
            registry.equip(make_record(f"crit{i}", "critical_chance", 50, rarity="legendary"))  # 25 each
        assert aggregator.recompute(registry, base).critical_chance == 100

    def test_shield_is_flat(self, registry, aggregator, base):
        registry.equip(make_record("a", "shield_strength", 5, rarity="epic"))  # 5*2*1.8
        assert aggregator.recompute(registry, base).shield_strength == pytest.approx(18)

    def test_bullet_and_magnet_percentages(self, registry, aggregator, base):
        registry.equip(make_record("a", "bullet_speed", 10))     # 14%
        registry.equip(make_record("b", "bullet_lifetime", 10))  # 13%
        registry.equip(make_record("c", "magnetic_range", 10))   # 16%

        stats = aggregator.recompute(registry, base)
        assert stats.bullet_speed == pytest.approx(456)
        assert stats.bullet_lifetime == pytest.approx(2260)
        assert stats.magnetic_range == pytest.approx(116)

    def test_experience_adds_to_multiplier(self, registry, aggregator, base):
        registry.equip(make_record("a", "experience_boost", 25))  # 35%
        assert aggregator.recompute(registry, base).experience_multiplier == pytest.approx(1.35)

    def test_projectile_count_floor_of_one(self, registry, aggregator, base):
        registry.equip(make_record("a", "multiple_projectiles", 0.5))
        assert aggregator.recompute(registry, base).projectile_count == 1

    def test_mining_changes_no_stat(self, registry, aggregator, base):
        registry.equip(make_record("a", "mining_efficiency", 10))
        assert aggregator.recompute(registry, base) == PlayerStats.from_base(base)

    def test_stackable_totals_not_recapped(self, registry, aggregator, base):
        for i in range(3):
            registry.equip(make_record(f"hp{i}", "health_boost", 100, rarity="legendary"))  # 100 each
        assert aggregator.recompute(registry, base).max_health == pytest.approx(400)


class TestDeterminism:
    """Recompute is idempotent, order independent and stateless."""

    def test_idempotent(self, registry, aggregator, base):
        registry.equip(make_record("a", "health_boost", 10))
        registry.equip(make_record("b", "fire_rate", 20, rarity="epic"))

        assert aggregator.recompute(registry, base) == aggregator.recompute(registry, base)

    def test_order_independent(self, aggregator, base):
        records = [
            make_record("a", "health_boost", 10.1),
            make_record("b", "health_boost", 7.3, rarity="rare"),
            make_record("c", "health_boost", 3.7, rarity="epic"),
            make_record("d", "multiple_projectiles", 1, rarity="epic"),
        ]
        forward, backward = EquipmentRegistry(), EquipmentRegistry()
        for record in records:
            forward.equip(record)
        for record in reversed(records):
            backward.equip(record)

        assert aggregator.recompute(forward, base) == aggregator.recompute(backward, base)

    def test_monotonic_in_stackable_items(self, registry, aggregator, base):
        previous = aggregator.recompute(registry, base).damage
        for i in range(6):
            registry.equip(make_record(f"dmg{i}", "weapon_damage_boost", 8))
            current = aggregator.recompute(registry, base).damage
            assert current >= previous
            previous = current

    def test_accepts_item_iterable(self, registry, aggregator, base):
        registry.equip(make_record("a", "health_boost", 10))
        assert aggregator.recompute(list(registry.get_all()), base) == aggregator.recompute(registry, base)

    def test_custom_base_stats(self, registry, aggregator):
        registry.equip(make_record("a", "health_boost", 10))
        stats = aggregator.recompute(registry, BaseStats(health=200))
        assert stats.max_health == pytest.approx(230)


class TestCurrentHealth:
    """Tests for current health handling."""

    def test_reset_to_max_by_default(self, registry, aggregator, base):
        registry.equip(make_record("boots", "movement_speed", 10))
        stats = aggregator.recompute(registry, base)
        assert stats.current_health == stats.max_health

    def test_health_ratio_kept(self, registry, aggregator, base):
        registry.equip(make_record("a", "health_boost", 10))
        stats = aggregator.recompute(registry, base, health_ratio=0.5)

        assert stats.max_health == pytest.approx(115)
        assert stats.current_health == pytest.approx(57.5)

    def test_health_ratio_clamped(self, registry, aggregator, base):
        assert aggregator.recompute(registry, base, health_ratio=2.0).current_health == 100
        assert aggregator.recompute(registry, base, health_ratio=-1).current_health == 0


class TestSkills:
    """In-game skill levels folded into the aggregation pass."""

    def test_zero_skills_change_nothing(self, registry, aggregator, base):
        registry.equip(make_record("a", "health_boost", 10))

        assert aggregator.recompute(registry, base, skills=SkillLevels()) == aggregator.recompute(registry, base)

    def test_skill_values(self):
        skills = SkillLevels(rapid_fire=2, magnetic_field=3, multi_shot=1)

        assert skill_values(skills) == {
            EffectType.FIRE_RATE: 100,
            EffectType.MAGNETIC_RANGE: 60,
            EffectType.MULTIPLE_PROJECTILES: 1,
        }
        assert skill_values(SkillLevels()) == {}

    def test_skill_only_without_items(self, registry, aggregator, base):
        skills = SkillLevels(rapid_fire=3, magnetic_field=2, multi_shot=2)
        stats = aggregator.recompute(registry, base, skills=skills)

        assert stats.fire_rate == 350          # 500 - 3*50 ms
        assert stats.magnetic_range == 140     # 100 + 2*20
        assert stats.projectile_count == 3     # 1 + 2

    def test_skill_only_fire_rate_floor(self, registry, aggregator, base):
        stats = aggregator.recompute(registry, base, skills=SkillLevels(rapid_fire=10))
        assert stats.fire_rate == 100

    def test_skill_adds_to_item_total(self, registry, aggregator, base):
        registry.equip(make_record("magnet", "magnetic_range", 10))        # 16%
        registry.equip(make_record("barrel", "multiple_projectiles", 2))   # 2
        registry.equip(make_record("trigger", "fire_rate", 10))            # 13%
        skills = SkillLevels(rapid_fire=1, magnetic_field=1, multi_shot=1)

        stats = aggregator.recompute(registry, base, skills=skills)
        assert stats.magnetic_range == pytest.approx(136)   # 16 + 20
        assert stats.projectile_count == 3                  # floor(2 + 1)
        assert stats.fire_rate == pytest.approx(185)        # 13 + 50

    def test_skill_only_when_other_types_equipped(self, registry, aggregator, base):
        registry.equip(make_record("a", "health_boost", 10))
        stats = aggregator.recompute(registry, base, skills=SkillLevels(multi_shot=2))

        assert stats.max_health == pytest.approx(115)
        assert stats.projectile_count == 3

    def test_negative_level_rejected(self):
        with pytest.raises(ValidationError):
            SkillLevels(rapid_fire=-1)


class TestGroupingHelpers:
    """Tests for grouping and combination helpers."""

    def _effect(self, effect_type, value, stackable=True):
        return Effect(
            type=effect_type, value=value, category=EffectCategory.OFFENSIVE, stackable=stackable,
        )

    def test_combine_sum_and_max(self):
        effects = [self._effect(EffectType.FIRE_RATE, v) for v in (1, 2, 3)]
        assert combine_values(effects, stackable=True) == 6
        assert combine_values(effects, stackable=False) == 3
        assert combine_values([], stackable=True) == 0

    def test_group_keeps_equip_order(self):
        first = EquippedItem("a", "A", "common", (self._effect(EffectType.FIRE_RATE, 1),), 0.0)
        second = EquippedItem("b", "B", "common", (self._effect(EffectType.FIRE_RATE, 2),), 0.0)

        grouped = group_effects([first, second])
        assert [e.value for e in grouped[EffectType.FIRE_RATE]] == [1, 2]

    def test_unknown_effect_type_ignored(self, aggregator, base, caplog):
        bogus = Effect.model_construct(
            type="laser_beam", value=50.0, category=EffectCategory.SPECIAL, stackable=True,
        )
        item = EquippedItem("x", "X", "common", (bogus,), 0.0)

        with caplog.at_level(logging.WARNING, logger="gear_effects"):
            stats = aggregator.recompute([item], base)

        assert stats == PlayerStats.from_base(base)
        assert "laser_beam" in caplog.text

    def test_compare_stats(self, aggregator):
        diff = aggregator.compare_stats(PlayerStats(), PlayerStats(damage=15, projectile_count=3))
        assert diff == {"damage": 5, "projectile_count": 2}
