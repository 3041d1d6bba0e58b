"""Stat Aggregator.

Calculate a player's derived stats from base stats and equipped items.
"""

import logging
import math
from dataclasses import asdict, dataclass, fields
from typing import TYPE_CHECKING, Callable, Iterable, Optional, Union

from gear_effects.data.models.effect import Effect, EffectType
from gear_effects.data.models.item import EquippedItem
from gear_effects.data.models.stats import BaseStats, SkillLevels
from .constants import MAX_CRITICAL_CHANCE, MIN_FIRE_RATE, MIN_PROJECTILES, SKILL_EFFECTS
from .effect_catalog import EffectCatalog

if TYPE_CHECKING:
    from .equipment_registry import EquipmentRegistry

logger = logging.getLogger(__name__)


@dataclass
class PlayerStats:
    """Complete derived stats, rebuilt from scratch on every pass."""

    max_health: float = 100
    current_health: float = 100
    damage: float = 10
    speed: float = 200
    fire_rate: float = 500
    projectile_count: int = 1
    critical_chance: float = 0.0
    shield_strength: float = 0.0
    bullet_speed: float = 400
    bullet_lifetime: float = 2000
    magnetic_range: float = 100
    experience_multiplier: float = 1.0

    @classmethod
    def from_base(cls, base: BaseStats) -> "PlayerStats":
        """Stats of a player with nothing equipped."""
        return cls(
            max_health=base.health,
            current_health=base.health,
            damage=base.damage,
            speed=base.speed,
            fire_rate=base.fire_rate,
            projectile_count=base.projectile_count,
            bullet_speed=base.bullet_speed,
            bullet_lifetime=base.bullet_lifetime,
            magnetic_range=base.magnetic_range,
            experience_multiplier=base.experience_multiplier,
        )

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


def group_effects(items: Iterable[EquippedItem]) -> dict[EffectType, list[Effect]]:
    """Flatten all effects and group them by type, keeping equip order."""
    grouped: dict[EffectType, list[Effect]] = {}
    for item in items:
        for effect in item.effects:
            grouped.setdefault(effect.type, []).append(effect)
    return grouped


def combine_values(effects: Iterable[Effect], stackable: bool) -> float:
    """
    Combine same-type effects from several items.

    Stackable types sum, the others take the strongest single value.
    The sum is order independent (fsum) and is not re-capped.
    """
    values = [effect.value for effect in effects]
    if not values:
        return 0.0
    if not stackable:
        return max(values)
    return math.fsum(values)


def _percent_of(base_value: float, total: float) -> float:
    """base * (1 + total/100)"""
    return base_value * (100 + total) / 100


def _apply_health(stats: PlayerStats, base: BaseStats, total: float) -> None:
    stats.max_health = _percent_of(base.health, total)
    stats.current_health = stats.max_health


def _apply_damage(stats: PlayerStats, base: BaseStats, total: float) -> None:
    stats.damage = _percent_of(base.damage, total)


def _apply_speed(stats: PlayerStats, base: BaseStats, total: float) -> None:
    stats.speed = _percent_of(base.speed, total)


def _apply_fire_rate(stats: PlayerStats, base: BaseStats, total: float) -> None:
    stats.fire_rate = max(MIN_FIRE_RATE, base.fire_rate * (100 - total) / 100)


def _apply_projectiles(stats: PlayerStats, base: BaseStats, total: float) -> None:
    stats.projectile_count = max(MIN_PROJECTILES, math.floor(total))


def _apply_critical(stats: PlayerStats, base: BaseStats, total: float) -> None:
    stats.critical_chance = min(MAX_CRITICAL_CHANCE, total)


def _apply_shield(stats: PlayerStats, base: BaseStats, total: float) -> None:
    stats.shield_strength = total


def _apply_bullet_speed(stats: PlayerStats, base: BaseStats, total: float) -> None:
    stats.bullet_speed = _percent_of(base.bullet_speed, total)


def _apply_bullet_lifetime(stats: PlayerStats, base: BaseStats, total: float) -> None:
    stats.bullet_lifetime = _percent_of(base.bullet_lifetime, total)


def _apply_magnetic_range(stats: PlayerStats, base: BaseStats, total: float) -> None:
    stats.magnetic_range = _percent_of(base.magnetic_range, total)


def _apply_experience(stats: PlayerStats, base: BaseStats, total: float) -> None:
    stats.experience_multiplier = base.experience_multiplier + total / 100


def _apply_mining(stats: PlayerStats, base: BaseStats, total: float) -> None:
    # No player stat yet; the total is still reported by the query view
    pass


CombinationRule = Callable[[PlayerStats, BaseStats, float], None]

COMBINATION_RULES: dict[EffectType, CombinationRule] = {
    EffectType.HEALTH_BOOST: _apply_health,
    EffectType.WEAPON_DAMAGE_BOOST: _apply_damage,
    EffectType.MOVEMENT_SPEED: _apply_speed,
    EffectType.FIRE_RATE: _apply_fire_rate,
    EffectType.MULTIPLE_PROJECTILES: _apply_projectiles,
    EffectType.CRITICAL_CHANCE: _apply_critical,
    EffectType.SHIELD_STRENGTH: _apply_shield,
    EffectType.BULLET_SPEED: _apply_bullet_speed,
    EffectType.BULLET_LIFETIME: _apply_bullet_lifetime,
    EffectType.MAGNETIC_RANGE: _apply_magnetic_range,
    EffectType.EXPERIENCE_BOOST: _apply_experience,
    EffectType.MINING_EFFICIENCY: _apply_mining,
}


def skill_values(skills: SkillLevels) -> dict[EffectType, float]:
    """Bonus per effect type granted by the player's skill levels."""
    values: dict[EffectType, float] = {}
    for skill_name, (effect_type, per_level) in SKILL_EFFECTS.items():
        level = getattr(skills, skill_name)
        if level > 0:
            values[effect_type] = level * per_level
    return values


def _skill_fire_rate(stats: PlayerStats, base: BaseStats, bonus: float) -> None:
    stats.fire_rate = max(MIN_FIRE_RATE, base.fire_rate - bonus)


def _skill_magnetic_range(stats: PlayerStats, base: BaseStats, bonus: float) -> None:
    stats.magnetic_range = base.magnetic_range + bonus


def _skill_projectiles(stats: PlayerStats, base: BaseStats, bonus: float) -> None:
    stats.projectile_count = max(MIN_PROJECTILES, base.projectile_count + math.floor(bonus))


# Used when no equipped item has an effect of the skill's type
SKILL_ONLY_RULES: dict[EffectType, CombinationRule] = {
    EffectType.FIRE_RATE: _skill_fire_rate,
    EffectType.MAGNETIC_RANGE: _skill_magnetic_range,
    EffectType.MULTIPLE_PROJECTILES: _skill_projectiles,
}


class StatAggregator:
    """
    Calculate PlayerStats from:
    - Base stats
    - Effects of every equipped item, combined per type
    - In-game skill levels

    Stateless: every call rebuilds the stats from the full item set,
    so identical inputs always give identical output.
    """

    def __init__(self, catalog: Optional[EffectCatalog] = None):
        self.catalog = catalog or EffectCatalog()

    def recompute(
        self,
        registry: Union["EquipmentRegistry", Iterable[EquippedItem]],
        base_stats: BaseStats,
        health_ratio: Optional[float] = None,
        skills: Optional[SkillLevels] = None,
    ) -> PlayerStats:
        """
        Calculate complete stats for the equipped items.

        Args:
            registry: Equipment registry, or any iterable of equipped items.
            base_stats: The player's unmodified stats.
            health_ratio: Keep current health at this fraction of the new
                max health. By default current health is reset to max.
            skills: In-game skill levels. A skill adds its bonus to the item
                total of its type, or applies alone when no item has that type.

        Returns:
            PlayerStats with all bonuses applied.
        """
        items = registry.get_all() if hasattr(registry, "get_all") else tuple(registry)
        stats = PlayerStats.from_base(base_stats)

        # 1. Totals per type
        totals = self.compute_totals(items)
        bonuses = skill_values(skills or SkillLevels())

        # 2. Apply totals through the combination table, skill bonus on top
        for effect_type, total in totals.items():
            COMBINATION_RULES[effect_type](stats, base_stats, total + bonuses.get(effect_type, 0.0))

        # 3. Skills without a matching item effect
        for effect_type, bonus in bonuses.items():
            if effect_type not in totals:
                SKILL_ONLY_RULES[effect_type](stats, base_stats, bonus)

        # 4. Current health
        if health_ratio is None:
            stats.current_health = stats.max_health
        else:
            stats.current_health = stats.max_health * min(1.0, max(0.0, health_ratio))

        return stats

    def compute_totals(self, items: Iterable[EquippedItem]) -> dict[EffectType, float]:
        """
        Combined value per effect type.

        Types without a catalog entry or combination rule are skipped
        with a warning.
        """
        totals: dict[EffectType, float] = {}
        for effect_type, effects in group_effects(items).items():
            if effect_type not in COMBINATION_RULES or not self.catalog.has_config(effect_type):
                logger.warning(f"No combination rule for effect type {effect_type!r}, ignoring")
                continue
            stackable = self.catalog.get_config(effect_type).stackable
            totals[effect_type] = combine_values(effects, stackable)
        return totals

    def compare_stats(self, stats1: PlayerStats, stats2: PlayerStats) -> dict[str, float]:
        """
        Compare two stat blocks.

        Returns:
            Dict of stat name to difference (positive = stats2 is higher).
        """
        differences = {}
        for stat_field in fields(PlayerStats):
            val1 = getattr(stats1, stat_field.name)
            val2 = getattr(stats2, stat_field.name)
            if val1 != val2:
                differences[stat_field.name] = val2 - val1
        return differences
