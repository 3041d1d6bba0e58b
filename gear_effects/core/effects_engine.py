"""Effects Engine.

Caller-owned bundle of catalog, registry, aggregator and query view.
Each player session constructs its own engine; nothing is shared.
"""

from typing import Any, Callable, Iterable, Optional

from gear_effects.data.models.effect import Effect, EffectUnit
from gear_effects.data.models.stats import BaseStats, SkillLevels
from .effect_catalog import EffectCatalog
from .effect_extractor import EffectExtractor
from .effect_queries import EffectQuery
from .equipment_registry import EquipmentRegistry, RawItem
from .stat_calculator import PlayerStats, StatAggregator


def format_effect_value(effect: Effect) -> str:
    """
    Display string for an effect value.

    Examples:
        percentage -> "+15%", count -> "x2", multiplier -> "1.5x", other -> "+15"
    """
    value = f"{round(effect.value, 2):.2f}".rstrip("0").rstrip(".")
    if effect.unit == EffectUnit.PERCENTAGE:
        return f"+{value}%"
    if effect.unit == EffectUnit.COUNT:
        return f"x{value}"
    if effect.unit == EffectUnit.MULTIPLIER:
        return f"{value}x"
    return f"+{value}"


class EffectsEngine:
    """
    One player's equipment effects.

    Equip/unequip calls only change the registry; call recompute()
    after a batch of changes before reading stats.
    """

    def __init__(
        self,
        base_stats: Optional[BaseStats] = None,
        catalog: Optional[EffectCatalog] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.base_stats = base_stats or BaseStats()
        self.catalog = catalog or EffectCatalog()
        self.extractor = EffectExtractor(self.catalog)
        self.registry = EquipmentRegistry(self.extractor, clock=clock)
        self.aggregator = StatAggregator(self.catalog)
        self.query = EffectQuery(self.registry, self.catalog)
        self.skills = SkillLevels()
        self._last_stats: Optional[PlayerStats] = None

    # =========================================================================
    # REGISTRY
    # =========================================================================

    def load_collection(self, records: Iterable[RawItem]) -> list[str]:
        """
        Rebuild the registry from the player's owned items.

        Args:
            records: Full collection fetched by the caller.

        Returns:
            IDs of the auto-equipped items.
        """
        self.registry.clear()
        return self.registry.auto_equip(records)

    def equip(self, item: RawItem) -> bool:
        return self.registry.equip(item)

    def unequip(self, item_id: str) -> bool:
        return self.registry.unequip(item_id)

    def clear(self) -> None:
        """Unequip everything and forget the last computed stats."""
        self.registry.clear()
        self._last_stats = None

    # =========================================================================
    # STATS
    # =========================================================================

    def update_skills(self, skills: SkillLevels) -> None:
        """Replace the skill levels used by the next recompute()."""
        self.skills = skills.model_copy()

    def recompute(self, health_ratio: Optional[float] = None) -> PlayerStats:
        """Run one aggregation pass over the current registry and skills."""
        self._last_stats = self.aggregator.recompute(
            self.registry, self.base_stats, health_ratio, skills=self.skills
        )
        return self._last_stats

    @property
    def stats(self) -> PlayerStats:
        """Last computed stats, or base stats if recompute() was never called."""
        if self._last_stats is None:
            return PlayerStats.from_base(self.base_stats)
        return self._last_stats

    # =========================================================================
    # SUMMARIES
    # =========================================================================

    def summary(self) -> dict[str, Any]:
        """Equipped items, per-type totals and the last computed stats."""
        items = self.registry.get_all()
        return {
            "equipped_count": len(items),
            "item_names": [item.name for item in items],
            "effects": {str(etype): total for etype, total in self.query.effect_totals().items()},
            "stats": self.stats.to_dict(),
        }

    def equipped_items_info(self) -> list[dict[str, Any]]:
        """Per-item breakdown for debugging views."""
        return [
            {
                "name": item.name,
                "rarity": item.rarity,
                "effects": [
                    {"type": str(effect.type), "value": effect.value, "unit": str(effect.unit)}
                    for effect in item.effects
                ],
            }
            for item in self.registry.get_all()
        ]

    def ui_effects_info(self) -> list[dict[str, str]]:
        """One display row per equipped effect."""
        return [
            {
                "name": item.name,
                "value": format_effect_value(effect),
                "category": str(effect.category),
                "rarity": item.rarity,
            }
            for item in self.registry.get_all()
            for effect in item.effects
        ]
