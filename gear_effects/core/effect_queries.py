"""Effect Query API.

Read-only views over the equipped effects for UI and gameplay code.
"""

from typing import Optional

from gear_effects.data.models.effect import Effect, EffectCategory, EffectType
from .effect_catalog import EffectCatalog
from .equipment_registry import EquipmentRegistry
from .stat_calculator import combine_values, group_effects


class EffectQuery:
    """Queries over a registry's current contents. Nothing is cached."""

    def __init__(self, registry: EquipmentRegistry, catalog: Optional[EffectCatalog] = None):
        self.registry = registry
        self.catalog = catalog or registry.extractor.catalog

    def effects_by_type(self) -> dict[EffectType, list[Effect]]:
        """All equipped effects grouped by type, in equip order."""
        return group_effects(self.registry.get_all())

    def all_effects(self) -> list[Effect]:
        return [effect for item in self.registry.get_all() for effect in item.effects]

    def total_for(self, effect_type: EffectType) -> float:
        """
        Combined value of one effect type.

        Uses the same sum/max policy as the aggregator.
        """
        effects = self.effects_by_type().get(effect_type, [])
        if not effects or not self.catalog.has_config(effect_type):
            return 0.0
        return combine_values(effects, self.catalog.get_config(effect_type).stackable)

    def effect_totals(self) -> dict[EffectType, float]:
        """Combined value for every catalog type, zero when absent."""
        return {effect_type: self.total_for(effect_type) for effect_type in self.catalog.effect_types}

    def has_any(self, effect_type: EffectType) -> bool:
        return any(
            effect.type == effect_type
            for item in self.registry.get_all()
            for effect in item.effects
        )

    def total_equipped_count(self) -> int:
        return len(self.registry)

    def effects_by_category(self, category: EffectCategory) -> list[Effect]:
        return [effect for effect in self.all_effects() if effect.category == category]
