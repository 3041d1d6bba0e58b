"""Equipment effects aggregation for collectible game items."""

from .config import Settings, configure_logging, settings
from .core import (
    EffectCatalog,
    EffectExtractor,
    EffectQuery,
    EffectsEngine,
    EquipmentRegistry,
    PlayerStats,
    StatAggregator,
)
from .data.models import (
    BaseStats,
    Effect,
    EffectCategory,
    EffectType,
    EffectUnit,
    EquippedItem,
    ItemRecord,
    RarityTier,
    SkillLevels,
)
from .exceptions import CollectionLoadError, GearEffectsError

__all__ = [
    "Settings",
    "configure_logging",
    "settings",
    "EffectCatalog",
    "EffectExtractor",
    "EffectQuery",
    "EffectsEngine",
    "EquipmentRegistry",
    "PlayerStats",
    "StatAggregator",
    "BaseStats",
    "Effect",
    "EffectCategory",
    "EffectType",
    "EffectUnit",
    "EquippedItem",
    "ItemRecord",
    "RarityTier",
    "SkillLevels",
    "CollectionLoadError",
    "GearEffectsError",
]
