# Core engine modules
from .constants import (
    RARITY_MULTIPLIERS,
    DEFAULT_RARITY_MULTIPLIER,
    EFFECT_CONFIG,
    MAX_STACKS,
    DEFAULT_MAX_STACKS,
    MIN_FIRE_RATE,
    MAX_CRITICAL_CHANCE,
    TRAIT_KEYWORDS,
    SKILL_EFFECTS,
)

from .effect_catalog import EffectCatalog
from .effect_extractor import EffectExtractor
from .equipment_registry import EquipmentRegistry
from .stat_calculator import (
    StatAggregator,
    PlayerStats,
    COMBINATION_RULES,
    SKILL_ONLY_RULES,
    combine_values,
    group_effects,
    skill_values,
)
from .effect_queries import EffectQuery
from .effects_engine import EffectsEngine, format_effect_value

__all__ = [
    # Constants
    "RARITY_MULTIPLIERS",
    "DEFAULT_RARITY_MULTIPLIER",
    "EFFECT_CONFIG",
    "MAX_STACKS",
    "DEFAULT_MAX_STACKS",
    "MIN_FIRE_RATE",
    "MAX_CRITICAL_CHANCE",
    "TRAIT_KEYWORDS",
    "SKILL_EFFECTS",
    # Catalog and extraction
    "EffectCatalog",
    "EffectExtractor",
    # Equipment
    "EquipmentRegistry",
    # Aggregation
    "StatAggregator",
    "PlayerStats",
    "COMBINATION_RULES",
    "SKILL_ONLY_RULES",
    "combine_values",
    "group_effects",
    "skill_values",
    # Queries
    "EffectQuery",
    "EffectsEngine",
    "format_effect_value",
]
