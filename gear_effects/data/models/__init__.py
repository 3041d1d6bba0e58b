# Data Models
from .effect import (
    Effect,
    EffectCategory,
    EffectConfig,
    EffectSource,
    EffectType,
    EffectUnit,
)
from .item import EffectDescriptor, EquippedItem, ItemAttribute, ItemRecord, RarityTier
from .stats import BaseStats, FIRE_RATE_FLOOR, SkillLevels

__all__ = [
    "Effect",
    "EffectCategory",
    "EffectConfig",
    "EffectSource",
    "EffectType",
    "EffectUnit",
    "EffectDescriptor",
    "EquippedItem",
    "ItemAttribute",
    "ItemRecord",
    "RarityTier",
    "BaseStats",
    "FIRE_RATE_FLOOR",
    "SkillLevels",
]
