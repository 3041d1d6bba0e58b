"""Effect catalog and rarity scale constants."""

from typing import Final

from gear_effects.data.models.effect import EffectCategory, EffectConfig, EffectType, EffectUnit
from gear_effects.data.models.item import RarityTier
from gear_effects.data.models.stats import FIRE_RATE_FLOOR

# =============================================================================
# RARITY SCALE
# =============================================================================
RARITY_MULTIPLIERS: Final[dict[str, float]] = {
    RarityTier.COMMON: 1.0,
    RarityTier.RARE: 1.5,
    RarityTier.EPIC: 2.0,
    RarityTier.LEGENDARY: 3.0,
}

# Applied to tiers the catalog does not know yet
DEFAULT_RARITY_MULTIPLIER: Final[float] = 1.0

# =============================================================================
# EFFECT CATALOG
# =============================================================================
EFFECT_CONFIG: Final[dict[EffectType, EffectConfig]] = {
    EffectType.HEALTH_BOOST: EffectConfig(
        base_value=10, scaling_factor=1.5, max_value=100, stackable=True,
        category=EffectCategory.DEFENSIVE,
    ),
    EffectType.WEAPON_DAMAGE_BOOST: EffectConfig(
        base_value=5, scaling_factor=1.3, max_value=50, stackable=True,
        category=EffectCategory.OFFENSIVE,
    ),
    EffectType.MULTIPLE_PROJECTILES: EffectConfig(
        base_value=1, scaling_factor=1.0, max_value=5, stackable=False,
        category=EffectCategory.OFFENSIVE,
    ),
    EffectType.MINING_EFFICIENCY: EffectConfig(
        base_value=25, scaling_factor=1.8, max_value=200, stackable=True,
        category=EffectCategory.UTILITY,
    ),
    EffectType.MOVEMENT_SPEED: EffectConfig(
        base_value=8, scaling_factor=1.2, max_value=40, stackable=True,
        category=EffectCategory.MOBILITY,
    ),
    EffectType.EXPERIENCE_BOOST: EffectConfig(
        base_value=10, scaling_factor=1.4, max_value=75, stackable=True,
        category=EffectCategory.UTILITY,
    ),
    EffectType.MAGNETIC_RANGE: EffectConfig(
        base_value=20, scaling_factor=1.6, max_value=150, stackable=True,
        category=EffectCategory.UTILITY,
    ),
    EffectType.FIRE_RATE: EffectConfig(
        base_value=10, scaling_factor=1.3, max_value=60, stackable=True,
        category=EffectCategory.OFFENSIVE,
    ),
    EffectType.CRITICAL_CHANCE: EffectConfig(
        base_value=5, scaling_factor=1.2, max_value=25, stackable=True,
        category=EffectCategory.OFFENSIVE,
    ),
    EffectType.SHIELD_STRENGTH: EffectConfig(
        base_value=15, scaling_factor=1.8, max_value=100, stackable=True,
        category=EffectCategory.DEFENSIVE,
    ),
    EffectType.BULLET_SPEED: EffectConfig(
        base_value=15, scaling_factor=1.4, max_value=80, stackable=True,
        category=EffectCategory.OFFENSIVE,
    ),
    EffectType.BULLET_LIFETIME: EffectConfig(
        base_value=20, scaling_factor=1.3, max_value=100, stackable=True,
        category=EffectCategory.OFFENSIVE,
    ),
}

# =============================================================================
# STACKING AND UNITS
# =============================================================================
MAX_STACKS: Final[dict[EffectType, int]] = {
    EffectType.MULTIPLE_PROJECTILES: 1,
    EffectType.HEALTH_BOOST: 5,
    EffectType.WEAPON_DAMAGE_BOOST: 5,
}
DEFAULT_MAX_STACKS: Final[int] = 3

DEFAULT_UNITS: Final[dict[EffectType, EffectUnit]] = {
    EffectType.MULTIPLE_PROJECTILES: EffectUnit.COUNT,
    EffectType.SHIELD_STRENGTH: EffectUnit.POINTS,
}
DEFAULT_UNIT: Final[EffectUnit] = EffectUnit.PERCENTAGE

# =============================================================================
# AGGREGATE LIMITS
# =============================================================================
# fire_rate is a delay in ms, lower is faster
MIN_FIRE_RATE: Final[int] = FIRE_RATE_FLOOR
MAX_CRITICAL_CHANCE: Final[float] = 100.0
MIN_PROJECTILES: Final[int] = 1

# =============================================================================
# TRAIT PARSING
# =============================================================================
# Checked in order, most specific keyword first ("bullet speed" before "speed").
# A keyword only matches at the start of a word, so "xp" skips "explosive".
TRAIT_KEYWORDS: Final[tuple[tuple[str, EffectType], ...]] = (
    ("critical", EffectType.CRITICAL_CHANCE),
    ("bullet speed", EffectType.BULLET_SPEED),
    ("bullet lifetime", EffectType.BULLET_LIFETIME),
    ("fire rate", EffectType.FIRE_RATE),
    ("projectile", EffectType.MULTIPLE_PROJECTILES),
    ("movement", EffectType.MOVEMENT_SPEED),
    ("magnetic", EffectType.MAGNETIC_RANGE),
    ("experience", EffectType.EXPERIENCE_BOOST),
    ("xp", EffectType.EXPERIENCE_BOOST),
    ("mining", EffectType.MINING_EFFICIENCY),
    ("shield", EffectType.SHIELD_STRENGTH),
    ("health", EffectType.HEALTH_BOOST),
    ("damage", EffectType.WEAPON_DAMAGE_BOOST),
)

# =============================================================================
# SKILLS
# =============================================================================
# Skill attribute -> (effect type it feeds, value per level)
SKILL_EFFECTS: Final[dict[str, tuple[EffectType, float]]] = {
    "rapid_fire": (EffectType.FIRE_RATE, 50),            # ms off the fire delay
    "magnetic_field": (EffectType.MAGNETIC_RANGE, 20),   # pickup radius units
    "multi_shot": (EffectType.MULTIPLE_PROJECTILES, 1),  # extra projectiles
}
