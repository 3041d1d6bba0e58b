"""Effect data models for equipped collectibles."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class EffectType(StrEnum):
    """Gameplay modifiers an item can grant."""
    HEALTH_BOOST = "health_boost"
    WEAPON_DAMAGE_BOOST = "weapon_damage_boost"
    MULTIPLE_PROJECTILES = "multiple_projectiles"
    MOVEMENT_SPEED = "movement_speed"
    FIRE_RATE = "fire_rate"
    CRITICAL_CHANCE = "critical_chance"
    SHIELD_STRENGTH = "shield_strength"
    BULLET_SPEED = "bullet_speed"
    BULLET_LIFETIME = "bullet_lifetime"
    MAGNETIC_RANGE = "magnetic_range"
    EXPERIENCE_BOOST = "experience_boost"
    MINING_EFFICIENCY = "mining_efficiency"


class EffectCategory(StrEnum):
    """Effect grouping used by summaries."""
    OFFENSIVE = "offensive"
    DEFENSIVE = "defensive"
    UTILITY = "utility"
    MOBILITY = "mobility"
    SPECIAL = "special"


class EffectUnit(StrEnum):
    """Unit an effect value is expressed in."""
    PERCENTAGE = "percentage"
    COUNT = "count"
    MULTIPLIER = "multiplier"
    SECONDS = "seconds"
    PIXELS = "pixels"
    POINTS = "points"


class EffectSource(StrEnum):
    """Where in the item record an effect was found."""
    PRIMARY = "primary"
    TRAIT = "trait"


class EffectConfig(BaseModel):
    """Static catalog entry for one effect type."""
    base_value: float = Field(..., ge=0, description="Typical raw value for the type")
    scaling_factor: float = Field(..., gt=0, description="Multiplier applied on top of rarity")
    max_value: float = Field(..., ge=0, description="Per-item ceiling after scaling")
    stackable: bool = Field(default=True, description="Sum across items, else take the max")
    category: EffectCategory

    model_config = ConfigDict(frozen=True)


class Effect(BaseModel):
    """A single modifier contributed by one equipped item.

    The value is already rarity-scaled and capped at the catalog maximum.
    """
    type: EffectType
    value: float = Field(..., ge=0)
    unit: EffectUnit = EffectUnit.PERCENTAGE
    category: EffectCategory
    stackable: bool = True
    max_stacks: int = Field(default=3, ge=1)
    duration: float = Field(default=0.0, ge=0, description="Seconds, 0 = permanent")
    cooldown: float = Field(default=0.0, ge=0, description="Seconds")
    source: EffectSource = EffectSource.PRIMARY

    model_config = ConfigDict(frozen=True)

    @property
    def is_permanent(self) -> bool:
        return self.duration == 0
