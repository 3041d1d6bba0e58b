"""Player base statistics model."""

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from gear_effects.config import Settings

FIRE_RATE_FLOOR = 100


class BaseStats(BaseModel):
    """Unmodified player attributes before any equipment is applied."""
    health: float = Field(default=100, gt=0, description="Max health")
    damage: float = Field(default=10, ge=0, description="Damage per bullet")
    speed: float = Field(default=200, ge=0, description="Movement speed")
    fire_rate: float = Field(default=500, ge=FIRE_RATE_FLOOR, description="Milliseconds between shots")
    projectile_count: int = Field(default=1, ge=1)
    bullet_speed: float = Field(default=400, ge=0)
    bullet_lifetime: float = Field(default=2000, ge=0, description="Milliseconds")
    magnetic_range: float = Field(default=100, ge=0, description="Pickup radius")
    experience_multiplier: float = Field(default=1.0, ge=0)

    @classmethod
    def from_settings(cls, settings: "Settings") -> "BaseStats":
        """Build base stats from the configured defaults."""
        return cls(
            health=settings.BASE_HEALTH,
            damage=settings.BASE_DAMAGE,
            speed=settings.BASE_SPEED,
            fire_rate=settings.BASE_FIRE_RATE,
            projectile_count=settings.BASE_PROJECTILE_COUNT,
            bullet_speed=settings.BASE_BULLET_SPEED,
            bullet_lifetime=settings.BASE_BULLET_LIFETIME,
            magnetic_range=settings.BASE_MAGNETIC_RANGE,
            experience_multiplier=settings.BASE_EXPERIENCE_MULTIPLIER,
        )


class SkillLevels(BaseModel):
    """In-game skill levels picked during a run, folded into every stat pass."""
    rapid_fire: int = Field(default=0, ge=0, description="Rapid fire level (0-10)")
    magnetic_field: int = Field(default=0, ge=0, description="Magnetic field level (0-8)")
    multi_shot: int = Field(default=0, ge=0, description="Multi-shot level (0-6)")
