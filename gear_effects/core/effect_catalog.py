"""Effect Catalog and Rarity Scale.

Static per-type configuration and per-tier multipliers.
"""

import logging
from typing import Mapping, Optional

from gear_effects.data.models.effect import EffectConfig, EffectType, EffectUnit
from .constants import (
    DEFAULT_MAX_STACKS,
    DEFAULT_RARITY_MULTIPLIER,
    DEFAULT_UNIT,
    DEFAULT_UNITS,
    EFFECT_CONFIG,
    MAX_STACKS,
    RARITY_MULTIPLIERS,
)

logger = logging.getLogger(__name__)


class EffectCatalog:
    """
    Read-only lookup over the effect catalog and rarity scale.

    Instances may be built with overridden tables (balancing, tests);
    the defaults are the game's shipped values.
    """

    def __init__(
        self,
        configs: Optional[Mapping[EffectType, EffectConfig]] = None,
        rarity_multipliers: Optional[Mapping[str, float]] = None,
    ):
        self._configs: dict[EffectType, EffectConfig] = dict(EFFECT_CONFIG)
        if configs:
            self._configs.update(configs)
        self._rarity_multipliers: dict[str, float] = {
            str(tier): value for tier, value in (rarity_multipliers or RARITY_MULTIPLIERS).items()
        }

    def get_config(self, effect_type: EffectType) -> EffectConfig:
        """Get the static configuration for an effect type."""
        return self._configs[effect_type]

    def has_config(self, effect_type: object) -> bool:
        return effect_type in self._configs

    def get_rarity_multiplier(self, tier: Optional[str]) -> float:
        """
        Get the multiplier for a rarity tier.

        Unknown or missing tiers fall back to 1.0 so that tiers added
        upstream keep working before the catalog learns about them.

        Args:
            tier: Tier name as delivered by the inventory source.

        Returns:
            The tier's multiplier.
        """
        key = str(tier).strip().lower() if tier is not None else ""
        multiplier = self._rarity_multipliers.get(key)
        if multiplier is None:
            logger.debug(f"Unknown rarity tier {tier!r}, using {DEFAULT_RARITY_MULTIPLIER}")
            return DEFAULT_RARITY_MULTIPLIER
        return multiplier

    def get_max_stacks(self, effect_type: EffectType) -> int:
        return MAX_STACKS.get(effect_type, DEFAULT_MAX_STACKS)

    def get_default_unit(self, effect_type: EffectType) -> EffectUnit:
        return DEFAULT_UNITS.get(effect_type, DEFAULT_UNIT)

    def scale_value(self, effect_type: EffectType, raw_value: float, tier: Optional[str]) -> float:
        """
        Apply rarity scaling and the per-item cap.

        scaled = min(raw * rarity * scaling_factor, max_value), floored at 0.
        """
        config = self.get_config(effect_type)
        scaled = raw_value * self.get_rarity_multiplier(tier) * config.scaling_factor
        return max(0.0, min(scaled, config.max_value))

    @property
    def effect_types(self) -> list[EffectType]:
        return list(self._configs)
