"""Effect Extractor.

Turns an owned-item record into typed, rarity-scaled effects:
- Primary path: the item's declared game effect descriptor
- Fallback path: free-form traits carrying a keyword and a percentage
"""

import logging
import math
import re
from typing import Any, Mapping, Optional, Union

from gear_effects.data.loaders.item_loader import parse_item_record
from gear_effects.data.models.effect import Effect, EffectSource, EffectType, EffectUnit
from gear_effects.data.models.item import EffectDescriptor, ItemAttribute, ItemRecord
from .constants import TRAIT_KEYWORDS
from .effect_catalog import EffectCatalog

logger = logging.getLogger(__name__)

PERCENT_PATTERN = re.compile(r"([+-]?\d+(?:\.\d+)?)\s*%")

_EFFECT_TYPES = frozenset(etype.value for etype in EffectType)
_EFFECT_UNITS = frozenset(unit.value for unit in EffectUnit)

# Keywords match at the start of a word only
_TRAIT_PATTERNS = tuple(
    (re.compile(rf"\b{re.escape(keyword)}"), effect_type) for keyword, effect_type in TRAIT_KEYWORDS
)


class EffectExtractor:
    """
    Parses item records into Effect value objects.

    Extraction is a pure function of the record: the source is never
    mutated and fresh effects are built on every call. Anything that
    cannot be understood yields no effect instead of an error.
    """

    def __init__(self, catalog: Optional[EffectCatalog] = None):
        self.catalog = catalog or EffectCatalog()

    def extract(self, item: Union[ItemRecord, Mapping[str, Any]]) -> list[Effect]:
        """
        Extract all effects an item grants.

        Args:
            item: Parsed record or raw mapping from the inventory source.

        Returns:
            Zero or more effects, primary effect first.
        """
        record = item if isinstance(item, ItemRecord) else parse_item_record(item)
        effects: list[Effect] = []

        if record.game_effect is not None:
            primary = self._extract_primary(record.game_effect, record.rarity)
            if primary is not None:
                effects.append(primary)
            else:
                logger.debug(f"Item {record.display_name!r}: unusable game effect {record.game_effect!r}")

        for attribute in record.attributes:
            trait_effect = self._parse_trait(attribute, record.rarity)
            if trait_effect is not None:
                effects.append(trait_effect)

        return effects

    def _extract_primary(self, descriptor: EffectDescriptor, rarity: str) -> Optional[Effect]:
        """Build the effect for a declared descriptor."""
        effect_type = self._resolve_type(descriptor.type)
        if effect_type is None or not math.isfinite(descriptor.value):
            return None

        unit = self._resolve_unit(descriptor.unit, effect_type)
        return self._build_effect(
            effect_type,
            descriptor.value,
            rarity,
            unit=unit,
            duration=descriptor.duration,
            cooldown=descriptor.cooldown,
            source=EffectSource.PRIMARY,
        )

    def _parse_trait(self, attribute: ItemAttribute, rarity: str) -> Optional[Effect]:
        """
        Recognise effects in free-form traits, e.g. "Critical Chance: 5%".

        Only a known keyword in the trait name combined with a percentage
        value counts. Everything else is skipped.
        """
        if not isinstance(attribute.value, str):
            return None

        match = PERCENT_PATTERN.search(attribute.value)
        if match is None:
            return None

        trait_name = attribute.trait_type.lower()
        effect_type = next(
            (etype for pattern, etype in _TRAIT_PATTERNS if pattern.search(trait_name)),
            None,
        )
        if effect_type is None:
            logger.debug(f"Skipping unrecognised trait {attribute.trait_type!r}")
            return None

        return self._build_effect(
            effect_type,
            float(match.group(1)),
            rarity,
            unit=EffectUnit.PERCENTAGE,
            source=EffectSource.TRAIT,
        )

    def _build_effect(
        self,
        effect_type: EffectType,
        raw_value: float,
        rarity: str,
        unit: EffectUnit,
        duration: float = 0.0,
        cooldown: float = 0.0,
        source: EffectSource = EffectSource.PRIMARY,
    ) -> Effect:
        config = self.catalog.get_config(effect_type)
        return Effect(
            type=effect_type,
            value=self.catalog.scale_value(effect_type, raw_value, rarity),
            unit=unit,
            category=config.category,
            stackable=config.stackable,
            max_stacks=self.catalog.get_max_stacks(effect_type),
            duration=duration,
            cooldown=cooldown,
            source=source,
        )

    def _resolve_type(self, raw_type: str) -> Optional[EffectType]:
        key = raw_type.strip().lower()
        if key not in _EFFECT_TYPES:
            return None
        effect_type = EffectType(key)
        return effect_type if self.catalog.has_config(effect_type) else None

    def _resolve_unit(self, raw_unit: Optional[str], effect_type: EffectType) -> EffectUnit:
        key = (raw_unit or "").strip().lower()
        if key in _EFFECT_UNITS:
            return EffectUnit(key)
        return self.catalog.get_default_unit(effect_type)
