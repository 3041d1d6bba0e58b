"""Equipment Registry.

Holds the items a player currently has equipped, keyed by item ID.
"""

import logging
import time
from typing import Any, Callable, Iterable, Iterator, Mapping, Optional, Union

from gear_effects.data.loaders.item_loader import parse_item_record
from gear_effects.data.models.item import EquippedItem, ItemRecord
from .effect_extractor import EffectExtractor

logger = logging.getLogger(__name__)

RawItem = Union[ItemRecord, Mapping[str, Any]]


class EquipmentRegistry:
    """
    Manages a player's equipped items.

    Rules:
    - An item equips only if at least one effect can be extracted
    - Equipping an already equipped ID is a no-op
    - Equipped items are never modified, only removed and re-extracted

    Mutations never trigger a stat recompute; callers batch their
    changes and run one aggregation pass afterwards.
    """

    def __init__(
        self,
        extractor: Optional[EffectExtractor] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        """Initialize an empty registry."""
        self.extractor = extractor or EffectExtractor()
        self._clock = clock or time.time
        self._items: dict[str, EquippedItem] = {}

    def equip(self, item: RawItem) -> bool:
        """
        Equip an item and store its extracted effects.

        Malformed items are refused and logged, never raised.

        Args:
            item: Parsed record or raw mapping from the inventory source.

        Returns:
            True if the item was stored.
        """
        record = parse_item_record(item)
        if not record.id:
            logger.warning(f"Refusing item without an ID: {record.display_name!r}")
            return False

        if record.id in self._items:
            return False

        effects = self.extractor.extract(record)
        if not effects:
            logger.warning(f"Item {record.display_name!r} has no game effects, not equipped")
            return False

        self._items[record.id] = EquippedItem(
            id=record.id,
            name=record.display_name,
            rarity=record.rarity,
            effects=tuple(effects),
            equipped_at=self._clock(),
        )
        logger.info(f"Equipped {record.display_name!r} ({record.rarity}) with {len(effects)} effects")
        return True

    def unequip(self, item_id: str) -> bool:
        """
        Remove an equipped item.

        Returns:
            True if an item was removed.
        """
        removed = self._items.pop(item_id, None)
        if removed is None:
            return False
        logger.info(f"Unequipped {removed.name!r}")
        return True

    def auto_equip(self, candidates: Iterable[RawItem]) -> list[str]:
        """
        Equip every candidate that is not listed for trade and grants an effect.

        Used at session start to seed the registry from the player's
        full collection.

        Args:
            candidates: The player's owned items.

        Returns:
            IDs of the items equipped by this call.
        """
        equipped = []
        for candidate in candidates:
            record = parse_item_record(candidate)
            if record.listed_for_sale:
                logger.debug(f"Skipping {record.display_name!r}: listed for trade")
                continue
            if self.equip(record):
                equipped.append(record.id)

        logger.info(f"Auto-equipped {len(equipped)} items")
        return equipped

    def clear(self) -> None:
        """Unequip everything (reload/logout)."""
        self._items.clear()

    def get_all(self) -> tuple[EquippedItem, ...]:
        """Snapshot of the equipped items in equip order."""
        return tuple(self._items.values())

    def get(self, item_id: str) -> Optional[EquippedItem]:
        return self._items.get(item_id)

    def is_equipped(self, item_id: str) -> bool:
        return item_id in self._items

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[EquippedItem]:
        return iter(self.get_all())
