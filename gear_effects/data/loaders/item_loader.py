"""Item record loader for owned-collectible collections."""

import json
import logging
import re
from functools import lru_cache
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Union

from pydantic import TypeAdapter, ValidationError

from gear_effects.config import settings
from gear_effects.exceptions import CollectionLoadError
from ..models.effect import EffectType
from ..models.item import EffectDescriptor, ItemAttribute, ItemRecord, RarityTier

logger = logging.getLogger(__name__)

SAMPLE_COLLECTION_FILE = Path("items") / "sample_collection.json"

# Session records ("power enhancement" achievements) describe their effect
# through attributes instead of a game_effect block.
POWER_ENHANCEMENT = "power_enhancement"
EFFECT_TYPE_ATTRIBUTE = "Effect Type"
POWER_LEVEL_ATTRIBUTE = "Power Level"

EFFECT_LABELS: dict[str, EffectType] = {
    "Multiple Projectiles": EffectType.MULTIPLE_PROJECTILES,
    "Health Boost": EffectType.HEALTH_BOOST,
    "Weapon Damage": EffectType.WEAPON_DAMAGE_BOOST,
    "Movement Speed": EffectType.MOVEMENT_SPEED,
    "Fire Rate": EffectType.FIRE_RATE,
    "Critical Chance": EffectType.CRITICAL_CHANCE,
    "Shield Strength": EffectType.SHIELD_STRENGTH,
    "Bullet Speed": EffectType.BULLET_SPEED,
    "Bullet Lifetime": EffectType.BULLET_LIFETIME,
    "Magnetic Range": EffectType.MAGNETIC_RANGE,
    "Experience Boost": EffectType.EXPERIENCE_BOOST,
    "Mining Efficiency": EffectType.MINING_EFFICIENCY,
}

DEFAULT_POWER_LEVEL = 10.0
RARITY_POWER_LEVELS: dict[str, float] = {
    RarityTier.COMMON: 10.0,
    RarityTier.RARE: 15.0,
    RarityTier.EPIC: 20.0,
    RarityTier.LEGENDARY: 30.0,
}

_POWER_LEVEL_PATTERN = re.compile(r"(\d+)")
_BOOL_ADAPTER = TypeAdapter(bool)


def _lookup(raw: Mapping, metadata: Mapping, *keys: str) -> Any:
    """Return the first key present, top level first, then metadata."""
    for source in (raw, metadata):
        for key in keys:
            if source.get(key) is not None:
                return source[key]
    return None


def _parse_descriptor(data: Any) -> Optional[EffectDescriptor]:
    if not isinstance(data, Mapping):
        return None
    try:
        return EffectDescriptor.model_validate(data)
    except ValidationError as e:
        logger.debug(f"Invalid game effect {data!r}: {e.error_count()} errors")
        return None


def _parse_attributes(data: Any) -> list[ItemAttribute]:
    if not isinstance(data, list):
        return []

    attributes = []
    for entry in data:
        try:
            attributes.append(ItemAttribute.model_validate(entry))
        except ValidationError:
            logger.debug(f"Dropping malformed attribute {entry!r}")
    return attributes


def _parse_listing(value: Any) -> bool:
    """Listing flags arrive as bools or "True"/"False" strings.

    Anything unreadable counts as listed so it is never auto-equipped.
    """
    if value is None:
        return False
    try:
        return _BOOL_ADAPTER.validate_python(value)
    except ValidationError:
        logger.debug(f"Unreadable listing flag {value!r}, treating item as listed")
        return True


def power_level_value(power_level: Any, rarity: str) -> float:
    """
    Raw effect value for a session record.

    Args:
        power_level: "Power Level" attribute value (e.g. "Level 15").
        rarity: Item rarity tier.

    Returns:
        The first integer in the power level, else a rarity default.
    """
    if power_level is None or power_level == "":
        return DEFAULT_POWER_LEVEL

    match = _POWER_LEVEL_PATTERN.search(str(power_level))
    if match:
        return float(match.group(1))
    return RARITY_POWER_LEVELS.get(rarity, DEFAULT_POWER_LEVEL)


def derive_session_effect(
    rarity: str,
    attributes: Iterable[ItemAttribute],
) -> Optional[EffectDescriptor]:
    """Build a game effect descriptor from "Effect Type"/"Power Level" attributes."""
    values = {attr.trait_type: attr.value for attr in attributes}
    label = values.get(EFFECT_TYPE_ATTRIBUTE)
    if label is None:
        return None

    effect_type = EFFECT_LABELS.get(str(label).strip())
    if effect_type is None:
        logger.debug(f"Unknown effect label {label!r} on session record")
        return None

    return EffectDescriptor(
        type=effect_type.value,
        value=power_level_value(values.get(POWER_LEVEL_ATTRIBUTE), rarity),
    )


def parse_item_record(raw: Any) -> ItemRecord:
    """Normalise a raw inventory record. Never raises.

    Accepts the flat shape and the wallet shape where name, rarity,
    attributes and game_effect live under "metadata".

    Args:
        raw: Record as returned by the inventory service.

    Returns:
        ItemRecord, possibly empty when nothing could be read.
    """
    if isinstance(raw, ItemRecord):
        return raw
    if not isinstance(raw, Mapping):
        logger.debug(f"Ignoring non-mapping item record of type {type(raw).__name__}")
        return ItemRecord()

    metadata = raw.get("metadata")
    if not isinstance(metadata, Mapping):
        metadata = {}

    item_id = _lookup(raw, {}, "documentId", "document_id", "id")
    name = _lookup(raw, metadata, "name")
    rarity = _lookup(raw, metadata, "rarity")
    rarity = str(rarity).strip().lower() if rarity is not None else RarityTier.COMMON.value

    attributes = _parse_attributes(_lookup(raw, metadata, "attributes"))
    game_effect = _parse_descriptor(_lookup(raw, metadata, "game_effect"))
    if game_effect is None and _lookup(raw, metadata, "achievement_type") == POWER_ENHANCEMENT:
        game_effect = derive_session_effect(rarity, attributes)

    return ItemRecord(
        id=str(item_id) if item_id is not None else "",
        name=str(name) if name is not None else "",
        rarity=rarity,
        game_effect=game_effect,
        attributes=attributes,
        listed_for_sale=_parse_listing(_lookup(raw, {}, "is_listed_for_sale", "listed_for_sale")),
    )


def parse_collection(entries: Iterable[Any]) -> list[ItemRecord]:
    """Normalise every record of a collection."""
    return [parse_item_record(entry) for entry in entries]


def load_collection(path: Union[str, Path]) -> list[ItemRecord]:
    """Load an owned-item collection from a JSON file.

    The file holds a list of records or an object with an "items"
    (or "data") list.

    Args:
        path: JSON file path.

    Returns:
        List of ItemRecord objects.

    Raises:
        CollectionLoadError: The file is missing, unreadable or not a collection.
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise CollectionLoadError(f"Cannot read collection {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise CollectionLoadError(f"Invalid JSON in {path}: {e}") from e

    if isinstance(data, Mapping):
        data = data.get("items", data.get("data"))
    if not isinstance(data, list):
        raise CollectionLoadError(f"No item list found in {path}")

    records = parse_collection(data)
    logger.info(f"Loaded {len(records)} item records from {path}")
    return records


@lru_cache(maxsize=1)
def load_sample_collection() -> list[ItemRecord]:
    """Load the bundled sample collection from the data directory."""
    return load_collection(settings.DATA_DIR / SAMPLE_COLLECTION_FILE)


def get_record_by_id(records: Iterable[ItemRecord], item_id: str) -> Optional[ItemRecord]:
    """Find a record by its ID."""
    for record in records:
        if record.id == item_id:
            return record
    return None
