# Data Loaders
from .item_loader import (
    derive_session_effect,
    get_record_by_id,
    load_collection,
    load_sample_collection,
    parse_collection,
    parse_item_record,
    power_level_value,
)

__all__ = [
    "derive_session_effect",
    "get_record_by_id",
    "load_collection",
    "load_sample_collection",
    "parse_collection",
    "parse_item_record",
    "power_level_value",
]
