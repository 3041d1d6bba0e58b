"""Item record models as delivered by the external inventory service."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Optional, Union

from pydantic import AliasChoices, BaseModel, Field

from .effect import Effect


class RarityTier(StrEnum):
    """Quality grade that scales an item's effect strength."""
    COMMON = "common"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


class EffectDescriptor(BaseModel):
    """Primary effect declared by an item, before rarity scaling.

    The type and unit stay raw strings; the extractor decides whether
    they are recognised.
    """
    type: str
    value: float = Field(validation_alias=AliasChoices("value", "raw_value", "rawValue"))
    unit: Optional[str] = None
    duration: float = Field(default=0.0, ge=0)
    cooldown: float = Field(default=0.0, ge=0)


class ItemAttribute(BaseModel):
    """Free-form trait key/value pair."""
    trait_type: str
    value: Union[str, int, float]


class ItemRecord(BaseModel):
    """Owned collectible as supplied by the inventory source."""
    id: str = ""
    name: str = ""
    rarity: str = Field(default=RarityTier.COMMON.value, description="Raw tier name, unknown tiers allowed")
    game_effect: Optional[EffectDescriptor] = None
    attributes: list[ItemAttribute] = Field(default_factory=list)
    listed_for_sale: bool = False

    @property
    def display_name(self) -> str:
        return self.name or self.id


@dataclass(frozen=True)
class EquippedItem:
    """An item held by the equipment registry together with its extracted effects."""

    id: str
    name: str
    rarity: str
    effects: tuple[Effect, ...]
    equipped_at: float

    @property
    def effect_count(self) -> int:
        return len(self.effects)

    def __repr__(self) -> str:
        return f"EquippedItem({self.name or self.id}, {self.rarity}, {len(self.effects)} effects)"
