from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.item import Category, ItemType

# Item ids travel as one path segment; these segments are taken by fixed routes
RESERVED_ITEM_IDS = {"active", "with-finder"}


class ValidatedCreateItem(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(min_length=1, max_length=128, pattern=r"^[A-Za-z0-9._~-]+$")
    item_type: ItemType
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    category: Category
    location: str = Field(min_length=1)
    contact: str = Field(min_length=1)
    reporter_name: Optional[str] = Field(default=None, min_length=1)

    @field_validator("id")
    @classmethod
    def id_not_reserved(cls, value: str) -> str:
        if value in RESERVED_ITEM_IDS or value in {".", ".."}:
            raise ValueError(f"'{value}' cannot be used as an item id")
        return value


class ValidatedCreateClaim(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1)
    contact: str = Field(min_length=1)
    clue1: str = Field(min_length=1)
    clue2: str = Field(min_length=1)
    clue3: str = Field(min_length=1)
