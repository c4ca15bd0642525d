from enum import Enum
from typing import Optional
from sqlmodel import Field, SQLModel
from datetime import datetime

from app.models.finder import Tier
from app.utils.clock import monotonic_utc_now


class ItemType(str, Enum):
    lost = "lost"
    found = "found"


class ItemStatus(str, Enum):
    active = "active"
    claim_pending = "claim_pending"
    resolved = "resolved"


class Category(str, Enum):
    documents = "documents"
    clothing = "clothing"
    pets = "pets"
    jewelry = "jewelry"
    others = "others"
    electronics = "electronics"


class ItemBase(SQLModel):
    id: str = Field(primary_key=True)  # caller supplied
    timestamp: datetime = Field(default_factory=monotonic_utc_now, index=True)

    # Reporter info
    contact: str = Field(index=True)  # joins Finder.contact
    reporter_name: str

    # Item fields
    title: str
    description: str
    category: Category
    location: str
    item_type: ItemType
    status: ItemStatus = Field(default=ItemStatus.active, index=True)


class Item(ItemBase, table=True):
    __tablename__ = "items"


class ItemWithFinder(ItemBase):
    # Only set for found items whose contact already has a Finder record
    credit_score: Optional[int] = None
    total_returned: Optional[int] = None
    tier: Optional[Tier] = None
