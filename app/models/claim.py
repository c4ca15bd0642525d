import uuid
from sqlmodel import Field, SQLModel
from datetime import datetime

from app.utils.clock import monotonic_utc_now


class Claim(SQLModel, table=True):
    __tablename__ = "claims"

    id: str = Field(default_factory=lambda: uuid.uuid4().hex, primary_key=True)
    timestamp: datetime = Field(default_factory=monotonic_utc_now, index=True)

    # Linked found item
    item_id: str = Field(foreign_key="items.id", index=True)

    # Claimant, not verified against any account
    name: str
    contact: str

    # Proof of ownership, reviewed by a human
    clue1: str
    clue2: str
    clue3: str
