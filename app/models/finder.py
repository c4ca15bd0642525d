from enum import Enum
from sqlmodel import Field, SQLModel


class Tier(str, Enum):
    bronze = "Bronze"
    silver = "Silver"
    gold = "Gold"
    platinum = "Platinum"


class Finder(SQLModel, table=True):
    __tablename__ = "finders"

    contact: str = Field(primary_key=True)  # same free-text key as Item.contact
    name: str

    total_returned: int = Field(default=0, ge=0)
    credit_score: int = Field(default=0, ge=0, index=True)


class FinderRead(SQLModel):
    contact: str
    name: str
    total_returned: int
    credit_score: int
    tier: Tier
