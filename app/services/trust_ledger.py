"""
Finder reputation.

The ledger owns every Finder row. It is credited by the lifecycle manager when
a claim on a found item is approved and never debited.
"""

import os
from typing import Optional

import structlog
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, col, select

from app.models.finder import Finder, FinderRead, Tier

logger = structlog.get_logger(__name__)

DEFAULT_CREDIT_PER_RETURN = 10

# Lower bound of each tier, highest first
TIER_THRESHOLDS = [
    (Tier.platinum, 100),
    (Tier.gold, 50),
    (Tier.silver, 20),
    (Tier.bronze, 0),
]


def credit_per_return() -> int:
    return int(os.getenv("CREDIT_PER_RETURN", DEFAULT_CREDIT_PER_RETURN))


def tier_of(credit_score: int) -> Tier:
    for tier, lower_bound in TIER_THRESHOLDS:
        if credit_score >= lower_bound:
            return tier

    return Tier.bronze


def tier_table() -> list[dict]:
    """Score range of every tier, lowest first. max_score is None for the open top tier."""
    rows = []
    upper = None

    for tier, lower_bound in TIER_THRESHOLDS:
        rows.append({
            "tier": tier,
            "min_score": lower_bound,
            "max_score": None if upper is None else upper - 1,
        })
        upper = lower_bound

    return list(reversed(rows))


def to_read(finder: Finder) -> FinderRead:
    return FinderRead(
        contact=finder.contact,
        name=finder.name,
        total_returned=finder.total_returned,
        credit_score=finder.credit_score,
        tier=tier_of(finder.credit_score),
    )


class TrustLedger:
    def __init__(self, session: Session, increment: Optional[int] = None):
        self.session = session
        self.increment = credit_per_return() if increment is None else increment

        if self.increment < 0:
            raise ValueError("Credit increment must be non-negative")

    def credit(self, contact: str, name: str) -> Finder:
        """
        Record one confirmed return for `contact`.

        Runs inside the caller's transaction and does not commit: the lifecycle
        manager commits the credit together with the item transition.
        """
        finder = self.get_finder(contact)

        if finder is None:
            try:
                # Savepoint keeps the caller's transaction usable if the insert loses a race
                with self.session.begin_nested():
                    finder = Finder(contact=contact, name=name, total_returned=0, credit_score=0)
                    self.session.add(finder)
            except IntegrityError:
                # Created by a concurrent approval for another item of this contact
                finder = self.session.get(Finder, contact)
                if finder is None:
                    raise

        # Relative update so concurrent credits for one contact both land
        self.session.execute(
            update(Finder)
            .where(col(Finder.contact) == contact)
            .values(
                total_returned=Finder.total_returned + 1,
                credit_score=Finder.credit_score + self.increment,
            )
            .execution_options(synchronize_session=False)
        )
        self.session.refresh(finder)

        logger.info(
            "finder_credited",
            contact=contact,
            total_returned=finder.total_returned,
            credit_score=finder.credit_score,
            tier=tier_of(finder.credit_score).value,
        )

        return finder

    def get_finder(self, contact: str) -> Optional[Finder]:
        return self.session.get(Finder, contact)

    def get_finders(self) -> list[Finder]:
        return list(self.session.exec(
            select(Finder).order_by(col(Finder.credit_score).desc(), col(Finder.contact))
        ).all())

    def finder_map(self) -> dict[str, Finder]:
        return {finder.contact: finder for finder in self.get_finders()}
