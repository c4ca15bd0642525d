"""
Item and claim lifecycle.

Every item starts `active`. Lost items are resolved directly by their owner.
Found items go to `claim_pending` when a claim is submitted and from there
either to `resolved` (claim approved, finder credited) or back to `active`
(claim rejected). `resolved` is terminal and claims are never deleted.

Each mutating method validates first, then writes and commits once. Status
changes are compare-and-set UPDATEs on the expected current status, so of two
racing transitions on the same item only one can win; the loser is rolled back
and sees InvalidTransition.
"""

from typing import Optional

import structlog
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, col, select

from app.models.claim import Claim
from app.models.item import Category, Item, ItemStatus, ItemType, ItemWithFinder
from app.services.trust_ledger import TrustLedger, tier_of
from app.utils.errors import DuplicateId, InvalidTransition, UnknownClaim, UnknownItem

logger = structlog.get_logger(__name__)

# Legal status changes as (from, to)
TRANSITIONS = {
    (ItemStatus.active, ItemStatus.claim_pending),
    (ItemStatus.active, ItemStatus.resolved),
    (ItemStatus.claim_pending, ItemStatus.resolved),
    (ItemStatus.claim_pending, ItemStatus.active),
}


class LifecycleManager:
    def __init__(self, session: Session, ledger: Optional[TrustLedger] = None):
        self.session = session
        self.ledger = ledger if ledger is not None else TrustLedger(session)

    # ---- Mutations ----

    def add_item(
        self,
        id: str,
        title: str,
        description: str,
        category: str,
        location: str,
        item_type: str,
        contact: str,
        reporter_name: Optional[str] = None,
    ) -> Item:
        # Out-of-enumeration values raise ValueError here, before anything is written
        category = Category(category)
        item_type = ItemType(item_type)

        if self.session.get(Item, id) is not None:
            raise DuplicateId(id)

        item = Item(
            id=id,
            title=title,
            description=description,
            category=category,
            location=location,
            item_type=item_type,
            contact=contact,
            reporter_name=reporter_name or contact,
            status=ItemStatus.active,
        )

        self.session.add(item)

        try:
            self.session.commit()
        except IntegrityError:
            # Another request inserted the same id after the check above
            self.session.rollback()
            raise DuplicateId(id)

        self.session.refresh(item)

        logger.info("item_added", item_id=item.id, item_type=item.item_type.value)

        return item

    def submit_claim(
        self,
        item_id: str,
        name: str,
        contact: str,
        clue1: str,
        clue2: str,
        clue3: str,
    ) -> Claim:
        item = self._get_item(item_id)

        if item.item_type != ItemType.found:
            raise InvalidTransition(
                "Claims can only be submitted for found items",
                item_id=item.id,
                operation="submit_claim",
                status=item.status.value,
            )

        if item.status == ItemStatus.resolved:
            raise InvalidTransition(
                "This item has already been resolved",
                item_id=item.id,
                operation="submit_claim",
                status=item.status.value,
            )

        claim = Claim(
            item_id=item.id,
            name=name,
            contact=contact,
            clue1=clue1,
            clue2=clue2,
            clue3=clue3,
        )
        self.session.add(claim)

        # Further claims while already pending keep the status as is
        self._transition(
            item.id,
            (ItemStatus.active, ItemStatus.claim_pending),
            ItemStatus.claim_pending,
            "submit_claim",
        )

        self.session.commit()
        self.session.refresh(claim)

        logger.info("claim_submitted", item_id=item.id, claim_id=claim.id)

        return claim

    def approve_claim(self, claim_id: str) -> Item:
        claim, item = self._get_pending_claim(claim_id, "approve_claim")

        # Credit goes to whoever reported the found item, not the claimant
        contact = item.contact
        name = item.reporter_name

        self._transition(item.id, (ItemStatus.claim_pending,), ItemStatus.resolved, "approve_claim")

        try:
            self.ledger.credit(contact, name)
            self.session.commit()
        except Exception:
            # Item transition and credit land together or not at all
            self.session.rollback()
            raise

        self.session.refresh(item)

        logger.info(
            "claim_approved",
            item_id=item.id,
            claim_id=claim.id,
            finder_contact=contact,
        )

        return item

    def reject_claim(self, claim_id: str) -> Item:
        claim, item = self._get_pending_claim(claim_id, "reject_claim")

        # Sibling claims stay on record and can still be approved later
        self._transition(item.id, (ItemStatus.claim_pending,), ItemStatus.active, "reject_claim")

        self.session.commit()
        self.session.refresh(item)

        logger.info("claim_rejected", item_id=item.id, claim_id=claim.id)

        return item

    def resolve_item(self, item_id: str) -> Item:
        item = self._get_item(item_id)

        if item.item_type != ItemType.lost:
            raise InvalidTransition(
                "Found items are resolved by approving a claim",
                item_id=item.id,
                operation="resolve_item",
                status=item.status.value,
            )

        if item.status != ItemStatus.active:
            raise InvalidTransition(
                "Only active items can be resolved",
                item_id=item.id,
                operation="resolve_item",
                status=item.status.value,
            )

        self._transition(item.id, (ItemStatus.active,), ItemStatus.resolved, "resolve_item")

        self.session.commit()
        self.session.refresh(item)

        logger.info("item_resolved", item_id=item.id)

        return item

    # ---- Queries ----

    def get_item(self, item_id: str) -> Item:
        return self._get_item(item_id)

    def get_all_items(self) -> list[Item]:
        return list(self.session.exec(
            select(Item).order_by(col(Item.timestamp), col(Item.id))
        ).all())

    def get_active_items(self) -> list[Item]:
        return list(self.session.exec(
            select(Item)
            .where(col(Item.status) == ItemStatus.active)
            .order_by(col(Item.timestamp), col(Item.id))
        ).all())

    def get_items_with_finder(self) -> list[ItemWithFinder]:
        """
        Every item, with the finder's reputation attached to found items.

        The join is on the free-text contact string, so two people who share a
        contact are indistinguishable here.
        """
        finders = self.ledger.finder_map()
        items = []

        for item in self.get_all_items():
            data = item.model_dump()
            finder = finders.get(item.contact) if item.item_type == ItemType.found else None

            if finder is not None:
                data["credit_score"] = finder.credit_score
                data["total_returned"] = finder.total_returned
                data["tier"] = tier_of(finder.credit_score)

            items.append(ItemWithFinder(**data))

        return items

    def get_claim(self, claim_id: str) -> Claim:
        claim = self.session.get(Claim, claim_id)
        if claim is None:
            raise UnknownClaim(claim_id)

        return claim

    def get_all_claims(self) -> list[Claim]:
        return list(self.session.exec(
            select(Claim).order_by(col(Claim.timestamp), col(Claim.id))
        ).all())

    def get_claims_by_item(self, item_id: str) -> list[Claim]:
        return list(self.session.exec(
            select(Claim)
            .where(col(Claim.item_id) == item_id)
            .order_by(col(Claim.timestamp), col(Claim.id))
        ).all())

    def latest_claim(self, item_id: str) -> Optional[Claim]:
        """Most recently submitted claim for an item. A display default only."""
        return self.session.exec(
            select(Claim)
            .where(col(Claim.item_id) == item_id)
            .order_by(col(Claim.timestamp).desc(), col(Claim.id).desc())
        ).first()

    # ---- Helpers ----

    def _get_item(self, item_id: str) -> Item:
        item = self.session.get(Item, item_id)
        if item is None:
            raise UnknownItem(item_id)

        return item

    def _get_pending_claim(self, claim_id: str, operation: str) -> tuple[Claim, Item]:
        claim = self.get_claim(claim_id)
        item = self._get_item(claim.item_id)

        if item.status != ItemStatus.claim_pending:
            raise InvalidTransition(
                "Item has no claim under review",
                item_id=item.id,
                operation=operation,
                status=item.status.value,
            )

        return claim, item

    def _transition(
        self,
        item_id: str,
        expected: tuple[ItemStatus, ...],
        target: ItemStatus,
        operation: str,
    ):
        """Compare-and-set the item's status. Rolls back on a lost race."""
        for current in expected:
            if current != target and (current, target) not in TRANSITIONS:
                raise ValueError(f"{current.value} -> {target.value} is not a legal transition")

        result = self.session.execute(
            update(Item)
            .where(col(Item.id) == item_id)
            .where(col(Item.status).in_(expected))
            .values(status=target)
            .execution_options(synchronize_session=False)
        )

        if result.rowcount != 1:
            self.session.rollback()
            current = self.session.get(Item, item_id)

            raise InvalidTransition(
                "Item changed state while the request was processed",
                item_id=item_id,
                operation=operation,
                status=current.status.value if current is not None else None,
            )

        logger.debug(
            "item_transition",
            item_id=item_id,
            operation=operation,
            to_status=target.value,
        )
