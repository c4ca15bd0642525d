"""Lifecycle error taxonomy."""

from typing import Any, Optional


class LifecycleError(Exception):
    """Base exception for item, claim and finder operations."""

    code = "LIFECYCLE_ERROR"
    status_code = 500

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class UnknownItem(LifecycleError):
    """Referenced item id does not exist."""

    code = "UNKNOWN_ITEM"
    status_code = 404

    def __init__(self, item_id: str):
        super().__init__(f"Item '{item_id}' not found", details={"item_id": item_id})
        self.item_id = item_id


class UnknownClaim(LifecycleError):
    """Referenced claim id does not exist."""

    code = "UNKNOWN_CLAIM"
    status_code = 404

    def __init__(self, claim_id: str):
        super().__init__(f"Claim '{claim_id}' not found", details={"claim_id": claim_id})
        self.claim_id = claim_id


class DuplicateId(LifecycleError):
    """Caller-supplied item id is already in use."""

    code = "DUPLICATE_ID"
    status_code = 409

    def __init__(self, item_id: str):
        super().__init__(f"Item id '{item_id}' is already in use", details={"item_id": item_id})
        self.item_id = item_id


class InvalidTransition(LifecycleError):
    """Operation is not legal for the item's current type or status."""

    code = "INVALID_TRANSITION"
    status_code = 409

    def __init__(self, message: str, item_id: str, operation: str, status: Optional[str] = None):
        super().__init__(
            message,
            details={"item_id": item_id, "operation": operation, "status": status},
        )
        self.item_id = item_id
        self.operation = operation
        self.status = status


class UnknownFinder(LifecycleError):
    """No return has been credited to this contact yet."""

    code = "UNKNOWN_FINDER"
    status_code = 404

    def __init__(self, contact: str):
        super().__init__(f"Finder '{contact}' not found", details={"contact": contact})
        self.contact = contact
