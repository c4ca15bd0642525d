from fastapi import APIRouter, Depends

from app.services.lifecycle import LifecycleManager
from app.utils.dependencies import get_lifecycle_manager
from app.utils.form_validator import ValidatedCreateClaim, ValidatedCreateItem


router = APIRouter()


@router.post("", status_code=201)
def add_item(
    payload: ValidatedCreateItem,
    manager: LifecycleManager = Depends(get_lifecycle_manager),
):
    item = manager.add_item(
        id=payload.id,
        title=payload.title,
        description=payload.description,
        category=payload.category,
        location=payload.location,
        item_type=payload.item_type,
        contact=payload.contact,
        reporter_name=payload.reporter_name,
    )

    return {"ok": True, "id": item.id}


@router.get("")
def get_all_items(manager: LifecycleManager = Depends(get_lifecycle_manager)):
    return {"items": manager.get_all_items()}


@router.get("/active")
def get_active_items(manager: LifecycleManager = Depends(get_lifecycle_manager)):
    return {"items": manager.get_active_items()}


@router.get("/with-finder")
def get_items_with_finder(manager: LifecycleManager = Depends(get_lifecycle_manager)):
    """
    All items, found ones annotated with their finder's trust score and tier.
    """
    return {"items": manager.get_items_with_finder()}


@router.get("/{item_id}")
def get_item(
    item_id: str,
    manager: LifecycleManager = Depends(get_lifecycle_manager),
):
    item = manager.get_item(item_id)
    latest = manager.latest_claim(item_id)

    return {
        "item": item,
        # most recent claim is what a reviewer sees first, nothing more
        "latest_claim_id": latest.id if latest else None,
    }


@router.post("/{item_id}/resolve")
def resolve_item(
    item_id: str,
    manager: LifecycleManager = Depends(get_lifecycle_manager),
):
    manager.resolve_item(item_id)

    return {"ok": True}


@router.post("/{item_id}/claims", status_code=201)
def submit_claim(
    item_id: str,
    payload: ValidatedCreateClaim,
    manager: LifecycleManager = Depends(get_lifecycle_manager),
):
    claim = manager.submit_claim(
        item_id=item_id,
        name=payload.name,
        contact=payload.contact,
        clue1=payload.clue1,
        clue2=payload.clue2,
        clue3=payload.clue3,
    )

    return {"ok": True, "claim_id": claim.id}


@router.get("/{item_id}/claims")
def get_claims_by_item(
    item_id: str,
    manager: LifecycleManager = Depends(get_lifecycle_manager),
):
    return {"claims": manager.get_claims_by_item(item_id)}
