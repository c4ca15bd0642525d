from fastapi import APIRouter, Depends

from app.services.lifecycle import LifecycleManager
from app.utils.dependencies import get_lifecycle_manager


router = APIRouter()


@router.get("")
def get_all_claims(manager: LifecycleManager = Depends(get_lifecycle_manager)):
    return {"claims": manager.get_all_claims()}


@router.get("/{claim_id}")
def get_claim(
    claim_id: str,
    manager: LifecycleManager = Depends(get_lifecycle_manager),
):
    return {"claim": manager.get_claim(claim_id)}


@router.post("/{claim_id}/approve")
def approve_claim(
    claim_id: str,
    manager: LifecycleManager = Depends(get_lifecycle_manager),
):
    # Review of the clues happens outside this service; approval is the verdict
    manager.approve_claim(claim_id)

    return {"ok": True}


@router.post("/{claim_id}/reject")
def reject_claim(
    claim_id: str,
    manager: LifecycleManager = Depends(get_lifecycle_manager),
):
    manager.reject_claim(claim_id)

    return {"ok": True}
