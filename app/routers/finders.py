from fastapi import APIRouter, Depends

from app.services.trust_ledger import TrustLedger, tier_table, to_read
from app.utils.dependencies import get_trust_ledger
from app.utils.errors import UnknownFinder


router = APIRouter()


@router.get("")
def get_finders(ledger: TrustLedger = Depends(get_trust_ledger)):
    return {"finders": [to_read(finder) for finder in ledger.get_finders()]}


@router.get("/tiers")
def get_tiers():
    return {"tiers": tier_table()}


@router.get("/{contact}")
def get_finder(
    contact: str,
    ledger: TrustLedger = Depends(get_trust_ledger),
):
    finder = ledger.get_finder(contact)

    if not finder:
        raise UnknownFinder(contact)

    return {"finder": to_read(finder)}
