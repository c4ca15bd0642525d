from fastapi import Depends
from sqlmodel import Session

from app.db.db import get_session
from app.services.lifecycle import LifecycleManager
from app.services.trust_ledger import TrustLedger


def get_trust_ledger(session: Session = Depends(get_session)) -> TrustLedger:
    return TrustLedger(session)


def get_lifecycle_manager(
    session: Session = Depends(get_session),
    ledger: TrustLedger = Depends(get_trust_ledger),
) -> LifecycleManager:
    # ledger shares the request session so approvals commit both sides at once
    return LifecycleManager(session, ledger)
