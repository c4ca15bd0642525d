"""Test configuration and common fixtures."""

import os
from typing import Generator

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from app.db.db import get_session
from app.main import app
from app.services.lifecycle import LifecycleManager
from app.services.trust_ledger import TrustLedger


@pytest.fixture
def engine():
    """In-memory database shared by every connection of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine) -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


@pytest.fixture
def ledger(session) -> TrustLedger:
    return TrustLedger(session, increment=10)


@pytest.fixture
def manager(session, ledger) -> LifecycleManager:
    return LifecycleManager(session, ledger)


@pytest.fixture
def client(engine) -> Generator[TestClient, None, None]:
    """API client whose requests each get a session on the test database."""

    def _get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def found_item(manager):
    return manager.add_item(
        id="F1",
        title="Black wallet",
        description="Leather wallet found near the bus stop",
        category="documents",
        location="Main street",
        item_type="found",
        contact="c1",
        reporter_name="Casey",
    )


@pytest.fixture
def lost_item(manager):
    return manager.add_item(
        id="L1",
        title="Grey cat",
        description="Small grey cat with a red collar",
        category="pets",
        location="Park",
        item_type="lost",
        contact="owner@example.com",
    )


@pytest.fixture
def claim_payload() -> dict:
    return {
        "name": "Robin",
        "contact": "robin@example.com",
        "clue1": "Has a library card inside",
        "clue2": "Zip pocket is broken",
        "clue3": "Initials R.K. on the flap",
    }
