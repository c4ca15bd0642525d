import os
from typing import Optional

from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine


DEFAULT_DATABASE_URL = "sqlite:///./lostfound.db"

_engine: Optional[Engine] = None


def get_engine() -> Engine:
    global _engine

    if _engine is None:
        url = os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)

        # sqlite connections are shared with FastAPI's worker threads
        connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
        _engine = create_engine(url, connect_args=connect_args)

    return _engine


def create_db_and_tables():
    SQLModel.metadata.create_all(get_engine())


def get_session():
    with Session(get_engine()) as session:
        yield session
