import os
import tempfile
from datetime import datetime

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SEED_DEFAULT_DATA", "false")
os.environ.setdefault("LLM_LOG_DIR", tempfile.mkdtemp(prefix="cuidador-llm-"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from db.base import Base
from db.session import get_db
from main import app
from utils.clock import get_now
from utils.ids import CounterIdGenerator, get_id_generator


class FixedClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def clock():
    return FixedClock(datetime(2026, 10, 19, 7, 0))


@pytest.fixture
def client(session_factory, clock):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    ids = CounterIdGenerator(prefix="id-")
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_now] = clock
    app.dependency_overrides[get_id_generator] = lambda: ids
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
