"""
Shared fixtures: in-memory SQLite ledger, fixed clock, API client with a
bearer token per user.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("AUTO_CREATE_SCHEMA", "false")

from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app import models  # noqa: F401 - register tables
from app.auth import create_access_token
from app.clock import Clock, get_clock
from app.database import Base, get_db
from app.main import app
from app.models.user_stats import UserStats
from app.services.activity_recorder import ActivityRecorder, get_activity_recorder

DAY_1 = date(2024, 1, 1)


class FixedClock(Clock):
    """Clock pinned to a settable day."""

    def __init__(self, day: date):
        super().__init__("UTC")
        self.day = day

    def today(self) -> date:
        return self.day


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def recorder():
    return ActivityRecorder(max_games_per_day=0, dedupe_game_plays=True)


@pytest.fixture
def clock():
    return FixedClock(DAY_1)


@pytest.fixture
def client(session_factory, clock, recorder):
    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_activity_recorder] = lambda: recorder
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def _headers(user_id: str) -> dict:
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}
    return _headers


@pytest.fixture
def seed_stats(session_factory):
    """Insert ledger rows directly: seed_stats("u1", total_test_score=80, ...)."""
    def _seed(user_id: str, **fields):
        session = session_factory()
        try:
            session.add(UserStats(user_id=user_id, **fields))
            session.commit()
        finally:
            session.close()
    return _seed
