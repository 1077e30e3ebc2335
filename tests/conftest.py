import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import itertools
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from videoclub.core.clock import Clock
from videoclub.core.config import settings
from videoclub.core.database import Base, create_db_engine, create_session_factory
from videoclub.dependencies import get_clock, get_db
from videoclub.main import app
from videoclub.models import Film, User

START = datetime(2024, 5, 1, 20, 0, tzinfo=timezone.utc)


class FixedClock(Clock):
    """Clock that only moves when a test advances it."""

    def __init__(self, current: datetime):
        self.current = current

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> datetime:
        self.current = self.current + timedelta(**kwargs)
        return self.current


@pytest.fixture
def engine(tmp_path):
    engine = create_db_engine(f"sqlite:///{tmp_path / 'videoclub.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def clock():
    return FixedClock(START)


@pytest.fixture
def make_user(db):
    counter = itertools.count(1)

    def _make_user(credits: int = 10, *, is_admin: bool = False, username: str = None) -> User:
        user = User(
            username=username or f"member{next(counter)}",
            credits=credits,
            is_admin=is_admin,
        )
        db.add(user)
        db.commit()
        return user

    return _make_user


@pytest.fixture
def make_film(db):
    counter = itertools.count(1000)

    def _make_film(
        *,
        price: int = 10,
        duration: int = 3600,
        is_available: bool = True,
        external_id: int = None,
        title: str = None,
    ) -> Film:
        number = next(counter)
        film = Film(
            external_id=external_id or number,
            title=title or f"Film {number}",
            duration=duration,
            price=price,
            is_available=is_available,
        )
        db.add(film)
        db.commit()
        return film

    return _make_film


@pytest.fixture
def read_balance(session_factory):
    """Read a balance through a fresh session so no cached row is reused."""

    def _read_balance(user_id: int) -> int:
        session = session_factory()
        try:
            return session.get(User, user_id).credits
        finally:
            session.close()

    return _read_balance


@pytest.fixture
def client(engine, clock):
    request_sessions = create_session_factory(engine)

    def _override_get_db():
        session = request_sessions()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_clock] = lambda: clock
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_token(user_id: int, *, is_admin: bool = False) -> str:
    payload = {"sub": str(user_id), "is_admin": is_admin}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {make_token(user.id, is_admin=bool(user.is_admin))}"}
