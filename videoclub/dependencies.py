"""Shared dependencies for the videoclub service."""

from typing import Generator

from videoclub.core.clock import Clock, SystemClock
from videoclub.core.database import SessionLocal

_system_clock = SystemClock()


def get_db() -> Generator:
    """Provide a transactional scope around a series of operations."""

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_clock() -> Clock:
    return _system_clock
