"""Data access helpers for users and their credit balance."""

from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from videoclub.models.user import User


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_for_update(db: Session, user_id: int) -> Optional[User]:
    """Read the user row and hold a row lock until the transaction ends."""

    return (
        db.query(User)
        .filter(User.id == user_id)
        .populate_existing()
        .with_for_update()
        .first()
    )


def debit_credits(db: Session, user: User, amount: int) -> User:
    user.credits = user.credits - amount
    db.flush()
    return user


def count_users(db: Session) -> int:
    return db.query(User).count()


__all__ = ["get_user", "get_user_for_update", "debit_credits", "count_users"]
