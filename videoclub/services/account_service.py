from __future__ import annotations

from sqlalchemy.orm import Session

from videoclub.core.exceptions import UserNotFound
from videoclub.models.user import User
from videoclub.repository import user_repository


class AccountService:
    def __init__(self, db: Session):
        self.db = db

    def get_account(self, user_id: int) -> User:
        user = user_repository.get_user(self.db, user_id)
        if user is None:
            raise UserNotFound()
        return user


__all__ = ["AccountService"]
