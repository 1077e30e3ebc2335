"""Transactional access to credit balances and rental records."""

from __future__ import annotations

import logging
import time
from datetime import datetime
from typing import Callable, Optional, TypeVar

from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from videoclub.core.clock import as_utc
from videoclub.core.config import settings
from videoclub.core.exceptions import StoreUnavailable, UserNotFound, VideoclubError
from videoclub.models.rental import Rental
from videoclub.repository import rental_repository, user_repository

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LedgerStore:
    """Ledger operations over a SQLAlchemy session.

    Every mutation of a balance or a rental goes through ``run_atomic``. The
    callable receives the session with a transaction already open; rows it
    reads through the ``*_for_update`` repository helpers stay locked until
    the transaction commits or rolls back.
    """

    def __init__(
        self,
        db: Session,
        *,
        max_retries: Optional[int] = None,
        retry_backoff: Optional[float] = None,
    ) -> None:
        self.db = db
        self.max_retries = settings.LEDGER_MAX_RETRIES if max_retries is None else max_retries
        self.retry_backoff = (
            settings.LEDGER_RETRY_BACKOFF_SECONDS if retry_backoff is None else retry_backoff
        )

    def get_balance(self, user_id: int) -> int:
        user = user_repository.get_user(self.db, user_id)
        if user is None:
            raise UserNotFound()
        return int(user.credits)

    def get_active_rental(self, user_id: int, film_id: int, now: datetime) -> Optional[Rental]:
        return rental_repository.get_active_rental(self.db, user_id, film_id, as_utc(now))

    def run_atomic(self, fn: Callable[[Session], T]) -> T:
        attempts = 0
        # Start from a clean transaction so reads made earlier by the caller
        # cannot leak a stale snapshot into the atomic section.
        self._end_transaction()

        while True:
            attempts += 1
            try:
                result = fn(self.db)
                self.db.commit()
                return result
            except VideoclubError:
                self.db.rollback()
                raise
            except OperationalError as exc:
                self.db.rollback()
                if attempts > self.max_retries:
                    logger.exception("Ledger transaction failed after %s attempts", attempts)
                    raise StoreUnavailable() from exc
                logger.warning("Ledger transaction conflict (attempt %s): %s", attempts, exc)
                time.sleep(self.retry_backoff * attempts)
            except SQLAlchemyError as exc:
                self.db.rollback()
                logger.exception("Ledger transaction error: %s", exc)
                raise StoreUnavailable() from exc
            except Exception:
                self.db.rollback()
                raise

    def _end_transaction(self) -> None:
        if self.db.in_transaction():
            self.db.commit()


__all__ = ["LedgerStore"]
