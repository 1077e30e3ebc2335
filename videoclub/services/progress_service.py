"""Watch progress tracking for active rentals."""

from __future__ import annotations

import math
from datetime import datetime
from decimal import Decimal
from numbers import Real
from typing import Optional

from sqlalchemy.orm import Session

from videoclub.core.clock import Clock, SystemClock, as_utc
from videoclub.core.exceptions import InvalidProgress, RentalExpired, RentalNotFound
from videoclub.models.rental import Rental
from videoclub.repository import film_repository, rental_repository
from videoclub.repository.ledger_store import LedgerStore


def validate_progress(value: object) -> float:
    """Return ``value`` as seconds, rejecting non-numeric, NaN, infinite or negative input."""

    # Decimal is not registered as a Real.
    if isinstance(value, bool) or not isinstance(value, (Real, Decimal)):
        raise InvalidProgress()
    try:
        seconds = float(value)
    except (ValueError, OverflowError) as exc:
        raise InvalidProgress() from exc
    if not math.isfinite(seconds) or seconds < 0:
        raise InvalidProgress()
    return seconds


class ProgressService:
    """Records the furthest playback position reached on a rental.

    Stored progress only moves forward: rewinding is accepted but never
    lowers the value the review gate reads.
    """

    def __init__(
        self,
        db: Session,
        clock: Optional[Clock] = None,
        *,
        store: Optional[LedgerStore] = None,
    ):
        self.db = db
        self.clock = clock or SystemClock()
        self.store = store or LedgerStore(db)

    def update_progress(
        self,
        user_id: int,
        film_id: int,
        new_progress: object,
        now: Optional[datetime] = None,
    ) -> Rental:
        seconds = validate_progress(new_progress)
        current_time = as_utc(now) if now is not None else self.clock.now()

        def _update(db: Session) -> Rental:
            rental = rental_repository.get_active_rental(
                db, user_id, film_id, current_time, for_update=True
            )
            if rental is None:
                if rental_repository.has_rented(db, user_id, film_id):
                    raise RentalExpired()
                raise RentalNotFound()

            # Shared lock on the film keeps its duration fixed until commit.
            film = film_repository.get_film_for_update(db, film_id, shared=True)
            clamped = min(seconds, float(film.duration))
            if clamped > rental.progress:
                rental_repository.save_progress(db, rental, clamped)
            return rental

        return self.store.run_atomic(_update)


__all__ = ["ProgressService", "validate_progress"]
