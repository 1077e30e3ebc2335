"""Rental engine: converts credits into time-boxed rentals."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy.orm import Session

from videoclub.core.clock import Clock, SystemClock, as_utc
from videoclub.core.config import settings
from videoclub.core.exceptions import (
    AlreadyRented,
    FilmNotFound,
    FilmUnavailable,
    InsufficientCredits,
    UserNotFound,
)
from videoclub.models.film import Film
from videoclub.models.rental import Rental
from videoclub.repository import film_repository, rental_repository, user_repository
from videoclub.repository.ledger_store import LedgerStore
from videoclub.schemas.rental import FilmRentalStatus, RentalResponse

logger = logging.getLogger(__name__)


class RentalService:

    def __init__(
        self,
        db: Session,
        clock: Optional[Clock] = None,
        *,
        store: Optional[LedgerStore] = None,
        rental_window: Optional[timedelta] = None,
    ):
        self.db = db
        self.clock = clock or SystemClock()
        self.store = store or LedgerStore(db)
        self.rental_window = rental_window or timedelta(hours=settings.RENTAL_WINDOW_HOURS)

    def _now(self, now: Optional[datetime]) -> datetime:
        return as_utc(now) if now is not None else self.clock.now()

    def _get_film(self, film_id: int) -> Film:
        film = film_repository.get_film(self.db, film_id)
        if film is None:
            raise FilmNotFound()
        return film

    def get_film_by_external_id(self, external_id: int) -> Film:
        film = film_repository.get_film_by_external_id(self.db, external_id)
        if film is None:
            raise FilmNotFound()
        return film

    def rent_film(self, user_id: int, film_id: int, now: Optional[datetime] = None) -> Rental:
        """Debit the film price and open a rental, as one transaction.

        The user row is locked before the balance and the active-rental state
        are read, so concurrent calls for the same user run one after the
        other and can never spend the same credits twice.
        """

        current_time = self._now(now)
        expires_at = current_time + self.rental_window

        def _rent(db: Session) -> Rental:
            user = user_repository.get_user_for_update(db, user_id)
            if user is None:
                raise UserNotFound()

            film = film_repository.get_film(db, film_id)
            if film is None:
                raise FilmNotFound()
            if not film.is_available:
                raise FilmUnavailable()

            if rental_repository.get_active_rental(db, user_id, film_id, current_time) is not None:
                raise AlreadyRented()

            price = int(film.price)
            if user.credits < price:
                raise InsufficientCredits(required=price, available=int(user.credits))

            user_repository.debit_credits(db, user, price)
            return rental_repository.create_rental(
                db,
                {
                    "user_id": user_id,
                    "film_id": film_id,
                    "credits_spent": price,
                    "created_at": current_time,
                    "expires_at": expires_at,
                    "progress": 0.0,
                },
            )

        rental = self.store.run_atomic(_rent)
        logger.info(
            "User %s rented film %s until %s (rental %s)",
            user_id,
            film_id,
            expires_at.isoformat(),
            rental.id,
        )
        return rental

    def get_active_rental(
        self, user_id: int, film_id: int, now: Optional[datetime] = None
    ) -> Optional[Rental]:
        return self.store.get_active_rental(user_id, film_id, self._now(now))

    def list_active_rentals(
        self, user_id: int, now: Optional[datetime] = None
    ) -> List[RentalResponse]:
        current_time = self._now(now)
        rentals = rental_repository.list_rentals(self.db, user_id, active_at=current_time)
        return [RentalResponse.from_rental(rental, current_time) for rental in rentals]

    def list_rental_history(
        self, user_id: int, now: Optional[datetime] = None
    ) -> List[RentalResponse]:
        current_time = self._now(now)
        rentals = rental_repository.list_rentals(self.db, user_id)
        return [RentalResponse.from_rental(rental, current_time) for rental in rentals]

    def get_film_rental_status(
        self, user_id: int, film_id: int, now: Optional[datetime] = None
    ) -> FilmRentalStatus:
        current_time = self._now(now)
        film = self._get_film(film_id)
        rental = self.store.get_active_rental(user_id, film.id, current_time)

        return FilmRentalStatus(
            film_id=film.id,
            external_id=film.external_id,
            rented=rental is not None,
            rental=RentalResponse.from_rental(rental, current_time) if rental else None,
        )


__all__ = ["RentalService"]
