"""Catalog curation and admin statistics."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from videoclub.core.clock import Clock, SystemClock, as_utc
from videoclub.core.config import settings
from videoclub.core.exceptions import (
    DurationBelowProgress,
    FilmAlreadyExists,
    FilmNotFound,
    StoreUnavailable,
)
from videoclub.models.film import Film
from videoclub.repository import (
    film_repository,
    rental_repository,
    review_repository,
    user_repository,
)
from videoclub.repository.ledger_store import LedgerStore
from videoclub.schemas.account import AdminStatsResponse
from videoclub.schemas.film import FilmCreate, FilmUpdate

logger = logging.getLogger(__name__)


class CatalogService:

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

    def list_films(self, *, include_unavailable: bool = False) -> List[Film]:
        return film_repository.list_films(self.db, available_only=not include_unavailable)

    def get_film_by_external_id(self, external_id: int) -> Film:
        film = film_repository.get_film_by_external_id(self.db, external_id)
        if film is None:
            raise FilmNotFound()
        return film

    def create_film(self, payload: FilmCreate) -> Film:
        if film_repository.get_film_by_external_id(self.db, payload.external_id) is not None:
            raise FilmAlreadyExists()

        film_data = payload.model_dump(exclude_unset=True)
        if film_data.get("price") is None:
            film_data["price"] = settings.DEFAULT_RENTAL_PRICE
        film_data.setdefault("is_available", payload.is_available)

        try:
            return film_repository.create_film(self.db, film_data)
        except IntegrityError as exc:
            self.db.rollback()
            raise FilmAlreadyExists() from exc
        except SQLAlchemyError as exc:  # pragma: no cover - defensive
            self.db.rollback()
            raise StoreUnavailable() from exc

    def update_film(self, external_id: int, payload: FilmUpdate) -> Film:
        """Apply an admin edit to a film.

        The film row is locked while a new duration is checked against the
        furthest progress recorded on its rentals, so it can never drop
        below what a renter has already watched.
        """

        film = self.get_film_by_external_id(external_id)
        update_data = {
            field: value
            for field, value in payload.model_dump(exclude_unset=True).items()
            if value is not None
        }

        if not update_data:
            return film

        film_id = film.id

        def _update(db: Session) -> Film:
            locked = film_repository.get_film_for_update(db, film_id)
            if locked is None:
                raise FilmNotFound()

            duration = update_data.get("duration")
            if duration is not None:
                watched = rental_repository.max_progress_for_film(db, film_id)
                if duration < watched:
                    raise DurationBelowProgress(duration, watched)

            return film_repository.update_film(db, locked, update_data)

        film = self.store.run_atomic(_update)
        logger.info("Film %s updated: %s", external_id, ", ".join(sorted(update_data)))
        return film

    def stats(self, now: Optional[datetime] = None) -> AdminStatsResponse:
        current_time = as_utc(now) if now is not None else self.clock.now()
        return AdminStatsResponse(
            users=user_repository.count_users(self.db),
            films=film_repository.count_films(self.db),
            available_films=film_repository.count_films(self.db, available_only=True),
            active_rentals=rental_repository.count_active_rentals(self.db, current_time),
            reviews=review_repository.count_reviews(self.db),
        )


__all__ = ["CatalogService"]
