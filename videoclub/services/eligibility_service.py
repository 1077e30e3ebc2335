"""Review eligibility derived from rental history and watch progress."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from videoclub.core.clock import Clock, SystemClock, as_utc
from videoclub.core.config import settings
from videoclub.core.exceptions import FilmNotFound
from videoclub.models.film import Film
from videoclub.models.rental import Rental
from videoclub.repository import film_repository, rental_repository
from videoclub.schemas.review import EligibilityReason, ReviewEligibility


def evaluate_eligibility(
    rentals: Iterable[Rental],
    duration: int,
    now: datetime,
    threshold_ratio: float,
) -> ReviewEligibility:
    """Decide whether a member may review a film.

    Pure function of the stored rentals and the current time. Rules, first
    match wins: never rented; still watching; expired short of the
    threshold; otherwise allowed.
    """

    rentals = list(rentals)
    threshold = float(duration) * threshold_ratio

    if not rentals:
        return ReviewEligibility(
            allowed=False,
            reason=EligibilityReason.NEVER_RENTED,
            threshold_seconds=threshold,
            furthest_progress=None,
        )

    furthest = max(float(rental.progress or 0.0) for rental in rentals)

    if furthest >= threshold:
        reason = EligibilityReason.ELIGIBLE
    elif any(rental.is_active(now) for rental in rentals):
        reason = EligibilityReason.KEEP_WATCHING
    else:
        reason = EligibilityReason.EXPIRED_UNWATCHED

    return ReviewEligibility(
        allowed=reason is EligibilityReason.ELIGIBLE,
        reason=reason,
        threshold_seconds=threshold,
        furthest_progress=furthest,
    )


class EligibilityService:
    def __init__(
        self,
        db: Session,
        clock: Optional[Clock] = None,
        *,
        threshold_ratio: Optional[float] = None,
    ):
        self.db = db
        self.clock = clock or SystemClock()
        self.threshold_ratio = (
            settings.REVIEW_THRESHOLD_RATIO if threshold_ratio is None else threshold_ratio
        )

    def can_review(
        self, user_id: int, film_id: int, now: Optional[datetime] = None
    ) -> ReviewEligibility:
        film = film_repository.get_film(self.db, film_id)
        if film is None:
            raise FilmNotFound()
        return self.evaluate(self.db, user_id, film, now)

    def evaluate(
        self,
        db: Session,
        user_id: int,
        film: Film,
        now: Optional[datetime] = None,
    ) -> ReviewEligibility:
        current_time = as_utc(now) if now is not None else self.clock.now()
        rentals = rental_repository.list_rentals_for_film(db, user_id, film.id)
        return evaluate_eligibility(rentals, film.duration, current_time, self.threshold_ratio)


__all__ = ["EligibilityService", "evaluate_eligibility"]
