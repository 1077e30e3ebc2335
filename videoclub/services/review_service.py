"""Reviews gated by watch progress; one review per member and film."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from videoclub.core.clock import Clock, SystemClock, as_utc
from videoclub.core.config import settings
from videoclub.core.exceptions import FilmNotFound, InvalidReview, ReviewNotAllowed, UserNotFound
from videoclub.models.review import Review
from videoclub.repository import film_repository, review_repository, user_repository
from videoclub.repository.ledger_store import LedgerStore
from videoclub.schemas.film import RatingSummary
from videoclub.schemas.review import ReviewSubmit
from videoclub.services.eligibility_service import EligibilityService

logger = logging.getLogger(__name__)


class ReviewService:

    def __init__(
        self,
        db: Session,
        clock: Optional[Clock] = None,
        *,
        store: Optional[LedgerStore] = None,
        eligibility: Optional[EligibilityService] = None,
        min_length: Optional[int] = None,
    ):
        self.db = db
        self.clock = clock or SystemClock()
        self.store = store or LedgerStore(db)
        self.eligibility = eligibility or EligibilityService(db, self.clock)
        self.min_length = settings.MIN_REVIEW_LENGTH if min_length is None else min_length

    def submit_review(
        self,
        user_id: int,
        film_id: int,
        payload: ReviewSubmit,
        now: Optional[datetime] = None,
    ) -> Review:
        """Create the member's review of a film, or edit it if one exists."""

        content = (payload.content or "").strip() or None
        if self.min_length and len(content or "") < self.min_length:
            raise InvalidReview(f"Review must be at least {self.min_length} characters long")

        current_time = as_utc(now) if now is not None else self.clock.now()

        def _submit(db: Session) -> Review:
            if user_repository.get_user_for_update(db, user_id) is None:
                raise UserNotFound()

            film = film_repository.get_film(db, film_id)
            if film is None:
                raise FilmNotFound()

            decision = self.eligibility.evaluate(db, user_id, film, current_time)
            if not decision.allowed:
                raise ReviewNotAllowed(decision.reason.value)

            review = review_repository.get_review(db, user_id, film_id)
            if review is None:
                return review_repository.create_review(
                    db,
                    {
                        "user_id": user_id,
                        "film_id": film_id,
                        "rating": payload.rating,
                        "content": content,
                        "created_at": current_time,
                    },
                )

            review.rating = payload.rating
            review.content = content
            review.updated_at = current_time
            return review_repository.save_review(db, review)

        review = self.store.run_atomic(_submit)
        logger.info("User %s reviewed film %s (review %s)", user_id, film_id, review.id)
        return review

    def list_film_reviews(self, film_id: int) -> List[Review]:
        return review_repository.list_reviews_by_film(self.db, film_id)

    def list_user_reviews(self, user_id: int) -> List[Review]:
        return review_repository.list_reviews_by_user(self.db, user_id)

    def get_user_review(self, user_id: int, film_id: int) -> Optional[Review]:
        return review_repository.get_review(self.db, user_id, film_id)

    def rating_summary(self, film_id: int) -> RatingSummary:
        average, count = review_repository.rating_summary(self.db, film_id)
        if average is not None:
            average = round(average, 1)
        return RatingSummary(average=average, count=count)


__all__ = ["ReviewService"]
