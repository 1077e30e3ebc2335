from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from videoclub.models.review import Review


def get_review(db: Session, user_id: int, film_id: int) -> Optional[Review]:
    return (
        db.query(Review)
        .filter(Review.user_id == user_id)
        .filter(Review.film_id == film_id)
        .first()
    )


def list_reviews_by_film(db: Session, film_id: int) -> List[Review]:
    return (
        db.query(Review)
        .filter(Review.film_id == film_id)
        .order_by(Review.created_at.desc(), Review.id.desc())
        .all()
    )


def list_reviews_by_user(db: Session, user_id: int) -> List[Review]:
    return (
        db.query(Review)
        .filter(Review.user_id == user_id)
        .order_by(Review.created_at.desc(), Review.id.desc())
        .all()
    )


def create_review(db: Session, review_data: Dict[str, object]) -> Review:
    review = Review(**review_data)
    db.add(review)
    db.flush()
    return review


def save_review(db: Session, review: Review) -> Review:
    db.flush()
    return review


def rating_summary(db: Session, film_id: int) -> Tuple[Optional[float], int]:
    average, count = (
        db.query(func.avg(Review.rating), func.count(Review.id))
        .filter(Review.film_id == film_id)
        .one()
    )
    return (float(average) if average is not None else None, int(count or 0))


def count_reviews(db: Session) -> int:
    return db.query(Review).count()


__all__ = [
    "get_review",
    "list_reviews_by_film",
    "list_reviews_by_user",
    "create_review",
    "save_review",
    "rating_summary",
    "count_reviews",
]
