from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from videoclub.models.rental import Rental


def get_active_rental(
    db: Session,
    user_id: int,
    film_id: int,
    now: datetime,
    *,
    for_update: bool = False,
) -> Optional[Rental]:
    query = (
        db.query(Rental)
        .filter(Rental.user_id == user_id)
        .filter(Rental.film_id == film_id)
        .filter(Rental.expires_at >= now)
    )

    if for_update:
        query = query.populate_existing().with_for_update(of=Rental)

    return query.order_by(Rental.expires_at.desc()).first()


def list_rentals_for_film(db: Session, user_id: int, film_id: int) -> List[Rental]:
    return (
        db.query(Rental)
        .filter(Rental.user_id == user_id)
        .filter(Rental.film_id == film_id)
        .order_by(Rental.created_at.desc())
        .all()
    )


def has_rented(db: Session, user_id: int, film_id: int) -> bool:
    query = (
        db.query(Rental.id)
        .filter(Rental.user_id == user_id)
        .filter(Rental.film_id == film_id)
    )
    return query.first() is not None


def list_rentals(
    db: Session,
    user_id: int,
    *,
    active_at: Optional[datetime] = None,
) -> List[Rental]:
    query = db.query(Rental).filter(Rental.user_id == user_id)

    if active_at is not None:
        query = query.filter(Rental.expires_at >= active_at)

    return query.order_by(Rental.created_at.desc(), Rental.id.desc()).all()


def create_rental(db: Session, rental_data: Dict[str, object]) -> Rental:
    rental = Rental(**rental_data)
    db.add(rental)
    db.flush()
    return rental


def save_progress(db: Session, rental: Rental, progress: float) -> Rental:
    rental.progress = progress
    db.flush()
    return rental


def max_progress_for_film(db: Session, film_id: int) -> float:
    return float(
        db.query(func.max(Rental.progress)).filter(Rental.film_id == film_id).scalar() or 0
    )


def count_active_rentals(db: Session, now: datetime) -> int:
    return (
        db.query(func.count(Rental.id))
        .filter(Rental.expires_at >= now)
        .scalar()
        or 0
    )


__all__ = [
    "get_active_rental",
    "list_rentals_for_film",
    "has_rented",
    "list_rentals",
    "create_rental",
    "save_progress",
    "max_progress_for_film",
    "count_active_rentals",
]
