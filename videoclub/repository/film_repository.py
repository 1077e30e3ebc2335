"""Data access helpers for catalog films."""

from __future__ import annotations

from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from videoclub.models.film import Film


def list_films(db: Session, *, available_only: bool = False) -> List[Film]:
    query = db.query(Film)
    if available_only:
        query = query.filter(Film.is_available.is_(True))
    return query.order_by(Film.title).all()


def get_film(db: Session, film_id: int) -> Optional[Film]:
    return db.query(Film).filter(Film.id == film_id).first()


def get_film_by_external_id(db: Session, external_id: int) -> Optional[Film]:
    return db.query(Film).filter(Film.external_id == external_id).first()


def create_film(db: Session, film_data: Dict[str, object]) -> Film:
    film = Film(**film_data)
    db.add(film)
    db.commit()
    db.refresh(film)
    return film


def get_film_for_update(db: Session, film_id: int, *, shared: bool = False) -> Optional[Film]:
    """Read the film row and lock it until the transaction ends.

    A shared lock only blocks writers, so concurrent progress updates on the
    same film do not wait on each other.
    """

    return (
        db.query(Film)
        .filter(Film.id == film_id)
        .populate_existing()
        .with_for_update(read=shared)
        .first()
    )


def update_film(db: Session, film: Film, update_data: Dict[str, object]) -> Film:
    for field, value in update_data.items():
        setattr(film, field, value)
    db.flush()
    return film


def count_films(db: Session, *, available_only: bool = False) -> int:
    query = db.query(Film)
    if available_only:
        query = query.filter(Film.is_available.is_(True))
    return query.count()


__all__ = [
    "list_films",
    "get_film",
    "get_film_by_external_id",
    "create_film",
    "get_film_for_update",
    "update_film",
    "count_films",
]
