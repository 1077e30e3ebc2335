"""API routes for renting films and reporting watch progress."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from videoclub.core.clock import Clock
from videoclub.core.security import Principal, get_current_principal
from videoclub.dependencies import get_clock, get_db
from videoclub.schemas.rental import (
    FilmRentalStatus,
    ProgressResponse,
    ProgressUpdate,
    RentalResponse,
)
from videoclub.services.progress_service import ProgressService
from videoclub.services.rental_service import RentalService

router = APIRouter(prefix="/rentals", tags=["rentals"])


@router.post(
    "/{external_id}",
    response_model=RentalResponse,
    status_code=status.HTTP_201_CREATED,
)
def rent_film(
    external_id: int,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    principal: Principal = Depends(get_current_principal),
) -> RentalResponse:
    """Spend credits to rent a film for the rental window."""

    service = RentalService(db, clock)
    film = service.get_film_by_external_id(external_id)
    now = clock.now()
    rental = service.rent_film(principal.user_id, film.id, now)
    return RentalResponse.from_rental(rental, now)


@router.get("/{external_id}", response_model=FilmRentalStatus)
def get_rental_status(
    external_id: int,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    principal: Principal = Depends(get_current_principal),
) -> FilmRentalStatus:
    """Report whether the caller holds an active rental for the film."""

    service = RentalService(db, clock)
    film = service.get_film_by_external_id(external_id)
    return service.get_film_rental_status(principal.user_id, film.id)


@router.patch("/{external_id}/progress", response_model=ProgressResponse)
def update_progress(
    external_id: int,
    payload: ProgressUpdate,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    principal: Principal = Depends(get_current_principal),
) -> ProgressResponse:
    """Record the playback position reached on the caller's active rental."""

    film = RentalService(db, clock).get_film_by_external_id(external_id)
    rental = ProgressService(db, clock).update_progress(
        principal.user_id, film.id, payload.progress
    )
    return ProgressResponse(
        rental_id=rental.id,
        progress=rental.progress,
        duration=rental.film.duration,
    )
