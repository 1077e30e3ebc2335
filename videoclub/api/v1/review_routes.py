"""API routes for film reviews."""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from videoclub.core.clock import Clock
from videoclub.core.security import Principal, get_current_principal
from videoclub.dependencies import get_clock, get_db
from videoclub.schemas.review import ReviewEligibility, ReviewResponse, ReviewSubmit
from videoclub.services.catalog_service import CatalogService
from videoclub.services.eligibility_service import EligibilityService
from videoclub.services.review_service import ReviewService

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.get("/{external_id}", response_model=List[ReviewResponse])
def list_film_reviews(external_id: int, db: Session = Depends(get_db)) -> List[ReviewResponse]:
    """Retrieve the reviews of a film, newest first."""

    film = CatalogService(db).get_film_by_external_id(external_id)
    return ReviewService(db).list_film_reviews(film.id)


@router.get("/{external_id}/eligibility", response_model=ReviewEligibility)
def get_review_eligibility(
    external_id: int,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    principal: Principal = Depends(get_current_principal),
) -> ReviewEligibility:
    """Tell the caller whether they may review the film, and why not."""

    film = CatalogService(db).get_film_by_external_id(external_id)
    return EligibilityService(db, clock).can_review(principal.user_id, film.id)


@router.put("/{external_id}", response_model=ReviewResponse)
def submit_review(
    external_id: int,
    payload: ReviewSubmit,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    principal: Principal = Depends(get_current_principal),
) -> ReviewResponse:
    """Create the caller's review, or replace the one they already wrote."""

    film = CatalogService(db).get_film_by_external_id(external_id)
    service = ReviewService(db, clock)
    return service.submit_review(principal.user_id, film.id, payload)
