"""API routes for the authenticated member's account."""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from videoclub.core.clock import Clock
from videoclub.core.security import Principal, get_current_principal
from videoclub.dependencies import get_clock, get_db
from videoclub.schemas.account import AccountResponse
from videoclub.schemas.rental import RentalResponse
from videoclub.schemas.review import ReviewResponse
from videoclub.services.account_service import AccountService
from videoclub.services.rental_service import RentalService
from videoclub.services.review_service import ReviewService

router = APIRouter(prefix="/me", tags=["account"])


@router.get("", response_model=AccountResponse)
def get_account(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> AccountResponse:
    """Return the caller's credit balance."""

    return AccountService(db).get_account(principal.user_id)


@router.get("/rentals", response_model=List[RentalResponse])
def list_active_rentals(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    principal: Principal = Depends(get_current_principal),
) -> List[RentalResponse]:
    service = RentalService(db, clock)
    return service.list_active_rentals(principal.user_id)


@router.get("/rentals/history", response_model=List[RentalResponse])
def list_rental_history(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    principal: Principal = Depends(get_current_principal),
) -> List[RentalResponse]:
    """Every rental the caller ever made, expired ones included."""

    service = RentalService(db, clock)
    return service.list_rental_history(principal.user_id)


@router.get("/reviews", response_model=List[ReviewResponse])
def list_my_reviews(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> List[ReviewResponse]:
    return ReviewService(db).list_user_reviews(principal.user_id)
