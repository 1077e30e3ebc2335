"""Pydantic schemas for rentals and watch progress."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, ConfigDict, Field

from videoclub.schemas.film import FilmResponse

if TYPE_CHECKING:
    from videoclub.models.rental import Rental


class RentalResponse(BaseModel):
    id: int
    user_id: int
    film_id: int
    credits_spent: int
    created_at: datetime
    expires_at: datetime
    progress: float
    is_active: bool
    time_remaining_minutes: int
    film: FilmResponse

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_rental(cls, rental: "Rental", now: datetime) -> "RentalResponse":
        """Build the response, deriving the time-dependent fields from ``now``."""

        return cls(
            id=rental.id,
            user_id=rental.user_id,
            film_id=rental.film_id,
            credits_spent=rental.credits_spent,
            created_at=rental.created_at_utc,
            expires_at=rental.expires_at_utc,
            progress=rental.progress,
            is_active=rental.is_active(now),
            time_remaining_minutes=rental.time_remaining_minutes(now),
            film=FilmResponse.model_validate(rental.film),
        )


class ProgressUpdate(BaseModel):
    """Playback position reported by the player, in seconds."""

    progress: float = Field(..., strict=True, ge=0, allow_inf_nan=False)


class ProgressResponse(BaseModel):
    rental_id: int
    progress: float
    duration: int


class FilmRentalStatus(BaseModel):
    film_id: int
    external_id: int
    rented: bool
    rental: Optional[RentalResponse] = None
