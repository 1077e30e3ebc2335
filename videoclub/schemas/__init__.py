"""Pydantic schemas for the videoclub service."""

from videoclub.schemas.account import AccountResponse, AdminStatsResponse
from videoclub.schemas.film import FilmCreate, FilmDetailResponse, FilmResponse, FilmUpdate, RatingSummary
from videoclub.schemas.rental import (
    FilmRentalStatus,
    ProgressUpdate,
    ProgressResponse,
    RentalResponse,
)
from videoclub.schemas.review import (
    EligibilityReason,
    ReviewEligibility,
    ReviewResponse,
    ReviewSubmit,
)

__all__ = [
    "AccountResponse",
    "AdminStatsResponse",
    "FilmCreate",
    "FilmDetailResponse",
    "FilmResponse",
    "FilmUpdate",
    "RatingSummary",
    "FilmRentalStatus",
    "ProgressUpdate",
    "ProgressResponse",
    "RentalResponse",
    "EligibilityReason",
    "ReviewEligibility",
    "ReviewResponse",
    "ReviewSubmit",
]
