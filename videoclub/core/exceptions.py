"""Domain errors raised by the rental, progress and review services."""

from __future__ import annotations

from typing import Optional

from fastapi import status


class VideoclubError(Exception):
    """Base class for errors the HTTP layer maps to a client response."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "videoclub_error"
    default_message: str = "Request could not be completed"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class UserNotFound(VideoclubError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "user_not_found"
    default_message = "User not found"


class FilmNotFound(VideoclubError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "film_not_found"
    default_message = "Film not found"


class FilmUnavailable(VideoclubError):
    status_code = status.HTTP_409_CONFLICT
    code = "film_unavailable"
    default_message = "Film is not available for rent"


class FilmAlreadyExists(VideoclubError):
    status_code = status.HTTP_409_CONFLICT
    code = "film_already_exists"
    default_message = "A film with this external id already exists"


class InsufficientCredits(VideoclubError):
    status_code = status.HTTP_402_PAYMENT_REQUIRED
    code = "insufficient_credits"
    default_message = "Insufficient credits"

    def __init__(self, required: int, available: int) -> None:
        self.required = required
        self.available = available
        super().__init__(
            f"Insufficient credits ({required} required, {available} available)"
        )


class AlreadyRented(VideoclubError):
    status_code = status.HTTP_409_CONFLICT
    code = "already_rented"
    default_message = "Film already has an active rental for this user"


class RentalNotFound(VideoclubError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "rental_not_found"
    default_message = "No rental found for this film"


class RentalExpired(VideoclubError):
    status_code = status.HTTP_410_GONE
    code = "rental_expired"
    default_message = "Rental has expired"


class InvalidProgress(VideoclubError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "invalid_progress"
    default_message = "Progress must be a finite, non-negative number of seconds"


class DurationBelowProgress(VideoclubError):
    status_code = status.HTTP_409_CONFLICT
    code = "duration_below_progress"
    default_message = "Duration is shorter than progress already recorded"

    def __init__(self, duration: int, progress: float) -> None:
        self.duration = duration
        self.progress = progress
        super().__init__(
            f"Duration {duration}s is shorter than progress already recorded ({progress:g}s)"
        )


class ReviewNotAllowed(VideoclubError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "review_not_allowed"
    default_message = "Review not allowed"

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Review not allowed: {reason}")


class InvalidReview(VideoclubError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "invalid_review"
    default_message = "Review content is invalid"


class StoreUnavailable(VideoclubError):
    """Raised when the ledger store keeps failing or conflicting."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "store_unavailable"
    default_message = "Ledger store unavailable, try again later"


__all__ = [
    "VideoclubError",
    "UserNotFound",
    "FilmNotFound",
    "FilmUnavailable",
    "FilmAlreadyExists",
    "InsufficientCredits",
    "AlreadyRented",
    "RentalNotFound",
    "RentalExpired",
    "InvalidProgress",
    "DurationBelowProgress",
    "ReviewNotAllowed",
    "InvalidReview",
    "StoreUnavailable",
]
