"""Domain services for the videoclub service."""

from videoclub.services.account_service import AccountService
from videoclub.services.catalog_service import CatalogService
from videoclub.services.eligibility_service import EligibilityService
from videoclub.services.progress_service import ProgressService
from videoclub.services.rental_service import RentalService
from videoclub.services.review_service import ReviewService

__all__ = [
    "AccountService",
    "CatalogService",
    "EligibilityService",
    "ProgressService",
    "RentalService",
    "ReviewService",
]
