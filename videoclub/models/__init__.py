"""SQLAlchemy models for the videoclub service."""
from videoclub.models.user import User
from videoclub.models.film import Film
from videoclub.models.rental import Rental
from videoclub.models.review import Review

__all__ = ["User", "Film", "Rental", "Review"]
