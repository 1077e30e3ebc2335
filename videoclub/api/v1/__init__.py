"""Version 1 routers for the videoclub service."""

from videoclub.api.v1 import (
    account_routes,
    admin_routes,
    film_routes,
    rental_routes,
    review_routes,
)

__all__ = [
    "account_routes",
    "admin_routes",
    "film_routes",
    "rental_routes",
    "review_routes",
]
