"""Entry point for the Videoclub FastAPI application."""

from fastapi import FastAPI

from videoclub.api.v1 import (
    account_routes,
    admin_routes,
    film_routes,
    rental_routes,
    review_routes,
)
from videoclub.core.config import settings
from videoclub.core.database import Base, engine
from videoclub.core.error_handlers import register_exception_handlers
from videoclub import models  # noqa: F401

# Ensure database tables exist when the application starts (for development purposes).
Base.metadata.create_all(bind=engine)

app = FastAPI(title=settings.PROJECT_NAME)

register_exception_handlers(app)

API_PREFIX = "/api/videoclub/v1"

for router in (
    film_routes.router,
    rental_routes.router,
    review_routes.router,
    account_routes.router,
    admin_routes.router,
):
    app.include_router(router, prefix=API_PREFIX)


@app.get("/health", tags=["system"])
def health_check():
    return {"status": "healthy", "service": "videoclub"}


__all__ = ["app"]
