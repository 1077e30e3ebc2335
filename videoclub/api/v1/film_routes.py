"""API routes for browsing the catalog."""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from videoclub.dependencies import get_db
from videoclub.schemas.film import FilmDetailResponse, FilmResponse
from videoclub.services.catalog_service import CatalogService
from videoclub.services.review_service import ReviewService

router = APIRouter(prefix="/films", tags=["films"])


@router.get("/", response_model=List[FilmResponse])
def list_films(db: Session = Depends(get_db)) -> List[FilmResponse]:
    """Retrieve the films currently available for rent."""

    service = CatalogService(db)
    return service.list_films()


@router.get("/{external_id}", response_model=FilmDetailResponse)
def get_film(external_id: int, db: Session = Depends(get_db)) -> FilmDetailResponse:
    """Retrieve a film by its metadata provider identifier, with its ratings."""

    film = CatalogService(db).get_film_by_external_id(external_id)
    ratings = ReviewService(db).rating_summary(film.id)
    return FilmDetailResponse(
        **FilmResponse.model_validate(film).model_dump(),
        ratings=ratings,
    )
