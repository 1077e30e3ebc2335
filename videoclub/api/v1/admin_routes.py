"""Admin routes for catalog curation."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from videoclub.core.clock import Clock
from videoclub.core.security import Principal, require_admin
from videoclub.dependencies import get_clock, get_db
from videoclub.schemas.account import AdminStatsResponse
from videoclub.schemas.film import FilmCreate, FilmResponse, FilmUpdate
from videoclub.services.catalog_service import CatalogService

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/films", response_model=List[FilmResponse])
def list_all_films(
    db: Session = Depends(get_db),
    _: Principal = Depends(require_admin),
) -> List[FilmResponse]:
    """Retrieve every film in the catalog, available or not."""

    service = CatalogService(db)
    return service.list_films(include_unavailable=True)


@router.post("/films", response_model=FilmResponse, status_code=status.HTTP_201_CREATED)
def create_film(
    payload: FilmCreate,
    db: Session = Depends(get_db),
    _: Principal = Depends(require_admin),
) -> FilmResponse:
    service = CatalogService(db)
    return service.create_film(payload)


@router.patch("/films/{external_id}", response_model=FilmResponse)
def update_film(
    external_id: int,
    payload: FilmUpdate,
    db: Session = Depends(get_db),
    _: Principal = Depends(require_admin),
) -> FilmResponse:
    """Update price, duration, availability or metadata of a film."""

    service = CatalogService(db)
    return service.update_film(external_id, payload)


@router.get("/stats", response_model=AdminStatsResponse)
def get_stats(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    _: Principal = Depends(require_admin),
) -> AdminStatsResponse:
    service = CatalogService(db, clock)
    return service.stats()
