"""Pydantic schemas for catalog films."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class FilmBase(BaseModel):
    external_id: int = Field(..., gt=0, description="Identifier at the metadata provider")
    title: str = Field(..., min_length=1, max_length=255)
    synopsis: Optional[str] = None
    release_year: Optional[int] = Field(None, ge=1870, le=2100)
    duration: int = Field(..., gt=0, description="Playable duration in seconds")


class FilmCreate(FilmBase):
    """Schema used by admins when adding a film to the catalog."""

    price: Optional[int] = Field(None, ge=0, description="Rental price in credits")
    is_available: bool = False


class FilmUpdate(BaseModel):
    """Schema used by admins when curating an existing film."""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    synopsis: Optional[str] = None
    release_year: Optional[int] = Field(None, ge=1870, le=2100)
    duration: Optional[int] = Field(None, gt=0)
    price: Optional[int] = Field(None, ge=0)
    is_available: Optional[bool] = None


class FilmResponse(FilmBase):
    id: int
    price: int
    is_available: bool
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class RatingSummary(BaseModel):
    average: Optional[float] = None
    count: int = 0


class FilmDetailResponse(FilmResponse):
    ratings: RatingSummary
