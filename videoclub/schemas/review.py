from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class EligibilityReason(str, Enum):
    NEVER_RENTED = "never rented"
    KEEP_WATCHING = "keep watching"
    EXPIRED_UNWATCHED = "rental expired without sufficient viewing"
    ELIGIBLE = "eligible"


class ReviewEligibility(BaseModel):
    allowed: bool
    reason: EligibilityReason
    threshold_seconds: Optional[float] = None
    furthest_progress: Optional[float] = None


class ReviewSubmit(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    content: Optional[str] = Field(None, max_length=10000)


class ReviewResponse(BaseModel):
    id: int
    user_id: int
    film_id: int
    rating: int
    content: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
