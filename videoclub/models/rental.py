from datetime import datetime
from typing import Optional

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
)
from sqlalchemy.orm import relationship

from videoclub.core.clock import as_utc
from videoclub.core.database import Base


class Rental(Base):
    """Time-boxed access to a film bought with credits.

    Rentals are never deleted. Whether a rental is active is derived from
    ``expires_at`` and the current time; only ``progress`` changes after
    creation.
    """

    __tablename__ = "rentals"
    __table_args__ = (
        CheckConstraint("progress >= 0", name="ck_rentals_progress_non_negative"),
        CheckConstraint("credits_spent >= 0", name="ck_rentals_credits_spent_non_negative"),
        Index("ix_rentals_user_film", "user_id", "film_id"),
    )

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, index=True)
    user_id = Column(BigInteger, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    film_id = Column(BigInteger, ForeignKey("films.id", ondelete="CASCADE"), nullable=False)
    credits_spent = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    progress = Column(Float, nullable=False, default=0.0)

    film = relationship("Film", back_populates="rentals", lazy="joined", innerjoin=True)

    def is_active(self, now: datetime) -> bool:
        return as_utc(now) <= as_utc(self.expires_at)

    def is_expired(self, now: datetime) -> bool:
        return not self.is_active(now)

    def time_remaining_minutes(self, now: datetime) -> int:
        remaining = as_utc(self.expires_at) - as_utc(now)
        return max(0, int(remaining.total_seconds() // 60))

    @property
    def created_at_utc(self) -> Optional[datetime]:
        return as_utc(self.created_at)

    @property
    def expires_at_utc(self) -> Optional[datetime]:
        return as_utc(self.expires_at)

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return (
            f"<Rental(id={self.id}, user_id={self.user_id}, film_id={self.film_id}, "
            f"expires_at={self.expires_at}, progress={self.progress})>"
        )
