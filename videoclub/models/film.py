from sqlalchemy import BigInteger, Boolean, CheckConstraint, Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from videoclub.core.database import Base


class Film(Base):
    """Catalog entry keyed by the external metadata provider identifier."""

    __tablename__ = "films"
    __table_args__ = (
        CheckConstraint("duration > 0", name="ck_films_duration_positive"),
        CheckConstraint("price >= 0", name="ck_films_price_non_negative"),
    )

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, index=True)
    external_id = Column(BigInteger, nullable=False, unique=True, index=True)
    title = Column(String(255), nullable=False)
    synopsis = Column(Text, nullable=True)
    release_year = Column(Integer, nullable=True)
    duration = Column(Integer, nullable=False)
    price = Column(Integer, nullable=False)
    is_available = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    rentals = relationship("Rental", back_populates="film")

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<Film(id={self.id}, external_id={self.external_id}, title={self.title})>"
