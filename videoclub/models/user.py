"""SQLAlchemy model mapping to the users table owned by the auth service."""

from sqlalchemy import BigInteger, Boolean, CheckConstraint, Column, DateTime, Integer, String
from sqlalchemy.sql import func

from videoclub.core.database import Base


class User(Base):
    """A storefront member and their credit balance."""

    __tablename__ = "users"
    __table_args__ = (CheckConstraint("credits >= 0", name="ck_users_credits_non_negative"),)

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, index=True)
    username = Column(String(100), nullable=False, unique=True)
    credits = Column(Integer, nullable=False, default=0)
    is_admin = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<User(id={self.id}, username={self.username}, credits={self.credits})>"
