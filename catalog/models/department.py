from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Integer, String

from catalog.database.base import Base


def _utcnow():
    return datetime.now(timezone.utc)


class Department(Base):
    __tablename__ = "departments"

    # Assigned by the department migration, not by the store.
    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String, nullable=False, unique=True)
    description = Column(String, nullable=False, default="")
    is_active = Column(Boolean, nullable=False, default=True, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)


__all__ = ["Department"]
