from sqlalchemy import Column, Integer, TIMESTAMP
from sqlalchemy.sql import func
from app.db.session import Base

class TimestampMixin:
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

class BaseModel(TimestampMixin, Base):
    """Surrogate integer key plus timestamps."""
    __abstract__ = True

    id = Column(Integer, primary_key=True, index=True)
