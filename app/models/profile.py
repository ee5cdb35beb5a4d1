from sqlalchemy import Column, String, Enum, Integer, ForeignKey
from sqlalchemy.orm import relationship
from app.db.session import Base
from app.models.base import TimestampMixin

ROLES = ("producer", "consumer")

class Profile(TimestampMixin, Base):
    """Public side of an account; shares its id with the auth identity."""
    __tablename__ = "profiles"

    id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    role = Column(Enum(*ROLES, name="user_roles"), nullable=False)
    full_name = Column(String(100))

    user = relationship("User", back_populates="profile")
    locations = relationship("Location", back_populates="producer", order_by="Location.id")
    products = relationship("Product", back_populates="producer")
