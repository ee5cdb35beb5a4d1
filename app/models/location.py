from sqlalchemy import Column, String, Integer, ForeignKey
from sqlalchemy.orm import relationship
from app.models.base import BaseModel

class Location(BaseModel):
    __tablename__ = "locations"

    name = Column(String(100), nullable=False)
    address = Column(String(255), nullable=False)
    producer_id = Column(Integer, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)

    producer = relationship("Profile", back_populates="locations")
