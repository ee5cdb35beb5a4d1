from sqlalchemy import Column, String, Integer, Date, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from app.models.base import BaseModel

class Product(BaseModel):
    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("availability_start <= availability_end", name="ck_products_availability"),
    )
    
    name = Column(String(100), nullable=False)
    description = Column(String)
    availability_start = Column(Date, nullable=False, index=True)
    availability_end = Column(Date, nullable=False, index=True)
    producer_id = Column(Integer, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    
    producer = relationship("Profile", back_populates="products")
    favorites = relationship("Favorite", back_populates="product", passive_deletes=True)
