from datetime import date
from typing import Optional
from pydantic import BaseModel, model_validator
from app.schemas.base import BaseSchema, TimestampSchema

class ProductBase(BaseSchema):
    name: str
    description: Optional[str] = None
    availability_start: date
    availability_end: date

class ProductCreate(ProductBase):
    @model_validator(mode="after")
    def check_availability(self):
        if self.availability_start > self.availability_end:
            raise ValueError("availability_start must be on or before availability_end")
        return self

class ProductUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    availability_start: Optional[date] = None
    availability_end: Optional[date] = None

class Product(TimestampSchema, ProductBase):
    id: int
    producer_id: int
