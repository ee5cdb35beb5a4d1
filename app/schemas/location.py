from typing import Optional
from pydantic import BaseModel
from app.schemas.base import BaseSchema, TimestampSchema

class LocationBase(BaseSchema):
    name: str
    address: str

class LocationCreate(LocationBase):
    pass

class LocationUpdate(BaseModel):
    name: Optional[str] = None
    address: Optional[str] = None

class Location(TimestampSchema, LocationBase):
    id: int
    producer_id: int

class LocationSummary(BaseSchema):
    id: int
    name: str
    address: str
