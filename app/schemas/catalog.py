from datetime import date
from typing import List, Literal, Optional
from pydantic import BaseModel
from app.schemas.base import BaseSchema
from app.schemas.location import Location, LocationSummary
from app.schemas.product import Product

MatchMode = Literal["contained", "overlap"]

class Producer(BaseSchema):
    id: int
    full_name: Optional[str] = None
    locations: List[LocationSummary] = []

class ProductCard(BaseSchema):
    id: int
    name: str
    description: Optional[str] = None
    availability_start: date
    availability_end: date
    producer: Optional[Producer] = None
    is_favorite: bool = False

class Week(BaseModel):
    start: date
    end: date
    selected: date
    days: List[date]

class CatalogWeek(BaseModel):
    seq: Optional[int] = None
    match: MatchMode
    week: Week
    products: List[ProductCard]

class ProducerDashboard(BaseSchema):
    products: List[Product]
    locations: List[Location]

class FavoriteToggle(BaseModel):
    product_id: int
    is_favorite: bool

class FavoriteList(BaseModel):
    product_ids: List[int]
