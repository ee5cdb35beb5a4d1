from contextlib import contextmanager
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.auth.session import SessionContext
from app.logger import get_logger
from app.models.favorite import Favorite
from app.models.location import Location
from app.models.product import Product
from app.schemas.location import LocationCreate, LocationUpdate
from app.schemas.product import ProductCreate, ProductUpdate
from app.services.errors import (
    ConfirmationRequired,
    DataUnavailable,
    InvalidAvailability,
    NotFoundError,
    PermissionDenied,
    SaveFailed,
)

log = get_logger("producer_catalog")


class ProducerCatalogManager:
    """Products and sale locations of the signed-in producer.

    Every query is filtered on the session's identity, so rows owned by
    another producer behave as if they did not exist.
    """

    def __init__(self, db: Session, context: SessionContext):
        if context is None or not context.is_producer:
            raise PermissionDenied("Producer access required")
        self.db = db
        self.producer_id = context.user_id

    @contextmanager
    def _guard(self, action: str, error_cls):
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            log.error("Error %s for producer %s: %s", action, self.producer_id, e)
            raise error_cls()

    # Products

    def list_products(self) -> List[Product]:
        with self._guard("loading products", DataUnavailable):
            return (
                self.db.query(Product)
                .filter(Product.producer_id == self.producer_id)
                .order_by(Product.created_at.desc(), Product.id.desc())
                .all()
            )

    def get_product(self, product_id: int) -> Product:
        with self._guard("loading product", DataUnavailable):
            product = self.db.query(Product).filter(
                Product.id == product_id,
                Product.producer_id == self.producer_id,
            ).first()
        if product is None:
            raise NotFoundError("Product not found")
        return product

    def create_product(self, data: ProductCreate) -> Product:
        _check_availability(data.availability_start, data.availability_end)
        product = Product(**data.model_dump(), producer_id=self.producer_id)
        with self._guard("adding product", SaveFailed):
            self.db.add(product)
            self.db.commit()
            self.db.refresh(product)
        log.info("Producer %s created product %s", self.producer_id, product.id)
        return product

    def update_product(self, product_id: int, data: ProductUpdate) -> Product:
        product = self.get_product(product_id)
        update_data = {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if value is not None or field == "description"
        }
        _check_availability(
            update_data.get("availability_start") or product.availability_start,
            update_data.get("availability_end") or product.availability_end,
        )
        with self._guard("updating product", SaveFailed):
            for field, value in update_data.items():
                setattr(product, field, value)
            self.db.add(product)
            self.db.commit()
            self.db.refresh(product)
        return product

    def delete_product(self, product_id: int, confirm: bool = False):
        product = self.get_product(product_id)
        if not confirm:
            raise ConfirmationRequired()
        with self._guard("deleting product", SaveFailed):
            removed = self.db.query(Favorite).filter(
                Favorite.product_id == product.id
            ).delete(synchronize_session=False)
            self.db.delete(product)
            self.db.commit()
        log.info(
            "Producer %s deleted product %s (%d favorite(s) removed)",
            self.producer_id, product_id, removed,
        )

    # Locations

    def list_locations(self) -> List[Location]:
        with self._guard("loading locations", DataUnavailable):
            return (
                self.db.query(Location)
                .filter(Location.producer_id == self.producer_id)
                .order_by(Location.created_at.desc(), Location.id.desc())
                .all()
            )

    def get_location(self, location_id: int) -> Location:
        with self._guard("loading location", DataUnavailable):
            location = self.db.query(Location).filter(
                Location.id == location_id,
                Location.producer_id == self.producer_id,
            ).first()
        if location is None:
            raise NotFoundError("Location not found")
        return location

    def create_location(self, data: LocationCreate) -> Location:
        location = Location(**data.model_dump(), producer_id=self.producer_id)
        with self._guard("adding location", SaveFailed):
            self.db.add(location)
            self.db.commit()
            self.db.refresh(location)
        return location

    def update_location(self, location_id: int, data: LocationUpdate) -> Location:
        location = self.get_location(location_id)
        with self._guard("updating location", SaveFailed):
            for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
                setattr(location, field, value)
            self.db.add(location)
            self.db.commit()
            self.db.refresh(location)
        return location

    def delete_location(self, location_id: int, confirm: bool = False):
        location = self.get_location(location_id)
        if not confirm:
            raise ConfirmationRequired()
        with self._guard("deleting location", SaveFailed):
            self.db.delete(location)
            self.db.commit()

    def dashboard(self) -> dict:
        return {
            "products": self.list_products(),
            "locations": self.list_locations(),
        }


def _check_availability(start, end):
    if start > end:
        raise InvalidAvailability()
