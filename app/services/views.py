"""View state for the weekly calendar and the producer dashboard.

These objects hold what a page shows (selected week, product cards, form
contents, loading and alert state) and apply service results to it. They
render nothing themselves.
"""
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Dict, List, Optional, Set

from pydantic import ValidationError

from app.logger import get_logger
from app.schemas.catalog import ProductCard
from app.schemas.location import LocationCreate, LocationUpdate
from app.schemas.product import ProductCreate, ProductUpdate
from app.services.errors import MarketplaceError
from app.services.week import WeekWindow, week_window

log = get_logger("views")

LOAD_PRODUCTS_ERROR = "Error loading products"


class WeekCalendarView:
    def __init__(self, today: date, week_start: int = 0):
        self.week_start = week_start
        self.selected_date = today
        self.products: List[Any] = []
        self.favorites: Set[int] = set()
        self.loading = False
        self.alert: Optional[str] = None
        self._seq = 0

    @property
    def week(self) -> WeekWindow:
        return week_window(self.selected_date, self.week_start)

    @property
    def seq(self) -> int:
        return self._seq

    def week_days(self) -> List[date]:
        return self.week.days()

    def select_date(self, day: date) -> bool:
        """Select ``day``; returns True when the displayed week changed."""
        changed = day not in self.week
        self.selected_date = day
        return changed

    def next_week(self):
        self.selected_date += timedelta(weeks=1)

    def previous_week(self):
        self.selected_date -= timedelta(weeks=1)

    def begin_load(self) -> int:
        self._seq += 1
        self.loading = True
        return self._seq

    def is_current(self, token: int) -> bool:
        return token == self._seq

    def complete_load(self, token: int, products: List[Any]) -> bool:
        if not self.is_current(token):
            log.debug("Discarding stale product response %s (current %s)", token, self._seq)
            return False
        self.products = list(products)
        self.loading = False
        self.alert = None
        return True

    def fail_load(self, token: int, message: str = LOAD_PRODUCTS_ERROR) -> bool:
        # The previous product list stays on screen
        if not self.is_current(token):
            return False
        self.loading = False
        self.alert = message
        return True

    def load(self, catalog, match: Optional[str] = None):
        token = self.begin_load()
        try:
            products = catalog.fetch_week(self.selected_date, match=match)
        except MarketplaceError as e:
            self.fail_load(token, e.detail)
            return
        self.complete_load(token, products)

    def set_favorites(self, product_ids):
        self.favorites = set(product_ids)

    def cards(self) -> List[ProductCard]:
        return [
            ProductCard.model_validate(product).model_copy(
                update={"is_favorite": product.id in self.favorites}
            )
            for product in self.products
        ]


@dataclass
class FormState:
    values: Dict[str, Any]
    editing_id: Optional[int] = None
    errors: List[str] = field(default_factory=list)

    @property
    def is_edit(self) -> bool:
        return self.editing_id is not None


EMPTY_PRODUCT = {"name": "", "description": "", "availability_start": "", "availability_end": ""}
EMPTY_LOCATION = {"name": "", "address": ""}


class ProducerDashboardView:
    def __init__(self):
        self.products: List[Any] = []
        self.locations: List[Any] = []
        self.loading = False
        self.alert: Optional[str] = None
        self.product_form: Optional[FormState] = None
        self.location_form: Optional[FormState] = None
        self.pending_delete: Optional[tuple] = None

    def refresh(self, manager):
        self.loading = True
        try:
            data = manager.dashboard()
        except MarketplaceError as e:
            self.alert = e.detail
            return
        finally:
            self.loading = False
        self.products = data["products"]
        self.locations = data["locations"]
        self.alert = None

    def open_product_form(self, product=None):
        if product is None:
            self.product_form = FormState(values=dict(EMPTY_PRODUCT))
            return
        self.product_form = FormState(
            values={name: getattr(product, name) for name in EMPTY_PRODUCT},
            editing_id=product.id,
        )

    def open_location_form(self, location=None):
        if location is None:
            self.location_form = FormState(values=dict(EMPTY_LOCATION))
            return
        self.location_form = FormState(
            values={name: getattr(location, name) for name in EMPTY_LOCATION},
            editing_id=location.id,
        )

    def close_forms(self):
        self.product_form = None
        self.location_form = None

    def submit_product(self, manager):
        form = self.product_form
        if form is None:
            return None
        try:
            if form.is_edit:
                product = manager.update_product(form.editing_id, ProductUpdate(**form.values))
            else:
                product = manager.create_product(ProductCreate(**form.values))
        except (ValidationError, MarketplaceError) as e:
            self._form_failed(form, e)
            return None
        self.product_form = None
        self.refresh(manager)
        return product

    def submit_location(self, manager):
        form = self.location_form
        if form is None:
            return None
        try:
            if form.is_edit:
                location = manager.update_location(form.editing_id, LocationUpdate(**form.values))
            else:
                location = manager.create_location(LocationCreate(**form.values))
        except (ValidationError, MarketplaceError) as e:
            self._form_failed(form, e)
            return None
        self.location_form = None
        self.refresh(manager)
        return location

    def request_delete(self, kind: str, record_id: int):
        if kind not in ("product", "location"):
            raise ValueError(f"Unknown record kind: {kind}")
        self.pending_delete = (kind, record_id)

    def cancel_delete(self):
        self.pending_delete = None

    def confirm_delete(self, manager) -> bool:
        if self.pending_delete is None:
            return False
        kind, record_id = self.pending_delete
        try:
            if kind == "product":
                manager.delete_product(record_id, confirm=True)
            else:
                manager.delete_location(record_id, confirm=True)
        except MarketplaceError as e:
            self.alert = e.detail
            return False
        finally:
            self.pending_delete = None
        self.alert = None
        self.refresh(manager)
        return True

    def _form_failed(self, form: FormState, error: Exception):
        # Values stay in the form so the producer can correct and resubmit
        if isinstance(error, ValidationError):
            form.errors = [err["msg"] for err in error.errors()]
        else:
            form.errors = [error.detail]
        self.alert = form.errors[0] if form.errors else None


# Pages a session lands on
HOME = "home"
DASHBOARD = "dashboard"
PRODUCTS = "products"
AWAITING_ROLE = "awaiting_role"


def resolve_landing(context) -> str:
    """Pick the page for the current session.

    Producers go to their dashboard and consumers to the weekly products.
    A signed-in account whose role could not be resolved stays on
    ``awaiting_role`` instead of being sent to a role-gated page.
    """
    if context is None:
        return HOME
    if context.role == "producer":
        return DASHBOARD
    if context.role == "consumer":
        return PRODUCTS
    return AWAITING_ROLE
