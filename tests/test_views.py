from datetime import date

import pytest
from sqlalchemy.exc import SQLAlchemyError

from app.auth.session import SessionContext
from app.services.catalog import CatalogQueryService
from app.services.producer_catalog import ProducerCatalogManager
from app.services.views import ProducerDashboardView, WeekCalendarView, resolve_landing

from helpers import add_product


class _Stub:
    def __init__(self, id):
        self.id = id


def test_stale_response_is_discarded():
    view = WeekCalendarView(date(2024, 6, 3))
    first = view.begin_load()
    view.next_week()
    second = view.begin_load()

    assert view.complete_load(second, [_Stub(2)]) is True
    assert view.complete_load(first, [_Stub(1)]) is False
    assert [p.id for p in view.products] == [2]
    assert view.loading is False


def test_failed_load_keeps_previous_products():
    view = WeekCalendarView(date(2024, 6, 3))
    view.complete_load(view.begin_load(), [_Stub(1)])

    assert view.fail_load(view.begin_load()) is True
    assert [p.id for p in view.products] == [1]
    assert view.alert == "Error loading products"


def test_stale_failure_is_ignored():
    view = WeekCalendarView(date(2024, 6, 3))
    old = view.begin_load()
    view.complete_load(view.begin_load(), [_Stub(1)])

    assert view.fail_load(old) is False
    assert view.alert is None


def test_select_date_reports_week_change():
    view = WeekCalendarView(date(2024, 6, 3), week_start=0)
    assert view.select_date(date(2024, 6, 9)) is False
    assert view.select_date(date(2024, 6, 10)) is True
    assert view.week_days()[0] == date(2024, 6, 10)

    view.previous_week()
    assert view.week.start == date(2024, 6, 3)


def test_cards_carry_favorite_flags(db, producer):
    liked = add_product(db, producer.user_id, name="Cherries")
    other = add_product(db, producer.user_id, name="Peas")
    view = WeekCalendarView(date(2024, 6, 3))
    view.load(CatalogQueryService(db, week_start=0))
    view.set_favorites([liked.id])

    flags = {card.id: card.is_favorite for card in view.cards()}
    assert flags == {liked.id: True, other.id: False}
    assert view.cards()[0].producer.full_name == "Ferme du Val"


def test_product_form_create_then_reset(db, producer):
    manager = ProducerCatalogManager(db, producer)
    view = ProducerDashboardView()
    view.open_product_form()
    view.product_form.values.update(
        name="Strawberries", availability_start="2024-06-03", availability_end="2024-06-09"
    )

    product = view.submit_product(manager)
    assert product is not None
    assert view.product_form is None
    assert [p.id for p in view.products] == [product.id]


def test_invalid_product_form_stays_open(db, producer):
    manager = ProducerCatalogManager(db, producer)
    view = ProducerDashboardView()
    view.open_product_form()
    view.product_form.values.update(
        name="Strawberries", availability_start="2024-06-09", availability_end="2024-06-03"
    )

    assert view.submit_product(manager) is None
    assert view.product_form.values["name"] == "Strawberries"
    assert view.product_form.errors
    assert view.alert


def test_edit_form_is_prefilled(db, producer):
    product = add_product(db, producer.user_id, name="Cherries")
    view = ProducerDashboardView()
    view.open_product_form(product)

    assert view.product_form.is_edit
    assert view.product_form.values["name"] == "Cherries"
    assert view.product_form.values["availability_start"] == date(2024, 6, 3)


def test_location_form_and_confirmed_delete(db, producer):
    manager = ProducerCatalogManager(db, producer)
    view = ProducerDashboardView()
    view.open_location_form()
    view.location_form.values.update(name="Farm shop", address="Route des Vignes")
    location = view.submit_location(manager)

    view.request_delete("location", location.id)
    view.cancel_delete()
    assert view.pending_delete is None
    assert len(view.locations) == 1

    view.request_delete("location", location.id)
    assert view.confirm_delete(manager) is True
    assert view.locations == []


def test_failed_dashboard_refresh_keeps_previous_lists(db, producer, monkeypatch):
    product = add_product(db, producer.user_id)
    manager = ProducerCatalogManager(db, producer)
    view = ProducerDashboardView()
    view.refresh(manager)

    def broken_query(*args, **kwargs):
        raise SQLAlchemyError("connection lost")

    monkeypatch.setattr(db, "query", broken_query)
    view.refresh(manager)
    assert [p.id for p in view.products] == [product.id]
    assert view.alert == "Error loading data"
    assert view.loading is False


def test_alert_clears_after_corrected_submit(db, producer):
    manager = ProducerCatalogManager(db, producer)
    view = ProducerDashboardView()
    view.open_product_form()
    view.product_form.values.update(
        name="Strawberries", availability_start="2024-06-09", availability_end="2024-06-03"
    )
    assert view.submit_product(manager) is None
    assert view.alert

    view.product_form.values.update(availability_start="2024-06-03", availability_end="2024-06-09")
    assert view.submit_product(manager) is not None
    assert view.alert is None


def _context(role):
    return SessionContext(user_id=1, email="a@example.com", session_id="sid", access_token="t", role=role)


@pytest.mark.parametrize(
    "context, landing",
    [
        (None, "home"),
        (_context("producer"), "dashboard"),
        (_context("consumer"), "products"),
        (_context(None), "awaiting_role"),
    ],
)
def test_landing_follows_session_role(context, landing):
    assert resolve_landing(context) == landing
