from datetime import date

import pytest
from sqlalchemy.exc import SQLAlchemyError

from app.services.catalog import CatalogQueryService
from app.services.errors import CatalogUnavailable

from helpers import add_location, add_product, api_signup, auth_header

MONDAY = date(2024, 6, 3)


def test_single_day_product_shows_in_its_week(db, producer):
    product = add_product(db, producer.user_id, start=MONDAY, end=MONDAY)

    found = CatalogQueryService(db, week_start=0, match="contained").fetch_week(MONDAY)
    assert [p.id for p in found] == [product.id]


def test_single_day_product_absent_the_following_week(db, producer):
    add_product(db, producer.user_id, start=MONDAY, end=MONDAY)

    for match in ("contained", "overlap"):
        service = CatalogQueryService(db, week_start=0, match=match)
        assert service.fetch_week(date(2024, 6, 10)) == []


def test_spanning_product_depends_on_match_mode(db, producer):
    # Sunday 9 June to Tuesday 11 June straddles two Monday-based weeks
    product = add_product(db, producer.user_id, start=date(2024, 6, 9), end=date(2024, 6, 11))

    contained = CatalogQueryService(db, week_start=0, match="contained")
    assert contained.fetch_week(MONDAY) == []
    assert contained.fetch_week(date(2024, 6, 10)) == []

    overlap = CatalogQueryService(db, week_start=0, match="overlap")
    assert [p.id for p in overlap.fetch_week(MONDAY)] == [product.id]
    assert [p.id for p in overlap.fetch_week(date(2024, 6, 10))] == [product.id]


def test_products_come_with_producer_and_locations(db, producer):
    add_location(db, producer.user_id, name="Farm shop", address="Route des Vignes")
    add_location(db, producer.user_id, name="Saturday market", address="Place Carnot")
    add_product(db, producer.user_id)

    product = CatalogQueryService(db, week_start=0).fetch_week(MONDAY)[0]
    assert product.producer.full_name == "Ferme du Val"
    assert [loc.name for loc in product.producer.locations] == ["Farm shop", "Saturday market"]


def test_results_in_backend_order(db, producer, other_producer):
    first = add_product(db, producer.user_id, name="Asparagus")
    second = add_product(db, other_producer.user_id, name="Cherries")
    third = add_product(db, producer.user_id, name="Strawberries")

    found = CatalogQueryService(db, week_start=0).fetch_week(MONDAY)
    assert [p.id for p in found] == [first.id, second.id, third.id]


def test_fetch_failure_raises_generic_error(db, monkeypatch):
    def broken_query(*args, **kwargs):
        raise SQLAlchemyError("connection lost")

    monkeypatch.setattr(db, "query", broken_query)
    with pytest.raises(CatalogUnavailable) as excinfo:
        CatalogQueryService(db, week_start=0).fetch_week(MONDAY)
    assert excinfo.value.status_code == 503
    assert excinfo.value.detail == "Error loading products"


def test_unknown_match_mode_rejected(db):
    with pytest.raises(ValueError):
        CatalogQueryService(db, match="sometimes")


def test_week_endpoint_anonymous(client, db, producer):
    add_location(db, producer.user_id)
    product = add_product(db, producer.user_id)

    response = client.get("/catalog/week", params={"date": "2024-06-05", "seq": 7})
    assert response.status_code == 200
    body = response.json()
    assert body["seq"] == 7
    assert body["week"]["start"] == "2024-06-03"
    assert body["week"]["end"] == "2024-06-09"
    assert body["week"]["selected"] == "2024-06-05"
    assert len(body["week"]["days"]) == 7
    card = body["products"][0]
    assert card["id"] == product.id
    assert card["is_favorite"] is False
    assert card["producer"]["full_name"] == "Ferme du Val"
    assert card["producer"]["locations"][0]["name"] == "Market hall"


def test_week_endpoint_marks_favorites(client, db, producer):
    liked = add_product(db, producer.user_id, name="Cherries")
    other = add_product(db, producer.user_id, name="Peas")
    token = api_signup(client, "eater@example.com", "consumer")
    client.post(f"/favorites/{liked.id}/toggle", headers=auth_header(token))

    body = client.get(
        "/catalog/week", params={"date": "2024-06-03"}, headers=auth_header(token)
    ).json()
    flags = {card["id"]: card["is_favorite"] for card in body["products"]}
    assert flags == {liked.id: True, other.id: False}


def test_week_endpoint_match_override(client, db, producer):
    add_product(db, producer.user_id, start=date(2024, 6, 9), end=date(2024, 6, 11))

    contained = client.get("/catalog/week", params={"date": "2024-06-03"}).json()
    overlap = client.get("/catalog/week", params={"date": "2024-06-03", "match": "overlap"}).json()
    assert contained["match"] == "contained"
    assert contained["products"] == []
    assert overlap["match"] == "overlap"
    assert len(overlap["products"]) == 1


def test_week_endpoint_rejects_bad_match(client):
    response = client.get("/catalog/week", params={"match": "sometimes"})
    assert response.status_code == 422
