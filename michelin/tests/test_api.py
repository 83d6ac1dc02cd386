from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from michelin.app import app
from michelin.restaurants.data_store import get_store
from michelin.restaurants.models import Restaurant

client = TestClient(app)

RECORDS = [
    Restaurant(id=1, name="Maison Lameloise", cuisine=["Classic Cuisine", "French"], location=["Chagny", "France"]),
    Restaurant(id=2, name="Osteria Francescana", cuisine=["Italian", "Creative"], location=["Modena", "Italy"]),
    Restaurant(id=3, name="Le Bernardin", cuisine=["Seafood", "French"], location=["New York", "USA"], award="3 Stars"),
] + [
    Restaurant(id=i, name=f"Bistro {i}", cuisine=["Bistro"], location=["Lyon", "France"])
    for i in range(4, 151)
]


@pytest.fixture(autouse=True)
def _seeded_store():
    get_store().reload(RECORDS)
    yield
    get_store().reload(RECORDS)


def test_health():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "restaurants": 150}


def test_endpoint_listing():
    resp = client.get("/")
    paths = {e["path"] for e in resp.json()}
    assert {"/restaurants", "/restaurants/{query}", "/cuisines", "/cuisines/{cuisine}", "/locations/{location}"} <= paths


def test_restaurants_first_page():
    resp = client.get("/restaurants")
    body = resp.json()
    assert resp.status_code == 200
    assert len(body) == 100
    assert body[0]["id"] == 1


def test_restaurants_second_page():
    body = client.get("/restaurants", params={"page": 2}).json()
    assert [r["id"] for r in body] == list(range(101, 151))


def test_restaurants_bad_page_is_first_page():
    resp = client.get("/restaurants", params={"page": "abc"})
    assert resp.status_code == 200
    assert resp.json()[0]["id"] == 1


def test_restaurants_page_past_end():
    resp = client.get("/restaurants", params={"page": 3})
    assert resp.status_code == 404


def test_restaurant_by_id():
    resp = client.get("/restaurants/2")
    assert resp.status_code == 200
    assert resp.json()["name"] == "Osteria Francescana"


def test_restaurant_by_name_keeps_extra_fields():
    resp = client.get("/restaurants/le%20bernardin")
    assert resp.status_code == 200
    body = resp.json()
    assert body["id"] == 3
    assert body["award"] == "3 Stars"


def test_restaurant_unknown_id():
    resp = client.get("/restaurants/9999")
    assert resp.status_code == 404
    assert "Invalid restaurant ID" in resp.json()["detail"]


def test_restaurant_overlong_id():
    resp = client.get("/restaurants/" + "9" * 5000)
    assert resp.status_code == 404


def test_restaurant_unknown_name():
    resp = client.get("/restaurants/osteria")
    assert resp.status_code == 404


def test_cuisines_are_distinct():
    body = client.get("/cuisines").json()
    assert sorted(body) == ["Bistro", "Classic Cuisine", "Creative", "French", "Italian", "Seafood"]


def test_filter_by_cuisine():
    resp = client.get("/cuisines/creative,%20italian")
    assert resp.status_code == 200
    assert [r["id"] for r in resp.json()] == [2]


def test_filter_by_cuisine_and_semantics():
    body = client.get("/cuisines/french seafood").json()
    assert [r["id"] for r in body] == [3]


def test_filter_by_cuisine_single_letter():
    resp = client.get("/cuisines/i")
    assert resp.status_code == 404


def test_filter_by_cuisine_blank_is_bad_request():
    resp = client.get("/cuisines/%20")
    assert resp.status_code == 400


def test_filter_by_location():
    body = client.get("/locations/new%20york").json()
    assert [r["id"] for r in body] == [3]


def test_filter_by_location_not_found():
    resp = client.get("/locations/tokyo")
    assert resp.status_code == 404


def test_store_unavailable():
    get_store().clear()
    resp = client.get("/restaurants/1")
    assert resp.status_code == 503
    assert client.get("/health").json()["restaurants"] == 0
