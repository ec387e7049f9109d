"""
Testes da rota de busca de produtos.

O catálogo é substituído via dependency_overrides, sem acesso a arquivo
ou ao Supabase.
"""
import pytest
from fastapi.testclient import TestClient

from app.main import app, get_catalog_repository
from app.repositories.CatalogRepository import CatalogRepositoryError
from app.repositories.InMemoryCatalogRepository import InMemoryCatalogRepository


class BrokenRepository(InMemoryCatalogRepository):
    def query_many(self, filter_spec, limit):
        raise CatalogRepositoryError("catalog unreachable")


@pytest.fixture
def client_for():
    def _build(repository):
        app.dependency_overrides[get_catalog_repository] = lambda: repository
        return TestClient(app)

    yield _build
    app.dependency_overrides.clear()


@pytest.fixture
def client(client_for, seed_repository):
    return client_for(seed_repository)


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_product_search_response_shape(client):
    response = client.post("/tools/product-search", json={
        "skinType": "oily",
        "skinConcerns": ["acne", "pores"],
        "budget": "midRange",
        "gender": "female",
        "age": 24,
        "routineComplexity": "minimal",
    })

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["routineComplexity"] == "minimal"
    assert body["count"] == len(body["products"])
    assert 0 < body["count"] <= 4
    assert isinstance(body["searchLatency"], int)
    assert body["note"] is None

    first = body["products"][0]
    for key in ("name", "brand", "type", "score", "imageUrl", "skinTypes", "skinConcerns", "slot", "link"):
        assert key in first
    scores = [product["score"] for product in body["products"]]
    assert scores == sorted(scores, reverse=True)


def test_required_products_are_tagged_with_slot(client):
    body = client.post("/tools/product-search", json={"routineComplexity": "standard"}).json()

    slots = {product["type"]: product["slot"] for product in body["products"]}
    assert slots.get("cleanser") == "required"
    assert slots.get("sunscreen") == "required"


def test_unknown_complexity_returns_note(client):
    body = client.post("/tools/product-search", json={"routineComplexity": "galactic"}).json()

    assert body["success"] is True
    assert body["routineComplexity"] == "standard"
    assert "galactic" in body["note"]


def test_concerns_as_free_text(client):
    response = client.post("/tools/product-search", json={"skinConcerns": "acne, redness and dullness"})

    assert response.status_code == 200
    assert response.json()["count"] > 0


def test_empty_catalog_returns_empty_list(client_for):
    response = client_for(InMemoryCatalogRepository()).post("/tools/product-search", json={})

    assert response.status_code == 200
    assert response.json()["products"] == []
    assert response.json()["count"] == 0


def test_invalid_payload_returns_validation_error(client):
    response = client.post("/tools/product-search", json={"skinType": ["oily"]})

    assert response.status_code == 422
    body = response.json()
    assert body["error"] == "Validation Error"
    assert body["path"] == "/tools/product-search"
    assert body["detail"][0]["field"] == "body.skinType"


def test_repository_failure_returns_error_response(client_for):
    response = client_for(BrokenRepository()).post("/tools/product-search", json={"skinType": "dry"})

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert "catalog unreachable" in body["error"]
    assert "searchLatency" in body
