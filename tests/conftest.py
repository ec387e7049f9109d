"""
Fixtures compartilhadas dos testes de seleção de produtos.
"""
import itertools
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from app.models.Product import Product
from app.repositories.InMemoryCatalogRepository import InMemoryCatalogRepository
from app.routine.ProductSelector import ProductSelector

BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)

SEED_CATALOG_PATH = Path(__file__).parent.parent / "data" / "products.json"


@pytest.fixture
def make_product():
    """
    Fábrica de produtos: cada produto criado é mais recente que o anterior.

    Uso:
        cleanser = make_product("Gel Cleanser", "cleanser", skin_types=["oily"])
    """
    counter = itertools.count(1)

    def _make(name: str, product_type: str, **fields) -> Product:
        record = {
            "name": name,
            "brand": "TestBrand",
            "type": product_type,
            "created_at": BASE_TIME + timedelta(days=next(counter)),
        }
        record.update(fields)
        return Product.from_record(record)

    return _make


@pytest.fixture
def selector_for():
    def _build(products) -> ProductSelector:
        return ProductSelector(InMemoryCatalogRepository(products))

    return _build


@pytest.fixture
def seed_repository() -> InMemoryCatalogRepository:
    return InMemoryCatalogRepository.from_json_file(SEED_CATALOG_PATH)
