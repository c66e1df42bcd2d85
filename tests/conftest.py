# product_api/tests/conftest.py

"""
Shared fixtures for the Product API tests.
The suite runs against an in-memory SQLite database; the environment is
set here, before the application modules read it at import time.
"""

import logging
import os
from datetime import datetime, timezone

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("DB_CONNECT_RETRIES", "1")

import pytest
from fastapi.testclient import TestClient

from app.db import Base, SessionLocal, engine
from app.main import app
from app.repository import ProductRepository, get_product_repository

# Suppress noisy logs from SQLAlchemy/FastAPI during tests for cleaner output
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
logging.getLogger("app.main").setLevel(logging.WARNING)


class InMemoryProductRepository(ProductRepository):
    """Dict-backed repository so handlers can be exercised without a database."""

    def __init__(self):
        self.products = {}
        self._next_id = 1

    def list_all(self):
        return [self.products[key] for key in sorted(self.products)]

    def get(self, product_id):
        return self.products.get(product_id)

    def add(self, product):
        product.id = self._next_id
        product.created_at = datetime.now(timezone.utc)
        self._next_id += 1
        self.products[product.id] = product
        return product

    def save(self, product):
        product.updated_at = datetime.now(timezone.utc)
        self.products[product.id] = product
        return product

    def delete(self, product):
        del self.products[product.id]


@pytest.fixture(autouse=True)
def reset_database():
    """Gives every test empty tables."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="module")
def client():
    """
    Provides a TestClient for making HTTP requests to the FastAPI application.
    The TestClient runs the app's startup events.
    """
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db_session():
    """A session on the test database for checking what the API persisted."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def memory_repo():
    """Routes all product handlers to a fresh in-memory repository."""
    repo = InMemoryProductRepository()
    app.dependency_overrides[get_product_repository] = lambda: repo
    try:
        yield repo
    finally:
        app.dependency_overrides.pop(get_product_repository, None)
