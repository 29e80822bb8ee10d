import os
import tempfile

# must be set before inventory_api.config is imported
TEST_DB = os.path.join(tempfile.gettempdir(), "inventory_api_test.db")
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB}"
os.environ["CREATE_DEFAULT_ADMIN"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient

from inventory_api.db import SessionLocal, init_db
from inventory_api.main import app
from inventory_api.schemas.product_schema import ProductCreate
from inventory_api.services.auth_service import AuthService
from inventory_api.services.product_service import ProductService
from inventory_api.utils.security import create_access_token


@pytest.fixture(autouse=True)
def fresh_db():
    init_db(reset=True)
    yield


@pytest.fixture
def db():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def admin(db):
    return AuthService(db).register("admin", "admin123", role="admin")


@pytest.fixture
def user(db):
    return AuthService(db).register("alice", "alice123", role="user")


def _bearer(u):
    return {"Authorization": f"Bearer {create_access_token(u.id, u.role)}"}


@pytest.fixture
def admin_headers(admin):
    return _bearer(admin)


@pytest.fixture
def user_headers(user):
    return _bearer(user)


@pytest.fixture
def make_product(db, admin):
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        fields = {
            "name": f"Product {counter['n']}",
            "type": "General",
            "sku": f"SKU-{counter['n']:03d}",
            "quantity": 50,
            "price": 1.0,
        }
        fields.update(overrides)
        return ProductService(db).create(ProductCreate(**fields), admin)

    return _make


@pytest.fixture
def headers_for():
    return _bearer
