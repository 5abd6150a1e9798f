import json
import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel, Session

from storefront.main import app
from storefront.db.session import engine, create_tables
from storefront.models.user import User, UserRole
from storefront.core.security import hash_password
from storefront.services.auth import issue_token
from storefront.services.catalog import ProductCatalog, get_catalog

from tests.helpers import auth_header, register


SAMPLE_PRODUCTS = [
    {"id": "1", "name": "Premium Wireless Headphones", "price": 249.99,
     "image": "https://example.com/headphones.jpg", "category": "Electronics"},
    {"id": "2", "name": "Designer Leather Watch", "price": 189.99,
     "image": "https://example.com/watch.jpg", "category": "Accessories"},
]


@pytest.fixture(autouse=True)
def database():
    create_tables(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def db():
    with Session(engine) as session:
        yield session


@pytest.fixture
def catalog_path(tmp_path):
    path = tmp_path / "products.json"
    path.write_text(json.dumps(SAMPLE_PRODUCTS), encoding="utf-8")
    app.dependency_overrides[get_catalog] = lambda: ProductCatalog(path)
    yield path
    app.dependency_overrides.pop(get_catalog, None)


@pytest.fixture
def client(catalog_path):
    return TestClient(app)


@pytest.fixture
def admin(db) -> User:
    user = User(
        name="Admin User",
        email="admin@estore.com",
        password_hash=hash_password("admin123"),
        role=UserRole.ADMIN,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def admin_headers(admin) -> dict:
    return auth_header(issue_token(admin))


@pytest.fixture
def alice(client) -> dict:
    """Registered shopper: {"token", "user", "headers"}"""
    body = register(client, "Alice", "alice@example.com")
    return {"token": body["token"], "user": body["user"], "headers": auth_header(body["token"])}


@pytest.fixture
def bob(client) -> dict:
    body = register(client, "Bob", "bob@example.com")
    return {"token": body["token"], "user": body["user"], "headers": auth_header(body["token"])}
