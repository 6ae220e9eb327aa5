from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from app.core.db import Base, get_db, make_engine
from app.core.security import create_access_token, hash_password
from app.main import app as fastapi_app
from app.models.product import Product
from app.services.directory import create_account


@pytest.fixture
def engine(tmp_path):
    eng = make_engine(f"sqlite:///{tmp_path / 'test.db'}")
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    fastapi_app.dependency_overrides[get_db] = override_get_db
    yield TestClient(fastapi_app)
    fastapi_app.dependency_overrides.clear()


def _account(db, role, name):
    return create_account(db, role, name, f"{name.lower().replace(' ', '.')}@example.com", hash_password("secret"))


@pytest.fixture
def brand_a(db):
    return _account(db, "brand", "Brand A")


@pytest.fixture
def brand_b(db):
    return _account(db, "brand", "Brand B")


@pytest.fixture
def customer(db):
    return _account(db, "customer", "Sara Customer")


@pytest.fixture
def rider(db):
    return _account(db, "rider", "Rafay Rider")


def auth(account_id: int, role: str) -> dict:
    return {"Authorization": f"Bearer {create_access_token(account_id, role)}"}


@pytest.fixture
def make_product(db):
    def _make(brand, **overrides):
        fields = {
            "name": "Lawn Kurta",
            "description": "Printed lawn kurta",
            "price": 100,
            "stock": 10,
            "category": "women_kurta",
            "colors": ["white"],
            "sizes": ["M"],
            "gender": "female",
            "stitched": True,
            "images": ["https://cdn.example.com/kurta.jpg"],
        }
        fields.update(overrides)
        product = Product(brand_id=brand.id, **fields)
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    return _make


def order_body(product_id: int, customer_id: int, price: float = 100, quantity: int = 1, **overrides) -> dict:
    body = {
        "customerInfo": {
            "fullName": "Sara Customer",
            "address": "12 Mall Road, Lahore",
            "phoneNumber": "+92 300 1112223",
        },
        "product": {
            "productId": product_id,
            "name": "Lawn Kurta",
            "price": price,
            "selectedColor": "white",
            "selectedSize": "M",
            "quantity": quantity,
            "image": "https://cdn.example.com/kurta.jpg",
        },
        "paymentMethod": "Cash on Delivery",
        "customerId": customer_id,
    }
    body.update(overrides)
    return body
