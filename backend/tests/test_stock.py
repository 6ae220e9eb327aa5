from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from app.core.errors import ValidationFailed
from app.models.product import Product
from app.schemas.order import OrderCreate
from app.services.orders import create_order
from app.services.products import decrement_stock
from conftest import order_body


def test_decrement_with_enough_stock(db, brand_a, make_product):
    product = make_product(brand_a, stock=5)

    result = decrement_stock(db, product.id, 5)
    db.commit()

    assert (result.ok, result.product_found, result.sufficient_stock) == (True, True, True)
    db.refresh(product)
    assert product.stock == 0


def test_decrement_short_leaves_stock_alone(db, brand_a, make_product):
    product = make_product(brand_a, stock=2)

    result = decrement_stock(db, product.id, 3)
    db.commit()

    assert (result.ok, result.product_found, result.sufficient_stock) == (False, True, False)
    db.refresh(product)
    assert product.stock == 2


def test_decrement_unknown_product(db):
    result = decrement_stock(db, 12345, 1)

    assert (result.ok, result.product_found, result.sufficient_stock) == (False, False, False)


def test_concurrent_decrements_never_oversell(session_factory, db, brand_a, make_product):
    product = make_product(brand_a, stock=5)

    def attempt(_):
        session = session_factory()
        try:
            result = decrement_stock(session, product.id, 1)
            session.commit()
            return result.ok
        finally:
            session.close()

    with ThreadPoolExecutor(max_workers=8) as pool:
        outcomes = list(pool.map(attempt, range(20)))

    assert outcomes.count(True) == 5
    db.expire_all()
    assert db.get(Product, product.id).stock == 0


def test_concurrent_orders_never_oversell(session_factory, db, brand_a, customer, make_product):
    product = make_product(brand_a, stock=3)
    payload = OrderCreate.model_validate(order_body(product.id, customer.id, quantity=2))

    def place(_):
        session = session_factory()
        try:
            return create_order(session, payload).stock_status
        finally:
            session.close()

    with ThreadPoolExecutor(max_workers=4) as pool:
        statuses = list(pool.map(place, range(4)))

    assert statuses.count("reserved") == 1
    assert statuses.count("insufficient") == 3
    db.expire_all()
    assert db.get(Product, product.id).stock == 1


def test_decrement_rejects_non_positive_quantity(db, brand_a, make_product):
    product = make_product(brand_a, stock=4)

    for quantity in (0, -3):
        with pytest.raises(ValidationFailed):
            decrement_stock(db, product.id, quantity)
    db.commit()

    db.refresh(product)
    assert product.stock == 4
