from __future__ import annotations

from app.core.security import resolve_identity, create_access_token
from app.models.product import Product
from app.seed import seed_accounts, seed_products


def test_seed_builds_a_usable_catalog(client, db):
    accounts = seed_accounts(db)
    products = seed_products(db, accounts["brands"])

    assert db.query(Product).count() == len(products)
    khaadi = accounts["brands"][0]
    assert resolve_identity(db, create_access_token(khaadi.id, "brand")).role == "brand"
    assert accounts["rider"].verification_state == "verified"

    res = client.get(f"/v1/products/brand/{khaadi.id}")
    assert res.json()["count"] == 3
    assert all(p["stock"] >= 0 for p in res.json()["data"])
