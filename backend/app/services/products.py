from dataclasses import dataclass
from datetime import datetime, timezone

import structlog
from sqlalchemy import or_, select, update
from sqlalchemy.orm import Session

from app.core.errors import NotFound, ValidationFailed
from app.models.product import Product
from app.schemas.product import ProductCreate, ProductUpdate

logger = structlog.get_logger(__name__)

PRODUCT_NOT_FOUND = "Product not found"


@dataclass(frozen=True)
class StockAdjustment:
    ok: bool
    product_found: bool
    sufficient_stock: bool


def serialize_product(p: Product) -> dict:
    return {
        "id": p.id,
        "name": p.name,
        "description": p.description,
        "price": float(p.price),
        "stock": p.stock,
        "category": p.category,
        "colors": list(p.colors or []),
        "sizes": list(p.sizes or []),
        "gender": p.gender,
        "stitched": bool(p.stitched),
        "images": list(p.images or []),
        "brand": p.brand_id,
        "createdAt": p.created_at.isoformat() if p.created_at else None,
        "updatedAt": p.updated_at.isoformat() if p.updated_at else None,
    }


# -------------------------
# Stock
# -------------------------

def decrement_stock(db: Session, product_id: int, quantity: int) -> StockAdjustment:
    """
    Take ``quantity`` units off a product's stock in one conditional UPDATE.

    The row only changes when ``stock >= quantity`` at write time, so
    concurrent callers can never drive stock below zero. Zero affected rows
    means either no such product or not enough stock; a follow-up read tells
    the two apart. The caller owns the transaction and must commit.
    """
    if quantity < 1:
        raise ValidationFailed("Quantity must be at least 1")

    stmt = (
        update(Product)
        .where(Product.id == product_id, Product.stock >= quantity)
        .values(stock=Product.stock - quantity, updated_at=datetime.now(timezone.utc))
        .execution_options(synchronize_session=False)
    )
    result = db.execute(stmt)
    if result.rowcount == 1:
        return StockAdjustment(ok=True, product_found=True, sufficient_stock=True)

    found = db.get(Product, product_id) is not None
    return StockAdjustment(ok=False, product_found=found, sufficient_stock=False)


# -------------------------
# Brand-scoped catalog
# -------------------------

def _brand_query(db: Session, brand_id: int):
    return db.query(Product).filter(Product.brand_id == brand_id)


def get_owned_product(db: Session, product_id: int, brand_id: int) -> Product:
    # a product of another brand is reported exactly like a missing one
    product = _brand_query(db, brand_id).filter(Product.id == product_id).first()
    if product is None:
        raise NotFound(PRODUCT_NOT_FOUND)
    return product


def create_product(db: Session, payload: ProductCreate, brand_id: int) -> Product:
    product = Product(**payload.model_dump(), brand_id=brand_id)
    db.add(product)
    db.commit()
    db.refresh(product)
    logger.info("product.created", product_id=product.id, brand_id=brand_id)
    return product


def list_brand_products(db: Session, brand_id: int) -> list[Product]:
    return (
        _brand_query(db, brand_id)
        .order_by(Product.created_at.desc(), Product.id.desc())
        .all()
    )


def update_product(db: Session, product_id: int, payload: ProductUpdate, brand_id: int) -> Product:
    product = get_owned_product(db, product_id, brand_id)
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in changes.items():
        setattr(product, field, value)
    product.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(product)
    logger.info("product.updated", product_id=product.id, brand_id=brand_id, fields=sorted(changes))
    return product


def delete_product(db: Session, product_id: int, brand_id: int) -> None:
    product = get_owned_product(db, product_id, brand_id)
    db.delete(product)
    db.commit()
    logger.info("product.deleted", product_id=product_id, brand_id=brand_id)


def set_stock(db: Session, product_id: int, stock: int, brand_id: int) -> Product:
    product = get_owned_product(db, product_id, brand_id)
    product.stock = stock
    product.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(product)
    logger.info("product.stock_set", product_id=product.id, brand_id=brand_id, stock=stock)
    return product


def search_products(
    db: Session,
    brand_id: int,
    query: str | None = None,
    category: str | None = None,
    gender: str | None = None,
    min_price: float | None = None,
    max_price: float | None = None,
) -> list[Product]:
    stmt = _brand_query(db, brand_id)

    if query:
        like = f"%{query.strip()}%"
        stmt = stmt.filter(
            or_(
                Product.name.ilike(like),
                Product.description.ilike(like),
            )
        )
    if category:
        stmt = stmt.filter(Product.category == category)
    if gender:
        stmt = stmt.filter(Product.gender == gender)
    if min_price is not None:
        stmt = stmt.filter(Product.price >= min_price)
    if max_price is not None:
        stmt = stmt.filter(Product.price <= max_price)

    return stmt.order_by(Product.created_at.desc(), Product.id.desc()).all()


def list_products_by_brand(db: Session, brand_id: int) -> list[Product]:
    # public storefront listing; same rows a brand sees for itself
    return list_brand_products(db, brand_id)


def owned_product_ids(brand_id: int):
    """Subquery of the ids a brand owns right now."""
    return select(Product.id).where(Product.brand_id == brand_id)
