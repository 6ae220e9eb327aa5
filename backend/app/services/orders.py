from datetime import datetime, timezone

import structlog
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import InsufficientStock, InvalidStatusTransition, NotFound, ValidationFailed
from app.models.order import (
    Order,
    ORDER_STATUSES,
    STOCK_RESERVED,
    STOCK_INSUFFICIENT,
    STOCK_UNTRACKED,
)
from app.models.product import Product
from app.schemas.order import OrderCreate
from app.services.products import decrement_stock, owned_product_ids

logger = structlog.get_logger(__name__)

ORDER_NOT_FOUND = "Order not found"

# only consulted when ORDER_STRICT_TRANSITIONS is on
VALID_TRANSITIONS: dict[str, set[str]] = {
    "Pending": {"Processing", "Cancelled"},
    "Processing": {"Shipped", "Cancelled"},
    "Shipped": {"Delivered"},
    "Delivered": set(),
    "Cancelled": set(),
}


def _iso(dt: datetime | None) -> str | None:
    return dt.isoformat() if dt else None


def serialize_order(o: Order) -> dict:
    return {
        "id": o.id,
        "customerId": o.customer_id,
        "customerInfo": {
            "fullName": o.customer_full_name,
            "address": o.customer_address,
            "phoneNumber": o.customer_phone,
        },
        "product": {
            "productId": o.product_id,
            "name": o.product_name,
            "price": float(o.product_price),
            "selectedColor": o.selected_color,
            "selectedSize": o.selected_size,
            "quantity": o.quantity,
            "image": o.product_image,
        },
        "totalPrice": float(o.total_price),
        "paymentMethod": o.payment_method,
        "orderStatus": o.order_status,
        "stockStatus": o.stock_status,
        "orderDate": _iso(o.order_date),
        "deliveryDate": _iso(o.delivery_date),
        "createdAt": _iso(o.created_at),
        "updatedAt": _iso(o.updated_at),
    }


# -------------------------
# Create
# -------------------------

def create_order(db: Session, payload: OrderCreate) -> Order:
    """
    Persist an order and take its quantity off the product's stock.

    The insert and the conditional stock decrement share one transaction.
    By default a shortfall does not fail the order: it is logged and
    recorded on ``stock_status``. With ORDER_REJECT_ON_INSUFFICIENT_STOCK
    the whole transaction is rolled back instead.
    """
    item = payload.product
    info = payload.customer_info

    order = Order(
        customer_id=payload.customer_id,
        customer_full_name=info.full_name,
        customer_address=info.address,
        customer_phone=info.phone_number,
        product_id=item.product_id,
        product_name=item.name,
        product_price=item.price,
        selected_color=item.selected_color,
        selected_size=item.selected_size,
        quantity=item.quantity,
        product_image=item.image,
        total_price=item.price * item.quantity,
        payment_method=payload.payment_method,
        order_status="Pending",
    )
    db.add(order)
    db.flush()

    adjustment = decrement_stock(db, item.product_id, item.quantity)
    if adjustment.ok:
        order.stock_status = STOCK_RESERVED
    elif adjustment.product_found:
        if settings.ORDER_REJECT_ON_INSUFFICIENT_STOCK:
            db.rollback()
            logger.warning(
                "order.rejected_insufficient_stock",
                product_id=item.product_id,
                quantity=item.quantity,
                customer_id=payload.customer_id,
            )
            raise InsufficientStock(f"Insufficient stock for product {item.product_id}")
        order.stock_status = STOCK_INSUFFICIENT
        logger.warning(
            "order.insufficient_stock",
            order_id=order.id,
            product_id=item.product_id,
            quantity=item.quantity,
        )
    else:
        order.stock_status = STOCK_UNTRACKED
        logger.info("order.stock_untracked", order_id=order.id, product_id=item.product_id)

    db.commit()
    db.refresh(order)
    logger.info(
        "order.created",
        order_id=order.id,
        customer_id=order.customer_id,
        total_price=float(order.total_price),
        stock_status=order.stock_status,
    )
    return order


# -------------------------
# Queries
# -------------------------

def _newest_first(query):
    return query.order_by(Order.created_at.desc(), Order.id.desc())


def get_orders(db: Session, customer_id: int | None = None, brand_id: int | None = None) -> list[Order]:
    """
    Orders for a customer, a brand, or both, newest first.

    Brand scope follows the live product: an order counts for a brand only
    while its product still exists and belongs to that brand.
    """
    query = db.query(Order)
    if customer_id is not None:
        query = query.filter(Order.customer_id == customer_id)
    if brand_id is not None:
        query = query.filter(Order.product_id.in_(owned_product_ids(brand_id)))

    return _newest_first(query).all()


def get_customer_orders(db: Session, customer_id: int) -> list[dict]:
    orders = get_orders(db, customer_id=customer_id)

    ids = {o.product_id for o in orders}
    live = {}
    if ids:
        live = {p.id: p for p in db.query(Product).filter(Product.id.in_(ids)).all()}

    out = []
    for o in orders:
        data = serialize_order(o)
        p = live.get(o.product_id)
        data["productDetails"] = {
            "id": p.id,
            "name": p.name,
            "price": float(p.price),
            "images": list(p.images or []),
        } if p else None
        out.append(data)
    return out


# -------------------------
# Status
# -------------------------

def update_order_status(db: Session, order_id: int, status: str) -> Order:
    if status not in ORDER_STATUSES:
        raise ValidationFailed("Invalid status. Must be one of: " + ", ".join(ORDER_STATUSES))

    order = db.get(Order, order_id)
    if order is None:
        raise NotFound(ORDER_NOT_FOUND)

    previous = order.order_status
    if settings.ORDER_STRICT_TRANSITIONS and status != previous:
        if status not in VALID_TRANSITIONS.get(previous, set()):
            raise InvalidStatusTransition(f"Cannot change order status from {previous} to {status}")

    order.order_status = status
    order.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(order)
    logger.info("order.status_updated", order_id=order.id, previous=previous, status=status)
    return order
