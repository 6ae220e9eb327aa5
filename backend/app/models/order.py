from datetime import datetime, timezone

from sqlalchemy import Integer, String, DateTime, Numeric
from sqlalchemy.orm import Mapped, mapped_column

from app.core.db import Base

ORDER_STATUSES = ("Pending", "Processing", "Shipped", "Delivered", "Cancelled")

# outcome of the stock side effect at creation time
STOCK_RESERVED = "reserved"
STOCK_INSUFFICIENT = "insufficient"
STOCK_UNTRACKED = "untracked"


class Order(Base):
    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    customer_id: Mapped[int] = mapped_column(Integer, index=True)

    # delivery details as entered at checkout
    customer_full_name: Mapped[str] = mapped_column(String(120))
    customer_address: Mapped[str] = mapped_column(String(500))
    customer_phone: Mapped[str] = mapped_column(String(30))

    # product snapshot; product_id is a plain reference so deleting the
    # product never touches historical orders
    product_id: Mapped[int] = mapped_column(Integer, index=True)
    product_name: Mapped[str] = mapped_column(String(160))
    product_price: Mapped[float] = mapped_column(Numeric(10, 2))
    selected_color: Mapped[str | None] = mapped_column(String(40), nullable=True)
    selected_size: Mapped[str | None] = mapped_column(String(40), nullable=True)
    quantity: Mapped[int] = mapped_column(Integer)
    product_image: Mapped[str | None] = mapped_column(String(500), nullable=True)

    # wide enough for the largest price times MAX_QUANTITY
    total_price: Mapped[float] = mapped_column(Numeric(14, 2))
    payment_method: Mapped[str] = mapped_column(String(30))
    order_status: Mapped[str] = mapped_column(String(20), index=True, default="Pending")
    stock_status: Mapped[str] = mapped_column(String(20), default=STOCK_UNTRACKED)

    order_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc)
    )
    delivery_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc)
    )
