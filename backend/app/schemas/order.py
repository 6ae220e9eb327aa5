from decimal import Decimal
from typing import Optional, Literal

from pydantic import Field

from app.schemas.common import CamelModel

PaymentMethod = Literal["Cash on Delivery", "Credit Card", "PayPal"]

MAX_QUANTITY = 10_000


class CustomerInfo(CamelModel):
    full_name: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    phone_number: str = Field(..., min_length=1)


class ProductSelection(CamelModel):
    product_id: int
    name: str = Field(..., min_length=1)
    # two decimals, at most eight integer digits: matches Numeric(10, 2)
    price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    selected_color: Optional[str] = None
    selected_size: Optional[str] = None
    quantity: int = Field(..., ge=1, le=MAX_QUANTITY)
    image: Optional[str] = None


class OrderCreate(CamelModel):
    customer_info: CustomerInfo
    product: ProductSelection
    payment_method: PaymentMethod
    customer_id: int


class OrderStatusUpdate(CamelModel):
    # membership is checked by the workflow so the error names the valid values
    status: str
