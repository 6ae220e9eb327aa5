from app.models.brand import Brand
from app.models.customer import Customer
from app.models.rider import Rider
from app.models.product import Product
from app.models.order import Order

__all__ = ["Brand", "Customer", "Rider", "Product", "Order"]
