from decimal import Decimal
from typing import Optional, List, Literal

from pydantic import Field

from app.schemas.common import CamelModel

Category = Literal[
    "men_kurta", "men_shalwar_kameez", "men_waistcoat", "men_sherwani", "men_pajama", "men_churidar",
    "women_kurta", "women_shalwar_kameez", "women_lehenga", "women_saree", "women_gharara", "women_frock",
    "unisex_footwear", "unisex_accessories", "unisex_bags",
]
Color = Literal["white", "black", "navy_blue", "maroon", "bottle_green", "peach", "gold", "silver"]
Gender = Literal["male", "female", "unisex"]

MAX_STOCK = 2_147_483_647


class ProductCreate(CamelModel):
    name: str = Field(..., min_length=1)
    description: str = ""
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    stock: int = Field(..., ge=0, le=MAX_STOCK)
    category: Category
    colors: List[Color] = []
    sizes: List[str] = []
    gender: Gender
    stitched: bool = True
    images: List[str] = []


class ProductUpdate(CamelModel):
    # no brand field: ownership is fixed at creation
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    stock: Optional[int] = Field(None, ge=0, le=MAX_STOCK)
    category: Optional[Category] = None
    colors: Optional[List[Color]] = None
    sizes: Optional[List[str]] = None
    gender: Optional[Gender] = None
    stitched: Optional[bool] = None
    images: Optional[List[str]] = None


class StockUpdate(CamelModel):
    stock: int = Field(..., ge=0, le=MAX_STOCK)
