from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI, Depends, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.db import Base, engine, get_db
from app.core.errors import AppError
from app.core.logging import setup_logging
from app.core.security import Identity, require_role
from app.schemas.order import OrderCreate, OrderStatusUpdate
from app.schemas.product import Category, Gender, ProductCreate, ProductUpdate, StockUpdate
from app.services import orders as order_service
from app.services import products as product_service

# Import models so Base.metadata knows them
import app.models  # noqa

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    setup_logging()
    Base.metadata.create_all(bind=engine)
    logger.info("startup", database=engine.url.render_as_string(hide_password=True))
    yield


app = FastAPI(title="Marketplace Orders Backend", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
    max_age=600,
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    response = await call_next(request)
    logger.info("request", method=request.method, path=request.url.path, status=response.status_code)
    return response


# -------------------------
# Error mapping
# -------------------------

@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content={"success": False, "message": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = []
    for err in exc.errors():
        # drop the leading "body"/"query"/"path" segment
        loc = [str(part) for part in err.get("loc", ())[1:]]
        errors.append({"field": ".".join(loc), "message": err.get("msg", "Invalid value")})
    message = ", ".join(f"{e['field']}: {e['message']}" if e["field"] else e["message"] for e in errors)
    return JSONResponse(status_code=400, content={"success": False, "message": message, "errors": errors})


@app.exception_handler(SQLAlchemyError)
async def db_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("db.error", method=request.method, path=request.url.path)
    return JSONResponse(status_code=500, content={"success": False, "message": "Server Error"})


@app.get("/")
def health():
    return {"status": "ok"}


# -------------------------
# Orders
# -------------------------

@app.post("/orders", status_code=201)
def create_order(body: OrderCreate, db: Session = Depends(get_db)):
    order = order_service.create_order(db, body)
    return {"success": True, "data": order_service.serialize_order(order)}


@app.get("/orders")
def list_brand_orders(identity: Identity = Depends(require_role("brand")), db: Session = Depends(get_db)):
    orders = order_service.get_orders(db, brand_id=identity.id)
    return {
        "success": True,
        "count": len(orders),
        "data": [order_service.serialize_order(o) for o in orders],
    }


@app.get("/orders/customer/{customer_id}")
def list_customer_orders(customer_id: int, db: Session = Depends(get_db)):
    return {"success": True, "data": order_service.get_customer_orders(db, customer_id)}


@app.put("/orders/{order_id}/status")
def update_order_status(
    order_id: int,
    body: OrderStatusUpdate,
    identity: Identity = Depends(require_role("brand")),
    db: Session = Depends(get_db),
):
    order = order_service.update_order_status(db, order_id, body.status)
    return {"success": True, "data": order_service.serialize_order(order)}


# -------------------------
# Products
# -------------------------

def _product_list(products) -> dict:
    return {
        "success": True,
        "count": len(products),
        "data": [product_service.serialize_product(p) for p in products],
    }


@app.get("/v1/products/brand/{brand_id}")
def list_products_by_brand(brand_id: int, db: Session = Depends(get_db)):
    return _product_list(product_service.list_products_by_brand(db, brand_id))


@app.get("/v1/products/search")
def search_products(
    query: Optional[str] = None,
    category: Optional[Category] = None,
    gender: Optional[Gender] = None,
    min_price: Optional[float] = Query(None, alias="minPrice"),
    max_price: Optional[float] = Query(None, alias="maxPrice"),
    identity: Identity = Depends(require_role("brand")),
    db: Session = Depends(get_db),
):
    products = product_service.search_products(
        db,
        identity.id,
        query=query,
        category=category,
        gender=gender,
        min_price=min_price,
        max_price=max_price,
    )
    return _product_list(products)


@app.post("/v1/products", status_code=201)
def create_product(body: ProductCreate, identity: Identity = Depends(require_role("brand")), db: Session = Depends(get_db)):
    product = product_service.create_product(db, body, identity.id)
    return {"success": True, "data": product_service.serialize_product(product)}


@app.get("/v1/products")
def list_own_products(identity: Identity = Depends(require_role("brand")), db: Session = Depends(get_db)):
    return _product_list(product_service.list_brand_products(db, identity.id))


@app.get("/v1/products/{product_id}")
def get_product(product_id: int, identity: Identity = Depends(require_role("brand")), db: Session = Depends(get_db)):
    product = product_service.get_owned_product(db, product_id, identity.id)
    return {"success": True, "data": product_service.serialize_product(product)}


@app.put("/v1/products/{product_id}")
def update_product(
    product_id: int,
    body: ProductUpdate,
    identity: Identity = Depends(require_role("brand")),
    db: Session = Depends(get_db),
):
    product = product_service.update_product(db, product_id, body, identity.id)
    return {"success": True, "data": product_service.serialize_product(product)}


@app.delete("/v1/products/{product_id}")
def delete_product(product_id: int, identity: Identity = Depends(require_role("brand")), db: Session = Depends(get_db)):
    product_service.delete_product(db, product_id, identity.id)
    return {"success": True, "data": {}}


@app.put("/v1/products/{product_id}/stock")
def update_stock(
    product_id: int,
    body: StockUpdate,
    identity: Identity = Depends(require_role("brand")),
    db: Session = Depends(get_db),
):
    product = product_service.set_stock(db, product_id, body.stock, identity.id)
    return {"success": True, "data": product_service.serialize_product(product)}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
