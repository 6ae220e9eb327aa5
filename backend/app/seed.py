from sqlalchemy.orm import Session

from app.core.db import Base, engine, SessionLocal
from app.core.security import create_access_token, hash_password
from app.models.brand import Brand
from app.models.customer import Customer
from app.models.product import Product
from app.models.rider import Rider


def reset_db():
    # Drops & recreates all tables (demo data only)
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


def seed_accounts(db: Session) -> dict:
    brands = [
        Brand(name="Khaadi", email="brand@khaadi.local", password_hash=hash_password("brand123"),
              phone="+92 300 0000001", is_verified=True),
        Brand(name="Junaid Jamshed", email="brand@jj.local", password_hash=hash_password("brand123"),
              phone="+92 300 0000002", is_verified=True),
    ]
    customer = Customer(name="Ayesha Khan", email="ayesha@example.com", password_hash=hash_password("customer123"),
                        phone="+92 321 1234567", is_verified=True)
    rider = Rider(name="Bilal Ahmed", email="bilal@riders.local", password_hash=hash_password("rider123"),
                  phone="+92 333 7654321", is_verified=True)

    db.add_all([*brands, customer, rider])
    db.commit()
    return {"brands": brands, "customer": customer, "rider": rider}


def seed_products(db: Session, brands: list[Brand]) -> list[Product]:
    khaadi, jj = brands
    products = [
        # --------------------
        # Khaadi
        # --------------------
        Product(
            name="Embroidered Lawn Kurta",
            description="Three-piece embroidered lawn kurta with printed dupatta.",
            price=4990, stock=25, category="women_kurta",
            colors=["white", "peach"], sizes=["S", "M", "L"], gender="female", stitched=True,
            images=["https://cdn.example.com/khaadi/lawn-kurta.jpg"], brand_id=khaadi.id,
        ),
        Product(
            name="Bridal Lehenga",
            description="Hand-worked lehenga with gold zari and net dupatta.",
            price=89990, stock=3, category="women_lehenga",
            colors=["maroon", "gold"], sizes=["M", "L"], gender="female", stitched=True,
            images=["https://cdn.example.com/khaadi/bridal-lehenga.jpg"], brand_id=khaadi.id,
        ),
        Product(
            name="Unstitched Shalwar Kameez Fabric",
            description="Four metres of cotton suiting, unstitched.",
            price=3290, stock=60, category="men_shalwar_kameez",
            colors=["white", "navy_blue", "black"], sizes=[], gender="male", stitched=False,
            images=["https://cdn.example.com/khaadi/suiting.jpg"], brand_id=khaadi.id,
        ),

        # --------------------
        # Junaid Jamshed
        # --------------------
        Product(
            name="Classic Waistcoat",
            description="Tailored wool-blend waistcoat for formal wear.",
            price=7490, stock=15, category="men_waistcoat",
            colors=["black", "bottle_green"], sizes=["38", "40", "42"], gender="male", stitched=True,
            images=["https://cdn.example.com/jj/waistcoat.jpg"], brand_id=jj.id,
        ),
        Product(
            name="Peshawari Chappal",
            description="Hand-stitched leather chappal.",
            price=5990, stock=40, category="unisex_footwear",
            colors=["black"], sizes=["7", "8", "9", "10"], gender="unisex", stitched=True,
            images=["https://cdn.example.com/jj/chappal.jpg"], brand_id=jj.id,
        ),
    ]
    db.add_all(products)
    db.commit()
    return products


def main():
    reset_db()
    db = SessionLocal()
    try:
        accounts = seed_accounts(db)
        products = seed_products(db, accounts["brands"])

        print(f"Seeded {len(products)} products")
        for b in accounts["brands"]:
            print(f"brand    {b.name:<16} token: {create_access_token(b.id, 'brand')}")
        c = accounts["customer"]
        print(f"customer {c.name:<16} id: {c.id} token: {create_access_token(c.id, 'customer')}")
        r = accounts["rider"]
        print(f"rider    {r.name:<16} token: {create_access_token(r.id, 'rider')}")
    finally:
        db.close()


if __name__ == "__main__":
    main()
