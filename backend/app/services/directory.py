from sqlalchemy.orm import Session

from app.models.brand import Brand
from app.models.customer import Customer
from app.models.rider import Rider

ROLE_MODELS = {
    "brand": Brand,
    "customer": Customer,
    "rider": Rider,
}


def find_account(db: Session, role: str, account_id: int):
    model = ROLE_MODELS.get(role)
    if model is None:
        return None
    return db.get(model, account_id)


def create_account(db: Session, role: str, name: str, email: str, password_hash: str, phone: str = "", verified: bool = True):
    model = ROLE_MODELS[role]
    account = model(
        name=name.strip(),
        email=email.strip().lower(),
        password_hash=password_hash,
        phone=phone.strip(),
        is_verified=verified,
    )
    db.add(account)
    db.commit()
    db.refresh(account)
    return account
