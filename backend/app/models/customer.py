from app.core.db import Base
from app.models.account import AccountMixin


class Customer(AccountMixin, Base):
    __tablename__ = "customers"
