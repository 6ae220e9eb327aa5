from sqlalchemy.orm import relationship

from app.core.db import Base
from app.models.account import AccountMixin


class Brand(AccountMixin, Base):
    __tablename__ = "brands"

    products = relationship("Product", back_populates="brand")
