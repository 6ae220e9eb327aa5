from app.core.db import Base
from app.models.account import AccountMixin


class Rider(AccountMixin, Base):
    __tablename__ = "riders"
