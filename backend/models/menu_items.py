from sqlalchemy import Column, Integer, String, Numeric, Boolean
from database import Base
from models.audit_mixin import TimestampMixin

class MenuItem(Base, TimestampMixin):
    __tablename__ = "menu_items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, unique=True)
    price = Column(Numeric(10, 2), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
