from sqlalchemy import Column, Integer, String, Text, Numeric, Date, DateTime, ForeignKey, Enum
from sqlalchemy.ext.hybrid import hybrid_property
from sqlalchemy.orm import relationship
from database import Base
import enum
from models.audit_mixin import TimestampMixin
from utils.dates import local_now

class OrderType(enum.Enum):
    ONLINE = "Online"
    LOCAL = "Local"

class OrderStatus(enum.Enum):
    PENDING = "Pending"
    PARTIALLY_PAID = "Partially_Paid"
    FULFILLED = "Fulfilled"

class Order(Base, TimestampMixin):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False)
    order_type = Column(Enum(OrderType), default=OrderType.LOCAL, nullable=False)
    order_date = Column(DateTime(timezone=True), default=local_now, nullable=False, index=True)
    delivery_date = Column(Date, nullable=False)
    delivery_time = Column(String, nullable=True)
    total_amount = Column(Numeric(10, 2), default=0, nullable=False)
    # Cached sum of this order's payments; written only together with a Payment row
    advance_payment = Column(Numeric(10, 2), default=0, server_default='0', nullable=False)
    delivery_address = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    status = Column(Enum(OrderStatus), default=OrderStatus.PENDING, nullable=False, index=True)

    # Relationships
    customer = relationship("Customer", back_populates="orders")
    items = relationship("OrderItem", back_populates="order", cascade="all, delete-orphan", order_by="OrderItem.id")
    payments = relationship("Payment", back_populates="order", cascade="all, delete-orphan", order_by="Payment.id")

    @hybrid_property
    def remaining_amount(self):
        return self.total_amount - self.advance_payment

    @property
    def customer_name(self):
        return self.customer.name if self.customer else None
