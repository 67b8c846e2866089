from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date, datetime
from decimal import Decimal
from models.orders import OrderStatus, OrderType
from schemas.common import Money
from schemas.customers import CustomerCreate
from schemas.order_items import OrderItemCreate
from schemas.payments import Payment as PaymentSchema

class OrderCreate(BaseModel):
    customer_id: Optional[int] = None
    new_customer: Optional[CustomerCreate] = None
    order_type: OrderType = OrderType.LOCAL
    delivery_date: Optional[date] = None
    delivery_time: Optional[str] = None
    delivery_address: Optional[str] = None
    notes: Optional[str] = None
    advance_payment: Decimal = Decimal("0")
    items: List[OrderItemCreate] = Field(default_factory=list)

class Order(BaseModel):
    id: int
    customer_id: int
    customer_name: Optional[str] = None
    order_type: OrderType
    order_date: datetime
    delivery_date: date
    delivery_time: Optional[str] = None
    total_amount: Money
    advance_payment: Money
    remaining_amount: Money
    delivery_address: Optional[str] = None
    notes: Optional[str] = None
    status: OrderStatus
    created_by: Optional[str] = None

    class Config:
        from_attributes = True

class OrderCreated(BaseModel):
    order_id: int
    order: Order

class PaymentApplied(BaseModel):
    updated_order: Order
    payment: PaymentSchema
