from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from schemas.common import Money

class CustomerBase(BaseModel):
    name: str
    phone: str
    address: Optional[str] = None

class CustomerCreate(CustomerBase):
    pass

class Customer(CustomerBase):
    id: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class CustomerHistoryEntry(CustomerBase):
    customer_id: int
    total_orders: int
    total_spent: Money
    total_pending: Money
    last_order_date: Optional[datetime] = None
