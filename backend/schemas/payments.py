from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from decimal import Decimal
from schemas.common import Money

class PaymentCreate(BaseModel):
    amount: Decimal
    notes: Optional[str] = None

class Payment(BaseModel):
    id: int
    order_id: int
    amount: Money
    payment_date: datetime
    notes: Optional[str] = None
    created_by: Optional[str] = None

    class Config:
        from_attributes = True
