from pydantic import BaseModel
from datetime import date
from decimal import Decimal
from typing import Optional
import enum
from schemas.common import Money

class TransactionType(str, enum.Enum):
    PAYMENT = "Payment"
    CHARGE = "Charge"

class SupplyBillCreate(BaseModel):
    party_name: str
    supply_date: Optional[date] = None
    total_amount: Decimal
    details: Optional[str] = None

class SupplyBill(BaseModel):
    id: int
    party_name: str
    supply_date: date
    total_amount: Money
    details: Optional[str] = None

    class Config:
        from_attributes = True

class PartyPayment(BaseModel):
    id: int
    party_id: int
    payment_date: date
    amount_paid: Money
    note: Optional[str] = None

    class Config:
        from_attributes = True

class SupplierAggregate(BaseModel):
    id: int  # latest bill, the one new payments are filed against
    party_name: str
    supply_date: date
    total_amount: Money
    amount_paid: Money
    pending_amount: Money

class PartyTransactionCreate(BaseModel):
    type: TransactionType
    party_name: str
    amount: Decimal
    note: Optional[str] = None
    party_id: Optional[int] = None
