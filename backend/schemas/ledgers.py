from pydantic import BaseModel
from datetime import date
from typing import List
from schemas.common import Money

# Supplier statement
class PartyLedgerEntry(BaseModel):
    date: date
    description: str
    debit: Money
    credit: Money
    balance: Money

    class Config:
        from_attributes = True

class PartyLedger(BaseModel):
    party_name: str
    entries: List[PartyLedgerEntry]
    total_amount: Money
    amount_paid: Money
    pending_amount: Money
