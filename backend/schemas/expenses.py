from pydantic import BaseModel
from datetime import date
from decimal import Decimal
from typing import Optional
from models.expenses import ExpenseCategory
from schemas.common import Money

class ExpenseBase(BaseModel):
    description: str
    category: ExpenseCategory = ExpenseCategory.INGREDIENTS

class ExpenseCreate(ExpenseBase):
    amount: Decimal
    expense_date: Optional[date] = None

class Expense(ExpenseBase):
    id: int
    amount: Money
    expense_date: date
    created_by: Optional[str] = None

    class Config:
        from_attributes = True
