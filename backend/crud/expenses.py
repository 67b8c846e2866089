from sqlalchemy.orm import Session
from datetime import date
from typing import List, Optional
from models.expenses import Expense
from schemas.expenses import ExpenseCreate
from crud.transactions import write_transaction
from utils import money
from utils.dates import local_today
from utils.errors import LedgerValidationError


def get_expenses(db: Session, start_date: Optional[date] = None, end_date: Optional[date] = None) -> List[Expense]:
    query = db.query(Expense)
    if start_date:
        query = query.filter(Expense.expense_date >= start_date)
    if end_date:
        query = query.filter(Expense.expense_date <= end_date)
    return query.order_by(Expense.expense_date.desc(), Expense.id.desc()).all()


def create_expense(db: Session, expense: ExpenseCreate, user_id: str) -> Expense:
    description = (expense.description or "").strip()
    if not description:
        raise LedgerValidationError("Please fill out all required fields.")
    amount = money.parse_amount(expense.amount, allow_zero=True)

    db_expense = Expense(
        description=description,
        amount=amount,
        category=expense.category,
        expense_date=expense.expense_date or local_today(),
        created_by=user_id,
    )
    with write_transaction(db, "add the expense"):
        db.add(db_expense)
    db.refresh(db_expense)
    return db_expense
