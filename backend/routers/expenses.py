from datetime import date
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional
import logging
from database import get_db
from crud import expenses as crud
from schemas.expenses import Expense, ExpenseCreate
from utils.auth_utils import get_current_user, get_user_identifier
from utils.errors import LEDGER_ERRORS, to_http_exception

router = APIRouter(prefix="/expenses", tags=["Expenses"], dependencies=[Depends(get_current_user)])
logger = logging.getLogger("expenses")

@router.get("/", response_model=List[Expense])
def read_expenses(start_date: Optional[date] = None, end_date: Optional[date] = None, db: Session = Depends(get_db)):
    return crud.get_expenses(db, start_date=start_date, end_date=end_date)

@router.post("/", response_model=Expense, status_code=status.HTTP_201_CREATED)
def create_expense(expense: ExpenseCreate, db: Session = Depends(get_db), user: dict = Depends(get_current_user)):
    try:
        db_expense = crud.create_expense(db, expense, get_user_identifier(user))
    except LEDGER_ERRORS as exc:
        logger.warning(f"Expense not added: {exc}")
        raise to_http_exception(exc) from exc
    logger.info(f"Expense {db_expense.id} of {db_expense.amount} ({db_expense.category.value}) added by user {get_user_identifier(user)}")
    return db_expense
