from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional
import logging
from database import get_db
from crud import customers as crud
from schemas.customers import Customer, CustomerCreate, CustomerHistoryEntry
from schemas.orders import Order
from utils.auth_utils import get_current_user, get_user_identifier
from utils.errors import LEDGER_ERRORS, to_http_exception

router = APIRouter(prefix="/customers", tags=["Customers"], dependencies=[Depends(get_current_user)])
logger = logging.getLogger("customers")

@router.get("/", response_model=List[Customer])
def search_customers(search: Optional[str] = None, db: Session = Depends(get_db)):
    return crud.search_customers(db, search)

@router.post("/", response_model=Customer, status_code=status.HTTP_201_CREATED)
def create_customer(customer: CustomerCreate, db: Session = Depends(get_db), user: dict = Depends(get_current_user)):
    try:
        db_customer = crud.create_customer(db, customer, get_user_identifier(user))
    except LEDGER_ERRORS as exc:
        logger.warning(f"Customer not created: {exc}")
        raise to_http_exception(exc) from exc
    logger.info(f"Customer {db_customer.id} '{db_customer.name}' created by user {get_user_identifier(user)}")
    return db_customer

@router.get("/history", response_model=List[CustomerHistoryEntry])
def read_customer_history(search: Optional[str] = None, db: Session = Depends(get_db)):
    """Every matching customer with order count, money collected and money still owed."""
    return crud.get_customer_history(db, search)

@router.get("/{customer_id}/orders", response_model=List[Order])
def read_customer_orders(customer_id: int, db: Session = Depends(get_db)):
    if crud.get_customer(db, customer_id) is None:
        raise HTTPException(status_code=404, detail="Customer not found")
    return crud.get_customer_orders(db, customer_id)
