from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional
import logging
from database import get_db
from crud import orders as crud
from crud.payments import add_payment
from schemas.orders import OrderCreate, Order, OrderCreated, PaymentApplied
from schemas.order_items import OrderItem
from schemas.payments import Payment, PaymentCreate
from utils.auth_utils import get_current_user, get_user_identifier
from utils.errors import LEDGER_ERRORS, LedgerInconsistencyError, to_http_exception

router = APIRouter(prefix="/orders", tags=["Orders"], dependencies=[Depends(get_current_user)])
logger = logging.getLogger("orders")

def _get_order_or_404(db: Session, order_id: int):
    db_order = crud.get_order(db, order_id)
    if db_order is None:
        raise HTTPException(status_code=404, detail="Order not found")
    return db_order

@router.post("/", response_model=OrderCreated, status_code=status.HTTP_201_CREATED)
def create_order(order: OrderCreate, db: Session = Depends(get_db), user: dict = Depends(get_current_user)):
    try:
        db_order = crud.create_order(db, order, get_user_identifier(user))
    except LEDGER_ERRORS as exc:
        logger.warning(f"Order not created for user {get_user_identifier(user)}: {exc}")
        raise to_http_exception(exc) from exc
    return {"order_id": db_order.id, "order": db_order}

@router.get("/pending", response_model=List[Order])
def read_pending_orders(search: Optional[str] = None, db: Session = Depends(get_db)):
    """Unsettled orders matching an order number or part of a customer name."""
    return crud.list_pending_orders(db, search)

@router.get("/{order_id}", response_model=Order)
def read_order(order_id: int, db: Session = Depends(get_db)):
    return _get_order_or_404(db, order_id)

@router.get("/{order_id}/items", response_model=List[OrderItem])
def read_order_items(order_id: int, db: Session = Depends(get_db)):
    _get_order_or_404(db, order_id)
    return crud.get_order_items(db, order_id)

@router.get("/{order_id}/payments", response_model=List[Payment])
def read_order_payments(order_id: int, db: Session = Depends(get_db)):
    _get_order_or_404(db, order_id)
    return crud.get_order_payments(db, order_id)

@router.post("/{order_id}/payments", response_model=PaymentApplied, status_code=status.HTTP_201_CREATED)
def create_order_payment(order_id: int, payment: PaymentCreate, db: Session = Depends(get_db), user: dict = Depends(get_current_user)):
    try:
        db_order, db_payment = add_payment(db, order_id, payment.amount, payment.notes, get_user_identifier(user))
    except LedgerInconsistencyError as exc:
        logger.error(f"Order {order_id} payment rolled back, ledger drift: {exc}")
        raise to_http_exception(exc) from exc
    except LEDGER_ERRORS as exc:
        logger.warning(f"Payment on order {order_id} rejected: {exc}")
        raise to_http_exception(exc) from exc
    return {"updated_order": crud.get_order(db, order_id), "payment": db_payment}
