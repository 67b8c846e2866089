from sqlalchemy.orm import Session
from typing import Tuple
import logging
from models.orders import Order
from models.payments import Payment
from crud.orders import get_order_for_update
from crud.transactions import write_transaction
from utils import ledger

logger = logging.getLogger("payments")


def add_payment(db: Session, order_id: int, amount, notes: str, user_id: str) -> Tuple[Order, Payment]:
    """Record a payment against an order and refresh the order's cached balance.

    The order row is locked and re-read inside the transaction, so the amount is
    checked against the balance as it stands now. The Payment row and the new
    advance/status are committed together, and only if the order still agrees
    with its full payment log; otherwise nothing is written.
    """
    with write_transaction(db, "record the payment"):
        db_order = get_order_for_update(db, order_id)
        outcome = ledger.apply_payment(db_order.total_amount, db_order.advance_payment, amount)

        db_payment = Payment(order_id=db_order.id, amount=outcome.amount, notes=notes, created_by=user_id)
        db.add(db_payment)
        db_order.advance_payment = outcome.advance_payment
        db_order.status = outcome.status
        db_order.updated_by = user_id
        db.flush()
        verify_order_ledger(db, db_order)
    db.refresh(db_order)
    db.refresh(db_payment)
    logger.info(
        f"Payment {db_payment.id} of {outcome.amount} recorded on order {order_id} by user {user_id}; "
        f"remaining {outcome.remaining_amount}, status {outcome.status.value}"
    )
    return db_order, db_payment


def verify_order_ledger(db: Session, db_order: Order) -> None:
    """Check that an order's cached advance and status still match its payment rows."""
    amounts = [p.amount for p in db.query(Payment).filter(Payment.order_id == db_order.id).all()]
    ledger.check_order_consistency(
        db_order.id, db_order.total_amount, db_order.advance_payment, db_order.status, amounts
    )
