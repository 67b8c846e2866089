from sqlalchemy.orm import Session, selectinload
from typing import List, Optional
import logging
from models.customers import Customer
from models.menu_items import MenuItem
from models.orders import Order, OrderStatus
from models.order_items import OrderItem
from models.payments import Payment
from schemas.orders import OrderCreate
from schemas.order_items import CatalogItemLine
from crud.customers import build_customer
from crud.transactions import write_transaction
from utils import ledger
from utils.dates import local_now, local_today
from utils.errors import LedgerValidationError, RecordNotFoundError

logger = logging.getLogger("orders")

ADVANCE_PAYMENT_NOTE = "Advance payment"
MAX_ORDER_ID_DIGITS = 9


def _resolve_customer(db: Session, order: OrderCreate, user_id: str) -> Customer:
    if order.customer_id is not None and order.new_customer is not None:
        raise LedgerValidationError("Select an existing customer or add a new one, not both.")
    if order.customer_id is not None:
        customer = db.query(Customer).filter(Customer.id == order.customer_id).first()
        if not customer:
            raise RecordNotFoundError("Customer not found")
        return customer
    if order.new_customer is not None:
        customer = build_customer(order.new_customer, user_id)
        db.add(customer)
        db.flush()
        return customer
    raise LedgerValidationError("Please select or add a customer.")


def _price_items(db: Session, order: OrderCreate):
    """Return (ledger line, unsaved OrderItem) pairs with unit prices fixed at order time."""
    priced = []
    for line in order.items:
        if isinstance(line, CatalogItemLine):
            menu_item = db.query(MenuItem).filter(MenuItem.id == line.item_id, MenuItem.is_active.is_(True)).first()
            if not menu_item:
                raise LedgerValidationError(f"Menu item {line.item_id} does not exist.")
            checked = ledger.validate_line(line.quantity, menu_item.price)
            item = OrderItem(menu_item_id=menu_item.id)
        else:
            name = (line.name or "").strip()
            if not name:
                raise LedgerValidationError("Custom item name is required.")
            checked = ledger.validate_line(line.quantity, line.unit_price)
            item = OrderItem(custom_item_name=name)
        item.quantity = checked.quantity
        item.unit_price = checked.unit_price
        item.line_total = checked.line_total
        priced.append((checked, item))
    return priced


def create_order(db: Session, order: OrderCreate, user_id: str) -> Order:
    """Create an order with its items and, when money was taken up front, its first payment.

    Everything is written in one transaction, so a failure leaves neither a
    half-built order nor a new customer behind.
    """
    with write_transaction(db, "create the order"):
        customer = _resolve_customer(db, order, user_id)
        priced = _price_items(db, order)
        opening = ledger.open_order([checked for checked, _ in priced], order.advance_payment)

        db_order = Order(
            customer_id=customer.id,
            order_type=order.order_type,
            order_date=local_now(),
            delivery_date=order.delivery_date or local_today(),
            delivery_time=order.delivery_time,
            delivery_address=order.delivery_address or customer.address,
            notes=order.notes,
            total_amount=opening.total_amount,
            advance_payment=opening.advance_payment,
            status=opening.status,
            created_by=user_id,
        )
        db_order.items = [item for _, item in priced]
        if opening.advance_payment > 0:
            db_order.payments.append(
                Payment(amount=opening.advance_payment, notes=ADVANCE_PAYMENT_NOTE, created_by=user_id)
            )
        db.add(db_order)
    db.refresh(db_order)
    logger.info(
        f"Order {db_order.id} created for customer {customer.id} by user {user_id}: "
        f"total {opening.total_amount}, advance {opening.advance_payment}, status {opening.status.value}"
    )
    return db_order


def get_order(db: Session, order_id: int) -> Optional[Order]:
    return db.query(Order).options(selectinload(Order.customer)).filter(Order.id == order_id).first()


def get_order_for_update(db: Session, order_id: int) -> Order:
    """Fetch an order and lock its row until the current transaction ends."""
    db_order = db.query(Order).filter(Order.id == order_id).with_for_update().first()
    if not db_order:
        raise RecordNotFoundError("Order not found")
    return db_order


def list_pending_orders(db: Session, search: Optional[str]) -> List[Order]:
    term = (search or "").strip()
    if not term:
        return []
    query = db.query(Order).join(Order.customer).options(selectinload(Order.customer)).filter(
        Order.status != OrderStatus.FULFILLED
    )
    name_match = Customer.name.ilike(f"%{term}%")
    # Order numbers are plain ASCII digits that fit an INTEGER column
    if term.isascii() and term.isdecimal() and len(term) <= MAX_ORDER_ID_DIGITS:
        query = query.filter((Order.id == int(term)) | name_match)
    else:
        query = query.filter(name_match)
    return query.order_by(Order.order_date.desc(), Order.id.desc()).all()


def get_order_items(db: Session, order_id: int) -> List[OrderItem]:
    return db.query(OrderItem).options(selectinload(OrderItem.menu_item)).filter(
        OrderItem.order_id == order_id
    ).order_by(OrderItem.id).all()


def get_order_payments(db: Session, order_id: int) -> List[Payment]:
    return db.query(Payment).filter(Payment.order_id == order_id).order_by(Payment.payment_date, Payment.id).all()
