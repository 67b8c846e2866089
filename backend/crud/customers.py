from sqlalchemy.orm import Session, selectinload
from sqlalchemy import or_
from typing import List, Optional
from models.customers import Customer
from models.orders import Order
from schemas.customers import CustomerCreate
from crud.transactions import write_transaction
from utils import ledger
from utils.errors import LedgerValidationError

MIN_SEARCH_LENGTH = 2


def get_customer(db: Session, customer_id: int) -> Optional[Customer]:
    return db.query(Customer).filter(Customer.id == customer_id).first()


def _matches(term: str):
    pattern = f"%{term}%"
    return or_(Customer.name.ilike(pattern), Customer.phone.ilike(pattern))


def search_customers(db: Session, search: str, limit: int = 20) -> List[Customer]:
    term = (search or "").strip()
    if len(term) < MIN_SEARCH_LENGTH:
        return []
    return db.query(Customer).filter(_matches(term)).order_by(Customer.name).limit(limit).all()


def build_customer(customer: CustomerCreate, user_id: str) -> Customer:
    name = (customer.name or "").strip()
    phone = (customer.phone or "").strip()
    if not name or not phone:
        raise LedgerValidationError("New customer name and phone are required.")
    address = (customer.address or "").strip() or None
    return Customer(name=name, phone=phone, address=address, created_by=user_id)


def create_customer(db: Session, customer: CustomerCreate, user_id: str) -> Customer:
    db_customer = build_customer(customer, user_id)
    with write_transaction(db, "create the customer"):
        db.add(db_customer)
    db.refresh(db_customer)
    return db_customer


def get_customer_history(db: Session, search: Optional[str] = None) -> List[dict]:
    """Customer list with order totals, recomputed from the orders on every call."""
    query = db.query(Customer).options(selectinload(Customer.orders))
    term = (search or "").strip()
    if term:
        query = query.filter(_matches(term))

    rows = []
    for customer in query.order_by(Customer.name).all():
        totals = ledger.aggregate_customer(customer.orders)
        rows.append({
            "customer_id": customer.id,
            "name": customer.name,
            "phone": customer.phone,
            "address": customer.address,
            "total_orders": totals.total_orders,
            "total_spent": totals.total_spent,
            "total_pending": totals.total_pending,
            "last_order_date": max((o.order_date for o in customer.orders), default=None),
        })

    # Most recent customers first; customers without orders keep name order at the end
    with_orders = sorted((r for r in rows if r["last_order_date"]), key=lambda r: r["last_order_date"], reverse=True)
    return with_orders + [r for r in rows if not r["last_order_date"]]


def get_customer_orders(db: Session, customer_id: int) -> List[Order]:
    return db.query(Order).options(selectinload(Order.customer)).filter(
        Order.customer_id == customer_id
    ).order_by(Order.order_date.desc(), Order.id.desc()).all()
