from sqlalchemy import func
from sqlalchemy.orm import Session
from datetime import date
from typing import Optional
from models.expenses import Expense
from models.orders import Order, OrderStatus
from utils import money
from utils.dates import local_day_bounds, local_today


def get_dashboard_stats(db: Session, day: Optional[date] = None) -> dict:
    """Today's order count, sales and expenses, plus the outstanding balance across all orders."""
    day = day or local_today()
    start, end = local_day_bounds(day)

    orders_count, todays_sales = db.query(
        func.count(Order.id), func.coalesce(func.sum(Order.total_amount), 0)
    ).filter(Order.order_date >= start, Order.order_date < end).one()

    # Pending debt is not limited to today
    pending_amount = db.query(
        func.coalesce(func.sum(Order.total_amount - Order.advance_payment), 0)
    ).filter(Order.status != OrderStatus.FULFILLED).scalar()

    todays_expenses = db.query(func.coalesce(func.sum(Expense.amount), 0)).filter(
        Expense.expense_date == day
    ).scalar()

    return {
        "orders_count": orders_count,
        "todays_sales": money.quantize(todays_sales),
        "pending_amount": money.quantize(pending_amount),
        "todays_expenses": money.quantize(todays_expenses),
    }
