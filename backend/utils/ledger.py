"""
Ledger rules for orders, customers and supply parties.

Nothing in here touches the database. The crud layer loads rows, hands
them to these functions and persists whatever they return, so the same
rules apply whether a figure is shown on screen or used to accept a write.
"""
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional

from models.orders import OrderStatus
from utils import money
from utils.errors import LedgerInconsistencyError, LedgerValidationError

DEBIT = "debit"
CREDIT = "credit"
# Order item quantities live in an INTEGER column
MAX_QUANTITY = 2_147_483_647


# --- Orders -----------------------------------------------------------------

def compute_status(total, paid) -> OrderStatus:
    total_cents = money.to_cents(total)
    paid_cents = money.to_cents(paid)
    if paid_cents >= total_cents:
        return OrderStatus.FULFILLED
    if paid_cents > 0:
        return OrderStatus.PARTIALLY_PAID
    return OrderStatus.PENDING


def remaining_balance(total, paid) -> Decimal:
    return money.subtract(total, paid)


@dataclass(frozen=True)
class OrderLine:
    quantity: int
    unit_price: Decimal

    @property
    def line_total(self) -> Decimal:
        return money.from_cents(self.quantity * money.to_cents(self.unit_price))


def validate_line(quantity, unit_price) -> OrderLine:
    if quantity is None or int(quantity) != quantity or quantity < 1:
        raise LedgerValidationError("Quantity must be a whole number of at least 1.")
    if quantity > MAX_QUANTITY:
        raise LedgerValidationError("Quantity is too large.")
    price = money.parse_amount(unit_price, field="Unit price", allow_zero=True)
    if quantity * money.to_cents(price) > money.MAX_CENTS:
        raise LedgerValidationError("Line total is too large.")
    return OrderLine(quantity=int(quantity), unit_price=price)


def order_total(lines: Iterable[OrderLine]) -> Decimal:
    cents = sum(money.to_cents(line.line_total) for line in lines)
    if cents > money.MAX_CENTS:
        raise LedgerValidationError("Order total is too large.")
    return money.from_cents(cents)


@dataclass(frozen=True)
class OrderOpening:
    total_amount: Decimal
    advance_payment: Decimal
    remaining_amount: Decimal
    status: OrderStatus


def open_order(lines: List[OrderLine], advance) -> OrderOpening:
    """Price a new order and check the advance paid against it."""
    if not lines:
        raise LedgerValidationError("Order must contain at least one item.")
    total = order_total(lines)
    advance_amount = money.parse_amount(advance, field="Advance payment", allow_zero=True)
    if money.to_cents(advance_amount) > money.to_cents(total):
        raise LedgerValidationError("Advance payment cannot exceed the total amount.")
    return OrderOpening(
        total_amount=total,
        advance_payment=advance_amount,
        remaining_amount=remaining_balance(total, advance_amount),
        status=compute_status(total, advance_amount),
    )


def validate_payment(remaining, amount) -> Decimal:
    """Return the payment rounded to cents, or raise if it cannot be accepted.

    `remaining` must come from a fresh read of the order, not a cached view.
    """
    value = money.parse_amount(amount)
    if money.to_cents(value) > money.to_cents(remaining):
        raise LedgerValidationError(
            f"Payment cannot exceed the remaining balance of {money.format_currency(remaining)}."
        )
    return value


@dataclass(frozen=True)
class PaymentOutcome:
    amount: Decimal
    advance_payment: Decimal
    remaining_amount: Decimal
    status: OrderStatus


def apply_payment(total, paid, amount) -> PaymentOutcome:
    value = validate_payment(remaining_balance(total, paid), amount)
    new_paid = money.add(paid, value)
    return PaymentOutcome(
        amount=value,
        advance_payment=new_paid,
        remaining_amount=remaining_balance(total, new_paid),
        status=compute_status(total, new_paid),
    )


def check_order_consistency(order_id, total, advance_payment, status, payment_amounts) -> None:
    """Raise if the cached advance/status of an order drifted from its payment log."""
    logged = money.add(*payment_amounts)
    if money.to_cents(logged) != money.to_cents(advance_payment):
        raise LedgerInconsistencyError(
            f"Order {order_id}: payments sum to {money.format_currency(logged)} "
            f"but advance payment is {money.format_currency(advance_payment)}."
        )
    if money.to_cents(advance_payment) > money.to_cents(total):
        raise LedgerInconsistencyError(f"Order {order_id} is paid beyond its total.")
    expected = compute_status(total, advance_payment)
    if status != expected:
        raise LedgerInconsistencyError(
            f"Order {order_id}: status is {status.value} but payments imply {expected.value}."
        )


# --- Customers --------------------------------------------------------------

@dataclass(frozen=True)
class CustomerTotals:
    total_orders: int
    total_spent: Decimal
    total_pending: Decimal


def aggregate_customer(orders) -> CustomerTotals:
    """Roll up one customer's orders.

    Spent is money collected (advance payments), not money billed; pending
    only counts orders that are not yet fulfilled.
    """
    orders = list(orders)
    spent = money.add(*(o.advance_payment for o in orders))
    open_balances = [o.remaining_amount for o in orders if o.status != OrderStatus.FULFILLED]
    pending = money.add(*open_balances)
    return CustomerTotals(total_orders=len(orders), total_spent=spent, total_pending=pending)


# --- Supply parties ---------------------------------------------------------

@dataclass(frozen=True)
class LedgerTransaction:
    kind: str
    entry_date: date
    amount: Decimal
    description: str
    record_id: int


@dataclass(frozen=True)
class LedgerLine:
    kind: str
    date: date
    description: str
    debit: Decimal
    credit: Decimal
    balance: Decimal
    record_id: int


def supply_transaction(bill) -> LedgerTransaction:
    return LedgerTransaction(
        kind=DEBIT,
        entry_date=bill.supply_date,
        amount=money.quantize(bill.total_amount),
        description=f"Supply #{bill.id} - {bill.details or 'Goods/Services'}",
        record_id=bill.id,
    )


def party_payment_transaction(payment) -> LedgerTransaction:
    return LedgerTransaction(
        kind=CREDIT,
        entry_date=payment.payment_date,
        amount=money.quantize(payment.amount_paid),
        description=f"Payment - {payment.note or f'Towards Invoice #{payment.party_id}'}",
        record_id=payment.id,
    )


def build_ledger(bills, payments) -> List[LedgerLine]:
    """Merge bills (debits) and payments (credits) into a running statement.

    Bills go in first, then payments, each in id order; the stable sort on
    date keeps that order for entries sharing a date.
    """
    transactions = [supply_transaction(b) for b in sorted(bills, key=lambda b: b.id)]
    transactions += [party_payment_transaction(p) for p in sorted(payments, key=lambda p: p.id)]
    transactions.sort(key=lambda t: t.entry_date)

    balance = 0
    lines = []
    for t in transactions:
        cents = money.to_cents(t.amount)
        balance += cents if t.kind == DEBIT else -cents
        lines.append(
            LedgerLine(
                kind=t.kind,
                date=t.entry_date,
                description=t.description,
                debit=t.amount if t.kind == DEBIT else money.ZERO,
                credit=t.amount if t.kind == CREDIT else money.ZERO,
                balance=money.from_cents(balance),
                record_id=t.record_id,
            )
        )
    return lines


@dataclass(frozen=True)
class SupplierTotals:
    total_amount: Decimal
    amount_paid: Decimal
    pending_amount: Decimal


def supplier_totals(bills, payments) -> SupplierTotals:
    total = money.add(*(b.total_amount for b in bills))
    amount_paid = money.add(*(p.amount_paid for p in payments))
    return SupplierTotals(total_amount=total, amount_paid=amount_paid, pending_amount=money.subtract(total, amount_paid))


def validate_party_payment(pending, amount) -> Decimal:
    value = money.parse_amount(amount)
    if money.to_cents(value) > money.to_cents(pending):
        raise LedgerValidationError(
            f"Payment cannot exceed the pending balance of {money.format_currency(pending)}."
        )
    return value


def latest_bill(bills) -> Optional[object]:
    """The bill a supplier-level payment is filed against: newest date, then highest id."""
    bills = list(bills)
    if not bills:
        return None
    return max(bills, key=lambda b: (b.supply_date, b.id))
