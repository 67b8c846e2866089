"""
Fixed-point helpers for currency amounts.

All ledger comparisons go through integer minor units (paisa) so that a
payment typed as 0.1 + 0.2 compares equal to a balance of 0.30.
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from utils.errors import LedgerValidationError

CURRENCY = "PKR"
CENT = Decimal("0.01")
ZERO = Decimal("0.00")
# Largest value a Numeric(10, 2) column holds
MAX_CENTS = 9_999_999_999
MAX_AMOUNT = Decimal("99999999.99")


def to_decimal(value) -> Decimal:
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    try:
        # str() first so floats keep the digits the user typed, not their binary expansion
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise LedgerValidationError(f"'{value}' is not a valid amount.") from exc


def quantize(value) -> Decimal:
    try:
        return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise LedgerValidationError(f"'{value}' is not a valid amount.") from exc


def to_cents(value) -> int:
    return int(quantize(value) * 100)


def from_cents(cents: int) -> Decimal:
    return (Decimal(cents) / 100).quantize(CENT)


def add(*amounts) -> Decimal:
    return from_cents(sum(to_cents(a) for a in amounts))


def subtract(left, right) -> Decimal:
    return from_cents(to_cents(left) - to_cents(right))


def parse_amount(value, field: str = "Amount", allow_zero: bool = False) -> Decimal:
    """Validate a user-entered amount and return it rounded to cents."""
    amount = to_decimal(value)
    if not amount.is_finite():
        raise LedgerValidationError(f"'{value}' is not a valid amount.")
    if abs(amount) > MAX_AMOUNT:
        raise LedgerValidationError(f"{field} is too large.")
    if amount.as_tuple().exponent < -2 and amount != amount.quantize(CENT):
        raise LedgerValidationError(f"{field} cannot have more than 2 decimal places.")
    cents = to_cents(amount)
    if cents < 0 or (cents == 0 and not allow_zero):
        raise LedgerValidationError(f"{field} must be positive." if not allow_zero else f"{field} cannot be negative.")
    return from_cents(cents)


def format_currency(amount) -> str:
    """Render an amount the way the console shows it, e.g. 'PKR 1,500.00'."""
    if amount is None:
        return f"{CURRENCY} 0.00"
    value = quantize(amount)
    sign = "-" if value < 0 else ""
    return f"{sign}{CURRENCY} {abs(value):,.2f}"
