from sqlalchemy.orm import Session
from typing import List, Optional
import logging
from models.supply_parties import SupplyParty, PartyPayment
from schemas.supply_parties import SupplyBillCreate, PartyTransactionCreate, TransactionType
from crud.transactions import write_transaction
from utils import ledger, money
from utils.dates import local_today
from utils.errors import LedgerValidationError, RecordNotFoundError

logger = logging.getLogger("supply_parties")


def normalize_party_name(party_name: Optional[str]) -> str:
    name = (party_name or "").strip()
    if not name:
        raise LedgerValidationError("Party name is required.")
    return name


def get_bills(db: Session, party_name: str, for_update: bool = False) -> List[SupplyParty]:
    query = db.query(SupplyParty).filter(SupplyParty.party_name == party_name).order_by(SupplyParty.id)
    if for_update:
        query = query.with_for_update()
    return query.all()


def get_party_payments(db: Session, bill_ids: List[int]) -> List[PartyPayment]:
    if not bill_ids:
        return []
    return db.query(PartyPayment).filter(PartyPayment.party_id.in_(bill_ids)).order_by(PartyPayment.id).all()


def list_party_names(db: Session) -> List[str]:
    rows = db.query(SupplyParty.party_name).distinct().order_by(SupplyParty.party_name).all()
    return [name for (name,) in rows]


def list_supply_parties(db: Session) -> List[dict]:
    """One row per supplier name, totals taken across every bill under that name."""
    bills_by_name = {}
    for bill in db.query(SupplyParty).order_by(SupplyParty.party_name, SupplyParty.id).all():
        bills_by_name.setdefault(bill.party_name, []).append(bill)
    payments_by_bill = {}
    for payment in db.query(PartyPayment).order_by(PartyPayment.id).all():
        payments_by_bill.setdefault(payment.party_id, []).append(payment)

    suppliers = []
    for name, bills in bills_by_name.items():
        payments = [p for b in bills for p in payments_by_bill.get(b.id, [])]
        totals = ledger.supplier_totals(bills, payments)
        latest = ledger.latest_bill(bills)
        suppliers.append({
            "id": latest.id,
            "party_name": name,
            "supply_date": latest.supply_date,
            "total_amount": totals.total_amount,
            "amount_paid": totals.amount_paid,
            "pending_amount": totals.pending_amount,
        })
    return suppliers


def add_supply_bill(db: Session, bill: SupplyBillCreate, user_id: str) -> SupplyParty:
    db_bill = SupplyParty(
        party_name=normalize_party_name(bill.party_name),
        supply_date=bill.supply_date or local_today(),
        total_amount=money.parse_amount(bill.total_amount, field="Total amount"),
        details=bill.details,
        created_by=user_id,
    )
    with write_transaction(db, "add the supply bill"):
        db.add(db_bill)
    db.refresh(db_bill)
    logger.info(f"Supply bill {db_bill.id} of {db_bill.total_amount} added for '{db_bill.party_name}' by user {user_id}")
    return db_bill


def _ledger_view(party_name: str, bills, payments) -> dict:
    totals = ledger.supplier_totals(bills, payments)
    return {
        "party_name": party_name,
        "entries": ledger.build_ledger(bills, payments),
        "total_amount": totals.total_amount,
        "amount_paid": totals.amount_paid,
        "pending_amount": totals.pending_amount,
    }


def get_party_ledger(db: Session, party_name: str) -> dict:
    name = normalize_party_name(party_name)
    bills = get_bills(db, name)
    if not bills:
        raise RecordNotFoundError("Supply party not found")
    payments = get_party_payments(db, [b.id for b in bills])
    return _ledger_view(name, bills, payments)


def _target_bill(bills: List[SupplyParty], party_id: Optional[int]) -> SupplyParty:
    if party_id is None:
        return ledger.latest_bill(bills)
    for bill in bills:
        if bill.id == party_id:
            return bill
    raise LedgerValidationError(f"Bill #{party_id} does not belong to this party.")


def add_party_transaction(db: Session, transaction: PartyTransactionCreate, user_id: str) -> dict:
    """Record a Payment or Charge for a supplier and return the rebuilt ledger.

    A payment is checked against the supplier's pending balance computed from
    the bill and payment rows locked in this transaction.
    """
    name = normalize_party_name(transaction.party_name)
    with write_transaction(db, "record the transaction"):
        bills = get_bills(db, name, for_update=True)
        if not bills:
            raise RecordNotFoundError("Supply party not found")

        if transaction.type == TransactionType.PAYMENT:
            payments = get_party_payments(db, [b.id for b in bills])
            pending = ledger.supplier_totals(bills, payments).pending_amount
            amount = ledger.validate_party_payment(pending, transaction.amount)
            target = _target_bill(bills, transaction.party_id)
            db.add(PartyPayment(
                party_id=target.id,
                payment_date=local_today(),
                amount_paid=amount,
                note=transaction.note,
                created_by=user_id,
            ))
        else:
            amount = money.parse_amount(transaction.amount)
            db.add(SupplyParty(
                party_name=name,
                supply_date=local_today(),
                total_amount=amount,
                details=transaction.note,
                created_by=user_id,
            ))
    logger.info(f"{transaction.type.value} of {amount} recorded for '{name}' by user {user_id}")
    return get_party_ledger(db, name)
