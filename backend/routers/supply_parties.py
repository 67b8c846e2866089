from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
import logging
from database import get_db
from crud import supply_parties as crud
from schemas.supply_parties import SupplyBill, SupplyBillCreate, SupplierAggregate, PartyTransactionCreate
from schemas.ledgers import PartyLedger
from utils.auth_utils import get_current_user, get_user_identifier
from utils.errors import LEDGER_ERRORS, to_http_exception

router = APIRouter(prefix="/supply-parties", tags=["Supply Parties"], dependencies=[Depends(get_current_user)])
logger = logging.getLogger("supply_parties")

@router.get("/", response_model=List[SupplierAggregate])
def read_supply_parties(db: Session = Depends(get_db)):
    return crud.list_supply_parties(db)

@router.get("/names", response_model=List[str])
def read_party_names(db: Session = Depends(get_db)):
    return crud.list_party_names(db)

@router.post("/", response_model=SupplyBill, status_code=status.HTTP_201_CREATED)
def create_supply_bill(bill: SupplyBillCreate, db: Session = Depends(get_db), user: dict = Depends(get_current_user)):
    try:
        return crud.add_supply_bill(db, bill, get_user_identifier(user))
    except LEDGER_ERRORS as exc:
        logger.warning(f"Supply bill for '{bill.party_name}' not added: {exc}")
        raise to_http_exception(exc) from exc

@router.get("/ledger", response_model=PartyLedger)
def read_party_ledger(party_name: str, db: Session = Depends(get_db)):
    """Statement for one supplier: bills and payments in date order with a running balance."""
    try:
        return crud.get_party_ledger(db, party_name)
    except LEDGER_ERRORS as exc:
        raise to_http_exception(exc) from exc

@router.post("/transactions", response_model=PartyLedger, status_code=status.HTTP_201_CREATED)
def create_party_transaction(transaction: PartyTransactionCreate, db: Session = Depends(get_db), user: dict = Depends(get_current_user)):
    try:
        return crud.add_party_transaction(db, transaction, get_user_identifier(user))
    except LEDGER_ERRORS as exc:
        logger.warning(f"{transaction.type.value} for '{transaction.party_name}' rejected: {exc}")
        raise to_http_exception(exc) from exc
