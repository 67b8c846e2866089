from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
import logging
from database import get_db
from crud import menu_items as crud
from schemas.menu_items import MenuItem, MenuItemCreate
from utils.auth_utils import get_current_user, get_user_identifier
from utils.errors import LEDGER_ERRORS, to_http_exception

router = APIRouter(prefix="/menu-items", tags=["Menu Items"], dependencies=[Depends(get_current_user)])
logger = logging.getLogger("menu_items")

@router.get("/", response_model=List[MenuItem])
def read_menu_items(db: Session = Depends(get_db)):
    return crud.get_menu_items(db)

@router.post("/", response_model=MenuItem, status_code=status.HTTP_201_CREATED)
def create_menu_item(item: MenuItemCreate, db: Session = Depends(get_db), user: dict = Depends(get_current_user)):
    try:
        db_item = crud.create_menu_item(db, item, get_user_identifier(user))
    except LEDGER_ERRORS as exc:
        logger.warning(f"Menu item '{item.name}' not created: {exc}")
        raise to_http_exception(exc) from exc
    logger.info(f"Menu item '{db_item.name}' created at {db_item.price} by user {get_user_identifier(user)}")
    return db_item
