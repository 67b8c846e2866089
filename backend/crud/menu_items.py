from sqlalchemy.orm import Session
from typing import List, Optional
from models.menu_items import MenuItem
from schemas.menu_items import MenuItemCreate
from crud.transactions import write_transaction
from utils import money
from utils.errors import LedgerValidationError


def get_menu_item(db: Session, item_id: int) -> Optional[MenuItem]:
    return db.query(MenuItem).filter(MenuItem.id == item_id, MenuItem.is_active.is_(True)).first()


def get_menu_items(db: Session) -> List[MenuItem]:
    return db.query(MenuItem).filter(MenuItem.is_active.is_(True)).order_by(MenuItem.name).all()


def create_menu_item(db: Session, item: MenuItemCreate, user_id: str) -> MenuItem:
    name = (item.name or "").strip()
    if not name:
        raise LedgerValidationError("Menu item name is required.")
    if db.query(MenuItem).filter(MenuItem.name == name).first():
        raise LedgerValidationError("Menu item with this name already exists.")
    price = money.parse_amount(item.price, field="Price", allow_zero=True)

    db_item = MenuItem(name=name, price=price, created_by=user_id)
    with write_transaction(db, "create the menu item"):
        db.add(db_item)
    db.refresh(db_item)
    return db_item
