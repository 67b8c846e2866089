from pydantic import BaseModel
from schemas.common import Money

class MenuItemBase(BaseModel):
    name: str
    price: Money

class MenuItemCreate(MenuItemBase):
    pass

class MenuItem(MenuItemBase):
    id: int
    is_active: bool = True

    class Config:
        from_attributes = True
