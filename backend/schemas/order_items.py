from pydantic import BaseModel, Field
from typing import Annotated, Literal, Optional, Union
from decimal import Decimal
from schemas.common import Money

class CatalogItemLine(BaseModel):
    """A line priced from the menu; the unit price is snapshotted on the server."""
    kind: Literal["catalog"] = "catalog"
    item_id: int
    quantity: int = 1

class CustomItemLine(BaseModel):
    kind: Literal["custom"] = "custom"
    name: str
    unit_price: Decimal
    quantity: int = 1

OrderItemCreate = Annotated[Union[CatalogItemLine, CustomItemLine], Field(discriminator="kind")]

class OrderItem(BaseModel):
    id: int
    order_id: int
    menu_item_id: Optional[int] = None
    menu_item_name: Optional[str] = None
    custom_item_name: Optional[str] = None
    quantity: int
    unit_price: Money
    line_total: Money

    class Config:
        from_attributes = True
