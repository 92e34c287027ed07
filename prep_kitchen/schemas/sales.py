"""Sales data schemas: units sold per menu item per business date."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict


class SalesDataOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    menu_item_id: int
    menu_item_name: Optional[str] = None
    sales_date: date
    quantity_sold: int
