# stockcore/domain/inventory/schemas.py
from datetime import date
from decimal import Decimal
from pydantic import BaseModel
from typing import Optional

class StockLevelOut(BaseModel):
    warehouse_id: int
    variant_id: int
    quantity: Decimal
    batch_number: Optional[str] = None
    expiry_date: Optional[date] = None

    class Config:
        from_attributes = True

class StockAdjust(BaseModel):
    warehouse_id: int
    variant_id: int
    quantity_delta: Decimal
