# stockcore/domain/field_collections/schemas.py
from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel
from typing import Optional

class CollectionCreate(BaseModel):
    variant_id: int
    supplier_id: int
    # falls back to the configured main warehouse
    warehouse_id: Optional[int] = None
    weight: Decimal
    collected_at: Optional[datetime] = None
    notes: Optional[str] = None

class CollectionOut(BaseModel):
    id: int
    variant_id: int
    supplier_id: int
    agent_id: int
    warehouse_id: int
    weight: Decimal
    collected_at: datetime
    notes: Optional[str]

    class Config:
        from_attributes = True
