# stockcore/domain/procurement/schemas.py
from datetime import date, datetime
from decimal import Decimal
from pydantic import BaseModel, Field
from typing import List, Optional

from stockcore.db.models.procurements import ProcurementStatus

class ProcurementLine(BaseModel):
    variant_id: int
    quantity: Decimal
    unit_cost: Decimal = Field(ge=0)

class ProcurementCreate(BaseModel):
    supplier_id: int
    warehouse_id: int
    expected_delivery: Optional[date] = None
    status: Optional[ProcurementStatus] = None
    items: List[ProcurementLine] = Field(min_length=1)

class StatusUpdate(BaseModel):
    # kept as a plain string so unknown values reach the service check
    status: str

class ReceivedLine(BaseModel):
    item_id: int
    quantity_received: Decimal

class ReceiveItems(BaseModel):
    items: List[ReceivedLine] = Field(min_length=1)

class ProcurementItemOut(BaseModel):
    id: int
    variant_id: int
    quantity_ordered: Decimal
    quantity_received: Decimal
    unit_cost: Decimal
    line_total: Decimal

    class Config:
        from_attributes = True

class ProcurementOut(BaseModel):
    id: int
    supplier_id: int
    warehouse_id: int
    ordered_by_user_id: int
    created_at: datetime
    expected_delivery: Optional[date]
    status: ProcurementStatus
    total_cost: Decimal
    items: List[ProcurementItemOut] = []

    class Config:
        from_attributes = True
