# stockcore/domain/transfers/schemas.py
from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field
from typing import List

from stockcore.db.models.inventory import TransferStatus

class TransferLine(BaseModel):
    variant_id: int
    quantity: Decimal

class TransferCreate(BaseModel):
    source_warehouse_id: int
    destination_warehouse_id: int
    items: List[TransferLine] = Field(min_length=1)

class TransferItemOut(BaseModel):
    id: int
    variant_id: int
    quantity: Decimal

    class Config:
        from_attributes = True

class TransferOut(BaseModel):
    id: int
    source_warehouse_id: int
    destination_warehouse_id: int
    authorized_by_user_id: int
    transferred_at: datetime
    status: TransferStatus
    items: List[TransferItemOut] = []

    class Config:
        from_attributes = True
