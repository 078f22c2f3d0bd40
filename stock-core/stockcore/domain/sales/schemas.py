# stockcore/domain/sales/schemas.py
from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field
from typing import List, Optional

from stockcore.db.models.sales import PaymentMethod

class SaleLine(BaseModel):
    variant_id: int
    quantity: Decimal
    unit_price: Decimal = Field(ge=0)

class SaleCreate(BaseModel):
    warehouse_id: int
    customer_name: Optional[str] = None
    tax_amount: Decimal = Decimal("0")
    discount_amount: Decimal = Decimal("0")
    payment_method: PaymentMethod
    items: List[SaleLine] = Field(min_length=1)

class SaleItemOut(BaseModel):
    id: int
    variant_id: int
    quantity: Decimal
    unit_price: Decimal
    line_total: Decimal

    class Config:
        from_attributes = True

class SaleOut(BaseModel):
    id: int
    warehouse_id: int
    customer_name: Optional[str]
    total_amount: Decimal
    tax_amount: Decimal
    discount_amount: Decimal
    payment_method: PaymentMethod
    processed_by_user_id: int
    created_at: datetime
    items: List[SaleItemOut] = []

    class Config:
        from_attributes = True
