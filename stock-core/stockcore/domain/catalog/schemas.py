# stockcore/domain/catalog/schemas.py
from decimal import Decimal
from pydantic import BaseModel, Field
from typing import Optional

from stockcore.db.models.warehouses import WarehouseType

class WarehouseCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    type: WarehouseType = WarehouseType.STORE
    address: Optional[str] = None

class WarehouseOut(BaseModel):
    id: int
    name: str
    type: WarehouseType
    address: Optional[str]

    class Config:
        from_attributes = True

class SupplierCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    phone: Optional[str] = None
    location: Optional[str] = None

class SupplierOut(BaseModel):
    id: int
    name: str
    phone: Optional[str]
    location: Optional[str]

    class Config:
        from_attributes = True

class CategoryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)

class CategoryOut(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True

class FamilyCreate(BaseModel):
    category_id: int
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = None

class FamilyOut(BaseModel):
    id: int
    category_id: int
    name: str
    description: Optional[str]

    class Config:
        from_attributes = True

class VariantCreate(BaseModel):
    family_id: int
    name: str = Field(min_length=1, max_length=100)
    sku: str = Field(min_length=1, max_length=100)
    barcode: Optional[str] = None
    unit: str = "pcs"
    cost_price: Decimal = Decimal("0")
    selling_price: Decimal = Decimal("0")
    is_manufactured: bool = False
    conversion_factor: Decimal = Decimal("1")

class VariantOut(BaseModel):
    id: int
    family_id: int
    name: str
    sku: str
    barcode: Optional[str]
    unit: str
    cost_price: Decimal
    selling_price: Decimal
    is_manufactured: bool
    conversion_factor: Decimal

    class Config:
        from_attributes = True
