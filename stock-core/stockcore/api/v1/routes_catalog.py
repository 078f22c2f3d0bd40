# stockcore/api/v1/routes_catalog.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from stockcore.api.response import ApiResponse, success_response
from stockcore.db.base import get_db
from stockcore.domain.catalog.schemas import (
    CategoryCreate,
    CategoryOut,
    FamilyCreate,
    FamilyOut,
    SupplierCreate,
    SupplierOut,
    VariantCreate,
    VariantOut,
    WarehouseCreate,
    WarehouseOut,
)
from stockcore.domain.catalog.service import (
    create_category,
    create_family,
    create_supplier,
    create_variant,
    create_warehouse,
    get_variant,
)


router = APIRouter(prefix="/api/v1/catalog", tags=["catalog"])


@router.post("/warehouses", response_model=ApiResponse, status_code=201)
async def create_warehouse_endpoint(payload: WarehouseCreate, db: AsyncSession = Depends(get_db)):
    warehouse = await create_warehouse(db, payload)
    return success_response(WarehouseOut.model_validate(warehouse), "Warehouse created")

@router.post("/suppliers", response_model=ApiResponse, status_code=201)
async def create_supplier_endpoint(payload: SupplierCreate, db: AsyncSession = Depends(get_db)):
    supplier = await create_supplier(db, payload)
    return success_response(SupplierOut.model_validate(supplier), "Supplier created")

@router.post("/categories", response_model=ApiResponse, status_code=201)
async def create_category_endpoint(payload: CategoryCreate, db: AsyncSession = Depends(get_db)):
    category = await create_category(db, payload)
    return success_response(CategoryOut.model_validate(category), "Category created")

@router.post("/families", response_model=ApiResponse, status_code=201)
async def create_family_endpoint(payload: FamilyCreate, db: AsyncSession = Depends(get_db)):
    family = await create_family(db, payload)
    return success_response(FamilyOut.model_validate(family), "Product family created")

@router.post("/variants", response_model=ApiResponse, status_code=201)
async def create_variant_endpoint(payload: VariantCreate, db: AsyncSession = Depends(get_db)):
    variant = await create_variant(db, payload)
    return success_response(VariantOut.model_validate(variant), "Product variant created")

@router.get("/variants/{variant_id}", response_model=ApiResponse)
async def get_variant_endpoint(variant_id: int, db: AsyncSession = Depends(get_db)):
    variant = await get_variant(db, variant_id)
    return success_response(VariantOut.model_validate(variant))
