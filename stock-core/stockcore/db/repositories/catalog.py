
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import select

from stockcore.db.models.catalog import Category, ProductFamily, ProductVariant
from stockcore.db.models.suppliers import Supplier
from stockcore.db.models.warehouses import Warehouse

async def get_warehouse_by_id(
    db: AsyncSession,
    warehouse_id: int
) -> Optional[Warehouse]:
    return await db.get(Warehouse, warehouse_id)

async def get_supplier_by_id(
    db: AsyncSession,
    supplier_id: int
) -> Optional[Supplier]:
    return await db.get(Supplier, supplier_id)

async def get_category_by_id(
    db: AsyncSession,
    category_id: int
) -> Optional[Category]:
    return await db.get(Category, category_id)

async def get_family_by_id(
    db: AsyncSession,
    family_id: int
) -> Optional[ProductFamily]:
    return await db.get(ProductFamily, family_id)

async def get_variant_by_id(
    db: AsyncSession,
    variant_id: int
) -> Optional[ProductVariant]:
    return await db.get(ProductVariant, variant_id)

async def get_variant_by_sku(
    db: AsyncSession,
    sku: str
) -> Optional[ProductVariant]:
    result = await db.execute(
        select(ProductVariant).where(ProductVariant.sku == sku)
    )
    return result.scalar_one_or_none()

async def get_variant_by_barcode(
    db: AsyncSession,
    barcode: str
) -> Optional[ProductVariant]:
    result = await db.execute(
        select(ProductVariant).where(ProductVariant.barcode == barcode)
    )
    return result.scalar_one_or_none()

async def list_variants_by_family(
    db: AsyncSession,
    family_id: int
) -> List[ProductVariant]:
    # ascending id keeps base-unit selection reproducible
    result = await db.execute(
        select(ProductVariant)
        .where(ProductVariant.family_id == family_id)
        .order_by(ProductVariant.id)
    )
    return list(result.scalars().all())
