# stockcore/domain/catalog/service.py
from sqlalchemy.ext.asyncio import AsyncSession

from stockcore.core.exceptions import (
    BarcodeExistsError,
    BaseUnitConflictError,
    CategoryNotFoundError,
    InvalidInputError,
    ProductFamilyNotFoundError,
    ProductVariantNotFoundError,
    SKUExistsError,
)
from stockcore.core.logging_config import get_logger
from stockcore.db.base import unit_of_work
from stockcore.db.models.catalog import Category, ProductFamily, ProductVariant
from stockcore.db.models.suppliers import Supplier
from stockcore.db.models.warehouses import Warehouse
from stockcore.db.repositories.catalog import (
    get_category_by_id,
    get_family_by_id,
    get_variant_by_barcode,
    get_variant_by_id,
    get_variant_by_sku,
    list_variants_by_family,
)
from .schemas import CategoryCreate, FamilyCreate, SupplierCreate, VariantCreate, WarehouseCreate
from .units import find_base_variant

logger = get_logger("services.catalog")

async def create_warehouse(
    db: AsyncSession,
    data: WarehouseCreate,
) -> Warehouse:
    warehouse = Warehouse(name=data.name, type=data.type, address=data.address)
    async with unit_of_work(db):
        db.add(warehouse)
    await db.refresh(warehouse)
    return warehouse

async def create_supplier(
    db: AsyncSession,
    data: SupplierCreate,
) -> Supplier:
    supplier = Supplier(name=data.name, phone=data.phone, location=data.location)
    async with unit_of_work(db):
        db.add(supplier)
    await db.refresh(supplier)
    return supplier

async def create_category(
    db: AsyncSession,
    data: CategoryCreate,
) -> Category:
    category = Category(name=data.name)
    async with unit_of_work(db):
        db.add(category)
    await db.refresh(category)
    return category

async def create_family(
    db: AsyncSession,
    data: FamilyCreate,
) -> ProductFamily:
    async with unit_of_work(db):
        if await get_category_by_id(db, data.category_id) is None:
            raise CategoryNotFoundError(data.category_id)
        family = ProductFamily(
            category_id=data.category_id,
            name=data.name,
            description=data.description,
        )
        db.add(family)
    await db.refresh(family)
    return family

async def create_variant(
    db: AsyncSession,
    data: VariantCreate,
) -> ProductVariant:
    """Add a SKU to a family.

    A family may hold a single base unit (conversion factor 1); a second
    one would make base-unit resolution ambiguous and is rejected.
    """
    if data.conversion_factor < 0:
        raise InvalidInputError("conversion factor cannot be negative")

    async with unit_of_work(db):
        if await get_family_by_id(db, data.family_id) is None:
            raise ProductFamilyNotFoundError(data.family_id)
        if await get_variant_by_sku(db, data.sku) is not None:
            raise SKUExistsError(data.sku)
        barcode = data.barcode or None
        if barcode is not None and await get_variant_by_barcode(db, barcode) is not None:
            raise BarcodeExistsError(barcode)

        variant = ProductVariant(
            family_id=data.family_id,
            name=data.name,
            sku=data.sku,
            barcode=barcode,
            unit=data.unit,
            cost_price=data.cost_price,
            selling_price=data.selling_price,
            is_manufactured=data.is_manufactured,
            conversion_factor=data.conversion_factor,
        )
        if data.conversion_factor in (0, 1):
            existing_base = find_base_variant(await list_variants_by_family(db, data.family_id))
            if existing_base is not None:
                raise BaseUnitConflictError(data.family_id, existing_base.id)

        db.add(variant)

    await db.refresh(variant)
    logger.info(
        "variant_created",
        extra={"variant_id": variant.id, "family_id": variant.family_id, "sku": variant.sku},
    )
    return variant

async def get_variant(
    db: AsyncSession,
    variant_id: int,
) -> ProductVariant:
    variant = await get_variant_by_id(db, variant_id)
    if variant is None:
        raise ProductVariantNotFoundError(variant_id)
    return variant
