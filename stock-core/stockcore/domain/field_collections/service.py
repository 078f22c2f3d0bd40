# stockcore/domain/field_collections/service.py
from datetime import datetime, timezone
from typing import List, Tuple
from sqlalchemy.ext.asyncio import AsyncSession

from stockcore.core.config import settings
from stockcore.core.exceptions import (
    InvalidQuantityError,
    ProductVariantNotFoundError,
    SupplierNotFoundError,
    WarehouseNotFoundError,
)
from stockcore.core.logging_config import get_logger
from stockcore.core.numeric import to_decimal
from stockcore.db.base import unit_of_work
from stockcore.db.models.field_collections import Collection
from stockcore.db.repositories.catalog import get_supplier_by_id, get_variant_by_id, get_warehouse_by_id
from stockcore.db.repositories.field_collections import list_collections
from stockcore.db.repositories.inventory import adjust_level
from .schemas import CollectionCreate

logger = get_logger("services.collections")

async def record_collection(
    db: AsyncSession,
    data: CollectionCreate,
    agent_id: int,
) -> Collection:
    """Record an agent's intake and credit its weight to stock.

    The weight is the stock increment as-is, with no unit conversion.
    Without a warehouse the intake goes to the main warehouse.
    """
    weight = to_decimal(data.weight)
    if weight <= 0:
        raise InvalidQuantityError(weight, "weight must be positive")

    async with unit_of_work(db):
        if await get_variant_by_id(db, data.variant_id) is None:
            raise ProductVariantNotFoundError(data.variant_id)
        if await get_supplier_by_id(db, data.supplier_id) is None:
            raise SupplierNotFoundError(data.supplier_id)

        warehouse_id = data.warehouse_id
        if not warehouse_id:
            warehouse_id = settings.MAIN_WAREHOUSE_ID
        if await get_warehouse_by_id(db, warehouse_id) is None:
            raise WarehouseNotFoundError(warehouse_id)

        collection = Collection(
            variant_id=data.variant_id,
            supplier_id=data.supplier_id,
            agent_id=agent_id,
            warehouse_id=warehouse_id,
            weight=weight,
            collected_at=data.collected_at or datetime.now(timezone.utc),
            notes=data.notes,
        )
        db.add(collection)
        await db.flush()

        await adjust_level(db, warehouse_id, data.variant_id, weight)

    await db.refresh(collection)
    logger.info(
        "collection_recorded",
        extra={
            "collection_id": collection.id,
            "warehouse_id": warehouse_id,
            "variant_id": collection.variant_id,
            "weight": weight,
        },
    )
    return collection

async def list_field_collections(
    db: AsyncSession,
    offset: int = 0,
    limit: int = 50,
) -> Tuple[List[Collection], int]:
    return await list_collections(db, offset, limit)
