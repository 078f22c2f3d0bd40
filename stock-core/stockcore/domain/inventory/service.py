# stockcore/domain/inventory/service.py
from datetime import date
from decimal import Decimal
from typing import List, Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession

from stockcore.core.exceptions import (
    InsufficientStockError,
    InvalidQuantityError,
    ProductVariantNotFoundError,
    WarehouseNotFoundError,
)
from stockcore.core.logging_config import get_logger
from stockcore.core.numeric import to_decimal
from stockcore.db.base import unit_of_work
from stockcore.db.models.inventory import InventoryLevel
from stockcore.db.repositories.catalog import get_variant_by_id, get_warehouse_by_id
from stockcore.db.repositories.inventory import (
    adjust_level,
    get_level,
    get_level_row,
    list_expiring,
    list_levels,
    list_low_stock,
)
from .schemas import StockAdjust, StockLevelOut

logger = get_logger("services.inventory")

async def get_stock_level(
    db: AsyncSession,
    warehouse_id: int,
    variant_id: int,
) -> StockLevelOut:
    row = await get_level_row(db, warehouse_id, variant_id)
    if row is None:
        return StockLevelOut(warehouse_id=warehouse_id, variant_id=variant_id, quantity=Decimal("0"))
    return StockLevelOut.model_validate(row)

async def list_stock_levels(
    db: AsyncSession,
    warehouse_id: Optional[int] = None,
    offset: int = 0,
    limit: int = 50,
) -> Tuple[List[InventoryLevel], int]:
    if warehouse_id is not None and await get_warehouse_by_id(db, warehouse_id) is None:
        raise WarehouseNotFoundError(warehouse_id)
    return await list_levels(db, warehouse_id, offset, limit)

async def low_stock(
    db: AsyncSession,
    threshold: Decimal,
    warehouse_id: Optional[int] = None,
) -> List[InventoryLevel]:
    return await list_low_stock(db, to_decimal(threshold), warehouse_id)

async def expiring_stock(
    db: AsyncSession,
    days_until_expiry: int,
    today: Optional[date] = None,
) -> List[InventoryLevel]:
    return await list_expiring(db, days_until_expiry, today)

async def adjust_inventory(
    db: AsyncSession,
    data: StockAdjust,
) -> StockLevelOut:
    """Manual stock correction on a single (warehouse, variant) row.

    No unit conversion is applied; the delta lands on the given variant.
    """
    delta = to_decimal(data.quantity_delta)
    if delta == 0:
        raise InvalidQuantityError(delta, "adjustment cannot be zero")

    async with unit_of_work(db):
        if await get_warehouse_by_id(db, data.warehouse_id) is None:
            raise WarehouseNotFoundError(data.warehouse_id)
        if await get_variant_by_id(db, data.variant_id) is None:
            raise ProductVariantNotFoundError(data.variant_id)

        if delta < 0:
            on_hand = await get_level(db, data.warehouse_id, data.variant_id, for_update=True)
            if on_hand < -delta:
                logger.warning(
                    "adjustment_rejected",
                    extra={"warehouse_id": data.warehouse_id, "variant_id": data.variant_id, "delta": delta, "available": on_hand},
                )
                raise InsufficientStockError(data.warehouse_id, data.variant_id, -delta, on_hand)

        await adjust_level(db, data.warehouse_id, data.variant_id, delta)

    logger.info(
        "inventory_adjusted",
        extra={"warehouse_id": data.warehouse_id, "variant_id": data.variant_id, "delta": delta},
    )
    return await get_stock_level(db, data.warehouse_id, data.variant_id)
