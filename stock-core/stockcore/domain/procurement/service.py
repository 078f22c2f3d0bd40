# stockcore/domain/procurement/service.py
from typing import List, Tuple, Union
from sqlalchemy.ext.asyncio import AsyncSession

from stockcore.core.exceptions import (
    InvalidInputError,
    InvalidQuantityError,
    InvalidStatusError,
    InvalidStatusTransitionError,
    ProcurementItemNotFoundError,
    ProcurementNotFoundError,
    ProductVariantNotFoundError,
    SupplierNotFoundError,
    WarehouseNotFoundError,
)
from stockcore.core.logging_config import get_logger
from stockcore.core.numeric import quantize_money, to_decimal
from stockcore.db.base import unit_of_work
from stockcore.db.models.procurements import Procurement, ProcurementItem, ProcurementStatus
from stockcore.db.repositories.catalog import get_supplier_by_id, get_variant_by_id, get_warehouse_by_id
from stockcore.db.repositories.inventory import adjust_level
from stockcore.db.repositories.procurements import (
    get_procurement_by_id,
    list_procurements,
    list_procurements_by_supplier,
)
from .schemas import ProcurementCreate, ReceivedLine

logger = get_logger("services.procurement")

def parse_status(
    status: Union[str, ProcurementStatus],
) -> ProcurementStatus:
    try:
        return ProcurementStatus(status)
    except ValueError:
        raise InvalidStatusError(status) from None

async def create_procurement(
    db: AsyncSession,
    data: ProcurementCreate,
    ordered_by_user_id: int,
) -> Procurement:
    if not data.items:
        raise InvalidInputError("procurement has no items")

    async with unit_of_work(db):
        if await get_supplier_by_id(db, data.supplier_id) is None:
            raise SupplierNotFoundError(data.supplier_id)
        if await get_warehouse_by_id(db, data.warehouse_id) is None:
            raise WarehouseNotFoundError(data.warehouse_id)
        for line in data.items:
            if to_decimal(line.quantity) <= 0:
                raise InvalidQuantityError(line.quantity)
            if await get_variant_by_id(db, line.variant_id) is None:
                raise ProductVariantNotFoundError(line.variant_id)

        procurement = Procurement(
            supplier_id=data.supplier_id,
            warehouse_id=data.warehouse_id,
            ordered_by_user_id=ordered_by_user_id,
            expected_delivery=data.expected_delivery,
            status=data.status or ProcurementStatus.PENDING,
            items=[
                ProcurementItem(
                    variant_id=line.variant_id,
                    quantity_ordered=to_decimal(line.quantity),
                    quantity_received=0,
                    unit_cost=quantize_money(line.unit_cost),
                )
                for line in data.items
            ],
        )
        db.add(procurement)

    await db.refresh(procurement)
    logger.info(
        "procurement_created",
        extra={"procurement_id": procurement.id, "supplier_id": procurement.supplier_id, "lines": len(procurement.items)},
    )
    return procurement

async def update_status(
    db: AsyncSession,
    procurement_id: int,
    status: Union[str, ProcurementStatus],
) -> Procurement:
    """Move a procurement to a new status.

    Entering ``received`` credits the warehouse with each line's received
    quantity, or the ordered quantity where nothing was recorded. The
    credit and the status change commit together. ``received`` and
    ``cancelled`` are final.
    """
    new_status = parse_status(status)

    async with unit_of_work(db):
        procurement = await get_procurement_by_id(db, procurement_id, for_update=True)
        if procurement is None:
            raise ProcurementNotFoundError(procurement_id)

        current = procurement.status
        # a received order has already been credited
        if current.is_terminal:
            raise InvalidStatusTransitionError(current.value, new_status.value)

        if new_status == ProcurementStatus.RECEIVED:
            for item in procurement.items:
                await adjust_level(db, procurement.warehouse_id, item.variant_id, item.quantity_to_credit)

        procurement.status = new_status

    await db.refresh(procurement)
    event = "procurement_received" if new_status == ProcurementStatus.RECEIVED else "procurement_status_changed"
    logger.info(
        event,
        extra={"procurement_id": procurement.id, "from_status": current.value, "to_status": new_status.value},
    )
    return procurement

async def receive_items(
    db: AsyncSession,
    procurement_id: int,
    lines: List[ReceivedLine],
) -> Procurement:
    """Record delivered quantities per line.

    Stock is untouched until the procurement is marked ``received``.
    """
    async with unit_of_work(db):
        procurement = await get_procurement_by_id(db, procurement_id, for_update=True)
        if procurement is None:
            raise ProcurementNotFoundError(procurement_id)
        if procurement.status.is_terminal:
            raise InvalidStatusTransitionError(procurement.status.value, "receiving")

        items_by_id = {item.id: item for item in procurement.items}
        for line in lines:
            item = items_by_id.get(line.item_id)
            if item is None:
                raise ProcurementItemNotFoundError(line.item_id)
            quantity = to_decimal(line.quantity_received)
            if quantity < 0:
                raise InvalidQuantityError(quantity, "received quantity cannot be negative")
            item.quantity_received = quantity

    await db.refresh(procurement)
    logger.info(
        "procurement_items_received",
        extra={"procurement_id": procurement.id, "lines": len(lines)},
    )
    return procurement

async def get_procurement(
    db: AsyncSession,
    procurement_id: int,
) -> Procurement:
    procurement = await get_procurement_by_id(db, procurement_id)
    if procurement is None:
        raise ProcurementNotFoundError(procurement_id)
    return procurement

async def list_all_procurements(
    db: AsyncSession,
    offset: int = 0,
    limit: int = 50,
) -> Tuple[List[Procurement], int]:
    return await list_procurements(db, offset, limit)

async def list_supplier_procurements(
    db: AsyncSession,
    supplier_id: int,
) -> List[Procurement]:
    if await get_supplier_by_id(db, supplier_id) is None:
        raise SupplierNotFoundError(supplier_id)
    return await list_procurements_by_supplier(db, supplier_id)
