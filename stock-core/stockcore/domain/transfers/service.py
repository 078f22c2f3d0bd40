# stockcore/domain/transfers/service.py
from decimal import Decimal
from typing import Dict, List, Tuple
from sqlalchemy.ext.asyncio import AsyncSession

from stockcore.core.exceptions import (
    InsufficientStockError,
    InvalidInputError,
    InvalidQuantityError,
    ProductVariantNotFoundError,
    SameWarehouseError,
    TransferNotFoundError,
    WarehouseNotFoundError,
)
from stockcore.core.logging_config import get_logger
from stockcore.core.numeric import to_decimal
from stockcore.db.base import unit_of_work
from stockcore.db.models.inventory import InventoryTransfer, InventoryTransferItem, TransferStatus
from stockcore.db.repositories.catalog import get_variant_by_id, get_warehouse_by_id
from stockcore.db.repositories.inventory import adjust_level, get_level, get_transfer_by_id, list_transfers
from .schemas import TransferCreate

logger = get_logger("services.transfers")

async def transfer_stock(
    db: AsyncSession,
    data: TransferCreate,
    authorized_by_user_id: int,
) -> InventoryTransfer:
    """Move stock between two warehouses in one transaction.

    Every line is checked against the source before anything moves; a
    single short line fails the whole transfer and neither warehouse
    changes.
    """
    if data.source_warehouse_id == data.destination_warehouse_id:
        raise SameWarehouseError(data.source_warehouse_id)
    if not data.items:
        raise InvalidInputError("transfer has no items")

    async with unit_of_work(db):
        for warehouse_id in (data.source_warehouse_id, data.destination_warehouse_id):
            if await get_warehouse_by_id(db, warehouse_id) is None:
                raise WarehouseNotFoundError(warehouse_id)

        moves: Dict[int, Decimal] = {}
        for line in data.items:
            quantity = to_decimal(line.quantity)
            if quantity <= 0:
                raise InvalidQuantityError(quantity)
            if await get_variant_by_id(db, line.variant_id) is None:
                raise ProductVariantNotFoundError(line.variant_id)
            moves[line.variant_id] = moves.get(line.variant_id, Decimal("0")) + quantity

        # lock source rows in id order
        for variant_id, quantity in sorted(moves.items()):
            on_hand = await get_level(db, data.source_warehouse_id, variant_id, for_update=True)
            if on_hand < quantity:
                logger.warning(
                    "transfer_rejected",
                    extra={
                        "source_warehouse_id": data.source_warehouse_id,
                        "variant_id": variant_id,
                        "requested": quantity,
                        "available": on_hand,
                    },
                )
                raise InsufficientStockError(data.source_warehouse_id, variant_id, quantity, on_hand)

        transfer = InventoryTransfer(
            source_warehouse_id=data.source_warehouse_id,
            destination_warehouse_id=data.destination_warehouse_id,
            authorized_by_user_id=authorized_by_user_id,
            status=TransferStatus.PENDING,
            items=[
                InventoryTransferItem(variant_id=line.variant_id, quantity=to_decimal(line.quantity))
                for line in data.items
            ],
        )
        db.add(transfer)
        await db.flush()

        for variant_id, quantity in sorted(moves.items()):
            await adjust_level(db, data.source_warehouse_id, variant_id, -quantity)
            await adjust_level(db, data.destination_warehouse_id, variant_id, quantity)

        transfer.status = TransferStatus.COMPLETED

    await db.refresh(transfer)
    logger.info(
        "transfer_completed",
        extra={
            "transfer_id": transfer.id,
            "source_warehouse_id": transfer.source_warehouse_id,
            "destination_warehouse_id": transfer.destination_warehouse_id,
            "lines": len(transfer.items),
        },
    )
    return transfer

async def get_transfer(
    db: AsyncSession,
    transfer_id: int,
) -> InventoryTransfer:
    transfer = await get_transfer_by_id(db, transfer_id)
    if transfer is None:
        raise TransferNotFoundError(transfer_id)
    return transfer

async def list_stock_transfers(
    db: AsyncSession,
    offset: int = 0,
    limit: int = 50,
) -> Tuple[List[InventoryTransfer], int]:
    return await list_transfers(db, offset, limit)
