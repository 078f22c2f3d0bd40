"""
Stock ledger: reads and additive adjustments of ``inventory_levels``.

The ledger owns the per-(warehouse, variant) quantity. It never checks
business rules itself; callers that decrement must read the level with
``for_update=True`` inside the same transaction first. The table's
non-negative check constraint is the backstop: a decrement that would
still go below zero surfaces here as ``InsufficientStockError``.
"""

from datetime import date, timedelta
from decimal import Decimal
from typing import List, Optional, Tuple
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import func, select, update

from stockcore.core.exceptions import InsufficientStockError
from stockcore.core.logging_config import get_logger
from stockcore.core.numeric import to_decimal
from stockcore.db.models.inventory import NON_NEGATIVE_QUANTITY, InventoryLevel, InventoryTransfer

logger = get_logger("ledger")

ZERO = Decimal("0")


def _dialect_insert(db: AsyncSession):
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
    elif dialect == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
    else:
        raise NotImplementedError(f"no atomic upsert for dialect {dialect!r}")
    return insert


async def get_level(
    db: AsyncSession,
    warehouse_id: int,
    variant_id: int,
    *,
    for_update: bool = False,
) -> Decimal:
    """Quantity on hand, zero when no row exists.

    ``for_update`` takes a row lock (``SELECT ... FOR UPDATE``) that is held
    until the enclosing transaction ends.
    """
    stmt = select(InventoryLevel.quantity).where(
        InventoryLevel.warehouse_id == warehouse_id,
        InventoryLevel.variant_id == variant_id,
    )
    if for_update:
        stmt = stmt.with_for_update()
    result = await db.execute(stmt)
    quantity = result.scalar_one_or_none()
    if quantity is None:
        return ZERO
    return to_decimal(quantity)


async def get_level_row(
    db: AsyncSession,
    warehouse_id: int,
    variant_id: int,
) -> Optional[InventoryLevel]:
    result = await db.execute(
        select(InventoryLevel)
        .where(
            InventoryLevel.warehouse_id == warehouse_id,
            InventoryLevel.variant_id == variant_id,
        )
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def adjust_level(
    db: AsyncSession,
    warehouse_id: int,
    variant_id: int,
    delta: Decimal,
) -> None:
    """Add ``delta`` (positive or negative) to the row, creating it at zero if absent.

    The row is first ensured with ``INSERT ... ON CONFLICT DO NOTHING`` at
    quantity zero, then changed by ``UPDATE ... SET quantity = quantity + delta``.
    The insert never carries the delta, so the check constraint only ever
    sees the resulting quantity, and concurrent adjustments to the same key
    serialize on the row instead of overwriting each other.
    """
    insert = _dialect_insert(db)
    await db.execute(
        insert(InventoryLevel)
        .values(warehouse_id=warehouse_id, variant_id=variant_id, quantity=ZERO)
        .on_conflict_do_nothing(
            index_elements=[InventoryLevel.warehouse_id, InventoryLevel.variant_id],
        )
    )
    stmt = (
        update(InventoryLevel)
        .where(
            InventoryLevel.warehouse_id == warehouse_id,
            InventoryLevel.variant_id == variant_id,
        )
        .values(quantity=InventoryLevel.quantity + delta)
        .execution_options(synchronize_session=False)
    )
    try:
        await db.execute(stmt)
    except IntegrityError as exc:
        if NON_NEGATIVE_QUANTITY in str(exc.orig):
            logger.warning(
                "ledger_negative_rejected",
                extra={"warehouse_id": warehouse_id, "variant_id": variant_id, "delta": delta},
            )
            raise InsufficientStockError(warehouse_id, variant_id) from exc
        raise
    logger.debug(
        "ledger_adjusted",
        extra={"warehouse_id": warehouse_id, "variant_id": variant_id, "delta": delta},
    )


async def list_levels(
    db: AsyncSession,
    warehouse_id: Optional[int] = None,
    offset: int = 0,
    limit: int = 50,
) -> Tuple[List[InventoryLevel], int]:
    filters = []
    if warehouse_id is not None:
        filters.append(InventoryLevel.warehouse_id == warehouse_id)

    total = await db.scalar(select(func.count(InventoryLevel.id)).where(*filters))
    result = await db.execute(
        select(InventoryLevel)
        .where(*filters)
        .order_by(InventoryLevel.id.desc())
        .offset(offset)
        .limit(limit)
        .execution_options(populate_existing=True)
    )
    return list(result.scalars().all()), total or 0


async def list_low_stock(
    db: AsyncSession,
    threshold: Decimal,
    warehouse_id: Optional[int] = None,
) -> List[InventoryLevel]:
    stmt = select(InventoryLevel).where(InventoryLevel.quantity < threshold)
    if warehouse_id is not None:
        stmt = stmt.where(InventoryLevel.warehouse_id == warehouse_id)
    result = await db.execute(
        stmt.order_by(InventoryLevel.quantity, InventoryLevel.id)
        .execution_options(populate_existing=True)
    )
    return list(result.scalars().all())


async def list_expiring(
    db: AsyncSession,
    days_until_expiry: int,
    today: Optional[date] = None,
) -> List[InventoryLevel]:
    cutoff = (today or date.today()) + timedelta(days=days_until_expiry)
    result = await db.execute(
        select(InventoryLevel)
        .where(
            InventoryLevel.expiry_date.is_not(None),
            InventoryLevel.expiry_date <= cutoff,
            InventoryLevel.quantity > 0,
        )
        .order_by(InventoryLevel.expiry_date, InventoryLevel.id)
        .execution_options(populate_existing=True)
    )
    return list(result.scalars().all())


async def get_transfer_by_id(
    db: AsyncSession,
    transfer_id: int
) -> Optional[InventoryTransfer]:
    result = await db.execute(
        select(InventoryTransfer)
        .where(InventoryTransfer.id == transfer_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def list_transfers(
    db: AsyncSession,
    offset: int = 0,
    limit: int = 50,
) -> Tuple[List[InventoryTransfer], int]:
    total = await db.scalar(select(func.count(InventoryTransfer.id)))
    result = await db.execute(
        select(InventoryTransfer)
        .order_by(InventoryTransfer.transferred_at.desc(), InventoryTransfer.id.desc())
        .offset(offset)
        .limit(limit)
    )
    return list(result.scalars().all()), total or 0
