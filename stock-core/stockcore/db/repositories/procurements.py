
from typing import List, Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import func, select

from stockcore.db.models.procurements import Procurement

async def get_procurement_by_id(
    db: AsyncSession,
    procurement_id: int,
    *,
    for_update: bool = False,
) -> Optional[Procurement]:
    stmt = (
        select(Procurement)
        .where(Procurement.id == procurement_id)
        .execution_options(populate_existing=True)
    )
    if for_update:
        # serializes concurrent status changes on the same order
        stmt = stmt.with_for_update()
    result = await db.execute(stmt)
    return result.scalar_one_or_none()

async def list_procurements(
    db: AsyncSession,
    offset: int = 0,
    limit: int = 50,
) -> Tuple[List[Procurement], int]:
    total = await db.scalar(select(func.count(Procurement.id)))
    result = await db.execute(
        select(Procurement)
        .order_by(Procurement.created_at.desc(), Procurement.id.desc())
        .offset(offset)
        .limit(limit)
    )
    return list(result.scalars().all()), total or 0

async def list_procurements_by_supplier(
    db: AsyncSession,
    supplier_id: int
) -> List[Procurement]:
    result = await db.execute(
        select(Procurement)
        .where(Procurement.supplier_id == supplier_id)
        .order_by(Procurement.created_at.desc(), Procurement.id.desc())
    )
    return list(result.scalars().all())
