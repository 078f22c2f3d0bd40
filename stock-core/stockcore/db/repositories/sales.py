
from datetime import datetime
from typing import List, Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import func, select

from stockcore.db.models.sales import Sale

async def get_sale_by_id(
    db: AsyncSession,
    sale_id: int
) -> Optional[Sale]:
    result = await db.execute(
        select(Sale)
        .where(Sale.id == sale_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()

async def list_sales(
    db: AsyncSession,
    warehouse_id: Optional[int] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    offset: int = 0,
    limit: int = 50,
) -> Tuple[List[Sale], int]:
    filters = []
    if warehouse_id is not None:
        filters.append(Sale.warehouse_id == warehouse_id)
    if start_date is not None:
        filters.append(Sale.created_at >= start_date)
    if end_date is not None:
        filters.append(Sale.created_at <= end_date)

    total = await db.scalar(select(func.count(Sale.id)).where(*filters))
    result = await db.execute(
        select(Sale)
        .where(*filters)
        .order_by(Sale.created_at.desc(), Sale.id.desc())
        .offset(offset)
        .limit(limit)
    )
    return list(result.scalars().all()), total or 0
