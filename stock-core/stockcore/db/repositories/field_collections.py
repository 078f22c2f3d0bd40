
from typing import List, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import func, select

from stockcore.db.models.field_collections import Collection

async def list_collections(
    db: AsyncSession,
    offset: int = 0,
    limit: int = 50,
) -> Tuple[List[Collection], int]:
    total = await db.scalar(select(func.count(Collection.id)))
    result = await db.execute(
        select(Collection)
        .order_by(Collection.collected_at.desc(), Collection.id.desc())
        .offset(offset)
        .limit(limit)
    )
    return list(result.scalars().all()), total or 0
