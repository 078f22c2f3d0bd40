# stockcore/api/v1/routes_dashboard.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from stockcore.api.response import ApiResponse, success_response
from stockcore.db.base import get_db
from stockcore.domain.dashboard.service import get_stats


router = APIRouter(prefix="/api/v1/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=ApiResponse)
async def dashboard_stats_endpoint(db: AsyncSession = Depends(get_db)):
    return success_response(await get_stats(db))
