# stockcore/api/v1/routes_inventory.py
from decimal import Decimal
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from stockcore.api.deps import Pagination, get_current_user_id, get_pagination, run_bounded
from stockcore.api.response import ApiResponse, page_meta, success_response
from stockcore.db.base import get_db
from stockcore.domain.inventory.schemas import StockAdjust, StockLevelOut
from stockcore.domain.inventory.service import (
    adjust_inventory,
    expiring_stock,
    get_stock_level,
    list_stock_levels,
    low_stock,
)
from stockcore.domain.transfers.schemas import TransferCreate, TransferOut
from stockcore.domain.transfers.service import get_transfer, list_stock_transfers, transfer_stock


router = APIRouter(prefix="/api/v1/inventory", tags=["inventory"])


@router.get("", response_model=ApiResponse)
async def list_levels_endpoint(
    warehouse_id: Optional[int] = Query(None),
    pagination: Pagination = Depends(get_pagination),
    db: AsyncSession = Depends(get_db),
):
    levels, total = await list_stock_levels(db, warehouse_id, pagination.offset, pagination.limit)
    return success_response(
        [StockLevelOut.model_validate(level) for level in levels],
        meta=page_meta(pagination.page, pagination.per_page, total),
    )

@router.get("/low-stock", response_model=ApiResponse)
async def low_stock_endpoint(
    threshold: Decimal = Query(Decimal("10")),
    warehouse_id: Optional[int] = Query(None),
    db: AsyncSession = Depends(get_db),
):
    levels = await low_stock(db, threshold, warehouse_id)
    return success_response([StockLevelOut.model_validate(level) for level in levels])

@router.get("/expiring", response_model=ApiResponse)
async def expiring_endpoint(
    days: int = Query(30, ge=0),
    db: AsyncSession = Depends(get_db),
):
    levels = await expiring_stock(db, days)
    return success_response([StockLevelOut.model_validate(level) for level in levels])

@router.post("/adjust", response_model=ApiResponse)
async def adjust_endpoint(
    payload: StockAdjust,
    db: AsyncSession = Depends(get_db),
):
    level = await run_bounded(adjust_inventory(db, payload))
    return success_response(level, "Inventory adjusted")

@router.post("/transfers", response_model=ApiResponse, status_code=201)
async def create_transfer_endpoint(
    payload: TransferCreate,
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    transfer = await run_bounded(transfer_stock(db, payload, user_id))
    return success_response(TransferOut.model_validate(transfer), "Transfer completed")

@router.get("/transfers", response_model=ApiResponse)
async def list_transfers_endpoint(
    pagination: Pagination = Depends(get_pagination),
    db: AsyncSession = Depends(get_db),
):
    transfers, total = await list_stock_transfers(db, pagination.offset, pagination.limit)
    return success_response(
        [TransferOut.model_validate(t) for t in transfers],
        meta=page_meta(pagination.page, pagination.per_page, total),
    )

@router.get("/transfers/{transfer_id}", response_model=ApiResponse)
async def get_transfer_endpoint(
    transfer_id: int,
    db: AsyncSession = Depends(get_db),
):
    transfer = await get_transfer(db, transfer_id)
    return success_response(TransferOut.model_validate(transfer))

@router.get("/{warehouse_id}/{variant_id}", response_model=ApiResponse)
async def get_level_endpoint(
    warehouse_id: int,
    variant_id: int,
    db: AsyncSession = Depends(get_db),
):
    level = await get_stock_level(db, warehouse_id, variant_id)
    return success_response(level)
