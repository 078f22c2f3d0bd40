# stockcore/api/v1/routes_sales.py
from datetime import datetime
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from stockcore.api.deps import Pagination, get_current_user_id, get_pagination, run_bounded
from stockcore.api.response import ApiResponse, page_meta, success_response
from stockcore.db.base import get_db
from stockcore.domain.sales.schemas import SaleCreate, SaleOut
from stockcore.domain.sales.service import get_sale, list_sales_history, process_sale


router = APIRouter(prefix="/api/v1/sales", tags=["sales"])


@router.post("", response_model=ApiResponse, status_code=201)
async def create_sale_endpoint(
    payload: SaleCreate,
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    sale = await run_bounded(process_sale(db, payload, user_id))
    return success_response(SaleOut.model_validate(sale), "Sale recorded")

@router.get("", response_model=ApiResponse)
async def list_sales_endpoint(
    warehouse_id: Optional[int] = Query(None),
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
    pagination: Pagination = Depends(get_pagination),
    db: AsyncSession = Depends(get_db),
):
    sales, total = await list_sales_history(
        db, warehouse_id, start_date, end_date, pagination.offset, pagination.limit
    )
    return success_response(
        [SaleOut.model_validate(s) for s in sales],
        meta=page_meta(pagination.page, pagination.per_page, total),
    )

@router.get("/{sale_id}", response_model=ApiResponse)
async def get_sale_endpoint(
    sale_id: int,
    db: AsyncSession = Depends(get_db),
):
    sale = await get_sale(db, sale_id)
    return success_response(SaleOut.model_validate(sale))
