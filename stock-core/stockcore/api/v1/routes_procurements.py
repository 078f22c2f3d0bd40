# stockcore/api/v1/routes_procurements.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from stockcore.api.deps import Pagination, get_current_user_id, get_pagination, run_bounded
from stockcore.api.response import ApiResponse, page_meta, success_response
from stockcore.db.base import get_db
from stockcore.domain.procurement.schemas import ProcurementCreate, ProcurementOut, ReceiveItems, StatusUpdate
from stockcore.domain.procurement.service import (
    create_procurement,
    get_procurement,
    list_all_procurements,
    list_supplier_procurements,
    receive_items,
    update_status,
)


router = APIRouter(prefix="/api/v1/procurements", tags=["procurements"])


@router.post("", response_model=ApiResponse, status_code=201)
async def create_procurement_endpoint(
    payload: ProcurementCreate,
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    procurement = await run_bounded(create_procurement(db, payload, user_id))
    return success_response(ProcurementOut.model_validate(procurement), "Procurement created")

@router.get("", response_model=ApiResponse)
async def list_procurements_endpoint(
    supplier_id: Optional[int] = Query(None),
    pagination: Pagination = Depends(get_pagination),
    db: AsyncSession = Depends(get_db),
):
    if supplier_id is not None:
        procurements = await list_supplier_procurements(db, supplier_id)
        return success_response([ProcurementOut.model_validate(p) for p in procurements])

    procurements, total = await list_all_procurements(db, pagination.offset, pagination.limit)
    return success_response(
        [ProcurementOut.model_validate(p) for p in procurements],
        meta=page_meta(pagination.page, pagination.per_page, total),
    )

@router.get("/{procurement_id}", response_model=ApiResponse)
async def get_procurement_endpoint(
    procurement_id: int,
    db: AsyncSession = Depends(get_db),
):
    procurement = await get_procurement(db, procurement_id)
    return success_response(ProcurementOut.model_validate(procurement))

@router.patch("/{procurement_id}/status", response_model=ApiResponse)
async def update_status_endpoint(
    procurement_id: int,
    payload: StatusUpdate,
    db: AsyncSession = Depends(get_db),
):
    procurement = await run_bounded(update_status(db, procurement_id, payload.status))
    return success_response(ProcurementOut.model_validate(procurement), "Status updated")

@router.post("/{procurement_id}/receive", response_model=ApiResponse)
async def receive_items_endpoint(
    procurement_id: int,
    payload: ReceiveItems,
    db: AsyncSession = Depends(get_db),
):
    procurement = await run_bounded(receive_items(db, procurement_id, payload.items))
    return success_response(ProcurementOut.model_validate(procurement), "Items received")
