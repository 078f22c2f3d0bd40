# stockcore/api/v1/routes_collections.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from stockcore.api.deps import Pagination, get_current_user_id, get_pagination, run_bounded
from stockcore.api.response import ApiResponse, page_meta, success_response
from stockcore.db.base import get_db
from stockcore.domain.field_collections.schemas import CollectionCreate, CollectionOut
from stockcore.domain.field_collections.service import list_field_collections, record_collection


router = APIRouter(prefix="/api/v1/collections", tags=["collections"])


@router.post("", response_model=ApiResponse, status_code=201)
async def record_collection_endpoint(
    payload: CollectionCreate,
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    collection = await run_bounded(record_collection(db, payload, user_id))
    return success_response(CollectionOut.model_validate(collection), "Collection recorded")

@router.get("", response_model=ApiResponse)
async def list_collections_endpoint(
    pagination: Pagination = Depends(get_pagination),
    db: AsyncSession = Depends(get_db),
):
    collections, total = await list_field_collections(db, pagination.offset, pagination.limit)
    return success_response(
        [CollectionOut.model_validate(c) for c in collections],
        meta=page_meta(pagination.page, pagination.per_page, total),
    )
