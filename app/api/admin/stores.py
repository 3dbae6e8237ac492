"""관리자 가게 라우터: 가게 검색 및 상세 조회.

Admin Store Router. Search all stores and view one with its request
history.
"""

from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_admin
from app.database import get_db
from app.models.user import Profile
from app.schemas.common import PaginatedResponse
from app.services.store_service import store_service

router: APIRouter = APIRouter()


@router.get("", response_model=PaginatedResponse)
async def list_stores(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[Profile, Depends(require_admin)],
    search: Annotated[str | None, Query(description="가게명 또는 주소")] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    per_page: Annotated[int, Query(ge=1, le=100)] = 20,
) -> PaginatedResponse:
    """가게 목록 (소유자 연락처, 요청 수 포함)."""
    items, total = await store_service.admin_list(db, search, page, per_page)
    return PaginatedResponse(items=items, total=total, page=page, per_page=per_page)


@router.get("/{store_id}")
async def get_store(
    store_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[Profile, Depends(require_admin)],
) -> dict[str, Any]:
    return await store_service.admin_get(db, store_id)
