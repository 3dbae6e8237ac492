"""관리자 사용자 라우터: 사용자 검색 및 상세 조회.

Admin User Router. Search profiles by phone digits and view one with
its stores and requests.
"""

from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_admin
from app.database import get_db
from app.models.user import Profile
from app.schemas.common import PaginatedResponse
from app.services.profile_service import profile_service

router: APIRouter = APIRouter()


@router.get("", response_model=PaginatedResponse)
async def list_users(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[Profile, Depends(require_admin)],
    search: Annotated[str | None, Query(description="휴대폰 번호")] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    per_page: Annotated[int, Query(ge=1, le=100)] = 20,
) -> PaginatedResponse:
    """사용자 목록을 조회합니다.

    List user profiles with store and request counts.

    Args:
        db: 비동기 데이터베이스 세션 (Async database session)
        current_user: 인증된 관리자 (Authenticated admin)
        search: 휴대폰 번호 검색어, 숫자만 비교 (Phone digits)
        page: 페이지 번호 (Page number)
        per_page: 페이지당 항목 수 (Items per page)
    """
    items, total = await profile_service.admin_list_users(db, search, page, per_page)
    return PaginatedResponse(items=items, total=total, page=page, per_page=per_page)


@router.get("/{user_id}")
async def get_user(
    user_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[Profile, Depends(require_admin)],
) -> dict[str, Any]:
    """사용자 상세 (가게와 서비스 요청 포함)."""
    return await profile_service.admin_get_user(db, user_id)
