"""관리자 문의 라우터: 문의 검색, 상세, 상태 변경, 답변 등록.

Admin Inquiry Router. Triage user inquiries and answer them; public
answers notify the author, internal notes do not.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_admin
from app.database import get_db
from app.models.user import Profile
from app.schemas.common import PaginatedResponse
from app.schemas.inquiry import InquiryDetailResponse, InquiryResponseCreate, InquiryStatusUpdate
from app.services.inquiry_service import inquiry_service

router: APIRouter = APIRouter()


@router.get("", response_model=PaginatedResponse)
async def list_inquiries(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[Profile, Depends(require_admin)],
    status: Annotated[str | None, Query()] = None,
    category: Annotated[str | None, Query()] = None,
    search: Annotated[str | None, Query(description="제목 또는 내용")] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    per_page: Annotated[int, Query(ge=1, le=100)] = 20,
) -> PaginatedResponse:
    """문의 목록 (최근 수정순)."""
    items, total = await inquiry_service.admin_list(db, status, category, search, page, per_page)
    return PaginatedResponse(items=items, total=total, page=page, per_page=per_page)


@router.get("/{inquiry_id}", response_model=InquiryDetailResponse)
async def get_inquiry(
    inquiry_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[Profile, Depends(require_admin)],
) -> InquiryDetailResponse:
    """문의 상세 (내부 메모 포함 전체 답변)."""
    return await inquiry_service.admin_get(db, inquiry_id)


@router.patch("/{inquiry_id}/status", response_model=InquiryDetailResponse)
async def update_inquiry_status(
    inquiry_id: UUID,
    data: InquiryStatusUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[Profile, Depends(require_admin)],
) -> InquiryDetailResponse:
    await inquiry_service.change_status(db, inquiry_id, data.status)
    await db.commit()
    return await inquiry_service.admin_get(db, inquiry_id)


@router.post("/{inquiry_id}/responses", response_model=InquiryDetailResponse, status_code=201)
async def add_inquiry_response(
    inquiry_id: UUID,
    data: InquiryResponseCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[Profile, Depends(require_admin)],
) -> InquiryDetailResponse:
    """답변 등록.

    Append a response. A public response creates an ``inquiry_response``
    notification for the author.
    """
    await inquiry_service.add_response(db, current_user, inquiry_id, data)
    await db.commit()
    return await inquiry_service.admin_get(db, inquiry_id)
