"""앱 문의 라우터: 내 문의 목록/상세/등록.

App Inquiry Router. Users file inquiries and read the public responses.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import Profile
from app.schemas.common import PaginatedResponse
from app.schemas.inquiry import InquiryCreate, InquiryDetailResponse
from app.services.inquiry_service import inquiry_service

router: APIRouter = APIRouter()


@router.get("", response_model=PaginatedResponse)
async def list_my_inquiries(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[Profile, Depends(get_current_user)],
    page: Annotated[int, Query(ge=1)] = 1,
    per_page: Annotated[int, Query(ge=1, le=100)] = 20,
) -> PaginatedResponse:
    """내 문의 목록 (최신순)."""
    items, total = await inquiry_service.list_my_inquiries(db, current_user, page, per_page)
    return PaginatedResponse(items=items, total=total, page=page, per_page=per_page)


@router.post("", response_model=InquiryDetailResponse, status_code=201)
async def create_inquiry(
    data: InquiryCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[Profile, Depends(get_current_user)],
) -> InquiryDetailResponse:
    """문의 등록, 상태는 접수됨으로 시작합니다.

    File an inquiry. Title and content are required; a store, when given,
    must be one of the user's own.
    """
    inquiry = await inquiry_service.create_inquiry(db, current_user, data)
    await db.commit()
    return await inquiry_service.get_my_inquiry(db, current_user, inquiry.id)


@router.get("/{inquiry_id}", response_model=InquiryDetailResponse)
async def get_my_inquiry(
    inquiry_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[Profile, Depends(get_current_user)],
) -> InquiryDetailResponse:
    """내 문의 상세 (내부 메모 제외)."""
    return await inquiry_service.get_my_inquiry(db, current_user, inquiry_id)
