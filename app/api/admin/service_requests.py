"""관리자 서비스 요청 라우터: 목록, 상세, 상태 변경, 엑셀 내보내기.

Admin Service Request Router. Search and filter all requests, view a
request with its owner, move it along the status lifecycle, and export
the filtered list as an Excel workbook. ``/export`` is declared before
``/{request_id}``.
"""

from io import BytesIO
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_admin
from app.database import get_db
from app.models.user import Profile
from app.schemas.common import PaginatedResponse
from app.schemas.service_request import AdminServiceRequestDetailResponse, StatusUpdateRequest
from app.services.service_request_service import service_request_service

router: APIRouter = APIRouter()


@router.get("", response_model=PaginatedResponse)
async def list_service_requests(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[Profile, Depends(require_admin)],
    status: Annotated[str | None, Query(description="요청됨 | 진행중 | 완료 | 취소")] = None,
    search: Annotated[str | None, Query(description="가게명 또는 서비스명")] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    per_page: Annotated[int, Query(ge=1, le=100)] = 20,
) -> PaginatedResponse:
    """서비스 요청 목록을 조회합니다.

    List all service requests, newest first.

    Args:
        db: 비동기 데이터베이스 세션 (Async database session)
        current_user: 인증된 관리자 (Authenticated admin)
        status: 상태 필터 (Optional status filter)
        search: 가게명/서비스명 검색어 (Store or service name search)
        page: 페이지 번호 (Page number)
        per_page: 페이지당 항목 수 (Items per page)

    Returns:
        PaginatedResponse: 페이지네이션된 요청 목록 (Paginated request list)
    """
    items, total = await service_request_service.admin_list(db, status, search, page, per_page)
    return PaginatedResponse(items=items, total=total, page=page, per_page=per_page)


@router.get("/export")
async def export_service_requests(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[Profile, Depends(require_admin)],
    status: Annotated[str | None, Query()] = None,
    search: Annotated[str | None, Query()] = None,
) -> StreamingResponse:
    """서비스 요청 목록을 Excel 파일로 내보냅니다."""
    excel_bytes: bytes = await service_request_service.export_excel(db, status, search)
    return StreamingResponse(
        BytesIO(excel_bytes),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": "attachment; filename=service_requests.xlsx"},
    )


@router.get("/{request_id}", response_model=AdminServiceRequestDetailResponse)
async def get_service_request(
    request_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[Profile, Depends(require_admin)],
) -> AdminServiceRequestDetailResponse:
    return await service_request_service.admin_get(db, request_id)


@router.patch("/{request_id}/status", response_model=AdminServiceRequestDetailResponse)
async def update_service_request_status(
    request_id: UUID,
    data: StatusUpdateRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[Profile, Depends(require_admin)],
) -> AdminServiceRequestDetailResponse:
    """요청 상태 변경, 소유자에게 알림이 생성됩니다.

    Change the status. Disallowed transitions answer 400; the owner is
    notified on success.
    """
    await service_request_service.change_status(db, request_id, data.status)
    await db.commit()
    return await service_request_service.admin_get(db, request_id)
