"""앱 서비스 요청 라우터: 내 요청 목록/상세, 신청, 수정, 취소.

App Service Request Router. The user's request history, the creation
wizard (per-step validation and final submit), in-place detail edits
and cancellation while the request is still 요청됨.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import Profile
from app.schemas.common import MessageResponse, PaginatedResponse
from app.schemas.service_request import (
    DetailEditRequest,
    ServiceRequestCreate,
    ServiceRequestCreatedResponse,
    ServiceRequestDetailResponse,
    WizardValidateRequest,
    WizardValidateResponse,
)
from app.services.service_request_service import (
    CANCELED_MESSAGE,
    CREATED_MESSAGE,
    SAVED_MESSAGE,
    service_request_service,
)
from app.utils.format import display_id

router: APIRouter = APIRouter()


@router.get("", response_model=PaginatedResponse)
async def list_my_service_requests(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[Profile, Depends(get_current_user)],
    service: Annotated[str | None, Query(description="서비스 이름 필터")] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    per_page: Annotated[int, Query(ge=1, le=100)] = 20,
) -> PaginatedResponse:
    """내 서비스 요청 목록을 조회합니다.

    List my service requests, newest first.

    Args:
        db: 비동기 데이터베이스 세션 (Async database session)
        current_user: 인증된 사용자 (Authenticated profile)
        service: 서비스 이름 필터 (Optional service name filter)
        page: 페이지 번호 (Page number)
        per_page: 페이지당 항목 수 (Items per page)

    Returns:
        PaginatedResponse: 페이지네이션된 요청 목록 (Paginated request list)
    """
    items, total = await service_request_service.list_my_requests(
        db, current_user, service, page, per_page
    )
    return PaginatedResponse(items=items, total=total, page=page, per_page=per_page)


@router.post("/wizard/validate", response_model=WizardValidateResponse)
async def validate_wizard_step(
    data: WizardValidateRequest,
    current_user: Annotated[Profile, Depends(get_current_user)],
) -> WizardValidateResponse:
    """신청 단계 검증 (1: 내용, 2: 방문 일정, 3: 결제).

    Validate one wizard step; a failing step answers 400 with its message.
    """
    return service_request_service.validate_step(data)


@router.post("", response_model=ServiceRequestCreatedResponse, status_code=201)
async def create_service_request(
    data: ServiceRequestCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[Profile, Depends(get_current_user)],
) -> ServiceRequestCreatedResponse:
    """서비스 신청, 요청과 상세 행이 하나의 트랜잭션으로 생성됩니다.

    Submit the wizard. The request and its detail rows are committed
    together.
    """
    request = await service_request_service.create_request(db, current_user, data)
    await db.commit()
    return ServiceRequestCreatedResponse(
        id=str(request.id),
        display_id=display_id(request.id),
        message=CREATED_MESSAGE,
    )


@router.get("/{request_id}", response_model=ServiceRequestDetailResponse)
async def get_my_service_request(
    request_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[Profile, Depends(get_current_user)],
) -> ServiceRequestDetailResponse:
    """내 서비스 요청 상세 (타인 요청은 404)."""
    return await service_request_service.get_my_request(db, current_user, request_id)


@router.put("/{request_id}/details", response_model=MessageResponse)
async def edit_service_request_details(
    request_id: UUID,
    data: DetailEditRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[Profile, Depends(get_current_user)],
) -> MessageResponse:
    """요청 상세 수정 (요청됨 상태에서만).

    Edit items and the visit schedule. Nothing is written when a check
    fails.
    """
    await service_request_service.edit_details(db, current_user, request_id, data)
    await db.commit()
    return MessageResponse(message=SAVED_MESSAGE)


@router.post("/{request_id}/cancel", response_model=MessageResponse)
async def cancel_service_request(
    request_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[Profile, Depends(get_current_user)],
) -> MessageResponse:
    await service_request_service.cancel_request(db, current_user, request_id)
    await db.commit()
    return MessageResponse(message=CANCELED_MESSAGE)
