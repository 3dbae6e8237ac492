"""앱 알림 라우터: 내 알림 목록, 읽음 처리, 실시간 스트림.

App Notification Router. Paginated list, unread count, mark read,
and an SSE stream of the caller's newly inserted notifications.
Fixed paths are declared before ``/{notification_id}``.
"""

from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import Profile
from app.schemas.common import MessageResponse, PaginatedResponse
from app.schemas.notification import UnreadCountResponse
from app.services.change_feed import change_feed
from app.services.notification_service import NOTIFICATIONS_TABLE, notification_service
from app.utils.exceptions import NotFoundError
from app.utils.sse import SSE_HEADERS, stream_changes

router: APIRouter = APIRouter()


@router.get("", response_model=PaginatedResponse)
async def list_my_notifications(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[Profile, Depends(get_current_user)],
    page: Annotated[int, Query(ge=1)] = 1,
    per_page: Annotated[int, Query(ge=1, le=100)] = 20,
) -> PaginatedResponse:
    """내 알림 목록을 조회합니다.

    List my notifications, newest first.

    Args:
        db: 비동기 데이터베이스 세션 (Async database session)
        current_user: 인증된 사용자 (Authenticated profile)
        page: 페이지 번호 (Page number)
        per_page: 페이지당 항목 수 (Items per page)

    Returns:
        PaginatedResponse: 페이지네이션된 알림 목록 (Paginated notification list)
    """
    notifications, total = await notification_service.list_notifications(
        db, current_user.id, page, per_page
    )
    return PaginatedResponse(
        items=[notification_service.to_response(n) for n in notifications],
        total=total,
        page=page,
        per_page=per_page,
    )


@router.get("/unread-count", response_model=UnreadCountResponse)
async def get_unread_count(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[Profile, Depends(get_current_user)],
) -> UnreadCountResponse:
    count: int = await notification_service.get_unread_count(db, current_user.id)
    return UnreadCountResponse(unread_count=count)


@router.patch("/read-all", response_model=MessageResponse)
async def mark_all_notifications_read(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[Profile, Depends(get_current_user)],
) -> MessageResponse:
    """모든 알림 읽음 처리 (Mark all as read)."""
    updated: int = await notification_service.mark_all_read(db, current_user.id)
    await db.commit()
    return MessageResponse(message=f"{updated}건의 알림을 읽음 처리했습니다.")


@router.get("/stream")
async def stream_my_notifications(
    request: Request,
    current_user: Annotated[Profile, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> StreamingResponse:
    """새 알림 실시간 스트림 (SSE).

    Server-Sent Events of notifications inserted for the caller.
    """
    user_id: str = str(current_user.id)
    # 스트림 동안 DB 연결을 잡고 있지 않음 (Release the connection before streaming)
    await db.close()

    def is_mine(record: dict[str, Any]) -> bool:
        return record.get("user_id") == user_id

    return StreamingResponse(
        stream_changes(
            request,
            change_feed,
            NOTIFICATIONS_TABLE,
            "INSERT",
            predicate=is_mine,
            sse_event="notification",
        ),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )


@router.patch("/{notification_id}/read", response_model=MessageResponse)
async def mark_notification_read(
    notification_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[Profile, Depends(get_current_user)],
) -> MessageResponse:
    """단일 알림 읽음 처리, 타인 알림은 404."""
    if not await notification_service.mark_read(db, notification_id, current_user.id):
        raise NotFoundError("Notification not found")
    await db.commit()
    return MessageResponse(message="알림을 읽음 처리했습니다.")
