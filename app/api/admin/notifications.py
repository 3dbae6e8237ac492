"""관리자 알림 라우터: 새 서비스 요청 실시간 스트림.

Admin Notification Router. Server-Sent Events carrying a web-push
shaped payload for every newly created service request.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_admin
from app.database import get_db
from app.models.user import Profile
from app.services.change_feed import change_feed
from app.services.service_request_service import SERVICE_REQUESTS_TABLE
from app.utils.push import build_service_request_push
from app.utils.sse import SSE_HEADERS, stream_changes

router: APIRouter = APIRouter()


@router.get("/stream")
async def stream_new_service_requests(
    request: Request,
    current_user: Annotated[Profile, Depends(require_admin)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> StreamingResponse:
    """새 서비스 요청 알림 스트림 (SSE).

    One ``service_request`` event per inserted request, shaped as a push
    payload (title, body, icon, tag, data.url).
    """
    # 스트림 동안 DB 연결을 잡고 있지 않음 (Release the connection before streaming)
    await db.close()
    return StreamingResponse(
        stream_changes(
            request,
            change_feed,
            SERVICE_REQUESTS_TABLE,
            "INSERT",
            transform=build_service_request_push,
            sse_event="service_request",
        ),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )
