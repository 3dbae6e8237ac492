"""알림 관련 Pydantic 응답 스키마 정의."""

from datetime import datetime

from pydantic import BaseModel


class NotificationResponse(BaseModel):
    """알림 응답 스키마.

    Attributes:
        id: 알림 UUID (Notification unique identifier)
        title: 제목 (Short title)
        message: 알림 메시지 (Human-readable message)
        type: 알림 유형 (status_change | inquiry_response)
        read: 읽음 여부 (Read status flag)
        created_at: 생성 일시 (Creation timestamp)
    """

    id: str
    title: str
    message: str
    type: str
    read: bool
    created_at: datetime


class UnreadCountResponse(BaseModel):
    unread_count: int
