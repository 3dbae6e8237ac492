"""알림 SQLAlchemy ORM 모델 정의.

Notification SQLAlchemy ORM model definitions.

Tables:
    - notifications: 사용자 알림 (User notifications)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import String, Boolean, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Notification(Base):
    """알림 모델 (사용자에게 전달되는 알림).

    Notification delivered to a user, listed in the app and pushed over
    the notification stream when inserted.

    Notification Types (type 필드 값):
        - "status_change": 서비스 요청 상태 변경 (Service request status changed by admin)
        - "inquiry_response": 문의 답변 등록 (Admin answered an inquiry)

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        user_id: 수신자 FK (Recipient profile)
        title: 제목 (Title)
        message: 알림 메시지 (Human-readable message)
        type: 알림 유형 (Notification type, see above)
        read: 읽음 여부 (Whether the user has read it)
        created_at: 생성 일시 UTC (Creation timestamp)
    """

    __tablename__ = "notifications"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 수신자 FK (Recipient profile)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    message: Mapped[str] = mapped_column(String(1000), nullable=False)
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    # 읽음 여부 (Unread by default)
    read: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
