"""알림 서비스: 알림 비즈니스 로직.

Notification Service. Handles notification listing, read/unread
operations, and auto-creation for request status changes and inquiry
responses. Every created notification is staged on the change feed so
connected SSE clients receive it once the transaction commits.
"""

from typing import Any, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.constants import NOTIFICATION_INQUIRY_RESPONSE, NOTIFICATION_STATUS_CHANGE
from app.models.inquiry import Inquiry
from app.models.notification import Notification
from app.repositories.notification_repository import notification_repository
from app.schemas.notification import NotificationResponse
from app.services.change_feed import change_feed

NOTIFICATIONS_TABLE: str = "notifications"


class NotificationService:
    """알림 서비스.

    Notification service providing shared read/unread operations
    and auto-creation for service requests and inquiries.
    """

    def to_response(self, notification: Notification) -> NotificationResponse:
        return NotificationResponse(
            id=str(notification.id),
            title=notification.title,
            message=notification.message,
            type=notification.type,
            read=bool(notification.read),
            created_at=notification.created_at,
        )

    def to_event(self, notification: Notification) -> dict[str, Any]:
        """변경 피드 레코드 (Change feed record; JSON-safe)."""
        return {
            **self.to_response(notification).model_dump(mode="json"),
            "user_id": str(notification.user_id),
        }

    # --- 공통 조회/읽음 처리 (Shared read/unread operations) ---

    async def list_notifications(
        self,
        db: AsyncSession,
        user_id: UUID,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[Sequence[Notification], int]:
        """사용자의 알림 목록을 페이지네이션하여 조회합니다.

        List paginated notifications for a user, newest first.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 프로필 UUID (Profile UUID)
            page: 페이지 번호 (Page number)
            per_page: 페이지당 항목 수 (Items per page)

        Returns:
            tuple[Sequence[Notification], int]: (알림 목록, 전체 개수)
        """
        return await notification_repository.get_user_notifications(
            db, user_id, page, per_page
        )

    async def get_unread_count(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> int:
        return await notification_repository.get_unread_count(db, user_id)

    async def mark_read(
        self,
        db: AsyncSession,
        notification_id: UUID,
        user_id: UUID,
    ) -> bool:
        """단일 알림을 읽음 처리합니다.

        Returns:
            bool: 본인 알림이 존재하여 처리되었는지 여부 (Whether an owned notification was found)
        """
        return await notification_repository.mark_read(db, notification_id, user_id)

    async def mark_all_read(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> int:
        return await notification_repository.mark_all_read(db, user_id)

    # --- 자동 생성 (Auto-creation) ---

    async def create_notification(
        self,
        db: AsyncSession,
        user_id: UUID,
        title: str,
        message: str,
        notification_type: str,
    ) -> Notification:
        """알림을 생성하고 커밋 후 발행되도록 변경 피드에 적재합니다.

        Create a notification row and stage its INSERT event.
        """
        notification: Notification = await notification_repository.create(
            db,
            {
                "user_id": user_id,
                "title": title,
                "message": message,
                "type": notification_type,
                "read": False,
            },
        )
        change_feed.stage(db, NOTIFICATIONS_TABLE, "INSERT", self.to_event(notification))
        return notification

    async def create_for_status_change(
        self,
        db: AsyncSession,
        user_id: UUID,
        service_display_name: str,
        new_status: str,
    ) -> Notification:
        """서비스 요청 상태 변경 시 소유자에게 알림을 생성합니다.

        Notify the request owner that an admin changed its status.
        """
        return await self.create_notification(
            db,
            user_id=user_id,
            title="서비스 상태 변경",
            message=f"{service_display_name} 요청이 '{new_status}' 상태로 변경되었습니다.",
            notification_type=NOTIFICATION_STATUS_CHANGE,
        )

    async def create_for_inquiry_response(
        self,
        db: AsyncSession,
        inquiry: Inquiry,
    ) -> Notification:
        """문의 답변 등록 시 작성자에게 알림을 생성합니다.

        Notify the inquiry author that a public response was posted.
        """
        return await self.create_notification(
            db,
            user_id=inquiry.user_id,
            title="문의 답변 등록",
            message=f"'{inquiry.title}' 문의에 답변이 등록되었습니다.",
            notification_type=NOTIFICATION_INQUIRY_RESPONSE,
        )


# 싱글턴 인스턴스 (Singleton instance)
notification_service: NotificationService = NotificationService()
