"""알림 레포지토리 (알림 관련 DB 쿼리 담당).

Notification Repository. Owner-scoped notification list, unread count
and read marking. Every query filters on user_id, so one profile can
never read or mark another's notifications.
"""

from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import Select, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.notification import Notification
from app.repositories.base import BaseRepository


class NotificationRepository(BaseRepository[Notification]):
    """알림 레포지토리.

    Extends:
        BaseRepository[Notification]
    """

    def __init__(self) -> None:
        super().__init__(Notification)

    async def get_user_notifications(
        self,
        db: AsyncSession,
        user_id: UUID,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[Sequence[Notification], int]:
        """사용자의 알림 목록 (최신순, Newest first).

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 프로필 UUID (Owner profile UUID)
            page: 페이지 번호, 1부터 시작 (Page number, 1-based)
            per_page: 페이지당 항목 수 (Items per page)

        Returns:
            tuple[Sequence[Notification], int]: (알림 목록, 전체 개수)
        """
        query: Select = (
            select(Notification)
            .where(Notification.user_id == user_id)
            .order_by(Notification.created_at.desc(), Notification.id)
        )
        return await self.get_paginated(db, query, page, per_page)

    async def get_unread_count(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> int:
        return await self.count(db, Notification.user_id == user_id, Notification.read.is_(False))

    async def _mark(self, db: AsyncSession, *conditions: Any) -> int:
        result = await db.execute(update(Notification).where(*conditions).values(read=True))
        await db.flush()
        return result.rowcount

    async def mark_read(
        self,
        db: AsyncSession,
        notification_id: UUID,
        user_id: UUID,
    ) -> bool:
        """단일 알림 읽음 처리.

        Returns:
            bool: 본인 알림이 존재했는지 여부, 이미 읽은 알림도 True
                  (Whether an owned notification exists; already-read counts)
        """
        updated: int = await self._mark(
            db, Notification.id == notification_id, Notification.user_id == user_id
        )
        return updated > 0

    async def mark_all_read(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> int:
        """읽지 않은 알림 전체를 읽음 처리하고 처리 건수를 반환합니다."""
        return await self._mark(db, Notification.user_id == user_id, Notification.read.is_(False))


# 싱글턴 인스턴스 (Singleton instance)
notification_repository: NotificationRepository = NotificationRepository()
