"""대시보드 서비스: 관리자 대시보드 집계 비즈니스 로직.

Dashboard Service. Aggregate counts for the admin dashboard summary.
"""

from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from app.constants import ROLE_USER, STATUS_IN_PROGRESS, STATUS_REQUESTED
from app.models.user import Profile
from app.repositories.profile_repository import profile_repository
from app.repositories.service_request_repository import service_request_repository
from app.repositories.store_repository import store_repository
from app.utils.format import start_of_local_day


class DashboardService:
    """대시보드 서비스.

    Dashboard aggregation service for admin dashboard views.
    """

    async def get_summary(
        self,
        db: AsyncSession,
        now: datetime | None = None,
    ) -> dict[str, int]:
        """대시보드 요약 집계.

        Aggregate counts: total requests, pending (요청됨), in progress
        (진행중), completed since local midnight, stores, and user-role
        profiles.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            now: 기준 시각, 기본값 현재 (Reference time for "today")

        Returns:
            dict[str, int]: 집계 결과 (Summary counts)
        """
        by_status: dict[str, int] = await service_request_repository.count_by_status(db)
        completed_today: int = await service_request_repository.count_completed_since(
            db, start_of_local_day(now)
        )
        return {
            "total_requests": sum(by_status.values()),
            "pending_requests": by_status.get(STATUS_REQUESTED, 0),
            "in_progress_requests": by_status.get(STATUS_IN_PROGRESS, 0),
            "completed_today": completed_today,
            "total_stores": await store_repository.count(db),
            "total_users": await profile_repository.count(db, Profile.role == ROLE_USER),
        }


# 싱글턴 인스턴스 (Singleton instance)
dashboard_service: DashboardService = DashboardService()
