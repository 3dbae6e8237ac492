"""프로필 레포지토리 (프로필 조회 및 관리자 사용자 검색).

Profile Repository. Profile lookups and the admin user search.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.constants import ROLE_USER
from app.models.service import ServiceRequest
from app.models.store import Store
from app.models.user import Profile
from app.repositories.base import BaseRepository
from app.utils.phone import digits_only


class ProfileRepository(BaseRepository[Profile]):
    """프로필 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the profiles table.
    """

    def __init__(self) -> None:
        super().__init__(Profile)

    async def search_users(
        self,
        db: AsyncSession,
        search: str | None = None,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[Sequence[Profile], int]:
        """일반 사용자 프로필을 휴대폰 번호로 검색합니다.

        Search user-role profiles by phone digits, newest first.
        "010-1234" matches the stored "+82 101234..." because the leading
        zero is dropped before matching.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            search: 휴대폰 번호 검색어 (Phone search term)
            page: 페이지 번호 (Page number)
            per_page: 페이지당 항목 수 (Items per page)

        Returns:
            tuple[Sequence[Profile], int]: (프로필 목록, 전체 개수)
        """
        query: Select = select(Profile).where(Profile.role == ROLE_USER)
        if search:
            digits: str = digits_only(search)
            if digits.startswith("0"):
                digits = digits[1:]
            if digits:
                query = query.where(Profile.phone.contains(digits))
        query = query.order_by(Profile.created_at.desc())
        return await self.get_paginated(db, query, page, per_page)

    async def get_counts(
        self,
        db: AsyncSession,
        profile_ids: list[UUID],
    ) -> dict[UUID, dict[str, int]]:
        """프로필별 가게/요청 수를 조회합니다.

        Store and request counts per profile for the admin user list.
        """
        counts: dict[UUID, dict[str, int]] = {pid: {"store_count": 0, "request_count": 0} for pid in profile_ids}
        if not profile_ids:
            return counts

        store_rows = await db.execute(
            select(Store.user_id, func.count(Store.id))
            .where(Store.user_id.in_(profile_ids))
            .group_by(Store.user_id)
        )
        for user_id, total in store_rows.all():
            counts[user_id]["store_count"] = total

        request_rows = await db.execute(
            select(ServiceRequest.user_id, func.count(ServiceRequest.id))
            .where(ServiceRequest.user_id.in_(profile_ids))
            .group_by(ServiceRequest.user_id)
        )
        for user_id, total in request_rows.all():
            counts[user_id]["request_count"] = total
        return counts


# 싱글턴 인스턴스 (Singleton instance)
profile_repository: ProfileRepository = ProfileRepository()
