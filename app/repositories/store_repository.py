"""가게 레포지토리 (가게 조회 및 관리자 검색).

Store Repository. Owner-scoped store queries and the admin store search.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.service import ServiceRequest
from app.models.store import Store
from app.repositories.base import BaseRepository


class StoreRepository(BaseRepository[Store]):
    """가게 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the stores table.
    """

    def __init__(self) -> None:
        super().__init__(Store)

    async def get_user_stores(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> Sequence[Store]:
        """사용자의 가게 목록 (Stores owned by a profile, oldest first)."""
        result = await db.execute(
            select(Store).where(Store.user_id == user_id).order_by(Store.created_at)
        )
        return result.scalars().all()

    async def get_owned(
        self,
        db: AsyncSession,
        store_id: UUID,
        user_id: UUID,
    ) -> Store | None:
        """소유자가 일치하는 가게만 조회합니다 (Store only if owned by user_id)."""
        result = await db.execute(
            select(Store).where(Store.id == store_id, Store.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def has_store(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> bool:
        return await self.exists(db, Store.user_id == user_id)

    async def search(
        self,
        db: AsyncSession,
        search: str | None = None,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[Sequence[Store], int]:
        """가게 이름/주소로 검색합니다 (관리자용).

        Admin search over store name and address, newest first,
        with the owner eagerly loaded.
        """
        query: Select = select(Store).options(selectinload(Store.owner))
        if search:
            pattern: str = f"%{search.strip()}%"
            query = query.where(or_(Store.name.ilike(pattern), Store.address.ilike(pattern)))
        query = query.order_by(Store.created_at.desc())
        return await self.get_paginated(db, query, page, per_page)

    async def get_with_owner(
        self,
        db: AsyncSession,
        store_id: UUID,
    ) -> Store | None:
        result = await db.execute(
            select(Store).options(selectinload(Store.owner)).where(Store.id == store_id)
        )
        return result.scalar_one_or_none()

    async def get_request_counts(
        self,
        db: AsyncSession,
        store_ids: list[UUID],
    ) -> dict[UUID, int]:
        """가게별 서비스 요청 수 (Service request count per store)."""
        if not store_ids:
            return {}
        rows = await db.execute(
            select(ServiceRequest.store_id, func.count(ServiceRequest.id))
            .where(ServiceRequest.store_id.in_(store_ids))
            .group_by(ServiceRequest.store_id)
        )
        return {store_id: total for store_id, total in rows.all()}


# 싱글턴 인스턴스 (Singleton instance)
store_repository: StoreRepository = StoreRepository()
