"""서비스 요청 레포지토리 (카탈로그, 요청, 상세, 집계 쿼리).

Service Request Repository. Catalog lookups, owner-scoped and admin
request queries, and dashboard aggregates.
"""

from datetime import datetime
from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.constants import SERVICE_NAME_MAP, STATUS_COMPLETED
from app.models.service import Service, ServiceRequest
from app.models.store import Store
from app.repositories.base import BaseRepository


def _with_relations(query: Select) -> Select:
    """목록/상세 응답에 필요한 관계를 즉시 로딩합니다 (Eager-load response relations)."""
    return query.options(
        selectinload(ServiceRequest.details),
        selectinload(ServiceRequest.service),
        selectinload(ServiceRequest.store),
        selectinload(ServiceRequest.profile),
    )


class ServiceRequestRepository(BaseRepository[ServiceRequest]):
    """서비스 요청 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for services, service_requests,
    and request_details.
    """

    def __init__(self) -> None:
        super().__init__(ServiceRequest)

    # --- 카탈로그 (Catalog) ---

    async def get_service_by_name(
        self,
        db: AsyncSession,
        name: str,
    ) -> Service | None:
        result = await db.execute(select(Service).where(Service.name == name))
        return result.scalar_one_or_none()

    # --- 요청 조회 (Request lookups) ---

    async def get_detail(
        self,
        db: AsyncSession,
        request_id: UUID,
        user_id: UUID | None = None,
    ) -> ServiceRequest | None:
        """관계를 포함한 요청 단건 조회.

        Retrieve a request with details, service, store and profile loaded.
        When user_id is given, only a request owned by that profile matches.
        """
        query: Select = _with_relations(select(ServiceRequest).where(ServiceRequest.id == request_id))
        if user_id is not None:
            query = query.where(ServiceRequest.user_id == user_id)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def list_for_user(
        self,
        db: AsyncSession,
        user_id: UUID,
        service_name: str | None = None,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[Sequence[ServiceRequest], int]:
        """사용자의 요청 목록, 최신순 (A profile's requests, newest first)."""
        query: Select = select(ServiceRequest).where(ServiceRequest.user_id == user_id)
        if service_name:
            query = query.join(Service, ServiceRequest.service_id == Service.id).where(Service.name == service_name)
        query = _with_relations(query.order_by(ServiceRequest.created_at.desc()))
        return await self.get_paginated(db, query, page, per_page)

    async def search_admin(
        self,
        db: AsyncSession,
        status: str | None = None,
        search: str | None = None,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[Sequence[ServiceRequest], int]:
        """관리자 요청 목록 (상태 필터, 가게명/서비스명 검색).

        Admin request list filtered by status and searched by store name
        or service display name, newest first.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            status: 상태 필터 (Korean status literal, optional)
            search: 검색어 (Matched against store name and service display name)
            page: 페이지 번호 (Page number)
            per_page: 페이지당 항목 수 (Items per page)

        Returns:
            tuple[Sequence[ServiceRequest], int]: (요청 목록, 전체 개수)
        """
        query: Select = self._admin_query(status, search)
        query = _with_relations(query.order_by(ServiceRequest.created_at.desc()))
        return await self.get_paginated(db, query, page, per_page)

    async def list_for_export(
        self,
        db: AsyncSession,
        status: str | None = None,
        search: str | None = None,
    ) -> Sequence[ServiceRequest]:
        """엑셀 내보내기용 전체 목록 (All matching requests, newest first)."""
        query: Select = _with_relations(
            self._admin_query(status, search).order_by(ServiceRequest.created_at.desc())
        )
        result = await db.execute(query)
        return result.scalars().all()

    def _admin_query(self, status: str | None, search: str | None) -> Select:
        query: Select = (
            select(ServiceRequest)
            .join(Service, ServiceRequest.service_id == Service.id)
            .outerjoin(Store, ServiceRequest.store_id == Store.id)
        )
        if status:
            query = query.where(ServiceRequest.status == status)
        if search:
            term: str = search.strip()
            # 표시 이름은 코드 상수이므로 일치하는 서비스 키로 변환
            # Display names live in code; translate them to service keys
            service_names: list[str] = [
                name for name, display in SERVICE_NAME_MAP.items() if term in display
            ]
            conditions = [Store.name.ilike(f"%{term}%")]
            if service_names:
                conditions.append(Service.name.in_(service_names))
            query = query.where(or_(*conditions))
        return query

    async def list_for_store(
        self,
        db: AsyncSession,
        store_id: UUID,
    ) -> Sequence[ServiceRequest]:
        """가게의 요청 이력 (Request history for a store, newest first)."""
        query: Select = _with_relations(
            select(ServiceRequest)
            .where(ServiceRequest.store_id == store_id)
            .order_by(ServiceRequest.created_at.desc())
        )
        result = await db.execute(query)
        return result.scalars().all()

    async def list_all_for_user(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> Sequence[ServiceRequest]:
        """사용자의 전체 요청 (All requests of a profile, newest first)."""
        query: Select = _with_relations(
            select(ServiceRequest)
            .where(ServiceRequest.user_id == user_id)
            .order_by(ServiceRequest.created_at.desc())
        )
        result = await db.execute(query)
        return result.scalars().all()

    # --- 집계 (Aggregates) ---

    async def count_by_status(
        self,
        db: AsyncSession,
    ) -> dict[str, int]:
        """상태별 요청 수 (Request count per status)."""
        rows = await db.execute(
            select(ServiceRequest.status, func.count(ServiceRequest.id)).group_by(ServiceRequest.status)
        )
        return {status: total for status, total in rows.all()}

    async def count_completed_since(
        self,
        db: AsyncSession,
        since: datetime,
    ) -> int:
        """since 이후 완료된 요청 수 (Requests completed at or after since)."""
        return await self.count(
            db,
            ServiceRequest.status == STATUS_COMPLETED,
            ServiceRequest.completed_at >= since,
        )


# 싱글턴 인스턴스 (Singleton instance)
service_request_repository: ServiceRequestRepository = ServiceRequestRepository()
