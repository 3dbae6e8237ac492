"""기본 레포지토리 (모든 레포지토리의 부모 클래스).

Base Repository, parent class for all domain repositories.
Provides lookup by id, creation, SQL-condition counting and the
paginated query helper shared by every list endpoint.

Usage:
    class StoreRepository(BaseRepository[Store]):
        def __init__(self) -> None:
            super().__init__(Store)
"""

from typing import Any, Generic, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import Base

# 제네릭 타입 변수 (Generic type variable representing a SQLAlchemy model)
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """제네릭 레포지토리.

    Generic repository over one SQLAlchemy model.

    Attributes:
        model: SQLAlchemy 모델 클래스 (The SQLAlchemy model class)
    """

    def __init__(self, model: type[ModelType]) -> None:
        self.model: type[ModelType] = model

    async def get_by_id(
        self,
        db: AsyncSession,
        record_id: UUID,
    ) -> ModelType | None:
        """ID로 단일 레코드를 조회합니다.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            record_id: 조회할 레코드의 UUID (UUID of the record to retrieve)

        Returns:
            ModelType | None: 조회된 레코드 또는 None (Found record or None)
        """
        result = await db.execute(select(self.model).where(self.model.id == record_id))
        return result.scalar_one_or_none()

    async def get_paginated(
        self,
        db: AsyncSession,
        query: Select,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[Sequence[ModelType], int]:
        """페이지네이션이 적용된 레코드 목록을 조회합니다.

        Run query for one page and count every row it would return.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            query: 정렬까지 적용된 SELECT 쿼리 (Ordered base SELECT query)
            page: 현재 페이지 번호, 1부터 시작 (Current page number, 1-based)
            per_page: 페이지당 레코드 수 (Number of records per page)

        Returns:
            tuple[Sequence[ModelType], int]: (레코드 목록, 전체 개수)
        """
        # 정렬을 제거한 서브쿼리로 전체 개수 계산 (Count over the unordered subquery)
        count_query: Select = select(func.count()).select_from(query.order_by(None).subquery())
        total: int = (await db.execute(count_query)).scalar() or 0

        page = max(page, 1)
        result = await db.execute(query.offset((page - 1) * per_page).limit(per_page))
        items: Sequence[ModelType] = result.scalars().unique().all()
        return items, total

    async def create(
        self,
        db: AsyncSession,
        obj_data: dict[str, Any],
    ) -> ModelType:
        """새 레코드를 생성하고 flush하여 기본값을 채웁니다.

        Create a record and flush it so defaults and the id are populated.
        """
        db_obj: ModelType = self.model(**obj_data)
        db.add(db_obj)
        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def count(
        self,
        db: AsyncSession,
        *conditions: Any,
    ) -> int:
        """조건에 맞는 레코드 수 (Count records matching SQL conditions)."""
        query: Select = select(func.count()).select_from(self.model)
        if conditions:
            query = query.where(*conditions)
        return (await db.execute(query)).scalar() or 0

    async def exists(
        self,
        db: AsyncSession,
        *conditions: Any,
    ) -> bool:
        return await self.count(db, *conditions) > 0
