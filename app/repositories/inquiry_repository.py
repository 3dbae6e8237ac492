"""문의 레포지토리 (문의 및 답변 쿼리).

Inquiry Repository. Owner-scoped and admin inquiry queries plus
append-only responses.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.inquiry import Inquiry, InquiryResponse
from app.repositories.base import BaseRepository


class InquiryRepository(BaseRepository[Inquiry]):
    """문의 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for inquiries and inquiry_responses.
    """

    def __init__(self) -> None:
        super().__init__(Inquiry)

    async def get_by_user(
        self,
        db: AsyncSession,
        user_id: UUID,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[Sequence[Inquiry], int]:
        """사용자의 문의 목록, 최신순 (A profile's inquiries, newest first)."""
        query: Select = (
            select(Inquiry)
            .options(selectinload(Inquiry.store))
            .where(Inquiry.user_id == user_id)
            .order_by(Inquiry.created_at.desc())
        )
        return await self.get_paginated(db, query, page, per_page)

    async def search_admin(
        self,
        db: AsyncSession,
        status: str | None = None,
        category: str | None = None,
        search: str | None = None,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[Sequence[Inquiry], int]:
        """관리자 문의 목록 (최근 수정순).

        Admin inquiry list filtered by status/category, searched by title
        or content, ordered by latest update.
        """
        query: Select = select(Inquiry).options(
            selectinload(Inquiry.profile),
            selectinload(Inquiry.store),
        )
        if status:
            query = query.where(Inquiry.status == status)
        if category:
            query = query.where(Inquiry.category == category)
        if search:
            pattern: str = f"%{search.strip()}%"
            query = query.where(or_(Inquiry.title.ilike(pattern), Inquiry.content.ilike(pattern)))
        query = query.order_by(Inquiry.updated_at.desc())
        return await self.get_paginated(db, query, page, per_page)

    async def get_detail(
        self,
        db: AsyncSession,
        inquiry_id: UUID,
        user_id: UUID | None = None,
    ) -> Inquiry | None:
        """답변을 포함한 문의 단건 조회.

        Retrieve an inquiry with responses, author and store loaded.
        When user_id is given, only an inquiry owned by that profile matches.
        """
        query: Select = (
            select(Inquiry)
            .options(
                selectinload(Inquiry.responses),
                selectinload(Inquiry.profile),
                selectinload(Inquiry.store),
            )
            .where(Inquiry.id == inquiry_id)
        )
        if user_id is not None:
            query = query.where(Inquiry.user_id == user_id)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def add_response(
        self,
        db: AsyncSession,
        inquiry_id: UUID,
        admin_id: UUID,
        content: str,
        is_internal_note: bool,
    ) -> InquiryResponse:
        """답변을 추가합니다 (Append a response)."""
        response: InquiryResponse = InquiryResponse(
            inquiry_id=inquiry_id,
            admin_id=admin_id,
            content=content,
            is_internal_note=is_internal_note,
        )
        db.add(response)
        await db.flush()
        await db.refresh(response)
        return response


# 싱글턴 인스턴스 (Singleton instance)
inquiry_repository: InquiryRepository = InquiryRepository()
