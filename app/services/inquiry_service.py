"""문의 서비스: 사용자 문의 등록/조회, 관리자 상태 변경 및 답변.

Inquiry Service. Users file and read their inquiries; admins search,
move them between statuses, and append responses. Public responses
notify the author, internal notes stay hidden from the user.
"""

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.constants import (
    DEFAULT_INQUIRY_CATEGORY,
    DEFAULT_INQUIRY_PRIORITY,
    DEFAULT_INQUIRY_STATUS,
    INQUIRY_CATEGORIES,
    INQUIRY_PRIORITIES,
    INQUIRY_STATUSES,
)
from app.models.inquiry import Inquiry, InquiryResponse
from app.models.user import Profile
from app.repositories.inquiry_repository import inquiry_repository
from app.repositories.store_repository import store_repository
from app.schemas.inquiry import (
    InquiryAnswer,
    InquiryCreate,
    InquiryDetailResponse,
    InquiryListItem,
    InquiryResponseCreate,
)
from app.services.notification_service import notification_service
from app.utils.exceptions import BadRequestError, NotFoundError
from app.utils.phone import format_phone_number


class InquiryService:
    """문의 비즈니스 로직을 처리하는 서비스.

    Service handling inquiry business logic.
    """

    def to_list_item(self, inquiry: Inquiry, include_phone: bool = False) -> InquiryListItem:
        return InquiryListItem(
            id=str(inquiry.id),
            title=inquiry.title,
            category=inquiry.category,
            priority=inquiry.priority,
            status=inquiry.status,
            store_name=inquiry.store.name if inquiry.store else None,
            user_phone=format_phone_number(inquiry.profile.phone) if include_phone and inquiry.profile else None,
            created_at=inquiry.created_at,
            updated_at=inquiry.updated_at,
        )

    def to_detail(self, inquiry: Inquiry, include_internal: bool) -> InquiryDetailResponse:
        """상세 응답, 사용자에게는 내부 메모를 제외합니다.

        Build the detail; internal notes are dropped unless include_internal.
        """
        responses: list[InquiryResponse] = [
            r for r in inquiry.responses if include_internal or not r.is_internal_note
        ]
        return InquiryDetailResponse(
            **self.to_list_item(inquiry, include_phone=include_internal).model_dump(),
            content=inquiry.content,
            store_id=str(inquiry.store_id) if inquiry.store_id else None,
            responses=[
                InquiryAnswer(
                    id=str(r.id),
                    admin_id=str(r.admin_id),
                    content=r.content,
                    is_internal_note=r.is_internal_note,
                    created_at=r.created_at,
                )
                for r in responses
            ],
        )

    # --- 사용자 (User) ---

    async def list_my_inquiries(
        self,
        db: AsyncSession,
        user: Profile,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[list[InquiryListItem], int]:
        inquiries, total = await inquiry_repository.get_by_user(db, user.id, page, per_page)
        return [self.to_list_item(i) for i in inquiries], total

    async def get_my_inquiry(
        self,
        db: AsyncSession,
        user: Profile,
        inquiry_id: UUID,
    ) -> InquiryDetailResponse:
        inquiry: Inquiry | None = await inquiry_repository.get_detail(db, inquiry_id, user.id)
        if inquiry is None:
            raise NotFoundError("Inquiry not found")
        return self.to_detail(inquiry, include_internal=False)

    async def create_inquiry(
        self,
        db: AsyncSession,
        user: Profile,
        data: InquiryCreate,
    ) -> Inquiry:
        """문의를 등록합니다.

        File a new inquiry with status 접수됨.

        Raises:
            BadRequestError: 제목/내용 누락 또는 잘못된 분류/우선순위 (Blank fields, unknown category/priority)
            NotFoundError: 본인 소유가 아닌 가게 (Store not owned)
        """
        title: str = data.title.strip()
        content: str = data.content.strip()
        if not title or not content:
            raise BadRequestError("제목과 내용을 입력해주세요.")

        category: str = data.category or DEFAULT_INQUIRY_CATEGORY
        priority: str = data.priority or DEFAULT_INQUIRY_PRIORITY
        if category not in INQUIRY_CATEGORIES:
            raise BadRequestError(f"Invalid category: {category}")
        if priority not in INQUIRY_PRIORITIES:
            raise BadRequestError(f"Invalid priority: {priority}")

        if data.store_id is not None:
            if await store_repository.get_owned(db, data.store_id, user.id) is None:
                raise NotFoundError("Store not found")

        return await inquiry_repository.create(
            db,
            {
                "user_id": user.id,
                "store_id": data.store_id,
                "title": title,
                "content": content,
                "category": category,
                "priority": priority,
                "status": DEFAULT_INQUIRY_STATUS,
            },
        )

    # --- 관리자 (Admin) ---

    async def admin_list(
        self,
        db: AsyncSession,
        status: str | None = None,
        category: str | None = None,
        search: str | None = None,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[list[InquiryListItem], int]:
        inquiries, total = await inquiry_repository.search_admin(
            db, status, category, search, page, per_page
        )
        return [self.to_list_item(i, include_phone=True) for i in inquiries], total

    async def admin_get(
        self,
        db: AsyncSession,
        inquiry_id: UUID,
    ) -> InquiryDetailResponse:
        inquiry: Inquiry | None = await inquiry_repository.get_detail(db, inquiry_id)
        if inquiry is None:
            raise NotFoundError("Inquiry not found")
        return self.to_detail(inquiry, include_internal=True)

    async def change_status(
        self,
        db: AsyncSession,
        inquiry_id: UUID,
        new_status: str,
    ) -> Inquiry:
        """문의 상태 변경, 네 가지 상태 간 자유 전이 (Any of the four statuses)."""
        if new_status not in INQUIRY_STATUSES:
            raise BadRequestError(f"Invalid status: {new_status}")
        inquiry: Inquiry | None = await inquiry_repository.get_by_id(db, inquiry_id)
        if inquiry is None:
            raise NotFoundError("Inquiry not found")
        inquiry.status = new_status
        inquiry.updated_at = datetime.now(timezone.utc)
        await db.flush()
        return inquiry

    async def add_response(
        self,
        db: AsyncSession,
        admin: Profile,
        inquiry_id: UUID,
        data: InquiryResponseCreate,
    ) -> InquiryResponse:
        """답변을 등록합니다.

        Append a response. Unless it is an internal note, the author gets
        an inquiry_response notification.
        """
        content: str = data.content.strip()
        if not content:
            raise BadRequestError("답변 내용을 입력해주세요.")
        inquiry: Inquiry | None = await inquiry_repository.get_by_id(db, inquiry_id)
        if inquiry is None:
            raise NotFoundError("Inquiry not found")

        response: InquiryResponse = await inquiry_repository.add_response(
            db, inquiry.id, admin.id, content, data.is_internal_note
        )
        inquiry.updated_at = datetime.now(timezone.utc)
        await db.flush()

        if not data.is_internal_note:
            await notification_service.create_for_inquiry_response(db, inquiry)
        return response


# 싱글턴 인스턴스 (Singleton instance)
inquiry_service: InquiryService = InquiryService()
