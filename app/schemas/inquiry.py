"""문의 관련 Pydantic 요청/응답 스키마 정의.

Inquiry and inquiry response Pydantic schema definitions.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class InquiryCreate(BaseModel):
    """문의 등록 요청 스키마.

    Attributes:
        title: 제목 (Required, non-blank)
        content: 내용 (Required, non-blank)
        category: 분류 (일반문의 | 기술지원 | 서비스문의 | 기타, default 일반문의)
        priority: 우선순위 (낮음 | 보통 | 높음, default 보통)
        store_id: 관련 가게 (Must be owned by the caller)
    """

    title: str = ""
    content: str = ""
    category: str | None = None
    priority: str | None = None
    store_id: UUID | None = None


class InquiryStatusUpdate(BaseModel):
    status: str  # 접수됨 | 처리중 | 완료 | 보류


class InquiryResponseCreate(BaseModel):
    """관리자 답변 등록 요청 스키마."""

    content: str
    is_internal_note: bool = False  # 내부 메모는 사용자에게 노출/알림되지 않음


class InquiryAnswer(BaseModel):
    id: str
    admin_id: str
    content: str
    is_internal_note: bool
    created_at: datetime


class InquiryListItem(BaseModel):
    id: str
    title: str
    category: str
    priority: str
    status: str
    store_name: str | None
    user_phone: str | None = None  # 관리자 목록에서만 채움 (Admin list only)
    created_at: datetime
    updated_at: datetime


class InquiryDetailResponse(InquiryListItem):
    content: str
    store_id: str | None
    responses: list[InquiryAnswer]
