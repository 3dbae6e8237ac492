"""문의 SQLAlchemy ORM 모델 정의.

Inquiry SQLAlchemy ORM model definitions.

Tables:
    - inquiries: 사용자 문의 (User support inquiries)
    - inquiry_responses: 관리자 답변 및 내부 메모 (Admin responses and internal notes)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Inquiry(Base):
    """문의 모델.

    Support inquiry filed by a user. Status is changed only by admins.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        user_id: 작성자 FK (Author profile)
        store_id: 관련 가게 FK, 선택 (Related store, optional)
        title: 제목 (Title)
        content: 내용 (Body)
        category: 분류 (일반문의 | 기술지원 | 서비스문의 | 기타)
        priority: 우선순위 (낮음 | 보통 | 높음)
        status: 상태 (접수됨 | 처리중 | 완료 | 보류)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update, bumped on status change and responses)
    """

    __tablename__ = "inquiries"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    store_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("stores.id", ondelete="SET NULL"), nullable=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(20), nullable=False, default="일반문의")
    priority: Mapped[str] = mapped_column(String(10), nullable=False, default="보통")
    status: Mapped[str] = mapped_column(String(10), nullable=False, default="접수됨", index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    profile = relationship("Profile")
    store = relationship("Store")
    responses = relationship(
        "InquiryResponse",
        back_populates="inquiry",
        cascade="all, delete-orphan",
        order_by="InquiryResponse.created_at",
    )


class InquiryResponse(Base):
    """문의 답변 모델 (append-only).

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        inquiry_id: 상위 문의 FK (Parent inquiry)
        admin_id: 작성 관리자 FK (Responding admin profile)
        content: 답변 내용 (Response body)
        is_internal_note: 내부 메모 여부, 사용자에게 숨김 (Hidden from the user when True)
        created_at: 생성 일시 UTC (Creation timestamp)
    """

    __tablename__ = "inquiry_responses"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    inquiry_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("inquiries.id", ondelete="CASCADE"), nullable=False, index=True
    )
    admin_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    is_internal_note: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    # Relationships
    inquiry = relationship("Inquiry", back_populates="responses")
