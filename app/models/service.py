"""서비스 및 서비스 요청 SQLAlchemy ORM 모델 정의.

Service catalog and service request SQLAlchemy ORM model definitions.

Tables:
    - services: 서비스 카탈로그 (Static service catalog, seeded)
    - service_requests: 서비스 요청 (User orders tracked through a status lifecycle)
    - request_details: 요청 상세 키/값 (Key/value rows: items, schedule, payment)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Service(Base):
    """서비스 카탈로그 모델.

    Catalog row; the name is a key into app.constants.SERVICE_CATALOG
    (burner, valve, alarm, pipe, gas, quote, contract).

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        name: 서비스 키 (Catalog key)
        created_at: 생성 일시 UTC (Creation timestamp)
    """

    __tablename__ = "services"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))


class ServiceRequest(Base):
    """서비스 요청 모델.

    Service request model. Status moves 요청됨 -> 진행중 -> 완료, or to 취소;
    entering a status stamps its timestamp column.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        user_id: 요청자 프로필 FK (Requesting profile)
        store_id: 대상 가게 FK, 선택 (Target store, nullable)
        service_id: 서비스 FK (Requested service)
        status: 상태 (요청됨 | 진행중 | 완료 | 취소)
        created_at: 요청 일시 (Requested timestamp, timeline step 0)
        updated_at: 수정 일시 (Last update timestamp)
        working_at: 작업 시작 일시 (Timeline step 1)
        completed_at: 완료 일시 (Timeline step 2)
        canceled_at: 취소 일시 (Timeline step 3)
    """

    __tablename__ = "service_requests"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    store_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("stores.id", ondelete="SET NULL"), nullable=True, index=True)
    service_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("services.id"), nullable=False)
    # 상태 (요청됨 | 진행중 | 완료 | 취소)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="요청됨", index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
    working_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    canceled_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # Relationships
    service = relationship("Service")
    store = relationship("Store")
    profile = relationship("Profile")
    details = relationship(
        "RequestDetail",
        back_populates="request",
        cascade="all, delete-orphan",
        order_by="RequestDetail.sort_order",
    )

    @property
    def timestamps(self) -> list[datetime | None]:
        """타임라인 순서의 타임스탬프 (Timeline-ordered timestamps)."""
        return [self.created_at, self.working_at, self.completed_at, self.canceled_at]


class RequestDetail(Base):
    """요청 상세 모델 (키/값).

    Request detail key/value row. Item rows use the item label as key and
    "{n}개" as value; reserved keys hold schedule, payment and free text.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        request_id: 상위 요청 FK (Parent request)
        key: 라벨 (Item label or reserved key)
        value: 값 (Quantity string or free text)
        sort_order: 표시 순서 (Display order, insertion order)
    """

    __tablename__ = "request_details"
    __table_args__ = (UniqueConstraint("request_id", "key", name="uq_request_details_request_key"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    request_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("service_requests.id", ondelete="CASCADE"), nullable=False, index=True
    )
    key: Mapped[str] = mapped_column(String(100), nullable=False)
    value: Mapped[str] = mapped_column(Text, nullable=False, default="")
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Relationships
    request = relationship("ServiceRequest", back_populates="details")
