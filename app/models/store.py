"""가게 SQLAlchemy ORM 모델 정의.

Store SQLAlchemy ORM model definitions.

Tables:
    - stores: 사용자가 등록한 가게 위치 (Store locations registered by users)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Store(Base):
    """가게 모델.

    Store model. Created through the add-store flow and never deleted.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        user_id: 소유 프로필 FK (Owner profile)
        name: 가게 이름 (Store name)
        address: 주소 (Street address)
        latitude: 위도, 선택 (Optional latitude)
        longitude: 경도, 선택 (Optional longitude)
        created_at: 생성 일시 UTC (Creation timestamp)
    """

    __tablename__ = "stores"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 소유 프로필 FK (Owner profile)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    # 좌표 (지도 검색으로 등록한 경우에만 존재)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    # Relationships
    owner = relationship("Profile", foreign_keys=[user_id])
