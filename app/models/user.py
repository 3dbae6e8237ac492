"""프로필 SQLAlchemy ORM 모델 정의.

Profile SQLAlchemy ORM model definitions.

Tables:
    - profiles: 사용자 및 관리자 프로필 (User and admin profiles)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Profile(Base):
    """프로필 모델 (휴대폰 인증 사용자 또는 이메일 관리자).

    Profile model. Regular users are created on their first successful
    phone OTP sign-up and are identified by phone; admins are seeded with
    an email/password and identified by role.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        phone: 국제 형식 휴대폰 번호 (International form, e.g. "+82 1012345678")
        email: 이메일, 관리자용 (Email, used for admin login)
        password_hash: bcrypt 해시, 관리자용 (Admin password hash)
        default_store_id: 기본 가게 FK (Default store used to pre-fill requests)
        role: 역할 (user | admin)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)
    """

    __tablename__ = "profiles"

    # 프로필 고유 식별자 (UUID v4, auto-generated)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 휴대폰 번호, 가입 중복 검사 기준 (Unique; duplicate sign-up check uses this)
    phone: Mapped[str | None] = mapped_column(String(20), unique=True, nullable=True)
    # 이메일 (Admin login identifier)
    email: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    # 비밀번호 해시, 휴대폰 사용자는 None (None for phone users)
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    # 기본 가게 FK, stores와 순환 참조이므로 use_alter
    # Default store FK; cyclic with stores.user_id
    default_store_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("stores.id", ondelete="SET NULL", use_alter=True, name="fk_profiles_default_store_id"),
        nullable=True,
    )
    # 역할 (user | admin)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="user")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
