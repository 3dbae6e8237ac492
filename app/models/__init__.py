"""SQLAlchemy ORM 모델 패키지 (모든 도메인 모델의 중앙 임포트 지점).

SQLAlchemy ORM models package. Importing from this package registers every
model with the SQLAlchemy metadata, which Alembic and relationship
resolution rely on.

Modules:
    user: 프로필 (Profiles)
    store: 가게 (Stores)
    service: 서비스, 서비스 요청, 요청 상세 (Services, service requests, request details)
    inquiry: 문의 및 답변 (Inquiries and responses)
    notification: 알림 (User notifications)
    token: 리프레시 토큰, 인증번호 (Refresh tokens, OTP codes)
"""

from app.models.user import Profile
from app.models.store import Store
from app.models.service import Service, ServiceRequest, RequestDetail
from app.models.inquiry import Inquiry, InquiryResponse
from app.models.notification import Notification
from app.models.token import RefreshToken, OtpCode

__all__ = [
    "Profile",
    "Store",
    "Service", "ServiceRequest", "RequestDetail",
    "Inquiry", "InquiryResponse",
    "Notification",
    "RefreshToken", "OtpCode",
]
