"""앱 API 라우터 패키지: 모든 사용자용 엔드포인트 통합.

App API Router package. Aggregates all user-facing endpoints into a
single router for inclusion in the FastAPI application.

Included routers:
    - auth: 휴대폰 인증 (Phone OTP login/sign-up, tokens)
    - profile: 내 프로필, 기본 가게 (My profile, default store)
    - stores: 내 가게 (My stores)
    - geocode: 주소 검색 (Address search proxy)
    - services: 서비스 카탈로그 (Service catalog, payment methods, schedule options)
    - service_requests: 내 서비스 요청 (My service requests)
    - inquiries: 내 문의 (My inquiries)
    - notifications: 내 알림 (My notifications, SSE stream)
"""

from fastapi import APIRouter

from app.api.app.auth import router as auth_router
from app.api.app.profile import router as profile_router
from app.api.app.stores import router as stores_router
from app.api.app.geocode import router as geocode_router
from app.api.app.services import router as services_router
from app.api.app.service_requests import router as service_requests_router
from app.api.app.inquiries import router as inquiries_router
from app.api.app.notifications import router as notifications_router

app_router: APIRouter = APIRouter()

# ---------------------------------------------------------------------------
# 인증 및 프로필 (Auth and profile)
# ---------------------------------------------------------------------------
app_router.include_router(auth_router, prefix="/auth", tags=["App Auth"])
# 프로필: /profile 엔드포인트 (GET profile, PUT default store)
app_router.include_router(profile_router, tags=["App Profile"])
app_router.include_router(stores_router, prefix="/my/stores", tags=["My Stores"])
app_router.include_router(geocode_router, prefix="/geocode", tags=["Geocode"])

# ---------------------------------------------------------------------------
# 서비스 신청 (Catalog and service requests)
# ---------------------------------------------------------------------------
app_router.include_router(services_router, prefix="/services", tags=["Services"])
app_router.include_router(service_requests_router, prefix="/my/service-requests", tags=["My Service Requests"])

# ---------------------------------------------------------------------------
# 소통 (Inquiries and notifications)
# ---------------------------------------------------------------------------
app_router.include_router(inquiries_router, prefix="/my/inquiries", tags=["My Inquiries"])
app_router.include_router(notifications_router, prefix="/my/notifications", tags=["My Notifications"])
