"""관리자 API 라우터 패키지: 모든 관리자 엔드포인트 통합.

Admin API Router package. Aggregates all admin-facing endpoints into a
single router for inclusion in the FastAPI application.

Included routers:
    - auth: 관리자 인증 (Admin authentication)
    - dashboard: 대시보드 요약 (Dashboard summary)
    - service_requests: 서비스 요청 관리 (Service request management, Excel export)
    - stores: 가게 조회 (Store search)
    - users: 사용자 조회 (User search)
    - inquiries: 문의 관리 (Inquiry triage and responses)
    - notifications: 새 요청 알림 스트림 (New request SSE stream)
"""

from fastapi import APIRouter

from app.api.admin.auth import router as auth_router
from app.api.admin.dashboard import router as dashboard_router
from app.api.admin.service_requests import router as service_requests_router
from app.api.admin.stores import router as stores_router
from app.api.admin.users import router as users_router
from app.api.admin.inquiries import router as inquiries_router
from app.api.admin.notifications import router as notifications_router

admin_router: APIRouter = APIRouter()

admin_router.include_router(auth_router, prefix="/auth", tags=["Admin Auth"])
# 대시보드: /dashboard 하위 (Dashboard aggregation APIs)
admin_router.include_router(dashboard_router, prefix="/dashboard", tags=["Dashboard"])

# ---------------------------------------------------------------------------
# 운영 데이터 (Back-office data)
# ---------------------------------------------------------------------------
admin_router.include_router(service_requests_router, prefix="/service-requests", tags=["Service Requests"])
admin_router.include_router(stores_router, prefix="/stores", tags=["Stores"])
admin_router.include_router(users_router, prefix="/users", tags=["Users"])
admin_router.include_router(inquiries_router, prefix="/inquiries", tags=["Inquiries"])
admin_router.include_router(notifications_router, prefix="/notifications", tags=["Admin Notifications"])
