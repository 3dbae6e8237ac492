"""관리자 대시보드 라우터: 대시보드 집계 API.

Admin Dashboard Router. Summary counts for the back-office landing page.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_admin
from app.database import get_db
from app.models.user import Profile
from app.services.dashboard_service import dashboard_service

router: APIRouter = APIRouter()


@router.get("/summary")
async def get_dashboard_summary(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[Profile, Depends(require_admin)],
) -> dict[str, int]:
    """대시보드 요약 조회.

    Total/pending/in-progress requests, requests completed today,
    store count and user count.
    """
    return await dashboard_service.get_summary(db)
