"""앱 프로필 라우터: 내 프로필 조회, 기본 가게 변경.

App Profile Router. The profile screen and default store selection.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import Profile
from app.schemas.store import DefaultStoreUpdate, ProfileResponse
from app.services.profile_service import profile_service

router: APIRouter = APIRouter()


@router.get("/profile", response_model=ProfileResponse)
async def get_my_profile(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[Profile, Depends(get_current_user)],
) -> ProfileResponse:
    """내 프로필 조회 (보유 가게와 기본 가게 포함).

    Get my profile with owned stores and the default store.
    """
    return await profile_service.get_profile(db, current_user)


@router.put("/profile/default-store", response_model=ProfileResponse)
async def update_default_store(
    data: DefaultStoreUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[Profile, Depends(get_current_user)],
) -> ProfileResponse:
    """기본 가게 변경, 본인 소유 가게만 허용.

    Change the default store. Only an owned store may be chosen.
    """
    await profile_service.set_default_store(db, current_user, data.store_id)
    await db.commit()
    return await profile_service.get_profile(db, current_user)
