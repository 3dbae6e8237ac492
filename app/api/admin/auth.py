"""관리자 인증 라우터: 이메일/비밀번호 로그인, 토큰 갱신, 로그아웃.

Admin Auth Router. Email/password login for admin-role profiles.
A valid account without the admin role is rejected with 403.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_admin
from app.database import get_db
from app.models.user import Profile
from app.schemas.auth import AdminLoginRequest, ProfileMeResponse, RefreshRequest, TokenResponse
from app.services.auth_service import auth_service

router: APIRouter = APIRouter()


@router.post("/login", response_model=TokenResponse)
async def admin_login(
    data: AdminLoginRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TokenResponse:
    """관리자 로그인, 관리자 역할이 아닌 계정은 403.

    Admin login endpoint. Bad credentials answer 401, non-admin accounts 403.
    """
    result: TokenResponse = await auth_service.admin_login(db, data)
    await db.commit()
    return result


@router.post("/refresh", response_model=TokenResponse)
async def admin_refresh(
    data: RefreshRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TokenResponse:
    result: TokenResponse = await auth_service.refresh_tokens(db, data.refresh_token, admin_only=True)
    await db.commit()
    return result


@router.post("/logout", status_code=204)
async def admin_logout(
    data: RefreshRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    await auth_service.logout(db, data.refresh_token)
    await db.commit()


@router.get("/me", response_model=ProfileMeResponse)
async def admin_me(
    current_user: Annotated[Profile, Depends(require_admin)],
) -> ProfileMeResponse:
    """현재 관리자 프로필 조회."""
    return auth_service.get_me(current_user)
