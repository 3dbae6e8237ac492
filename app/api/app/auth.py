"""앱 인증 라우터: 휴대폰 인증번호 발송/확인, 토큰 갱신, 로그아웃.

App Auth Router. Phone OTP send/verify (login and sign-up share the same
two endpoints, selected by ``purpose``), token refresh, logout and /me.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import Profile
from app.schemas.auth import (
    AuthTokenResponse,
    OtpSendRequest,
    OtpSendResponse,
    OtpVerifyRequest,
    ProfileMeResponse,
    RefreshRequest,
    TokenResponse,
)
from app.services.auth_service import auth_service

router: APIRouter = APIRouter()


@router.post("/otp/send", response_model=OtpSendResponse)
async def send_otp(
    data: OtpSendRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> OtpSendResponse:
    """인증번호 발송.

    Send a login or sign-up OTP. Sign-up with an already registered phone
    is rejected with 409 before any SMS goes out.
    """
    result: OtpSendResponse = await auth_service.send_otp(db, data)
    await db.commit()
    return result


@router.post("/otp/verify", response_model=AuthTokenResponse)
async def verify_otp(
    data: OtpVerifyRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AuthTokenResponse:
    """인증번호 확인 후 토큰 발급 (가입 시 프로필 생성).

    Verify the OTP and issue tokens. ``has_store`` tells the client
    whether to route to store registration next.
    """
    result: AuthTokenResponse = await auth_service.verify_otp(db, data)
    await db.commit()
    return result


@router.post("/refresh", response_model=TokenResponse)
async def refresh_token(
    data: RefreshRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TokenResponse:
    """토큰 갱신, 리프레시 토큰으로 새 토큰 쌍 발급.

    Refresh token endpoint. Issues a new token pair using a refresh token.
    """
    result: TokenResponse = await auth_service.refresh_tokens(db, data.refresh_token)
    await db.commit()
    return result


@router.post("/logout", status_code=204)
async def logout(
    data: RefreshRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    """로그아웃, 리프레시 토큰 폐기.

    Logout endpoint. Revokes the given refresh token.
    """
    await auth_service.logout(db, data.refresh_token)
    await db.commit()


@router.get("/me", response_model=ProfileMeResponse)
async def get_me(
    current_user: Annotated[Profile, Depends(get_current_user)],
) -> ProfileMeResponse:
    """현재 사용자 프로필 조회."""
    return auth_service.get_me(current_user)
