"""FastAPI 의존성 주입 모듈: 인증 및 관리자 권한 검사.

FastAPI dependency injection module. Authentication and admin access.
Provides reusable dependencies for extracting the current profile from a
JWT and restricting admin endpoints to profiles with the admin role.

Authentication Flow:
    1. 클라이언트가 Authorization: Bearer <token> 헤더를 전송
       (Client sends Authorization: Bearer <token> header)
    2. HTTPBearer가 토큰을 추출 (HTTPBearer extracts the token)
    3. decode_token()이 JWT를 검증하고 페이로드를 반환
       (decode_token verifies JWT and returns payload)
    4. 페이로드의 "sub" 필드로 DB에서 프로필을 조회
       (Profile is fetched from DB using payload "sub" field)

Authorization Flow (require_admin):
    1. get_current_user로 프로필 인증 (Profile authenticated via get_current_user)
    2. 역할이 admin이 아니면 403 Forbidden 반환
       (Returns 403 unless profile.role == "admin")
"""

from typing import Annotated
from uuid import UUID

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.constants import ROLE_ADMIN
from app.database import get_db
from app.models.user import Profile
from app.repositories.profile_repository import profile_repository
from app.utils.jwt import decode_token

# HTTP Bearer 토큰 추출기 (Extracts JWT token from Authorization: Bearer <token> header)
security: HTTPBearer = HTTPBearer()


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Profile:
    """JWT 토큰에서 현재 인증된 프로필을 추출합니다.

    Decode JWT from the Authorization header and return the authenticated
    profile. Validates token signature, expiration, type, and existence.

    Args:
        credentials: HTTP Bearer 토큰 자격 증명 (Bearer token credentials from header)
        db: 비동기 DB 세션 (Async database session)

    Returns:
        Profile: 인증된 프로필 ORM 인스턴스 (Authenticated profile)

    Raises:
        HTTPException(401): 토큰이 유효하지 않거나 만료됨 (Invalid or expired token)
        HTTPException(401): 프로필을 찾을 수 없음 (Profile not found)
    """
    try:
        payload: dict = decode_token(credentials.credentials)
        # 토큰 타입 검증 (Reject refresh tokens used as access tokens)
        if payload.get("type") != "access":
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token type")
        profile_id: UUID = UUID(payload["sub"])
    except HTTPException:
        raise
    except (jwt.InvalidTokenError, KeyError, ValueError, TypeError):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")

    profile: Profile | None = await profile_repository.get_by_id(db, profile_id)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
    return profile


async def require_admin(
    current_user: Annotated[Profile, Depends(get_current_user)],
) -> Profile:
    """관리자 역할 검사 의존성.

    Allow only profiles whose role is admin.

    Raises:
        HTTPException(403): 관리자가 아님 (Not an admin)
    """
    if current_user.role != ROLE_ADMIN:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
    return current_user
