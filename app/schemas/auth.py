"""인증 관련 Pydantic 요청/응답 스키마 정의.

Authentication-related Pydantic request/response schema definitions.
Covers phone OTP send/verify, admin email login, token issuance/refresh,
and current profile info.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel


class OtpSendRequest(BaseModel):
    """인증번호 발송 요청 스키마.

    OTP send request schema. The phone may be typed with or without hyphens.

    Attributes:
        phone: 휴대폰 번호 (Domestic mobile number, e.g. "010-1234-5678")
        purpose: 용도 (login = 기존 회원 로그인, signup = 신규 가입)
    """

    phone: str  # 국내 형식 휴대폰 번호 (Domestic mobile number)
    purpose: Literal["login", "signup"] = "login"


class OtpSendResponse(BaseModel):
    """인증번호 발송 응답 스키마."""

    message: str
    expires_in: int  # 유효 시간, 초 (Seconds until the code expires)


class OtpVerifyRequest(BaseModel):
    """인증번호 확인 요청 스키마.

    Attributes:
        phone: 휴대폰 번호 (Same number the code was sent to)
        code: 수신한 인증번호 (Received numeric code)
        purpose: 발송 시와 동일한 용도 (Same purpose as the send request)
    """

    phone: str
    code: str
    purpose: Literal["login", "signup"] = "login"


class AdminLoginRequest(BaseModel):
    """관리자 이메일 로그인 요청 스키마.

    Attributes:
        email: 관리자 이메일 (Admin email, case-insensitive)
        password: 비밀번호 (Plain text, verified against bcrypt hash)
    """

    email: str
    password: str  # 비밀번호 평문, 서버에서 bcrypt 해시와 비교 (Compared to bcrypt hash)


class TokenResponse(BaseModel):
    """JWT 토큰 발급 응답 스키마.

    JWT token issuance response schema.
    Returned after successful login or token refresh.

    Attributes:
        access_token: JWT 액세스 토큰 (Short-lived access token)
        refresh_token: JWT 리프레시 토큰 (Long-lived refresh token)
        token_type: 토큰 유형 (Always "bearer" for Authorization header)
    """

    access_token: str  # JWT 액세스 토큰, 만료 30분 기본 (Default TTL: 30min)
    refresh_token: str  # JWT 리프레시 토큰, 만료 7일 기본 (Default TTL: 7 days)
    token_type: str = "bearer"


class AuthTokenResponse(TokenResponse):
    """로그인/가입 완료 응답 스키마.

    Token pair plus routing hints: the client sends the user to the
    store registration screen while has_store is False.
    """

    has_store: bool
    role: str


class RefreshRequest(BaseModel):
    """토큰 갱신/로그아웃 요청 스키마."""

    refresh_token: str  # 기존 리프레시 토큰 (Current refresh token)


class ProfileMeResponse(BaseModel):
    """현재 사용자 정보 응답 스키마 (GET /me)."""

    id: str
    phone: str | None
    phone_display: str  # 010-XXXX-XXXX 형식 (Display form)
    email: str | None
    role: str
    default_store_id: str | None
    created_at: datetime
