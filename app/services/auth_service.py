"""인증 서비스: 휴대폰 인증번호, 관리자 로그인, 토큰 갱신 비즈니스 로직.

Auth Service. Phone OTP sign-in/sign-up for users, email/password login
for admins, and the JWT refresh token lifecycle.

OTP Flow:
    1. send_otp: 번호 검증 -> 가입 여부 확인 -> 기존 코드 만료 -> 새 코드 저장 -> 문자 발송
       (Validate -> registration check -> expire old codes -> store hash -> send SMS)
    2. verify_otp: 최신 대기 코드 조회 -> 시도 횟수 확인 -> 해시 비교 -> 프로필 생성/조회 -> 토큰 발급
       (Newest pending code -> attempt cap -> hash compare -> create/load profile -> tokens)
"""

import secrets
from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.constants import ROLE_USER
from app.models.token import OtpCode
from app.models.user import Profile
from app.repositories.auth_repository import auth_repository
from app.repositories.profile_repository import profile_repository
from app.repositories.store_repository import store_repository
from app.schemas.auth import (
    AdminLoginRequest,
    AuthTokenResponse,
    OtpSendRequest,
    OtpSendResponse,
    OtpVerifyRequest,
    ProfileMeResponse,
    TokenResponse,
)
from app.utils import sms
from app.utils.exceptions import (
    BadRequestError,
    DuplicateError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
)
from app.utils.jwt import create_access_token, create_refresh_token, decode_token
from app.utils.password import hash_password, verify_password
from app.utils.phone import (
    INVALID_PHONE_MESSAGE,
    digits_only,
    format_phone_number,
    is_valid_mobile,
    to_international,
)

PURPOSE_LOGIN: str = "login"
PURPOSE_SIGNUP: str = "signup"

ALREADY_REGISTERED_MESSAGE: str = "이미 가입된 전화번호입니다."
NOT_REGISTERED_MESSAGE: str = "가입되지 않은 전화번호입니다."
NOT_ADMIN_MESSAGE: str = "관리자 권한이 없는 계정입니다."


class AuthService:
    """인증 관련 비즈니스 로직을 처리하는 서비스.

    Service handling authentication business logic.
    Manages phone OTP, admin login, token refresh, and logout.
    """

    def _build_jwt_payload(self, profile: Profile) -> dict[str, str]:
        return {"sub": str(profile.id), "role": profile.role}

    async def _generate_tokens(
        self,
        db: AsyncSession,
        profile: Profile,
    ) -> TokenResponse:
        """액세스 토큰과 리프레시 토큰을 생성합니다.

        Generate an access/refresh token pair and persist the refresh token.
        Earlier refresh tokens of the profile are revoked.
        """
        payload: dict[str, str] = self._build_jwt_payload(profile)
        access_token: str = create_access_token(payload)
        refresh_token: str = create_refresh_token(payload)

        # 기존 리프레시 토큰 정리 (Clean up old refresh tokens)
        await auth_repository.delete_user_refresh_tokens(db, profile.id)

        expires_at: datetime = datetime.now(timezone.utc) + timedelta(
            days=settings.JWT_REFRESH_TOKEN_EXPIRE_DAYS
        )
        await auth_repository.create_refresh_token(
            db, user_id=profile.id, token=refresh_token, expires_at=expires_at
        )

        return TokenResponse(access_token=access_token, refresh_token=refresh_token)

    def _normalize_phone(self, phone: str) -> tuple[str, str]:
        """입력 번호를 (국내 숫자, 국제 형식)으로 변환합니다.

        Raises:
            BadRequestError: 휴대폰 번호 형식이 아닐 때 (Not a Korean mobile number)
        """
        if not is_valid_mobile(phone):
            raise BadRequestError(INVALID_PHONE_MESSAGE)
        domestic: str = digits_only(phone)
        return domestic, to_international(domestic)

    def _generate_code(self) -> str:
        return f"{secrets.randbelow(10 ** settings.OTP_LENGTH):0{settings.OTP_LENGTH}d}"

    async def send_otp(
        self,
        db: AsyncSession,
        data: OtpSendRequest,
    ) -> OtpSendResponse:
        """인증번호를 발송합니다.

        Issue and send a new OTP. Registration state is checked before
        anything is stored or sent, so a rejected request never reaches
        the SMS gateway.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 발송 요청 (Phone and purpose)

        Returns:
            OtpSendResponse: 안내 메시지와 유효 시간 (Message and TTL)

        Raises:
            BadRequestError: 잘못된 번호 형식 (Invalid phone)
            DuplicateError: 가입 요청인데 이미 가입된 번호 (Sign-up with a registered phone)
            NotFoundError: 로그인 요청인데 가입되지 않은 번호 (Login with an unknown phone)
            UpstreamError: 문자 발송 실패 (SMS gateway failure)
        """
        domestic, international = self._normalize_phone(data.phone)

        existing: Profile | None = await auth_repository.get_profile_by_phone(db, international)
        if data.purpose == PURPOSE_SIGNUP and existing is not None:
            raise DuplicateError(ALREADY_REGISTERED_MESSAGE)
        if data.purpose == PURPOSE_LOGIN and existing is None:
            raise NotFoundError(NOT_REGISTERED_MESSAGE)

        await auth_repository.expire_pending_codes(db, international, data.purpose)
        code: str = self._generate_code()
        await auth_repository.create_otp_code(
            db,
            phone=international,
            purpose=data.purpose,
            code_hash=hash_password(code),
            expires_at=datetime.now(timezone.utc) + timedelta(seconds=settings.OTP_TTL_SECONDS),
        )
        await sms.send_otp(domestic, code)

        return OtpSendResponse(
            message="인증번호가 발송되었습니다.",
            expires_in=settings.OTP_TTL_SECONDS,
        )

    async def verify_otp(
        self,
        db: AsyncSession,
        data: OtpVerifyRequest,
    ) -> AuthTokenResponse:
        """인증번호를 확인하고 토큰을 발급합니다.

        Verify the newest pending code for the phone. A wrong code counts
        as an attempt and that count is committed even though the request
        fails; reaching OTP_MAX_ATTEMPTS expires the code. Sign-up creates
        the profile on success.

        Raises:
            UnauthorizedError: 코드 없음/만료/불일치/시도 초과 (Missing, expired, wrong or exhausted code)
            DuplicateError: 가입 확인 시점에 이미 가입된 번호 (Registered meanwhile)
            NotFoundError: 로그인 확인 시점에 프로필 없음 (Profile vanished)
        """
        _, international = self._normalize_phone(data.phone)

        otp: OtpCode | None = await auth_repository.get_active_otp(db, international, data.purpose)
        if otp is None:
            raise UnauthorizedError("인증번호가 만료되었습니다. 다시 요청해주세요.")

        if not verify_password(data.code.strip(), otp.code_hash):
            await auth_repository.record_failed_attempt(db, otp.id, settings.OTP_MAX_ATTEMPTS)
            # 실패해도 시도 횟수는 유지되어야 함 (Attempt count must survive the failed request)
            await db.commit()
            raise UnauthorizedError("인증번호가 일치하지 않습니다.")

        otp.status = "verified"
        otp.verified_at = datetime.now(timezone.utc)

        profile: Profile | None = await auth_repository.get_profile_by_phone(db, international)
        if data.purpose == PURPOSE_SIGNUP:
            if profile is not None:
                raise DuplicateError(ALREADY_REGISTERED_MESSAGE)
            profile = await profile_repository.create(db, {"phone": international, "role": ROLE_USER})
        elif profile is None:
            raise NotFoundError(NOT_REGISTERED_MESSAGE)

        tokens: TokenResponse = await self._generate_tokens(db, profile)
        has_store: bool = await store_repository.has_store(db, profile.id)
        return AuthTokenResponse(
            **tokens.model_dump(),
            has_store=has_store,
            role=profile.role,
        )

    async def admin_login(
        self,
        db: AsyncSession,
        data: AdminLoginRequest,
    ) -> TokenResponse:
        """관리자 로그인을 처리합니다.

        Process admin email/password login. Only profiles with the admin
        role may sign in here.

        Raises:
            UnauthorizedError: 잘못된 인증 정보 (Invalid credentials)
            ForbiddenError: 관리자 역할이 아닌 계정 (Non-admin account)
        """
        profile: Profile | None = await auth_repository.get_profile_by_email(db, data.email)
        if (
            profile is None
            or not profile.password_hash
            or not verify_password(data.password, profile.password_hash)
        ):
            raise UnauthorizedError("이메일 또는 비밀번호가 올바르지 않습니다.")

        if not profile.is_admin:
            raise ForbiddenError(NOT_ADMIN_MESSAGE)

        return await self._generate_tokens(db, profile)

    async def refresh_tokens(
        self,
        db: AsyncSession,
        refresh_token: str,
        admin_only: bool = False,
    ) -> TokenResponse:
        """리프레시 토큰으로 새 토큰 쌍을 발급합니다.

        Rotate a refresh token: the presented token is revoked and a new
        pair is issued.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            refresh_token: 기존 리프레시 토큰 (Presented refresh token)
            admin_only: 관리자 엔드포인트 여부 (Reject non-admin profiles)

        Raises:
            UnauthorizedError: 유효하지 않거나 만료된 리프레시 토큰 (Invalid or expired token)
            ForbiddenError: admin_only인데 관리자가 아닐 때 (Non-admin on admin refresh)
        """
        db_token = await auth_repository.get_valid_refresh_token(db, refresh_token)
        if db_token is None:
            raise UnauthorizedError("Invalid or expired refresh token")

        try:
            payload: dict = decode_token(refresh_token)
        except jwt.InvalidTokenError:
            await auth_repository.delete_refresh_token(db, refresh_token)
            raise UnauthorizedError("Invalid refresh token")

        if payload.get("type") != "refresh" or payload.get("sub") is None:
            raise UnauthorizedError("Invalid refresh token payload")

        profile: Profile | None = await profile_repository.get_by_id(db, UUID(payload["sub"]))
        if profile is None:
            raise UnauthorizedError("User not found")
        if admin_only and not profile.is_admin:
            raise ForbiddenError(NOT_ADMIN_MESSAGE)

        await auth_repository.delete_refresh_token(db, refresh_token)
        return await self._generate_tokens(db, profile)

    async def logout(
        self,
        db: AsyncSession,
        refresh_token: str,
    ) -> None:
        """로그아웃 처리, 리프레시 토큰을 삭제합니다 (Revoke the refresh token)."""
        await auth_repository.delete_refresh_token(db, refresh_token)

    def get_me(self, profile: Profile) -> ProfileMeResponse:
        return ProfileMeResponse(
            id=str(profile.id),
            phone=profile.phone,
            phone_display=format_phone_number(profile.phone),
            email=profile.email,
            role=profile.role,
            default_store_id=str(profile.default_store_id) if profile.default_store_id else None,
            created_at=profile.created_at,
        )


# 싱글턴 인스턴스 (Singleton instance)
auth_service: AuthService = AuthService()
