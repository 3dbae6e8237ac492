"""인증 레포지토리 (리프레시 토큰, 인증번호, 로그인 대상 조회).

Auth Repository. Handles refresh token lifecycle, phone OTP codes,
and credential-based profile lookups.
"""

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import Select, case, delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.token import OtpCode, RefreshToken
from app.models.user import Profile


class AuthRepository:
    """인증 관련 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling authentication-related database queries.
    """

    async def get_profile_by_email(
        self,
        db: AsyncSession,
        email: str,
    ) -> Profile | None:
        """이메일로 프로필을 조회합니다 (대소문자 무시).

        Retrieve a profile by email, case-insensitively.
        """
        query: Select = select(Profile).where(func.lower(Profile.email) == email.strip().lower())
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_profile_by_phone(
        self,
        db: AsyncSession,
        phone: str,
    ) -> Profile | None:
        """국제 형식 휴대폰 번호로 프로필을 조회합니다.

        Retrieve a profile by its stored international phone number.
        """
        result = await db.execute(select(Profile).where(Profile.phone == phone))
        return result.scalar_one_or_none()

    # --- 리프레시 토큰 (Refresh tokens) ---

    async def create_refresh_token(
        self,
        db: AsyncSession,
        user_id: UUID,
        token: str,
        expires_at: datetime,
    ) -> RefreshToken:
        """새 리프레시 토큰을 저장합니다.

        Create a new refresh token record in the database.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 토큰 소유자 프로필 ID (Token owner profile UUID)
            token: JWT 리프레시 토큰 문자열 (JWT refresh token string)
            expires_at: 토큰 만료 일시 (Token expiration timestamp)

        Returns:
            RefreshToken: 생성된 리프레시 토큰 레코드 (Created refresh token record)
        """
        db_token: RefreshToken = RefreshToken(
            user_id=user_id,
            token=token,
            expires_at=expires_at,
        )
        db.add(db_token)
        await db.flush()
        return db_token

    async def get_valid_refresh_token(
        self,
        db: AsyncSession,
        token: str,
    ) -> RefreshToken | None:
        """만료되지 않은 리프레시 토큰을 조회합니다.

        Retrieve a refresh token record that has not expired yet.
        Expiry is compared in SQL against the current UTC time.
        """
        query: Select = select(RefreshToken).where(
            RefreshToken.token == token,
            RefreshToken.expires_at > datetime.now(timezone.utc),
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def delete_refresh_token(
        self,
        db: AsyncSession,
        token: str,
    ) -> bool:
        """리프레시 토큰을 삭제합니다.

        Delete a specific refresh token by its token string.

        Returns:
            bool: 삭제 성공 여부 (Whether a row was deleted)
        """
        result = await db.execute(delete(RefreshToken).where(RefreshToken.token == token))
        await db.flush()
        return result.rowcount > 0

    async def delete_user_refresh_tokens(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> int:
        """프로필의 모든 리프레시 토큰을 삭제합니다.

        Delete every refresh token owned by a profile.

        Returns:
            int: 삭제된 토큰 수 (Number of deleted tokens)
        """
        result = await db.execute(delete(RefreshToken).where(RefreshToken.user_id == user_id))
        await db.flush()
        return result.rowcount

    # --- 휴대폰 인증번호 (Phone OTP codes) ---

    async def expire_pending_codes(
        self,
        db: AsyncSession,
        phone: str,
        purpose: str,
    ) -> int:
        """같은 번호/용도의 대기 중인 인증번호를 만료 처리합니다.

        Expire earlier pending codes for the same phone and purpose.
        """
        result = await db.execute(
            update(OtpCode)
            .where(
                OtpCode.phone == phone,
                OtpCode.purpose == purpose,
                OtpCode.status == "pending",
            )
            .values(status="expired")
        )
        await db.flush()
        return result.rowcount

    async def create_otp_code(
        self,
        db: AsyncSession,
        phone: str,
        purpose: str,
        code_hash: str,
        expires_at: datetime,
    ) -> OtpCode:
        """새 인증번호 레코드를 생성합니다 (Create a pending OTP record)."""
        otp: OtpCode = OtpCode(
            phone=phone,
            purpose=purpose,
            code_hash=code_hash,
            expires_at=expires_at,
        )
        db.add(otp)
        await db.flush()
        return otp

    async def get_active_otp(
        self,
        db: AsyncSession,
        phone: str,
        purpose: str,
    ) -> OtpCode | None:
        """유효한 최신 인증번호를 조회합니다.

        Retrieve the newest pending, unexpired code for a phone and purpose.
        """
        query: Select = (
            select(OtpCode)
            .where(
                OtpCode.phone == phone,
                OtpCode.purpose == purpose,
                OtpCode.status == "pending",
                OtpCode.expires_at > datetime.now(timezone.utc),
            )
            .order_by(OtpCode.created_at.desc())
            .limit(1)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def record_failed_attempt(
        self,
        db: AsyncSession,
        otp_id: UUID,
        max_attempts: int,
    ) -> int:
        """틀린 인증번호 시도를 DB에서 원자적으로 누적합니다.

        Increment the attempt counter in a single UPDATE and expire the
        code once it reaches ``max_attempts``. Concurrent wrong guesses
        each count.

        Returns:
            int: 갱신된 시도 횟수 (Attempt count after this failure)
        """
        next_count = OtpCode.attempt_count + 1
        await db.execute(
            update(OtpCode)
            .where(OtpCode.id == otp_id)
            .values(
                attempt_count=next_count,
                status=case((next_count >= max_attempts, "expired"), else_=OtpCode.status),
            )
            .execution_options(synchronize_session=False)
        )
        result = await db.execute(select(OtpCode.attempt_count).where(OtpCode.id == otp_id))
        return result.scalar_one()


# 싱글턴 인스턴스 (Singleton instance)
auth_repository: AuthRepository = AuthRepository()
