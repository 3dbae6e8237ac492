"""인증 API 테스트: 휴대폰 인증번호, 관리자 로그인, 토큰 갱신, 로그아웃.

Auth API tests. Phone OTP send/verify for login and sign-up, admin
email/password login, refresh rotation, logout and /me.
"""

from datetime import datetime, timedelta, timezone

from httpx import AsyncClient
from sqlalchemy import func, select

from app.models.token import OtpCode
from app.models.user import Profile
from app.repositories.auth_repository import auth_repository
from tests.conftest import ADMIN_EMAIL, ADMIN_PASSWORD, auth_header

APP_AUTH = "/api/v1/app/auth"
ADMIN_AUTH = "/api/v1/admin/auth"


async def _send(client: AsyncClient, phone: str, purpose: str):
    return await client.post(f"{APP_AUTH}/otp/send", json={"phone": phone, "purpose": purpose})


class TestOtpSend:
    """인증번호 발송 테스트."""

    async def test_signup_sends_code(self, client: AsyncClient, sent_codes):
        res = await _send(client, "010-5555-1234", "signup")
        assert res.status_code == 200
        assert res.json()["expires_in"] == 180
        assert len(sent_codes) == 1
        phone, code = sent_codes[0]
        assert phone == "01055551234"
        assert len(code) == 6 and code.isdigit()

    async def test_signup_with_registered_phone_is_409_without_sms(
        self, client: AsyncClient, user_profile, sent_codes, session_factory
    ):
        """이미 가입된 번호로 가입 요청 시 문자를 보내지 않고 409."""
        res = await _send(client, "010-1234-5678", "signup")
        assert res.status_code == 409
        assert res.json()["detail"] == "이미 가입된 전화번호입니다."
        assert sent_codes == []
        async with session_factory() as s:
            count = (await s.execute(select(func.count()).select_from(OtpCode))).scalar()
        assert count == 0

    async def test_login_with_unknown_phone_is_404(self, client: AsyncClient, sent_codes):
        res = await _send(client, "010-9999-0000", "login")
        assert res.status_code == 404
        assert res.json()["detail"] == "가입되지 않은 전화번호입니다."
        assert sent_codes == []

    async def test_invalid_phone_is_400(self, client: AsyncClient, sent_codes):
        res = await _send(client, "02-123-4567", "login")
        assert res.status_code == 400
        assert res.json()["detail"] == "올바른 휴대폰 번호를 입력하세요."


class TestOtpVerify:
    """인증번호 확인 테스트."""

    async def test_signup_creates_profile(self, client: AsyncClient, sent_codes, session_factory):
        await _send(client, "010-5555-1234", "signup")
        code = sent_codes[-1][1]

        res = await client.post(f"{APP_AUTH}/otp/verify", json={
            "phone": "010-5555-1234", "code": code, "purpose": "signup",
        })
        assert res.status_code == 200
        data = res.json()
        assert data["access_token"] and data["refresh_token"]
        assert data["has_store"] is False
        assert data["role"] == "user"

        async with session_factory() as s:
            profile = (await s.execute(select(Profile).where(Profile.phone == "+82 1055551234"))).scalar_one()
        assert profile.role == "user"

    async def test_login_reports_has_store(self, client: AsyncClient, store, sent_codes):
        await _send(client, "01012345678", "login")
        res = await client.post(f"{APP_AUTH}/otp/verify", json={
            "phone": "01012345678", "code": sent_codes[-1][1], "purpose": "login",
        })
        assert res.status_code == 200
        assert res.json()["has_store"] is True

    async def test_wrong_code_counts_attempt(self, client: AsyncClient, user_profile, sent_codes, session_factory):
        await _send(client, "01012345678", "login")
        code = sent_codes[-1][1]
        wrong = "000000" if code != "000000" else "111111"

        res = await client.post(f"{APP_AUTH}/otp/verify", json={
            "phone": "01012345678", "code": wrong, "purpose": "login",
        })
        assert res.status_code == 401
        assert res.json()["detail"] == "인증번호가 일치하지 않습니다."

        async with session_factory() as s:
            otp = (await s.execute(select(OtpCode))).scalar_one()
        assert otp.attempt_count == 1
        assert otp.status == "pending"

    async def test_code_expires_after_max_attempts(self, client: AsyncClient, user_profile, sent_codes):
        await _send(client, "01012345678", "login")
        code = sent_codes[-1][1]
        wrong = "000000" if code != "000000" else "111111"
        for _ in range(5):
            await client.post(f"{APP_AUTH}/otp/verify", json={
                "phone": "01012345678", "code": wrong, "purpose": "login",
            })

        res = await client.post(f"{APP_AUTH}/otp/verify", json={
            "phone": "01012345678", "code": code, "purpose": "login",
        })
        assert res.status_code == 401
        assert res.json()["detail"] == "인증번호가 만료되었습니다. 다시 요청해주세요."

    async def test_resend_invalidates_previous_code(self, client: AsyncClient, user_profile, sent_codes):
        await _send(client, "01012345678", "login")
        first = sent_codes[-1][1]
        await _send(client, "01012345678", "login")
        second = sent_codes[-1][1]

        if first != second:
            res = await client.post(f"{APP_AUTH}/otp/verify", json={
                "phone": "01012345678", "code": first, "purpose": "login",
            })
            assert res.status_code == 401
        res = await client.post(f"{APP_AUTH}/otp/verify", json={
            "phone": "01012345678", "code": second, "purpose": "login",
        })
        assert res.status_code == 200

    async def test_code_is_single_use(self, client: AsyncClient, user_profile, sent_codes):
        await _send(client, "01012345678", "login")
        payload = {"phone": "01012345678", "code": sent_codes[-1][1], "purpose": "login"}
        assert (await client.post(f"{APP_AUTH}/otp/verify", json=payload)).status_code == 200
        assert (await client.post(f"{APP_AUTH}/otp/verify", json=payload)).status_code == 401


class TestTokens:
    """토큰 갱신, 로그아웃, /me 테스트."""

    async def _login(self, client: AsyncClient, sent_codes) -> dict:
        await _send(client, "01012345678", "login")
        res = await client.post(f"{APP_AUTH}/otp/verify", json={
            "phone": "01012345678", "code": sent_codes[-1][1], "purpose": "login",
        })
        return res.json()

    async def test_refresh_rotates_token(self, client: AsyncClient, user_profile, sent_codes):
        tokens = await self._login(client, sent_codes)
        res = await client.post(f"{APP_AUTH}/refresh", json={"refresh_token": tokens["refresh_token"]})
        assert res.status_code == 200
        assert res.json()["refresh_token"] != tokens["refresh_token"]

        again = await client.post(f"{APP_AUTH}/refresh", json={"refresh_token": tokens["refresh_token"]})
        assert again.status_code == 401

    async def test_logout_revokes_refresh_token(self, client: AsyncClient, user_profile, sent_codes):
        tokens = await self._login(client, sent_codes)
        res = await client.post(f"{APP_AUTH}/logout", json={"refresh_token": tokens["refresh_token"]})
        assert res.status_code == 204
        res = await client.post(f"{APP_AUTH}/refresh", json={"refresh_token": tokens["refresh_token"]})
        assert res.status_code == 401

    async def test_me(self, client: AsyncClient, user_token):
        res = await client.get(f"{APP_AUTH}/me", headers=auth_header(user_token))
        assert res.status_code == 200
        data = res.json()
        assert data["phone"] == "+82 1012345678"
        assert data["phone_display"] == "010-1234-5678"

    async def test_me_requires_token(self, client: AsyncClient):
        res = await client.get(f"{APP_AUTH}/me")
        assert res.status_code in (401, 403)

    async def test_refresh_token_rejected_as_access_token(self, client: AsyncClient, user_profile, sent_codes):
        tokens = await self._login(client, sent_codes)
        res = await client.get(f"{APP_AUTH}/me", headers=auth_header(tokens["refresh_token"]))
        assert res.status_code == 401


class TestAdminLogin:
    """관리자 로그인 테스트."""

    async def test_admin_login_success(self, client: AsyncClient, admin_profile):
        res = await client.post(f"{ADMIN_AUTH}/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
        assert res.status_code == 200
        data = res.json()
        assert data["token_type"] == "bearer"

        me = await client.get(f"{ADMIN_AUTH}/me", headers=auth_header(data["access_token"]))
        assert me.status_code == 200
        assert me.json()["role"] == "admin"

    async def test_admin_login_wrong_password(self, client: AsyncClient, admin_profile):
        res = await client.post(f"{ADMIN_AUTH}/login", json={"email": ADMIN_EMAIL, "password": "wrong"})
        assert res.status_code == 401

    async def test_non_admin_account_is_403(self, client: AsyncClient, db, user_profile):
        from app.utils.password import hash_password

        user_profile.email = "owner@test.com"
        user_profile.password_hash = hash_password("pass1234!")
        await db.commit()

        res = await client.post(f"{ADMIN_AUTH}/login", json={"email": "owner@test.com", "password": "pass1234!"})
        assert res.status_code == 403
        assert res.json()["detail"] == "관리자 권한이 없는 계정입니다."

    async def test_user_token_rejected_on_admin_routes(self, client: AsyncClient, user_token):
        res = await client.get(f"{ADMIN_AUTH}/me", headers=auth_header(user_token))
        assert res.status_code == 403

    async def test_admin_refresh_rejects_user_token(self, client: AsyncClient, user_profile, sent_codes):
        await _send(client, "01012345678", "login")
        tokens = (await client.post(f"{APP_AUTH}/otp/verify", json={
            "phone": "01012345678", "code": sent_codes[-1][1], "purpose": "login",
        })).json()
        res = await client.post(f"{ADMIN_AUTH}/refresh", json={"refresh_token": tokens["refresh_token"]})
        assert res.status_code == 403


class TestOtpAttemptCounter:
    """틀린 인증번호 시도 누적 테스트 (동시 요청 포함)."""

    async def _pending_code(self, session_factory) -> OtpCode:
        async with session_factory() as s:
            otp = await auth_repository.create_otp_code(
                s, "+82 1012345678", "login", "hash",
                datetime.now(timezone.utc) + timedelta(minutes=3),
            )
            await s.commit()
            return otp

    async def test_overlapping_failures_both_count(self, session_factory):
        otp = await self._pending_code(session_factory)

        # 두 요청이 같은 시점의 스냅샷(attempt_count=0)을 읽은 상황
        async with session_factory() as first, session_factory() as second:
            await auth_repository.get_active_otp(first, otp.phone, "login")
            await auth_repository.get_active_otp(second, otp.phone, "login")
            assert await auth_repository.record_failed_attempt(first, otp.id, 5) == 1
            await first.commit()
            assert await auth_repository.record_failed_attempt(second, otp.id, 5) == 2
            await second.commit()

        async with session_factory() as s:
            stored = await s.get(OtpCode, otp.id)
        assert stored.attempt_count == 2
        assert stored.status == "pending"

    async def test_reaching_limit_expires_code(self, session_factory):
        otp = await self._pending_code(session_factory)
        async with session_factory() as s:
            for expected in range(1, 4):
                assert await auth_repository.record_failed_attempt(s, otp.id, 3) == expected
            await s.commit()

        async with session_factory() as s:
            stored = await s.get(OtpCode, otp.id)
            assert stored.status == "expired"
            assert await auth_repository.get_active_otp(s, otp.phone, "login") is None
