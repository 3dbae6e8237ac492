"""테스트 인프라: 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure. In-memory SQLite (aiosqlite, one shared connection
through StaticPool), a fresh schema per test, and an httpx client whose
requests each get their own session, as in production.
"""

from collections.abc import AsyncGenerator
from datetime import date, timedelta

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.main import app
from app.models import *  # noqa: F401,F403 (register all models with metadata)
from app.models.store import Store
from app.models.user import Profile
from app.seed import seed_services
from app.utils import sms
from app.utils.jwt import create_access_token
from app.utils.password import hash_password

TEST_DATABASE_URL = "sqlite+aiosqlite://"

USER_PHONE = "+82 1012345678"
OTHER_PHONE = "+82 1098765432"
ADMIN_EMAIL = "admin@test.com"
ADMIN_PASSWORD = "admin123!"


# ---------------------------------------------------------------------------
# 엔진, 세션, 클라이언트 (Engine, sessions, client)
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 테스트마다 스키마를 새로 만듭니다."""
    eng = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """픽스처 데이터 준비용 세션 (Session used to build fixture data)."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트, 요청마다 새 세션을 사용합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def sent_codes(monkeypatch) -> list[tuple[str, str]]:
    """문자 발송을 가로채 (번호, 인증번호)를 기록합니다."""
    sent: list[tuple[str, str]] = []

    async def _capture(phone: str, code: str) -> bool:
        sent.append((phone, code))
        return True

    monkeypatch.setattr(sms, "send_otp", _capture)
    return sent


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성 (Data fixtures)
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def services(db: AsyncSession) -> None:
    """서비스 카탈로그 행을 생성합니다."""
    await seed_services(db)
    await db.commit()


@pytest_asyncio.fixture
async def user_profile(db: AsyncSession) -> Profile:
    profile = Profile(phone=USER_PHONE, role="user")
    db.add(profile)
    await db.commit()
    return profile


@pytest_asyncio.fixture
async def other_profile(db: AsyncSession) -> Profile:
    profile = Profile(phone=OTHER_PHONE, role="user")
    db.add(profile)
    await db.commit()
    return profile


@pytest_asyncio.fixture
async def admin_profile(db: AsyncSession) -> Profile:
    profile = Profile(
        email=ADMIN_EMAIL,
        password_hash=hash_password(ADMIN_PASSWORD),
        role="admin",
    )
    db.add(profile)
    await db.commit()
    return profile


@pytest_asyncio.fixture
async def store(db: AsyncSession, user_profile: Profile) -> Store:
    """사용자의 기본 가게를 생성합니다."""
    s = Store(user_id=user_profile.id, name="행복식당", address="서울 마포구 월드컵로 1")
    db.add(s)
    await db.flush()
    user_profile.default_store_id = s.id
    await db.commit()
    return s


def make_token(profile: Profile) -> str:
    """테스트용 JWT 액세스 토큰을 생성합니다."""
    return create_access_token({"sub": str(profile.id), "role": profile.role})


@pytest.fixture
def user_token(user_profile) -> str:
    return make_token(user_profile)


@pytest.fixture
def other_token(other_profile) -> str:
    return make_token(other_profile)


@pytest.fixture
def admin_token(admin_profile) -> str:
    return make_token(admin_profile)


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def future_date(days: int = 3) -> str:
    """방문 희망 날짜용 미래 날짜 ("YYYY-MM-DD")."""
    return (date.today() + timedelta(days=days)).isoformat()


def burner_request(**overrides) -> dict:
    """화구 교체 신청 페이로드 (1열 1구 x2 = 38,000원)."""
    payload = {
        "service": "burner",
        "items": {"(일반화구) 1열 1구": 2},
        "visit_date": future_date(),
        "visit_time": "14:30",
        "payment_method": "card",
    }
    payload.update(overrides)
    return payload
