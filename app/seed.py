"""초기 데이터 시드 스크립트: 서비스 카탈로그와 관리자 계정 생성.

Seed script. Creates the service catalog rows and the admin profile.
Run this script once to bootstrap the database with required initial data.

Usage:
    python -m app.seed

Creates:
    - 서비스 행: 카탈로그의 모든 서비스 (One services row per catalog entry)
    - 1개 관리자 계정: ADMIN_EMAIL / ADMIN_PASSWORD (1 admin profile)
"""

import asyncio
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.constants import ROLE_ADMIN, SERVICE_CATALOG
from app.database import Base, async_session, engine
from app.models import Profile, Service
from app.utils.password import hash_password

logger = logging.getLogger(__name__)


async def seed_services(db: AsyncSession) -> int:
    """누락된 서비스 행을 추가합니다.

    Insert a services row for every catalog entry that has none yet.

    Returns:
        int: 추가된 서비스 수 (Number of rows inserted)
    """
    result = await db.execute(select(Service.name))
    existing: set[str] = set(result.scalars().all())
    missing: list[str] = [name for name in SERVICE_CATALOG if name not in existing]
    for name in missing:
        db.add(Service(name=name))
    await db.flush()
    return len(missing)


async def seed_admin(db: AsyncSession) -> Profile | None:
    """관리자 프로필이 없으면 생성합니다 (Create the admin profile when missing)."""
    result = await db.execute(select(Profile).where(Profile.email == settings.ADMIN_EMAIL))
    if result.scalar_one_or_none() is not None:
        return None
    admin: Profile = Profile(
        email=settings.ADMIN_EMAIL,
        password_hash=hash_password(settings.ADMIN_PASSWORD),
        role=ROLE_ADMIN,
    )
    db.add(admin)
    await db.flush()
    return admin


async def seed() -> None:
    """데이터베이스를 초기 데이터로 시드합니다.

    Seed the database with initial data.
    Creates tables if they don't exist, then inserts the service catalog
    and the admin profile.

    Idempotent: 이미 존재하는 행은 건너뜁니다 (Existing rows are skipped).
    """
    # 테이블 생성 (Create all tables from ORM metadata)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        added: int = await seed_services(db)
        admin: Profile | None = await seed_admin(db)
        await db.commit()

    logger.info("Seeded %d services", added)
    if admin is not None:
        logger.info("Seeded admin profile %s", settings.ADMIN_EMAIL)
    else:
        logger.info("Admin profile already exists. Skipping.")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    asyncio.run(seed())
