"""프로필 서비스: 내 프로필, 기본 가게 설정, 관리자 사용자 조회.

Profile Service. The profile screen (profile, stores, default store),
default store selection, and the admin user search/detail views.
"""

from typing import Any, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.service import ServiceRequest
from app.models.store import Store
from app.models.user import Profile
from app.repositories.profile_repository import profile_repository
from app.repositories.service_request_repository import service_request_repository
from app.repositories.store_repository import store_repository
from app.schemas.store import ProfileResponse
from app.services.service_request_service import service_request_service
from app.services.store_service import store_service
from app.utils.exceptions import NotFoundError
from app.utils.phone import format_phone_number


class ProfileService:
    """프로필 비즈니스 로직을 처리하는 서비스.

    Service handling profile business logic.
    """

    async def get_profile(
        self,
        db: AsyncSession,
        user: Profile,
    ) -> ProfileResponse:
        """프로필 화면 데이터 (Profile with stores and default store)."""
        stores: Sequence[Store] = await store_repository.get_user_stores(db, user.id)
        default_store: Store | None = next(
            (s for s in stores if s.id == user.default_store_id), None
        )
        return ProfileResponse(
            id=str(user.id),
            phone=user.phone,
            phone_display=format_phone_number(user.phone),
            role=user.role,
            default_store_id=str(user.default_store_id) if user.default_store_id else None,
            default_store=store_service.to_response(default_store) if default_store else None,
            stores=[store_service.to_response(s) for s in stores],
        )

    async def set_default_store(
        self,
        db: AsyncSession,
        user: Profile,
        store_id: UUID,
    ) -> Profile:
        """기본 가게를 변경합니다.

        Set the default store; only an owned store may be chosen.

        Raises:
            NotFoundError: 없거나 본인 소유가 아닌 가게 (Missing or not owned)
        """
        store: Store | None = await store_repository.get_owned(db, store_id, user.id)
        if store is None:
            raise NotFoundError("Store not found")
        user.default_store_id = store.id
        await db.flush()
        return user

    # --- 관리자 (Admin) ---

    async def admin_list_users(
        self,
        db: AsyncSession,
        search: str | None = None,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[list[dict[str, Any]], int]:
        """관리자 사용자 목록 (휴대폰 번호 검색, 가게/요청 수 포함)."""
        profiles, total = await profile_repository.search_users(db, search, page, per_page)
        counts: dict[UUID, dict[str, int]] = await profile_repository.get_counts(db, [p.id for p in profiles])
        items: list[dict[str, Any]] = [
            {
                "id": str(profile.id),
                "phone": profile.phone,
                "phone_display": format_phone_number(profile.phone),
                "role": profile.role,
                "created_at": profile.created_at,
                **counts[profile.id],
            }
            for profile in profiles
        ]
        return items, total

    async def admin_get_user(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> dict[str, Any]:
        """관리자 사용자 상세 (가게와 요청 목록 포함)."""
        profile: Profile | None = await profile_repository.get_by_id(db, user_id)
        if profile is None:
            raise NotFoundError("User not found")
        stores: Sequence[Store] = await store_repository.get_user_stores(db, profile.id)
        requests: Sequence[ServiceRequest] = await service_request_repository.list_all_for_user(db, profile.id)
        return {
            "id": str(profile.id),
            "phone": profile.phone,
            "phone_display": format_phone_number(profile.phone),
            "role": profile.role,
            "default_store_id": str(profile.default_store_id) if profile.default_store_id else None,
            "created_at": profile.created_at,
            "stores": [store_service.to_response(s).model_dump() for s in stores],
            "requests": [service_request_service.build_list_item(r).model_dump() for r in requests],
        }


# 싱글턴 인스턴스 (Singleton instance)
profile_service: ProfileService = ProfileService()
