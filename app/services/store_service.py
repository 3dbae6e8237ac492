"""가게 서비스: 가게 등록/조회 및 관리자 가게 관리 비즈니스 로직.

Store Service. Business logic for a user's stores (list, detail,
register) and the admin store search/detail views.
"""

from typing import Any, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.service import ServiceRequest
from app.models.store import Store
from app.models.user import Profile
from app.repositories.service_request_repository import service_request_repository
from app.repositories.store_repository import store_repository
from app.schemas.store import StoreCreate, StoreResponse
from app.services.service_request_service import service_request_service
from app.utils.exceptions import BadRequestError, NotFoundError
from app.utils.phone import format_phone_number

STORE_FORM_MESSAGE: str = "가게 이름과 주소를 입력해주세요."


class StoreService:
    """가게 비즈니스 로직을 처리하는 서비스.

    Service handling store business logic.
    """

    def to_response(self, store: Store) -> StoreResponse:
        return StoreResponse(
            id=str(store.id),
            name=store.name,
            address=store.address,
            latitude=store.latitude,
            longitude=store.longitude,
            created_at=store.created_at,
        )

    async def list_my_stores(
        self,
        db: AsyncSession,
        user: Profile,
    ) -> Sequence[Store]:
        return await store_repository.get_user_stores(db, user.id)

    async def get_my_store(
        self,
        db: AsyncSession,
        user: Profile,
        store_id: UUID,
    ) -> Store:
        """본인 소유 가게를 조회합니다, 타인 가게는 404.

        Raises:
            NotFoundError: 없거나 본인 소유가 아님 (Missing or not owned)
        """
        store: Store | None = await store_repository.get_owned(db, store_id, user.id)
        if store is None:
            raise NotFoundError("Store not found")
        return store

    async def create_store(
        self,
        db: AsyncSession,
        user: Profile,
        data: StoreCreate,
    ) -> Store:
        """가게를 등록하고 기본 가게로 설정합니다.

        Register a store for the user and make it the default store.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user: 가게 소유자 프로필 (Owner profile)
            data: 가게 정보 (Store form)

        Returns:
            Store: 생성된 가게 (Created store)

        Raises:
            BadRequestError: 이름 또는 주소가 비어 있음 (Blank name or address)
        """
        name: str = data.name.strip()
        address: str = data.address.strip()
        if not name or not address:
            raise BadRequestError(STORE_FORM_MESSAGE)

        store: Store = await store_repository.create(
            db,
            {
                "user_id": user.id,
                "name": name,
                "address": address,
                "latitude": data.latitude,
                "longitude": data.longitude,
            },
        )
        user.default_store_id = store.id
        await db.flush()
        return store

    # --- 관리자 (Admin) ---

    async def admin_list(
        self,
        db: AsyncSession,
        search: str | None = None,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[list[dict[str, Any]], int]:
        """관리자 가게 목록 (이름/주소 검색, 소유자 연락처와 요청 수 포함)."""
        stores, total = await store_repository.search(db, search, page, per_page)
        counts: dict[UUID, int] = await store_repository.get_request_counts(db, [s.id for s in stores])
        items: list[dict[str, Any]] = [
            {
                **self.to_response(store).model_dump(),
                "user_id": str(store.user_id),
                "owner_phone": format_phone_number(store.owner.phone if store.owner else None),
                "request_count": counts.get(store.id, 0),
            }
            for store in stores
        ]
        return items, total

    async def admin_get(
        self,
        db: AsyncSession,
        store_id: UUID,
    ) -> dict[str, Any]:
        """관리자 가게 상세 (소유자와 요청 이력 포함)."""
        store: Store | None = await store_repository.get_with_owner(db, store_id)
        if store is None:
            raise NotFoundError("Store not found")
        requests: Sequence[ServiceRequest] = await service_request_repository.list_for_store(db, store.id)
        return {
            **self.to_response(store).model_dump(),
            "user_id": str(store.user_id),
            "owner_phone": format_phone_number(store.owner.phone if store.owner else None),
            "requests": [service_request_service.build_list_item(r).model_dump() for r in requests],
        }


# 싱글턴 인스턴스 (Singleton instance)
store_service: StoreService = StoreService()
