"""앱 가게 라우터: 내 가게 목록/상세/등록.

App Store Router. A user's stores; registering one makes it the default.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import Profile
from app.schemas.store import StoreCreate, StoreResponse
from app.services.store_service import store_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[StoreResponse])
async def list_my_stores(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[Profile, Depends(get_current_user)],
) -> list[StoreResponse]:
    """내 가게 목록 (등록순)."""
    stores = await store_service.list_my_stores(db, current_user)
    return [store_service.to_response(s) for s in stores]


@router.get("/{store_id}", response_model=StoreResponse)
async def get_my_store(
    store_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[Profile, Depends(get_current_user)],
) -> StoreResponse:
    store = await store_service.get_my_store(db, current_user, store_id)
    return store_service.to_response(store)


@router.post("", response_model=StoreResponse, status_code=201)
async def create_store(
    data: StoreCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[Profile, Depends(get_current_user)],
) -> StoreResponse:
    """가게 등록 후 기본 가게로 설정.

    Register a store and make it the profile's default store.

    Args:
        data: 가게 이름/주소/좌표 (Name, address, optional coordinates)
        db: 비동기 데이터베이스 세션 (Async database session)
        current_user: 인증된 사용자 (Authenticated profile)

    Returns:
        StoreResponse: 생성된 가게 (Created store)
    """
    store = await store_service.create_store(db, current_user, data)
    await db.commit()
    return store_service.to_response(store)
