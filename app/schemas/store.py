"""가게, 프로필, 지오코딩 관련 Pydantic 스키마 정의.

Store, profile and geocoding Pydantic request/response schema definitions.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class StoreCreate(BaseModel):
    """가게 등록 요청 스키마.

    Blank name/address are rejected by the service with a user-facing
    message rather than a 422, so both default to empty strings.

    Attributes:
        name: 가게 이름 (Store name)
        address: 주소 (Street address, usually picked from geocoding)
        latitude: 위도 (Latitude, optional)
        longitude: 경도 (Longitude, optional)
    """

    name: str = ""
    address: str = ""
    latitude: float | None = None
    longitude: float | None = None


class StoreResponse(BaseModel):
    """가게 응답 스키마."""

    id: str
    name: str
    address: str
    latitude: float | None
    longitude: float | None
    created_at: datetime


class DefaultStoreUpdate(BaseModel):
    """기본 가게 변경 요청 스키마."""

    store_id: UUID


class ProfileResponse(BaseModel):
    """프로필 화면 응답 스키마.

    Attributes:
        phone_display: 010-XXXX-XXXX 형식 번호 (Formatted phone)
        default_store: 기본 가게 (Default store, None if unset)
        stores: 보유 가게 목록 (All owned stores, oldest first)
    """

    id: str
    phone: str | None
    phone_display: str
    role: str
    default_store_id: str | None
    default_store: StoreResponse | None
    stores: list[StoreResponse]


class GeocodeResult(BaseModel):
    """주소/장소 검색 결과 스키마."""

    name: str  # 장소명 또는 주소 (Place name, or the address for address hits)
    address: str  # 지번 주소 (Lot-number address)
    road_address: str | None  # 도로명 주소 (Road-name address)
    latitude: float
    longitude: float


class ReverseGeocodeResult(BaseModel):
    """좌표 -> 주소 변환 결과 스키마."""

    address: str | None
    road_address: str | None
