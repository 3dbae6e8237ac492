"""앱 지오코딩 라우터: 가게 주소 검색 프록시.

App Geocode Router. Proxies Kakao place/address search and reverse
geocoding for the store registration screen.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_current_user
from app.models.user import Profile
from app.schemas.store import GeocodeResult, ReverseGeocodeResult
from app.services.geocoding_service import geocoding_service

router: APIRouter = APIRouter()


@router.get("/search", response_model=list[GeocodeResult])
async def search_address(
    current_user: Annotated[Profile, Depends(get_current_user)],
    query: Annotated[str, Query(description="장소명 또는 주소")] = "",
) -> list[GeocodeResult]:
    """장소/주소 검색 (키워드 검색 후 주소 검색으로 대체).

    Keyword search with an address-search fallback.
    """
    return await geocoding_service.search(query)


@router.get("/reverse", response_model=ReverseGeocodeResult)
async def reverse_geocode(
    current_user: Annotated[Profile, Depends(get_current_user)],
    lat: Annotated[float, Query(ge=-90, le=90)],
    lng: Annotated[float, Query(ge=-180, le=180)],
) -> ReverseGeocodeResult:
    """좌표를 주소로 변환 (Reverse geocode)."""
    return await geocoding_service.reverse(lat, lng)
