"""지오코딩 서비스: 카카오 로컬 API 프록시.

Geocoding Service. Thin proxy over the Kakao local API used by the store
registration screen: keyword search with an address-search fallback,
and reverse geocoding from coordinates.

Kakao endpoints:
    - /v2/local/search/keyword.json     (장소 키워드 검색, place keyword search)
    - /v2/local/search/address.json     (주소 검색, address search)
    - /v2/local/geo/coord2address.json  (좌표 -> 주소, reverse geocoding; x=lng, y=lat)
"""

import logging
from typing import Any

import httpx

from app.config import settings
from app.schemas.store import GeocodeResult, ReverseGeocodeResult
from app.utils.exceptions import BadRequestError, UpstreamError

logger = logging.getLogger(__name__)

KEYWORD_PATH: str = "/v2/local/search/keyword.json"
ADDRESS_PATH: str = "/v2/local/search/address.json"
COORD2ADDRESS_PATH: str = "/v2/local/geo/coord2address.json"
UPSTREAM_MESSAGE: str = "주소 검색 서비스를 사용할 수 없습니다. 잠시 후 다시 시도해주세요."


class GeocodingService:
    """카카오 로컬 API 클라이언트.

    Attributes:
        transport: httpx 전송 계층, 테스트에서 MockTransport 주입 (Injectable transport)
    """

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.transport: httpx.AsyncBaseTransport | None = transport

    async def _get(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        if not settings.KAKAO_REST_API_KEY:
            logger.warning("Kakao REST API key is not configured")
            raise UpstreamError(UPSTREAM_MESSAGE)
        try:
            async with httpx.AsyncClient(
                base_url=settings.KAKAO_API_BASE,
                timeout=settings.HTTP_TIMEOUT_SECONDS,
                transport=self.transport,
            ) as client:
                response = await client.get(
                    path,
                    params=params,
                    headers={"Authorization": f"KakaoAK {settings.KAKAO_REST_API_KEY}"},
                )
                response.raise_for_status()
                return response.json()
        except httpx.HTTPError as exc:
            logger.error("Kakao request %s failed: %s", path, exc)
            raise UpstreamError(UPSTREAM_MESSAGE) from exc

    @staticmethod
    def _from_keyword(doc: dict[str, Any]) -> GeocodeResult:
        return GeocodeResult(
            name=doc.get("place_name") or doc.get("address_name", ""),
            address=doc.get("address_name", ""),
            road_address=doc.get("road_address_name") or None,
            latitude=float(doc["y"]),
            longitude=float(doc["x"]),
        )

    @staticmethod
    def _from_address(doc: dict[str, Any]) -> GeocodeResult:
        road: dict[str, Any] | None = doc.get("road_address")
        return GeocodeResult(
            name=doc.get("address_name", ""),
            address=doc.get("address_name", ""),
            road_address=road.get("address_name") if road else None,
            latitude=float(doc["y"]),
            longitude=float(doc["x"]),
        )

    async def search(self, query: str, size: int = 10) -> list[GeocodeResult]:
        """장소/주소 검색.

        Keyword search first; when it yields nothing, fall back to the
        address search so plain street addresses still resolve.

        Raises:
            BadRequestError: 빈 검색어 (Blank query)
            UpstreamError: 카카오 API 미설정 또는 호출 실패 (Unconfigured or failed upstream)
        """
        term: str = query.strip()
        if not term:
            raise BadRequestError("검색어를 입력해주세요.")

        keyword: dict[str, Any] = await self._get(KEYWORD_PATH, {"query": term, "size": size})
        documents: list[dict[str, Any]] = keyword.get("documents", [])
        if documents:
            return [self._from_keyword(doc) for doc in documents]

        address: dict[str, Any] = await self._get(ADDRESS_PATH, {"query": term, "size": size})
        return [self._from_address(doc) for doc in address.get("documents", [])]

    async def reverse(self, latitude: float, longitude: float) -> ReverseGeocodeResult:
        """좌표를 주소로 변환합니다 (Reverse geocode a coordinate)."""
        data: dict[str, Any] = await self._get(COORD2ADDRESS_PATH, {"x": longitude, "y": latitude})
        documents: list[dict[str, Any]] = data.get("documents", [])
        if not documents:
            return ReverseGeocodeResult(address=None, road_address=None)
        first: dict[str, Any] = documents[0]
        lot: dict[str, Any] | None = first.get("address")
        road: dict[str, Any] | None = first.get("road_address")
        return ReverseGeocodeResult(
            address=lot.get("address_name") if lot else None,
            road_address=road.get("address_name") if road else None,
        )


# 싱글턴 인스턴스 (Singleton instance)
geocoding_service: GeocodingService = GeocodingService()
