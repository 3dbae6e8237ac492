"""가게, 프로필, 지오코딩 API 테스트.

Store registration, profile/default store and Kakao geocoding proxy
tests. Kakao is replaced by an httpx.MockTransport.
"""

import httpx
import pytest
from httpx import AsyncClient

from app.config import settings
from app.services.geocoding_service import geocoding_service
from tests.conftest import auth_header

STORES = "/api/v1/app/my/stores"
PROFILE = "/api/v1/app/profile"
GEOCODE = "/api/v1/app/geocode"


class TestStores:
    """가게 등록/조회 테스트."""

    async def test_create_store_sets_default(self, client: AsyncClient, user_token):
        res = await client.post(
            STORES,
            json={"name": " 행복식당 ", "address": "서울 마포구 월드컵로 1", "latitude": 37.55, "longitude": 126.9},
            headers=auth_header(user_token),
        )
        assert res.status_code == 201
        store = res.json()
        assert store["name"] == "행복식당"

        profile = (await client.get(PROFILE, headers=auth_header(user_token))).json()
        assert profile["default_store_id"] == store["id"]
        assert profile["default_store"]["name"] == "행복식당"

    async def test_blank_fields_are_rejected(self, client: AsyncClient, user_token):
        res = await client.post(STORES, json={"name": "  ", "address": "서울"}, headers=auth_header(user_token))
        assert res.status_code == 400
        assert res.json()["detail"] == "가게 이름과 주소를 입력해주세요."

    async def test_list_and_get(self, client: AsyncClient, store, user_token):
        res = await client.get(STORES, headers=auth_header(user_token))
        assert res.status_code == 200
        assert [s["name"] for s in res.json()] == ["행복식당"]

        res = await client.get(f"{STORES}/{store.id}", headers=auth_header(user_token))
        assert res.status_code == 200
        assert res.json()["address"] == "서울 마포구 월드컵로 1"

    async def test_other_users_store_is_404(self, client: AsyncClient, store, other_token):
        res = await client.get(f"{STORES}/{store.id}", headers=auth_header(other_token))
        assert res.status_code == 404

    async def test_list_is_scoped_to_owner(self, client: AsyncClient, store, other_token):
        res = await client.get(STORES, headers=auth_header(other_token))
        assert res.json() == []


class TestProfile:
    """프로필/기본 가게 테스트."""

    async def test_profile_without_store(self, client: AsyncClient, user_token):
        res = await client.get(PROFILE, headers=auth_header(user_token))
        assert res.status_code == 200
        data = res.json()
        assert data["phone_display"] == "010-1234-5678"
        assert data["default_store"] is None
        assert data["stores"] == []

    async def test_change_default_store(self, client: AsyncClient, store, user_token):
        second = (await client.post(
            STORES, json={"name": "두번째가게", "address": "서울 종로구 1"}, headers=auth_header(user_token)
        )).json()
        res = await client.put(
            f"{PROFILE}/default-store", json={"store_id": str(store.id)}, headers=auth_header(user_token)
        )
        assert res.status_code == 200
        data = res.json()
        assert data["default_store_id"] == str(store.id)
        assert {s["id"] for s in data["stores"]} == {str(store.id), second["id"]}

    async def test_foreign_default_store_is_404(self, client: AsyncClient, store, other_token):
        res = await client.put(
            f"{PROFILE}/default-store", json={"store_id": str(store.id)}, headers=auth_header(other_token)
        )
        assert res.status_code == 404


@pytest.fixture
def kakao(monkeypatch):
    """카카오 로컬 API를 MockTransport로 대체합니다.

    Returns the list of captured requests; responses are keyed by path.
    """
    monkeypatch.setattr(settings, "KAKAO_REST_API_KEY", "test-key")
    calls: list[httpx.Request] = []
    responses: dict[str, dict] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        body = responses.get(request.url.path)
        if body is None:
            return httpx.Response(500, json={"message": "boom"})
        return httpx.Response(200, json=body)

    monkeypatch.setattr(geocoding_service, "transport", httpx.MockTransport(handler))
    return calls, responses


class TestGeocode:
    """지오코딩 프록시 테스트."""

    async def test_keyword_search(self, client: AsyncClient, user_token, kakao):
        calls, responses = kakao
        responses["/v2/local/search/keyword.json"] = {"documents": [{
            "place_name": "행복식당",
            "address_name": "서울 마포구 성산동 1",
            "road_address_name": "서울 마포구 월드컵로 1",
            "x": "126.9",
            "y": "37.55",
        }]}

        res = await client.get(f"{GEOCODE}/search", params={"query": "행복식당"}, headers=auth_header(user_token))
        assert res.status_code == 200
        assert res.json() == [{
            "name": "행복식당",
            "address": "서울 마포구 성산동 1",
            "road_address": "서울 마포구 월드컵로 1",
            "latitude": 37.55,
            "longitude": 126.9,
        }]
        assert calls[0].headers["Authorization"] == "KakaoAK test-key"

    async def test_address_fallback(self, client: AsyncClient, user_token, kakao):
        calls, responses = kakao
        responses["/v2/local/search/keyword.json"] = {"documents": []}
        responses["/v2/local/search/address.json"] = {"documents": [{
            "address_name": "서울 마포구 성산동 1",
            "road_address": {"address_name": "서울 마포구 월드컵로 1"},
            "x": "126.9",
            "y": "37.55",
        }]}

        res = await client.get(
            f"{GEOCODE}/search", params={"query": "성산동 1"}, headers=auth_header(user_token)
        )
        assert res.status_code == 200
        assert res.json()[0]["road_address"] == "서울 마포구 월드컵로 1"
        assert [c.url.path for c in calls] == [
            "/v2/local/search/keyword.json",
            "/v2/local/search/address.json",
        ]

    async def test_blank_query_is_400(self, client: AsyncClient, user_token, kakao):
        res = await client.get(f"{GEOCODE}/search", params={"query": " "}, headers=auth_header(user_token))
        assert res.status_code == 400
        assert res.json()["detail"] == "검색어를 입력해주세요."

    async def test_upstream_failure_is_502(self, client: AsyncClient, user_token, kakao):
        res = await client.get(f"{GEOCODE}/search", params={"query": "식당"}, headers=auth_header(user_token))
        assert res.status_code == 502

    async def test_unconfigured_key_is_502(self, client: AsyncClient, user_token, monkeypatch):
        monkeypatch.setattr(settings, "KAKAO_REST_API_KEY", "")
        res = await client.get(f"{GEOCODE}/search", params={"query": "식당"}, headers=auth_header(user_token))
        assert res.status_code == 502

    async def test_reverse(self, client: AsyncClient, user_token, kakao):
        calls, responses = kakao
        responses["/v2/local/geo/coord2address.json"] = {"documents": [{
            "address": {"address_name": "서울 마포구 성산동 1"},
            "road_address": None,
        }]}

        res = await client.get(
            f"{GEOCODE}/reverse", params={"lat": 37.55, "lng": 126.9}, headers=auth_header(user_token)
        )
        assert res.status_code == 200
        assert res.json() == {"address": "서울 마포구 성산동 1", "road_address": None}
        assert calls[0].url.params["x"] == "126.9"
        assert calls[0].url.params["y"] == "37.55"
