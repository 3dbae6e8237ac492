"""관리자 API 테스트: 대시보드, 서비스 요청 처리, 내보내기, 사용자/가게 조회.

Admin back-office API tests: dashboard summary, request status
transitions with owner notification, Excel export, and the user/store
directories.
"""

from io import BytesIO

from httpx import AsyncClient
from openpyxl import load_workbook
from sqlalchemy import select

from app.models.notification import Notification
from tests.conftest import auth_header, burner_request

APP_REQUESTS = "/api/v1/app/my/service-requests"
ADMIN = "/api/v1/admin"


async def _create(client: AsyncClient, token: str, **overrides) -> str:
    res = await client.post(APP_REQUESTS, json=burner_request(**overrides), headers=auth_header(token))
    assert res.status_code == 201, res.text
    return res.json()["id"]


async def _set_status(client: AsyncClient, admin_token: str, request_id: str, status: str):
    return await client.patch(
        f"{ADMIN}/service-requests/{request_id}/status",
        json={"status": status},
        headers=auth_header(admin_token),
    )


class TestDashboard:
    """대시보드 요약 테스트."""

    async def test_summary(self, client: AsyncClient, services, store, user_token, admin_token):
        first = await _create(client, user_token)
        second = await _create(client, user_token)
        await _create(client, user_token)
        await _set_status(client, admin_token, first, "진행중")
        await _set_status(client, admin_token, second, "진행중")
        await _set_status(client, admin_token, second, "완료")

        res = await client.get(f"{ADMIN}/dashboard/summary", headers=auth_header(admin_token))
        assert res.status_code == 200
        assert res.json() == {
            "total_requests": 3,
            "pending_requests": 1,
            "in_progress_requests": 1,
            "completed_today": 1,
            "total_stores": 1,
            "total_users": 1,
        }

    async def test_user_token_is_403(self, client: AsyncClient, user_token):
        res = await client.get(f"{ADMIN}/dashboard/summary", headers=auth_header(user_token))
        assert res.status_code == 403


class TestAdminServiceRequests:
    """관리자 서비스 요청 처리 테스트."""

    async def test_list_and_search(self, client: AsyncClient, services, store, user_token, admin_token):
        await _create(client, user_token)
        await _create(client, user_token, service="gas", items={}, text="냄새가 나요")

        res = await client.get(f"{ADMIN}/service-requests", headers=auth_header(admin_token))
        data = res.json()
        assert data["total"] == 2
        assert data["items"][0]["user_phone"] == "010-1234-5678"

        res = await client.get(
            f"{ADMIN}/service-requests", params={"search": "가스누출"}, headers=auth_header(admin_token)
        )
        assert [i["service"] for i in res.json()["items"]] == ["gas"]

        res = await client.get(
            f"{ADMIN}/service-requests", params={"search": "행복"}, headers=auth_header(admin_token)
        )
        assert res.json()["total"] == 2

        res = await client.get(
            f"{ADMIN}/service-requests", params={"status": "완료"}, headers=auth_header(admin_token)
        )
        assert res.json()["total"] == 0

    async def test_detail_lists_allowed_statuses(self, client: AsyncClient, services, store, user_token, admin_token):
        request_id = await _create(client, user_token)
        res = await client.get(f"{ADMIN}/service-requests/{request_id}", headers=auth_header(admin_token))
        assert res.status_code == 200
        data = res.json()
        assert data["allowed_statuses"] == ["진행중", "취소"]
        assert data["user_phone"] == "010-1234-5678"

    async def test_transition_notifies_owner(
        self, client: AsyncClient, services, store, user_profile, user_token, admin_token, session_factory
    ):
        request_id = await _create(client, user_token)

        res = await _set_status(client, admin_token, request_id, "진행중")
        assert res.status_code == 200
        data = res.json()
        assert data["status"] == "진행중"
        assert data["active_step"] == 1
        assert data["timeline"][1]["completed"] is True

        async with session_factory() as s:
            notification = (await s.execute(
                select(Notification).where(Notification.user_id == user_profile.id)
            )).scalar_one()
        assert notification.type == "status_change"
        assert notification.title == "서비스 상태 변경"
        assert "진행중" in notification.message

        detail = (await client.get(f"{APP_REQUESTS}/{request_id}", headers=auth_header(user_token))).json()
        assert detail["can_edit"] is False

    async def test_invalid_transition_is_400(self, client: AsyncClient, services, store, user_token, admin_token):
        request_id = await _create(client, user_token)

        res = await _set_status(client, admin_token, request_id, "완료")
        assert res.status_code == 400

        await _set_status(client, admin_token, request_id, "진행중")
        await _set_status(client, admin_token, request_id, "완료")
        res = await _set_status(client, admin_token, request_id, "취소")
        assert res.status_code == 400

    async def test_admin_can_cancel_in_progress(self, client: AsyncClient, services, store, user_token, admin_token):
        request_id = await _create(client, user_token)
        await _set_status(client, admin_token, request_id, "진행중")
        res = await _set_status(client, admin_token, request_id, "취소")
        assert res.status_code == 200
        assert res.json()["active_step"] == 3

    async def test_unknown_status_is_400(self, client: AsyncClient, services, store, user_token, admin_token):
        request_id = await _create(client, user_token)
        res = await _set_status(client, admin_token, request_id, "보류")
        assert res.status_code == 400

    async def test_export(self, client: AsyncClient, services, store, user_token, admin_token):
        await _create(client, user_token)

        res = await client.get(f"{ADMIN}/service-requests/export", headers=auth_header(admin_token))
        assert res.status_code == 200
        assert res.headers["content-type"].startswith(
            "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        )
        assert "service_requests.xlsx" in res.headers["content-disposition"]

        ws = load_workbook(BytesIO(res.content)).active
        rows = list(ws.iter_rows(values_only=True))
        assert rows[0][0] == "주문번호"
        assert len(rows) == 2
        assert rows[1][1] == "화구 교체"
        assert rows[1][3] == "행복식당"
        assert rows[1][9] == 38000


class TestAdminDirectories:
    """사용자/가게 조회 테스트."""

    async def test_users_list_excludes_admins(self, client: AsyncClient, services, store, user_token, admin_token):
        await _create(client, user_token)

        res = await client.get(f"{ADMIN}/users", headers=auth_header(admin_token))
        data = res.json()
        assert data["total"] == 1
        user = data["items"][0]
        assert user["phone_display"] == "010-1234-5678"
        assert user["store_count"] == 1
        assert user["request_count"] == 1

    async def test_users_search_by_phone(self, client: AsyncClient, user_profile, other_profile, admin_token):
        res = await client.get(f"{ADMIN}/users", params={"search": "010-9876"}, headers=auth_header(admin_token))
        assert [u["phone"] for u in res.json()["items"]] == ["+82 1098765432"]

    async def test_user_detail(self, client: AsyncClient, services, store, user_profile, user_token, admin_token):
        await _create(client, user_token)
        res = await client.get(f"{ADMIN}/users/{user_profile.id}", headers=auth_header(admin_token))
        assert res.status_code == 200
        data = res.json()
        assert [s["name"] for s in data["stores"]] == ["행복식당"]
        assert len(data["requests"]) == 1

    async def test_stores_list_and_detail(self, client: AsyncClient, services, store, user_token, admin_token):
        await _create(client, user_token)

        res = await client.get(f"{ADMIN}/stores", params={"search": "월드컵"}, headers=auth_header(admin_token))
        data = res.json()
        assert data["total"] == 1
        assert data["items"][0]["owner_phone"] == "010-1234-5678"
        assert data["items"][0]["request_count"] == 1

        res = await client.get(f"{ADMIN}/stores/{store.id}", headers=auth_header(admin_token))
        assert res.status_code == 200
        assert len(res.json()["requests"]) == 1

    async def test_missing_store_is_404(self, client: AsyncClient, admin_token):
        res = await client.get(
            f"{ADMIN}/stores/00000000-0000-0000-0000-000000000000", headers=auth_header(admin_token)
        )
        assert res.status_code == 404
