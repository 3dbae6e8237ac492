"""실시간 스트림 라우트 테스트 (SSE over ASGI).

Drives the stream endpoints through the ASGI app itself: a raw
receive/send pair keeps the connection open while events are produced
by ordinary requests, then disconnects.
"""

import asyncio
import json
from collections.abc import AsyncGenerator
from typing import Any

import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_db
from app.main import app
from app.services.notification_service import notification_service
from app.utils.push import DEFAULT_PUSH_TITLE, PUSH_CLICK_URL, PUSH_TAG
from tests.conftest import auth_header, burner_request

USER_STREAM = "/api/v1/app/my/notifications/stream"
ADMIN_STREAM = "/api/v1/admin/notifications/stream"
SERVICE_REQUESTS = "/api/v1/app/my/service-requests"


class SseConnection:
    """ASGI 앱에 직접 연결한 SSE 클라이언트 (Raw ASGI SSE client)."""

    def __init__(self, path: str, token: str):
        self.path = path
        self.token = token
        self.status: int | None = None
        self.headers: dict[str, str] = {}
        self._chunks: asyncio.Queue[str] = asyncio.Queue()
        self._request_sent = False
        self._disconnected = asyncio.Event()
        self._task: asyncio.Task | None = None

    async def _receive(self) -> dict[str, Any]:
        if not self._request_sent:
            self._request_sent = True
            return {"type": "http.request", "body": b"", "more_body": False}
        await self._disconnected.wait()
        return {"type": "http.disconnect"}

    async def _send(self, message: dict[str, Any]) -> None:
        if message["type"] == "http.response.start":
            self.status = message["status"]
            self.headers = {k.decode(): v.decode() for k, v in message.get("headers", [])}
        elif message["type"] == "http.response.body":
            body: bytes = message.get("body", b"")
            if body:
                await self._chunks.put(body.decode())

    async def __aenter__(self) -> "SseConnection":
        scope: dict[str, Any] = {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": "1.1",
            "method": "GET",
            "scheme": "http",
            "path": self.path,
            "raw_path": self.path.encode(),
            "root_path": "",
            "query_string": b"",
            "headers": [
                (b"host", b"test"),
                (b"authorization", f"Bearer {self.token}".encode()),
            ],
            "client": ("127.0.0.1", 50000),
            "server": ("test", 80),
        }
        self._task = asyncio.create_task(app(scope, self._receive, self._send))
        return self

    async def __aexit__(self, *exc_info) -> None:
        self._disconnected.set()
        await asyncio.wait_for(self._task, timeout=5)

    async def next_chunk(self, timeout: float = 5) -> str:
        return await asyncio.wait_for(self._chunks.get(), timeout=timeout)

    async def next_event(self, name: str, timeout: float = 5) -> dict[str, Any]:
        """keep-alive 주석은 건너뛰고 다음 이벤트의 data를 반환합니다."""
        while True:
            chunk: str = await self.next_chunk(timeout)
            if chunk.startswith(":"):
                continue
            lines: list[str] = chunk.strip().split("\n")
            assert lines[0] == f"event: {name}"
            assert lines[1].startswith("data: ")
            return json.loads(lines[1][len("data: "):])


@pytest_asyncio.fixture
async def opened_sessions(client: AsyncClient, session_factory, monkeypatch) -> AsyncGenerator[list[AsyncSession], None]:
    """요청마다 연 세션을 기록합니다 (Record every request session)."""
    monkeypatch.setattr(settings, "SSE_KEEPALIVE_SECONDS", 0.05)
    sessions: list[AsyncSession] = []

    async def _recording_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            sessions.append(session)
            yield session

    app.dependency_overrides[get_db] = _recording_get_db
    yield sessions


class TestUserNotificationStream:
    async def test_stream_releases_session_while_open(self, opened_sessions, user_token):
        async with SseConnection(USER_STREAM, user_token) as conn:
            assert await conn.next_chunk() == ": connected\n\n"
            assert conn.status == 200
            assert conn.headers["content-type"].startswith("text/event-stream")
            assert opened_sessions
            assert not any(s.in_transaction() for s in opened_sessions)

    async def test_stream_delivers_only_own_notifications(
        self, opened_sessions, session_factory, user_profile, other_profile, user_token
    ):
        async with SseConnection(USER_STREAM, user_token) as conn:
            assert await conn.next_chunk() == ": connected\n\n"

            async with session_factory() as s:
                await notification_service.create_notification(
                    s, other_profile.id, "다른 사람", "다른 가게 알림", "status_change"
                )
                await notification_service.create_notification(
                    s, user_profile.id, "상태 변경", "요청이 확인되었습니다.", "status_change"
                )
                await s.commit()

            event = await conn.next_event("notification")
            assert event["user_id"] == str(user_profile.id)
            assert event["title"] == "상태 변경"
            assert event["message"] == "요청이 확인되었습니다."


class TestAdminServiceRequestStream:
    async def test_user_token_is_forbidden(self, client: AsyncClient, user_token):
        res = await client.get(ADMIN_STREAM, headers=auth_header(user_token))
        assert res.status_code == 403

    async def test_stream_releases_session_while_open(self, opened_sessions, admin_token):
        async with SseConnection(ADMIN_STREAM, admin_token) as conn:
            assert await conn.next_chunk() == ": connected\n\n"
            assert conn.status == 200
            assert opened_sessions
            assert not any(s.in_transaction() for s in opened_sessions)

    async def test_new_service_request_is_pushed(
        self, opened_sessions, client: AsyncClient, services, store, user_token, admin_token
    ):
        async with SseConnection(ADMIN_STREAM, admin_token) as conn:
            assert await conn.next_chunk() == ": connected\n\n"

            res = await client.post(SERVICE_REQUESTS, json=burner_request(), headers=auth_header(user_token))
            assert res.status_code == 201, res.text
            created = res.json()

            payload = await conn.next_event("service_request")
            assert payload["title"] == DEFAULT_PUSH_TITLE
            assert payload["body"].endswith("요청이 들어왔습니다.")
            assert payload["tag"] == PUSH_TAG
            assert payload["requireInteraction"] is True
            assert payload["vibrate"] == [200, 100, 200]
            assert payload["data"]["url"] == PUSH_CLICK_URL
            assert payload["data"]["request_id"] == created["id"]
