"""변경 피드, SSE 스트림, 푸시 페이로드 테스트.

Change feed publish/subscribe, commit-gated staging, the SSE frame
generator and the admin push payload.
"""

import asyncio
import json

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.services.change_feed import ChangeFeed, change_feed
from app.utils.push import build_push_payload, build_service_request_push
from app.utils.sse import format_event, stream_changes


class _FakeRequest:
    """연결 종료를 흉내내는 요청 (Request stub whose client can disconnect)."""

    def __init__(self) -> None:
        self.disconnected = False

    async def is_disconnected(self) -> bool:
        return self.disconnected


class TestChangeFeed:
    def test_publish_filters_by_table_event_and_predicate(self):
        feed = ChangeFeed()
        mine = feed.subscribe("notifications", "INSERT", lambda r: r["user_id"] == "u1")
        everything = feed.subscribe("notifications", "INSERT")
        other_table = feed.subscribe("service_requests", "INSERT")

        delivered = feed.publish("notifications", "INSERT", {"user_id": "u2"})

        assert delivered == 1
        assert mine.queue.empty()
        assert everything.queue.get_nowait() == {"user_id": "u2"}
        assert other_table.queue.empty()

    async def test_listen_unsubscribes_on_exit(self):
        feed = ChangeFeed()
        async with feed.listen("notifications", "INSERT"):
            assert feed.subscriber_count == 1
        assert feed.subscriber_count == 0

    def test_full_queue_drops_oldest(self):
        feed = ChangeFeed()
        sub = feed.subscribe("t", "INSERT")
        for i in range(sub.queue.maxsize + 1):
            feed.publish("t", "INSERT", {"n": i})
        assert sub.queue.qsize() == sub.queue.maxsize
        assert sub.queue.get_nowait() == {"n": 1}

    async def test_staged_events_publish_only_after_commit(self, db: AsyncSession):
        async with change_feed.listen("notifications", "INSERT") as sub:
            await db.execute(text("SELECT 1"))
            change_feed.stage(db, "notifications", "INSERT", {"id": "n1"})
            assert sub.queue.empty()
            await db.commit()
            assert sub.queue.get_nowait() == {"id": "n1"}

    async def test_staged_events_dropped_on_rollback(self, db: AsyncSession):
        async with change_feed.listen("notifications", "INSERT") as sub:
            await db.execute(text("SELECT 1"))
            change_feed.stage(db, "notifications", "INSERT", {"id": "n2"})
            await db.rollback()
            assert sub.queue.empty()
            await db.commit()
            assert sub.queue.empty()


class TestSse:
    def test_format_event(self):
        assert format_event({"a": "가"}) == 'data: {"a": "가"}\n\n'
        assert format_event({"a": 1}, "notification").startswith("event: notification\n")

    async def test_stream_yields_matching_records(self):
        feed = ChangeFeed()
        request = _FakeRequest()
        stream = stream_changes(
            request, feed, "notifications", "INSERT",
            predicate=lambda r: r["user_id"] == "u1",
            sse_event="notification",
        )

        assert await stream.__anext__() == ": connected\n\n"
        feed.publish("notifications", "INSERT", {"user_id": "u2", "title": "x"})
        feed.publish("notifications", "INSERT", {"user_id": "u1", "title": "상태 변경"})

        frame = await stream.__anext__()
        assert frame.startswith("event: notification\n")
        assert json.loads(frame.split("data: ", 1)[1]) == {"user_id": "u1", "title": "상태 변경"}
        await stream.aclose()
        assert feed.subscriber_count == 0

    async def test_stream_keep_alive_and_disconnect(self, monkeypatch):
        monkeypatch.setattr(settings, "SSE_KEEPALIVE_SECONDS", 0.01)
        feed = ChangeFeed()
        request = _FakeRequest()
        stream = stream_changes(request, feed, "service_requests", "INSERT")

        await stream.__anext__()
        assert await asyncio.wait_for(stream.__anext__(), timeout=1) == ": keep-alive\n\n"

        request.disconnected = True
        remaining = [frame async for frame in stream]
        assert remaining == []
        assert feed.subscriber_count == 0


class TestPushPayload:
    def test_defaults(self):
        payload = build_push_payload()
        assert payload["title"] == "새로운 서비스 요청"
        assert payload["body"] == "새로운 서비스 요청이 들어왔습니다."
        assert payload["icon"] == "/icon-192x192.png"
        assert payload["vibrate"] == [200, 100, 200]
        assert payload["tag"] == "service-request"
        assert payload["requireInteraction"] is True
        assert payload["data"] == {"url": "/admin/dashboard/services"}

    def test_service_request_record(self):
        payload = build_service_request_push({"id": "r1", "service_display_name": "화구 교체"})
        assert payload["body"] == "화구 교체 요청이 들어왔습니다."
        assert payload["data"]["request_id"] == "r1"
        assert payload["data"]["url"] == "/admin/dashboard/services"
