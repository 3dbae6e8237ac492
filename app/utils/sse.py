"""Server-Sent Events 스트리밍 유틸리티.

Turns a change-feed subscription into a ``text/event-stream`` response
body. The subscription lives exactly as long as the client connection.
"""

import asyncio
import json
from collections.abc import AsyncIterator, Callable
from typing import Any

from starlette.requests import Request

from app.config import settings
from app.services.change_feed import ChangeFeed, Predicate

SSE_HEADERS: dict[str, str] = {
    "Cache-Control": "no-cache",
    "X-Accel-Buffering": "no",
}


def format_event(data: Any, event: str | None = None) -> str:
    """SSE 프레임 직렬화 (Serialize one SSE frame)."""
    prefix: str = f"event: {event}\n" if event else ""
    return f"{prefix}data: {json.dumps(data, ensure_ascii=False, default=str)}\n\n"


async def stream_changes(
    request: Request,
    feed: ChangeFeed,
    table: str,
    event_name: str,
    predicate: Predicate | None = None,
    transform: Callable[[dict[str, Any]], Any] | None = None,
    sse_event: str | None = None,
) -> AsyncIterator[str]:
    """구독 이벤트를 SSE 프레임으로 내보냅니다.

    Yield one SSE frame per matching change, with a keep-alive comment
    whenever the feed is idle for SSE_KEEPALIVE_SECONDS. Stops when the
    client disconnects; leaving the ``listen`` block unsubscribes.
    """
    async with feed.listen(table, event_name, predicate) as subscription:
        yield ": connected\n\n"
        while True:
            if await request.is_disconnected():
                break
            try:
                record: dict[str, Any] = await asyncio.wait_for(
                    subscription.queue.get(), timeout=settings.SSE_KEEPALIVE_SECONDS
                )
            except asyncio.TimeoutError:
                yield ": keep-alive\n\n"
                continue
            payload: Any = transform(record) if transform else record
            yield format_event(payload, sse_event)
