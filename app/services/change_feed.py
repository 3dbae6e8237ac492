"""변경 피드 (테이블/이벤트 단위 인프로세스 발행/구독).

Change Feed. In-process publish/subscribe of committed row changes,
filtered by table, event and an optional predicate on the record.

Flow:
    1. 서비스가 세션에 이벤트를 적재 (Services stage events on the session)
    2. 커밋 성공 시 구독자 큐로 발행 (Published to subscriber queues after commit)
    3. 롤백 시 적재된 이벤트 폐기 (Discarded on rollback)

Subscribers use ``listen()`` as an async context manager so the
subscription is always removed on teardown (e.g. SSE disconnect).
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

Predicate = Callable[[dict[str, Any]], bool]

_STAGED_KEY: str = "change_feed_staged"


@dataclass(eq=False)
class Subscription:
    """구독 정보 (One subscriber queue with its filter).

    Attributes:
        table: 대상 테이블 (Table name, e.g. "notifications")
        event: 이벤트 종류 (Event name, e.g. "INSERT")
        predicate: 레코드 필터, None이면 전체 (Record filter; None accepts all)
        queue: 수신 큐 (Delivery queue)
    """

    table: str
    event: str
    predicate: Predicate | None = None
    queue: asyncio.Queue = field(default_factory=lambda: asyncio.Queue(maxsize=100))

    def matches(self, table: str, event_name: str, record: dict[str, Any]) -> bool:
        if self.table != table or self.event != event_name:
            return False
        return self.predicate is None or self.predicate(record)


class ChangeFeed:
    """인프로세스 변경 피드.

    Registry of subscriptions; ``publish`` fans a record out to every
    matching subscriber without blocking.
    """

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def subscribe(
        self,
        table: str,
        event_name: str,
        predicate: Predicate | None = None,
    ) -> Subscription:
        subscription: Subscription = Subscription(table=table, event=event_name, predicate=predicate)
        self._subscriptions.append(subscription)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    @asynccontextmanager
    async def listen(
        self,
        table: str,
        event_name: str,
        predicate: Predicate | None = None,
    ) -> AsyncIterator[Subscription]:
        """구독 후 종료 시 자동 해제 (Subscribe for the block, always unsubscribe)."""
        subscription: Subscription = self.subscribe(table, event_name, predicate)
        try:
            yield subscription
        finally:
            self.unsubscribe(subscription)

    def publish(self, table: str, event_name: str, record: dict[str, Any]) -> int:
        """일치하는 구독자에게 레코드를 전달합니다.

        Deliver a record to every matching subscriber. A full queue drops
        its oldest entry so a slow consumer never blocks the publisher.

        Returns:
            int: 전달된 구독자 수 (Number of subscribers that received it)
        """
        delivered: int = 0
        for subscription in list(self._subscriptions):
            if not subscription.matches(table, event_name, record):
                continue
            if subscription.queue.full():
                subscription.queue.get_nowait()
                logger.warning("change feed queue full for %s %s; dropped oldest event", table, event_name)
            subscription.queue.put_nowait(record)
            delivered += 1
        return delivered

    def stage(self, db: AsyncSession, table: str, event_name: str, record: dict[str, Any]) -> None:
        """커밋 후 발행할 이벤트를 세션에 적재합니다.

        Stage an event on the session; it is published only after the
        surrounding transaction commits.
        """
        db.info.setdefault(_STAGED_KEY, []).append((table, event_name, record))


# 싱글턴 인스턴스 (Singleton instance)
change_feed: ChangeFeed = ChangeFeed()


@event.listens_for(Session, "after_commit")
def _publish_staged(session: Session) -> None:
    for table, event_name, record in session.info.pop(_STAGED_KEY, []):
        change_feed.publish(table, event_name, record)


@event.listens_for(Session, "after_rollback")
def _discard_staged(session: Session) -> None:
    session.info.pop(_STAGED_KEY, None)
