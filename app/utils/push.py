"""웹 푸시 알림 페이로드 생성.

Web push payload for the admin "new service request" alert, shaped the
way the admin service worker displays it.
"""

from typing import Any

DEFAULT_PUSH_TITLE: str = "새로운 서비스 요청"
DEFAULT_PUSH_BODY: str = "새로운 서비스 요청이 들어왔습니다."
PUSH_VIBRATE_PATTERN: list[int] = [200, 100, 200]
PUSH_TAG: str = "service-request"
PUSH_CLICK_URL: str = "/admin/dashboard/services"


def build_push_payload(
    title: str | None = None,
    body: str | None = None,
    data: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """푸시 페이로드를 생성합니다.

    Build a notification payload; missing title/body fall back to the
    defaults, and the click-through URL is always present in data.
    """
    return {
        "title": title or DEFAULT_PUSH_TITLE,
        "body": body or DEFAULT_PUSH_BODY,
        "icon": "/icon-192x192.png",
        "badge": "/icon-192x192.png",
        "vibrate": PUSH_VIBRATE_PATTERN,
        "tag": PUSH_TAG,
        "requireInteraction": True,
        "data": {"url": PUSH_CLICK_URL, **(data or {})},
    }


def build_service_request_push(record: dict[str, Any]) -> dict[str, Any]:
    """신규 서비스 요청 이벤트를 푸시 페이로드로 변환합니다.

    Args:
        record: change feed의 service_requests INSERT 레코드

    Returns:
        dict: 서비스명을 본문에 담은 푸시 페이로드 (Push payload naming the service)
    """
    service_display: str | None = record.get("service_display_name")
    body: str | None = f"{service_display} 요청이 들어왔습니다." if service_display else None
    return build_push_payload(
        body=body,
        data={"request_id": record.get("id")},
    )
