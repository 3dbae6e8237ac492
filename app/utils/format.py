"""표시용 포맷 유틸리티.

Display formatting helpers: prices, relative dates, local timeline
stamps, and short request ids. Stored timestamps are UTC; naive values
(as returned by some drivers) are treated as UTC.
"""

from datetime import datetime, timedelta, timezone
from uuid import UUID
from zoneinfo import ZoneInfo

from app.config import settings


def local_tz() -> ZoneInfo:
    return ZoneInfo(settings.TIMEZONE)


def ensure_utc(value: datetime) -> datetime:
    """naive datetime을 UTC로 간주합니다 (Treat naive values as UTC)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def to_local(value: datetime) -> datetime:
    return ensure_utc(value).astimezone(local_tz())


def start_of_local_day(now: datetime | None = None) -> datetime:
    """오늘 00:00(현지 시각)을 UTC로 반환 (Local midnight, expressed in UTC)."""
    current: datetime = to_local(now or datetime.now(timezone.utc))
    midnight: datetime = current.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight.astimezone(timezone.utc)


def format_price(amount: int) -> str:
    """금액 표시 (38000 -> "38,000원")."""
    return f"{amount:,}원"


def format_relative_date(value: datetime, now: datetime | None = None) -> str:
    """상대 날짜 표시.

    Returns "오늘" for today, "어제" for yesterday, otherwise "YYYY-MM-DD",
    all evaluated in the configured local timezone.
    """
    local_day = to_local(value).date()
    today = to_local(now or datetime.now(timezone.utc)).date()
    if local_day == today:
        return "오늘"
    if local_day == today - timedelta(days=1):
        return "어제"
    return local_day.isoformat()


def format_step_date(value: datetime) -> str:
    return to_local(value).strftime("%m/%d")


def format_step_time(value: datetime) -> str:
    return to_local(value).strftime("%H:%M")


def format_datetime(value: datetime | None) -> str:
    """엑셀/목록용 "YYYY-MM-DD HH:MM" (Local date-time for exports)."""
    if value is None:
        return ""
    return to_local(value).strftime("%Y-%m-%d %H:%M")


def display_id(record_id: UUID | str) -> str:
    """요청 번호 축약 표시 (First 4 and last 4 characters of the id)."""
    text: str = str(record_id)
    return f"{text[:4]}-{text[-4:]}"
