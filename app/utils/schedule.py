"""방문 희망 날짜/시간 선택 유틸리티.

Visit date/time helpers for wizard step 2: picker options (days clamped
to the month, hours 0-23, minutes in 10-minute steps) and validation of
the submitted "YYYY-MM-DD" / "HH:MM" strings.
"""

import calendar
import re
from datetime import date, datetime, timezone

from app.utils.format import to_local

MINUTE_STEP: int = 10

_DATE_PATTERN = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def clamp_day(year: int, month: int, day: int) -> int:
    """월의 실제 일수로 일자를 제한합니다 (e.g. 2월 31일 -> 2월 28/29일)."""
    return max(1, min(day, days_in_month(year, month)))


def hour_options() -> list[str]:
    return [f"{h:02d}" for h in range(24)]


def minute_options() -> list[str]:
    return [f"{m:02d}" for m in range(0, 60, MINUTE_STEP)]


def schedule_options(year: int, month: int) -> dict:
    """선택기 옵션 (Picker options for one month)."""
    count: int = days_in_month(year, month)
    return {
        "year": year,
        "month": month,
        "days_in_month": count,
        "days": list(range(1, count + 1)),
        "hours": hour_options(),
        "minutes": minute_options(),
    }


def local_today() -> date:
    return to_local(datetime.now(timezone.utc)).date()


def parse_date_text(value: str | None) -> date | None:
    """"YYYY-MM-DD"를 date로 변환합니다. 일(day)은 해당 월의 일수로 보정합니다.

    Parse a picker date; a day past the month's end (e.g. 02-31 after a
    month change) is clamped to the last day. Malformed input gives None.
    """
    if not value:
        return None
    match = _DATE_PATTERN.match(value.strip())
    if match is None:
        return None
    year, month, day = (int(part) for part in match.groups())
    if not 1 <= month <= 12 or year < 1:
        return None
    return date(year, month, clamp_day(year, month, day))


def parse_visit_date(value: str | None, today: date | None = None) -> date | None:
    """방문 희망 날짜를 검증합니다. 형식 오류 또는 과거 날짜면 None."""
    parsed: date | None = parse_date_text(value)
    if parsed is None or parsed < (today or local_today()):
        return None
    return parsed


def is_valid_visit_time(value: str | None) -> bool:
    """"HH:MM" 형식, 시 0-23, 분 10분 단위인지 확인합니다."""
    if not value or len(value) != 5 or value[2] != ":":
        return False
    hour_text, minute_text = value[:2], value[3:]
    if not (hour_text.isdigit() and minute_text.isdigit()):
        return False
    hour, minute = int(hour_text), int(minute_text)
    return 0 <= hour <= 23 and 0 <= minute < 60 and minute % MINUTE_STEP == 0
