"""유틸리티 단위 테스트: 전화번호, 가격, 포맷, 타임라인, 방문 일정.

Unit tests for the pure helpers shared by services and routers.
"""

import logging
from datetime import date, datetime, timezone
from types import SimpleNamespace

from app.config import settings
from app.middleware.axiom_logging import api_surface, mask_sensitive
from app.utils import sms
from app.utils.format import (
    display_id,
    format_price,
    format_relative_date,
    start_of_local_day,
)
from app.utils.phone import format_phone_number, is_valid_mobile, to_international
from app.utils.pricing import (
    compute_total_from_counts,
    compute_total_from_details,
    parse_quantity,
    priced_items,
)
from app.utils.schedule import (
    is_valid_visit_time,
    parse_date_text,
    parse_visit_date,
    schedule_options,
)
from app.utils.timeline import build_steps, derive_step_index


def _detail(key: str, value: str) -> SimpleNamespace:
    return SimpleNamespace(key=key, value=value)


class TestPhone:
    def test_valid_mobile_accepts_hyphens(self):
        assert is_valid_mobile("010-1234-5678")
        assert is_valid_mobile("01112345678")

    def test_invalid_mobile(self):
        assert not is_valid_mobile("02-123-4567")
        assert not is_valid_mobile("0101234567")
        assert not is_valid_mobile("01512345678")

    def test_to_international(self):
        assert to_international("010-1234-5678") == "+82 1012345678"
        assert to_international("+82 1012345678") == "+82 1012345678"

    def test_format_phone_number(self):
        assert format_phone_number("+82 1012345678") == "010-1234-5678"
        assert format_phone_number("01012345678") == "010-1234-5678"
        assert format_phone_number(None) == ""
        assert format_phone_number("02-123-4567") == "02-123-4567"
        assert format_phone_number("+82 212345678") == "+82 212345678"


class TestPricing:
    def test_quantity_from_value(self):
        assert parse_quantity("2개") == 2
        assert parse_quantity("개") == 1
        assert parse_quantity(None) == 1

    def test_total_from_counts(self):
        assert compute_total_from_counts({"(일반화구) 1열 1구": 2}) == 38000
        assert compute_total_from_counts({"알 수 없는 품목": 3}) == 0

    def test_reserved_keys_are_not_priced(self):
        details = [
            _detail("(일반화구) 1열 1구", "2개"),
            _detail("8미리 밸브교체", "1개"),
            _detail("방문 희망 날짜", "2026-10-22"),
            _detail("결제 방법", "카드 결제"),
            _detail("추가 요청사항", "3층 주방"),
        ]
        assert compute_total_from_details(details) == 38000 + 15000
        assert [i["name"] for i in priced_items(details)] == ["(일반화구) 1열 1구", "8미리 밸브교체"]
        assert priced_items(details)[0]["subtotal"] == 38000


class TestFormat:
    def test_format_price(self):
        assert format_price(38000) == "38,000원"
        assert format_price(0) == "0원"

    def test_relative_date(self):
        # 2026-10-19 12:00 KST
        now = datetime(2026, 10, 19, 3, 0, tzinfo=timezone.utc)
        assert format_relative_date(datetime(2026, 10, 19, 1, 0, tzinfo=timezone.utc), now) == "오늘"
        assert format_relative_date(datetime(2026, 10, 18, 1, 0, tzinfo=timezone.utc), now) == "어제"
        assert format_relative_date(datetime(2026, 10, 10, 1, 0, tzinfo=timezone.utc), now) == "2026-10-10"

    def test_relative_date_uses_local_day(self):
        # 2026-10-18 23:30 UTC 는 KST로 10-19 08:30
        now = datetime(2026, 10, 19, 3, 0, tzinfo=timezone.utc)
        assert format_relative_date(datetime(2026, 10, 18, 23, 30), now) == "오늘"

    def test_start_of_local_day(self):
        now = datetime(2026, 10, 19, 3, 0, tzinfo=timezone.utc)
        assert start_of_local_day(now) == datetime(2026, 10, 18, 15, 0, tzinfo=timezone.utc)

    def test_display_id(self):
        assert display_id("abcd1234-0000-0000-0000-00000000wxyz") == "abcd-wxyz"


class TestTimeline:
    def test_canceled_always_last_step(self):
        created = datetime(2026, 10, 19, 1, 0, tzinfo=timezone.utc)
        assert derive_step_index("취소", [created, None, None, None]) == 3

    def test_highest_set_timestamp_wins(self):
        t = datetime(2026, 10, 19, 1, 0, tzinfo=timezone.utc)
        assert derive_step_index("요청됨", [t, None, None, None]) == 0
        assert derive_step_index("완료", [t, t, t, None]) == 2
        assert derive_step_index("요청됨", [None, None, None, None]) == -1

    def test_steps_local_date_and_time(self):
        created = datetime(2026, 10, 19, 1, 5, tzinfo=timezone.utc)
        working = datetime(2026, 10, 19, 2, 40, tzinfo=timezone.utc)
        result = build_steps("진행중", [created, working, None, None])
        assert result["active_index"] == 1
        first, second, third, _ = result["steps"]
        assert first == {"label": "요청됨", "date": "10/19", "time": "10:05", "completed": True, "current": False}
        assert second["current"] is True
        assert third["date"] is None
        assert third["completed"] is False


class TestSchedule:
    def test_options_clamp_days_to_month(self):
        options = schedule_options(2026, 2)
        assert options["days_in_month"] == 28
        assert options["days"][-1] == 28
        assert options["hours"][0] == "00" and options["hours"][-1] == "23"
        assert options["minutes"] == ["00", "10", "20", "30", "40", "50"]

    def test_parse_date_clamps_day(self):
        assert parse_date_text("2026-02-31") == date(2026, 2, 28)
        assert parse_date_text("2028-02-30") == date(2028, 2, 29)

    def test_parse_date_rejects_malformed(self):
        assert parse_date_text("2026/10/20") is None
        assert parse_date_text("2026-13-01") is None
        assert parse_date_text("") is None

    def test_visit_date_rejects_past(self):
        today = date(2026, 10, 19)
        assert parse_visit_date("2026-10-18", today) is None
        assert parse_visit_date("2026-10-19", today) == today

    def test_visit_time(self):
        assert is_valid_visit_time("09:30")
        assert is_valid_visit_time("23:50")
        assert not is_valid_visit_time("24:00")
        assert not is_valid_visit_time("09:35")
        assert not is_valid_visit_time("9:30")
        assert not is_valid_visit_time(None)


class TestLogMasking:
    """Axiom 로그 마스킹 테스트."""

    def test_secrets_are_masked(self):
        masked = mask_sensitive({"code": "123456", "refresh_token": "abc", "password": "pw", "purpose": "login"})
        assert masked == {"code": "***", "refresh_token": "***", "password": "***", "purpose": "login"}

    def test_phone_keeps_last_four_digits(self):
        assert mask_sensitive({"phone": "010-1234-5678"}) == {"phone": "***5678"}

    def test_nested_values(self):
        masked = mask_sensitive({"items": [{"otp_code": "1"}], "store": {"name": "행복식당"}})
        assert masked == {"items": [{"otp_code": "***"}], "store": {"name": "행복식당"}}

    def test_api_surface(self):
        assert api_surface("/api/v1/admin/dashboard/summary") == "admin"
        assert api_surface("/api/v1/app/my/stores") == "app"
        assert api_surface("/health") == "other"


class TestSmsLogging:
    """인증번호 로그 테스트."""

    async def test_unconfigured_gateway_logs_code_at_debug(self, monkeypatch, caplog):
        monkeypatch.setattr(settings, "SMS_API_URL", "")
        caplog.set_level(logging.DEBUG, logger=sms.__name__)

        assert await sms.send_otp("01012345678", "482913") is False
        debug_lines = [r.getMessage() for r in caplog.records if r.levelno == logging.DEBUG]
        assert debug_lines == ["OTP code for 0101234****: 482913"]

    async def test_configured_gateway_never_logs_code(self, monkeypatch, caplog):
        monkeypatch.setattr(settings, "SMS_API_URL", "https://sms.example.com/send")
        monkeypatch.setattr(settings, "SMS_API_KEY", "key")
        sent: list[tuple[str, str]] = []

        async def _fake_send_sms(to: str, text: str) -> bool:
            sent.append((to, text))
            return True

        monkeypatch.setattr(sms, "send_sms", _fake_send_sms)
        caplog.set_level(logging.DEBUG, logger=sms.__name__)

        assert await sms.send_otp("01012345678", "482913") is True
        assert sent == [("01012345678", "[우리동네가스] 인증번호: 482913")]
        assert all("482913" not in r.getMessage() for r in caplog.records)
