"""서비스 신청 단계 검증 테스트.

Wizard step validation per content mode, visit schedule and payment,
plus the detail rows built from a validated request.
"""

import pytest
from fastapi import HTTPException

from app.schemas.service_request import ServiceRequestCreate
from app.services import request_wizard
from tests.conftest import burner_request, future_date


def _create(**kwargs) -> ServiceRequestCreate:
    return ServiceRequestCreate(**kwargs)


class TestServiceLookup:
    def test_unknown_service_is_404(self):
        with pytest.raises(HTTPException) as exc:
            request_wizard.get_service_config("nope")
        assert exc.value.status_code == 404

    def test_unavailable_service_is_400(self):
        with pytest.raises(HTTPException) as exc:
            request_wizard.get_service_config("contract")
        assert exc.value.status_code == 400
        assert exc.value.detail == "서비스 준비 중입니다."


class TestStepOne:
    def test_items_require_one_positive_count(self):
        data = _create(service="burner", items={"(일반화구) 1열 1구": 0})
        with pytest.raises(HTTPException) as exc:
            request_wizard.validate_step(data, 1)
        assert exc.value.detail == "최소 1개 이상의 품목을 선택해주세요."

    def test_item_outside_catalog_rejected(self):
        data = _create(service="valve", items={"(일반화구) 1열 1구": 1})
        with pytest.raises(HTTPException) as exc:
            request_wizard.validate_step(data, 1)
        assert exc.value.status_code == 400

    def test_option_mode_needs_choice_and_text(self):
        data = _create(service="pipe", option="LPG", text=" ")
        with pytest.raises(HTTPException) as exc:
            request_wizard.validate_step(data, 1)
        assert exc.value.detail == "가스 종류를 선택하고 요청사항을 입력해주세요."
        ok = _create(service="pipe", option="LPG", text="주방 배관 2m")
        assert request_wizard.validate_step(ok, 1) == 2

    def test_text_mode_requires_text(self):
        with pytest.raises(HTTPException) as exc:
            request_wizard.validate_step(_create(service="quote"), 1)
        assert exc.value.detail == "문의내용을 입력해주세요."


class TestLaterSteps:
    def test_visit_requires_future_date_and_time(self):
        data = _create(service="burner", visit_date="2000-01-01", visit_time="10:00")
        with pytest.raises(HTTPException) as exc:
            request_wizard.validate_step(data, 2)
        assert exc.value.detail == "방문 희망 날짜와 시간을 선택해주세요."
        ok = _create(service="burner", visit_date=future_date(), visit_time="10:00")
        assert request_wizard.validate_step(ok, 2) == 3

    def test_payment_required_and_last_step(self):
        with pytest.raises(HTTPException) as exc:
            request_wizard.validate_step(_create(service="burner", payment_method="bitcoin"), 3)
        assert exc.value.detail == "결제 방법을 선택해주세요."
        assert request_wizard.validate_step(_create(service="burner", payment_method="cash"), 3) is None


class TestDetailRows:
    def test_rows_in_order(self):
        validated = request_wizard.validate_all(
            ServiceRequestCreate(**burner_request(text="3층 주방"))
        )
        rows = request_wizard.build_detail_rows(validated)
        assert rows[0] == ("(일반화구) 1열 1구", "2개")
        assert [key for key, _ in rows[1:]] == ["추가 요청사항", "방문 희망 날짜", "방문 희망 시간", "결제 방법"]
        assert rows[-1] == ("결제 방법", "카드 결제")
        assert validated.total_price == 38000

    def test_option_row_for_pipe(self):
        validated = request_wizard.validate_all(ServiceRequestCreate(
            service="pipe",
            option="LNG(도시가스)",
            text="배관 철거 요청",
            visit_date=future_date(),
            visit_time="09:00",
            payment_method="later",
        ))
        rows = dict(request_wizard.build_detail_rows(validated))
        assert rows["가스 종류"] == "LNG(도시가스)"
        assert rows["추가 요청사항"] == "배관 철거 요청"
        assert rows["결제 방법"] == "추후 협의"
        assert validated.total_price == 0
