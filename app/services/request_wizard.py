"""서비스 신청 3단계 검증 및 상세 행 생성.

Request wizard. Validates the three creation steps (content, visit
date/time, payment) against the service catalog and turns a validated
payload into the ordered request_details rows. Nothing here touches the
database; the service layer persists the result in one transaction.

Steps:
    1. 내용 (Content): items | option + text | text, per ServiceConfig.mode
    2. 방문 일정 (Visit): "YYYY-MM-DD" not in the past, "HH:MM" on a 10-minute grid
    3. 결제 (Payment): one of PAYMENT_METHODS
"""

from dataclasses import dataclass
from datetime import date

from app.constants import (
    KEY_PAYMENT,
    KEY_VISIT_DATE,
    KEY_VISIT_TIME,
    MODE_ITEMS,
    MODE_OPTION,
    PAYMENT_METHODS,
    SERVICE_CATALOG,
    SERVICE_UNAVAILABLE_MESSAGE,
    ServiceConfig,
)
from app.schemas.service_request import ServiceRequestCreate
from app.utils.exceptions import BadRequestError, NotFoundError
from app.utils.pricing import compute_total_from_counts, format_quantity
from app.utils.schedule import is_valid_visit_time, parse_visit_date

VISIT_REQUIRED_MESSAGE: str = "방문 희망 날짜와 시간을 선택해주세요."
PAYMENT_REQUIRED_MESSAGE: str = "결제 방법을 선택해주세요."
LAST_STEP: int = 3


@dataclass
class ValidatedRequest:
    """3단계 검증을 모두 통과한 신청 내용 (Fully validated wizard payload)."""

    config: ServiceConfig
    items: dict[str, int]
    option: str | None
    text: str | None
    visit_date: date
    visit_time: str
    payment_label: str

    @property
    def total_price(self) -> int:
        return compute_total_from_counts(self.items)


def get_service_config(name: str) -> ServiceConfig:
    """카탈로그에서 신청 가능한 서비스 구성을 조회합니다.

    Raises:
        NotFoundError: 알 수 없는 서비스 키 (Unknown service key)
        BadRequestError: 준비 중인 서비스 (Service not yet available)
    """
    config: ServiceConfig | None = SERVICE_CATALOG.get(name)
    if config is None:
        raise NotFoundError("Service not found")
    if not config.available:
        raise BadRequestError(SERVICE_UNAVAILABLE_MESSAGE)
    return config


def validate_item_counts(config: ServiceConfig, items: dict[str, int]) -> dict[str, int]:
    """품목 수량을 검증하고 1개 이상인 품목만 반환합니다.

    Item names must belong to the service's catalog and counts may not be
    negative. Returns the positive counts in catalog order; an empty
    result is rejected with the service's step 1 message.
    """
    for name, count in items.items():
        if name not in config.items:
            raise BadRequestError(f"선택할 수 없는 품목입니다: {name}")
        if count < 0:
            raise BadRequestError("수량은 0개 이상이어야 합니다.")
    selected: dict[str, int] = {
        name: items[name] for name in config.items if items.get(name, 0) > 0
    }
    if not selected:
        raise BadRequestError(config.step1_message)
    return selected


def validate_content(config: ServiceConfig, data: ServiceRequestCreate) -> dict[str, int]:
    """1단계 (Step 1): 서비스 입력 방식별 내용 검증.

    Returns:
        dict[str, int]: 선택된 품목 수량, items 방식이 아니면 빈 dict
    """
    text: str = (data.text or "").strip()
    if config.mode == MODE_ITEMS:
        return validate_item_counts(config, data.items)
    if config.mode == MODE_OPTION:
        if data.option not in config.option_choices or not text:
            raise BadRequestError(config.step1_message)
        return {}
    if config.text_required and not text:
        raise BadRequestError(config.step1_message)
    return {}


def validate_visit(data: ServiceRequestCreate) -> tuple[date, str]:
    """2단계 (Step 2): 방문 희망 날짜/시간 검증."""
    visit_date: date | None = parse_visit_date(data.visit_date)
    if visit_date is None or not is_valid_visit_time(data.visit_time):
        raise BadRequestError(VISIT_REQUIRED_MESSAGE)
    return visit_date, data.visit_time


def validate_payment(data: ServiceRequestCreate) -> str:
    """3단계 (Step 3): 결제 방법 검증, 표시 라벨을 반환합니다."""
    label: str | None = PAYMENT_METHODS.get(data.payment_method or "")
    if label is None:
        raise BadRequestError(PAYMENT_REQUIRED_MESSAGE)
    return label


def validate_step(data: ServiceRequestCreate, step: int) -> int | None:
    """단일 단계를 검증하고 다음 단계 번호를 반환합니다.

    Mirrors the "re-check on next" behaviour of the wizard: only the
    requested step is validated.

    Returns:
        int | None: 다음 단계, 마지막 단계 이후면 None (Next step, None after the last)
    """
    config: ServiceConfig = get_service_config(data.service)
    if step == 1:
        validate_content(config, data)
    elif step == 2:
        validate_visit(data)
    else:
        validate_payment(data)
    return step + 1 if step < LAST_STEP else None


def validate_all(data: ServiceRequestCreate) -> ValidatedRequest:
    """세 단계를 순서대로 모두 검증합니다 (Run steps 1 to 3 in order)."""
    config: ServiceConfig = get_service_config(data.service)
    items: dict[str, int] = validate_content(config, data)
    visit_date, visit_time = validate_visit(data)
    payment_label: str = validate_payment(data)
    text: str | None = (data.text or "").strip() or None
    return ValidatedRequest(
        config=config,
        items=items,
        option=data.option if config.option_key else None,
        text=text,
        visit_date=visit_date,
        visit_time=visit_time,
        payment_label=payment_label,
    )


def build_detail_rows(validated: ValidatedRequest) -> list[tuple[str, str]]:
    """검증된 신청 내용을 (key, value) 상세 행 목록으로 변환합니다.

    Row order: items ("{n}개"), option, free text, visit date, visit
    time, payment. Free text is stored only when given.
    """
    config: ServiceConfig = validated.config
    rows: list[tuple[str, str]] = [
        (name, format_quantity(count)) for name, count in validated.items.items()
    ]
    if config.option_key and validated.option:
        rows.append((config.option_key, validated.option))
    if config.text_key and validated.text:
        rows.append((config.text_key, validated.text))
    rows.append((KEY_VISIT_DATE, validated.visit_date.isoformat()))
    rows.append((KEY_VISIT_TIME, validated.visit_time))
    rows.append((KEY_PAYMENT, validated.payment_label))
    return rows
