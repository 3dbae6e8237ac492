"""서비스 카탈로그 및 서비스 요청 관련 Pydantic 스키마 정의.

Service catalog and service request Pydantic request/response schema
definitions: wizard payloads, detail edits, admin status changes and
the read models returned by the detail/list endpoints.
"""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field


# === 카탈로그 (Catalog) ===

class CatalogItem(BaseModel):
    """신청 가능한 품목 (Selectable item with its unit price)."""

    name: str
    unit_price: int
    price_display: str  # "19,000원"


class ServiceCatalogResponse(BaseModel):
    """서비스 카탈로그 항목 응답 스키마.

    Attributes:
        name: 서비스 키 (burner, valve, ...)
        display_name: 표시 이름 (화구 교체 ...)
        available: 신청 가능 여부 (False for contract)
        mode: 1단계 입력 방식 (items | option | text)
        items: 품목과 단가 (Items with unit prices, items mode only)
        option_key: 선택형 상세 키 (option mode only)
        option_choices: 선택지 (option mode only)
        text_key: 자유 입력 상세 키 (Free-text detail key)
        text_required: 자유 입력 필수 여부
    """

    name: str
    display_name: str
    available: bool
    mode: str
    items: list[CatalogItem]
    option_key: str | None
    option_choices: list[str]
    text_key: str | None
    text_required: bool


class PaymentMethodResponse(BaseModel):
    code: str  # cash | card | transfer | later
    label: str  # 현금 결제 ...


class ScheduleOptionsResponse(BaseModel):
    """방문 일정 선택지 응답 스키마 (Day/hour/minute picker options)."""

    year: int
    month: int
    days_in_month: int
    days: list[int]
    hours: list[str]
    minutes: list[str]


# === 신청 (Wizard) ===

class ServiceRequestCreate(BaseModel):
    """서비스 신청 요청 스키마 (3단계 입력 전체).

    Full wizard payload. Step 1 uses items, option and text depending on
    the service's mode; step 2 the visit date/time; step 3 the payment.

    Attributes:
        service: 서비스 키 (Catalog key)
        items: {품목 라벨: 수량} (Item label to quantity, items mode)
        option: 선택형 값 (Chosen option, option mode)
        text: 자유 입력 (Extra request or inquiry content)
        visit_date: 방문 희망 날짜 "YYYY-MM-DD"
        visit_time: 방문 희망 시간 "HH:MM"
        payment_method: 결제 방법 코드 (cash | card | transfer | later)
        store_id: 가게 UUID, 생략 시 기본 가게 (Defaults to the profile's default store)
    """

    service: str
    items: dict[str, int] = Field(default_factory=dict)
    option: str | None = None
    text: str | None = None
    visit_date: str | None = None
    visit_time: str | None = None
    payment_method: str | None = None
    store_id: UUID | None = None


class WizardValidateRequest(ServiceRequestCreate):
    """단계별 검증 요청 스키마 (Validate one wizard step)."""

    step: Literal[1, 2, 3]


class WizardValidateResponse(BaseModel):
    step: int
    next_step: int | None  # 마지막 단계면 None (None after the final step)
    total_price: int
    total_price_display: str


class ServiceRequestCreatedResponse(BaseModel):
    id: str
    display_id: str
    message: str


# === 수정 / 상태 변경 (Edit / status change) ===

class DetailEditRequest(BaseModel):
    """요청 상세 수정 요청 스키마.

    Items replace every priced row. The remaining fields only overwrite
    rows that already exist on the request; categorical values are
    skipped when empty.

    Attributes:
        items: {품목 라벨: 수량}, 0개 품목은 저장하지 않음 (Zero counts are dropped)
        visit_date: 방문 희망 날짜 "YYYY-MM-DD"
        visit_time: 방문 희망 시간 "HH:MM"
        extra_request: 추가 요청사항 (Extra request text)
        alarm_type: 경보기 종류
        construction_type: 시공 종류
        gas_type: 가스 종류
    """

    items: dict[str, int] = Field(default_factory=dict)
    visit_date: str | None = None
    visit_time: str | None = None
    extra_request: str | None = None
    alarm_type: str | None = None
    construction_type: str | None = None
    gas_type: str | None = None


class StatusUpdateRequest(BaseModel):
    status: str  # 요청됨 | 진행중 | 완료 | 취소


# === 응답 (Read models) ===

class ServiceRequestListItem(BaseModel):
    """내 서비스 목록 항목."""

    id: str
    display_id: str
    service: str
    service_display_name: str
    status: str
    store_name: str | None
    relative_date: str  # 오늘 | 어제 | YYYY-MM-DD
    created_at: datetime
    total_price: int
    total_price_display: str


class DetailRow(BaseModel):
    key: str
    value: str


class PricedItem(BaseModel):
    name: str
    quantity: int
    unit_price: int
    subtotal: int


class TimelineStep(BaseModel):
    label: str
    date: str | None  # MM/DD
    time: str | None  # HH:MM
    completed: bool
    current: bool


class ServiceRequestDetailResponse(BaseModel):
    """서비스 요청 상세 응답 스키마.

    Attributes:
        details: 상세 행 전체, 저장 순서 (Every detail row in stored order)
        items: 가격이 매겨진 품목 (Priced item rows)
        extras: 예약 키 중 자유 입력 값 (Free-text reserved rows)
        categories: 선택형 값 (Categorical rows: alarm/construction/gas type)
        active_step: 타임라인 활성 단계, 0..3 또는 -1
        can_edit / can_cancel: 요청됨 상태에서만 True
    """

    id: str
    display_id: str
    service: str
    service_display_name: str
    status: str
    status_title: str
    status_description: str
    store_id: str | None
    store_name: str | None
    store_address: str | None
    details: list[DetailRow]
    items: list[PricedItem]
    extras: dict[str, str]
    categories: dict[str, str]
    visit_date: str | None
    visit_time: str | None
    payment_method: str | None
    total_price: int
    total_price_display: str
    active_step: int
    timeline: list[TimelineStep]
    can_edit: bool
    can_cancel: bool
    created_at: datetime
    updated_at: datetime


class AdminServiceRequestDetailResponse(ServiceRequestDetailResponse):
    """관리자용 상세, 소유자 정보 포함 (Adds the owner)."""

    user_id: str
    user_phone: str
    allowed_statuses: list[str]  # 현재 상태에서 전이 가능한 상태 (Allowed next statuses)
