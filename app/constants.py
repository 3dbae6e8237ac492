"""서비스 카탈로그 및 도메인 상수 모듈.

Service catalog and domain constants.
Holds the static service catalog (items, content mode, messages),
the service request / inquiry status vocabularies, well-known
request-detail keys, and payment methods. Status values are the
Korean literals stored in the database.
"""

from dataclasses import dataclass


# === 서비스 요청 상태 (Service request status) ===

STATUS_REQUESTED: str = "요청됨"
STATUS_IN_PROGRESS: str = "진행중"
STATUS_COMPLETED: str = "완료"
STATUS_CANCELED: str = "취소"

SERVICE_REQUEST_STATUSES: tuple[str, ...] = (
    STATUS_REQUESTED,
    STATUS_IN_PROGRESS,
    STATUS_COMPLETED,
    STATUS_CANCELED,
)

# 관리자 상태 변경 허용 전이 (Allowed admin transitions: current -> targets)
ALLOWED_TRANSITIONS: dict[str, tuple[str, ...]] = {
    STATUS_REQUESTED: (STATUS_IN_PROGRESS, STATUS_CANCELED),
    STATUS_IN_PROGRESS: (STATUS_COMPLETED, STATUS_CANCELED),
}

# 상태별 타임스탬프 컬럼 (Timestamp column stamped on entering a status)
STATUS_TIMESTAMP_FIELD: dict[str, str] = {
    STATUS_IN_PROGRESS: "working_at",
    STATUS_COMPLETED: "completed_at",
    STATUS_CANCELED: "canceled_at",
}

# 진행 타임라인 단계 라벨, 인덱스 순서 = created/working/completed/canceled
TIMELINE_LABELS: tuple[str, ...] = ("요청됨", "작업 시행 중", "서비스 완료", "취소됨")

# 상태별 안내 문구 (Title/description shown on the request detail)
STATUS_CONFIG: dict[str, dict[str, str]] = {
    STATUS_REQUESTED: {"title": "서비스 요청됨", "description": "요청하신 서비스를 확인하고 있습니다."},
    STATUS_IN_PROGRESS: {"title": "작업 시행 중", "description": "서비스가 현재 진행 중입니다."},
    STATUS_COMPLETED: {"title": "서비스 완료", "description": "서비스가 성공적으로 완료되었습니다."},
    STATUS_CANCELED: {"title": "서비스 취소됨", "description": "요청하신 서비스가 취소되었습니다."},
}


# === 문의 (Inquiry) ===

INQUIRY_CATEGORIES: tuple[str, ...] = ("일반문의", "기술지원", "서비스문의", "기타")
INQUIRY_PRIORITIES: tuple[str, ...] = ("낮음", "보통", "높음")
INQUIRY_STATUSES: tuple[str, ...] = ("접수됨", "처리중", "완료", "보류")
DEFAULT_INQUIRY_CATEGORY: str = "일반문의"
DEFAULT_INQUIRY_PRIORITY: str = "보통"
DEFAULT_INQUIRY_STATUS: str = "접수됨"


# === 프로필 역할 / 알림 유형 (Profile roles / notification types) ===

ROLE_USER: str = "user"
ROLE_ADMIN: str = "admin"

NOTIFICATION_STATUS_CHANGE: str = "status_change"
NOTIFICATION_INQUIRY_RESPONSE: str = "inquiry_response"


# === 요청 상세 키 (Request detail keys) ===

KEY_EXTRA: str = "추가 요청사항"
KEY_ALARM_TYPE: str = "경보기 종류"
KEY_CONSTRUCTION_TYPE: str = "시공 종류"
KEY_GAS_TYPE: str = "가스 종류"
KEY_VISIT_DATE: str = "방문 희망 날짜"
KEY_VISIT_TIME: str = "방문 희망 시간"
KEY_PAYMENT: str = "결제 방법"
KEY_INQUIRY_CONTENT: str = "문의내용"

# 선택형 항목 키 (Categorical detail keys)
CATEGORICAL_KEYS: frozenset[str] = frozenset({KEY_ALARM_TYPE, KEY_CONSTRUCTION_TYPE, KEY_GAS_TYPE})

# 품목이 아닌 예약 키, 가격 합산과 품목 교체에서 제외
# Reserved keys: never priced, never replaced as item rows
RESERVED_DETAIL_KEYS: frozenset[str] = frozenset({
    KEY_EXTRA,
    KEY_VISIT_DATE,
    KEY_VISIT_TIME,
    KEY_PAYMENT,
    KEY_INQUIRY_CONTENT,
}) | CATEGORICAL_KEYS


# === 결제 방법 (Payment methods) ===

PAYMENT_METHODS: dict[str, str] = {
    "cash": "현금 결제",
    "card": "카드 결제",
    "transfer": "계좌 이체",
    "later": "추후 협의",
}


# === 단가표 (Unit price table keyed by item label) ===

PRICE_TABLE: dict[str, int] = {
    "(일반화구) 1열 1구": 19000,
    "(일반화구) 2열 2구": 33000,
    "(일반화구) 3열 3구": 75000,
    "(시그마버너) 1열 1구": 27000,
    "(시그마버너) 2열 2구": 40000,
    "(시그마버너) 3열 3구": 140000,
    "8미리 밸브교체": 15000,
    "공기조절기 교체": 15000,
    "일반형 가스 경보기": 35000,
    "디지털 가스 경보기": 55000,
    "무선 가스 경보기": 75000,
    "배관 철거": 15000,
    "가스누출점검(기본출장비)": 30000,
}


# === 서비스 카탈로그 (Service catalog) ===

MODE_ITEMS: str = "items"
MODE_OPTION: str = "option"
MODE_TEXT: str = "text"


@dataclass(frozen=True)
class ServiceConfig:
    """서비스별 신청 구성.

    Per-service request configuration driving wizard step 1 and editing.

    Attributes:
        name: 서비스 키 (Catalog key stored in services.name)
        display_name: 표시 이름 (Korean display name)
        mode: 1단계 입력 방식 (items | option | text)
        items: 선택 가능한 품목 라벨 (Selectable item labels, priced via PRICE_TABLE)
        option_key: 선택형 상세 키 (Detail key for the single-choice option)
        option_choices: 선택지 목록 (Allowed option values)
        text_key: 자유 입력 상세 키 (Detail key for free text)
        text_required: 자유 입력 필수 여부 (Whether free text is mandatory)
        step1_message: 1단계 검증 실패 메시지 (Validation message for step 1)
        available: 신청 가능 여부 (Whether requests can be filed)
    """

    name: str
    display_name: str
    mode: str = MODE_ITEMS
    items: tuple[str, ...] = ()
    option_key: str | None = None
    option_choices: tuple[str, ...] = ()
    text_key: str | None = KEY_EXTRA
    text_required: bool = False
    step1_message: str = "최소 1개 이상의 품목을 선택해주세요."
    available: bool = True


SERVICE_CATALOG: dict[str, ServiceConfig] = {
    "burner": ServiceConfig(
        name="burner",
        display_name="화구 교체",
        items=(
            "(일반화구) 1열 1구",
            "(일반화구) 2열 2구",
            "(일반화구) 3열 3구",
            "(시그마버너) 1열 1구",
            "(시그마버너) 2열 2구",
            "(시그마버너) 3열 3구",
        ),
    ),
    "valve": ServiceConfig(
        name="valve",
        display_name="밸브 교체",
        items=("8미리 밸브교체", "공기조절기 교체"),
    ),
    "alarm": ServiceConfig(
        name="alarm",
        display_name="경보기 교체",
        items=("일반형 가스 경보기", "디지털 가스 경보기", "무선 가스 경보기"),
    ),
    "pipe": ServiceConfig(
        name="pipe",
        display_name="배관 철거",
        mode=MODE_OPTION,
        option_key=KEY_GAS_TYPE,
        option_choices=("LPG", "LNG(도시가스)"),
        text_required=True,
        step1_message="가스 종류를 선택하고 요청사항을 입력해주세요.",
    ),
    "gas": ServiceConfig(
        name="gas",
        display_name="가스누출 검사",
        mode=MODE_TEXT,
        text_required=True,
        step1_message="추가 요청사항을 입력해주세요.",
    ),
    "quote": ServiceConfig(
        name="quote",
        display_name="시공견적 문의",
        mode=MODE_TEXT,
        text_key=KEY_INQUIRY_CONTENT,
        text_required=True,
        step1_message="문의내용을 입력해주세요.",
    ),
    "contract": ServiceConfig(
        name="contract",
        display_name="정기계약 이용권",
        mode=MODE_TEXT,
        text_key=None,
        available=False,
    ),
}

# 표시 이름 맵, 고객센터 탭 포함 (Display names, including the support tab)
SERVICE_NAME_MAP: dict[str, str] = {
    **{name: config.display_name for name, config in SERVICE_CATALOG.items()},
    "center": "고객센터",
}

SERVICE_UNAVAILABLE_MESSAGE: str = "서비스 준비 중입니다."
