"""서비스 요청 서비스: 신청, 조회, 상세 수정, 취소, 관리자 상태 변경.

Service Request Service. Business logic for the request lifecycle:
atomic creation from the wizard, owner list/detail views, in-place
detail editing while 요청됨, cancellation, admin status transitions with
owner notification, and the admin Excel export.

Status lifecycle:
    요청됨 -> 진행중 -> 완료
    요청됨 -> 취소 (사용자 또는 관리자, user or admin)
    진행중 -> 취소 (관리자만, admin only)
"""

from datetime import datetime, timezone
from io import BytesIO
from typing import Any, Sequence
from uuid import UUID

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from sqlalchemy.ext.asyncio import AsyncSession

from app.constants import (
    ALLOWED_TRANSITIONS,
    CATEGORICAL_KEYS,
    KEY_ALARM_TYPE,
    KEY_CONSTRUCTION_TYPE,
    KEY_EXTRA,
    KEY_GAS_TYPE,
    KEY_INQUIRY_CONTENT,
    KEY_PAYMENT,
    KEY_VISIT_DATE,
    KEY_VISIT_TIME,
    RESERVED_DETAIL_KEYS,
    SERVICE_CATALOG,
    SERVICE_NAME_MAP,
    SERVICE_REQUEST_STATUSES,
    STATUS_CANCELED,
    STATUS_CONFIG,
    STATUS_REQUESTED,
    STATUS_TIMESTAMP_FIELD,
    ServiceConfig,
)
from app.models.service import RequestDetail, Service, ServiceRequest
from app.models.store import Store
from app.models.user import Profile
from app.repositories.service_request_repository import service_request_repository
from app.repositories.store_repository import store_repository
from app.schemas.service_request import (
    AdminServiceRequestDetailResponse,
    DetailEditRequest,
    ServiceRequestCreate,
    ServiceRequestDetailResponse,
    ServiceRequestListItem,
    WizardValidateRequest,
    WizardValidateResponse,
)
from app.services import request_wizard
from app.services.change_feed import change_feed
from app.services.notification_service import notification_service
from app.utils.exceptions import BadRequestError, NotFoundError
from app.utils.format import display_id, format_datetime, format_price, format_relative_date
from app.utils.phone import format_phone_number
from app.utils.pricing import (
    compute_total_from_counts,
    compute_total_from_details,
    format_quantity,
    priced_items,
)
from app.utils.schedule import is_valid_visit_time, parse_date_text
from app.utils.timeline import build_steps

SERVICE_REQUESTS_TABLE: str = "service_requests"

CREATED_MESSAGE: str = "서비스 신청이 완료되었습니다."
SAVED_MESSAGE: str = "변경사항이 저장되었습니다."
CANCELED_MESSAGE: str = "주문이 취소되었습니다."
EDIT_VISIT_REQUIRED_MESSAGE: str = "방문 날짜와 시간을 선택해주세요."


def _service_name(request: ServiceRequest) -> str:
    return request.service.name if request.service else ""


def _display_name(request: ServiceRequest) -> str:
    name: str = _service_name(request)
    return SERVICE_NAME_MAP.get(name, name)


class ServiceRequestService:
    """서비스 요청 비즈니스 로직을 처리하는 서비스.

    Service handling service request business logic.
    """

    # --- 응답 변환 (Response builders) ---

    def build_list_item(self, request: ServiceRequest) -> ServiceRequestListItem:
        """목록 항목 응답 생성 (Build one list row)."""
        total: int = compute_total_from_details(request.details)
        return ServiceRequestListItem(
            id=str(request.id),
            display_id=display_id(request.id),
            service=_service_name(request),
            service_display_name=_display_name(request),
            status=request.status,
            store_name=request.store.name if request.store else None,
            relative_date=format_relative_date(request.created_at),
            created_at=request.created_at,
            total_price=total,
            total_price_display=format_price(total),
        )

    def build_detail(self, request: ServiceRequest) -> dict[str, Any]:
        """상세 응답 데이터를 생성합니다.

        Build the detail payload: raw rows, priced items and total,
        reserved fields, the 4-step timeline and the edit/cancel flags.
        """
        values: dict[str, str] = {d.key: d.value for d in request.details}
        total: int = compute_total_from_details(request.details)
        timeline: dict = build_steps(request.status, request.timestamps)
        status_info: dict[str, str] = STATUS_CONFIG.get(request.status, {"title": request.status, "description": ""})
        is_requested: bool = request.status == STATUS_REQUESTED
        return {
            "id": str(request.id),
            "display_id": display_id(request.id),
            "service": _service_name(request),
            "service_display_name": _display_name(request),
            "status": request.status,
            "status_title": status_info["title"],
            "status_description": status_info["description"],
            "store_id": str(request.store_id) if request.store_id else None,
            "store_name": request.store.name if request.store else None,
            "store_address": request.store.address if request.store else None,
            "details": [{"key": d.key, "value": d.value} for d in request.details],
            "items": priced_items(request.details),
            "extras": {k: values[k] for k in (KEY_EXTRA, KEY_INQUIRY_CONTENT) if k in values},
            "categories": {k: v for k, v in values.items() if k in CATEGORICAL_KEYS},
            "visit_date": values.get(KEY_VISIT_DATE),
            "visit_time": values.get(KEY_VISIT_TIME),
            "payment_method": values.get(KEY_PAYMENT),
            "total_price": total,
            "total_price_display": format_price(total),
            "active_step": timeline["active_index"],
            "timeline": timeline["steps"],
            "can_edit": is_requested,
            "can_cancel": is_requested,
            "created_at": request.created_at,
            "updated_at": request.updated_at,
        }

    async def _get_owned(self, db: AsyncSession, request_id: UUID, user_id: UUID) -> ServiceRequest:
        request: ServiceRequest | None = await service_request_repository.get_detail(db, request_id, user_id)
        if request is None:
            raise NotFoundError("Service request not found")
        return request

    # --- 사용자 조회 (Owner reads) ---

    async def list_my_requests(
        self,
        db: AsyncSession,
        user: Profile,
        service: str | None = None,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[list[ServiceRequestListItem], int]:
        """내 서비스 요청 목록 (최신순, 서비스 필터 가능)."""
        requests, total = await service_request_repository.list_for_user(
            db, user.id, service, page, per_page
        )
        return [self.build_list_item(r) for r in requests], total

    async def get_my_request(
        self,
        db: AsyncSession,
        user: Profile,
        request_id: UUID,
    ) -> ServiceRequestDetailResponse:
        request: ServiceRequest = await self._get_owned(db, request_id, user.id)
        return ServiceRequestDetailResponse(**self.build_detail(request))

    # --- 신청 (Creation) ---

    def validate_step(self, data: WizardValidateRequest) -> WizardValidateResponse:
        """신청 단계 하나를 검증합니다 (Validate a single wizard step)."""
        next_step: int | None = request_wizard.validate_step(data, data.step)
        total: int = compute_total_from_counts(
            {name: count for name, count in data.items.items() if count > 0}
        )
        return WizardValidateResponse(
            step=data.step,
            next_step=next_step,
            total_price=total,
            total_price_display=format_price(total),
        )

    async def create_request(
        self,
        db: AsyncSession,
        user: Profile,
        data: ServiceRequestCreate,
    ) -> ServiceRequest:
        """서비스 요청을 생성합니다.

        Re-run all three wizard steps, then create the parent request and
        its detail rows together; a failure anywhere leaves nothing behind
        because the caller commits once.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user: 요청자 프로필 (Requesting profile)
            data: 신청 내용 (Wizard payload)

        Returns:
            ServiceRequest: 생성된 요청 (Created request)

        Raises:
            BadRequestError: 단계 검증 실패 또는 준비 중인 서비스 (Step failure / unavailable service)
            NotFoundError: 서비스 또는 가게를 찾을 수 없음 (Unknown service or store not owned)
        """
        validated: request_wizard.ValidatedRequest = request_wizard.validate_all(data)

        store_id: UUID | None = data.store_id or user.default_store_id
        store: Store | None = None
        if store_id is not None:
            store = await store_repository.get_owned(db, store_id, user.id)
            if store is None:
                raise NotFoundError("Store not found")

        service: Service | None = await service_request_repository.get_service_by_name(db, validated.config.name)
        if service is None:
            raise NotFoundError("Service not found")

        rows: list[tuple[str, str]] = request_wizard.build_detail_rows(validated)
        request: ServiceRequest = ServiceRequest(
            user_id=user.id,
            store_id=store.id if store else None,
            service_id=service.id,
            status=STATUS_REQUESTED,
            details=[
                RequestDetail(key=key, value=value, sort_order=index)
                for index, (key, value) in enumerate(rows)
            ],
        )
        db.add(request)
        await db.flush()

        change_feed.stage(
            db,
            SERVICE_REQUESTS_TABLE,
            "INSERT",
            {
                "id": str(request.id),
                "user_id": str(user.id),
                "store_id": str(request.store_id) if request.store_id else None,
                "store_name": store.name if store else None,
                "service": service.name,
                "service_display_name": validated.config.display_name,
                "status": request.status,
                "total_price": validated.total_price,
            },
        )
        return request

    # --- 수정 / 취소 (Edit / cancel) ---

    async def edit_details(
        self,
        db: AsyncSession,
        user: Profile,
        request_id: UUID,
        data: DetailEditRequest,
    ) -> ServiceRequest:
        """요청 상세를 수정합니다 (요청됨 상태, 소유자만).

        Edit a request in place. Every check runs before the first write:
            (a) 품목 카탈로그가 있으면 1개 이상 선택 (At least one item when the service has items)
            (b) 방문 날짜/시간 필수 (Visit date and time required)
        Then priced rows are replaced by the new item rows, and reserved
        rows are overwritten only where a row for that key already exists.
        """
        request: ServiceRequest = await self._get_owned(db, request_id, user.id)
        if request.status != STATUS_REQUESTED:
            raise BadRequestError("요청됨 상태에서만 수정할 수 있습니다.")

        config: ServiceConfig | None = SERVICE_CATALOG.get(_service_name(request))
        catalog_items: tuple[str, ...] = config.items if config else ()
        selected: dict[str, int] = {}
        if catalog_items:
            selected = request_wizard.validate_item_counts(config, data.items)
        elif data.items:
            raise BadRequestError("품목을 선택할 수 없는 서비스입니다.")

        visit_date = parse_date_text(data.visit_date)
        if visit_date is None or not is_valid_visit_time(data.visit_time):
            raise BadRequestError(EDIT_VISIT_REQUIRED_MESSAGE)

        # 품목 행 교체: 삭제를 먼저 flush하여 (request_id, key) 유니크 충돌 방지
        # Replace priced rows; flush deletes first so (request_id, key) stays unique
        for detail in [d for d in request.details if d.key not in RESERVED_DETAIL_KEYS]:
            request.details.remove(detail)
        await db.flush()

        next_order: int = max((d.sort_order for d in request.details), default=-1) + 1
        for offset, (name, count) in enumerate(selected.items()):
            request.details.append(
                RequestDetail(key=name, value=format_quantity(count), sort_order=next_order + offset)
            )

        existing: dict[str, RequestDetail] = {d.key: d for d in request.details}
        updates: dict[str, str | None] = {
            KEY_VISIT_DATE: visit_date.isoformat(),
            KEY_VISIT_TIME: data.visit_time,
            KEY_EXTRA: data.extra_request,
            KEY_ALARM_TYPE: data.alarm_type or None,
            KEY_CONSTRUCTION_TYPE: data.construction_type or None,
            KEY_GAS_TYPE: data.gas_type or None,
        }
        for key, value in updates.items():
            if value is not None and key in existing:
                existing[key].value = value

        request.updated_at = datetime.now(timezone.utc)
        await db.flush()
        return request

    async def cancel_request(
        self,
        db: AsyncSession,
        user: Profile,
        request_id: UUID,
    ) -> ServiceRequest:
        """요청을 취소합니다 (요청됨 상태에서만).

        Cancel an owned request; stamps canceled_at.
        """
        request: ServiceRequest = await self._get_owned(db, request_id, user.id)
        if request.status != STATUS_REQUESTED:
            raise BadRequestError("요청됨 상태에서만 취소할 수 있습니다.")
        now: datetime = datetime.now(timezone.utc)
        request.status = STATUS_CANCELED
        request.canceled_at = now
        request.updated_at = now
        await db.flush()
        return request

    # --- 관리자 (Admin) ---

    def build_admin_list_item(self, request: ServiceRequest) -> dict[str, Any]:
        return {
            **self.build_list_item(request).model_dump(),
            "user_id": str(request.user_id),
            "user_phone": format_phone_number(request.profile.phone if request.profile else None),
            "store_address": request.store.address if request.store else None,
        }

    async def admin_list(
        self,
        db: AsyncSession,
        status: str | None = None,
        search: str | None = None,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[list[dict[str, Any]], int]:
        """관리자 요청 목록 (상태 필터, 가게명/서비스명 검색)."""
        if status and status not in SERVICE_REQUEST_STATUSES:
            raise BadRequestError(f"Invalid status: {status}")
        requests, total = await service_request_repository.search_admin(
            db, status, search, page, per_page
        )
        return [self.build_admin_list_item(r) for r in requests], total

    async def admin_get(
        self,
        db: AsyncSession,
        request_id: UUID,
    ) -> AdminServiceRequestDetailResponse:
        request: ServiceRequest | None = await service_request_repository.get_detail(db, request_id)
        if request is None:
            raise NotFoundError("Service request not found")
        return AdminServiceRequestDetailResponse(
            **self.build_detail(request),
            user_id=str(request.user_id),
            user_phone=format_phone_number(request.profile.phone if request.profile else None),
            allowed_statuses=list(ALLOWED_TRANSITIONS.get(request.status, ())),
        )

    async def change_status(
        self,
        db: AsyncSession,
        request_id: UUID,
        new_status: str,
    ) -> ServiceRequest:
        """관리자 상태 변경.

        Move a request along the lifecycle, stamp the matching timestamp
        and notify the owner.

        Raises:
            BadRequestError: 알 수 없는 상태 또는 허용되지 않은 전이 (Unknown status / disallowed transition)
            NotFoundError: 요청 없음 (Request not found)
        """
        if new_status not in SERVICE_REQUEST_STATUSES:
            raise BadRequestError(f"Invalid status: {new_status}")
        request: ServiceRequest | None = await service_request_repository.get_detail(db, request_id)
        if request is None:
            raise NotFoundError("Service request not found")
        if new_status not in ALLOWED_TRANSITIONS.get(request.status, ()):
            raise BadRequestError(f"'{request.status}' 상태에서 '{new_status}'(으)로 변경할 수 없습니다.")

        now: datetime = datetime.now(timezone.utc)
        request.status = new_status
        setattr(request, STATUS_TIMESTAMP_FIELD[new_status], now)
        request.updated_at = now
        await db.flush()

        await notification_service.create_for_status_change(
            db, request.user_id, _display_name(request), new_status
        )
        return request

    async def export_excel(
        self,
        db: AsyncSession,
        status: str | None = None,
        search: str | None = None,
    ) -> bytes:
        """관리자 요청 목록을 엑셀로 내보냅니다 (Export matching requests to .xlsx)."""
        requests: Sequence[ServiceRequest] = await service_request_repository.list_for_export(db, status, search)

        wb = Workbook()
        ws = wb.active
        ws.title = "Service Requests"

        headers: list[str] = [
            "주문번호", "서비스", "상태", "가게", "주소", "연락처",
            "방문 희망 날짜", "방문 희망 시간", "결제 방법", "합계", "신청일시",
        ]
        header_font = Font(bold=True, color="FFFFFF", size=11)
        header_fill = PatternFill(start_color="F97316", end_color="F97316", fill_type="solid")
        for col_idx, header in enumerate(headers, 1):
            cell = ws.cell(row=1, column=col_idx, value=header)
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = Alignment(horizontal="center")

        for request in requests:
            values: dict[str, str] = {d.key: d.value for d in request.details}
            ws.append([
                display_id(request.id),
                _display_name(request),
                request.status,
                request.store.name if request.store else "",
                request.store.address if request.store else "",
                format_phone_number(request.profile.phone if request.profile else None),
                values.get(KEY_VISIT_DATE, ""),
                values.get(KEY_VISIT_TIME, ""),
                values.get(KEY_PAYMENT, ""),
                compute_total_from_details(request.details),
                format_datetime(request.created_at),
            ])

        widths: list[int] = [12, 14, 8, 20, 36, 16, 14, 12, 12, 12, 18]
        for i, w in enumerate(widths, 1):
            ws.column_dimensions[ws.cell(row=1, column=i).column_letter].width = w

        buffer = BytesIO()
        wb.save(buffer)
        return buffer.getvalue()


# 싱글턴 인스턴스 (Singleton instance)
service_request_service: ServiceRequestService = ServiceRequestService()
