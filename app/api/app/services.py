"""앱 서비스 카탈로그 라우터.

App Catalog Router. Service catalog, payment methods and the visit
schedule picker options. Fixed paths are declared before ``/{name}``.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_current_user
from app.models.user import Profile
from app.schemas.service_request import (
    PaymentMethodResponse,
    ScheduleOptionsResponse,
    ServiceCatalogResponse,
)
from app.services.catalog_service import catalog_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[ServiceCatalogResponse])
async def list_services(
    current_user: Annotated[Profile, Depends(get_current_user)],
) -> list[ServiceCatalogResponse]:
    """서비스 카탈로그 목록 (Catalog entries with unit prices)."""
    return catalog_service.list_services()


@router.get("/payment-methods", response_model=list[PaymentMethodResponse])
async def list_payment_methods(
    current_user: Annotated[Profile, Depends(get_current_user)],
) -> list[PaymentMethodResponse]:
    return catalog_service.payment_methods()


@router.get("/schedule-options", response_model=ScheduleOptionsResponse)
async def get_schedule_options(
    current_user: Annotated[Profile, Depends(get_current_user)],
    year: Annotated[int | None, Query(ge=2000, le=2100)] = None,
    month: Annotated[int | None, Query(ge=1, le=12)] = None,
) -> ScheduleOptionsResponse:
    """방문 일정 선택지 (해당 월의 일자, 시, 10분 단위 분).

    Day/hour/minute picker options for a month; defaults to this month.
    """
    return catalog_service.schedule_options(year, month)


@router.get("/{name}", response_model=ServiceCatalogResponse)
async def get_service(
    name: str,
    current_user: Annotated[Profile, Depends(get_current_user)],
) -> ServiceCatalogResponse:
    return catalog_service.get_service(name)
