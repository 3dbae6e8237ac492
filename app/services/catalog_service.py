"""서비스 카탈로그 조회 서비스.

Catalog Service. Read-only views over the static service catalog,
payment methods and visit schedule picker options.
"""

from datetime import date

from app.constants import PAYMENT_METHODS, SERVICE_CATALOG, ServiceConfig
from app.schemas.service_request import (
    CatalogItem,
    PaymentMethodResponse,
    ScheduleOptionsResponse,
    ServiceCatalogResponse,
)
from app.utils.exceptions import BadRequestError, NotFoundError
from app.utils.format import format_price
from app.utils.pricing import unit_price
from app.utils.schedule import local_today, schedule_options


class CatalogService:
    """카탈로그 조회 서비스 (Catalog read service)."""

    def to_response(self, config: ServiceConfig) -> ServiceCatalogResponse:
        return ServiceCatalogResponse(
            name=config.name,
            display_name=config.display_name,
            available=config.available,
            mode=config.mode,
            items=[
                CatalogItem(
                    name=item,
                    unit_price=unit_price(item),
                    price_display=format_price(unit_price(item)),
                )
                for item in config.items
            ],
            option_key=config.option_key,
            option_choices=list(config.option_choices),
            text_key=config.text_key,
            text_required=config.text_required,
        )

    def list_services(self) -> list[ServiceCatalogResponse]:
        return [self.to_response(config) for config in SERVICE_CATALOG.values()]

    def get_service(self, name: str) -> ServiceCatalogResponse:
        config: ServiceConfig | None = SERVICE_CATALOG.get(name)
        if config is None:
            raise NotFoundError("Service not found")
        return self.to_response(config)

    def payment_methods(self) -> list[PaymentMethodResponse]:
        return [PaymentMethodResponse(code=code, label=label) for code, label in PAYMENT_METHODS.items()]

    def schedule_options(self, year: int | None = None, month: int | None = None) -> ScheduleOptionsResponse:
        """방문 일정 선택지, 기본값은 현지 기준 이번 달.

        Picker options for a month; defaults to the current local month.
        """
        today: date = local_today()
        year = year or today.year
        month = month or today.month
        if not 1 <= month <= 12:
            raise BadRequestError("month must be between 1 and 12")
        return ScheduleOptionsResponse(**schedule_options(year, month))


# 싱글턴 인스턴스 (Singleton instance)
catalog_service: CatalogService = CatalogService()
