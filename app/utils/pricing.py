"""요청 상세 가격 계산 유틸리티.

Single shared price lookup for request details. A detail row whose key
is an item label contributes quantity x unit price; reserved keys
(visit date/time, payment, free text, categorical fields) never do.
"""

import re
from collections.abc import Iterable, Mapping
from typing import Protocol

from app.constants import PRICE_TABLE, RESERVED_DETAIL_KEYS

_DIGITS = re.compile(r"\d+")


class DetailLike(Protocol):
    key: str
    value: str


def unit_price(item: str) -> int:
    """품목 단가 조회, 미등록 품목은 0 (Unknown items cost 0)."""
    return PRICE_TABLE.get(item, 0)


def parse_quantity(value: str | None) -> int:
    """"2개" 같은 값에서 수량을 추출합니다.

    The digits inside the value are the quantity; a value with no digits
    counts as 1.
    """
    if not value:
        return 1
    match = _DIGITS.search(value)
    return int(match.group()) if match else 1


def format_quantity(count: int) -> str:
    """수량을 상세 값 형식으로 변환 ("2개")."""
    return f"{count}개"


def is_priced_key(key: str) -> bool:
    return key not in RESERVED_DETAIL_KEYS


def compute_total_from_counts(counts: Mapping[str, int]) -> int:
    """품목별 수량 맵의 총액을 계산합니다.

    Args:
        counts: {품목 라벨: 수량} (Item label to quantity)

    Returns:
        int: Σ 수량 x 단가, 예약 키와 미등록 품목은 0으로 계산
    """
    return sum(
        qty * unit_price(item)
        for item, qty in counts.items()
        if is_priced_key(item)
    )


def priced_items(details: Iterable[DetailLike]) -> list[dict]:
    """상세 행 중 가격 대상 행을 품목 정보로 변환합니다.

    Turn priced detail rows into item dicts with quantity, unit price and subtotal.
    """
    items: list[dict] = []
    for detail in details:
        if not is_priced_key(detail.key):
            continue
        quantity: int = parse_quantity(detail.value)
        price: int = unit_price(detail.key)
        items.append({
            "name": detail.key,
            "quantity": quantity,
            "unit_price": price,
            "subtotal": quantity * price,
        })
    return items


def compute_total_from_details(details: Iterable[DetailLike]) -> int:
    """저장된 상세 행들의 총액 (Total over stored detail rows)."""
    return sum(item["subtotal"] for item in priced_items(details))
