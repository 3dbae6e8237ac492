"""휴대폰 번호 정규화 유틸리티.

Phone number helpers. Profiles store numbers in international form
("+82 1012345678"); users type the domestic form ("010-1234-5678").
"""

import re

# 국내 휴대폰 번호 형식: 01[016789]로 시작하는 11자리
_MOBILE_PATTERN = re.compile(r"^01[016789]\d{8}$")
_NON_DIGIT = re.compile(r"\D")

INVALID_PHONE_MESSAGE: str = "올바른 휴대폰 번호를 입력하세요."


def digits_only(phone: str) -> str:
    """숫자 이외 문자 제거 (Strip every non-digit character)."""
    return _NON_DIGIT.sub("", phone)


def is_valid_mobile(phone: str) -> bool:
    """국내 휴대폰 번호 여부를 확인합니다.

    Args:
        phone: 하이픈/공백이 섞여 있어도 되는 입력값 (Raw user input)

    Returns:
        bool: 01[016789]로 시작하는 11자리면 True
    """
    return bool(_MOBILE_PATTERN.match(digits_only(phone)))


def to_international(phone: str) -> str:
    """010 번호를 "+82 10XXXXXXXX" 형태로 변환합니다.

    Convert a domestic 010 number into the stored international form.
    Any input whose digits do not start with "010" is returned unchanged.

    Example:
        to_international("010-1234-5678")  # "+82 1012345678"
        to_international("+82 1012345678")  # unchanged
    """
    cleaned: str = digits_only(phone)
    if cleaned.startswith("010"):
        return f"+82 {cleaned[1:]}"
    return phone


def format_phone_number(phone: str | None) -> str:
    """저장된 번호를 "010-1234-5678" 형태로 표시합니다.

    Render a stored (international or domestic) number for display.
    Numbers that are not 11 digits after normalization are returned unchanged.
    """
    if not phone:
        return ""
    domestic: str = phone.replace("+82 ", "0")
    cleaned: str = digits_only(domestic)
    if len(cleaned) == 11:
        return f"{cleaned[:3]}-{cleaned[3:7]}-{cleaned[7:]}"
    return phone
