"""SMS 발송 유틸리티 (인증번호 문자 발송).

SMS sender. Posts ``{to, from, text}`` to the configured gateway with a
bearer key. When no gateway is configured the message is only logged,
so local development works without credentials; the OTP code then goes
to the DEBUG log.
"""

import logging

import httpx

from app.config import settings
from app.utils.exceptions import UpstreamError

logger = logging.getLogger(__name__)

OTP_MESSAGE_TEMPLATE: str = "[우리동네가스] 인증번호: {code}"


def _mask(phone: str) -> str:
    return f"{phone[:-4]}****" if len(phone) > 4 else "****"


def is_configured() -> bool:
    return bool(settings.SMS_API_URL and settings.SMS_API_KEY)


async def send_sms(
    to: str,
    text: str,
    transport: httpx.AsyncBaseTransport | None = None,
) -> bool:
    """문자를 발송합니다.

    Send one text message through the gateway.

    Args:
        to: 수신 번호, 국내 형식 숫자 (Recipient, domestic digits)
        text: 메시지 본문 (Message body)
        transport: 테스트용 httpx 전송 계층 (Optional transport override)

    Returns:
        bool: 게이트웨이로 실제 발송했으면 True, 미설정으로 생략했으면 False

    Raises:
        UpstreamError: 게이트웨이 요청 실패 (Gateway request failed)
    """
    if not is_configured():
        logger.info("SMS gateway not configured; skipped message to %s", _mask(to))
        return False

    try:
        async with httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS, transport=transport) as client:
            response = await client.post(
                settings.SMS_API_URL,
                json={"to": to, "from": settings.SMS_SENDER, "text": text},
                headers={"Authorization": f"Bearer {settings.SMS_API_KEY}"},
            )
            response.raise_for_status()
    except httpx.HTTPError as exc:
        logger.error("SMS send to %s failed: %s", _mask(to), exc)
        raise UpstreamError("문자 발송에 실패했습니다. 잠시 후 다시 시도해주세요.") from exc

    logger.info("SMS sent to %s", _mask(to))
    return True


async def send_otp(phone: str, code: str) -> bool:
    """인증번호 문자를 발송합니다.

    Send the OTP message. The code is logged at DEBUG only when no
    gateway is configured, so local sign-in stays possible.
    """
    if not is_configured():
        logger.debug("OTP code for %s: %s", _mask(phone), code)
    return await send_sms(phone, OTP_MESSAGE_TEMPLATE.format(code=code))
