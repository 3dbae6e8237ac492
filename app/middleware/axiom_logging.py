"""Axiom API 로깅 미들웨어.

Axiom API logging middleware. Sends one structured event per request
(surface, method, path, masked params/body, status, duration, error
reason) to the configured Axiom dataset. Credentials and OTP codes are
replaced with "***"; phone numbers keep only their last four digits.
"""

import json
import logging
import re
import time
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.config import settings

logger = logging.getLogger(__name__)

# 완전 마스킹 대상 필드 (Fields replaced entirely)
_SECRET_KEYS = re.compile(
    r"(password|secret|token|authorization|api_key|credential|^code$|otp)",
    re.IGNORECASE,
)
# 부분 마스킹 대상 필드 (Fields reduced to their last four digits)
_PHONE_KEYS = re.compile(r"phone", re.IGNORECASE)

# 로깅 제외 경로 (Paths excluded from logging)
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}
# SSE 스트림은 응답이 끝나지 않으므로 제외 (Long-lived event streams)
_SKIP_SUFFIXES = ("/stream",)

_MAX_DETAIL = 500


def mask_phone(value: Any) -> Any:
    """휴대폰 번호를 뒤 4자리만 남깁니다 ("010-1234-5678" -> "***5678")."""
    if not isinstance(value, str):
        return value
    digits: str = re.sub(r"\D", "", value)
    return f"***{digits[-4:]}" if len(digits) >= 4 else "***"


def mask_sensitive(data: Any, depth: int = 0) -> Any:
    """민감 필드 자동 마스킹 (Recursively mask sensitive fields in dicts/lists)."""
    if depth > 5:
        return "..."
    if isinstance(data, dict):
        masked: dict[str, Any] = {}
        for key, value in data.items():
            if _SECRET_KEYS.search(key):
                masked[key] = "***"
            elif _PHONE_KEYS.search(key):
                masked[key] = mask_phone(value)
            else:
                masked[key] = mask_sensitive(value, depth + 1)
        return masked
    if isinstance(data, list):
        return [mask_sensitive(item, depth + 1) for item in data[:20]]
    return data


def api_surface(path: str) -> str:
    """요청 경로의 API 구분 (admin | app | other)."""
    if path.startswith(f"{settings.API_PREFIX}/admin"):
        return "admin"
    if path.startswith(f"{settings.API_PREFIX}/app"):
        return "app"
    return "other"


def _error_reason(body: bytes) -> str:
    try:
        data = json.loads(body)
        reason = str(data.get("detail", data))
    except (json.JSONDecodeError, UnicodeDecodeError, AttributeError):
        reason = body.decode("utf-8", errors="replace")
    return reason if len(reason) <= _MAX_DETAIL else reason[:_MAX_DETAIL] + "..."


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 Axiom에 로깅하는 미들웨어.

    Passes every request straight through when AXIOM_API_TOKEN or
    AXIOM_DATASET is unset.
    """

    def __init__(self, app: Any) -> None:
        super().__init__(app)
        self._client: AxiomClient | None = None
        self._dataset: str = settings.AXIOM_DATASET

        if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    def _skipped(self, path: str) -> bool:
        return path in _SKIP_PATHS or path.endswith(_SKIP_SUFFIXES)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if self._client is None or self._skipped(request.url.path):
            return await call_next(request)

        start_time = time.time()
        method = request.method
        path = request.url.path

        request_body: Any = None
        if method in ("POST", "PUT", "PATCH"):
            body_bytes = await request.body()
            if body_bytes:
                try:
                    request_body = mask_sensitive(json.loads(body_bytes))
                except (json.JSONDecodeError, UnicodeDecodeError):
                    request_body = "(non-json body)"

        error_detail: str | None = None
        status_code: int = 500
        try:
            response = await call_next(request)
            status_code = response.status_code

            # 에러 응답은 body를 읽어 사유를 남기고 다시 감쌈 (Read the error body, then re-wrap it)
            if status_code >= 400:
                chunks: list[bytes] = []
                async for chunk in response.body_iterator:
                    chunks.append(chunk if isinstance(chunk, bytes) else chunk.encode("utf-8"))
                resp_body = b"".join(chunks)
                error_detail = _error_reason(resp_body)
                response = Response(
                    content=resp_body,
                    status_code=status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            error_detail = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            log_event: dict[str, Any] = {
                "surface": api_surface(path),
                "method": method,
                "path": path,
                "status_code": status_code,
                "duration_ms": round((time.time() - start_time) * 1000, 2),
            }
            if request.query_params:
                log_event["query_params"] = mask_sensitive(dict(request.query_params))
            if request.path_params:
                log_event["path_params"] = dict(request.path_params)
            if request_body is not None:
                log_event["request_body"] = request_body
            if error_detail:
                log_event["error"] = error_detail

            try:
                self._client.ingest_events(self._dataset, [log_event])
            except Exception:
                logger.exception("Axiom ingest failed for %s %s", method, path)

        return response
