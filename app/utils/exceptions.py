"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Provides pre-configured HTTPException subclasses for common error patterns,
so services can raise without specifying status codes at each call site.

Usage:
    from app.utils.exceptions import NotFoundError, DuplicateError
    raise NotFoundError("서비스 요청을 찾을 수 없습니다 (Service request not found)")
    raise DuplicateError("이미 가입된 전화번호입니다.")
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found 예외 (요청한 리소스를 찾을 수 없을 때).

    Raised when a requested resource does not exist or is not owned by the caller.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource not found")
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class DuplicateError(HTTPException):
    """409 Conflict 예외 (중복 리소스 생성 시도).

    Raised when creating a resource that violates a uniqueness rule
    (e.g. signing up with an already registered phone number).

    Args:
        detail: 오류 메시지 (Error message, default: "Resource already exists")
    """

    def __init__(self, detail: str = "Resource already exists") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class ForbiddenError(HTTPException):
    """403 Forbidden 예외 (권한 부족).

    Raised when the authenticated profile lacks the admin role.

    Args:
        detail: 오류 메시지 (Error message, default: "Insufficient permissions")
    """

    def __init__(self, detail: str = "Insufficient permissions") -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class UnauthorizedError(HTTPException):
    """401 Unauthorized 예외 (인증 실패).

    Raised when authentication is missing, invalid, or expired
    (e.g. expired token, wrong password, wrong OTP code).

    Args:
        detail: 오류 메시지 (Error message, default: "Authentication required")
    """

    def __init__(self, detail: str = "Authentication required") -> None:
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class BadRequestError(HTTPException):
    """400 Bad Request 예외 (잘못된 요청 데이터).

    Raised when the request data is invalid beyond what Pydantic validation catches
    (e.g. empty item selection, invalid status transitions).

    Args:
        detail: 오류 메시지 (Error message, default: "Bad request")
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class UpstreamError(HTTPException):
    """502 Bad Gateway 예외 (외부 API 호출 실패).

    Raised when an outbound provider (SMS gateway, Kakao local API) fails
    or answers with an error status.

    Args:
        detail: 오류 메시지 (Error message, default: "Upstream service error")
    """

    def __init__(self, detail: str = "Upstream service error") -> None:
        super().__init__(status_code=status.HTTP_502_BAD_GATEWAY, detail=detail)
