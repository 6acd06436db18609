"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Provides pre-configured HTTPException subclasses for the error kinds raised
by the transition engine, the bug service, and the record store.
Validation and permission errors are raised before any store call.

Usage:
    from app.utils.exceptions import NotFoundError, PermissionDeniedError
    raise NotFoundError("Bug not found")
    raise PermissionDeniedError("Only the creator can delete this bug")
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 버그를 찾을 수 없을 때 사용.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource not found")
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class UnauthorizedError(HTTPException):
    """401 Unauthorized 예외 — 행위자를 확인할 수 없을 때 사용.

    401 Unauthorized exception.
    Raised when the bearer token is missing, invalid, or expired,
    i.e. there is no current actor.

    Args:
        detail: 오류 메시지 (Error message, default: "Authentication required")
    """

    def __init__(self, detail: str = "Authentication required") -> None:
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class PermissionDeniedError(HTTPException):
    """403 Forbidden 예외 — 역할 또는 소유권 부족 시 사용.

    403 Forbidden exception.
    Raised when the actor lacks the role (e.g. a developer approving a
    closure) or the ownership (e.g. a non-creator deleting a bug).

    Args:
        detail: 오류 메시지 (Error message, default: "Permission denied")
    """

    def __init__(self, detail: str = "Permission denied") -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class InvalidTransitionError(HTTPException):
    """409 Conflict 예외 — 허용되지 않은 상태 전이 시 사용.

    409 Conflict exception.
    Raised when the requested status change is not in the transition table
    for the bug's current status (e.g. approving an open bug).

    Args:
        detail: 오류 메시지 (Error message, default: "Invalid status transition")
    """

    def __init__(self, detail: str = "Invalid status transition") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class ValidationError(HTTPException):
    """422 Unprocessable Entity 예외 — 필드 값 검증 실패 시 사용.

    422 Unprocessable Entity exception.
    Raised when a required field is blank or a value is outside its closed
    vocabulary (unknown project, assignee, label, priority, or status).

    Args:
        detail: 오류 메시지 (Error message, default: "Validation failed")
    """

    def __init__(self, detail: str = "Validation failed") -> None:
        super().__init__(status_code=422, detail=detail)


class StoreUnavailableError(HTTPException):
    """503 Service Unavailable 예외 — 저장소 호출 실패 시 사용.

    503 Service Unavailable exception.
    Raised by the record store when a call fails (network or backend fault).
    Propagated to the caller unchanged; nothing retries it.

    Args:
        detail: 오류 메시지 (Error message, default: "Record store unavailable")
    """

    def __init__(self, detail: str = "Record store unavailable") -> None:
        super().__init__(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=detail)
