"""커스텀 HTTP 예외 클래스 및 서비스 결과 매핑 모듈.

Custom HTTP exception classes and service-result mapping.
Services return ``Result`` values; routers call ``unwrap_or_raise`` to turn
an ``Err`` into one of the pre-configured HTTPException subclasses below.

Usage:
    from app.utils.exceptions import unwrap_or_raise
    profile = unwrap_or_raise(await member_service.get_profile(db, token))
"""

from typing import TypeVar

from fastapi import HTTPException, status

from app.utils.result import Err, ErrorKind, Result

T = TypeVar("T")


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 리소스를 찾을 수 없을 때 사용.

    Raised when a requested resource (member, result menu) does not exist.
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class DuplicateError(HTTPException):
    """409 Conflict 예외 — 중복 리소스 생성 또는 상태 충돌 시 사용.

    Raised on uniqueness violations (email, phone number) and on
    attempts to review an already reviewed result menu.
    """

    def __init__(self, detail: str = "Resource already exists") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class ForbiddenError(HTTPException):
    """403 Forbidden 예외 — 권한 부족 시 사용.

    Raised when the caller is authenticated but does not own the resource.
    """

    def __init__(self, detail: str = "Insufficient permissions") -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class UnauthorizedError(HTTPException):
    """401 Unauthorized 예외 — 인증 실패 시 사용.

    Raised when the token is missing, invalid or expired, or when
    login credentials do not match.
    """

    def __init__(self, detail: str = "Authentication required") -> None:
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class BadRequestError(HTTPException):
    """400 Bad Request 예외 — 잘못된 요청 데이터 시 사용.

    Raised for business validation failures Pydantic does not catch
    (e.g. review content that is blank after trimming).
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class UploadFailedError(HTTPException):
    """502 Bad Gateway 예외 — 원격 파일 저장소 전송 실패 시 사용.

    Raised when the review image could not be stored on the FTP server.
    """

    def __init__(self, detail: str = "File upload failed") -> None:
        super().__init__(status_code=status.HTTP_502_BAD_GATEWAY, detail=detail)


# 오류 종류 → HTTP 예외 클래스 매핑 (ErrorKind → HTTPException subclass)
_ERROR_MAP: dict[ErrorKind, type[HTTPException]] = {
    ErrorKind.MISSING_TOKEN: UnauthorizedError,
    ErrorKind.INVALID_TOKEN: UnauthorizedError,
    ErrorKind.INVALID_CREDENTIALS: UnauthorizedError,
    ErrorKind.MEMBER_NOT_FOUND: NotFoundError,
    ErrorKind.SUBJECT_NOT_FOUND: NotFoundError,
    ErrorKind.DUPLICATE_EMAIL: DuplicateError,
    ErrorKind.DUPLICATE_PHONE: DuplicateError,
    ErrorKind.ALREADY_REVIEWED: DuplicateError,
    ErrorKind.EMPTY_CONTENT: BadRequestError,
    ErrorKind.NOT_OWNER: ForbiddenError,
    ErrorKind.UPLOAD_FAILURE: UploadFailedError,
}


def to_http_exception(error: Err) -> HTTPException:
    """Err를 대응하는 HTTPException으로 변환합니다.

    Convert a domain error into its HTTPException.
    """
    exc_class: type[HTTPException] = _ERROR_MAP[error.kind]
    return exc_class(error.message)


def unwrap_or_raise(result: Result[T]) -> T:
    """성공 값을 꺼내거나, 실패면 HTTPException을 발생시킵니다.

    Return the success value, or raise the HTTPException mapped from the error.

    Raises:
        HTTPException: result가 Err인 경우 (When the result is an Err)
    """
    if isinstance(result, Err):
        raise to_http_exception(result)
    return result.value
