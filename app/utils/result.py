"""서비스 결과 타입 — 성공 값 또는 태그된 오류.

Service result type — a success value or a tagged domain error.
Services return ``Ok``/``Err`` instead of raising for domain failures;
the HTTP layer inspects the result and maps ``ErrorKind`` onto a status.

Usage:
    result = await member_service.get_profile(db, token)
    if isinstance(result, Err):
        ...  # result.kind, result.message
    profile = result.value
"""

import enum
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class ErrorKind(str, enum.Enum):
    """도메인 오류 종류 (Domain error kinds)."""

    MISSING_TOKEN = "missing_token"
    INVALID_TOKEN = "invalid_token"
    MEMBER_NOT_FOUND = "member_not_found"
    DUPLICATE_EMAIL = "duplicate_email"
    DUPLICATE_PHONE = "duplicate_phone"
    INVALID_CREDENTIALS = "invalid_credentials"
    EMPTY_CONTENT = "empty_content"
    SUBJECT_NOT_FOUND = "subject_not_found"
    ALREADY_REVIEWED = "already_reviewed"
    NOT_OWNER = "not_owner"
    UPLOAD_FAILURE = "upload_failure"


@dataclass(frozen=True)
class Ok(Generic[T]):
    """성공 결과 (Successful result carrying a value)."""

    value: T


@dataclass(frozen=True)
class Err:
    """실패 결과 — 오류 종류와 사용자 메시지.

    Failed result with an error kind and a user-facing message.
    """

    kind: ErrorKind
    message: str


Result = Union[Ok[T], Err]


# 공통 오류 메시지 — Shared user-facing messages
MSG_MISSING_TOKEN = "토큰이 존재하지 않습니다."
MSG_INVALID_TOKEN = "유효하지 않거나 만료된 토큰입니다."
MSG_MEMBER_NOT_FOUND = "해당 사용자를 찾을 수 없습니다."
MSG_DUPLICATE_EMAIL = "이미 등록된 이메일입니다."
MSG_DUPLICATE_PHONE = "이미 등록된 전화번호입니다."
