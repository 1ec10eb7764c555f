"""회원 관련 Pydantic 요청/응답 스키마 정의.

Member-related Pydantic request/response schema definitions.
Covers registration, login, profile read/update, password re-verification,
and email/phone availability checks.
"""

from datetime import date, datetime

from typing import Any

from pydantic import BaseModel, Field, field_validator

from app.utils.password import BCRYPT_MAX_BYTES


def _check_password_bytes(password: str | None) -> str | None:
    """bcrypt 입력 한도(72바이트)를 넘는 비밀번호 거부.

    Reject passwords whose UTF-8 encoding exceeds bcrypt's 72-byte input limit;
    a character count alone lets multibyte passwords through.
    """
    if password is not None and len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValueError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes")
    return password


class MemberJoinRequest(BaseModel):
    """회원가입 요청 스키마.

    Member registration request schema.

    Attributes:
        email: 로그인 이메일 (Login email, normalized server-side)
        phone_number: 전화번호 (Phone number, unique)
        password: 비밀번호 (Plain text, bcrypt-hashed on server)
        name: 표시 이름 (Display name)
        gender: 성별 (Optional gender)
        birth_date: 생년월일 (Optional birth date)
    """

    email: str = Field(min_length=3, max_length=255)
    phone_number: str = Field(min_length=1, max_length=20)
    password: str = Field(min_length=1)  # 평문, 서버에서 bcrypt 해싱 (Plain text, server hashes with bcrypt)
    name: str = Field(min_length=1, max_length=100)
    gender: str | None = None
    birth_date: date | None = None

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, v: Any) -> Any:
        """길이 검사 전에 앞뒤 공백 제거 (Trim before the length check)."""
        return v.strip() if isinstance(v, str) else v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return _check_password_bytes(v)


class MemberLoginRequest(BaseModel):
    """로그인 요청 스키마 (Login request schema)."""

    email: str
    password: str


class LoginResponse(BaseModel):
    """로그인 응답 스키마.

    Login response schema. ``cookie`` renders the Set-Cookie value the
    HTTP layer emits alongside the body.

    Attributes:
        token: JWT 액세스 토큰 (Signed access token)
        name: 회원 표시 이름 (Member display name)
    """

    token: str
    name: str

    @property
    def cookie(self) -> str:
        return f"token={self.token}; HttpOnly; Path=/"


class MemberProfileResponse(BaseModel):
    """마이페이지 프로필 응답 스키마 — 비밀번호 해시 제외.

    Profile projection returned by the my-page endpoint.
    Never includes the password hash.
    """

    id: int
    email: str
    name: str
    phone_number: str
    gender: str | None = None
    birth_date: date | None = None
    created_at: datetime


class PasswordVerifyRequest(BaseModel):
    """정보 수정 전 비밀번호 재확인 요청 (Password re-verification request)."""

    password: str


class PasswordVerifyResponse(BaseModel):
    """비밀번호 재확인 결과 (Password re-verification result)."""

    verified: bool


class MemberUpdateRequest(BaseModel):
    """회원 정보 수정 요청 스키마.

    Profile update request. Name cannot be changed; an empty or missing
    password keeps the current one.

    Attributes:
        phone_number: 새 전화번호 (New phone number)
        password: 새 비밀번호, 비우면 유지 (New password, empty keeps current)
    """

    phone_number: str = Field(min_length=1, max_length=20)
    password: str | None = None

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str | None) -> str | None:
        return _check_password_bytes(v)


class MemberUpdateResponse(BaseModel):
    """회원 정보 수정 결과 (Profile update result)."""

    updated: bool


class PhoneCheckResponse(BaseModel):
    """전화번호 사용 가능 여부 (Phone number availability)."""

    available: bool


class MessageResponse(BaseModel):
    """범용 메시지 응답 스키마.

    Generic message response schema for simple confirmations
    (registration success, email availability, logout).
    """

    message: str
