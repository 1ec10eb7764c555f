"""JWT 토큰 발급 및 검증 유틸리티 모듈.

JWT token issuing and verification utility module.
The token carries the member's email as identity and the display name
as a convenience claim for the client.

JWT Payload Structure:
    {
        "sub": "member@example.com",  # 회원 이메일 (Identity claim)
        "name": "홍길동",              # 표시 이름 (Display-name claim)
        "exp": 1234567890,            # 만료 시간 UNIX timestamp (Expiration)
        "type": "access"              # 토큰 유형 (Token type discriminator)
    }
"""

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from app.config import settings


class InvalidTokenError(Exception):
    """서명, 만료, 클레임 검증에 실패한 토큰.

    Raised when a token fails signature, expiry, or claim validation.
    """


def create_access_token(email: str, name: str) -> str:
    """회원 이메일과 이름을 담은 JWT 액세스 토큰을 생성합니다.

    Issue a signed access token embedding the member's email and name.
    Expires after JWT_ACCESS_TOKEN_EXPIRE_MINUTES.

    Args:
        email: 회원 이메일 — identity claim (Member email)
        name: 회원 표시 이름 (Member display name)

    Returns:
        str: 인코딩된 JWT 문자열 (Encoded JWT token string)
    """
    expire: datetime = datetime.now(timezone.utc) + timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES)
    payload: dict[str, Any] = {"sub": email, "name": name, "exp": expire, "type": "access"}
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict[str, Any]:
    """JWT 토큰을 디코딩하고 서명/만료를 검증합니다.

    Decode and verify a JWT token string.

    Raises:
        jwt.ExpiredSignatureError: 토큰 만료 시 (When token has expired)
        jwt.InvalidTokenError: 유효하지 않은 토큰 (When token is invalid)
    """
    return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])


def verify_and_extract_identity(token: str) -> str:
    """토큰을 검증하고 이메일(identity claim)을 반환합니다.

    Verify the token and return its email claim.

    Args:
        token: JWT 토큰 문자열 (Encoded JWT token string)

    Returns:
        str: 토큰에 담긴 회원 이메일 (Member email from the ``sub`` claim)

    Raises:
        InvalidTokenError: 서명 불일치, 만료, 잘못된 타입, sub 누락
            (Bad signature, expired, wrong type, or missing ``sub``)
    """
    try:
        payload: dict[str, Any] = decode_token(token)
    except jwt.ExpiredSignatureError as exc:
        raise InvalidTokenError("Token expired") from exc
    except jwt.InvalidTokenError as exc:
        raise InvalidTokenError("Invalid token") from exc

    if payload.get("type") != "access":
        raise InvalidTokenError("Invalid token type")
    email: str | None = payload.get("sub")
    if not email:
        raise InvalidTokenError("Invalid token")
    return email
