"""FastAPI 의존성 주입 모듈 — 요청에서 인증 토큰 추출.

FastAPI dependency injection module — Bearer token extraction.
Routers only pull the raw token out of the request; verifying it and
resolving the member is done by the services.

Token sources, in order:
    1. Authorization: Bearer <token> 헤더 (Authorization header)
    2. 로그인 시 발급된 ``token`` 쿠키 (The HttpOnly cookie set by login)
"""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

# HTTP Bearer 토큰 추출기 — 헤더가 없어도 401을 내지 않음 (auto_error=False)
# Missing header is not an error here; the service reports MISSING_TOKEN
security: HTTPBearer = HTTPBearer(auto_error=False)

TOKEN_COOKIE_NAME: str = "token"


async def get_token(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> str | None:
    """요청에서 JWT 문자열을 꺼냅니다.

    Extract the JWT from the Authorization header, falling back to the
    ``token`` cookie.

    Args:
        request: 현재 요청 (Current request)
        credentials: Bearer 자격 증명, 없으면 None (Bearer credentials or None)

    Returns:
        str | None: 토큰 문자열 또는 None (Token string, or None when absent)
    """
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(TOKEN_COOKIE_NAME) or None
