"""토큰 기반 호출자 확인 — 모든 보호된 서비스 작업의 공통 단계.

Token-based caller resolution shared by every token-guarded operation:
    1. 토큰 누락 → MISSING_TOKEN (Token absent)
    2. 서명/만료 검증 실패 → INVALID_TOKEN (Verification failed)
    3. 이메일에 해당하는 회원 없음 → MEMBER_NOT_FOUND (No member for the claim)
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.member import Member
from app.repositories.member_repository import member_repository
from app.utils.jwt import InvalidTokenError, verify_and_extract_identity
from app.utils.result import (
    MSG_INVALID_TOKEN,
    MSG_MEMBER_NOT_FOUND,
    MSG_MISSING_TOKEN,
    Err,
    ErrorKind,
    Ok,
    Result,
)


async def resolve_caller(db: AsyncSession, token: str | None) -> Result[Member]:
    """토큰으로 호출한 회원을 찾습니다.

    Resolve the calling member from a bearer token.

    Args:
        db: 비동기 데이터베이스 세션 (Async database session)
        token: 요청에서 추출한 JWT, 없으면 None (JWT from the request, or None)

    Returns:
        Result[Member]: 회원 또는 MISSING_TOKEN / INVALID_TOKEN / MEMBER_NOT_FOUND
    """
    if not token:
        return Err(ErrorKind.MISSING_TOKEN, MSG_MISSING_TOKEN)

    try:
        email: str = verify_and_extract_identity(token)
    except InvalidTokenError:
        return Err(ErrorKind.INVALID_TOKEN, MSG_INVALID_TOKEN)

    member: Member | None = await member_repository.get_by_email(db, email)
    if member is None:
        return Err(ErrorKind.MEMBER_NOT_FOUND, MSG_MEMBER_NOT_FOUND)
    return Ok(member)
