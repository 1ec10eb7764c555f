"""회원 레포지토리 — 이메일/전화번호 정확 일치 조회.

Member Repository — Exact-match lookups by email or phone number.
Extends BaseRepository with Member-specific database operations.
"""

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.member import Member
from app.repositories.base import BaseRepository


class MemberRepository(BaseRepository[Member]):
    """회원 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the members table.
    """

    def __init__(self) -> None:
        super().__init__(Member)

    async def get_by_email(
        self,
        db: AsyncSession,
        email: str,
    ) -> Member | None:
        """이메일로 회원을 조회합니다.

        Retrieve a member by exact email match. Callers pass an already
        normalized (trimmed, lowercased) email.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            email: 회원 이메일 (Member email)

        Returns:
            Member | None: 회원 또는 None (Member or None)
        """
        query: Select = select(Member).where(Member.email == email)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_by_phone_number(
        self,
        db: AsyncSession,
        phone_number: str,
    ) -> Member | None:
        """전화번호로 회원을 조회합니다.

        Retrieve a member by exact phone number match.
        """
        query: Select = select(Member).where(Member.phone_number == phone_number)
        result = await db.execute(query)
        return result.scalar_one_or_none()


# 싱글턴 인스턴스 — Singleton instance
member_repository: MemberRepository = MemberRepository()
