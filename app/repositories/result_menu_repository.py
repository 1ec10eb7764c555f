"""결과 메뉴 레포지토리 — 리뷰 대상 조회, 잠금, 미작성 개수.

Result Menu Repository — Review-subject lookup, row locking, and
counting of result menus still waiting for a review.
"""

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.result_menu import ResultMenu
from app.repositories.base import BaseRepository


class ResultMenuRepository(BaseRepository[ResultMenu]):
    """결과 메뉴 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the result_menus table.
    """

    def __init__(self) -> None:
        super().__init__(ResultMenu)

    async def get_for_update(
        self,
        db: AsyncSession,
        result_menu_id: int,
    ) -> ResultMenu | None:
        """행 잠금과 함께 결과 메뉴를 다시 읽어옵니다.

        Re-read a result menu with ``SELECT ... FOR UPDATE`` and refresh the
        identity-map copy. The lock is honoured on PostgreSQL; dialects
        without row locks fall back to the version counter check.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            result_menu_id: 결과 메뉴 ID (Result menu ID)

        Returns:
            ResultMenu | None: 잠긴 결과 메뉴 또는 None (Locked row or None)
        """
        query: Select = (
            select(ResultMenu)
            .where(ResultMenu.id == result_menu_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def count_unreviewed(
        self,
        db: AsyncSession,
        member_id: int,
    ) -> int:
        """회원의 리뷰 미작성 결과 메뉴 수를 셉니다.

        Count the member's result menus whose review is still pending.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            member_id: 회원 ID (Member ID)

        Returns:
            int: 미작성 개수 (Number of unreviewed result menus)
        """
        query: Select = select(func.count()).select_from(ResultMenu).where(
            ResultMenu.member_id == member_id,
            ResultMenu.is_reviewed.is_(False),
        )
        return (await db.execute(query)).scalar() or 0


# 싱글턴 인스턴스 — Singleton instance
result_menu_repository: ResultMenuRepository = ResultMenuRepository()
