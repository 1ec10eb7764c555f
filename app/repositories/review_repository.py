"""리뷰 레포지토리 — 리뷰 생성 및 페이지네이션 조회.

Review Repository — Review creation and paginated listings,
globally and per owning member.
"""

from typing import Sequence

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.result_menu import ResultMenu
from app.models.review import Review
from app.repositories.base import BaseRepository


class ReviewRepository(BaseRepository[Review]):
    """리뷰 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the reviews table.
    Listings eager-load the result menu and its member for projections.
    """

    def __init__(self) -> None:
        super().__init__(Review)

    def _base_query(self) -> Select:
        return (
            select(Review)
            .options(selectinload(Review.result_menu).selectinload(ResultMenu.member))
            .order_by(Review.created_at.desc(), Review.id.desc())
        )

    async def get_all_paged(
        self,
        db: AsyncSession,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[Sequence[Review], int]:
        """전체 리뷰를 최신순으로 페이지 조회합니다.

        Retrieve all reviews, newest first, one page at a time.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            page: 페이지 번호, 1부터 시작 (Page number, 1-based)
            per_page: 페이지당 항목 수 (Items per page)

        Returns:
            tuple[Sequence[Review], int]: (리뷰 목록, 전체 개수)
        """
        return await self.get_paginated(db, self._base_query(), page, per_page)

    async def get_paged_by_member(
        self,
        db: AsyncSession,
        member_id: int,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[Sequence[Review], int]:
        """특정 회원의 결과 메뉴에 달린 리뷰를 페이지 조회합니다.

        Retrieve reviews whose result menu belongs to the given member.
        """
        query: Select = (
            self._base_query()
            .join(ResultMenu, Review.result_menu_id == ResultMenu.id)
            .where(ResultMenu.member_id == member_id)
        )
        return await self.get_paginated(db, query, page, per_page)


# 싱글턴 인스턴스 — Singleton instance
review_repository: ReviewRepository = ReviewRepository()
