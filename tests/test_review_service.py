"""리뷰 서비스 테스트 — 결과 타입, 1회 작성 보장, 동시 작성 경합.

ReviewService tests at the service layer: Result values, the one-review
gate, and the concurrent-creation race across independent sessions.
"""

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm.exc import StaleDataError

from app.models.result_menu import ResultMenu
from app.models.review import Review
from app.repositories.result_menu_repository import result_menu_repository
from app.schemas.review import ReviewDraft
from app.services.review_service import review_service, unique_filename
from app.utils.result import Err, ErrorKind, Ok
from tests.conftest import create_result_menu, make_token


class TestCreateReview:
    """리뷰 작성 시나리오."""

    async def test_happy_path_then_already_reviewed(self, db: AsyncSession, result_menu, member_token):
        """subject 42 리뷰 작성 후 재작성 시 ALREADY_REVIEWED."""
        first = await review_service.create_review(
            db, ReviewDraft(result_menu_id=42, content="great food"), None, member_token
        )
        assert isinstance(first, Ok)
        assert first.value.result_menu_id == 42

        second = await review_service.create_review(
            db, ReviewDraft(result_menu_id=42, content="again"), None, member_token
        )
        assert isinstance(second, Err)
        assert second.kind is ErrorKind.ALREADY_REVIEWED

    async def test_not_owner_leaves_flag(self, db: AsyncSession, result_menu, other_token):
        result = await review_service.create_review(
            db, ReviewDraft(result_menu_id=42, content="nice"), None, other_token
        )
        assert isinstance(result, Err)
        assert result.kind is ErrorKind.NOT_OWNER
        await db.refresh(result_menu)
        assert result_menu.is_reviewed is False

    async def test_empty_content_checked_first(self, db: AsyncSession):
        """빈 내용은 토큰 확인보다 먼저 거부."""
        result = await review_service.create_review(db, ReviewDraft(result_menu_id=1, content=""), None, None)
        assert isinstance(result, Err)
        assert result.kind is ErrorKind.EMPTY_CONTENT

    @pytest.mark.parametrize(
        ("token", "kind"),
        [
            (None, ErrorKind.MISSING_TOKEN),
            ("garbage", ErrorKind.INVALID_TOKEN),
        ],
    )
    async def test_token_errors(self, db: AsyncSession, result_menu, token, kind):
        result = await review_service.create_review(db, ReviewDraft(result_menu_id=42, content="x"), None, token)
        assert isinstance(result, Err)
        assert result.kind is kind

    async def test_unknown_member_token(self, db: AsyncSession, result_menu, member):
        """서명은 유효하지만 가입되지 않은 이메일 — MEMBER_NOT_FOUND."""
        member.email = "gone@x.com"
        token = make_token(member)
        await db.rollback()
        result = await review_service.create_review(db, ReviewDraft(result_menu_id=42, content="x"), None, token)
        assert isinstance(result, Err)
        assert result.kind is ErrorKind.MEMBER_NOT_FOUND


class TestConcurrentCreation:
    """같은 결과 메뉴에 대한 동시 작성 — 정확히 하나만 성공."""

    async def test_stale_validation_loses_race(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        result_menu,
        member_token,
    ):
        """두 요청이 모두 '미작성' 상태를 읽은 뒤 경합 — 한 건만 저장."""
        async with session_factory() as first_session, session_factory() as second_session:
            # 두 번째 요청이 먼저 검증 단계의 읽기를 마친 상태 (Both read is_reviewed = False)
            stale: ResultMenu = await second_session.get(ResultMenu, 42)
            assert stale.is_reviewed is False

            winner = await review_service.create_review(
                first_session, ReviewDraft(result_menu_id=42, content="first"), None, member_token
            )
            loser = await review_service.create_review(
                second_session, ReviewDraft(result_menu_id=42, content="second"), None, member_token
            )

        assert isinstance(winner, Ok)
        assert isinstance(loser, Err)
        assert loser.kind is ErrorKind.ALREADY_REVIEWED

        async with session_factory() as check:
            count = (await check.execute(select(func.count()).select_from(Review))).scalar()
            assert count == 1

    async def test_conflict_at_commit_reports_already_reviewed(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        result_menu,
        member_token,
        monkeypatch: pytest.MonkeyPatch,
    ):
        """잠금 재조회까지 통과한 뒤 저장 단계에서 충돌 — ALREADY_REVIEWED, 한 건만 저장."""
        async with session_factory() as first_session, session_factory() as second_session:
            stale: ResultMenu = await second_session.get(ResultMenu, 42)

            winner = await review_service.create_review(
                first_session, ReviewDraft(result_menu_id=42, content="first"), None, member_token
            )

            # 행 잠금이 없는 상황 — the re-read hands back the stale identity-map row
            async def stale_read(db: AsyncSession, result_menu_id: int) -> ResultMenu:
                return stale

            monkeypatch.setattr(result_menu_repository, "get_for_update", stale_read)
            loser = await review_service.create_review(
                second_session, ReviewDraft(result_menu_id=42, content="second"), None, member_token
            )

        assert isinstance(winner, Ok)
        assert loser == Err(ErrorKind.ALREADY_REVIEWED, "이미 리뷰가 작성된 상태입니다.")

        async with session_factory() as check:
            reviews = (await check.execute(select(Review))).scalars().all()
            assert [r.content for r in reviews] == ["first"]
            refreshed: ResultMenu = await check.get(ResultMenu, 42)
            assert refreshed.is_reviewed is True
            assert refreshed.version == 2

    async def test_version_counter_rejects_stale_flip(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        result_menu,
    ):
        """낡은 버전으로 플래그를 바꾸면 StaleDataError."""
        async with session_factory() as a, session_factory() as b:
            rm_a: ResultMenu = await a.get(ResultMenu, 42)
            rm_b: ResultMenu = await b.get(ResultMenu, 42)

            rm_a.mark_reviewed()
            await a.commit()
            assert rm_a.version == 2

            rm_b.mark_reviewed()
            with pytest.raises(StaleDataError):
                await b.flush()
            await b.rollback()


class TestListing:
    """목록과 미작성 개수."""

    async def test_pending_count(self, db: AsyncSession, member, member_token):
        await create_result_menu(db, member)
        await create_result_menu(db, member)
        await create_result_menu(db, member, is_reviewed=True)

        result = await review_service.count_pending_reviews(db, member_token)
        assert result == Ok(2)

    async def test_list_reviews_empty(self, db: AsyncSession):
        result = await review_service.list_reviews(db, page=1, per_page=10)
        assert isinstance(result, Ok)
        assert result.value.total == 0
        assert result.value.pages == 0
        assert result.value.items == []

    async def test_list_my_reviews_missing_token(self, db: AsyncSession):
        result = await review_service.list_my_reviews(db, 1, 10, None)
        assert isinstance(result, Err)
        assert result.kind is ErrorKind.MISSING_TOKEN


class TestUploadReviewImage:
    """이미지 업로드 단계."""

    async def test_no_image_is_noop(self):
        draft = ReviewDraft(result_menu_id=1, content="x")
        assert await review_service.upload_review_image(None, draft) == Ok(None)
        assert draft.review_image_url is None

    async def test_connect_failure_leaves_draft_unset(self, fake_ftp):
        from io import BytesIO

        from fastapi import UploadFile

        fake_ftp.fail_on_connect = True
        draft = ReviewDraft(result_menu_id=1, content="x")
        image = UploadFile(file=BytesIO(b"bytes"), filename="a.gif")
        result = await review_service.upload_review_image(image, draft)
        assert isinstance(result, Err)
        assert result.kind is ErrorKind.UPLOAD_FAILURE
        assert draft.review_image_url is None

    def test_unique_filename_keeps_extension(self):
        first = unique_filename("photo.JPG")
        second = unique_filename("photo.JPG")
        assert first.endswith(".JPG")
        assert first != second
        assert unique_filename("noext") and "." not in unique_filename("noext")
