"""리뷰 서비스 — 리뷰 작성, 이미지 업로드, 목록, 미작성 개수 비즈니스 로직.

Review Service — Business logic for review creation, review image upload,
paginated listings, and the pending-review count.

Review creation policy:
    검증 → 이미지 업로드 → (리뷰 저장 + 리뷰 완료 표시)를 하나의 트랜잭션으로.
    Validate, then upload the image, then insert the review and flip the
    result menu's reviewed flag in one unit of work. A failed upload aborts
    the whole operation before anything is persisted.
"""

import ftplib
import logging
import tempfile
import uuid
from pathlib import Path

from fastapi import UploadFile
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from app.config import settings
from app.database import UnitOfWork
from app.models.result_menu import ResultMenu
from app.models.review import Review
from app.repositories.result_menu_repository import result_menu_repository
from app.repositories.review_repository import review_repository
from app.schemas.review import ReviewCreateResponse, ReviewDraft, ReviewResponse
from app.services.auth_context import resolve_caller
from app.utils.ftp import ftp_session
from app.utils.pagination import Page
from app.utils.result import Err, ErrorKind, Ok, Result

logger = logging.getLogger(__name__)

MSG_EMPTY_CONTENT = "내용을 작성해주세요."
MSG_SUBJECT_NOT_FOUND = "해당 레스토랑 아이디를 찾을수 없습니다."
MSG_ALREADY_REVIEWED = "이미 리뷰가 작성된 상태입니다."
MSG_NOT_OWNER = "해당 레스토랑을 방문한 사용자가 아닙니다."
MSG_UPLOAD_FAILURE = "이미지 업로드에 실패했습니다."


def unique_filename(original_filename: str) -> str:
    """원본 확장자를 유지한 충돌 없는 파일명을 만듭니다.

    Build a collision-resistant filename that keeps the original extension,
    e.g. ``photo.JPG`` → ``3f2b...9c.JPG``.
    """
    return f"{uuid.uuid4().hex}{Path(original_filename).suffix}"


class ReviewService:
    """리뷰 관련 비즈니스 로직을 처리하는 서비스.

    Service handling review business logic.
    """

    def _to_response(self, review: Review) -> ReviewResponse:
        result_menu: ResultMenu = review.result_menu
        return ReviewResponse(
            id=review.id,
            content=review.content,
            image_url=review.image_url,
            result_menu_id=review.result_menu_id,
            menu=result_menu.menu,
            restaurant_name=result_menu.restaurant_name,
            member_name=result_menu.member.name,
            created_at=review.created_at,
        )

    async def create_review(
        self,
        db: AsyncSession,
        draft: ReviewDraft,
        image: UploadFile | None,
        token: str | None,
    ) -> Result[ReviewCreateResponse]:
        """결과 메뉴에 대한 리뷰를 작성합니다.

        Create the single review of a result menu owned by the caller.

        Checks, in order: non-blank content, caller token, result menu
        exists, not yet reviewed, caller owns it. The image (if any) is then
        uploaded, and the review insert plus reviewed-flag flip are committed
        together. A concurrent creation that wins first surfaces here as a
        version conflict or unique violation and is reported as ALREADY_REVIEWED.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            draft: 리뷰 초안 (Review draft)
            image: 첨부 이미지, 없으면 None (Optional image file)
            token: 호출자 JWT (Caller token)

        Returns:
            Result[ReviewCreateResponse]: 생성된 리뷰 또는 오류
        """
        if not draft.content or not draft.content.strip():
            return Err(ErrorKind.EMPTY_CONTENT, MSG_EMPTY_CONTENT)

        caller = await resolve_caller(db, token)
        if isinstance(caller, Err):
            return caller
        member_id: int = caller.value.id

        result_menu: ResultMenu | None = await result_menu_repository.get_by_id(db, draft.result_menu_id)
        if result_menu is None:
            return Err(ErrorKind.SUBJECT_NOT_FOUND, MSG_SUBJECT_NOT_FOUND)
        if result_menu.is_reviewed:
            return Err(ErrorKind.ALREADY_REVIEWED, MSG_ALREADY_REVIEWED)
        if result_menu.member_id != member_id:
            return Err(ErrorKind.NOT_OWNER, MSG_NOT_OWNER)

        uploaded = await self.upload_review_image(image, draft)
        if isinstance(uploaded, Err):
            return uploaded

        try:
            async with UnitOfWork(db) as uow:
                locked: ResultMenu | None = await result_menu_repository.get_for_update(db, draft.result_menu_id)
                if locked is None or locked.is_reviewed:
                    return Err(ErrorKind.ALREADY_REVIEWED, MSG_ALREADY_REVIEWED)

                review: Review = await review_repository.create(db, {
                    "content": draft.content,
                    "image_url": draft.review_image_url,
                    "result_menu_id": locked.id,
                })
                locked.mark_reviewed()
                await result_menu_repository.save(db, locked)
                await uow.commit()
        except (StaleDataError, IntegrityError) as exc:
            logger.warning(
                "Review conflict on result menu %s: %s", draft.result_menu_id, type(exc).__name__
            )
            return Err(ErrorKind.ALREADY_REVIEWED, MSG_ALREADY_REVIEWED)

        logger.info("Member %s reviewed result menu %s (review %s)", member_id, draft.result_menu_id, review.id)
        return Ok(ReviewCreateResponse(
            id=review.id,
            content=review.content,
            image_url=review.image_url,
            result_menu_id=review.result_menu_id,
            created_at=review.created_at,
        ))

    def _transfer(self, data: bytes, filename: str) -> None:
        """임시 파일로 저장 후 FTP로 전송합니다 (blocking).

        Stage the bytes locally and store them on the FTP server. The FTP
        connection and the staging file are released on every exit path.
        """
        staging_dir: Path = Path(settings.UPLOAD_TMP_DIR or tempfile.gettempdir())
        local_file: Path = staging_dir / filename
        remote_path: str = f"{settings.FTP_REVIEW_DIR.rstrip('/')}/{filename}"

        with ftp_session() as client:
            try:
                local_file.write_bytes(data)
                client.upload(remote_path, local_file)
            finally:
                local_file.unlink(missing_ok=True)

    async def upload_review_image(
        self,
        image: UploadFile | None,
        draft: ReviewDraft,
    ) -> Result[None]:
        """리뷰 이미지를 원격 저장소에 올리고 초안에 파일명을 기록합니다.

        Upload the review image and record the stored filename on the draft.
        A missing or empty file is a no-op. On failure the draft's image
        reference is left unset.

        Returns:
            Result[None]: 성공 또는 UPLOAD_FAILURE
        """
        if image is None or not image.filename:
            return Ok(None)

        data: bytes = await image.read()
        if not data:
            return Ok(None)

        filename: str = unique_filename(image.filename)
        try:
            await run_in_threadpool(self._transfer, data, filename)
        except ftplib.all_errors as exc:
            logger.error("Review image upload failed for %s: %s", image.filename, exc)
            return Err(ErrorKind.UPLOAD_FAILURE, MSG_UPLOAD_FAILURE)

        draft.review_image_url = filename
        return Ok(None)

    async def list_reviews(
        self,
        db: AsyncSession,
        page: int = 1,
        per_page: int = 20,
    ) -> Result[Page]:
        """전체 리뷰 목록을 페이지 조회합니다 (All reviews, newest first)."""
        reviews, total = await review_repository.get_all_paged(db, page, per_page)
        return Ok(Page.build([self._to_response(r) for r in reviews], total, page, per_page))

    async def list_my_reviews(
        self,
        db: AsyncSession,
        page: int,
        per_page: int,
        token: str | None,
    ) -> Result[Page]:
        """내 리뷰 목록 — 호출자 소유 결과 메뉴의 리뷰만 조회합니다.

        List reviews of result menus owned by the caller.
        """
        caller = await resolve_caller(db, token)
        if isinstance(caller, Err):
            return caller

        reviews, total = await review_repository.get_paged_by_member(db, caller.value.id, page, per_page)
        return Ok(Page.build([self._to_response(r) for r in reviews], total, page, per_page))

    async def count_pending_reviews(
        self,
        db: AsyncSession,
        token: str | None,
    ) -> Result[int]:
        """작성되지 않은 내 리뷰 개수를 셉니다.

        Count the caller's result menus still waiting for a review.
        """
        caller = await resolve_caller(db, token)
        if isinstance(caller, Err):
            return caller
        return Ok(await result_menu_repository.count_unreviewed(db, caller.value.id))


# 싱글턴 인스턴스 — Singleton instance
review_service: ReviewService = ReviewService()
