"""리뷰 라우터 — 리뷰 작성, 전체/내 리뷰 목록, 미작성 개수.

Review Router — Review creation (multipart with optional image),
global and personal listings, and the pending-review count.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_token
from app.database import get_db
from app.schemas.review import PendingCountResponse, ReviewCreateResponse, ReviewDraft
from app.services.review_service import review_service
from app.utils.exceptions import unwrap_or_raise
from app.utils.pagination import Page

router: APIRouter = APIRouter()


@router.post("", response_model=ReviewCreateResponse, status_code=201)
async def create_review(
    result_menu_id: Annotated[int, Form(alias="resultMenuId")],
    content: Annotated[str, Form()],
    db: Annotated[AsyncSession, Depends(get_db)],
    token: Annotated[str | None, Depends(get_token)],
    review_image: Annotated[UploadFile | None, File(alias="reviewImage")] = None,
) -> ReviewCreateResponse:
    """리뷰 작성 — 이미지 첨부 선택.

    Create a review of one of my result menus, with an optional image.
    """
    draft = ReviewDraft(result_menu_id=result_menu_id, content=content)
    return unwrap_or_raise(await review_service.create_review(db, draft, review_image, token))


@router.get("", response_model=Page)
async def list_reviews(
    db: Annotated[AsyncSession, Depends(get_db)],
    page: Annotated[int, Query(ge=1)] = 1,
    per_page: Annotated[int, Query(ge=1, le=100)] = 20,
) -> Page:
    """전체 리뷰 목록 (All reviews, newest first)."""
    return unwrap_or_raise(await review_service.list_reviews(db, page, per_page))


@router.get("/my", response_model=Page)
async def list_my_reviews(
    db: Annotated[AsyncSession, Depends(get_db)],
    token: Annotated[str | None, Depends(get_token)],
    page: Annotated[int, Query(ge=1)] = 1,
    per_page: Annotated[int, Query(ge=1, le=100)] = 20,
) -> Page:
    """내 리뷰 목록 (My reviews)."""
    return unwrap_or_raise(await review_service.list_my_reviews(db, page, per_page, token))


@router.get("/pending-count", response_model=PendingCountResponse)
async def pending_count(
    db: Annotated[AsyncSession, Depends(get_db)],
    token: Annotated[str | None, Depends(get_token)],
) -> PendingCountResponse:
    """작성되지 않은 내 리뷰 개수 (Number of my result menus awaiting a review)."""
    count: int = unwrap_or_raise(await review_service.count_pending_reviews(db, token))
    return PendingCountResponse(count=count)
