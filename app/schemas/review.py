"""리뷰 관련 Pydantic 요청/응답 스키마 정의.

Review-related Pydantic request/response schema definitions.
"""

from datetime import datetime

from pydantic import BaseModel


class ReviewDraft(BaseModel):
    """리뷰 작성 초안.

    Review draft assembled from the multipart form. ``review_image_url``
    is filled in by the image upload step and stays ``None`` when no image
    was sent or the upload failed.

    Attributes:
        result_menu_id: 리뷰 대상 결과 메뉴 ID (Reviewed result menu ID)
        content: 리뷰 본문 (Review text)
        review_image_url: 업로드된 이미지 파일명 (Stored image filename)
    """

    result_menu_id: int
    content: str
    review_image_url: str | None = None


class ReviewCreateResponse(BaseModel):
    """리뷰 생성 응답 스키마 (Created review projection)."""

    id: int
    content: str
    image_url: str | None = None
    result_menu_id: int
    created_at: datetime


class ReviewResponse(BaseModel):
    """리뷰 목록 항목 스키마.

    Review list item with the reviewed restaurant/menu and author name.
    """

    id: int
    content: str
    image_url: str | None = None
    result_menu_id: int
    menu: str
    restaurant_name: str
    member_name: str
    created_at: datetime


class PendingCountResponse(BaseModel):
    """리뷰 미작성 개수 (Number of result menus awaiting a review)."""

    count: int
