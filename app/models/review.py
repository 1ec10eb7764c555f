"""리뷰 SQLAlchemy ORM 모델 정의.

Review SQLAlchemy ORM model definition.

Tables:
    - reviews: 결과 메뉴에 대한 회원 리뷰 (Member-authored reviews of a result menu)
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Review(Base):
    """리뷰 모델 — 결과 메뉴 1건당 최대 1건.

    Review model — at most one per result menu.
    Read-only after creation.

    Attributes:
        id: 고유 식별자 (Unique identifier)
        content: 리뷰 본문 (Review text, non-empty)
        image_url: 업로드된 이미지 파일명 (Uploaded image filename, optional)
        result_menu_id: 대상 결과 메뉴 FK (Reviewed result menu, unique)
        created_at: 작성 일시 UTC (Creation timestamp)
    """

    __tablename__ = "reviews"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[str | None] = mapped_column(String(255), nullable=True)
    result_menu_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("result_menus.id"), unique=True, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    # 관계 — Relationships
    result_menu = relationship("ResultMenu", back_populates="review")
