"""추천 결과 메뉴(리뷰 대상) SQLAlchemy ORM 모델 정의.

Result menu (review subject) SQLAlchemy ORM model definition.
A result menu records one restaurant/menu outcome a member received.
It can be reviewed exactly once.

Tables:
    - result_menus: 추천 결과 기록 (Recommendation outcomes eligible for one review)
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class ResultMenu(Base):
    """추천 결과 메뉴 모델.

    Result menu model. Created upstream when a member picks a restaurant;
    this service only flips ``is_reviewed`` once a review is written.

    ``version`` is the optimistic concurrency counter: every UPDATE is
    issued as ``WHERE id = :id AND version = :old`` and raises
    ``StaleDataError`` when another transaction changed the row first.

    Attributes:
        id: 고유 식별자 (Unique identifier)
        member_id: 소유 회원 FK (Owning member)
        menu: 추천된 메뉴 이름 (Chosen menu name)
        restaurant_name: 방문 식당 이름 (Restaurant name)
        is_reviewed: 리뷰 작성 여부 (Whether a review has been written)
        version: 낙관적 잠금 버전 (Optimistic lock version)
        created_at: 생성 일시 UTC (Creation timestamp)
    """

    __tablename__ = "result_menus"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    member_id: Mapped[int] = mapped_column(Integer, ForeignKey("members.id"), nullable=False, index=True)
    menu: Mapped[str] = mapped_column(String(100), nullable=False)
    restaurant_name: Mapped[str] = mapped_column(String(255), nullable=False)
    # 리뷰 작성 여부 — false → true 로 한 번만 전환 (Flips false → true exactly once)
    is_reviewed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    __mapper_args__ = {"version_id_col": version}

    # 관계 — Relationships
    member = relationship("Member", back_populates="result_menus")
    review = relationship("Review", back_populates="result_menu", uselist=False)

    def mark_reviewed(self) -> None:
        """리뷰 작성 완료로 표시합니다 (Mark this result menu as reviewed)."""
        self.is_reviewed = True
