"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package ensures all models are registered with the
SQLAlchemy metadata, which is required for Alembic migrations and
relationship resolution.

Modules:
    member: 회원 (Members)
    result_menu: 추천 결과 메뉴 — 리뷰 대상 (Result menus, the review subjects)
    review: 리뷰 (Reviews)
"""

from app.models.member import Member
from app.models.result_menu import ResultMenu
from app.models.review import Review

__all__ = [
    "Member",
    "ResultMenu",
    "Review",
]
