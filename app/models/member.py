"""회원 SQLAlchemy ORM 모델 정의.

Member SQLAlchemy ORM model definition.

Tables:
    - members: 회원 계정 (Registered member accounts)
"""

from datetime import date, datetime, timezone

from sqlalchemy import Date, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Member(Base):
    """회원 모델 — 서비스 가입 사용자 계정 정보.

    Member model — Registered user account information.
    Email and phone number are each unique across all members.
    Email is stored trimmed and lowercased.

    Attributes:
        id: 고유 식별자 (Unique identifier, auto-increment)
        email: 로그인 이메일 (Login email, unique, normalized)
        phone_number: 전화번호 (Phone number, unique)
        name: 표시 이름 (Display name, never changed after registration)
        password_hash: bcrypt 해시된 비밀번호 (bcrypt-hashed password)
        gender: 성별 (Gender, optional)
        birth_date: 생년월일 (Birth date, optional)
        created_at: 가입 일시 UTC (Registration timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)

    Relationships:
        result_menus: 이 회원이 추천받은 결과 메뉴 목록 (Result menus owned by this member)
    """

    __tablename__ = "members"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # 로그인 이메일 — trim + lowercase 후 저장 (Stored normalized)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    phone_number: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    # 비밀번호 해시 — bcrypt hashed password (평문 저장 금지, never store plaintext)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    gender: Mapped[str | None] = mapped_column(String(10), nullable=True)
    birth_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # 관계 — Relationships
    result_menus = relationship("ResultMenu", back_populates="member")
