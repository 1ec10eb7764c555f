"""데이터베이스 엔진, 세션, 작업 단위(Unit of Work) 설정 모듈.

Database engine, session and unit-of-work module.
Sets up the async SQLAlchemy engine, session factory, and ORM base class,
plus the UnitOfWork used by services to group mutations into one transaction.
"""

import logging
from collections.abc import AsyncGenerator
from types import TracebackType
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, AsyncEngine, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase

from app.config import settings

logger = logging.getLogger(__name__)


def _engine_kwargs(url: str) -> dict[str, Any]:
    """드라이버별 엔진 옵션을 구성합니다.

    Build driver-specific engine options. Pool sizing and the prepared
    statement cache flag only apply to the asyncpg (PostgreSQL) driver.
    """
    if url.startswith("sqlite"):
        return {}
    return {
        "pool_size": 5,
        "max_overflow": 10,
        # Supavisor(트랜잭션 모드 풀러)에서 prepared statement 비활성화
        # Disable prepared statement caches for transaction-mode pooling
        "connect_args": {"statement_cache_size": 0},
    }


# 비동기 데이터베이스 엔진 — Async database engine
# pool_pre_ping=True: 커넥션 풀에서 꺼낸 연결의 유효성을 사전 확인 (Validates connections before use)
engine: AsyncEngine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_pre_ping=True,
    **_engine_kwargs(settings.DATABASE_URL),
)

# 비동기 세션 팩토리 — Async session factory
# expire_on_commit=False: 커밋 후에도 객체 속성 접근 가능 (Allows attribute access after commit without refresh)
async_session: async_sessionmaker[AsyncSession] = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """SQLAlchemy 선언적 베이스 클래스.

    Declarative base class for all ORM models.
    All models inherit from this class to register with the metadata.
    """

    pass


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """비동기 데이터베이스 세션을 생성하고 요청 종료 시 닫습니다.

    FastAPI dependency that yields an async database session.
    The session is automatically closed after the request completes,
    ensuring no connection leaks.

    Yields:
        AsyncSession: SQLAlchemy 비동기 세션 인스턴스 (Async session instance)
    """
    async with async_session() as session:
        try:
            yield session
        finally:
            await session.close()


class UnitOfWork:
    """세션 위의 원자적 트랜잭션 경계.

    Atomic transaction boundary over an AsyncSession.
    Everything flushed inside the block is committed by ``commit()``;
    leaving the block with an exception, or without committing, rolls back.

    Usage:
        async with UnitOfWork(db) as uow:
            db.add(obj)
            await uow.commit()
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session: AsyncSession = session
        self._committed: bool = False

    async def __aenter__(self) -> "UnitOfWork":
        # 이미 autobegin된 트랜잭션이 있으면 그대로 사용 (Reuse an autobegun transaction)
        if not self.session.in_transaction():
            await self.session.begin()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_type is not None:
            await self.rollback()
            logger.warning("Unit of work rolled back: %s", exc_type.__name__)
        elif not self._committed:
            await self.rollback()

    async def commit(self) -> None:
        """변경 사항을 커밋합니다 (Commit pending changes)."""
        await self.session.commit()
        self._committed = True

    async def rollback(self) -> None:
        """변경 사항을 롤백합니다 (Roll back pending changes)."""
        await self.session.rollback()
