"""테스트 인프라 — 임시 SQLite DB, 세션, httpx 클라이언트, 가짜 FTP 픽스처.

Test infrastructure — Per-test SQLite (aiosqlite) database, sessions,
httpx client, and an in-memory FTP server double.
Schema is created from the ORM metadata for every test.
"""

import ftplib
import os
from collections.abc import AsyncGenerator
from pathlib import Path

# 앱 임포트 전에 설정 — Configure before the app (and its engine) is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test_pickmymenu.db")
os.environ.setdefault("DEBUG", "false")
os.environ.setdefault("AXIOM_API_TOKEN", "")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.config import settings
from app.database import Base, get_db
from app.main import app
from app.models import *  # noqa: F401,F403 — register all models with metadata
from app.models.member import Member
from app.models.result_menu import ResultMenu
from app.utils.jwt import create_access_token
from app.utils.password import hash_password


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """테스트마다 새 SQLite 파일 DB를 만들고 스키마를 생성합니다."""
    eng = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """독립 세션이 필요한 테스트용 세션 팩토리."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
async def create_member(
    db: AsyncSession,
    email: str,
    phone_number: str,
    name: str,
    password: str,
) -> Member:
    """회원을 생성하고 커밋합니다."""
    m = Member(
        email=email,
        phone_number=phone_number,
        name=name,
        password_hash=hash_password(password),
    )
    db.add(m)
    await db.commit()
    return m


@pytest_asyncio.fixture
async def member(db: AsyncSession) -> Member:
    """기본 회원 (Ann)."""
    return await create_member(db, "a@x.com", "555-0100", "Ann", "secret")


@pytest_asyncio.fixture
async def other_member(db: AsyncSession) -> Member:
    """다른 회원 (Bob)."""
    return await create_member(db, "b@x.com", "555-0200", "Bob", "hunter2")


async def create_result_menu(
    db: AsyncSession,
    owner: Member,
    result_menu_id: int | None = None,
    is_reviewed: bool = False,
    restaurant_name: str = "김밥천국",
) -> ResultMenu:
    """결과 메뉴(리뷰 대상)를 생성하고 커밋합니다."""
    rm = ResultMenu(
        member_id=owner.id,
        menu="김치찌개",
        restaurant_name=restaurant_name,
        is_reviewed=is_reviewed,
    )
    if result_menu_id is not None:
        rm.id = result_menu_id
    db.add(rm)
    await db.commit()
    return rm


@pytest_asyncio.fixture
async def result_menu(db: AsyncSession, member: Member) -> ResultMenu:
    """Ann 소유의 리뷰 대상, id=42."""
    return await create_result_menu(db, member, result_menu_id=42)


def make_token(m: Member) -> str:
    """테스트용 JWT 액세스 토큰을 생성합니다."""
    return create_access_token(m.email, m.name)


@pytest.fixture
def member_token(member: Member) -> str:
    return make_token(member)


@pytest.fixture
def other_token(other_member: Member) -> str:
    return make_token(other_member)


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


# ---------------------------------------------------------------------------
# 가짜 FTP 서버 — ftplib.FTP 대체
# ---------------------------------------------------------------------------
class FakeFTP:
    """메모리에 파일을 저장하는 ftplib.FTP 대역."""

    stored: dict[str, bytes] = {}
    instances: list["FakeFTP"] = []
    fail_on_connect: bool = False
    fail_on_store: bool = False

    def __init__(self) -> None:
        self.connected: bool = False
        self.closed: bool = False
        FakeFTP.instances.append(self)

    def connect(self, host: str, port: int, timeout: float | None = None) -> str:
        if FakeFTP.fail_on_connect:
            raise ConnectionRefusedError("connection refused")
        self.connected = True
        return "220 ready"

    def login(self, user: str = "", passwd: str = "") -> str:
        return "230 logged in"

    def storbinary(self, cmd: str, fp) -> str:
        if FakeFTP.fail_on_store:
            raise ftplib.error_perm("553 could not create file")
        path = cmd.split(" ", 1)[1]
        FakeFTP.stored[path] = fp.read()
        return "226 transfer complete"

    def quit(self) -> str:
        self.closed = True
        return "221 bye"

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_ftp(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> type[FakeFTP]:
    """ftplib.FTP를 FakeFTP로 바꾸고 임시 파일 디렉토리를 tmp_path로 지정합니다."""
    FakeFTP.stored = {}
    FakeFTP.instances = []
    FakeFTP.fail_on_connect = False
    FakeFTP.fail_on_store = False
    staging = tmp_path / "staging"
    staging.mkdir()
    monkeypatch.setattr(ftplib, "FTP", FakeFTP)
    monkeypatch.setattr(settings, "UPLOAD_TMP_DIR", str(staging))
    return FakeFTP
