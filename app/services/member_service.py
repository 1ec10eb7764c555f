"""회원 서비스 — 회원가입, 로그인, 마이페이지, 정보 수정 비즈니스 로직.

Member Service — Business logic for registration, login, profile read/update,
password re-verification, and email/phone availability checks.
All operations return a ``Result``; domain failures are ``Err`` values.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import UnitOfWork
from app.models.member import Member
from app.repositories.member_repository import member_repository
from app.schemas.member import (
    LoginResponse,
    MemberJoinRequest,
    MemberLoginRequest,
    MemberProfileResponse,
    MemberUpdateRequest,
)
from app.services.auth_context import resolve_caller
from app.utils.jwt import create_access_token
from app.utils.password import hash_password, verify_password
from app.utils.result import (
    MSG_DUPLICATE_EMAIL,
    MSG_DUPLICATE_PHONE,
    Err,
    ErrorKind,
    Ok,
    Result,
)

logger = logging.getLogger(__name__)

MSG_JOIN_SUCCESS = "회원가입 성공"
MSG_EMAIL_AVAILABLE = "사용 가능한 이메일입니다."
MSG_EMAIL_NOT_FOUND = "존재하지 않는 이메일입니다."
MSG_WRONG_PASSWORD = "잘못된 비밀번호입니다."


def normalize_email(email: str) -> str:
    """이메일 정규화 — 앞뒤 공백 제거 후 소문자 (Trim and lowercase)."""
    return email.strip().lower()


class MemberService:
    """회원 관련 비즈니스 로직을 처리하는 서비스.

    Service handling member business logic.
    Stateless; every method receives the request's database session.
    """

    def _to_profile(self, member: Member) -> MemberProfileResponse:
        """회원 모델을 프로필 응답으로 변환합니다 (비밀번호 해시 제외).

        Convert a Member to its profile projection, without the password hash.
        """
        return MemberProfileResponse(
            id=member.id,
            email=member.email,
            name=member.name,
            phone_number=member.phone_number,
            gender=member.gender,
            birth_date=member.birth_date,
            created_at=member.created_at,
        )

    async def register(
        self,
        db: AsyncSession,
        data: MemberJoinRequest,
    ) -> Result[str]:
        """신규 회원을 등록합니다.

        Register a new member. The email is normalized, duplicates are
        rejected before any insert, and the password is stored as a bcrypt hash.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 회원가입 요청 데이터 (Registration request)

        Returns:
            Result[str]: 성공 메시지 또는 DUPLICATE_EMAIL / DUPLICATE_PHONE
        """
        email: str = normalize_email(data.email)

        if await member_repository.get_by_email(db, email) is not None:
            return Err(ErrorKind.DUPLICATE_EMAIL, MSG_DUPLICATE_EMAIL)
        if await member_repository.get_by_phone_number(db, data.phone_number) is not None:
            return Err(ErrorKind.DUPLICATE_PHONE, MSG_DUPLICATE_PHONE)

        try:
            async with UnitOfWork(db) as uow:
                await member_repository.create(db, {
                    "email": email,
                    "phone_number": data.phone_number,
                    "name": data.name,
                    "password_hash": hash_password(data.password),
                    "gender": data.gender,
                    "birth_date": data.birth_date,
                })
                await uow.commit()
        except IntegrityError:
            # 동시 가입으로 고유 제약 위반 — Lost a race on a unique column
            if await member_repository.get_by_email(db, email) is not None:
                return Err(ErrorKind.DUPLICATE_EMAIL, MSG_DUPLICATE_EMAIL)
            return Err(ErrorKind.DUPLICATE_PHONE, MSG_DUPLICATE_PHONE)

        logger.info("Member registered: %s", email)
        return Ok(MSG_JOIN_SUCCESS)

    async def login(
        self,
        db: AsyncSession,
        data: MemberLoginRequest,
    ) -> Result[LoginResponse]:
        """이메일/비밀번호로 로그인하고 토큰을 발급합니다.

        Authenticate with email and password and issue a signed token
        carrying the member's email and display name.

        Returns:
            Result[LoginResponse]: 토큰과 이름, 또는 INVALID_CREDENTIALS
        """
        member: Member | None = await member_repository.get_by_email(db, normalize_email(data.email))
        if member is None:
            return Err(ErrorKind.INVALID_CREDENTIALS, MSG_EMAIL_NOT_FOUND)
        if not verify_password(data.password, member.password_hash):
            return Err(ErrorKind.INVALID_CREDENTIALS, MSG_WRONG_PASSWORD)

        token: str = create_access_token(member.email, member.name)
        return Ok(LoginResponse(token=token, name=member.name))

    async def get_profile(
        self,
        db: AsyncSession,
        token: str | None,
    ) -> Result[MemberProfileResponse]:
        """마이페이지 — 현재 회원의 프로필을 조회합니다.

        Read the calling member's profile.
        """
        caller = await resolve_caller(db, token)
        if isinstance(caller, Err):
            return caller
        return Ok(self._to_profile(caller.value))

    async def verify_password(
        self,
        db: AsyncSession,
        token: str | None,
        password: str,
    ) -> Result[bool]:
        """정보 수정 전 비밀번호를 재확인합니다.

        Re-authentication gate before sensitive edits. Read-only.

        Returns:
            Result[bool]: 일치 여부 (Whether the password matches)
        """
        caller = await resolve_caller(db, token)
        if isinstance(caller, Err):
            return caller
        return Ok(verify_password(password, caller.value.password_hash))

    async def update_profile(
        self,
        db: AsyncSession,
        token: str | None,
        data: MemberUpdateRequest,
    ) -> Result[bool]:
        """회원 정보(전화번호, 비밀번호)를 수정합니다.

        Update the caller's phone number and, when given, password.
        The phone number is only checked for duplicates when it changes.
        An empty or missing password keeps the stored hash.
        The display name is never modified.

        Returns:
            Result[bool]: True 또는 DUPLICATE_PHONE 등 오류
        """
        caller = await resolve_caller(db, token)
        if isinstance(caller, Err):
            return caller
        member: Member = caller.value

        if member.phone_number != data.phone_number:
            if await member_repository.get_by_phone_number(db, data.phone_number) is not None:
                return Err(ErrorKind.DUPLICATE_PHONE, MSG_DUPLICATE_PHONE)

        try:
            async with UnitOfWork(db) as uow:
                member.phone_number = data.phone_number
                if data.password:
                    member.password_hash = hash_password(data.password)
                await member_repository.save(db, member)
                await uow.commit()
        except IntegrityError:
            return Err(ErrorKind.DUPLICATE_PHONE, MSG_DUPLICATE_PHONE)

        return Ok(True)

    async def check_phone_available(
        self,
        db: AsyncSession,
        phone_number: str,
    ) -> Result[bool]:
        """전화번호 사용 가능 여부 — 사용 중인 회원이 없으면 True.

        Phone availability check. True means no member owns the number.
        """
        existing: Member | None = await member_repository.get_by_phone_number(db, phone_number)
        return Ok(existing is None)

    async def check_email_available(
        self,
        db: AsyncSession,
        email: str,
    ) -> Result[str]:
        """이메일 중복 확인 — 사용 중이면 DUPLICATE_EMAIL 오류.

        Email availability check. Unlike the phone check, unavailability is
        reported through the error channel, not a boolean.

        Returns:
            Result[str]: "사용 가능한 이메일입니다." 또는 DUPLICATE_EMAIL
        """
        existing: Member | None = await member_repository.get_by_email(db, normalize_email(email))
        if existing is not None:
            return Err(ErrorKind.DUPLICATE_EMAIL, MSG_DUPLICATE_EMAIL)
        return Ok(MSG_EMAIL_AVAILABLE)


# 싱글턴 인스턴스 — Singleton instance
member_service: MemberService = MemberService()
