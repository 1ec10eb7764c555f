"""회원 라우터 — 회원가입, 로그인, 로그아웃, 마이페이지, 중복 확인.

Member Router — Registration, login, logout, my-page, and duplicate checks.
Follows 3-layer architecture: Router → Service → Repository.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import TOKEN_COOKIE_NAME, get_token
from app.database import get_db
from app.schemas.member import (
    LoginResponse,
    MemberJoinRequest,
    MemberLoginRequest,
    MemberProfileResponse,
    MemberUpdateRequest,
    MemberUpdateResponse,
    MessageResponse,
    PasswordVerifyRequest,
    PasswordVerifyResponse,
    PhoneCheckResponse,
)
from app.services.member_service import member_service
from app.utils.exceptions import unwrap_or_raise

router: APIRouter = APIRouter()


@router.post("/join", response_model=MessageResponse, status_code=201)
async def join(
    data: MemberJoinRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MessageResponse:
    """회원가입.

    Register a new member. 409 on duplicate email or phone number.
    """
    message: str = unwrap_or_raise(await member_service.register(db, data))
    return MessageResponse(message=message)


@router.post("/login", response_model=LoginResponse)
async def login(
    data: MemberLoginRequest,
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> LoginResponse:
    """로그인 — 토큰을 본문과 HttpOnly 쿠키로 반환.

    Login. Returns the token in the body and as an HttpOnly cookie.
    """
    result: LoginResponse = unwrap_or_raise(await member_service.login(db, data))
    response.headers.append("Set-Cookie", result.cookie)
    return result


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response) -> MessageResponse:
    """로그아웃 — 토큰 쿠키 만료.

    Logout. Expires the token cookie; the JWT itself is stateless.
    """
    response.delete_cookie(TOKEN_COOKIE_NAME, path="/", httponly=True)
    return MessageResponse(message="로그아웃 되었습니다.")


@router.get("/mypage", response_model=MemberProfileResponse)
async def get_my_page(
    db: Annotated[AsyncSession, Depends(get_db)],
    token: Annotated[str | None, Depends(get_token)],
) -> MemberProfileResponse:
    """마이페이지 조회 (Read my profile)."""
    return unwrap_or_raise(await member_service.get_profile(db, token))


@router.post("/verify-password", response_model=PasswordVerifyResponse)
async def verify_password(
    data: PasswordVerifyRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    token: Annotated[str | None, Depends(get_token)],
) -> PasswordVerifyResponse:
    """정보 수정 전 비밀번호 확인 (Password check before editing)."""
    verified: bool = unwrap_or_raise(await member_service.verify_password(db, token, data.password))
    return PasswordVerifyResponse(verified=verified)


@router.put("/mypage", response_model=MemberUpdateResponse)
async def update_my_page(
    data: MemberUpdateRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    token: Annotated[str | None, Depends(get_token)],
) -> MemberUpdateResponse:
    """회원 정보 수정 — 전화번호, 비밀번호.

    Update phone number and, optionally, password.
    """
    updated: bool = unwrap_or_raise(await member_service.update_profile(db, token, data))
    return MemberUpdateResponse(updated=updated)


@router.get("/check-email", response_model=MessageResponse)
async def check_email(
    email: Annotated[str, Query(min_length=1)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MessageResponse:
    """이메일 중복 확인 — 사용 중이면 409.

    Email availability check. 409 when already registered.
    """
    message: str = unwrap_or_raise(await member_service.check_email_available(db, email))
    return MessageResponse(message=message)


@router.get("/check-phone", response_model=PhoneCheckResponse)
async def check_phone(
    phone_number: Annotated[str, Query(min_length=1)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PhoneCheckResponse:
    """전화번호 사용 가능 여부 (Phone number availability)."""
    available: bool = unwrap_or_raise(await member_service.check_phone_available(db, phone_number))
    return PhoneCheckResponse(available=available)
