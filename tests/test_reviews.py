"""리뷰 API 테스트 — 작성, 이미지 업로드, 목록, 미작성 개수.

Review API tests — Creation (multipart, optional image), listings,
and the pending count, including upload failure handling.
"""

from pathlib import Path

from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.review import Review
from tests.conftest import auth_header, create_result_menu

URL = "/api/v1/reviews"


async def _review_count(db: AsyncSession) -> int:
    return (await db.execute(select(func.count()).select_from(Review))).scalar() or 0


class TestReviewCreate:
    """리뷰 작성 테스트."""

    async def test_create_without_image(self, client: AsyncClient, result_menu, member_token):
        """이미지 없이 리뷰 작성."""
        res = await client.post(
            URL,
            data={"resultMenuId": "42", "content": "great food"},
            headers=auth_header(member_token),
        )
        assert res.status_code == 201
        data = res.json()
        assert data["result_menu_id"] == 42
        assert data["content"] == "great food"
        assert data["image_url"] is None
        assert result_menu.is_reviewed is True

    async def test_create_twice_conflicts(self, client: AsyncClient, result_menu, member_token):
        """같은 결과 메뉴에 두 번째 리뷰 — 409."""
        await client.post(URL, data={"resultMenuId": "42", "content": "great food"}, headers=auth_header(member_token))
        res = await client.post(URL, data={"resultMenuId": "42", "content": "again"}, headers=auth_header(member_token))
        assert res.status_code == 409
        assert res.json()["detail"] == "이미 리뷰가 작성된 상태입니다."

    async def test_create_with_image(self, client: AsyncClient, result_menu, member_token, fake_ftp):
        """이미지 첨부 — FTP 저장, 임시 파일 삭제, 연결 종료."""
        res = await client.post(
            URL,
            data={"resultMenuId": "42", "content": "photo review"},
            files={"reviewImage": ("dish.jpg", b"\xff\xd8jpegbytes", "image/jpeg")},
            headers=auth_header(member_token),
        )
        assert res.status_code == 201
        image_url = res.json()["image_url"]
        assert image_url.endswith(".jpg")

        remote_path = f"{settings.FTP_REVIEW_DIR.rstrip('/')}/{image_url}"
        assert fake_ftp.stored == {remote_path: b"\xff\xd8jpegbytes"}
        assert all(ftp.closed for ftp in fake_ftp.instances)
        assert list(Path(settings.UPLOAD_TMP_DIR).iterdir()) == []

    async def test_upload_failure_aborts_review(
        self, client: AsyncClient, db: AsyncSession, result_menu, member_token, fake_ftp
    ):
        """업로드 실패 — 502, 리뷰 미저장, 플래그 유지, 임시 파일 삭제."""
        fake_ftp.fail_on_store = True
        res = await client.post(
            URL,
            data={"resultMenuId": "42", "content": "photo review"},
            files={"reviewImage": ("dish.png", b"pngbytes", "image/png")},
            headers=auth_header(member_token),
        )
        assert res.status_code == 502
        assert await _review_count(db) == 0
        assert result_menu.is_reviewed is False
        assert all(ftp.closed for ftp in fake_ftp.instances)
        assert list(Path(settings.UPLOAD_TMP_DIR).iterdir()) == []

    async def test_create_empty_content(self, client: AsyncClient, result_menu, member_token):
        """빈 내용 — 400."""
        res = await client.post(URL, data={"resultMenuId": "42", "content": "   "}, headers=auth_header(member_token))
        assert res.status_code == 400
        assert res.json()["detail"] == "내용을 작성해주세요."

    async def test_create_unknown_result_menu(self, client: AsyncClient, member, member_token):
        """없는 결과 메뉴 — 404."""
        res = await client.post(URL, data={"resultMenuId": "999", "content": "hi"}, headers=auth_header(member_token))
        assert res.status_code == 404

    async def test_create_not_owner(self, client: AsyncClient, result_menu, other_token):
        """다른 회원의 결과 메뉴 — 403, 플래그 유지."""
        res = await client.post(URL, data={"resultMenuId": "42", "content": "nice"}, headers=auth_header(other_token))
        assert res.status_code == 403
        assert result_menu.is_reviewed is False

    async def test_create_without_token(self, client: AsyncClient, result_menu):
        """토큰 없음 — 401."""
        res = await client.post(URL, data={"resultMenuId": "42", "content": "nice"})
        assert res.status_code == 401


class TestReviewList:
    """리뷰 목록 및 미작성 개수 테스트."""

    async def test_list_reviews_paginated(
        self, client: AsyncClient, db: AsyncSession, member, other_member, member_token, other_token
    ):
        """전체 목록 — 모든 회원의 리뷰, 페이지 메타데이터."""
        mine = await create_result_menu(db, member)
        theirs = await create_result_menu(db, other_member, restaurant_name="북경반점")
        await client.post(URL, data={"resultMenuId": str(mine.id), "content": "mine"}, headers=auth_header(member_token))
        await client.post(URL, data={"resultMenuId": str(theirs.id), "content": "theirs"}, headers=auth_header(other_token))

        res = await client.get(URL, params={"page": 1, "per_page": 1})
        assert res.status_code == 200
        data = res.json()
        assert data["total"] == 2
        assert data["pages"] == 2
        assert len(data["items"]) == 1

        all_items = (await client.get(URL)).json()["items"]
        assert {item["member_name"] for item in all_items} == {"Ann", "Bob"}
        assert {item["restaurant_name"] for item in all_items} == {"김밥천국", "북경반점"}

    async def test_list_my_reviews(
        self, client: AsyncClient, db: AsyncSession, member, other_member, member_token, other_token
    ):
        """내 리뷰 목록 — 내 결과 메뉴의 리뷰만."""
        mine = await create_result_menu(db, member)
        theirs = await create_result_menu(db, other_member)
        await client.post(URL, data={"resultMenuId": str(mine.id), "content": "mine"}, headers=auth_header(member_token))
        await client.post(URL, data={"resultMenuId": str(theirs.id), "content": "theirs"}, headers=auth_header(other_token))

        res = await client.get(f"{URL}/my", headers=auth_header(member_token))
        assert res.status_code == 200
        data = res.json()
        assert data["total"] == 1
        assert data["items"][0]["content"] == "mine"

    async def test_list_my_reviews_requires_token(self, client: AsyncClient):
        res = await client.get(f"{URL}/my")
        assert res.status_code == 401

    async def test_pending_count(self, client: AsyncClient, db: AsyncSession, member, other_member, member_token):
        """결과 메뉴 3개 중 1개 작성 완료 — 미작성 2."""
        await create_result_menu(db, member)
        await create_result_menu(db, member)
        await create_result_menu(db, member, is_reviewed=True)
        await create_result_menu(db, other_member)

        res = await client.get(f"{URL}/pending-count", headers=auth_header(member_token))
        assert res.status_code == 200
        assert res.json() == {"count": 2}

    async def test_per_page_limit(self, client: AsyncClient):
        res = await client.get(URL, params={"per_page": 1000})
        assert res.status_code == 422
