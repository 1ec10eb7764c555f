"""앱 API 라우터 패키지 — 모든 엔드포인트 통합.

App API Router package — Aggregates all endpoints into a single router
for inclusion in the FastAPI application.

Included routers:
    - members: 회원가입, 로그인, 마이페이지, 중복 확인 (Members)
    - reviews: 리뷰 작성, 목록, 미작성 개수 (Reviews)
"""

from fastapi import APIRouter

from app.api.app.members import router as members_router
from app.api.app.reviews import router as reviews_router

app_router: APIRouter = APIRouter()

# 회원: /members 하위 (Member endpoints)
app_router.include_router(members_router, prefix="/members", tags=["Members"])
# 리뷰: /reviews 하위 (Review endpoints)
app_router.include_router(reviews_router, prefix="/reviews", tags=["Reviews"])
