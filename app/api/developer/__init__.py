"""개발자 API 라우터 패키지 — 버그 작성/수정/삭제/종료 요청.

Developer API Router package — Aggregates developer-facing endpoints.

Included routers:
    - bugs: 내 버그 목록, 생성, 수정, 삭제, 종료 요청
      (Scoped bug list, create, update, delete, close)
"""

from fastapi import APIRouter

from app.api.developer.bugs import router as bugs_router

developer_router: APIRouter = APIRouter()

developer_router.include_router(bugs_router, prefix="/bugs", tags=["Developer Bugs"])
