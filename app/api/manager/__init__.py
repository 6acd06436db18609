"""관리자 API 라우터 패키지 — 전체 버그 조회, 종료 승인, 대시보드.

Manager API Router package — Aggregates manager-facing endpoints.

Included routers:
    - bugs: 전체 버그 목록, 승인, 재오픈 (All bugs, approve, reopen)
    - dashboard: 상태 카드, 추세, Excel 내보내기 (Stat cards, trend, Excel export)
"""

from fastapi import APIRouter

from app.api.manager.bugs import router as bugs_router
from app.api.manager.dashboard import router as dashboard_router

manager_router: APIRouter = APIRouter()

manager_router.include_router(bugs_router, prefix="/bugs", tags=["Manager Bugs"])
manager_router.include_router(dashboard_router, prefix="/dashboard", tags=["Dashboard"])
