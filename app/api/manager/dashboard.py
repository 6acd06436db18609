"""관리자 대시보드 라우터 — 대시보드 집계 API.

Manager Dashboard Router — Status stat cards, daily bug trend, Excel export.

Permission: manager only
"""

from io import BytesIO
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from app.api.deps import get_bug_store, require_manager
from app.repositories.bug_repository import BugStore
from app.schemas.bug import Actor, DashboardResponse
from app.services.dashboard_service import dashboard_service

router: APIRouter = APIRouter()


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    store: Annotated[BugStore, Depends(get_bug_store)],
    actor: Annotated[Actor, Depends(require_manager)],
) -> dict:
    """상태별 카드 + 일별 추세 조회."""
    counts, trend = await dashboard_service.get_dashboard(store)
    return {"counts": counts, "trend": trend}


@router.get("/export")
async def export_dashboard(
    store: Annotated[BugStore, Depends(get_bug_store)],
    actor: Annotated[Actor, Depends(require_manager)],
) -> StreamingResponse:
    """대시보드 데이터를 Excel 파일로 내보냅니다."""
    excel_bytes: bytes = await dashboard_service.export_excel(store)
    return StreamingResponse(
        BytesIO(excel_bytes),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": "attachment; filename=bug_dashboard.xlsx"},
    )
