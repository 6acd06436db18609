"""관리자 버그 라우터 — 전체 버그 조회 및 종료 승인 API.

Manager Bug Router — Unscoped bug list plus approve/reopen of closure requests.
A developer calling approve/reopen gets 403 from the transition engine.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.deps import get_bug_store, get_current_actor, get_view_config, require_manager
from app.repositories.bug_repository import BugStore
from app.schemas.bug import Actor, BugFilters, BugListResponse, BugRecord, SortConfig
from app.services.bug_service import bug_service

router: APIRouter = APIRouter()


@router.get("", response_model=BugListResponse)
async def list_all_bugs(
    store: Annotated[BugStore, Depends(get_bug_store)],
    actor: Annotated[Actor, Depends(require_manager)],
    view: Annotated[tuple[BugFilters, SortConfig], Depends(get_view_config)],
) -> dict:
    """전체 버그 목록 조회. 관리자 전용."""
    filters, sort = view
    items, trend = await bug_service.list_view(store, actor, filters, sort)
    return {"items": items, "total": len(items), "sort": sort, "trend": trend}


@router.post("/{bug_id}/approve", response_model=BugRecord)
async def approve_bug(
    bug_id: str,
    store: Annotated[BugStore, Depends(get_bug_store)],
    actor: Annotated[Actor, Depends(get_current_actor)],
) -> BugRecord:
    """종료 승인 — pending-approval -> closed."""
    return await bug_service.approve_bug(store, actor, bug_id)


@router.post("/{bug_id}/reopen", response_model=BugRecord)
async def reopen_bug(
    bug_id: str,
    store: Annotated[BugStore, Depends(get_bug_store)],
    actor: Annotated[Actor, Depends(get_current_actor)],
) -> BugRecord:
    """재오픈 — pending-approval -> open."""
    return await bug_service.reopen_bug(store, actor, bug_id)
