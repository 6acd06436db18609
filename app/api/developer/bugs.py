"""개발자 버그 라우터 — 버그 작성/관리 API.

Developer Bug Router — Endpoints for filing and managing bugs.
The list is scoped to bugs the actor created or is assigned to.
Ownership rules are enforced by the transition engine, not by the route.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.deps import get_bug_store, get_current_actor, get_view_config
from app.repositories.bug_repository import BugStore
from app.schemas.bug import (
    Actor,
    BugCreate,
    BugFilters,
    BugListResponse,
    BugRecord,
    BugUpdate,
    SortConfig,
)
from app.schemas.common import MessageResponse
from app.services.bug_service import bug_service

router: APIRouter = APIRouter()


@router.get("", response_model=BugListResponse)
async def list_my_bugs(
    store: Annotated[BugStore, Depends(get_bug_store)],
    actor: Annotated[Actor, Depends(get_current_actor)],
    view: Annotated[tuple[BugFilters, SortConfig], Depends(get_view_config)],
) -> dict:
    """내 버그 목록 조회 — 작성자 또는 담당자인 버그만."""
    filters, sort = view
    items, trend = await bug_service.list_view(store, actor, filters, sort)
    return {"items": items, "total": len(items), "sort": sort, "trend": trend}


@router.post("", response_model=BugRecord, status_code=201)
async def create_bug(
    data: BugCreate,
    store: Annotated[BugStore, Depends(get_bug_store)],
    actor: Annotated[Actor, Depends(get_current_actor)],
) -> BugRecord:
    """버그 생성. 개발자만 가능."""
    return await bug_service.create_bug(store, actor, data)


@router.put("/{bug_id}", response_model=BugRecord)
async def update_bug(
    bug_id: str,
    data: BugUpdate,
    store: Annotated[BugStore, Depends(get_bug_store)],
    actor: Annotated[Actor, Depends(get_current_actor)],
) -> BugRecord:
    """버그 수정. 작성자만 가능."""
    return await bug_service.update_bug(store, actor, bug_id, data)


@router.delete("/{bug_id}", response_model=MessageResponse)
async def delete_bug(
    bug_id: str,
    store: Annotated[BugStore, Depends(get_bug_store)],
    actor: Annotated[Actor, Depends(get_current_actor)],
) -> dict:
    """버그 삭제. 작성자만 가능."""
    await bug_service.delete_bug(store, actor, bug_id)
    return {"message": "버그가 삭제되었습니다 (Bug deleted)"}


@router.post("/{bug_id}/close", response_model=BugRecord)
async def close_bug(
    bug_id: str,
    store: Annotated[BugStore, Depends(get_bug_store)],
    actor: Annotated[Actor, Depends(get_current_actor)],
) -> BugRecord:
    """종료 요청 — 작성자 또는 담당자가 pending-approval로 전환."""
    return await bug_service.close_bug(store, actor, bug_id)
