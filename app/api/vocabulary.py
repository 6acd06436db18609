"""공통 라우터 — 현재 행위자 및 고정 어휘 조회.

Common Router — Current actor and fixed vocabulary endpoints.
Shared by developer and manager clients.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.deps import get_current_actor
from app.config import settings
from app.schemas.bug import Actor, VocabularyResponse
from app.services.transition_service import BUG_PRIORITIES, BUG_STATUSES

router: APIRouter = APIRouter()


@router.get("/me", response_model=Actor)
async def get_me(
    actor: Annotated[Actor, Depends(get_current_actor)],
) -> Actor:
    """현재 행위자 조회 — 토큰의 이름과 역할."""
    return actor


@router.get("/vocabulary", response_model=VocabularyResponse)
async def get_vocabulary(
    actor: Annotated[Actor, Depends(get_current_actor)],
) -> dict:
    """프로젝트/팀원/라벨/상태/우선순위 목록 조회."""
    vocabulary = settings.vocabulary()
    return {
        "projects": list(vocabulary.projects),
        "team_members": list(vocabulary.team_members),
        "labels": list(vocabulary.labels),
        "statuses": list(BUG_STATUSES),
        "priorities": list(BUG_PRIORITIES),
    }
