"""FastAPI 의존성 주입 모듈 — 행위자 확인, 역할 검사, 저장소 주입.

FastAPI dependency injection module — Actor resolution, role gating,
and record store injection.

Actor Flow:
    1. 클라이언트가 Authorization: Bearer <token> 헤더를 전송
       (Client sends Authorization: Bearer <token> header)
    2. decode_token()이 JWT를 검증하고 페이로드를 반환
       (decode_token verifies the JWT issued by the identity service)
    3. 페이로드의 "sub"(이름)과 "role"로 Actor 생성
       (Actor is built from the "sub" (name) and "role" claims)
    4. Actor는 서비스 호출마다 명시적으로 전달됨
       (The actor is passed explicitly into every service call)
"""

from typing import Annotated

import jwt
from fastapi import Depends, Query, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.repositories.bug_repository import BugStore, SqlBugStore
from app.schemas.bug import Actor, BugFilters, SortConfig
from app.services.transition_service import ROLE_DEVELOPER, ROLE_MANAGER
from app.utils.exceptions import PermissionDeniedError, UnauthorizedError
from app.utils.jwt import decode_token

# HTTP Bearer 토큰 추출기 — auto_error=False: 누락 시 401로 직접 응답
security: HTTPBearer = HTTPBearer(auto_error=False)

_ROLES: set[str] = {ROLE_DEVELOPER, ROLE_MANAGER}


async def get_current_actor(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> Actor:
    """JWT 토큰에서 현재 행위자를 추출합니다.

    Decode the bearer token and return the acting user.

    Raises:
        UnauthorizedError: 토큰 누락/만료/무효 또는 알 수 없는 역할
                           (Missing, expired or invalid token, or unknown role)
    """
    if credentials is None:
        raise UnauthorizedError()
    try:
        payload: dict = decode_token(credentials.credentials)
    except (jwt.ExpiredSignatureError, jwt.InvalidTokenError):
        raise UnauthorizedError("Invalid or expired token")

    if payload.get("type") != "access":
        raise UnauthorizedError("Invalid token type")
    name = payload.get("sub")
    role = payload.get("role")
    if not name or role not in _ROLES:
        raise UnauthorizedError("Invalid token")

    actor = Actor(name=name, role=role)
    # 로깅 미들웨어에서 사용 — Picked up by the Axiom logging middleware
    request.state.actor = actor
    return actor


async def require_manager(
    actor: Annotated[Actor, Depends(get_current_actor)],
) -> Actor:
    """관리자 역할만 허용합니다 (대시보드 집계용)."""
    if actor.role != ROLE_MANAGER:
        raise PermissionDeniedError("관리자만 접근할 수 있습니다 (Managers only)")
    return actor


async def get_bug_store(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BugStore:
    """요청 세션에 묶인 레코드 저장소를 반환합니다."""
    return SqlBugStore(db)


def get_view_config(
    status: Annotated[str, Query()] = "",
    priority: Annotated[str, Query()] = "",
    project: Annotated[str, Query()] = "",
    sort_key: Annotated[str, Query()] = "created_at",
    direction: Annotated[str, Query()] = "desc",
) -> tuple[BugFilters, SortConfig]:
    """목록 조회 쿼리 파라미터 — 필터와 정렬 설정."""
    return (
        BugFilters(status=status, priority=priority, project=project),
        SortConfig(key=sort_key, direction=direction),
    )
