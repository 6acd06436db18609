"""버그 레포지토리 및 레코드 저장소 어댑터.

Bug repository and record store adapter.
BugStore is the contract the bug service consumes; SqlBugStore fulfils it
on top of the SQLAlchemy repository, one committed call per operation.
"""

from typing import Any, Protocol, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.bug import Bug
from app.repositories.base import BaseRepository
from app.schemas.bug import BugRecord
from app.utils.exceptions import NotFoundError


class BugStore(Protocol):
    """레코드 저장소 계약 — 모든 호출은 StoreUnavailableError로 실패할 수 있음.

    Record store contract. Any call may fail with StoreUnavailableError;
    callers do not retry.
    """

    async def list_all(self) -> Sequence[BugRecord]: ...

    async def get(self, record_id: str) -> BugRecord | None: ...

    async def create(self, draft: dict[str, Any]) -> str: ...

    async def update(self, record_id: str, patch: dict[str, Any]) -> None: ...

    async def delete(self, record_id: str) -> None: ...


def to_record(bug: Bug) -> BugRecord:
    """ORM 객체를 BugRecord로 변환합니다."""
    return BugRecord(
        id=str(bug.id),
        title=bug.title,
        description=bug.description or "",
        status=bug.status,
        priority=bug.priority,
        project=bug.project,
        assignee=bug.assignee,
        created_by=bug.created_by,
        due_date=bug.due_date,
        labels=list(bug.labels or []),
        created_at=bug.created_at,
        updated_at=bug.updated_at,
        closed_by=bug.closed_by,
        closed_at=bug.closed_at,
        approved_by=bug.approved_by,
        approved_at=bug.approved_at,
    )


def _parse_id(record_id: str) -> UUID | None:
    try:
        return UUID(record_id)
    except ValueError:
        return None


class BugRepository(BaseRepository[Bug]):

    def __init__(self) -> None:
        super().__init__(Bug)


bug_repository: BugRepository = BugRepository()


class SqlBugStore:
    """SQLAlchemy 기반 BugStore 구현.

    BugStore backed by the bugs table. Bound to one request session.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db: AsyncSession = db

    async def list_all(self) -> Sequence[BugRecord]:
        bugs = await bug_repository.get_all(self.db, order_by=Bug.created_at)
        return [to_record(b) for b in bugs]

    async def get(self, record_id: str) -> BugRecord | None:
        uid = _parse_id(record_id)
        if uid is None:
            return None
        bug = await bug_repository.get_by_id(self.db, uid)
        return to_record(bug) if bug is not None else None

    async def create(self, draft: dict[str, Any]) -> str:
        bug = await bug_repository.create(self.db, draft)
        return str(bug.id)

    async def update(self, record_id: str, patch: dict[str, Any]) -> None:
        uid = _parse_id(record_id)
        updated = await bug_repository.update(self.db, uid, patch) if uid else None
        if updated is None:
            raise NotFoundError("버그를 찾을 수 없습니다 (Bug not found)")

    async def delete(self, record_id: str) -> None:
        uid = _parse_id(record_id)
        deleted = await bug_repository.delete(self.db, uid) if uid else False
        if not deleted:
            raise NotFoundError("버그를 찾을 수 없습니다 (Bug not found)")
