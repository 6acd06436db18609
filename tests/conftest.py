"""테스트 인프라 — 인메모리 레코드 저장소, httpx 클라이언트, 행위자 토큰 픽스처.

Test infrastructure — In-memory record store, httpx client, and actor token fixtures.
The record store dependency is overridden so tests never need a live database.
The in-memory store records every call so "no store call" is assertable.
"""

import uuid
from collections.abc import AsyncGenerator
from datetime import datetime, timezone
from typing import Any, Sequence

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.api.deps import get_bug_store
from app.main import app
from app.schemas.bug import Actor, BugRecord
from app.utils.exceptions import NotFoundError, StoreUnavailableError
from app.utils.jwt import create_access_token

MUTATING_CALLS: set[str] = {"create", "update", "delete"}


# ---------------------------------------------------------------------------
# 인메모리 저장소
# ---------------------------------------------------------------------------
class InMemoryBugStore:
    """BugStore 계약을 따르는 테스트용 저장소."""

    def __init__(self, records: Sequence[BugRecord] = ()) -> None:
        self.records: dict[str, BugRecord] = {r.id: r for r in records}
        self.calls: list[tuple[Any, ...]] = []

    @property
    def mutations(self) -> list[tuple[Any, ...]]:
        return [c for c in self.calls if c[0] in MUTATING_CALLS]

    async def list_all(self) -> Sequence[BugRecord]:
        self.calls.append(("list_all",))
        return list(self.records.values())

    async def get(self, record_id: str) -> BugRecord | None:
        self.calls.append(("get", record_id))
        return self.records.get(record_id)

    async def create(self, draft: dict[str, Any]) -> str:
        self.calls.append(("create", draft))
        record_id = str(uuid.uuid4())
        now = datetime.now(timezone.utc)
        self.records[record_id] = BugRecord(id=record_id, created_at=now, updated_at=now, **draft)
        return record_id

    async def update(self, record_id: str, patch: dict[str, Any]) -> None:
        self.calls.append(("update", record_id, patch))
        if record_id not in self.records:
            raise NotFoundError("Bug not found")
        self.records[record_id] = self.records[record_id].model_copy(update=patch)

    async def delete(self, record_id: str) -> None:
        self.calls.append(("delete", record_id))
        if self.records.pop(record_id, None) is None:
            raise NotFoundError("Bug not found")


class FailingBugStore:
    """모든 호출이 StoreUnavailableError로 실패하는 저장소."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    async def _fail(self, name: str) -> Any:
        self.calls.append(name)
        raise StoreUnavailableError("connection refused")

    async def list_all(self) -> Sequence[BugRecord]:
        return await self._fail("list_all")

    async def get(self, record_id: str) -> BugRecord | None:
        return await self._fail("get")

    async def create(self, draft: dict[str, Any]) -> str:
        return await self._fail("create")

    async def update(self, record_id: str, patch: dict[str, Any]) -> None:
        return await self._fail("update")

    async def delete(self, record_id: str) -> None:
        return await self._fail("delete")


# ---------------------------------------------------------------------------
# 레코드/행위자 헬퍼
# ---------------------------------------------------------------------------
def make_bug(
    bug_id: str = "bug-1",
    *,
    title: str = "Login button broken",
    status: str = "open",
    priority: str = "medium",
    project: str = "Project A",
    created_by: str = "Alice",
    assignee: str | None = None,
    created_at: datetime | None = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc),
    **extra: Any,
) -> BugRecord:
    """테스트용 버그 레코드를 생성합니다."""
    return BugRecord(
        id=bug_id,
        title=title,
        status=status,
        priority=priority,
        project=project,
        created_by=created_by,
        assignee=assignee,
        created_at=created_at,
        updated_at=created_at,
        **extra,
    )


ALICE = Actor(name="Alice", role="developer")
BOB = Actor(name="Bob", role="developer")
MORGAN = Actor(name="Morgan", role="manager")


@pytest.fixture
def alice() -> Actor:
    return ALICE


@pytest.fixture
def bob() -> Actor:
    return BOB


@pytest.fixture
def morgan() -> Actor:
    return MORGAN


# ---------------------------------------------------------------------------
# 저장소 및 클라이언트
# ---------------------------------------------------------------------------
@pytest.fixture
def store() -> InMemoryBugStore:
    """빈 인메모리 저장소."""
    return InMemoryBugStore()


@pytest_asyncio.fixture
async def client(store: InMemoryBugStore) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — 레코드 저장소를 오버라이드합니다."""
    app.dependency_overrides[get_bug_store] = lambda: store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


def make_token(actor: Actor) -> str:
    """테스트용 JWT 액세스 토큰을 생성합니다."""
    return create_access_token({"sub": actor.name, "role": actor.role})


@pytest.fixture
def alice_token() -> str:
    return make_token(ALICE)


@pytest.fixture
def bob_token() -> str:
    return make_token(BOB)


@pytest.fixture
def manager_token() -> str:
    return make_token(MORGAN)


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
