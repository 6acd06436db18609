"""버그 서비스 — 전이 엔진 검증 후 저장소 호출.

Bug Service — Validates every action with the transition engine, then calls
the record store. Validation and permission errors are raised before the
store is touched; store errors propagate unchanged and are never retried.
Mutations return the optimistically patched record instead of re-fetching.
"""

from datetime import datetime, timezone
from typing import Sequence

from app.repositories.bug_repository import BugStore
from app.schemas.bug import Actor, BugCreate, BugFilters, BugRecord, BugUpdate, SortConfig, TrendBucket
from app.services.transition_service import transition_engine
from app.services.view_service import view_pipeline
from app.utils.exceptions import NotFoundError


class BugService:
    """버그 서비스.

    Orchestrates engine -> store -> local patch for each bug action.
    """

    async def get_or_404(self, store: BugStore, bug_id: str) -> BugRecord:
        record = await store.get(bug_id)
        if record is None:
            raise NotFoundError("버그를 찾을 수 없습니다 (Bug not found)")
        return record

    async def list_view(
        self,
        store: BugStore,
        actor: Actor,
        filters: BugFilters,
        sort: SortConfig,
    ) -> tuple[list[BugRecord], list[TrendBucket]]:
        """전체 레코드를 가져와 역할 범위 목록과 추세를 계산합니다."""
        records: Sequence[BugRecord] = await store.list_all()
        return view_pipeline.recompute(records, filters, sort, actor)

    async def create_bug(self, store: BugStore, actor: Actor, data: BugCreate) -> BugRecord:
        """버그 생성 — 개발자 전용, 초기 상태는 open 또는 in-progress."""
        draft = transition_engine.validate_create(actor, data)
        bug_id: str = await store.create(draft)
        # 저장소가 타임스탬프를 부여하지만 재조회 없이 로컬 값으로 응답
        now = datetime.now(timezone.utc)
        return BugRecord(id=bug_id, created_at=now, updated_at=now, **draft)

    async def update_bug(
        self,
        store: BugStore,
        actor: Actor,
        bug_id: str,
        data: BugUpdate,
    ) -> BugRecord:
        """작성자 직접 수정."""
        record = await self.get_or_404(store, bug_id)
        patch = transition_engine.validate_update(actor, record, data)
        await store.update(bug_id, patch)
        return transition_engine.apply(record, patch)

    async def delete_bug(self, store: BugStore, actor: Actor, bug_id: str) -> None:
        """작성자 삭제 — 상태 무관."""
        record = await self.get_or_404(store, bug_id)
        transition_engine.check_delete(actor, record)
        await store.delete(bug_id)

    async def close_bug(self, store: BugStore, actor: Actor, bug_id: str) -> BugRecord:
        """종료 요청 — pending-approval로 전이."""
        record = await self.get_or_404(store, bug_id)
        patch = transition_engine.close(actor, record)
        await store.update(bug_id, patch)
        return transition_engine.apply(record, patch)

    async def approve_bug(self, store: BugStore, actor: Actor, bug_id: str) -> BugRecord:
        """종료 승인 — closed로 전이. 관리자 전용."""
        record = await self.get_or_404(store, bug_id)
        patch = transition_engine.approve(actor, record)
        await store.update(bug_id, patch)
        return transition_engine.apply(record, patch)

    async def reopen_bug(self, store: BugStore, actor: Actor, bug_id: str) -> BugRecord:
        """재오픈 — open으로 전이. 관리자 전용."""
        record = await self.get_or_404(store, bug_id)
        patch = transition_engine.reopen(actor, record)
        await store.update(bug_id, patch)
        return transition_engine.apply(record, patch)


bug_service: BugService = BugService()
