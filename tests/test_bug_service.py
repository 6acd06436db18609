"""버그 서비스 테스트.

Bug service tests — Engine-before-store ordering, optimistic patches,
and StoreUnavailable propagation.
"""

import pytest

from app.schemas.bug import BugCreate, BugFilters, BugUpdate, SortConfig
from app.services.bug_service import bug_service
from app.services.dashboard_service import dashboard_service
from app.utils.exceptions import (
    InvalidTransitionError,
    NotFoundError,
    PermissionDeniedError,
    StoreUnavailableError,
    ValidationError,
)

from tests.conftest import ALICE, BOB, MORGAN, FailingBugStore, InMemoryBugStore, make_bug


class TestMutations:
    """전이 후 저장소 호출."""

    async def test_create_persists_draft(self):
        store = InMemoryBugStore()
        record = await bug_service.create_bug(store, ALICE, BugCreate(title="Crash", project="Project B"))
        assert record.created_by == "Alice"
        assert record.created_at is not None
        assert store.records[record.id].title == "Crash"
        assert [c[0] for c in store.mutations] == ["create"]

    async def test_full_workflow(self):
        store = InMemoryBugStore([make_bug("b1", created_by="Alice")])

        closed = await bug_service.close_bug(store, ALICE, "b1")
        assert closed.status == "pending-approval"
        approved = await bug_service.approve_bug(store, MORGAN, "b1")
        assert approved.status == "closed"

        stored = store.records["b1"]
        assert stored.status == "closed"
        assert stored.closed_by == "Alice"
        assert stored.closed_at is not None
        assert stored.approved_by == "Morgan"
        assert stored.approved_at is not None

    async def test_optimistic_record_matches_store(self):
        store = InMemoryBugStore([make_bug("b1")])
        updated = await bug_service.update_bug(store, ALICE, "b1", BugUpdate(priority="high"))
        assert updated == store.records["b1"]

    async def test_delete(self):
        store = InMemoryBugStore([make_bug("b1")])
        await bug_service.delete_bug(store, ALICE, "b1")
        assert "b1" not in store.records

    async def test_missing_bug_is_404(self):
        with pytest.raises(NotFoundError):
            await bug_service.close_bug(InMemoryBugStore(), ALICE, "nope")


class TestRejectedBeforeStore:
    """검증/권한 오류는 저장소 변경 호출 전에 발생."""

    async def test_non_creator_delete(self):
        store = InMemoryBugStore([make_bug("b1", created_by="Alice")])
        with pytest.raises(PermissionDeniedError):
            await bug_service.delete_bug(store, BOB, "b1")
        assert store.mutations == []
        assert "b1" in store.records

    async def test_developer_approve(self):
        store = InMemoryBugStore([make_bug("b1", status="pending-approval")])
        with pytest.raises(PermissionDeniedError):
            await bug_service.approve_bug(store, ALICE, "b1")
        assert store.mutations == []
        assert store.records["b1"].status == "pending-approval"

    async def test_invalid_transition(self):
        store = InMemoryBugStore([make_bug("b1", status="closed")])
        with pytest.raises(InvalidTransitionError):
            await bug_service.close_bug(store, ALICE, "b1")
        assert store.mutations == []

    async def test_validation_error_on_create(self):
        store = InMemoryBugStore()
        with pytest.raises(ValidationError):
            await bug_service.create_bug(store, ALICE, BugCreate(title="", project="Project A"))
        assert store.calls == []


class TestStoreUnavailable:
    """저장소 오류는 변경 없이 그대로 전달."""

    async def test_list_propagates(self):
        store = FailingBugStore()
        with pytest.raises(StoreUnavailableError):
            await bug_service.list_view(store, ALICE, BugFilters(), SortConfig())
        assert store.calls == ["list_all"]

    async def test_create_propagates_without_retry(self):
        store = FailingBugStore()
        with pytest.raises(StoreUnavailableError):
            await bug_service.create_bug(store, ALICE, BugCreate(title="x", project="Project A"))
        assert store.calls == ["create"]

    async def test_dashboard_propagates(self):
        with pytest.raises(StoreUnavailableError):
            await dashboard_service.get_dashboard(FailingBugStore())
