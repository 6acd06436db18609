"""관리자 API 테스트.

Manager API tests — Unscoped listing, approve/reopen, dashboard aggregates,
Excel export, and store failure surfacing.
"""

from datetime import datetime, timezone
from io import BytesIO

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from openpyxl import load_workbook

from app.api.deps import get_bug_store
from app.main import app

from tests.conftest import FailingBugStore, InMemoryBugStore, auth_header, make_bug

MGR = "/api/v1/manager"


class TestManagerBugs:
    """전체 목록 및 종료 승인."""

    async def test_list_all_unscoped(self, client: AsyncClient, manager_token, store: InMemoryBugStore):
        store.records.update({
            "1": make_bug("1", created_by="Alice"),
            "2": make_bug("2", created_by="Bob"),
        })
        res = await client.get(f"{MGR}/bugs", headers=auth_header(manager_token))
        assert res.status_code == 200
        assert res.json()["total"] == 2

    async def test_developer_cannot_list_all(self, client: AsyncClient, alice_token):
        res = await client.get(f"{MGR}/bugs", headers=auth_header(alice_token))
        assert res.status_code == 403

    async def test_approve(self, client: AsyncClient, manager_token, store: InMemoryBugStore):
        store.records["b1"] = make_bug("b1", status="pending-approval", closed_by="Alice",
                                       closed_at=datetime(2024, 1, 2, tzinfo=timezone.utc))
        res = await client.post(f"{MGR}/bugs/b1/approve", headers=auth_header(manager_token))
        assert res.status_code == 200
        data = res.json()
        assert data["status"] == "closed"
        assert data["approved_by"] == "Morgan"
        assert data["closed_by"] == "Alice"

    async def test_reopen_keeps_close_history(self, client: AsyncClient, manager_token, store: InMemoryBugStore):
        closed_at = datetime(2024, 1, 2, tzinfo=timezone.utc)
        store.records["b1"] = make_bug("b1", status="pending-approval", closed_by="Alice", closed_at=closed_at)
        res = await client.post(f"{MGR}/bugs/b1/reopen", headers=auth_header(manager_token))
        assert res.status_code == 200
        assert store.records["b1"].status == "open"
        assert store.records["b1"].closed_by == "Alice"
        assert store.records["b1"].closed_at == closed_at

    async def test_developer_approve_forbidden(self, client: AsyncClient, alice_token, store: InMemoryBugStore):
        store.records["b1"] = make_bug("b1", status="pending-approval")
        res = await client.post(f"{MGR}/bugs/b1/approve", headers=auth_header(alice_token))
        assert res.status_code == 403
        assert store.records["b1"].status == "pending-approval"
        assert store.mutations == []

    async def test_approve_open_bug_is_409(self, client: AsyncClient, manager_token, store: InMemoryBugStore):
        store.records["b1"] = make_bug("b1", status="open")
        res = await client.post(f"{MGR}/bugs/b1/approve", headers=auth_header(manager_token))
        assert res.status_code == 409


class TestDashboard:
    """대시보드 집계."""

    async def test_counts_and_trend(self, client: AsyncClient, manager_token, store: InMemoryBugStore):
        store.records.update({
            "1": make_bug("1", status="open"),
            "2": make_bug("2", status="closed"),
            "3": make_bug("3", status="in-progress",
                          created_at=datetime(2024, 1, 3, tzinfo=timezone.utc)),
        })
        res = await client.get(f"{MGR}/dashboard", headers=auth_header(manager_token))
        assert res.status_code == 200
        data = res.json()
        assert data["counts"] == {"open": 1, "in-progress": 1, "pending-approval": 0, "closed": 1}
        assert data["trend"] == [
            {"date": "2024-01-01", "open": 1, "in-progress": 0, "pending-approval": 0, "closed": 1},
            {"date": "2024-01-03", "open": 0, "in-progress": 1, "pending-approval": 0, "closed": 0},
        ]

    async def test_developer_forbidden(self, client: AsyncClient, alice_token):
        res = await client.get(f"{MGR}/dashboard", headers=auth_header(alice_token))
        assert res.status_code == 403

    async def test_export_excel(self, client: AsyncClient, manager_token, store: InMemoryBugStore):
        store.records["1"] = make_bug("1", title="Export me", labels=["ui"])
        res = await client.get(f"{MGR}/dashboard/export", headers=auth_header(manager_token))
        assert res.status_code == 200
        wb = load_workbook(BytesIO(res.content))
        assert wb.sheetnames == ["Bug Trends", "All Bugs"]
        assert wb["Bug Trends"]["A2"].value == "2024-01-01"
        assert wb["All Bugs"]["A2"].value == "Export me"
        assert wb["All Bugs"]["H2"].value == "ui"


class TestStoreUnavailable:
    """저장소 장애는 503으로 전달."""

    @pytest_asyncio.fixture
    async def failing_client(self):
        failing = FailingBugStore()
        app.dependency_overrides[get_bug_store] = lambda: failing
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac, failing
        app.dependency_overrides.clear()

    async def test_dashboard_503(self, failing_client, manager_token):
        ac, failing = failing_client
        res = await ac.get(f"{MGR}/dashboard", headers=auth_header(manager_token))
        assert res.status_code == 503
        assert failing.calls == ["list_all"]

    async def test_approve_503_without_retry(self, failing_client, manager_token):
        ac, failing = failing_client
        res = await ac.post(f"{MGR}/bugs/b1/approve", headers=auth_header(manager_token))
        assert res.status_code == 503
        assert failing.calls == ["get"]
