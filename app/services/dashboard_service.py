"""대시보드 서비스 — 관리자 대시보드 집계 비즈니스 로직.

Dashboard Service — Aggregation for the manager dashboard.
Provides status stat cards, the daily trend series, and an Excel export.
All aggregates cover every record, regardless of list filters.
"""

from datetime import date
from io import BytesIO

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill

from app.repositories.bug_repository import BugStore
from app.schemas.bug import StatusCounts, TrendBucket
from app.services.view_service import view_pipeline


class DashboardService:
    """대시보드 서비스.

    Dashboard aggregation service for manager views.
    """

    async def get_dashboard(
        self,
        store: BugStore,
        today: date | None = None,
    ) -> tuple[StatusCounts, list[TrendBucket]]:
        """상태별 카드 + 일별 추세."""
        records = await store.list_all()
        return view_pipeline.count_by_status(records), view_pipeline.build_trend(records, today)

    async def export_excel(self, store: BugStore, today: date | None = None) -> bytes:
        """대시보드 데이터를 Excel 파일로 내보내기."""
        records = await store.list_all()
        trend = view_pipeline.build_trend(records, today)

        wb = Workbook()
        header_font = Font(bold=True, color="FFFFFF", size=11)
        header_fill = PatternFill(start_color="2D3436", end_color="2D3436", fill_type="solid")

        def style_headers(ws, headers: list[str]) -> None:
            for col_idx, h in enumerate(headers, 1):
                cell = ws.cell(row=1, column=col_idx, value=h)
                cell.font = header_font
                cell.fill = header_fill
                cell.alignment = Alignment(horizontal="center")

        # --- Sheet 1: Bug Trends ---
        ws1 = wb.active
        ws1.title = "Bug Trends"
        style_headers(ws1, ["Date", "Open", "In Progress", "Pending Approval", "Closed"])
        for bucket in trend:
            ws1.append([bucket.date, bucket.open, bucket.in_progress, bucket.pending_approval, bucket.closed])

        for i, w in enumerate([15, 10, 12, 18, 10], 1):
            ws1.column_dimensions[ws1.cell(row=1, column=i).column_letter].width = w

        # --- Sheet 2: All Bugs ---
        ws2 = wb.create_sheet("All Bugs")
        headers2 = [
            "Title", "Project", "Status", "Priority", "Assignee", "Created By",
            "Due Date", "Labels", "Created At", "Closed By", "Approved By",
        ]
        style_headers(ws2, headers2)
        for r in records:
            ws2.append([
                r.title,
                r.project,
                r.status,
                r.priority,
                r.assignee or "Unassigned",
                r.created_by,
                str(r.due_date) if r.due_date else "",
                ", ".join(r.labels),
                r.created_at.isoformat() if r.created_at else "",
                r.closed_by or "",
                r.approved_by or "",
            ])

        for i, w in enumerate([30, 15, 18, 10, 15, 15, 12, 20, 25, 15, 15], 1):
            ws2.column_dimensions[ws2.cell(row=1, column=i).column_letter].width = w

        buf = BytesIO()
        wb.save(buf)
        return buf.getvalue()


dashboard_service: DashboardService = DashboardService()
