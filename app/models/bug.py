"""버그 관련 SQLAlchemy ORM 모델 정의.

Bug SQLAlchemy ORM model definition.
A bug is a trackable unit of work with a lifecycle status and the audit
fields stamped by the close/approve transitions.

Tables:
    - bugs: 버그/작업 레코드 (Bug and task records)
"""

import uuid
from datetime import date, datetime
from sqlalchemy import JSON, Date, DateTime, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Bug(Base):
    """버그 모델 — 상태 수명주기와 종료/승인 이력을 가진 작업 단위.

    Bug model — Work item moving through
    open -> in-progress -> pending-approval -> closed (or back to open).

    Attributes:
        id: 고유 식별자 UUID (Unique identifier, assigned by the store)
        title: 제목 (Title, non-empty)
        description: 설명 (Free-text description)
        status: 상태 (open / in-progress / pending-approval / closed)
        priority: 우선순위 (low / medium / high / critical)
        project: 프로젝트 이름 (Project name from the fixed vocabulary)
        assignee: 담당자 이름 (Assignee from the team vocabulary, nullable)
        created_by: 작성자 이름 (Creator actor name, immutable)
        due_date: 마감일 (Optional due date)
        labels: 라벨 목록 JSON (Labels from the label vocabulary)
        closed_by: 종료 요청자 (Actor who requested closure)
        closed_at: 종료 요청 일시 (Closure request timestamp)
        approved_by: 승인자 (Manager who approved closure)
        approved_at: 승인 일시 (Approval timestamp)
        created_at: 생성 일시 UTC (Creation timestamp, server-assigned)
        updated_at: 수정 일시 UTC (Last update timestamp, server-assigned)
    """

    __tablename__ = "bugs"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    # 상태 — "open" -> "in-progress" -> "pending-approval" -> "closed"
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="open")
    priority: Mapped[str] = mapped_column(String(20), nullable=False, default="medium")
    project: Mapped[str] = mapped_column(String(100), nullable=False)
    assignee: Mapped[str | None] = mapped_column(String(100), nullable=True)
    created_by: Mapped[str] = mapped_column(String(100), nullable=False)
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    labels: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    # 전이 감사 필드 — Transition audit fields
    closed_by: Mapped[str | None] = mapped_column(String(100), nullable=True)
    closed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    approved_by: Mapped[str | None] = mapped_column(String(100), nullable=True)
    approved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # 서버 타임스탬프 — Server-assigned timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )
