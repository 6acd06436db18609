"""버그 관련 Pydantic 요청/응답 스키마 정의.

Bug request/response schema definitions.
Covers the bug record itself, create/update payloads, the current actor,
filter/sort configuration, and the fixed-shape dashboard aggregates
(status counts and daily trend buckets).
"""

from datetime import date, datetime
from pydantic import BaseModel, Field


# === 행위자 (Actor) 스키마 ===

class Actor(BaseModel):
    """현재 사용자 — 이름과 역할.

    The acting user. Passed explicitly into every engine and pipeline call.

    Attributes:
        name: 사용자 이름 (Display name, matches created_by / assignee values)
        role: 역할 (developer | manager)
    """

    name: str
    role: str  # developer, manager


# === 버그 (Bug) 스키마 ===

class BugRecord(BaseModel):
    """버그 레코드 — 저장소에서 가져온 단일 버그.

    A single bug record as held by the record store.
    """

    id: str
    title: str
    description: str = ""
    status: str = "open"  # open, in-progress, pending-approval, closed
    priority: str = "medium"  # low, medium, high, critical
    project: str = ""
    assignee: str | None = None
    created_by: str
    due_date: date | None = None
    labels: list[str] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None
    closed_by: str | None = None
    closed_at: datetime | None = None
    approved_by: str | None = None
    approved_at: datetime | None = None


class BugCreate(BaseModel):
    """버그 생성 요청 스키마.

    Bug creation request. created_by is taken from the actor, never the body.

    Attributes:
        title: 제목 (Required, non-blank)
        description: 설명 (Free text)
        status: 초기 상태 (open or in-progress only)
        priority: 우선순위 (low, medium, high, critical)
        project: 프로젝트 (Must be a known project)
        assignee: 담당자 (Known team member or empty)
        due_date: 마감일 (Optional)
        labels: 라벨 (Subset of the label vocabulary)
    """

    title: str
    description: str = ""
    status: str = "open"
    priority: str = "medium"
    project: str
    assignee: str | None = None
    due_date: date | None = None
    labels: list[str] = []


class BugUpdate(BaseModel):
    """버그 수정 요청 스키마 (부분 업데이트, 작성자 전용)."""

    title: str | None = None
    description: str | None = None
    status: str | None = None
    priority: str | None = None
    project: str | None = None
    assignee: str | None = None
    due_date: date | None = None
    labels: list[str] | None = None


# === 목록 조회 (View) 스키마 ===

class BugFilters(BaseModel):
    """목록 필터 — 빈 문자열은 조건 없음.

    Filter values; an empty string places no constraint on that field.
    """

    status: str = ""
    priority: str = ""
    project: str = ""


class SortConfig(BaseModel):
    """정렬 설정 — 단일 키와 방향 (asc | desc)."""

    key: str = "created_at"
    direction: str = "desc"


# === 대시보드 (Dashboard) 스키마 ===

class StatusCounts(BaseModel):
    """상태별 개수 — 상태마다 필드 하나인 고정 형태.

    One field per status value. Serialized with the hyphenated status names.
    """

    open: int = 0
    in_progress: int = Field(0, alias="in-progress")
    pending_approval: int = Field(0, alias="pending-approval")
    closed: int = 0

    model_config = {"populate_by_name": True}


class TrendBucket(StatusCounts):
    """일별 추세 버킷 — 생성일 기준, 현재 상태별 개수.

    Records created on `date`, counted by their current status.
    """

    date: str  # YYYY-MM-DD


class BugListResponse(BaseModel):
    """필터/정렬이 적용된 버그 목록 응답."""

    items: list[BugRecord]
    total: int
    sort: SortConfig
    trend: list[TrendBucket]


class DashboardResponse(BaseModel):
    """관리자 대시보드 응답 — 상태 카드 + 추세 시계열."""

    counts: StatusCounts
    trend: list[TrendBucket]


class VocabularyResponse(BaseModel):
    """고정 어휘 응답."""

    projects: list[str]
    team_members: list[str]
    labels: list[str]
    statuses: list[str]
    priorities: list[str]
