"""목록 뷰 파이프라인 — 필터, 정렬, 일별 추세 집계.

View Pipeline — Pure derivation over a fetched bug record set.
No side effects; the same inputs always give the same outputs.
Callers invoke recompute() after every mutation completes.
"""

from datetime import date, datetime, timezone
from typing import Any, Iterable, Sequence

from app.schemas.bug import Actor, BugFilters, BugRecord, SortConfig, StatusCounts, TrendBucket
from app.services.transition_service import BUG_PRIORITIES, BUG_STATUSES, ROLE_DEVELOPER
from app.utils.exceptions import ValidationError

# 정렬 가능한 필드 — Sortable record fields
SORT_KEYS: set[str] = {
    "title", "description", "project", "status", "priority", "assignee",
    "created_by", "due_date", "created_at", "updated_at", "closed_at", "approved_at",
}
SORT_DIRECTIONS: set[str] = {"asc", "desc"}

# 순위로 비교하는 필드 — Fields compared by declared rank, not by text
_RANKED: dict[str, tuple[str, ...]] = {
    "priority": BUG_PRIORITIES,
    "status": BUG_STATUSES,
}

# 상태 값 -> StatusCounts 필드명
_STATUS_FIELDS: dict[str, str] = {
    "open": "open",
    "in-progress": "in_progress",
    "pending-approval": "pending_approval",
    "closed": "closed",
}


def _sort_value(record: BugRecord, key: str) -> tuple[bool, Any]:
    value = getattr(record, key)
    if value is None:
        # 값 없음은 오름차순에서 맨 앞 — Missing values sort first ascending
        return (False, 0)
    ranks = _RANKED.get(key)
    if ranks is not None:
        value = ranks.index(value) if value in ranks else len(ranks)
    return (True, value)


def _created_date(record: BugRecord, today: date) -> str:
    created: datetime | None = record.created_at
    if created is None:
        return today.isoformat()
    if created.tzinfo is not None:
        created = created.astimezone(timezone.utc)
    return created.date().isoformat()


class ViewPipeline:
    """필터/정렬/추세 파생 계산.

    Stateless view derivation. Developer views are scoped to bugs the
    actor created or is assigned to; manager views see everything.
    """

    def scope(self, records: Iterable[BugRecord], actor: Actor) -> list[BugRecord]:
        """역할별 암묵적 필터를 적용합니다."""
        if actor.role == ROLE_DEVELOPER:
            return [r for r in records if r.created_by == actor.name or r.assignee == actor.name]
        return list(records)

    def apply_filters(self, records: Iterable[BugRecord], filters: BugFilters) -> list[BugRecord]:
        """status/priority/project 조건의 AND 결합. 빈 값은 조건 없음."""
        result = list(records)
        if filters.status:
            result = [r for r in result if r.status == filters.status]
        if filters.priority:
            result = [r for r in result if r.priority == filters.priority]
        if filters.project:
            result = [r for r in result if r.project == filters.project]
        return result

    def sort_records(self, records: Iterable[BugRecord], sort: SortConfig) -> list[BugRecord]:
        """단일 키 안정 정렬.

        Stable sort on one key. Strings compare lexicographically,
        timestamps chronologically, priority and status by rank.

        Raises:
            ValidationError: 알 수 없는 정렬 키 또는 방향 (Unknown key or direction)
        """
        if sort.key not in SORT_KEYS:
            raise ValidationError(f"정렬할 수 없는 필드 (Unknown sort key: {sort.key})")
        if sort.direction not in SORT_DIRECTIONS:
            raise ValidationError(f"정렬 방향은 asc 또는 desc (Unknown sort direction: {sort.direction})")
        # sorted(reverse=True)도 동일 값의 원래 순서를 유지함
        return sorted(
            records,
            key=lambda r: _sort_value(r, sort.key),
            reverse=sort.direction == "desc",
        )

    def toggle_sort(self, current: SortConfig, key: str) -> SortConfig:
        """같은 키를 다시 고르면 방향 반전, 다른 키는 asc로 초기화."""
        if current.key == key and current.direction == "asc":
            return SortConfig(key=key, direction="desc")
        return SortConfig(key=key, direction="asc")

    def count_by_status(self, records: Iterable[BugRecord]) -> StatusCounts:
        """상태별 개수 — 관리자 대시보드 카드."""
        counts: dict[str, int] = {field: 0 for field in _STATUS_FIELDS.values()}
        for record in records:
            field = _STATUS_FIELDS.get(record.status)
            if field is not None:
                counts[field] += 1
        return StatusCounts(**counts)

    def build_trend(self, records: Iterable[BugRecord], today: date | None = None) -> list[TrendBucket]:
        """생성일별 버킷, 각 버킷은 현재 상태별 개수.

        Each record adds one to the bucket of its creation date (UTC), under
        its current status. Records without created_at fall into today's
        bucket. Buckets are ordered by date ascending.
        """
        if today is None:
            today = datetime.now(timezone.utc).date()

        buckets: dict[str, dict[str, int]] = {}
        for record in records:
            day = _created_date(record, today)
            counts = buckets.setdefault(day, {field: 0 for field in _STATUS_FIELDS.values()})
            field = _STATUS_FIELDS.get(record.status)
            if field is not None:
                counts[field] += 1

        return [TrendBucket(date=day, **buckets[day]) for day in sorted(buckets)]

    def recompute(
        self,
        records: Sequence[BugRecord],
        filters: BugFilters,
        sort: SortConfig,
        actor: Actor,
        today: date | None = None,
    ) -> tuple[list[BugRecord], list[TrendBucket]]:
        """필터/정렬된 목록과 추세 시계열을 함께 계산합니다.

        Returns:
            tuple: (역할 범위 + 필터 + 정렬 적용 목록, 전체 레코드 추세)
                   (scoped, filtered and sorted view; trend over all records)
        """
        view = self.sort_records(self.apply_filters(self.scope(records, actor), filters), sort)
        return view, self.build_trend(records, today)


view_pipeline: ViewPipeline = ViewPipeline()
