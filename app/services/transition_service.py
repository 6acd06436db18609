"""버그 상태 전이 엔진 — 수명주기 상태 머신과 권한 규칙.

Transition Engine — Bug lifecycle state machine and actor permission rules.
Translates a high-level action (create, close, approve, reopen, update,
delete) into a field patch, or raises before any store call is made.

State machine:
    open / in-progress --Close (creator or assignee)--> pending-approval
    pending-approval   --Approve (manager)-----------> closed
    pending-approval   --Reopen (manager)------------> open

Permission is always checked before state.
"""

from datetime import datetime, timezone
from typing import Any

from app.config import Vocabulary, settings
from app.schemas.bug import Actor, BugCreate, BugRecord, BugUpdate
from app.utils.exceptions import InvalidTransitionError, PermissionDeniedError, ValidationError

# 상태/우선순위 — 선언 순서가 정렬 순위
# Declaration order is the sort rank
BUG_STATUSES: tuple[str, ...] = ("open", "in-progress", "pending-approval", "closed")
BUG_PRIORITIES: tuple[str, ...] = ("low", "medium", "high", "critical")

ROLE_DEVELOPER: str = "developer"
ROLE_MANAGER: str = "manager"

# 생성 시 선택 가능한 상태 — Statuses a creator may pick
INITIAL_STATUSES: frozenset[str] = frozenset({"open", "in-progress"})
# Close 가능한 상태 — Statuses from which Close is allowed
CLOSABLE_STATUSES: frozenset[str] = frozenset({"open", "in-progress"})


def _now(now: datetime | None) -> datetime:
    return now if now is not None else datetime.now(timezone.utc)


class TransitionEngine:
    """버그 상태 전이 엔진.

    Stateless validator. Every method takes the actor explicitly and
    returns a patch dict (or a draft dict for create) ready for the store.
    """

    def __init__(self, vocabulary: Vocabulary | None = None) -> None:
        self._vocabulary: Vocabulary | None = vocabulary

    @property
    def vocabulary(self) -> Vocabulary:
        return self._vocabulary if self._vocabulary is not None else settings.vocabulary()

    # --- 필드 검증 (Field validation) ---

    def _check_title(self, title: str | None) -> str:
        if title is None or not title.strip():
            raise ValidationError("제목은 필수입니다 (Title is required)")
        return title.strip()

    def _check_priority(self, priority: str | None) -> str:
        if priority not in BUG_PRIORITIES:
            raise ValidationError(f"알 수 없는 우선순위 (Unknown priority: {priority})")
        return priority

    def _check_project(self, project: str | None) -> str:
        if project not in self.vocabulary.projects:
            raise ValidationError(f"알 수 없는 프로젝트 (Unknown project: {project})")
        return project

    def _check_assignee(self, assignee: str | None) -> str | None:
        # 빈 문자열은 미배정 — Empty string means unassigned
        if not assignee:
            return None
        if assignee not in self.vocabulary.team_members:
            raise ValidationError(f"알 수 없는 담당자 (Unknown assignee: {assignee})")
        return assignee

    def _check_labels(self, labels: list[str] | None) -> list[str]:
        result: list[str] = []
        for label in labels or []:
            if label not in self.vocabulary.labels:
                raise ValidationError(f"알 수 없는 라벨 (Unknown label: {label})")
            if label not in result:
                result.append(label)
        return result

    def _check_status(self, status: str | None, allowed: frozenset[str]) -> str:
        if status not in BUG_STATUSES:
            raise ValidationError(f"알 수 없는 상태 (Unknown status: {status})")
        if status not in allowed:
            raise InvalidTransitionError(
                f"이 상태로 설정할 수 없습니다 (Status '{status}' is not allowed here)"
            )
        return status

    # --- 생성 / 수정 / 삭제 (Create, update, delete) ---

    def validate_create(self, actor: Actor, data: BugCreate) -> dict[str, Any]:
        """생성 요청을 검증하고 저장소용 초안을 반환합니다.

        Only developers create bugs. created_by is the actor, and the
        initial status is restricted to open or in-progress.

        Returns:
            dict[str, Any]: 저장소에 전달할 초안 (Draft for BugStore.create)

        Raises:
            PermissionDeniedError: 개발자가 아닐 때 (Actor is not a developer)
            ValidationError: 필드 값이 잘못되었을 때 (Blank title or unknown value)
            InvalidTransitionError: 초기 상태가 허용되지 않을 때 (Initial status not allowed)
        """
        if actor.role != ROLE_DEVELOPER:
            raise PermissionDeniedError("개발자만 버그를 생성할 수 있습니다 (Only developers can create bugs)")

        return {
            "title": self._check_title(data.title),
            "description": data.description or "",
            "status": self._check_status(data.status, INITIAL_STATUSES),
            "priority": self._check_priority(data.priority),
            "project": self._check_project(data.project),
            "assignee": self._check_assignee(data.assignee),
            "created_by": actor.name,
            "due_date": data.due_date,
            "labels": self._check_labels(data.labels),
        }

    def validate_update(
        self,
        actor: Actor,
        record: BugRecord,
        data: BugUpdate,
        now: datetime | None = None,
    ) -> dict[str, Any]:
        """작성자의 직접 수정을 검증하고 패치를 반환합니다.

        Creator-only field edit. The status may be set to open or
        in-progress, or kept at pending-approval when the record is already
        pending, so editing a pending bug does not drop its pending state.

        Raises:
            PermissionDeniedError: 작성자가 아닐 때 (Actor is not the creator)
            ValidationError: 필드 값이 잘못되었을 때 (Blank title or unknown value)
            InvalidTransitionError: 허용되지 않은 상태 값 (Status outside the allowed set)
        """
        if actor.name != record.created_by:
            raise PermissionDeniedError("작성자만 수정할 수 있습니다 (Only the creator can edit this bug)")

        changes: dict[str, Any] = data.model_dump(exclude_unset=True)
        patch: dict[str, Any] = {}

        if "title" in changes:
            patch["title"] = self._check_title(changes["title"])
        if "description" in changes:
            patch["description"] = changes["description"] or ""
        if "priority" in changes:
            patch["priority"] = self._check_priority(changes["priority"])
        if "project" in changes:
            patch["project"] = self._check_project(changes["project"])
        if "assignee" in changes:
            patch["assignee"] = self._check_assignee(changes["assignee"])
        if "due_date" in changes:
            patch["due_date"] = changes["due_date"]
        if "labels" in changes:
            patch["labels"] = self._check_labels(changes["labels"])
        if "status" in changes:
            allowed = set(INITIAL_STATUSES)
            if record.status == "pending-approval":
                allowed.add("pending-approval")
            patch["status"] = self._check_status(changes["status"], frozenset(allowed))

        patch["updated_at"] = _now(now)
        return patch

    def check_delete(self, actor: Actor, record: BugRecord) -> None:
        """작성자만 삭제할 수 있습니다 (상태 무관)."""
        if actor.name != record.created_by:
            raise PermissionDeniedError("작성자만 삭제할 수 있습니다 (Only the creator can delete this bug)")

    # --- 상태 전이 (Status transitions) ---

    def close(self, actor: Actor, record: BugRecord, now: datetime | None = None) -> dict[str, Any]:
        """open/in-progress -> pending-approval, 작성자 또는 담당자 개발자만.

        Raises:
            PermissionDeniedError: 작성자/담당자 개발자가 아닐 때
            InvalidTransitionError: 종료 가능한 상태가 아닐 때
        """
        if actor.role != ROLE_DEVELOPER or actor.name not in (record.created_by, record.assignee):
            raise PermissionDeniedError(
                "작성자 또는 담당자만 종료할 수 있습니다 (Only the creator or assignee can close this bug)"
            )
        if record.status not in CLOSABLE_STATUSES:
            raise InvalidTransitionError(
                f"'{record.status}' 상태에서는 종료할 수 없습니다 (Cannot close a bug that is {record.status})"
            )
        stamp = _now(now)
        return {
            "status": "pending-approval",
            "closed_by": actor.name,
            "closed_at": stamp,
            "updated_at": stamp,
        }

    def approve(self, actor: Actor, record: BugRecord, now: datetime | None = None) -> dict[str, Any]:
        """pending-approval -> closed, 관리자만."""
        self._require_manager(actor, "approve")
        self._require_pending(record, "approve")
        stamp = _now(now)
        return {
            "status": "closed",
            "approved_by": actor.name,
            "approved_at": stamp,
            "updated_at": stamp,
        }

    def reopen(self, actor: Actor, record: BugRecord, now: datetime | None = None) -> dict[str, Any]:
        """pending-approval -> open, 관리자만. 종료 이력은 유지됩니다."""
        self._require_manager(actor, "reopen")
        self._require_pending(record, "reopen")
        return {"status": "open", "updated_at": _now(now)}

    def _require_manager(self, actor: Actor, action: str) -> None:
        if actor.role != ROLE_MANAGER:
            raise PermissionDeniedError(f"관리자만 가능합니다 (Only managers can {action} bugs)")

    def _require_pending(self, record: BugRecord, action: str) -> None:
        if record.status != "pending-approval":
            raise InvalidTransitionError(
                f"승인 대기 상태가 아닙니다 (Cannot {action} a bug that is {record.status})"
            )

    @staticmethod
    def apply(record: BugRecord, patch: dict[str, Any]) -> BugRecord:
        """패치를 로컬 레코드에 낙관적으로 적용합니다.

        Optimistically apply a patch to a cached record.
        """
        return record.model_copy(update=patch)


transition_engine: TransitionEngine = TransitionEngine()
