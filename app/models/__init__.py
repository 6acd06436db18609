"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package registers every model with the SQLAlchemy
metadata, which Alembic migrations rely on.

Modules:
    bug: 버그/작업 레코드 (Bug and task records)
"""

from app.models.bug import Bug

__all__ = [
    "Bug",
]
