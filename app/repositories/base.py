"""기본 CRUD 레포지토리 — 모든 레포지토리의 부모 클래스.

Base CRUD Repository — Parent class for domain repositories.
Provides generic Create, Read, Update, Delete operations. Every database
fault is re-raised as StoreUnavailableError so callers see a single
store failure kind.

Usage:
    class BugRepository(BaseRepository[Bug]):
        def __init__(self) -> None:
            super().__init__(Bug)
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, Generic, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import Base
from app.utils.exceptions import StoreUnavailableError

# 제네릭 타입 변수 — SQLAlchemy 모델을 나타냄
# Generic type variable representing a SQLAlchemy model
ModelType = TypeVar("ModelType", bound=Base)


@asynccontextmanager
async def store_errors(operation: str) -> AsyncIterator[None]:
    """DB 오류를 StoreUnavailableError로 변환합니다.

    Translate database and connection faults into StoreUnavailableError.

    Args:
        operation: 실패 메시지에 포함할 작업 이름 (Operation name for the error detail)
    """
    try:
        yield
    except (SQLAlchemyError, OSError) as exc:
        raise StoreUnavailableError(
            f"저장소 호출 실패 (Record store call failed: {operation})"
        ) from exc


class BaseRepository(Generic[ModelType]):
    """제네릭 CRUD 레포지토리.

    Generic CRUD repository providing common database operations.

    Attributes:
        model: SQLAlchemy 모델 클래스 (The SQLAlchemy model class)
    """

    def __init__(self, model: type[ModelType]) -> None:
        self.model: type[ModelType] = model

    async def get_by_id(
        self,
        db: AsyncSession,
        record_id: UUID,
    ) -> ModelType | None:
        """ID로 단일 레코드를 조회합니다.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            record_id: 조회할 레코드의 UUID (UUID of the record to retrieve)

        Returns:
            ModelType | None: 조회된 레코드 또는 None (Found record or None)
        """
        query: Select = select(self.model).where(self.model.id == record_id)
        async with store_errors("get"):
            result = await db.execute(query)
            return result.scalar_one_or_none()

    async def get_all(
        self,
        db: AsyncSession,
        order_by: Any | None = None,
    ) -> Sequence[ModelType]:
        """모든 레코드를 조회합니다. 서버측 필터링은 하지 않습니다.

        Retrieve every record; filtering happens in the view pipeline.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            order_by: 정렬 기준 컬럼 (Column to order by)

        Returns:
            Sequence[ModelType]: 전체 레코드 목록 (All records)
        """
        query: Select = select(self.model)
        if order_by is not None:
            query = query.order_by(order_by)

        async with store_errors("list_all"):
            result = await db.execute(query)
            return result.scalars().all()

    async def create(
        self,
        db: AsyncSession,
        obj_data: dict[str, Any],
    ) -> ModelType:
        """새 레코드를 생성하고 커밋합니다.

        Create and commit a new record. The database assigns the id
        default and the server timestamps.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            obj_data: 생성할 레코드의 데이터 딕셔너리
                      (Dictionary of data for the new record)

        Returns:
            ModelType: 생성된 레코드 (The created record)
        """
        db_obj: ModelType = self.model(**obj_data)
        async with store_errors("create"):
            db.add(db_obj)
            await db.commit()
            await db.refresh(db_obj)
        return db_obj

    async def update(
        self,
        db: AsyncSession,
        record_id: UUID,
        update_data: dict[str, Any],
    ) -> ModelType | None:
        """기존 레코드를 업데이트하고 커밋합니다.

        Update an existing record by its UUID. Last write wins.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            record_id: 업데이트할 레코드의 UUID (UUID of the record to update)
            update_data: 업데이트할 필드와 값의 딕셔너리
                         (Dictionary of fields and values to update)

        Returns:
            ModelType | None: 업데이트된 레코드 또는 None (Updated record or None)
        """
        db_obj: ModelType | None = await self.get_by_id(db, record_id)
        if db_obj is None:
            return None

        # None 값도 허용 — 전달된 필드만 반영 (Only passed fields, None allowed)
        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        async with store_errors("update"):
            await db.commit()
            await db.refresh(db_obj)
        return db_obj

    async def delete(
        self,
        db: AsyncSession,
        record_id: UUID,
    ) -> bool:
        """레코드를 삭제하고 커밋합니다.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            record_id: 삭제할 레코드의 UUID (UUID of the record to delete)

        Returns:
            bool: 삭제 성공 여부 (Whether the deletion was successful)
        """
        db_obj: ModelType | None = await self.get_by_id(db, record_id)
        if db_obj is None:
            return False

        async with store_errors("delete"):
            await db.delete(db_obj)
            await db.commit()
        return True
