"""add_bugs

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-17 10:00:00.000000

버그(bugs) 테이블 생성.
개발자가 작성하고 관리자가 종료를 승인하는 버그/작업 레코드.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "a1b2c3d4e5f6"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "bugs",
        sa.Column("id", UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("description", sa.Text(), server_default="", nullable=False),
        sa.Column("status", sa.String(20), server_default="open", nullable=False),
        sa.Column("priority", sa.String(20), server_default="medium", nullable=False),
        sa.Column("project", sa.String(100), nullable=False),
        sa.Column("assignee", sa.String(100), nullable=True),
        sa.Column("created_by", sa.String(100), nullable=False),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("labels", sa.JSON(), server_default=sa.text("'[]'"), nullable=False),
        sa.Column("closed_by", sa.String(100), nullable=True),
        sa.Column("closed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("approved_by", sa.String(100), nullable=True),
        sa.Column("approved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_bugs_status", "bugs", ["status"])
    op.create_index("ix_bugs_created_by", "bugs", ["created_by"])
    op.create_index("ix_bugs_assignee", "bugs", ["assignee"])


def downgrade() -> None:
    op.drop_index("ix_bugs_assignee", table_name="bugs")
    op.drop_index("ix_bugs_created_by", table_name="bugs")
    op.drop_index("ix_bugs_status", table_name="bugs")
    op.drop_table("bugs")
