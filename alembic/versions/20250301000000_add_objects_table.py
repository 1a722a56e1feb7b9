"""Add objects table (managed resource with owner and profile fields).

Revision ID: 20250301000000
Revises: 20250228000000
Create Date: 2025-03-01

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "20250301000000"
down_revision: Union[str, None] = "20250228000000"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "objects",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("owner_id", sa.Integer(), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("age", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_objects_name"), "objects", ["name"], unique=False)
    op.create_index(op.f("ix_objects_owner_id"), "objects", ["owner_id"], unique=False)
    op.create_index(op.f("ix_objects_email"), "objects", ["email"], unique=False)
    op.create_index(op.f("ix_objects_created_at"), "objects", ["created_at"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_objects_created_at"), table_name="objects")
    op.drop_index(op.f("ix_objects_email"), table_name="objects")
    op.drop_index(op.f("ix_objects_owner_id"), table_name="objects")
    op.drop_index(op.f("ix_objects_name"), table_name="objects")
    op.drop_table("objects")
