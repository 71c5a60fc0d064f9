"""Initial schema: assignments, tasks, releases, release sets, messages

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
import sqlmodel

from alembic import op

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "assignments",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("assignment_id", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column("srid", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column("application", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column("stream", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column("owner", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column("status", sqlmodel.sql.sqltypes.AutoString(length=50), nullable=True),
        sa.Column("release_id", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=True),
        sa.Column("set_id", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=True),
        sa.Column("level", sqlmodel.sql.sqltypes.AutoString(length=50), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("srid", "assignment_id", name="uq_assignments_srid_assignment_id"),
    )
    op.create_index("ix_assignments_srid", "assignments", ["srid"], unique=False)
    op.create_index(
        "ix_assignments_srid_created", "assignments", ["srid", "created_at"], unique=False
    )

    op.create_table(
        "tasks",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("task_id", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column("assignment_pk", sa.Uuid(), nullable=True),
        sa.Column("type", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=True),
        sa.Column("status", sqlmodel.sql.sqltypes.AutoString(length=50), nullable=True),
        sa.Column("component_type", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=True),
        sa.Column("component_name", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column(
            "component_extension", sqlmodel.sql.sqltypes.AutoString(length=50), nullable=True
        ),
        sa.Column("component_version", sqlmodel.sql.sqltypes.AutoString(length=50), nullable=True),
        sa.Column(
            "component_last_action", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=True
        ),
        sa.Column(
            "component_last_action_date_time",
            sqlmodel.sql.sqltypes.AutoString(length=50),
            nullable=True,
        ),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["assignment_pk"], ["assignments.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("assignment_pk", "task_id", name="uq_tasks_assignment_task_id"),
    )
    op.create_index("ix_tasks_assignment_pk", "tasks", ["assignment_pk"], unique=False)

    op.create_table(
        "releases",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("release_id", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column("srid", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column("application", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column("stream", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column("owner", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column("status", sqlmodel.sql.sqltypes.AutoString(length=50), nullable=True),
        sa.Column("description", sqlmodel.sql.sqltypes.AutoString(length=1000), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("srid", "release_id", name="uq_releases_srid_release_id"),
    )
    op.create_index("ix_releases_srid", "releases", ["srid"], unique=False)
    op.create_index("ix_releases_srid_created", "releases", ["srid", "created_at"], unique=False)

    op.create_table(
        "release_sets",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("set_id", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column("release_pk", sa.Uuid(), nullable=True),
        sa.Column("status", sqlmodel.sql.sqltypes.AutoString(length=50), nullable=True),
        sa.Column("owner", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column("description", sqlmodel.sql.sqltypes.AutoString(length=1000), nullable=True),
        sa.Column("deployed_by", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column("deployed_at", sa.DateTime(), nullable=True),
        sa.Column("deployment_status", sqlmodel.sql.sqltypes.AutoString(length=50), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["release_pk"], ["releases.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("release_pk", "set_id", name="uq_release_sets_release_set_id"),
    )
    op.create_index("ix_release_sets_release_pk", "release_sets", ["release_pk"], unique=False)
    op.create_index("ix_release_sets_set_id", "release_sets", ["set_id"], unique=False)

    op.create_table(
        "messages",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("content", sqlmodel.sql.sqltypes.AutoString(length=500), nullable=False),
        sa.Column("sender", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_messages_sender", "messages", ["sender"], unique=False)
    op.create_index("ix_messages_created_at", "messages", ["created_at"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_messages_created_at", table_name="messages")
    op.drop_index("ix_messages_sender", table_name="messages")
    op.drop_table("messages")
    op.drop_index("ix_release_sets_set_id", table_name="release_sets")
    op.drop_index("ix_release_sets_release_pk", table_name="release_sets")
    op.drop_table("release_sets")
    op.drop_index("ix_releases_srid_created", table_name="releases")
    op.drop_index("ix_releases_srid", table_name="releases")
    op.drop_table("releases")
    op.drop_index("ix_tasks_assignment_pk", table_name="tasks")
    op.drop_table("tasks")
    op.drop_index("ix_assignments_srid_created", table_name="assignments")
    op.drop_index("ix_assignments_srid", table_name="assignments")
    op.drop_table("assignments")
