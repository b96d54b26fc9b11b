"""create users, projects, mockups, shares, versions and api keys

Revision ID: 5c2e9a7f1b3d
Revises:
Create Date: 2026-10-19 09:12:04.518227

"""

from collections.abc import Sequence

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "5c2e9a7f1b3d"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_id"), "users", ["id"], unique=False)
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)

    op.create_table(
        "projects",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("owner_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_public", sa.Boolean(), server_default=sa.false(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_projects_id"), "projects", ["id"], unique=False)
    op.create_index(op.f("ix_projects_owner_id"), "projects", ["owner_id"], unique=False)

    op.create_table(
        "mockups",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("owner_id", sa.Integer(), nullable=False),
        sa.Column("project_id", sa.Integer(), nullable=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("type", sa.String(length=20), nullable=False),
        sa.Column("platform", sa.String(length=30), nullable=False),
        sa.Column("data", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("appearance", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("thumbnail_url", sa.String(length=500), nullable=True),
        sa.Column("is_public", sa.Boolean(), server_default=sa.false(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_mockups_id"), "mockups", ["id"], unique=False)
    op.create_index(op.f("ix_mockups_owner_id"), "mockups", ["owner_id"], unique=False)
    op.create_index(op.f("ix_mockups_project_id"), "mockups", ["project_id"], unique=False)
    op.create_index(op.f("ix_mockups_type"), "mockups", ["type"], unique=False)
    # Owner listing sorts by most recently updated
    op.create_index(
        "ix_mockups_owner_updated", "mockups", ["owner_id", "updated_at"], unique=False
    )

    op.create_table(
        "mockup_shares",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("mockup_id", sa.Integer(), nullable=False),
        sa.Column("owner_id", sa.Integer(), nullable=False),
        sa.Column("shared_with_user_id", sa.Integer(), nullable=True),
        sa.Column("shared_with_email", sa.String(length=255), nullable=True),
        sa.Column("permission", sa.String(length=20), server_default="view", nullable=False),
        sa.Column("share_token", sa.String(length=64), nullable=True),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["mockup_id"], ["mockups.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["shared_with_user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("share_token"),
    )
    op.create_index(op.f("ix_mockup_shares_id"), "mockup_shares", ["id"], unique=False)
    op.create_index(
        op.f("ix_mockup_shares_mockup_id"), "mockup_shares", ["mockup_id"], unique=False
    )
    op.create_index(
        op.f("ix_mockup_shares_shared_with_user_id"),
        "mockup_shares",
        ["shared_with_user_id"],
        unique=False,
    )
    op.create_index(
        op.f("ix_mockup_shares_shared_with_email"),
        "mockup_shares",
        ["shared_with_email"],
        unique=False,
    )

    op.create_table(
        "mockup_versions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("mockup_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("version_number", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("data", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("appearance", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("thumbnail_url", sa.String(length=500), nullable=True),
        sa.Column("change_description", sa.Text(), nullable=True),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.ForeignKeyConstraint(["mockup_id"], ["mockups.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("mockup_id", "version_number", name="uq_mockup_version_number"),
    )
    op.create_index(op.f("ix_mockup_versions_id"), "mockup_versions", ["id"], unique=False)
    op.create_index(
        op.f("ix_mockup_versions_mockup_id"), "mockup_versions", ["mockup_id"], unique=False
    )

    op.create_table(
        "api_keys",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("key", sa.String(length=67), nullable=False),
        sa.Column("can_generate_mockups", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("can_save_mockups", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("can_access_templates", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("rate_limit", sa.Integer(), server_default="100", nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("last_used_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_api_keys_id"), "api_keys", ["id"], unique=False)
    op.create_index(op.f("ix_api_keys_user_id"), "api_keys", ["user_id"], unique=False)
    op.create_index(op.f("ix_api_keys_key"), "api_keys", ["key"], unique=True)


def downgrade() -> None:
    op.drop_index(op.f("ix_api_keys_key"), table_name="api_keys")
    op.drop_index(op.f("ix_api_keys_user_id"), table_name="api_keys")
    op.drop_index(op.f("ix_api_keys_id"), table_name="api_keys")
    op.drop_table("api_keys")

    op.drop_index(op.f("ix_mockup_versions_mockup_id"), table_name="mockup_versions")
    op.drop_index(op.f("ix_mockup_versions_id"), table_name="mockup_versions")
    op.drop_table("mockup_versions")

    op.drop_index(op.f("ix_mockup_shares_shared_with_email"), table_name="mockup_shares")
    op.drop_index(op.f("ix_mockup_shares_shared_with_user_id"), table_name="mockup_shares")
    op.drop_index(op.f("ix_mockup_shares_mockup_id"), table_name="mockup_shares")
    op.drop_index(op.f("ix_mockup_shares_id"), table_name="mockup_shares")
    op.drop_table("mockup_shares")

    op.drop_index("ix_mockups_owner_updated", table_name="mockups")
    op.drop_index(op.f("ix_mockups_type"), table_name="mockups")
    op.drop_index(op.f("ix_mockups_project_id"), table_name="mockups")
    op.drop_index(op.f("ix_mockups_owner_id"), table_name="mockups")
    op.drop_index(op.f("ix_mockups_id"), table_name="mockups")
    op.drop_table("mockups")

    op.drop_index(op.f("ix_projects_owner_id"), table_name="projects")
    op.drop_index(op.f("ix_projects_id"), table_name="projects")
    op.drop_table("projects")

    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_index(op.f("ix_users_id"), table_name="users")
    op.drop_table("users")
