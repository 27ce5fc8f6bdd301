# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Initial schema.

Revision ID: 001_initial
Revises: None
Create Date: 2025-01-15

Creates users and their provider links, courses, groups with ordered
membership, and repository records.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
    ]


def upgrade() -> None:
    """Create tables."""
    # ==========================================================================
    # 1. users / remote_identities
    # ==========================================================================
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(255), nullable=False, server_default=""),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("is_admin", sa.Boolean, nullable=False, server_default=sa.false()),
        *_timestamps(),
    )

    op.create_table(
        "remote_identities",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column(
            "user_id",
            sa.Integer,
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("provider", sa.String(50), nullable=False),
        sa.Column("remote_id", sa.Integer, nullable=False),
        sa.Column("access_token", sa.String(255), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "provider", name="unique_user_provider"),
    )
    op.create_index("ix_remote_identities_user_id", "remote_identities", ["user_id"])

    # ==========================================================================
    # 2. courses / groups / group_users
    # ==========================================================================
    op.create_table(
        "courses",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("code", sa.String(50), nullable=False),
        sa.Column("provider", sa.String(50), nullable=False),
        sa.Column("directory_id", sa.BigInteger, nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "groups",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column(
            "course_id",
            sa.Integer,
            sa.ForeignKey("courses.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("status", sa.Integer, nullable=False, server_default="0"),
        *_timestamps(),
        sa.UniqueConstraint("course_id", "name", name="unique_course_group_name"),
    )
    op.create_index("ix_groups_course_id", "groups", ["course_id"])

    op.create_table(
        "group_users",
        sa.Column(
            "group_id",
            sa.Integer,
            sa.ForeignKey("groups.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "user_id",
            sa.Integer,
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("position", sa.Integer, nullable=False, server_default="0"),
    )

    # ==========================================================================
    # 3. repositories
    # ==========================================================================
    op.create_table(
        "repositories",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("directory_id", sa.BigInteger, nullable=False),
        sa.Column("repository_id", sa.BigInteger, nullable=False),
        sa.Column("html_url", sa.String(500), nullable=False),
        sa.Column("type", sa.String(20), nullable=False, server_default="user"),
        sa.Column(
            "user_id",
            sa.Integer,
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column(
            "group_id",
            sa.Integer,
            sa.ForeignKey("groups.id", ondelete="SET NULL"),
            nullable=True,
        ),
        *_timestamps(),
        sa.UniqueConstraint(
            "directory_id",
            "repository_id",
            name="unique_directory_repository",
        ),
        sa.CheckConstraint(
            "type IN ('user', 'group', 'course_info', 'assignments', 'tests')",
            name="valid_repository_type",
        ),
    )
    op.create_index("ix_repositories_group_id", "repositories", ["group_id"])


def downgrade() -> None:
    """Drop tables."""
    op.drop_table("repositories")
    op.drop_table("group_users")
    op.drop_table("groups")
    op.drop_table("courses")
    op.drop_table("remote_identities")
    op.drop_table("users")
