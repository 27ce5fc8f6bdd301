# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""SQLAlchemy ORM models."""

from src.infrastructure.database.models.base import Base, TimestampMixin
from src.infrastructure.database.models.course import (
    Course,
    Group,
    GroupUser,
    Repository,
)
from src.infrastructure.database.models.user import RemoteIdentity, User

__all__ = [
    "Base",
    "TimestampMixin",
    "User",
    "RemoteIdentity",
    "Course",
    "Group",
    "GroupUser",
    "Repository",
]
