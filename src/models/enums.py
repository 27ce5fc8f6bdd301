# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enumerations shared by the ORM models and the API schemas."""

from enum import IntEnum, StrEnum


class GroupStatus(IntEnum):
    """Approval status of a student group.

    Values are ordered. Only PENDING and REJECTED groups may be deleted,
    and values above the configured threshold are reserved.
    """

    PENDING = 0
    REJECTED = 1
    APPROVED = 2
    TEACHER = 3


class RepositoryType(StrEnum):
    """Kind of a locally recorded repository."""

    USER = "user"
    GROUP = "group"
    COURSE_INFO = "course_info"
    ASSIGNMENTS = "assignments"
    TESTS = "tests"
