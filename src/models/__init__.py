# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Shared enums and API schemas."""

from src.models.enums import GroupStatus, RepositoryType
from src.models.group import (
    ErrorResponse,
    GroupMemberResponse,
    GroupResponse,
    ProvisioningResult,
    UpdateGroupRequest,
)
from src.models.session import SessionResponse

__all__ = [
    "GroupStatus",
    "RepositoryType",
    "ErrorResponse",
    "GroupMemberResponse",
    "GroupResponse",
    "ProvisioningResult",
    "SessionResponse",
    "UpdateGroupRequest",
]
