# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authorization rules for group status changes."""

from src.domains.exceptions import InvalidArgumentError
from src.infrastructure.database.models import User
from src.models.enums import GroupStatus


def parse_requested_status(requested: int, threshold: int) -> GroupStatus:
    """Validate a requested status against the privileged threshold.

    Args:
        requested: Raw status value from the request.
        threshold: Highest status value that may be requested.

    Returns:
        The requested status as a GroupStatus.

    Raises:
        InvalidArgumentError: If the value is unknown or above the threshold.
    """
    try:
        status = GroupStatus(requested)
    except ValueError as e:
        raise InvalidArgumentError(
            f"Unknown group status: {requested}",
            details={"status": requested},
        ) from e

    if status > threshold:
        raise InvalidArgumentError(
            f"Group status {status.name} is above the permitted maximum",
            details={"status": int(status), "threshold": threshold},
        )
    return status


def can_update_group_status(caller: User, requested: GroupStatus, threshold: int) -> bool:
    """Return True if the caller may move a group to the requested status.

    Only admins may change group status, and never above the threshold.
    """
    return bool(caller.is_admin) and requested <= threshold


def is_status_reserved(current: int, threshold: int) -> bool:
    """Return True if a group's current status is reserved for privileged roles."""
    return current >= threshold


def can_delete_group(current: int) -> bool:
    """Return True if a group in this status may be deleted."""
    return current in (GroupStatus.PENDING, GroupStatus.REJECTED)
