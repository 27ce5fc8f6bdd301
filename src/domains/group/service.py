# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Group lookup and deletion."""

import logging

from src.domains.exceptions import (
    NotFoundError,
    PermissionDeniedError,
    StoreFailureError,
)
from src.domains.provisioning.policy import can_delete_group
from src.infrastructure.database.connection import DatabaseError
from src.infrastructure.database.models import Group
from src.infrastructure.database.store import GroupStore, RecordNotFoundError
from src.models.group import GroupMemberResponse, GroupResponse

logger = logging.getLogger(__name__)


class GroupService:
    """Service for reading and deleting groups.

    Attributes:
        _store: Local store.
    """

    def __init__(self, store: GroupStore) -> None:
        self._store = store

    async def get_group(self, group_id: int) -> GroupResponse:
        """Get a group with its members.

        Raises:
            NotFoundError: If the group does not exist.
            StoreFailureError: If the lookup fails.
        """
        group = await self._load(group_id)
        return self._to_response(group)

    async def delete_group(self, group_id: int) -> None:
        """Delete a pending or rejected group.

        Raises:
            NotFoundError: If the group does not exist.
            PermissionDeniedError: If the group was already approved.
            StoreFailureError: If the delete fails.
        """
        group = await self._load(group_id)
        if not can_delete_group(group.status):
            raise PermissionDeniedError(
                "Accepted group cannot be deleted",
                details={"status": group.status},
            )

        try:
            await self._store.delete_group(group_id)
        except RecordNotFoundError as e:
            raise NotFoundError(f"Group {group_id} not found") from e
        except DatabaseError as e:
            raise StoreFailureError(f"Failed to delete group {group_id}: {e.message}") from e

        logger.info("Group deleted: id=%s, name=%s", group_id, group.name)

    async def _load(self, group_id: int) -> Group:
        try:
            return await self._store.get_group(group_id)
        except RecordNotFoundError as e:
            raise NotFoundError(f"Group {group_id} not found") from e
        except DatabaseError as e:
            raise StoreFailureError(f"Failed to load group {group_id}: {e.message}") from e

    def _to_response(self, group: Group) -> GroupResponse:
        return GroupResponse(
            id=group.id,
            name=group.name,
            course_id=group.course_id,
            status=group.status,
            users=[GroupMemberResponse.model_validate(user) for user in group.users],
        )
