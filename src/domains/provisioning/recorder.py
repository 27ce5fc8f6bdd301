# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Local writes performed by group provisioning."""

import logging

from src.domains.exceptions import NotFoundError, StoreFailureError
from src.infrastructure.database.connection import DatabaseError
from src.infrastructure.database.models import Repository as RepositoryRecord
from src.infrastructure.database.store import GroupStore, RecordNotFoundError
from src.models.enums import GroupStatus

logger = logging.getLogger(__name__)


class PersistenceRecorder:
    """Records repository references and group status changes.

    Neither write is retried. The repository insert is not idempotent.
    """

    def __init__(self, store: GroupStore) -> None:
        self._store = store

    async def record_repository(self, record: RepositoryRecord) -> RepositoryRecord:
        """Insert a repository record.

        Raises:
            StoreFailureError: If the insert fails, including when the
                (directory, repository) pair is already recorded.
        """
        try:
            return await self._store.create_repository(record)
        except DatabaseError as e:
            logger.warning(
                "Failed to create repository in database: url=%s, group_id=%s, error=%s",
                record.html_url,
                record.group_id,
                str(e),
            )
            raise StoreFailureError(
                f"Failed to record repository {record.repository_id}: {e.message}",
                details={
                    "directory_id": record.directory_id,
                    "repository_id": record.repository_id,
                },
            ) from e

    async def update_group_status(self, group_id: int, status: GroupStatus) -> None:
        """Write a group's approval status.

        Raises:
            NotFoundError: If the group no longer exists.
            StoreFailureError: If the write fails.
        """
        try:
            await self._store.update_group_status(group_id, status)
        except RecordNotFoundError as e:
            raise NotFoundError(str(e)) from e
        except DatabaseError as e:
            logger.warning(
                "Failed to update group status in database: group_id=%s, status=%s, error=%s",
                group_id,
                status,
                str(e),
            )
            raise StoreFailureError(
                f"Failed to update status of group {group_id}: {e.message}",
                details={"group_id": group_id, "status": int(status)},
            ) from e
