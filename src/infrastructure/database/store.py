# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Group store: the local persistence boundary used by group workflows.

Every write commits on its own. Group provisioning is not transactional
across steps, so a repository record written before a later failure
stays written.

Reads raise RecordNotFoundError when the row does not exist; every other
database failure is raised as DatabaseError.
"""

import logging

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.infrastructure.database.connection import DatabaseError
from src.infrastructure.database.models import (
    Course,
    Group,
    GroupUser,
    Repository,
    User,
)

logger = logging.getLogger(__name__)


class RecordNotFoundError(Exception):
    """Raised when a requested row does not exist.

    Attributes:
        entity: Name of the missing entity ("user", "group", ...).
        entity_id: Identifier that was looked up.
    """

    def __init__(self, entity: str, entity_id: int) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")


class DuplicateRecordError(DatabaseError):
    """Raised when an insert violates a uniqueness constraint."""


class GroupStore:
    """Store operations consumed by the group workflows.

    Attributes:
        _db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        """Initialize the store.

        Args:
            db: Async database session.
        """
        self._db = db

    async def get_user(self, user_id: int) -> User:
        """Get a user with its provider links.

        Raises:
            RecordNotFoundError: If no such user exists.
            DatabaseError: On any other database failure.
        """
        stmt = (
            select(User)
            .where(User.id == user_id)
            .options(selectinload(User.remote_identities))
        )
        user = await self._scalar(stmt)
        if user is None:
            raise RecordNotFoundError("user", user_id)
        return user

    async def get_group(self, group_id: int) -> Group:
        """Get a group with its members and their provider links.

        Raises:
            RecordNotFoundError: If no such group exists.
            DatabaseError: On any other database failure.
        """
        stmt = (
            select(Group)
            .where(Group.id == group_id)
            .options(
                selectinload(Group.memberships)
                .selectinload(GroupUser.user)
                .selectinload(User.remote_identities)
            )
        )
        group = await self._scalar(stmt)
        if group is None:
            raise RecordNotFoundError("group", group_id)
        return group

    async def get_course(self, course_id: int) -> Course:
        """Get a course.

        Raises:
            RecordNotFoundError: If no such course exists.
            DatabaseError: On any other database failure.
        """
        course = await self._scalar(select(Course).where(Course.id == course_id))
        if course is None:
            raise RecordNotFoundError("course", course_id)
        return course

    async def create_repository(self, record: Repository) -> Repository:
        """Insert a repository record.

        Not idempotent: inserting the same (directory_id, repository_id)
        twice fails on the uniqueness constraint.

        Raises:
            DuplicateRecordError: If the record already exists.
            DatabaseError: On any other database failure.
        """
        try:
            self._db.add(record)
            await self._db.flush()
            await self._db.commit()
        except IntegrityError as e:
            await self._db.rollback()
            raise DuplicateRecordError(
                f"Repository {record.repository_id} already recorded "
                f"for directory {record.directory_id}",
                e,
            ) from e
        except SQLAlchemyError as e:
            await self._db.rollback()
            raise DatabaseError("Failed to create repository record", e) from e

        logger.debug(
            "Repository record created: id=%s, repository_id=%s",
            record.id,
            record.repository_id,
        )
        return record

    async def update_group_status(self, group_id: int, status: int) -> None:
        """Set the approval status of a group.

        Raises:
            RecordNotFoundError: If no such group exists.
            DatabaseError: On any other database failure.
        """
        stmt = update(Group).where(Group.id == group_id).values(status=int(status))
        await self._write(stmt, "group", group_id)

    async def delete_group(self, group_id: int) -> None:
        """Delete a group and its memberships.

        Raises:
            RecordNotFoundError: If no such group exists.
            DatabaseError: On any other database failure.
        """
        await self._write(delete(Group).where(Group.id == group_id), "group", group_id)

    async def _scalar(self, stmt):
        try:
            result = await self._db.execute(stmt)
        except SQLAlchemyError as e:
            raise DatabaseError("Database query failed", e) from e
        return result.scalar_one_or_none()

    async def _write(self, stmt, entity: str, entity_id: int) -> None:
        try:
            result = await self._db.execute(stmt)
            if result.rowcount == 0:
                await self._db.rollback()
                raise RecordNotFoundError(entity, entity_id)
            await self._db.commit()
        except SQLAlchemyError as e:
            await self._db.rollback()
            raise DatabaseError(f"Failed to write {entity} {entity_id}", e) from e
