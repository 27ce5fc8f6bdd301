# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Course, group and repository-record models."""

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.infrastructure.database.models.base import Base, TimestampMixin
from src.infrastructure.database.models.user import User
from src.models.enums import GroupStatus, RepositoryType


class Course(Base, TimestampMixin):
    """A course hosted under one provider directory.

    Attributes:
        provider: Name of the code-hosting provider (e.g. "github").
        directory_id: Provider id of the directory (organization) that
            owns every repository of the course.
    """

    __tablename__ = "courses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    code: Mapped[str] = mapped_column(String(50), nullable=False)
    provider: Mapped[str] = mapped_column(String(50), nullable=False)
    directory_id: Mapped[int] = mapped_column(BigInteger, nullable=False)

    groups: Mapped[list["Group"]] = relationship(back_populates="course")


class GroupUser(Base):
    """Ordered membership of a user in a group."""

    __tablename__ = "group_users"

    group_id: Mapped[int] = mapped_column(
        ForeignKey("groups.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    user: Mapped[User] = relationship(lazy="selectin")


class Group(Base, TimestampMixin):
    """A student group inside a course.

    The group name doubles as the repository path and team name on the
    provider, so it is unique within the course.
    """

    __tablename__ = "groups"
    __table_args__ = (
        UniqueConstraint("course_id", "name", name="unique_course_group_name"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    course_id: Mapped[int] = mapped_column(
        ForeignKey("courses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    status: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=int(GroupStatus.PENDING),
    )

    course: Mapped[Course] = relationship(back_populates="groups")
    memberships: Mapped[list[GroupUser]] = relationship(
        lazy="selectin",
        order_by=GroupUser.position,
        cascade="all, delete-orphan",
    )

    @property
    def users(self) -> list[User]:
        """Members in their recorded order."""
        return [membership.user for membership in self.memberships]


class Repository(Base, TimestampMixin):
    """A provider repository recorded locally.

    Exactly one record per (directory_id, repository_id).
    """

    __tablename__ = "repositories"
    __table_args__ = (
        UniqueConstraint(
            "directory_id",
            "repository_id",
            name="unique_directory_repository",
        ),
        CheckConstraint(
            "type IN ('user', 'group', 'course_info', 'assignments', 'tests')",
            name="valid_repository_type",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    directory_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    repository_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    html_url: Mapped[str] = mapped_column(String(500), nullable=False)
    type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=RepositoryType.USER.value,
    )
    user_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    group_id: Mapped[int | None] = mapped_column(
        ForeignKey("groups.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
