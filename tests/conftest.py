# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- An in-memory provider client that records every call
- An in-memory group store
- A populated provider registry
- Model factories for users, courses and groups
"""

import asyncio
from collections.abc import Callable
from typing import Any

import pytest

from src.core.config.settings import SCMSettings
from src.domains.provisioning import GroupProvisioningService
from src.infrastructure.database.connection import DatabaseError
from src.infrastructure.database.models import (
    Course,
    Group,
    GroupUser,
    RemoteIdentity,
    Repository as RepositoryRecord,
    User,
)
from src.infrastructure.database.store import DuplicateRecordError, RecordNotFoundError
from src.infrastructure.scm.base import (
    SCM,
    AddTeamRepoOptions,
    CreateRepositoryOptions,
    CreateTeamOptions,
    Directory,
    Repository,
    Team,
)
from src.infrastructure.scm.exceptions import SCMNotFoundError
from src.infrastructure.scm.registry import SCMRegistry
from src.models.enums import GroupStatus

PROVIDER = "P"
DIRECTORY = Directory(id=100, path="org/course")
ADMIN_TOKEN = "admin-token"


# =============================================================================
# Fakes
# =============================================================================


class FakeSCM(SCM):
    """In-memory provider client that records every call.

    Attributes:
        calls: (method, argument) pairs in call order.
        repositories: Repositories the provider reports, per directory id.
        usernames: Provider usernames keyed by provider user id.
        failures: Exceptions to raise, keyed by method name.
        delays: Seconds to sleep before answering, keyed by method name.
    """

    provider = PROVIDER

    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []
        self.directories: dict[int, Directory] = {DIRECTORY.id: DIRECTORY}
        self.repositories: dict[int, list[Repository]] = {}
        self.usernames: dict[int, str] = {}
        self.teams: list[tuple[Team, CreateTeamOptions]] = []
        self.failures: dict[str, Exception] = {}
        self.delays: dict[str, float] = {}
        self._next_id = 1000

    def calls_to(self, method: str) -> list[Any]:
        return [arg for name, arg in self.calls if name == method]

    def add_repository(self, directory: Directory, path: str) -> Repository:
        repo = Repository(
            id=self._new_id(),
            path=path,
            owner=directory.path.split("/")[0],
            web_url=f"https://scm.example.com/{directory.path}/{path}",
            directory_id=directory.id,
        )
        self.repositories.setdefault(directory.id, []).append(repo)
        return repo

    async def get_directory(self, directory_id: int) -> Directory:
        await self._enter("get_directory", directory_id)
        if directory_id not in self.directories:
            raise SCMNotFoundError(f"directory {directory_id} not found")
        return self.directories[directory_id]

    async def get_repositories(self, directory: Directory) -> list[Repository]:
        await self._enter("get_repositories", directory)
        return list(self.repositories.get(directory.id, []))

    async def create_repository(self, opts: CreateRepositoryOptions) -> Repository:
        await self._enter("create_repository", opts)
        return self.add_repository(opts.directory, opts.path)

    async def create_team(self, opts: CreateTeamOptions) -> Team:
        await self._enter("create_team", opts)
        team = Team(id=self._new_id(), name=opts.team_name, slug=opts.team_name)
        self.teams.append((team, opts))
        return team

    async def add_team_repo(self, opts: AddTeamRepoOptions) -> None:
        await self._enter("add_team_repo", opts)

    async def get_user_name_by_id(self, remote_id: int) -> str:
        await self._enter("get_user_name_by_id", remote_id)
        if remote_id not in self.usernames:
            raise SCMNotFoundError(f"user {remote_id} not found")
        return self.usernames[remote_id]

    async def _enter(self, method: str, arg: Any) -> None:
        self.calls.append((method, arg))
        if method in self.delays:
            await asyncio.sleep(self.delays[method])
        if method in self.failures:
            raise self.failures[method]

    def _new_id(self) -> int:
        self._next_id += 1
        return self._next_id


class FakeGroupStore:
    """In-memory stand-in for GroupStore.

    Attributes:
        repositories: Inserted repository records.
        status_updates: (group_id, status) pairs in write order.
        failures: DatabaseErrors to raise, keyed by method name.
    """

    def __init__(self) -> None:
        self.users: dict[int, User] = {}
        self.groups: dict[int, Group] = {}
        self.courses: dict[int, Course] = {}
        self.repositories: list[RepositoryRecord] = []
        self.status_updates: list[tuple[int, int]] = []
        self.deleted: list[int] = []
        self.failures: dict[str, DatabaseError] = {}

    async def get_user(self, user_id: int) -> User:
        self._maybe_fail("get_user")
        if user_id not in self.users:
            raise RecordNotFoundError("user", user_id)
        return self.users[user_id]

    async def get_group(self, group_id: int) -> Group:
        self._maybe_fail("get_group")
        if group_id not in self.groups:
            raise RecordNotFoundError("group", group_id)
        return self.groups[group_id]

    async def get_course(self, course_id: int) -> Course:
        self._maybe_fail("get_course")
        if course_id not in self.courses:
            raise RecordNotFoundError("course", course_id)
        return self.courses[course_id]

    async def create_repository(self, record: RepositoryRecord) -> RepositoryRecord:
        self._maybe_fail("create_repository")
        for existing in self.repositories:
            if (existing.directory_id, existing.repository_id) == (
                record.directory_id,
                record.repository_id,
            ):
                raise DuplicateRecordError(
                    f"Repository {record.repository_id} already recorded "
                    f"for directory {record.directory_id}"
                )
        record.id = len(self.repositories) + 1
        self.repositories.append(record)
        return record

    async def update_group_status(self, group_id: int, status: int) -> None:
        self._maybe_fail("update_group_status")
        if group_id not in self.groups:
            raise RecordNotFoundError("group", group_id)
        self.groups[group_id].status = int(status)
        self.status_updates.append((group_id, int(status)))

    async def delete_group(self, group_id: int) -> None:
        self._maybe_fail("delete_group")
        if group_id not in self.groups:
            raise RecordNotFoundError("group", group_id)
        del self.groups[group_id]
        self.deleted.append(group_id)

    def _maybe_fail(self, method: str) -> None:
        if method in self.failures:
            raise self.failures[method]


# =============================================================================
# Factories
# =============================================================================


def build_user(
    user_id: int,
    remote_id: int | None = None,
    provider: str = PROVIDER,
    is_admin: bool = False,
    access_token: str | None = None,
) -> User:
    """Build a transient user, linked to a provider when remote_id is set."""
    identities = []
    if remote_id is not None:
        identities.append(
            RemoteIdentity(
                user_id=user_id,
                provider=provider,
                remote_id=remote_id,
                access_token=access_token or f"token-{user_id}",
            )
        )
    return User(
        id=user_id,
        name=f"user{user_id}",
        email=f"user{user_id}@example.com",
        is_admin=is_admin,
        remote_identities=identities,
    )


def build_group(
    group_id: int,
    name: str,
    course_id: int,
    members: list[User],
    status: GroupStatus = GroupStatus.PENDING,
) -> Group:
    """Build a transient group with members in the given order."""
    return Group(
        id=group_id,
        name=name,
        course_id=course_id,
        status=int(status),
        memberships=[
            GroupUser(group_id=group_id, user_id=user.id, position=position, user=user)
            for position, user in enumerate(members)
        ],
    )


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def directory() -> Directory:
    """Provide the course directory org/course."""
    return DIRECTORY


@pytest.fixture
def fake_scm() -> FakeSCM:
    """Provide a provider client that knows the members u1 and u2."""
    scm = FakeSCM()
    scm.usernames = {7: "u1-handle", 9: "u2-handle"}
    return scm


@pytest.fixture
def admin() -> User:
    """Provide an admin caller linked to the provider."""
    return build_user(1, remote_id=1, is_admin=True, access_token=ADMIN_TOKEN)


@pytest.fixture
def members() -> list[User]:
    """Provide u1 (provider id 7) and u2 (provider id 9)."""
    return [build_user(11, remote_id=7), build_user(12, remote_id=9)]


@pytest.fixture
def course() -> Course:
    """Provide a course hosted in the org/course directory."""
    return Course(
        id=5,
        name="Programming",
        code="DAT100",
        provider=PROVIDER,
        directory_id=DIRECTORY.id,
    )


@pytest.fixture
def group(course: Course, members: list[User]) -> Group:
    """Provide the pending group g42."""
    return build_group(42, "g42", course.id, members)


@pytest.fixture
def fake_store(admin: User, members: list[User], course: Course, group: Group) -> FakeGroupStore:
    """Provide a store holding the caller, members, course and group."""
    store = FakeGroupStore()
    for user in [admin, *members]:
        store.users[user.id] = user
    store.courses[course.id] = course
    store.groups[group.id] = group
    return store


@pytest.fixture
def registry(fake_scm: FakeSCM) -> SCMRegistry:
    """Provide a registry with a live session for the admin caller."""
    registry = SCMRegistry(SCMSettings())
    registry.register(ADMIN_TOKEN, fake_scm)
    return registry


@pytest.fixture
def provisioning_service(
    fake_store: FakeGroupStore,
    registry: SCMRegistry,
) -> GroupProvisioningService:
    """Provide a provisioning service over the fakes."""
    return GroupProvisioningService(
        store=fake_store,  # type: ignore[arg-type]
        registry=registry,
        threshold=int(GroupStatus.TEACHER),
        timeout=1.0,
    )


@pytest.fixture
def make_user() -> Callable[..., User]:
    """Provide the user factory."""
    return build_user


@pytest.fixture
def make_group() -> Callable[..., Group]:
    """Provide the group factory."""
    return build_group


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
