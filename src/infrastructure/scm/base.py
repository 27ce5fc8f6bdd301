# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Provider-neutral client interface and value types.

Every provider client implements SCM. Each method is one or more network
calls and may fail independently; no provider-side transactionality is
assumed.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Directory:
    """A provider namespace (GitHub organization) holding repositories."""

    id: int
    path: str


@dataclass(frozen=True)
class Repository:
    """A repository as reported by the provider.

    Attributes:
        id: Provider-assigned repository id.
        path: Repository name, unique within its directory.
        owner: Login of the owning account or organization.
        web_url: Browser URL of the repository.
        directory_id: Id of the owning directory.
    """

    id: int
    path: str
    owner: str
    web_url: str
    directory_id: int


@dataclass(frozen=True)
class Team:
    """A provider-side team.

    Attributes:
        id: Provider-assigned team id.
        name: Display name.
        slug: URL-safe name the provider addresses the team by.
        url: Browser URL of the team.
    """

    id: int
    name: str
    slug: str = ""
    url: str = ""


@dataclass(frozen=True)
class CreateRepositoryOptions:
    """Options for SCM.create_repository."""

    directory: Directory
    path: str
    private: bool = True


@dataclass(frozen=True)
class CreateTeamOptions:
    """Options for SCM.create_team."""

    directory: Directory
    team_name: str
    users: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class AddTeamRepoOptions:
    """Options for SCM.add_team_repo.

    The team and the repository belong to the same directory, whose path
    is owner.
    """

    team_id: int
    team_slug: str
    owner: str
    repo: str
    permission: str = "push"


class SCM(ABC):
    """A live client for one provider, bound to one access token."""

    provider: str

    @abstractmethod
    async def get_directory(self, directory_id: int) -> Directory:
        """Get a directory by provider id."""

    @abstractmethod
    async def get_repositories(self, directory: Directory) -> list[Repository]:
        """List every repository in a directory."""

    @abstractmethod
    async def create_repository(self, opts: CreateRepositoryOptions) -> Repository:
        """Create a repository in a directory."""

    @abstractmethod
    async def create_team(self, opts: CreateTeamOptions) -> Team:
        """Create a team, or reuse the one with that name, and add the users."""

    @abstractmethod
    async def add_team_repo(self, opts: AddTeamRepoOptions) -> None:
        """Give a team access to a repository."""

    @abstractmethod
    async def get_user_name_by_id(self, remote_id: int) -> str:
        """Translate a provider user id into the provider's username."""
