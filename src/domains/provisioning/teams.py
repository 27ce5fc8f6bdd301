# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Provider-side team creation for a group."""

import logging

from src.domains.provisioning.remote import call_remote
from src.infrastructure.scm.base import (
    SCM,
    AddTeamRepoOptions,
    CreateTeamOptions,
    Directory,
    Repository,
    Team,
)

logger = logging.getLogger(__name__)


class TeamSynchronizer:
    """Creates a group's team and gives it access to the group repository.

    Nothing here retries. A team left behind by an earlier failed run is
    reused by the provider client rather than created again.
    """

    def __init__(self, scm: SCM, timeout: float | None = None) -> None:
        self._scm = scm
        self._timeout = timeout

    async def create_team(
        self,
        directory: Directory,
        team_name: str,
        usernames: list[str],
    ) -> Team:
        """Create or reuse the team in the directory and add the members.

        Raises:
            RemoteFailureError: If the provider call fails.
            ProvisioningTimeoutError: If the call timed out.
        """
        team = await call_remote(
            self._scm.create_team(
                CreateTeamOptions(
                    directory=Directory(id=directory.id, path=directory.path),
                    team_name=team_name,
                    users=list(usernames),
                )
            ),
            f"create team {directory.path}/{team_name}",
            self._timeout,
        )
        logger.info("Team ready: %s (id=%s, members=%s)", team.name, team.id, usernames)
        return team

    async def attach_repository(self, team: Team, repository: Repository) -> None:
        """Give a team push access to a repository.

        Raises:
            RemoteFailureError: If the provider call fails.
            ProvisioningTimeoutError: If the call timed out.
        """
        await call_remote(
            self._scm.add_team_repo(
                AddTeamRepoOptions(
                    team_id=team.id,
                    team_slug=team.slug,
                    owner=repository.owner,
                    repo=repository.path,
                )
            ),
            f"add repository {repository.owner}/{repository.path} to team {team.id}",
            self._timeout,
        )
        logger.info("Added repository %s to team %s", repository.path, team.id)
