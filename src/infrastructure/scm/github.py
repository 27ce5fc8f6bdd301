# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""GitHub client for group provisioning.

Async HTTP client over the GitHub REST API. A course directory is a GitHub
organization, group repositories live inside it, and group teams are
organization teams.

Example:
    scm = GitHubSCM(access_token="gho_...")
    org = await scm.get_directory(1234)
    repos = await scm.get_repositories(org)
"""

import json
import logging
import re
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import aiohttp

from src.infrastructure.scm.base import (
    SCM,
    AddTeamRepoOptions,
    CreateRepositoryOptions,
    CreateTeamOptions,
    Directory,
    Repository,
    Team,
)
from src.infrastructure.scm.exceptions import SCMAPIError, SCMNotFoundError

logger = logging.getLogger(__name__)


class GitHubSCM(SCM):
    """Async HTTP client for the GitHub REST API.

    Attributes:
        api_url: Base URL of the GitHub API.
        access_token: OAuth token of the user the client acts for.
        timeout: Per-request timeout.
        per_page: Page size used when listing repositories.
    """

    provider = "github"

    def __init__(
        self,
        access_token: str,
        api_url: str = "https://api.github.com",
        timeout: float = 30.0,
        per_page: int = 100,
    ):
        self.access_token = access_token
        self.api_url = api_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.per_page = per_page

    def _get_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.access_token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    async def _request(
        self,
        method: str,
        path: str,
        payload: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Send one request and return the decoded JSON body.

        Returns None for empty (204) responses.

        Raises:
            SCMNotFoundError: On 404.
            SCMAPIError: On any other non-2xx status, a success body that is
                not JSON, or a connection error.
        """
        url = f"{self.api_url}{path}"
        logger.debug("GitHub request: %s %s", method, path)

        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.request(
                    method,
                    url,
                    json=payload,
                    params=params,
                    headers=self._get_headers(),
                ) as response:
                    if response.status == 204:
                        return None

                    body = await response.text()

                    if 200 <= response.status < 300:
                        return _decode(body, method, path, response.status)

                    message = _error_message(body) or f"GitHub API error on {method} {path}"
                    if response.status == 404:
                        raise SCMNotFoundError(message, response_body=body)
                    raise SCMAPIError(
                        message,
                        status_code=response.status,
                        response_body=body,
                    )

        except aiohttp.ClientError as e:
            logger.error("GitHub API connection error: %s", str(e))
            raise SCMAPIError(
                message=f"Failed to connect to GitHub API: {str(e)}",
                details={"error_type": type(e).__name__},
            ) from e

    async def get_directory(self, directory_id: int) -> Directory:
        data = await self._request("GET", f"/organizations/{directory_id}")
        with _response_shape("get organization"):
            return Directory(id=data["id"], path=data["login"])

    async def get_repositories(self, directory: Directory) -> list[Repository]:
        """List every repository of the organization, following pagination."""
        repositories: list[Repository] = []
        page = 1
        while True:
            data = await self._request(
                "GET",
                f"/orgs/{directory.path}/repos",
                params={"per_page": self.per_page, "page": page},
            )
            with _response_shape("list repositories"):
                repositories.extend(_to_repository(item, directory.id) for item in data or [])
            if not data or len(data) < self.per_page:
                break
            page += 1

        logger.debug(
            "Listed %d repositories in %s",
            len(repositories),
            directory.path,
        )
        return repositories

    async def create_repository(self, opts: CreateRepositoryOptions) -> Repository:
        data = await self._request(
            "POST",
            f"/orgs/{opts.directory.path}/repos",
            payload={"name": opts.path, "private": opts.private},
        )
        with _response_shape("create repository"):
            repo = _to_repository(data, opts.directory.id)
        logger.info(
            "Created GitHub repository: %s/%s (id=%s)",
            opts.directory.path,
            opts.path,
            repo.id,
        )
        return repo

    async def create_team(self, opts: CreateTeamOptions) -> Team:
        """Create an organization team, then add each user as a member.

        GitHub answers 422 when the organization already has a team with
        that name, typically left behind by an earlier run that failed part
        way. That team is looked up by slug and reused. Member additions are
        separate calls and idempotent; a failure part-way leaves the team in
        place with the members added so far.
        """
        org = opts.directory.path
        try:
            data = await self._request(
                "POST",
                f"/orgs/{org}/teams",
                payload={"name": opts.team_name, "privacy": "closed"},
            )
        except SCMAPIError as e:
            if e.status_code != 422:
                raise
            slug = team_slug(opts.team_name)
            logger.info("GitHub team %s/%s exists, reusing it", org, slug)
            data = await self._request("GET", f"/orgs/{org}/teams/{slug}")

        with _response_shape("create team"):
            team = Team(
                id=data["id"],
                name=data["name"],
                slug=data["slug"],
                url=data.get("html_url", ""),
            )

        for username in opts.users:
            await self._request(
                "PUT",
                f"/orgs/{org}/teams/{team.slug}/memberships/{username}",
                payload={"role": "member"},
            )

        logger.info(
            "GitHub team ready: %s/%s (id=%s, members=%d)",
            org,
            team.slug,
            team.id,
            len(opts.users),
        )
        return team

    async def add_team_repo(self, opts: AddTeamRepoOptions) -> None:
        await self._request(
            "PUT",
            f"/orgs/{opts.owner}/teams/{opts.team_slug}/repos/{opts.owner}/{opts.repo}",
            payload={"permission": opts.permission},
        )

    async def get_user_name_by_id(self, remote_id: int) -> str:
        data = await self._request("GET", f"/user/{remote_id}")
        with _response_shape("get user"):
            return data["login"]


def team_slug(name: str) -> str:
    """Return the slug GitHub derives from a team name."""
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


def _to_repository(data: dict[str, Any], directory_id: int) -> Repository:
    return Repository(
        id=data["id"],
        path=data["name"],
        owner=data["owner"]["login"],
        web_url=data["html_url"],
        directory_id=directory_id,
    )


@contextmanager
def _response_shape(action: str) -> Iterator[None]:
    """Report a response missing the fields we read as an API error."""
    try:
        yield
    except (KeyError, TypeError) as e:
        raise SCMAPIError(
            f"Unexpected GitHub response to {action}: {e!r}",
            details={"error_type": type(e).__name__},
        ) from e


def _decode(body: str, method: str, path: str, status: int) -> Any:
    if not body:
        return None
    try:
        return json.loads(body)
    except ValueError as e:
        raise SCMAPIError(
            f"GitHub returned a non-JSON body on {method} {path}",
            status_code=status,
            response_body=body,
        ) from e


def _error_message(body: str) -> str | None:
    try:
        decoded = json.loads(body)
    except ValueError:
        return None
    if isinstance(decoded, dict):
        return decoded.get("message")
    return None
