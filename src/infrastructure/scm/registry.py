# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Session cache of live provider clients keyed by access token.

One caller can hold sessions to several providers at once, one per
linked account. The login flow registers a client when it receives a
token; request handlers only look clients up.
"""

import logging
from typing import TYPE_CHECKING

from src.infrastructure.scm.base import SCM
from src.infrastructure.scm.exceptions import UnsupportedProviderError
from src.infrastructure.scm.github import GitHubSCM

if TYPE_CHECKING:
    from src.core.config.settings import SCMSettings

logger = logging.getLogger(__name__)


def new_scm(provider: str, access_token: str, settings: "SCMSettings") -> SCM:
    """Build a client for the named provider.

    Raises:
        UnsupportedProviderError: If the provider has no implementation.
    """
    if provider == GitHubSCM.provider:
        return GitHubSCM(
            access_token=access_token,
            api_url=settings.github_api_url,
            timeout=settings.request_timeout,
            per_page=settings.per_page,
        )
    raise UnsupportedProviderError(provider)


class SCMRegistry:
    """Live provider clients keyed by access token."""

    def __init__(self, settings: "SCMSettings") -> None:
        self._settings = settings
        self._clients: dict[str, SCM] = {}

    def get(self, access_token: str) -> SCM | None:
        """Return the client registered for a token, if any."""
        return self._clients.get(access_token)

    def register(self, access_token: str, client: SCM) -> None:
        """Register (or replace) the client for a token."""
        self._clients[access_token] = client

    def get_or_create(self, provider: str, access_token: str) -> SCM:
        """Return the client for a token, creating it on first use."""
        client = self._clients.get(access_token)
        if client is None:
            client = new_scm(provider, access_token, self._settings)
            self._clients[access_token] = client
            logger.debug("Registered %s client (%d live)", provider, len(self._clients))
        return client

    def remove(self, access_token: str) -> None:
        """Forget the client for a token."""
        self._clients.pop(access_token, None)

    def __contains__(self, access_token: object) -> bool:
        return access_token in self._clients

    def __len__(self) -> int:
        return len(self._clients)
