# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Code-hosting provider clients.

This package provides the provider-neutral SCM interface, the GitHub
implementation and the registry of live clients keyed by access token.
"""

from src.infrastructure.scm.base import (
    SCM,
    AddTeamRepoOptions,
    CreateRepositoryOptions,
    CreateTeamOptions,
    Directory,
    Repository,
    Team,
)
from src.infrastructure.scm.exceptions import (
    SCMAPIError,
    SCMError,
    SCMNotFoundError,
    UnsupportedProviderError,
)
from src.infrastructure.scm.github import GitHubSCM
from src.infrastructure.scm.registry import SCMRegistry, new_scm

__all__ = [
    "SCM",
    "Directory",
    "Repository",
    "Team",
    "CreateRepositoryOptions",
    "CreateTeamOptions",
    "AddTeamRepoOptions",
    "SCMError",
    "SCMAPIError",
    "SCMNotFoundError",
    "UnsupportedProviderError",
    "GitHubSCM",
    "SCMRegistry",
    "new_scm",
]
