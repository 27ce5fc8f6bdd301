# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Repository reconciliation against the provider.

The provider is the single source of truth for whether a repository
exists. Every reconcile lists the whole directory (the provider only
supports enumeration) and creates the repository only when the path is
absent. This list-before-create step is what makes re-running provisioning
safe up to the point the repository is resolved.
"""

import logging

from src.domains.provisioning.remote import call_remote
from src.infrastructure.scm.base import (
    SCM,
    CreateRepositoryOptions,
    Directory,
    Repository,
)

logger = logging.getLogger(__name__)


class RepositoryReconciler:
    """Find-or-create for a repository path within a directory.

    Attributes:
        _scm: Provider client.
        _timeout: Per-call timeout in seconds.
    """

    def __init__(self, scm: SCM, timeout: float | None = None) -> None:
        self._scm = scm
        self._timeout = timeout

    async def reconcile(self, directory: Directory, path: str) -> tuple[Repository, bool]:
        """Return the repository at path, creating it if it does not exist.

        Args:
            directory: Directory the repository lives in.
            path: Desired repository path.

        Returns:
            Tuple of (repository, created). created is False when an
            existing repository was reused.

        Raises:
            RemoteFailureError: If listing or creation fails. A failed
                create never falls back to a listed entry.
            ProvisioningTimeoutError: If a provider call timed out.
        """
        repositories = await call_remote(
            self._scm.get_repositories(directory),
            f"list repositories in {directory.path}",
            self._timeout,
        )

        existing = {repo.path: repo for repo in repositories}
        logger.debug(
            "Existing repositories in %s: %s",
            directory.path,
            sorted(existing),
        )

        repo = existing.get(path)
        if repo is not None:
            logger.info(
                "Reusing existing repository: %s/%s (id=%s)",
                directory.path,
                path,
                repo.id,
            )
            return repo, False

        repo = await call_remote(
            self._scm.create_repository(
                CreateRepositoryOptions(directory=directory, path=path, private=True)
            ),
            f"create repository {directory.path}/{path}",
            self._timeout,
        )
        logger.info("Created repository: %s/%s (id=%s)", directory.path, path, repo.id)
        return repo, True
