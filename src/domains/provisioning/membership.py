# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Translation of group members into provider usernames."""

import logging
from collections.abc import Sequence

from src.domains.exceptions import NotFoundError
from src.domains.provisioning.remote import call_remote
from src.infrastructure.database.models import User
from src.infrastructure.scm.base import SCM

logger = logging.getLogger(__name__)


class MembershipResolver:
    """Resolves group members to usernames on one provider."""

    def __init__(self, scm: SCM, timeout: float | None = None) -> None:
        self._scm = scm
        self._timeout = timeout

    async def resolve(self, users: Sequence[User], provider: str) -> list[str]:
        """Return the provider username of every member, in member order.

        All provider links are checked before any provider call is made, so
        a member without a link aborts the whole resolution up front.
        Lookups then run one at a time; the provider only offers point
        lookups by id.

        Args:
            users: Group members in their recorded order.
            provider: Provider name of the course.

        Returns:
            Usernames, one per member, in the same order.

        Raises:
            NotFoundError: If a member has no link to the provider.
            RemoteFailureError: If a lookup fails.
            ProvisioningTimeoutError: If a lookup timed out.
        """
        remote_ids: list[int] = []
        for user in users:
            identity = user.remote_identity_for(provider)
            if identity is None:
                raise NotFoundError(
                    f"User {user.id} has no {provider} account linked",
                    details={"user_id": user.id, "provider": provider},
                )
            remote_ids.append(identity.remote_id)

        usernames: list[str] = []
        for remote_id in remote_ids:
            username = await call_remote(
                self._scm.get_user_name_by_id(remote_id),
                f"look up {provider} user {remote_id}",
                self._timeout,
            )
            usernames.append(username)

        logger.debug("Resolved %d members on %s: %s", len(usernames), provider, usernames)
        return usernames
