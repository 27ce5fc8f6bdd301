# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Caller identity and provider session resolution.

The request carries the caller as an opaque token: the values of the
X-User header. The header may repeat, so the token is a list of values.

Example:
    >>> user = await resolve_identity(request.headers.getlist("X-User"), store)
    >>> scm = resolve_scm(user, "github", registry)
"""

import logging
import re
from collections.abc import Sequence

from src.domains.exceptions import (
    NotFoundError,
    PermissionDeniedError,
    StoreFailureError,
    UnauthenticatedError,
)
from src.infrastructure.database.connection import DatabaseError
from src.infrastructure.database.models import User
from src.infrastructure.database.store import GroupStore, RecordNotFoundError
from src.infrastructure.scm.base import SCM
from src.infrastructure.scm.exceptions import UnsupportedProviderError
from src.infrastructure.scm.registry import SCMRegistry

logger = logging.getLogger(__name__)

# ASCII digits only; user ids live in a 32-bit integer column
_USER_ID_PATTERN = re.compile(r"[0-9]{1,10}")
MAX_USER_ID = 2**31 - 1


async def resolve_identity(token_values: Sequence[str], store: GroupStore) -> User:
    """Resolve the caller token to a local user.

    Args:
        token_values: All values of the caller header.
        store: Group store used for the user lookup.

    Returns:
        The matching user with its provider links.

    Raises:
        UnauthenticatedError: If the token is missing or empty.
        PermissionDeniedError: If the token is malformed or conflicting.
        NotFoundError: If no user matches the token.
        StoreFailureError: If the lookup itself fails.
    """
    if len(token_values) == 0:
        raise UnauthenticatedError("No user metadata")
    if len(token_values) != 1:
        raise PermissionDeniedError("Invalid user payload")

    token = token_values[0].strip()
    if token == "":
        raise UnauthenticatedError("Invalid user payload")
    if not _USER_ID_PATTERN.fullmatch(token):
        raise PermissionDeniedError("Invalid user payload")

    user_id = int(token)
    if user_id > MAX_USER_ID:
        raise PermissionDeniedError("Invalid user payload")

    try:
        user = await store.get_user(user_id)
    except RecordNotFoundError as e:
        raise NotFoundError(f"User {user_id} not found") from e
    except DatabaseError as e:
        raise StoreFailureError(f"Failed to load user {user_id}: {e.message}") from e

    logger.debug("Caller resolved: user_id=%s, is_admin=%s", user.id, user.is_admin)
    return user


def resolve_scm(user: User, provider: str, registry: SCMRegistry) -> SCM:
    """Return the caller's live client for a provider.

    Args:
        user: Resolved caller.
        provider: Provider name, e.g. "github".
        registry: Session cache of live clients keyed by access token.

    Returns:
        The live provider client.

    Raises:
        PermissionDeniedError: If the stored token has no live session.
        NotFoundError: If the caller has no link to the provider.
    """
    identity = user.remote_identity_for(provider)
    if identity is None:
        raise NotFoundError(
            f"No {provider} account linked for user {user.id}",
            details={"user_id": user.id, "provider": provider},
        )

    client = registry.get(identity.access_token)
    if client is None:
        raise PermissionDeniedError(
            "Invalid token",
            details={"user_id": user.id, "provider": provider},
        )
    return client


def open_sessions(user: User, registry: SCMRegistry) -> list[str]:
    """Make sure every provider account of the caller has a live client.

    Runs after login, once the stored access tokens are current. Opening a
    session that already exists reuses its client. Links to providers with
    no client implementation are skipped.

    Args:
        user: Resolved caller.
        registry: Session cache of live clients keyed by access token.

    Returns:
        Names of the providers the caller now has a live client for.
    """
    providers = []
    for identity in user.remote_identities:
        try:
            registry.get_or_create(identity.provider, identity.access_token)
        except UnsupportedProviderError:
            logger.warning(
                "Skipping session for unsupported provider: user_id=%s, provider=%s",
                user.id,
                identity.provider,
            )
            continue
        providers.append(identity.provider)

    logger.info("Sessions opened: user_id=%s, providers=%s", user.id, providers)
    return providers
