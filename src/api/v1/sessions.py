# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Session API endpoint.

- POST / - Open live provider clients for the caller's linked accounts

The login gateway calls this after it has stored fresh access tokens, so
that later group requests find a live client for the caller.
"""

import logging

from fastapi import APIRouter, Depends

from src.api.dependencies import get_caller_token, get_scm_registry, get_store
from src.api.v1.errors import ERROR_RESPONSES, to_http_exception
from src.domains.exceptions import ProvisioningError
from src.domains.identity import open_sessions, resolve_identity
from src.infrastructure.database.store import GroupStore
from src.infrastructure.scm.registry import SCMRegistry
from src.models.session import SessionResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=SessionResponse,
    summary="Open provider sessions",
    responses={code: ERROR_RESPONSES[code] for code in (401, 403, 404, 500)},
)
async def create_session(
    caller_token: list[str] = Depends(get_caller_token),
    store: GroupStore = Depends(get_store),
    registry: SCMRegistry = Depends(get_scm_registry),
) -> SessionResponse:
    """Register a live client for every provider account of the caller.

    Calling it again is harmless; existing clients are kept.
    """
    try:
        user = await resolve_identity(caller_token, store)
    except ProvisioningError as e:
        raise to_http_exception(e) from e

    return SessionResponse(user_id=user.id, providers=open_sessions(user, registry))
