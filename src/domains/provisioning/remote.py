# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Bounded provider calls.

Every provider call in the group workflows goes through call_remote so it
is bounded by a timeout and its failure surfaces as a workflow error. A call
that times out is not cancelled at the provider; only the caller stops
waiting.
"""

import asyncio
import logging
from typing import Awaitable, TypeVar

from src.domains.exceptions import (
    ProvisioningTimeoutError,
    RemoteFailureError,
)
from src.infrastructure.scm.exceptions import SCMAPIError, SCMError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def call_remote(call: Awaitable[T], action: str, timeout: float | None) -> T:
    """Await a provider call with a timeout.

    Args:
        call: The pending provider call.
        action: Short description used in error messages ("list repositories").
        timeout: Seconds to wait, or None to wait indefinitely.

    Returns:
        The call's result.

    Raises:
        ProvisioningTimeoutError: If the call exceeded the timeout.
        RemoteFailureError: If the provider call failed.
    """
    try:
        return await asyncio.wait_for(call, timeout=timeout)
    except asyncio.TimeoutError as e:
        logger.warning("Provider call timed out: %s (timeout=%ss)", action, timeout)
        raise ProvisioningTimeoutError(
            f"Timed out after {timeout}s: {action}",
            details={"action": action, "timeout": timeout},
        ) from e
    except SCMError as e:
        details = {"action": action}
        if isinstance(e, SCMAPIError) and e.status_code:
            details["status_code"] = e.status_code
        raise RemoteFailureError(f"Failed to {action}: {e}", details=details) from e
