# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for bounded provider calls."""

import asyncio

import pytest

from src.domains.exceptions import ProvisioningTimeoutError, RemoteFailureError
from src.domains.provisioning.remote import call_remote
from src.infrastructure.scm.exceptions import SCMAPIError, SCMError


async def _value(value, delay: float = 0.0):
    await asyncio.sleep(delay)
    return value


async def _fail(error: Exception):
    raise error


class TestCallRemote:
    """Tests for call_remote."""

    @pytest.mark.asyncio
    async def test_returns_result(self) -> None:
        """Test that a successful call returns its value."""
        assert await call_remote(_value(5), "fetch", 1.0) == 5

    @pytest.mark.asyncio
    async def test_no_timeout(self) -> None:
        """Test that a None timeout waits indefinitely."""
        assert await call_remote(_value("ok", 0.01), "fetch", None) == "ok"

    @pytest.mark.asyncio
    async def test_timeout(self) -> None:
        """Test that a slow call raises a timeout error."""
        with pytest.raises(ProvisioningTimeoutError) as exc_info:
            await call_remote(_value(1, 0.5), "list repositories", 0.01)

        assert exc_info.value.details == {"action": "list repositories", "timeout": 0.01}

    @pytest.mark.asyncio
    async def test_api_error(self) -> None:
        """Test that provider API errors keep their status code."""
        with pytest.raises(RemoteFailureError) as exc_info:
            await call_remote(_fail(SCMAPIError("boom", status_code=500)), "create team", 1.0)

        assert exc_info.value.details == {"action": "create team", "status_code": 500}
        assert "create team" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_generic_provider_error(self) -> None:
        """Test that any provider error becomes a remote failure."""
        with pytest.raises(RemoteFailureError) as exc_info:
            await call_remote(_fail(SCMError("unreachable")), "get directory", 1.0)

        assert exc_info.value.details == {"action": "get directory"}

    @pytest.mark.asyncio
    async def test_other_errors_propagate(self) -> None:
        """Test that non-provider errors are not wrapped."""
        with pytest.raises(KeyError):
            await call_remote(_fail(KeyError("x")), "get directory", 1.0)
