# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for repository reconciliation."""

import pytest

from src.domains.exceptions import ProvisioningTimeoutError, RemoteFailureError
from src.domains.provisioning import RepositoryReconciler
from src.infrastructure.scm.exceptions import SCMAPIError


class TestRepositoryReconciler:
    """Tests for RepositoryReconciler.reconcile."""

    @pytest.mark.asyncio
    async def test_creates_missing_repository(self, fake_scm, directory) -> None:
        """Test that an absent path is created exactly once, privately."""
        fake_scm.add_repository(directory, "other")

        repo, created = await RepositoryReconciler(fake_scm).reconcile(directory, "g42")

        assert created is True
        assert repo.path == "g42"
        creates = fake_scm.calls_to("create_repository")
        assert len(creates) == 1
        assert creates[0].private is True
        assert creates[0].directory == directory

    @pytest.mark.asyncio
    async def test_reuses_existing_repository(self, fake_scm, directory) -> None:
        """Test that a listed path is returned without creating."""
        existing = fake_scm.add_repository(directory, "g42")

        repo, created = await RepositoryReconciler(fake_scm).reconcile(directory, "g42")

        assert created is False
        assert repo == existing
        assert fake_scm.calls_to("create_repository") == []

    @pytest.mark.asyncio
    async def test_always_lists_first(self, fake_scm, directory) -> None:
        """Test that the directory is listed on every call."""
        reconciler = RepositoryReconciler(fake_scm)

        await reconciler.reconcile(directory, "g42")
        await reconciler.reconcile(directory, "g42")

        assert len(fake_scm.calls_to("get_repositories")) == 2
        assert len(fake_scm.calls_to("create_repository")) == 1

    @pytest.mark.asyncio
    async def test_listing_failure(self, fake_scm, directory) -> None:
        """Test that a failed listing creates nothing."""
        fake_scm.failures["get_repositories"] = SCMAPIError("bad gateway", status_code=502)

        with pytest.raises(RemoteFailureError):
            await RepositoryReconciler(fake_scm).reconcile(directory, "g42")

        assert fake_scm.calls_to("create_repository") == []

    @pytest.mark.asyncio
    async def test_create_failure_is_surfaced(self, fake_scm, directory) -> None:
        """Test that a failed create is not replaced by a listed entry."""
        fake_scm.failures["create_repository"] = SCMAPIError("conflict", status_code=422)

        with pytest.raises(RemoteFailureError) as exc_info:
            await RepositoryReconciler(fake_scm).reconcile(directory, "g42")

        assert exc_info.value.details["status_code"] == 422

    @pytest.mark.asyncio
    async def test_timeout(self, fake_scm, directory) -> None:
        """Test that a slow listing times out."""
        fake_scm.delays["get_repositories"] = 0.5

        with pytest.raises(ProvisioningTimeoutError):
            await RepositoryReconciler(fake_scm, timeout=0.01).reconcile(directory, "g42")
