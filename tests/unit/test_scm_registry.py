# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the provider session registry."""

import pytest

from src.core.config.settings import SCMSettings
from src.infrastructure.scm.exceptions import UnsupportedProviderError
from src.infrastructure.scm.github import GitHubSCM
from src.infrastructure.scm.registry import SCMRegistry, new_scm


@pytest.fixture
def scm_settings() -> SCMSettings:
    """Create provider settings pointing at a test API."""
    return SCMSettings(github_api_url="https://github.test/api/", request_timeout=5.0, per_page=50)


class TestNewSCM:
    """Tests for new_scm."""

    def test_builds_github_client(self, scm_settings) -> None:
        """Test that the github provider yields a configured client."""
        client = new_scm("github", "tok", scm_settings)

        assert isinstance(client, GitHubSCM)
        assert client.access_token == "tok"
        assert client.api_url == "https://github.test/api"
        assert client.per_page == 50
        assert client.timeout.total == 5.0

    def test_unknown_provider(self, scm_settings) -> None:
        """Test that an unknown provider is rejected."""
        with pytest.raises(UnsupportedProviderError) as exc_info:
            new_scm("bitbucket", "tok", scm_settings)

        assert exc_info.value.provider == "bitbucket"


class TestSCMRegistry:
    """Tests for SCMRegistry."""

    def test_get_unknown_token(self, scm_settings) -> None:
        """Test that an unknown token has no client."""
        assert SCMRegistry(scm_settings).get("nope") is None

    def test_get_or_create_caches_client(self, scm_settings) -> None:
        """Test that a client is created once per token."""
        registry = SCMRegistry(scm_settings)

        first = registry.get_or_create("github", "tok")
        second = registry.get_or_create("github", "tok")

        assert first is second
        assert registry.get("tok") is first
        assert "tok" in registry
        assert len(registry) == 1

    def test_one_client_per_token(self, scm_settings) -> None:
        """Test that different tokens get different clients."""
        registry = SCMRegistry(scm_settings)

        assert registry.get_or_create("github", "a") is not registry.get_or_create("github", "b")
        assert len(registry) == 2

    def test_register_and_remove(self, scm_settings, fake_scm) -> None:
        """Test that registered clients can be forgotten."""
        registry = SCMRegistry(scm_settings)
        registry.register("tok", fake_scm)

        registry.remove("tok")
        registry.remove("tok")

        assert registry.get("tok") is None
        assert len(registry) == 0
