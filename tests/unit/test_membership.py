# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for member username resolution."""

import pytest

from src.domains.exceptions import NotFoundError, RemoteFailureError
from src.domains.provisioning import MembershipResolver


class TestMembershipResolver:
    """Tests for MembershipResolver.resolve."""

    @pytest.mark.asyncio
    async def test_resolves_in_member_order(self, fake_scm, members) -> None:
        """Test that usernames follow member order."""
        usernames = await MembershipResolver(fake_scm).resolve(members, "P")

        assert usernames == ["u1-handle", "u2-handle"]
        assert fake_scm.calls_to("get_user_name_by_id") == [7, 9]

    @pytest.mark.asyncio
    async def test_reversed_members(self, fake_scm, members) -> None:
        """Test that reversing members reverses usernames."""
        usernames = await MembershipResolver(fake_scm).resolve(list(reversed(members)), "P")

        assert usernames == ["u2-handle", "u1-handle"]

    @pytest.mark.asyncio
    async def test_empty_group(self, fake_scm) -> None:
        """Test that a group without members resolves to no usernames."""
        assert await MembershipResolver(fake_scm).resolve([], "P") == []
        assert fake_scm.calls == []

    @pytest.mark.asyncio
    async def test_missing_link_fails_before_lookups(self, fake_scm, members, make_user) -> None:
        """Test that an unlinked member fails before any provider call."""
        users = [*members, make_user(13)]

        with pytest.raises(NotFoundError) as exc_info:
            await MembershipResolver(fake_scm).resolve(users, "P")

        assert exc_info.value.details == {"user_id": 13, "provider": "P"}
        assert fake_scm.calls == []

    @pytest.mark.asyncio
    async def test_link_to_other_provider_does_not_count(self, fake_scm, make_user) -> None:
        """Test that only links to the course provider are used."""
        user = make_user(14, remote_id=3, provider="github")

        with pytest.raises(NotFoundError):
            await MembershipResolver(fake_scm).resolve([user], "P")

    @pytest.mark.asyncio
    async def test_lookup_failure_stops(self, fake_scm, members) -> None:
        """Test that a failed lookup aborts the remaining lookups."""
        del fake_scm.usernames[7]

        with pytest.raises(RemoteFailureError):
            await MembershipResolver(fake_scm).resolve(members, "P")

        assert fake_scm.calls_to("get_user_name_by_id") == [7]
