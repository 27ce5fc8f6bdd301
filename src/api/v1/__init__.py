# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API v1 routes package.

This package contains all v1 API endpoint definitions. The application
mounts the router under the configured API prefix (default /api/v1).

Modules:
    groups: Group lookup, deletion and approval with provisioning.
    sessions: Live provider clients for the caller after login.
"""

from fastapi import APIRouter

from src.api.v1 import groups, sessions

router = APIRouter()

router.include_router(groups.router, prefix="/groups", tags=["Groups"])
router.include_router(sessions.router, prefix="/sessions", tags=["Sessions"])

__all__ = ["router"]
