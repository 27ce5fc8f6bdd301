# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Identity domain package.

Resolves the caller from request metadata and hands out the caller's live
provider clients.
"""

from src.domains.identity.service import open_sessions, resolve_identity, resolve_scm

__all__ = [
    "open_sessions",
    "resolve_identity",
    "resolve_scm",
]
