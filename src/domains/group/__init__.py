# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Group domain package.

This package provides group lookup and removal of groups that were never
approved.
"""

from src.domains.group.service import GroupService

__all__ = [
    "GroupService",
]
