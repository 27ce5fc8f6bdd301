# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Configuration package for the CourseGit backend.

Example:
    >>> from src.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.scm.request_timeout
    30.0
"""

from src.core.config.settings import (
    APISettings,
    DatabaseSettings,
    GroupSettings,
    SCMSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "Settings",
    "get_settings",
    "clear_settings_cache",
    "DatabaseSettings",
    "SCMSettings",
    "GroupSettings",
    "APISettings",
]
