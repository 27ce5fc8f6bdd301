# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Utility functions and helpers for the CourseGit backend.

This package contains cross-cutting utilities:
- logging: Structured logging with structlog
"""

from src.utils.logging import bound_context, get_logger, setup_logging

__all__ = [
    "setup_logging",
    "get_logger",
    "bound_context",
]
