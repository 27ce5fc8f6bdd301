# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Core package for the CourseGit backend.

This package contains shared, framework-independent pieces:
- config: Application configuration and settings
"""
