# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Domain services layer for the CourseGit backend.

This package contains domain services that encapsulate business logic.
Each domain module provides services that orchestrate operations
across the local store and the code-hosting providers.

Domains:
    identity: Caller identity and provider session resolution.
    group: Group lookup and deletion.
    provisioning: Group provisioning on the code-hosting provider.
"""
