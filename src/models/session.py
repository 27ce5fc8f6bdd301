# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Response schema for the session endpoint."""

from pydantic import BaseModel, Field


class SessionResponse(BaseModel):
    """Providers the caller holds a live client for."""

    user_id: int
    providers: list[str] = Field(default_factory=list)
