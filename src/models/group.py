# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Request and response schemas for the group endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class UpdateGroupRequest(BaseModel):
    """Body of PATCH /groups/{group_id}."""

    status: int = Field(description="Requested approval status")


class GroupMemberResponse(BaseModel):
    """A group member."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str | None = None


class GroupResponse(BaseModel):
    """A group with its ordered members."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    course_id: int
    status: int
    users: list[GroupMemberResponse] = Field(default_factory=list)


class ProvisioningResult(BaseModel):
    """Outcome of a completed group provisioning run.

    Attributes:
        repository_created: False when an existing provider repository
            was reused.
        stage: Final workflow stage reached.
    """

    group_id: int
    status: int
    repository_id: int
    repository_url: str
    repository_created: bool
    team_id: int
    stage: str


class ErrorResponse(BaseModel):
    """Error body returned by the group endpoints."""

    code: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error message")
    stage: str | None = Field(None, description="Workflow stage that failed")
