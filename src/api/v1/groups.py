# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Group API endpoints.

This module provides the group endpoints:
- GET /{group_id} - Get a group with its members
- PATCH /{group_id} - Change a group's status and provision its workspace
- DELETE /{group_id} - Delete a pending or rejected group

Authentication:
    The caller is identified by the X-User header, set by the login
    gateway. Only PATCH requires it.

Example:
    PATCH /api/v1/groups/42
    Headers:
        X-User: 1
    Body:
        {"status": 2}
"""

import logging

from fastapi import APIRouter, Depends, status

from src.api.dependencies import (
    get_caller_token,
    get_group_service,
    get_provisioning_service,
)
from src.api.v1.errors import ERROR_RESPONSES, to_http_exception
from src.domains.exceptions import ProvisioningError
from src.domains.group import GroupService
from src.domains.provisioning import GroupProvisioningService
from src.models.group import (
    GroupResponse,
    ProvisioningResult,
    UpdateGroupRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/{group_id}",
    response_model=GroupResponse,
    summary="Get group",
    responses={404: ERROR_RESPONSES[404], 500: ERROR_RESPONSES[500]},
)
async def get_group(
    group_id: int,
    service: GroupService = Depends(get_group_service),
) -> GroupResponse:
    """Get a group with its members in order."""
    try:
        return await service.get_group(group_id)
    except ProvisioningError as e:
        raise to_http_exception(e) from e


@router.patch(
    "/{group_id}",
    response_model=ProvisioningResult,
    summary="Update group status",
    description="""
    Set a group's approval status and provision its workspace on the
    course's provider.

    The repository named after the group is created unless it already
    exists. The repository is then recorded, the status written, and a team
    of the group's members created with access to the repository.

    **Not idempotent:** a second call for the same group fails when the
    repository is recorded again. Steps completed before a failure are not
    undone; the error body names the failed stage.
    """,
    responses=ERROR_RESPONSES,
)
async def update_group(
    group_id: int,
    request: UpdateGroupRequest,
    caller_token: list[str] = Depends(get_caller_token),
    service: GroupProvisioningService = Depends(get_provisioning_service),
) -> ProvisioningResult:
    """Approve (or otherwise update) a group and provision it.

    Raises:
        HTTPException: If any provisioning stage fails.
    """
    logger.info("Group status update requested: group_id=%s, status=%s", group_id, request.status)

    try:
        result = await service.provision_group(group_id, request.status, caller_token)
    except ProvisioningError as e:
        raise to_http_exception(e) from e

    logger.info(
        "Group provisioned: group_id=%s, repository_id=%s, team_id=%s",
        result.group_id,
        result.repository_id,
        result.team_id,
    )
    return result


@router.delete(
    "/{group_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete group",
    responses={
        403: ERROR_RESPONSES[403],
        404: ERROR_RESPONSES[404],
        500: ERROR_RESPONSES[500],
    },
)
async def delete_group(
    group_id: int,
    service: GroupService = Depends(get_group_service),
) -> None:
    """Delete a group that was never approved."""
    try:
        await service.delete_group(group_id)
    except ProvisioningError as e:
        raise to_http_exception(e) from e
