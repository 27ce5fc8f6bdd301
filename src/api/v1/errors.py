# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""HTTP mapping of workflow errors for the v1 endpoints."""

from fastapi import HTTPException, status

from src.domains.exceptions import (
    InvalidArgumentError,
    NotFoundError,
    PermissionDeniedError,
    ProvisioningError,
    ProvisioningTimeoutError,
    RemoteFailureError,
    UnauthenticatedError,
)
from src.models.group import ErrorResponse

STATUS_CODES: dict[type[ProvisioningError], int] = {
    UnauthenticatedError: status.HTTP_401_UNAUTHORIZED,
    PermissionDeniedError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidArgumentError: status.HTTP_400_BAD_REQUEST,
    RemoteFailureError: status.HTTP_502_BAD_GATEWAY,
    ProvisioningTimeoutError: status.HTTP_504_GATEWAY_TIMEOUT,
}

ERROR_RESPONSES = {
    400: {"description": "Invalid status", "model": ErrorResponse},
    401: {"description": "Not authenticated", "model": ErrorResponse},
    403: {"description": "Not permitted", "model": ErrorResponse},
    404: {"description": "Group, course, user or account link not found", "model": ErrorResponse},
    500: {"description": "Store failure", "model": ErrorResponse},
    502: {"description": "Provider call failed", "model": ErrorResponse},
    504: {"description": "Provider call timed out", "model": ErrorResponse},
}


def to_http_exception(error: ProvisioningError) -> HTTPException:
    """Map a workflow error to an HTTP error with a structured body."""
    status_code = STATUS_CODES.get(
        type(error),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    body = ErrorResponse(code=error.code, message=error.message, stage=error.stage)
    return HTTPException(status_code=status_code, detail=body.model_dump())
