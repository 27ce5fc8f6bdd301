# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Error taxonomy for the group workflows.

- ProvisioningError: Base exception, carries the stage it was raised in
- UnauthenticatedError: No or empty caller credential
- PermissionDeniedError: Caller lacks privilege, or credential shape invalid
- NotFoundError: Referenced group, course, user or provider link absent
- InvalidArgumentError: Requested status outside the permitted range
- RemoteFailureError: A provider call failed
- StoreFailureError: A local store operation failed
- ProvisioningTimeoutError: A provider call exceeded its timeout
"""

from typing import Any


class ProvisioningError(Exception):
    """Base exception for group workflow errors.

    Attributes:
        message: Human-readable error description.
        stage: Workflow stage the error was raised in, set by the
            orchestrator.
        details: Optional dictionary with additional error context.
    """

    code = "provisioning_error"

    def __init__(
        self,
        message: str,
        stage: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.stage = stage
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation with the stage if known."""
        if self.stage:
            return f"[{self.stage}] {self.message}"
        return self.message


class UnauthenticatedError(ProvisioningError):
    """Raised when the caller credential is missing or empty."""

    code = "unauthenticated"


class PermissionDeniedError(ProvisioningError):
    """Raised when the caller lacks privilege or the credential is malformed."""

    code = "permission_denied"


class NotFoundError(ProvisioningError):
    """Raised when a referenced entity or provider link does not exist."""

    code = "not_found"


class InvalidArgumentError(ProvisioningError):
    """Raised when the requested status is outside the permitted range."""

    code = "invalid_argument"


class RemoteFailureError(ProvisioningError):
    """Raised when a provider call fails."""

    code = "remote_failure"


class StoreFailureError(ProvisioningError):
    """Raised when a local store operation fails."""

    code = "store_failure"


class ProvisioningTimeoutError(ProvisioningError):
    """Raised when a provider call exceeds its timeout."""

    code = "timeout"
