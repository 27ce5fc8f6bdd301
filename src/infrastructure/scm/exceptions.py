# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Exceptions raised by code-hosting provider clients.

- SCMError: Base exception for all provider errors
- SCMAPIError: The provider returned an error response or was unreachable
- SCMNotFoundError: The requested provider resource does not exist
- UnsupportedProviderError: No client implementation for a provider name
"""


class SCMError(Exception):
    """Base exception for all provider errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional error context.
    """

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation with details if available."""
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class SCMAPIError(SCMError):
    """Error response from the provider API.

    Attributes:
        status_code: HTTP status code, None when the request never completed.
        response_body: Raw response body if available.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: str | None = None,
        details: dict | None = None,
    ):
        self.status_code = status_code
        self.response_body = response_body
        super().__init__(message, details)

    def __str__(self) -> str:
        """Return string representation with status code."""
        base = self.message
        if self.status_code:
            base = f"[{self.status_code}] {base}"
        if self.details:
            base = f"{base} - Details: {self.details}"
        return base


class SCMNotFoundError(SCMAPIError):
    """The requested provider resource does not exist."""

    def __init__(self, message: str, response_body: str | None = None):
        super().__init__(message, status_code=404, response_body=response_body)


class UnsupportedProviderError(SCMError):
    """No client implementation exists for the provider name."""

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(f"Unsupported provider: {provider}")
