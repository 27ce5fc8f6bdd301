# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI dependency injection definitions.

This module provides dependency functions for FastAPI endpoints.
Dependencies are used to:
- Get database sessions and the group store
- Get the caller token from the request
- Get the provider session registry
- Get service instances

Example:
    @router.get("/groups/{group_id}")
    async def get_group(
        group_id: int,
        service: GroupService = Depends(get_group_service),
    ):
        ...
"""

import logging
from typing import AsyncGenerator

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import Settings, get_settings
from src.domains.group import GroupService
from src.domains.provisioning import GroupProvisioningService
from src.infrastructure.database.connection import (
    close_database,
    get_session,
    init_database,
)
from src.infrastructure.database.store import GroupStore
from src.infrastructure.scm.registry import SCMRegistry

logger = logging.getLogger(__name__)

CALLER_HEADER = "X-User"


async def init_db() -> None:
    """Initialize the database connection pool."""
    await init_database(get_settings())


async def close_db() -> None:
    """Close the database connection pool."""
    await close_database()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get a database session.

    Yields:
        AsyncSession for the request.
    """
    async with get_session() as session:
        yield session


def get_store(db: AsyncSession = Depends(get_db)) -> GroupStore:
    """Get the group store bound to the request session."""
    return GroupStore(db)


def get_scm_registry(request: Request) -> SCMRegistry:
    """Get the provider session registry.

    Raises:
        HTTPException: If the application has no registry.
    """
    registry = getattr(request.app.state, "scm_registry", None)
    if registry is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Provider registry not initialized",
        )
    return registry


def get_caller_token(request: Request) -> list[str]:
    """Get every value of the caller header.

    The header may repeat; validation happens during identity resolution.
    """
    return request.headers.getlist(CALLER_HEADER)


def get_group_service(store: GroupStore = Depends(get_store)) -> GroupService:
    """Get a group service instance."""
    return GroupService(store)


def get_provisioning_service(
    store: GroupStore = Depends(get_store),
    registry: SCMRegistry = Depends(get_scm_registry),
    settings: Settings = Depends(get_settings),
) -> GroupProvisioningService:
    """Get a group provisioning service instance."""
    return GroupProvisioningService(
        store=store,
        registry=registry,
        threshold=settings.groups.privileged_status_threshold,
        timeout=settings.scm.request_timeout,
    )
