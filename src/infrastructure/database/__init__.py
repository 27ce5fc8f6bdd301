# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database infrastructure for PostgreSQL connections.

This package provides the SQLAlchemy async connection lifecycle, the ORM
models and the GroupStore used by the group workflows.

Example:
    from src.infrastructure.database import get_session, GroupStore

    async with get_session() as session:
        group = await GroupStore(session).get_group(42)
"""

from src.infrastructure.database.connection import (
    DatabaseError,
    check_database_connection,
    close_database,
    get_session,
    get_sessionmaker,
    init_database,
)
from src.infrastructure.database.store import (
    DuplicateRecordError,
    GroupStore,
    RecordNotFoundError,
)

__all__ = [
    "DatabaseError",
    "check_database_connection",
    "close_database",
    "get_session",
    "get_sessionmaker",
    "init_database",
    "GroupStore",
    "RecordNotFoundError",
    "DuplicateRecordError",
]
