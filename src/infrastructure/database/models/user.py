# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User and provider-link models."""

from sqlalchemy import Boolean, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.infrastructure.database.models.base import Base, TimestampMixin


class User(Base, TimestampMixin):
    """A local user account.

    Attributes:
        id: Numeric user id.
        name: Display name.
        email: Contact email.
        is_admin: Whether the user may approve groups.
        remote_identities: Links to code-hosting provider accounts.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    remote_identities: Mapped[list["RemoteIdentity"]] = relationship(
        back_populates="user",
        lazy="selectin",
        cascade="all, delete-orphan",
    )

    def remote_identity_for(self, provider: str) -> "RemoteIdentity | None":
        """Return the link to the given provider, if any."""
        for identity in self.remote_identities:
            if identity.provider == provider:
                return identity
        return None


class RemoteIdentity(Base, TimestampMixin):
    """A user's account on one code-hosting provider.

    At most one link per provider and user.
    """

    __tablename__ = "remote_identities"
    __table_args__ = (
        UniqueConstraint("user_id", "provider", name="unique_user_provider"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    provider: Mapped[str] = mapped_column(String(50), nullable=False)
    remote_id: Mapped[int] = mapped_column(Integer, nullable=False)
    access_token: Mapped[str] = mapped_column(String(255), nullable=False)

    user: Mapped[User] = relationship(back_populates="remote_identities")
