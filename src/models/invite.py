"""Invite database model.

This module defines the direct user-to-user Invite model using SQLAlchemy.
"""

from sqlalchemy import Column, ForeignKey, Index, String, Text, text
from .base import Base


class InviteModel(Base):
    """Collaboration invite from one user to another."""

    __tablename__ = "invites"
    __table_args__ = (
        # At most one pending invite per (sender, recipient)
        Index(
            "uq_invite_pending_pair",
            "from_id",
            "to_id",
            unique=True,
            sqlite_where=text("status = 'pending'"),
            postgresql_where=text("status = 'pending'"),
        ),
    )

    invite_id = Column(String, primary_key=True, index=True)
    from_id = Column(
        String, ForeignKey("users.user_id", ondelete="CASCADE"), index=True, nullable=False
    )
    to_id = Column(
        String, ForeignKey("users.user_id", ondelete="CASCADE"), index=True, nullable=False
    )
    message = Column(Text, nullable=False)
    goal = Column(Text, nullable=True)
    role = Column(String, nullable=True)
    status = Column(String, nullable=False, default="pending")  # pending/accepted/declined
    created_at = Column(String, nullable=False)
    updated_at = Column(String, nullable=False)
