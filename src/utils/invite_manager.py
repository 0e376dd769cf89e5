"""Invite lifecycle management.

Invites go from ``pending`` to ``accepted`` or ``declined`` exactly once, and
only the recipient can move them.
"""

import logging
import uuid
from datetime import datetime
from typing import List, Optional

import pytz
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
)
from models.invite import InviteModel
from models.user import UserModel
from schemas.invite import Counterpart, Invite, ReceivedInvite, SentInvite
from utils.converters import model_to_invite

logger = logging.getLogger(__name__)

INVITE_PENDING = "pending"
INVITE_OUTCOMES = ("accepted", "declined")


class InviteManager:
    """Manages direct collaboration invites between users."""

    def __init__(self, db: Session):
        self.db = db

    def send(
        self,
        from_id: str,
        to_id: str,
        message: str,
        goal: Optional[str] = None,
        role: Optional[str] = None,
    ) -> Invite:
        """Send a pending invite from one user to another.

        Args:
            from_id: Sender.
            to_id: Recipient.
            message: Non-empty message body.
            goal: Optional goal the invite is about.
            role: Optional role offered to the recipient.

        Returns:
            The new Invite.

        Raises:
            InvalidInputError: On self-invite or empty message.
            NotFoundError: If the recipient does not exist.
            ConflictError: If a pending invite to the same recipient exists.
        """
        if to_id == from_id:
            raise InvalidInputError("You cannot invite yourself")
        message = (message or "").strip()
        if not to_id or not message:
            raise InvalidInputError("Recipient and message required")

        recipient = self.db.query(UserModel).filter(UserModel.user_id == to_id).first()
        if not recipient:
            raise NotFoundError("Recipient", to_id)

        existing = (
            self.db.query(InviteModel)
            .filter(
                InviteModel.from_id == from_id,
                InviteModel.to_id == to_id,
                InviteModel.status == INVITE_PENDING,
            )
            .first()
        )
        if existing:
            raise ConflictError("You already sent an invite to this person")

        now = datetime.now(pytz.utc).isoformat()
        model = InviteModel(
            invite_id=str(uuid.uuid4()),
            from_id=from_id,
            to_id=to_id,
            message=message,
            goal=goal,
            role=role,
            status=INVITE_PENDING,
            created_at=now,
            updated_at=now,
        )
        # Partial unique index on pending (from_id, to_id) closes the race
        try:
            self.db.add(model)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError("You already sent an invite to this person") from e
        self.db.refresh(model)

        logger.info("Invite %s sent from %s to %s", model.invite_id, from_id, to_id)
        return model_to_invite(model)

    def respond(self, invite_id: str, acting_user_id: str, outcome: str) -> Invite:
        """Accept or decline a pending invite.

        Raises:
            InvalidInputError: If outcome is not accepted/declined.
            NotFoundError: If the invite does not exist.
            ForbiddenError: If the acting user is not the recipient.
            ConflictError: If the invite was already responded to.
        """
        if outcome not in INVITE_OUTCOMES:
            raise InvalidInputError("Invalid status")

        model = (
            self.db.query(InviteModel)
            .filter(InviteModel.invite_id == invite_id)
            .first()
        )
        if not model:
            raise NotFoundError("Invite", invite_id)
        if model.to_id != acting_user_id:
            raise ForbiddenError("Not your invite")
        if model.status != INVITE_PENDING:
            raise ConflictError("Invite already responded to")

        # Compare-and-set: only a still-pending row is updated
        updated = (
            self.db.query(InviteModel)
            .filter(
                InviteModel.invite_id == invite_id,
                InviteModel.status == INVITE_PENDING,
            )
            .update(
                {
                    InviteModel.status: outcome,
                    InviteModel.updated_at: datetime.now(pytz.utc).isoformat(),
                },
                synchronize_session=False,
            )
        )
        if updated != 1:
            self.db.rollback()
            raise ConflictError("Invite already responded to")
        self.db.commit()
        self.db.refresh(model)

        logger.info("Invite %s %s by %s", invite_id, outcome, acting_user_id)
        return model_to_invite(model)

    def list_received(self, user_id: str) -> List[ReceivedInvite]:
        """Invites addressed to the user, newest first, with sender details."""
        rows = (
            self.db.query(InviteModel, UserModel)
            .outerjoin(UserModel, UserModel.user_id == InviteModel.from_id)
            .filter(InviteModel.to_id == user_id)
            .order_by(InviteModel.created_at.desc(), InviteModel.invite_id.desc())
            .all()
        )
        results = []
        for invite, sender in rows:
            counterpart = None
            if sender is not None:
                counterpart = Counterpart(
                    user_id=sender.user_id,
                    name=sender.name,
                    email=sender.email,
                    role=sender.role,
                )
            results.append(
                ReceivedInvite(**model_to_invite(invite).model_dump(), sender=counterpart)
            )
        return results

    def list_sent(self, user_id: str) -> List[SentInvite]:
        """Invites the user sent, newest first, with recipient details."""
        rows = (
            self.db.query(InviteModel, UserModel)
            .outerjoin(UserModel, UserModel.user_id == InviteModel.to_id)
            .filter(InviteModel.from_id == user_id)
            .order_by(InviteModel.created_at.desc(), InviteModel.invite_id.desc())
            .all()
        )
        results = []
        for invite, recipient in rows:
            counterpart = None
            if recipient is not None:
                counterpart = Counterpart(
                    user_id=recipient.user_id,
                    name=recipient.name,
                    email=recipient.email,
                )
            results.append(
                SentInvite(**model_to_invite(invite).model_dump(), recipient=counterpart)
            )
        return results
