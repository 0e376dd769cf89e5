"""Invite schema definitions."""

from typing import Optional

from pydantic import BaseModel, Field


class SendInviteRequest(BaseModel):
    to_id: str = Field(min_length=1)
    message: str
    goal: Optional[str] = None
    role: Optional[str] = None


class RespondInviteRequest(BaseModel):
    status: str = Field(description="'accepted' or 'declined'.")


class Counterpart(BaseModel):
    """The other side of an invite."""

    user_id: str
    name: str
    email: str
    role: Optional[str] = None


class Invite(BaseModel):
    invite_id: str
    from_id: str
    to_id: str
    message: str
    goal: Optional[str] = None
    role: Optional[str] = None
    status: str
    created_at: str
    updated_at: str


class ReceivedInvite(Invite):
    sender: Optional[Counterpart] = None


class SentInvite(Invite):
    recipient: Optional[Counterpart] = None
