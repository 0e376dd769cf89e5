"""Invite routes.

Any user may invite any other user; only the recipient answers.
"""

from typing import List

from fastapi import APIRouter, Depends

from api.errors import to_http_exception
from api.routes.auth import get_current_user
from core.dependencies import InviteManagerDep
from core.exceptions import TeamBuilderError
from schemas.invite import (
    Invite,
    ReceivedInvite,
    RespondInviteRequest,
    SendInviteRequest,
    SentInvite,
)
from schemas.user import User

router = APIRouter(prefix="/api/invites", tags=["Invite"])


@router.post("", response_model=Invite, summary="Send an invite")
def send_invite(
    req: SendInviteRequest,
    invite_manager: InviteManagerDep,
    current_user: User = Depends(get_current_user),
) -> Invite:
    try:
        return invite_manager.send(
            current_user.user_id,
            req.to_id,
            req.message,
            goal=req.goal,
            role=req.role,
        )
    except TeamBuilderError as exc:
        raise to_http_exception(exc)


@router.get("/received", response_model=List[ReceivedInvite], summary="Invites received")
def list_received(
    invite_manager: InviteManagerDep,
    current_user: User = Depends(get_current_user),
) -> List[ReceivedInvite]:
    return invite_manager.list_received(current_user.user_id)


@router.get("/sent", response_model=List[SentInvite], summary="Invites sent")
def list_sent(
    invite_manager: InviteManagerDep,
    current_user: User = Depends(get_current_user),
) -> List[SentInvite]:
    return invite_manager.list_sent(current_user.user_id)


@router.post("/{invite_id}/respond", response_model=Invite, summary="Answer an invite")
def respond_to_invite(
    invite_id: str,
    req: RespondInviteRequest,
    invite_manager: InviteManagerDep,
    current_user: User = Depends(get_current_user),
) -> Invite:
    try:
        return invite_manager.respond(invite_id, current_user.user_id, req.status)
    except TeamBuilderError as exc:
        raise to_http_exception(exc)
