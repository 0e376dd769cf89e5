"""AI concierge routes."""

import asyncio
from typing import Dict, List

from fastapi import APIRouter, Depends

from api.errors import to_http_exception
from api.routes.auth import get_current_user
from core.dependencies import ConciergeRankerDep, UserManagerDep
from core.exceptions import TeamBuilderError
from schemas.concierge import ConciergeRequest, ConciergeResponse
from schemas.user import User
from utils.concierge import prioritize_candidates
from utils.llm_manager import get_llm_manager

router = APIRouter(prefix="/api/concierge", tags=["Concierge"])


@router.post("", response_model=ConciergeResponse, summary="Draft a team for a goal")
async def run_concierge(
    req: ConciergeRequest,
    user_manager: UserManagerDep,
    ranker: ConciergeRankerDep,
    current_user: User = Depends(get_current_user),
) -> ConciergeResponse:
    """Suggest teammates and draft intro messages for a goal.

    The result is a draft: invites are only sent through the invite routes.
    """
    # sync DB read kept off the event loop
    students = await asyncio.to_thread(
        user_manager.list_students, exclude_user_id=current_user.user_id
    )
    candidates = prioritize_candidates(req.goal, students)
    try:
        return await ranker.rank(req.goal, candidates, exclude_user_id=current_user.user_id)
    except TeamBuilderError as exc:
        raise to_http_exception(exc)


@router.get("/providers", summary="Configured text-generation providers")
def list_providers(
    current_user: User = Depends(get_current_user),
) -> List[Dict[str, object]]:
    return get_llm_manager().list_provider_statuses()
