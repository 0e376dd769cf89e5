"""Dependency injection module for FastAPI.

This module provides dependency injection functions for FastAPI routes.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from core.database import get_db
from generators.ConciergeGenerator import ConciergeGenerator
from utils import application_manager
from utils import invite_manager
from utils import project_manager
from utils import user_manager
from utils.concierge import ConciergeRanker
from utils.llm_manager import get_llm_manager


def get_user_manager(db: Session = Depends(get_db)) -> user_manager.UserManager:
    """Get UserManager instance with request-scoped DB session.

    Args:
        db: Database session.

    Returns:
        UserManager instance.
    """
    return user_manager.UserManager(db)


def get_project_manager(db: Session = Depends(get_db)) -> project_manager.ProjectManager:
    """Get ProjectManager instance with request-scoped DB session."""
    return project_manager.ProjectManager(db)


def get_application_manager(
    db: Session = Depends(get_db),
) -> application_manager.ApplicationManager:
    """Get ApplicationManager instance with request-scoped DB session."""
    return application_manager.ApplicationManager(db)


def get_invite_manager(db: Session = Depends(get_db)) -> invite_manager.InviteManager:
    """Get InviteManager instance with request-scoped DB session."""
    return invite_manager.InviteManager(db)


def get_concierge_ranker() -> ConciergeRanker:
    """Get a ConciergeRanker bound to the default provider (may be absent)."""
    return ConciergeRanker(ConciergeGenerator(get_llm_manager().get_llm()))


# Type aliases for dependency injection
UserManagerDep = Annotated[
    user_manager.UserManager, Depends(get_user_manager)
]
ProjectManagerDep = Annotated[
    project_manager.ProjectManager, Depends(get_project_manager)
]
ApplicationManagerDep = Annotated[
    application_manager.ApplicationManager, Depends(get_application_manager)
]
InviteManagerDep = Annotated[
    invite_manager.InviteManager, Depends(get_invite_manager)
]
ConciergeRankerDep = Annotated[ConciergeRanker, Depends(get_concierge_ranker)]
