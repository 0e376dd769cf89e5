from .base import Base
from .user import UserModel
from .project import ProjectModel
from .application import ApplicationModel
from .invite import InviteModel

__all__ = [
    "Base",
    "UserModel",
    "ProjectModel",
    "ApplicationModel",
    "InviteModel",
]
