from enum import Enum

from .context import RequestContext
from .gate import RequestGate
from .login import SessionAuthenticator
from .models import USER_NAME, Decision, UserRecord


class AuthMode(Enum):
    NONE = "none"
    ACTIVE = "active"


__all__ = [
    "AuthMode",
    "Decision",
    "RequestContext",
    "RequestGate",
    "SessionAuthenticator",
    "USER_NAME",
    "UserRecord",
]
