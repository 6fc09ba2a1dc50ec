"""Authentication models and collaborator protocols."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from .context import RequestContext

# Session attribute holding the logged-in username; also the context key
# under which the resolved user record is stored.
USER_NAME = "username"

LOGIN_PATH = "/#/login"
CSRF_TOKEN_PATH = "/rocketmq-dashboard/csrf-token"


class Decision(Enum):
    """Terminal outcome of one gate evaluation."""

    BYPASSED = "bypassed"
    AUTHENTICATED = "authenticated"
    REDIRECTED = "redirected"

    @property
    def admitted(self) -> bool:
        return self is not Decision.REDIRECTED


@dataclass
class UserRecord:
    """User entry returned by a user directory.

    The login gate only checks that a record exists. password and is_admin
    are carried for the host application's login and admin handlers, which
    read the record from request.state.user.
    """

    username: str
    password: str = field(default="", repr=False)
    is_admin: bool = False


class Session(Protocol):
    """Per-request attribute store."""

    def get_attribute(self, key: str) -> Any | None: ...


class HttpRequest(Protocol):
    """The slice of an HTTP request the login gate reads."""

    method: str | None
    request_url: str | None
    query_string: str | None
    context_path: str

    def get_session(self, create: bool) -> Session | None:
        """Return the existing session, creating one only when asked to."""
        ...


class ResponseRedirector(Protocol):
    """Emits a redirect on the response being built."""

    def send_redirect(self, target: str) -> None: ...


class UserDirectory(Protocol):
    """Protocol for user lookups."""

    def query_by_username(self, username: str) -> UserRecord | None:
        """Return the user record for username or None if unknown."""
        ...


class Authenticator(Protocol):
    """Protocol for the allow/redirect decision behind the gate."""

    def authenticate(
        self,
        request: HttpRequest,
        response: ResponseRedirector,
        context: "RequestContext",
    ) -> bool: ...


class MappingSession:
    """Session view over a plain mapping, e.g. a Starlette session dict."""

    def __init__(self, data: Mapping[str, Any]):
        self._data = data

    def get_attribute(self, key: str) -> Any | None:
        return self._data.get(key)
