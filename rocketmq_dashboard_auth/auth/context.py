"""Request-scoped storage for the resolved user."""

from typing import Any

from .models import USER_NAME, UserRecord


class RequestContext:
    """Key-value store living for exactly one request/response cycle.

    One instance is created per request and passed explicitly to the
    authenticator; nothing here is shared between concurrent requests.
    """

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    def put(self, key: str, value: Any) -> None:
        self._values[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def clear(self) -> None:
        self._values.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._values

    @property
    def user(self) -> UserRecord | None:
        """User record stored by a successful login, if any."""
        return self._values.get(USER_NAME)
