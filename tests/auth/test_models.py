"""Unit tests for authentication models and the request context."""

from rocketmq_dashboard_auth.auth.context import RequestContext
from rocketmq_dashboard_auth.auth.models import (
    USER_NAME,
    Decision,
    MappingSession,
    UserRecord,
)


def test_user_record_hides_password() -> None:
    """Test the password never shows up in repr."""
    user = UserRecord(username="admin", password="hunter2", is_admin=True)

    assert user.username == "admin"
    assert user.is_admin is True
    assert "hunter2" not in repr(user)


def test_user_record_defaults() -> None:
    """Test UserRecord defaults to a non-admin user."""
    user = UserRecord(username="mars")

    assert user.password == ""
    assert user.is_admin is False


def test_decision_admitted() -> None:
    """Test only a redirect denies the request."""
    assert Decision.BYPASSED.admitted is True
    assert Decision.AUTHENTICATED.admitted is True
    assert Decision.REDIRECTED.admitted is False


def test_mapping_session_get_attribute() -> None:
    """Test MappingSession reads from the wrapped mapping."""
    session = MappingSession({USER_NAME: "mars"})

    assert session.get_attribute(USER_NAME) == "mars"
    assert session.get_attribute("missing") is None


def test_request_context_put_get_clear() -> None:
    """Test the request context lifecycle."""
    context = RequestContext()
    user = UserRecord(username="mars")

    assert context.user is None
    assert context.get("other", "fallback") == "fallback"

    context.put(USER_NAME, user)
    assert USER_NAME in context
    assert context.get(USER_NAME) is user
    assert context.user is user

    context.clear()
    assert USER_NAME not in context
    assert context.user is None


def test_request_contexts_are_independent() -> None:
    """Test two contexts never share values."""
    first = RequestContext()
    second = RequestContext()

    first.put(USER_NAME, UserRecord(username="mars"))

    assert second.user is None
