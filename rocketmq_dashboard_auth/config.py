"""Environment based configuration for the dashboard login gate."""

import os
from dataclasses import dataclass

import structlog

from .auth import AuthMode

logger = structlog.get_logger()

DEFAULT_USERS_FILE = "/etc/rocketmq-dashboard/users.yaml"
DEFAULT_SESSION_MAX_AGE = 1800
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080


@dataclass
class DashboardSettings:
    """Login gate settings."""

    auth_mode: AuthMode
    users_file: str = DEFAULT_USERS_FILE
    session_secret: str | None = None
    session_max_age: int = DEFAULT_SESSION_MAX_AGE
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    @property
    def login_required(self) -> bool:
        return self.auth_mode == AuthMode.ACTIVE


def get_auth_mode() -> AuthMode:
    """Read DASHBOARD_LOGIN_REQUIRED, defaulting to no authentication."""
    value = os.getenv("DASHBOARD_LOGIN_REQUIRED", "false").strip().lower()
    if value in ("true", "1", "yes"):
        return AuthMode.ACTIVE
    if value not in ("false", "0", "no", ""):
        logger.warning(
            "Invalid DASHBOARD_LOGIN_REQUIRED value, login disabled", value=value
        )
    return AuthMode.NONE


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, str(default))
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def get_settings() -> DashboardSettings:
    """Build settings from the environment.

    Raises:
        ValueError: If login is required but no session secret is configured,
            or if DASHBOARD_SESSION_MAX_AGE or DASHBOARD_PORT is not an integer
    """
    auth_mode = get_auth_mode()
    session_secret = os.getenv("DASHBOARD_SESSION_SECRET")

    if auth_mode == AuthMode.ACTIVE and not session_secret:
        logger.error("DASHBOARD_SESSION_SECRET required when login is required")
        raise ValueError(
            "DASHBOARD_SESSION_SECRET environment variable is required when login is required"
        )

    return DashboardSettings(
        auth_mode=auth_mode,
        users_file=os.getenv("DASHBOARD_USERS_FILE", DEFAULT_USERS_FILE),
        session_secret=session_secret,
        session_max_age=_int_env("DASHBOARD_SESSION_MAX_AGE", DEFAULT_SESSION_MAX_AGE),
        host=os.getenv("DASHBOARD_HOST", DEFAULT_HOST),
        port=_int_env("DASHBOARD_PORT", DEFAULT_PORT),
    )
