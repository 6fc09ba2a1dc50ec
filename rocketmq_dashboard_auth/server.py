"""Starlette application factory with the login gate installed."""

from collections.abc import Sequence
from typing import Any

import structlog
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.sessions import SessionMiddleware

from .auth import AuthMode, RequestGate, SessionAuthenticator
from .auth.directory import FileUserDirectory
from .auth.middleware import LoginInterceptorMiddleware
from .auth.models import UserDirectory
from .config import DashboardSettings, get_settings
from .logging import configure_logging, get_uvicorn_log_config

logger = structlog.get_logger()


def build_gate(user_directory: UserDirectory) -> RequestGate:
    """Wire the session authenticator behind a request gate."""
    return RequestGate(SessionAuthenticator(user_directory))


def create_app(
    routes: Sequence[Any] | None = None,
    settings: DashboardSettings | None = None,
    user_directory: UserDirectory | None = None,
) -> Starlette:
    """Create the dashboard application.

    Args:
        routes: Host application routes
        settings: Gate settings, read from the environment when omitted
        user_directory: User lookup, a FileUserDirectory on settings.users_file
            when omitted

    Returns:
        Starlette app with sessions and, if login is required, the login gate

    Raises:
        ValueError: If login is required but no session secret is set
    """
    settings = settings or get_settings()
    logger.info(
        f"Authentication mode: {settings.auth_mode.value}",
        auth_mode=settings.auth_mode.value,
    )

    # Outermost first: the session must be decoded before the gate reads it
    middleware: list[Middleware] = []
    if settings.session_secret:
        middleware.append(
            Middleware(
                SessionMiddleware,
                secret_key=settings.session_secret,
                max_age=settings.session_max_age,
            )
        )

    if settings.auth_mode == AuthMode.ACTIVE:
        if not settings.session_secret:
            raise ValueError("A session secret is required when login is required")
        if user_directory is None:
            file_directory = FileUserDirectory(settings.users_file)
            file_directory.load_users()
            logger.info(
                f"Loaded {len(file_directory.users)} dashboard users",
                user_count=len(file_directory.users),
                file=settings.users_file,
            )
            user_directory = file_directory
        middleware.append(
            Middleware(LoginInterceptorMiddleware, gate=build_gate(user_directory))
        )
    else:
        logger.info("Login not required, login gate disabled")

    return Starlette(routes=list(routes or []), middleware=middleware)


def main() -> None:
    """Serve the dashboard app with uvicorn."""
    import uvicorn

    configure_logging()
    settings = get_settings()
    app = create_app(settings=settings)

    logger.info(
        "Starting dashboard server", host=settings.host, port=settings.port
    )
    try:
        uvicorn.run(
            app,
            host=settings.host,
            port=settings.port,
            log_config=get_uvicorn_log_config(),
        )
    except KeyboardInterrupt:
        logger.info("Shutting down gracefully...")


if __name__ == "__main__":
    main()
