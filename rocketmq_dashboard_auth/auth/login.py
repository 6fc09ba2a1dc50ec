"""Session based login check."""

import structlog

from .context import RequestContext
from .models import (
    LOGIN_PATH,
    USER_NAME,
    HttpRequest,
    ResponseRedirector,
    UserDirectory,
)

logger = structlog.get_logger()


class SessionAuthenticator:
    """Allows a request whose session names a known user, redirects otherwise."""

    def __init__(self, user_directory: UserDirectory):
        self.user_directory = user_directory

    def authenticate(
        self,
        request: HttpRequest,
        response: ResponseRedirector,
        context: RequestContext,
    ) -> bool:
        """Check the request session against the user directory.

        Args:
            request: Incoming request
            response: Redirect sink used when the check fails
            context: Per-request context receiving the resolved user

        Returns:
            True if the session user exists, False after redirecting to login
        """
        session = request.get_session(False)
        if session is None:
            return self._redirect_to_login(request, response, reason="no_session")

        username = session.get_attribute(USER_NAME)
        if username is None:
            return self._redirect_to_login(request, response, reason="no_username")

        # Directory failures propagate to the caller
        user = self.user_directory.query_by_username(username)
        if user is None:
            return self._redirect_to_login(
                request, response, reason="unknown_user", username=username
            )

        context.put(USER_NAME, user)
        logger.info(
            "Authentication successful", user=username, url=request.request_url
        )
        return True

    def build_redirect_target(self, request: HttpRequest) -> str:
        """Build the login redirect carrying the original URL.

        The original URL is appended verbatim; no extra encoding is applied.
        """
        url = request.request_url or ""
        if request.query_string is not None:
            url = f"{url}?{request.query_string}"
        return f"{request.context_path or ''}{LOGIN_PATH}?redirect={url}"

    def _redirect_to_login(
        self,
        request: HttpRequest,
        response: ResponseRedirector,
        reason: str,
        username: str | None = None,
    ) -> bool:
        target = self.build_redirect_target(request)
        logger.warning(
            "Authentication failed, redirecting to login",
            reason=reason,
            user=username,
            url=request.request_url,
            target=target,
        )
        response.send_redirect(target)
        return False
