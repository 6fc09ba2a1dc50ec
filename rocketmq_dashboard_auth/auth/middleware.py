"""Login interceptor middleware for Starlette applications."""

from typing import Any

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, RedirectResponse, Response

from .context import RequestContext
from .gate import RequestGate
from .models import Decision, MappingSession, Session

logger = structlog.get_logger()


class StarletteRequest:
    """Adapts a Starlette request to the HttpRequest protocol."""

    def __init__(self, request: Request):
        self._request = request
        self.method: str | None = request.method
        self.context_path: str = request.scope.get("root_path", "")
        self.request_url: str | None = self._full_url(request, self.context_path)
        self.query_string: str | None = request.url.query or None

    @staticmethod
    def _full_url(request: Request, context_path: str) -> str:
        """Request URL without query, always including the context path.

        Depending on the Starlette version and ASGI server, request.url.path
        may or may not already start with root_path.
        """
        url = request.url.replace(query="")
        path = url.path
        if context_path and not (
            path == context_path or path.startswith(context_path.rstrip("/") + "/")
        ):
            url = url.replace(path=context_path.rstrip("/") + path)
        return str(url)

    def get_session(self, create: bool) -> Session | None:
        """Return the session, treating an empty one as absent unless create is set."""
        # Without SessionMiddleware there is no session store at all
        if "session" not in self._request.scope:
            return None
        data = self._request.session
        if not data and not create:
            return None
        return MappingSession(data)


class RedirectCollector:
    """Records the redirect requested by the authenticator."""

    def __init__(self, status_code: int = 302):
        self.status_code = status_code
        self.location: str | None = None

    def send_redirect(self, target: str) -> None:
        self.location = target

    def to_response(self) -> Response:
        if self.location is None:
            return JSONResponse(
                status_code=401, content={"error": "Authentication required"}
            )
        return RedirectResponse(self.location, status_code=self.status_code)


class LoginInterceptorMiddleware(BaseHTTPMiddleware):
    """Middleware running the login gate in front of every request."""

    def __init__(self, app: Any, gate: RequestGate):
        super().__init__(app)
        self.gate = gate

    async def dispatch(self, request: Request, call_next: Any) -> Any:
        """Process request through the login gate."""
        context = RequestContext()
        request.state.auth_context = context
        redirector = RedirectCollector()
        try:
            decision = self.gate.decide(StarletteRequest(request), redirector, context)
            if not decision.admitted:
                return redirector.to_response()

            if decision is Decision.AUTHENTICATED:
                request.state.user = context.user
            return await call_next(request)
        finally:
            context.clear()
