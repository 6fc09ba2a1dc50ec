"""Entry gate run before every dashboard request."""

import structlog

from .context import RequestContext
from .models import (
    CSRF_TOKEN_PATH,
    Authenticator,
    Decision,
    HttpRequest,
    ResponseRedirector,
)

logger = structlog.get_logger()


class RequestGate:
    """Lets preflight and CSRF token requests through, delegates the rest."""

    def __init__(self, authenticator: Authenticator):
        self.authenticator = authenticator

    def decide(
        self,
        request: HttpRequest,
        response: ResponseRedirector,
        context: RequestContext,
    ) -> Decision:
        """Evaluate the request and return its terminal decision."""
        if request.method == "OPTIONS":
            logger.debug("Bypassing authentication for preflight request")
            return Decision.BYPASSED

        # An absent URL simply does not match
        if request.request_url and CSRF_TOKEN_PATH in request.request_url:
            logger.debug(
                "Bypassing authentication for CSRF token request",
                url=request.request_url,
            )
            return Decision.BYPASSED

        if self.authenticator.authenticate(request, response, context):
            return Decision.AUTHENTICATED
        return Decision.REDIRECTED

    def admit(
        self,
        request: HttpRequest,
        response: ResponseRedirector,
        context: RequestContext,
    ) -> bool:
        """Return True if the request may proceed to its handler."""
        return self.decide(request, response, context).admitted
