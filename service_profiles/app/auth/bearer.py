"""
Bearer authentication dependency for Profiles routes.
"""

from datetime import datetime
from typing import Callable, Optional

from fastapi import Request

from shared.errors import AuthenticationError
from shared.logging import set_user_context
from .events import AuthEventNotifier
from .models import AuthEvent, VerifiedIdentity
from .token_verifier import TokenVerifier


class BearerAuthenticator:
    """Authenticate requests carrying ``Authorization: Bearer <token>``.

    Every rejection emits a ``Challenged`` event and raises
    :class:`AuthenticationError`, which the service maps to HTTP 401.
    """

    def __init__(
        self,
        verifier: TokenVerifier,
        notifier: Optional[AuthEventNotifier] = None,
        clock: Optional[Callable[[], Optional[datetime]]] = None,
    ):
        self.verifier = verifier
        self.notifier = notifier or verifier.notifier
        self.clock = clock or (lambda: None)

    async def authenticate(self, request: Request) -> VerifiedIdentity:
        """Return the verified identity or raise :class:`AuthenticationError`."""
        authorization = request.headers.get("Authorization")
        if not authorization:
            raise self._challenge("Authorization header required", reason="missing bearer token")

        scheme, _, token = authorization.partition(" ")
        token = token.strip()
        if scheme.lower() != "bearer" or not token:
            raise self._challenge("Invalid authorization header format", reason="malformed authorization header")

        result = self.verifier.verify(token, self.clock())
        if not result.valid:
            failure = result.failure.value
            raise self._challenge("Invalid bearer token", reason=failure, failure=failure)

        identity = result.identity
        set_user_context(identity.subject)
        request.state.identity = identity
        return identity

    async def __call__(self, request: Request) -> VerifiedIdentity:
        return await self.authenticate(request)

    def _challenge(self, message: str, reason: str, failure: Optional[str] = None) -> AuthenticationError:
        self.notifier.notify(AuthEvent.challenged(reason))
        details = {"reason": reason}
        if failure:
            details["failure"] = failure
        return AuthenticationError(message, details=details)
