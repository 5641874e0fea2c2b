"""
Bearer token authentication for the Profiles service.

- policy: immutable trust parameters (public key, issuer, audience, skew).
- token_verifier: classifies a presented token as a verified identity or
  one of the ``VerificationFailure`` variants.
- events: lifecycle notifier fanning out to log and metrics sinks.
- bearer: FastAPI dependency mapping failures to HTTP 401 challenges.
"""

from .bearer import BearerAuthenticator
from .events import AuthEventNotifier, LoggingAuthEventSink, MetricsAuthEventSink, default_notifier
from .models import (
    AuthEvent,
    AuthEventType,
    VerificationFailure,
    VerificationResult,
    VerifiedIdentity,
)
from .policy import TrustPolicy
from .token_verifier import TokenVerifier, verify

__all__ = [
    "AuthEvent",
    "AuthEventNotifier",
    "AuthEventType",
    "BearerAuthenticator",
    "LoggingAuthEventSink",
    "MetricsAuthEventSink",
    "TokenVerifier",
    "TrustPolicy",
    "VerificationFailure",
    "VerificationResult",
    "VerifiedIdentity",
    "default_notifier",
    "verify",
]
