"""
Authentication data models for the Profiles service.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Optional


class VerificationFailure(str, Enum):
    """Classified reasons a bearer token was rejected."""
    SIGNATURE_INVALID = "signature_invalid"
    ISSUER_MISMATCH = "issuer_mismatch"
    AUDIENCE_MISMATCH = "audience_mismatch"
    EXPIRED = "expired"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class VerifiedIdentity:
    """Identity extracted from a token that passed every check."""
    subject: str
    issued_at: datetime
    expires_at: datetime
    claims: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, object]:
        return {
            "subject": self.subject,
            "issued_at": self.issued_at.isoformat(),
            "expires_at": self.expires_at.isoformat(),
            "claims": dict(self.claims),
        }


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of a token verification.

    Exactly one of ``identity`` and ``failure`` is set. ``detail`` is a
    human readable explanation intended for logs, never for clients.
    """
    identity: Optional[VerifiedIdentity] = None
    failure: Optional[VerificationFailure] = None
    detail: str = ""

    @property
    def valid(self) -> bool:
        return self.identity is not None

    @classmethod
    def success(cls, identity: VerifiedIdentity) -> "VerificationResult":
        return cls(identity=identity)

    @classmethod
    def rejected(cls, failure: VerificationFailure, detail: str) -> "VerificationResult":
        return cls(failure=failure, detail=detail)


class AuthEventType(str, Enum):
    """Lifecycle checkpoints surfaced during authentication."""
    FAILED = "failed"
    VALIDATED = "validated"
    CHALLENGED = "challenged"


@dataclass(frozen=True)
class AuthEvent:
    """Structured authentication lifecycle event."""
    kind: AuthEventType
    reason: Optional[str] = None
    subject: Optional[str] = None
    detail: Optional[str] = None

    @classmethod
    def failed(cls, reason: str, detail: Optional[str] = None) -> "AuthEvent":
        return cls(kind=AuthEventType.FAILED, reason=reason, detail=detail)

    @classmethod
    def validated(cls, subject: str) -> "AuthEvent":
        return cls(kind=AuthEventType.VALIDATED, subject=subject)

    @classmethod
    def challenged(cls, reason: str) -> "AuthEvent":
        return cls(kind=AuthEventType.CHALLENGED, reason=reason)
