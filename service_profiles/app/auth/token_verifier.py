"""
Bearer token verification for the Profiles service.
"""

import json
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

from jose import jws, jwt
from jose.exceptions import JWSError, JWTError

from shared.logging import get_logger
from .events import AuthEventNotifier
from .models import AuthEvent, VerificationFailure, VerificationResult, VerifiedIdentity
from .policy import TrustPolicy


class _TokenRejected(Exception):
    def __init__(self, failure: VerificationFailure, detail: str):
        self.failure = failure
        self.detail = detail
        super().__init__(detail)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _claim_to_str(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, sort_keys=True, separators=(",", ":"))


def _utc(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


class TokenVerifier:
    """Verify compact JWS bearer tokens against a :class:`TrustPolicy`.

    Checks run in a fixed order (structure, signature, issuer, audience,
    lifetime) and the first failing check classifies the rejection. Every
    call emits exactly one lifecycle event through the notifier.
    """

    def __init__(self, policy: TrustPolicy, notifier: Optional[AuthEventNotifier] = None):
        self.policy = policy
        self.notifier = notifier or AuthEventNotifier()
        self.logger = get_logger("profiles.auth.verifier")

    def verify(self, token: str, now: Optional[datetime] = None) -> VerificationResult:
        """Verify ``token`` at instant ``now`` (defaults to the current time)."""
        try:
            header, claims = self._parse(token)
            self._check_signature(token, header)
            self._check_issuer(claims)
            self._check_audience(claims)
            self._check_lifetime(claims, _utc(now))
        except _TokenRejected as rejection:
            self.notifier.notify(AuthEvent.failed(rejection.failure.value, rejection.detail))
            return VerificationResult.rejected(rejection.failure, rejection.detail)

        identity = self._build_identity(claims)
        self.notifier.notify(AuthEvent.validated(identity.subject))
        return VerificationResult.success(identity)

    def _parse(self, token: str) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        if not isinstance(token, str) or token.count(".") != 2:
            raise _TokenRejected(VerificationFailure.MALFORMED, "Token must have three segments")

        try:
            header = jwt.get_unverified_header(token)
            claims = jwt.get_unverified_claims(token)
        except JWTError as exc:
            raise _TokenRejected(VerificationFailure.MALFORMED, str(exc)) from exc

        subject = claims.get("sub")
        if not isinstance(subject, str) or not subject:
            raise _TokenRejected(VerificationFailure.MALFORMED, "Token missing subject claim")

        for name in ("iat", "exp", "nbf"):
            if name == "nbf" and name not in claims:
                continue
            value = claims.get(name)
            if not _is_number(value):
                raise _TokenRejected(VerificationFailure.MALFORMED, f"Token missing numeric '{name}' claim")
            try:
                datetime.fromtimestamp(value, tz=timezone.utc)
            except (OverflowError, OSError, ValueError) as exc:
                raise _TokenRejected(VerificationFailure.MALFORMED, f"Token '{name}' claim out of range") from exc

        return header, claims

    def _check_signature(self, token: str, header: Dict[str, Any]) -> None:
        algorithm = header.get("alg")
        key = self.policy.key_for(algorithm) if isinstance(algorithm, str) else None
        if key is None:
            raise _TokenRejected(
                VerificationFailure.SIGNATURE_INVALID,
                f"Algorithm not trusted: {algorithm!r}",
            )

        try:
            jws.verify(token, key, algorithms=[algorithm])
        except JWSError as exc:
            self.logger.debug("Signature check failed", algorithm=algorithm, error=str(exc))
            raise _TokenRejected(
                VerificationFailure.SIGNATURE_INVALID, "Signature verification failed"
            ) from exc

    def _check_issuer(self, claims: Dict[str, Any]) -> None:
        issuer = claims.get("iss")
        if not isinstance(issuer, str) or issuer != self.policy.issuer:
            raise _TokenRejected(VerificationFailure.ISSUER_MISMATCH, f"Unexpected issuer: {issuer!r}")

    def _check_audience(self, claims: Dict[str, Any]) -> None:
        audience = claims.get("aud")
        if isinstance(audience, str):
            matched = audience == self.policy.audience
        elif isinstance(audience, list):
            matched = any(isinstance(item, str) and item == self.policy.audience for item in audience)
        else:
            matched = False

        if not matched:
            raise _TokenRejected(VerificationFailure.AUDIENCE_MISMATCH, f"Unexpected audience: {audience!r}")

    def _check_lifetime(self, claims: Dict[str, Any], now: datetime) -> None:
        instant = now.timestamp()
        skew = self.policy.clock_skew.total_seconds()

        not_before = claims["iat"]
        if "nbf" in claims:
            not_before = max(not_before, claims["nbf"])

        if instant < not_before - skew:
            raise _TokenRejected(VerificationFailure.EXPIRED, "Token is not yet valid")
        if instant > claims["exp"] + skew:
            raise _TokenRejected(VerificationFailure.EXPIRED, "Token has expired")

    def _build_identity(self, claims: Dict[str, Any]) -> VerifiedIdentity:
        return VerifiedIdentity(
            subject=claims["sub"],
            issued_at=datetime.fromtimestamp(claims["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(claims["exp"], tz=timezone.utc),
            claims={name: _claim_to_str(value) for name, value in claims.items()},
        )


def verify(
    token: str,
    policy: TrustPolicy,
    now: Optional[datetime] = None,
    notifier: Optional[AuthEventNotifier] = None,
) -> VerificationResult:
    """Verify ``token`` against ``policy``; see :class:`TokenVerifier`."""
    return TokenVerifier(policy, notifier).verify(token, now)
