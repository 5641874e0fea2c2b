"""
Trust policy used to verify bearer tokens.
"""

from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import Any, Dict, Iterable, Tuple

from cryptography.hazmat.primitives.asymmetric import ec, rsa
from jose import jwk
from jose.constants import ALGORITHMS
from jose.exceptions import JWKError

from shared.config import BaseConfig
from shared.errors import ConfigurationError

# Public-key algorithms only; HMAC would require holding the signing secret.
ASYMMETRIC_ALGORITHMS = frozenset(ALGORITHMS.RSA_DS | ALGORITHMS.EC_DS)

DEFAULT_CLOCK_SKEW = timedelta(minutes=5)

_PUBLIC_KEY_TYPES = {
    **{alg: rsa.RSAPublicKey for alg in ALGORITHMS.RSA_DS},
    **{alg: ec.EllipticCurvePublicKey for alg in ALGORITHMS.EC_DS},
}


@dataclass(frozen=True)
class TrustPolicy:
    """Immutable verification parameters loaded once at startup."""

    public_key_pem: str = field(repr=False)
    issuer: str
    audience: str
    clock_skew: timedelta = DEFAULT_CLOCK_SKEW
    algorithms: Tuple[str, ...] = (ALGORITHMS.RS256,)
    _keys: Dict[str, Any] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self):
        if not self.algorithms:
            raise ConfigurationError("Trust policy requires at least one algorithm")

        unsupported = [alg for alg in self.algorithms if alg not in ASYMMETRIC_ALGORITHMS]
        if unsupported:
            raise ConfigurationError(
                "Trust policy only accepts asymmetric algorithms",
                details={"unsupported": unsupported},
            )

        if self.clock_skew < timedelta(0):
            raise ConfigurationError("Clock skew tolerance must not be negative")

        keys = {}
        for algorithm in self.algorithms:
            try:
                key = jwk.construct(self.public_key_pem, algorithm=algorithm)
            except (JWKError, ValueError, TypeError) as exc:
                raise ConfigurationError(
                    "Public key is not usable for the configured algorithm",
                    details={"algorithm": algorithm, "error": str(exc)},
                ) from exc
            if not key.is_public():
                raise ConfigurationError(
                    "Trust policy must be built from public key material",
                    details={"algorithm": algorithm},
                )
            if not isinstance(key.prepared_key, _PUBLIC_KEY_TYPES[algorithm]):
                raise ConfigurationError(
                    "Public key type does not match the configured algorithm",
                    details={"algorithm": algorithm, "key_type": type(key.prepared_key).__name__},
                )
            keys[algorithm] = key

        object.__setattr__(self, "algorithms", tuple(self.algorithms))
        object.__setattr__(self, "_keys", keys)

    def key_for(self, algorithm: str):
        """Return the verification key for ``algorithm`` or None if not trusted."""
        return self._keys.get(algorithm)

    @classmethod
    def from_pem_file(
        cls,
        path: str,
        issuer: str,
        audience: str,
        clock_skew: timedelta = DEFAULT_CLOCK_SKEW,
        algorithms: Iterable[str] = (ALGORITHMS.RS256,),
    ) -> "TrustPolicy":
        """Load the PEM public key from ``path`` and build a policy."""
        try:
            pem = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigurationError(
                "Unable to read public key file",
                details={"path": path, "error": str(exc)},
            ) from exc

        return cls(
            public_key_pem=pem,
            issuer=issuer,
            audience=audience,
            clock_skew=clock_skew,
            algorithms=tuple(algorithms),
        )

    @classmethod
    def from_config(cls, config: BaseConfig) -> "TrustPolicy":
        """Build the policy from service configuration."""
        return cls.from_pem_file(
            config.jwt_public_key_path,
            issuer=config.jwt_issuer,
            audience=config.jwt_audience,
            clock_skew=timedelta(seconds=config.jwt_clock_skew_seconds),
            algorithms=config.jwt_algorithms,
        )
