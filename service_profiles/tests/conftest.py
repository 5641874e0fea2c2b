"""
Shared fixtures for Profiles service tests.
"""

from datetime import datetime, timezone

import pytest

from service_profiles.app.auth import AuthEventNotifier, TrustPolicy
from shared.test_helpers import (
    DEFAULT_AUDIENCE,
    DEFAULT_ISSUER,
    generate_ec_key_pair,
    generate_rsa_key_pair,
)


@pytest.fixture(scope="session")
def key_pair():
    """Signing key pair trusted by the test policy."""
    return generate_rsa_key_pair()


@pytest.fixture(scope="session")
def foreign_key_pair():
    """Key pair the policy does not trust."""
    return generate_rsa_key_pair()


@pytest.fixture(scope="session")
def ec_key_pair():
    """P-256 key pair for ES256 policies."""
    return generate_ec_key_pair()


@pytest.fixture
def fixed_now():
    """Reference instant for lifetime checks."""
    return datetime(2026, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def trust_policy(key_pair):
    """Policy trusting ``key_pair`` with the default issuer and audience."""
    return TrustPolicy(
        public_key_pem=key_pair.public_pem,
        issuer=DEFAULT_ISSUER,
        audience=DEFAULT_AUDIENCE,
    )


@pytest.fixture
def recorded_events():
    """Events captured by ``recording_notifier``."""
    return []


@pytest.fixture
def recording_notifier(recorded_events):
    """Notifier that appends every event to ``recorded_events``."""
    return AuthEventNotifier([recorded_events.append])
