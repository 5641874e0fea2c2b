"""
Tests for the Profiles service HTTP surface.
"""

import pytest
from fastapi.testclient import TestClient

from service_profiles.app.main import create_app
from shared.config import get_config
from shared.test_helpers import DEFAULT_AUDIENCE, DEFAULT_ISSUER, create_signed_token


@pytest.fixture
def config():
    """Service configuration matching the test trust policy."""
    return get_config(
        "profiles",
        8020,
        jwt_issuer=DEFAULT_ISSUER,
        jwt_audience=DEFAULT_AUDIENCE,
        search_default_page_size=10,
        search_max_page_size=20,
        demo_pool_size=50,
        demo_max_profiles=100,
    )


@pytest.fixture
def client(config, trust_policy):
    """Create test client."""
    app = create_app(config=config, trust_policy=trust_policy)
    return TestClient(app)


@pytest.fixture
def auth_headers(key_pair):
    """Authorization header carrying a currently valid token."""
    token = create_signed_token(key_pair.private_pem, subject="user-77")
    return {"Authorization": f"Bearer {token}"}


def test_root_endpoint(client):
    """Test root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["service"] == "profiles"
    assert data["version"] == "1.0.0"


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["service"] == "profiles"
    assert data["status"] == "ok"
    assert data["dependencies"] == {"trust_policy": "ok"}


def test_request_id_is_echoed(client):
    """Test correlation id propagation."""
    response = client.get("/", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


def test_whoami_requires_token(client):
    """Test missing bearer token is challenged."""
    response = client.get("/api/auth/me")
    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"
    data = response.json()
    assert data["code"] == "AUTHENTICATION_ERROR"
    assert data["details"]["reason"] == "missing bearer token"


def test_whoami_with_valid_token(client, auth_headers):
    """Test the verified identity is returned."""
    response = client.get("/api/auth/me", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["subject"] == "user-77"
    assert data["claims"]["aud"] == DEFAULT_AUDIENCE


def test_whoami_with_expired_token(client, key_pair):
    """Test expired token maps to 401."""
    token = create_signed_token(key_pair.private_pem, issued_at=0, expires_in=60)
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["details"]["failure"] == "expired"
    assert 'error="invalid_token"' in response.headers["WWW-Authenticate"]


def test_profiles_search_requires_token(client):
    """Test authenticated search rejects anonymous calls."""
    response = client.post("/api/profiles/search", json={"minAge": 30})
    assert response.status_code == 401


def test_profiles_search(client, auth_headers):
    """Test authenticated search envelope."""
    response = client.post("/api/profiles/search", json={"minAge": 30, "page": 1, "pageSize": 10}, headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    # Demo ages cycle 22..36; 21 of the 50 pooled profiles are 30 or older
    assert data["totalCount"] == 21
    assert data["totalPages"] == 3
    assert data["hasNext"] is True
    assert data["hasPrevious"] is False
    assert len(data["results"]) == 10
    assert all(profile["age"] >= 30 for profile in data["results"])
    assert "primaryPhotoUrl" in data["results"][0]


def test_demo_search_clamps_paging(client):
    """Test raw paging values are clamped."""
    response = client.post("/api/demo/search", json={"page": 0, "pageSize": -5})
    assert response.status_code == 200
    data = response.json()
    assert data["page"] == 1
    assert data["pageSize"] == 10
    assert data["totalCount"] == 50
    assert data["totalPages"] == 5


def test_demo_search_caps_page_size(client):
    """Test the configured maximum page size."""
    response = client.post("/api/demo/search", json={"pageSize": 500})
    data = response.json()
    assert data["pageSize"] == 20
    assert len(data["results"]) == 20


def test_demo_search_contradictory_bounds(client):
    """Test contradictory bounds return an empty page."""
    response = client.post("/api/demo/search", json={"minAge": 30, "maxAge": 20})
    assert response.status_code == 200
    data = response.json()
    assert data["results"] == []
    assert data["totalCount"] == 0
    assert data["totalPages"] == 0


def test_demo_search_rejects_wrong_types(client):
    """Test non-integer filters fail request validation."""
    response = client.post("/api/demo/search", json={"minAge": "thirty"})
    assert response.status_code == 422
    data = response.json()
    assert data["code"] == "VALIDATION_ERROR"
    assert data["message"] == "Request validation failed"
    assert [error["loc"] for error in data["details"]["errors"]] == [["body", "minAge"]]


def test_demo_profiles_rejects_non_integer_count(client):
    """Test query validation failures use the error envelope."""
    response = client.get("/api/demo/profiles", params={"count": "many"})
    assert response.status_code == 422
    data = response.json()
    assert data["code"] == "VALIDATION_ERROR"
    assert data["details"]["errors"][0]["loc"] == ["query", "count"]

    metrics = client.get("/metrics").text
    assert 'errors_total{error_type="VALIDATION_ERROR",service="profiles"} 1.0' in metrics


def test_demo_profiles(client):
    """Test demo profile listing."""
    response = client.get("/api/demo/profiles", params={"count": 5})
    assert response.status_code == 200
    data = response.json()
    assert [profile["id"] for profile in data] == [1, 2, 3, 4, 5]
    assert data[0]["name"] == "Emma Johnson"
    assert data[0]["isVerified"] is True


def test_demo_profiles_capped(client):
    """Test demo listing is bounded."""
    response = client.get("/api/demo/profiles", params={"count": 1000})
    assert len(response.json()) == 100


def test_demo_profile_detail(client):
    """Test demo profile detail."""
    response = client.get("/api/demo/profiles/5")
    assert response.status_code == 200
    data = response.json()
    assert data["id"] == 5
    assert data["email"] == "demo.user.5@example.com"
    assert data["isPremium"] is True
    assert len(data["photoUrls"]) == 3


def test_demo_health(client):
    """Test demo health endpoint."""
    response = client.get("/api/demo/health")
    assert response.status_code == 200
    assert "POST /api/demo/search" in response.json()["availableEndpoints"]


def test_metrics_record_auth_events(client, auth_headers):
    """Test auth lifecycle events reach the metrics endpoint."""
    client.get("/api/auth/me", headers=auth_headers)
    client.get("/api/auth/me")

    response = client.get("/metrics")
    assert response.status_code == 200
    body = response.text
    assert 'auth_events_total{event="validated"} 1.0' in body
    assert 'auth_events_total{event="challenged"} 1.0' in body


def test_trust_policy_loaded_from_key_file(tmp_path, key_pair):
    """Test the service loads its public key from configuration."""
    key_file = tmp_path / "public.key"
    key_file.write_text(key_pair.public_pem)
    config = get_config(
        "profiles",
        8020,
        jwt_issuer=DEFAULT_ISSUER,
        jwt_audience=DEFAULT_AUDIENCE,
        jwt_public_key_path=str(key_file),
    )
    client = TestClient(create_app(config=config))
    token = create_signed_token(key_pair.private_pem, subject="file-user")

    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.json()["subject"] == "file-user"
