"""
API Smoke Tests

Tests for the FastAPI endpoints:
1. GET /health returns ok with account count
2. GET /api/merkle/root returns the service root (null when empty)
3. GET /api/merkle/proof/{user_id} returns a verifiable proof, 404 when unknown
4. GET /api/merkle/users lists accounts in order
5. POST /api/merkle/verify accepts good proofs, rejects tampered ones,
   and answers 400 for malformed hashes
"""

import pytest
from fastapi.testclient import TestClient

from api.app import app, create_app
from api.deps import get_reserve_service
from core.reserve.service import ProofOfReserveService
from core.reserve.store import AccountStore

from fixtures.common import make_service


# =============================================================================
# Test Fixtures
# =============================================================================

@pytest.fixture
def api_service():
    return make_service()


@pytest.fixture
def client(api_service):
    """TestClient with the reserve service replaced by a fixture instance."""
    app.dependency_overrides[get_reserve_service] = lambda: api_service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def empty_client():
    return TestClient(create_app(ProofOfReserveService(AccountStore([]))))


# =============================================================================
# Health
# =============================================================================

class TestHealth:
    """Tests for GET /health and GET /."""

    def test_health_ok(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is True
        assert data["service"] == "proof-of-reserve-api"
        assert data["accounts"] == 8
        assert data["has_root"] is True

    def test_root_path_same_as_health(self, client):
        assert client.get("/").json() == client.get("/health").json()

    def test_health_empty(self, empty_client):
        data = empty_client.get("/health").json()

        assert data["accounts"] == 0
        assert data["has_root"] is False


# =============================================================================
# Root / Users
# =============================================================================

class TestRootEndpoint:
    """Tests for GET /api/merkle/root."""

    def test_root(self, client, api_service):
        response = client.get("/api/merkle/root")

        assert response.status_code == 200
        assert response.json() == {"merkle_root": api_service.get_merkle_root()}

    def test_root_is_lowercase_hex(self, client):
        root = client.get("/api/merkle/root").json()["merkle_root"]

        assert len(root) == 64
        assert root == root.lower()
        int(root, 16)

    def test_empty_root_is_null(self, empty_client):
        response = empty_client.get("/api/merkle/root")

        assert response.status_code == 200
        assert response.json() == {"merkle_root": None}


class TestUsersEndpoint:
    """Tests for GET /api/merkle/users."""

    def test_users(self, client):
        users = client.get("/api/merkle/users").json()

        assert len(users) == 8
        assert users[0] == {"id": 1, "balance": 1111}
        assert [u["id"] for u in users] == list(range(1, 9))


# =============================================================================
# Proofs
# =============================================================================

class TestProofEndpoint:
    """Tests for GET /api/merkle/proof/{user_id}."""

    def test_proof_shape(self, client):
        response = client.get("/api/merkle/proof/3")

        assert response.status_code == 200
        data = response.json()
        assert data["user_balance"] == 3333
        assert len(data["proof_elements"]) == 3
        for element in data["proof_elements"]:
            assert set(element) == {"hash", "direction"}
            assert element["direction"] in (0, 1)

    def test_proof_verifies_against_service(self, client, api_service):
        data = client.get("/api/merkle/proof/6").json()

        assert api_service.verify_account_proof(6, data["user_balance"], data["proof_elements"])

    def test_unknown_user_404(self, client):
        response = client.get("/api/merkle/proof/999")

        assert response.status_code == 404
        body = response.json()
        assert body["ok"] is False
        assert body["error"]["code"] == "NOT_FOUND"
        assert body["error"]["message"] == "User with ID 999 not found"

    def test_empty_store_404(self, empty_client):
        assert empty_client.get("/api/merkle/proof/1").status_code == 404

    def test_non_integer_id_422(self, client):
        assert client.get("/api/merkle/proof/abc").status_code == 422


# =============================================================================
# Verify
# =============================================================================

class TestVerifyEndpoint:
    """Tests for POST /api/merkle/verify."""

    def _proof_body(self, client, user_id):
        data = client.get(f"/api/merkle/proof/{user_id}").json()
        return {
            "user_id": user_id,
            "user_balance": data["user_balance"],
            "proof_elements": data["proof_elements"],
        }

    def test_valid_proof(self, client, api_service):
        response = client.post("/api/merkle/verify", json=self._proof_body(client, 4))

        assert response.status_code == 200
        assert response.json() == {"ok": True, "merkle_root": api_service.get_merkle_root()}

    def test_explicit_root(self, client, api_service):
        body = self._proof_body(client, 4)
        body["merkle_root"] = api_service.get_merkle_root().upper()

        assert client.post("/api/merkle/verify", json=body).json()["ok"] is True

    def test_wrong_balance(self, client):
        body = self._proof_body(client, 4)
        body["user_balance"] += 1

        response = client.post("/api/merkle/verify", json=body)
        assert response.status_code == 200
        assert response.json()["ok"] is False

    def test_wrong_root(self, client):
        body = self._proof_body(client, 4)
        body["merkle_root"] = "00" * 32

        assert client.post("/api/merkle/verify", json=body).json()["ok"] is False

    def test_malformed_hash_400(self, client):
        body = self._proof_body(client, 4)
        body["proof_elements"][0]["hash"] = "not-hex!"

        response = client.post("/api/merkle/verify", json=body)
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_ENCODING"

    def test_invalid_direction_422(self, client):
        body = self._proof_body(client, 4)
        body["proof_elements"][0]["direction"] = 5

        assert client.post("/api/merkle/verify", json=body).status_code == 422


# =============================================================================
# App Factory
# =============================================================================

class TestCreateApp:
    """Tests for create_app(service)."""

    def test_serves_given_service(self):
        service = make_service([10, 20, 30])
        test_client = TestClient(create_app(service))

        assert test_client.get("/api/merkle/root").json() == {
            "merkle_root": service.get_merkle_root()
        }
        assert test_client.get("/api/merkle/proof/2").json()["user_balance"] == 20

    def test_override_is_per_app(self):
        test_app = create_app(make_service([1]))

        assert get_reserve_service in test_app.dependency_overrides
        assert get_reserve_service not in create_app().dependency_overrides
