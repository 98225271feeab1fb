"""API tests for /api/v1/auth endpoints.

Tests the complete HTTP request/response cycle:
- Request validation (422 with field errors)
- Result to HTTP mapping (RFC 7807 problem details)
- Bearer authentication and admin guard

Architecture:
- Uses real app with dependency overrides
- AuthenticationService wired with the in-memory store, real bcrypt and JWT
"""

from datetime import UTC, datetime

import pytest
from fastapi.testclient import TestClient
from uuid_extensions import uuid7

from src.core.container import get_authentication_service
from src.domain.enums import AccountRole, AccountStatus
from src.main import app
from tests.conftest import create_account

BASE = "/api/v1/auth"


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def override_dependencies(auth_service):
    """Serve every request with the test AuthenticationService."""
    app.dependency_overrides[get_authentication_service] = lambda: auth_service
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    """Create TestClient for API tests using real app."""
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
async def alice(account_repository, password_service):
    """Active account alice@example.com / OldPass123."""
    account = create_account(password_hash=password_service.hash_password("OldPass123"))
    await account_repository.save(account)
    return account


@pytest.fixture
async def admin_headers(account_repository, password_service, client):
    admin = create_account(
        email="admin@example.com",
        password_hash=password_service.hash_password("AdminPass1"),
        role=AccountRole.ADMIN,
    )
    await account_repository.save(admin)
    return _login_headers(client, "admin@example.com", "AdminPass1")


def _login_headers(client, email, password) -> dict[str, str]:
    response = client.post(f"{BASE}/login", json={"email": email, "password": password})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


# =============================================================================
# Tests: POST /auth/register
# =============================================================================


@pytest.mark.api
class TestRegister:
    def test_register_returns_201_without_password_hash(self, client):
        response = client.post(
            f"{BASE}/register",
            json={"email": "Bob@Example.com", "password": "NewPass123", "name": "Bob"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["email"] == "bob@example.com"
        assert body["status"] == "pending_verification"
        assert body["role"] == "user"
        assert "password_hash" not in body
        assert "password" not in body

    def test_duplicate_email_returns_409(self, client, alice):
        response = client.post(
            f"{BASE}/register",
            json={"email": alice.email, "password": "NewPass123", "name": "Alice"},
        )

        assert response.status_code == 409
        assert response.json()["code"] == "email_already_exists"

    def test_weak_password_returns_422_with_field_errors(self, client):
        response = client.post(
            f"{BASE}/register",
            json={"email": "bob@example.com", "password": "password", "name": "Bob"},
        )

        assert response.status_code == 422
        body = response.json()
        assert body["title"] == "Validation Failed"
        assert any(error["field"] == "password" for error in body["errors"])


# =============================================================================
# Tests: POST /auth/login
# =============================================================================


@pytest.mark.api
class TestLogin:
    def test_login_success(self, client, alice):
        response = client.post(
            f"{BASE}/login", json={"email": alice.email, "password": "OldPass123"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["token_type"] == "bearer"
        assert body["expires_in"] == 3600
        assert body["access_token"].count(".") == 2
        assert body["refresh_token"] != body["access_token"]
        assert body["account"]["id"] == str(alice.id)
        assert "password_hash" not in body["account"]

    def test_wrong_password_returns_401_problem_details(self, client, alice):
        response = client.post(
            f"{BASE}/login", json={"email": alice.email, "password": "wrong"}
        )

        assert response.status_code == 401
        assert response.headers["content-type"].startswith("application/json")
        body = response.json()
        assert body["code"] == "invalid_credentials"
        assert body["type"].endswith("/errors/invalid-credentials")
        assert body["instance"] == f"{BASE}/login"

    def test_unknown_email_indistinguishable_from_wrong_password(self, client, alice):
        unknown = client.post(
            f"{BASE}/login", json={"email": "ghost@example.com", "password": "wrong"}
        )
        wrong = client.post(
            f"{BASE}/login", json={"email": alice.email, "password": "wrong"}
        )

        assert unknown.status_code == wrong.status_code
        assert unknown.json()["detail"] == wrong.json()["detail"]

    def test_locked_account_returns_423_with_retry_after(self, client, alice):
        for _ in range(5):
            client.post(f"{BASE}/login", json={"email": alice.email, "password": "wrong"})

        response = client.post(
            f"{BASE}/login", json={"email": alice.email, "password": "OldPass123"}
        )

        assert response.status_code == 423
        assert response.json()["code"] == "account_locked"
        assert 0 < int(response.headers["Retry-After"]) <= 1800

    async def test_inactive_account_returns_403(
        self, client, account_repository, password_service
    ):
        await account_repository.save(
            create_account(
                email="pending@example.com",
                password_hash=password_service.hash_password("OldPass123"),
                status=AccountStatus.PENDING_VERIFICATION,
            )
        )

        response = client.post(
            f"{BASE}/login",
            json={"email": "pending@example.com", "password": "OldPass123"},
        )

        assert response.status_code == 403
        assert response.json()["code"] == "account_inactive"


# =============================================================================
# Tests: tokens, profile, logout
# =============================================================================


@pytest.mark.api
class TestTokens:
    def test_refresh_token(self, client, alice):
        login = client.post(
            f"{BASE}/login", json={"email": alice.email, "password": "OldPass123"}
        ).json()

        response = client.post(
            f"{BASE}/refresh-token", json={"refresh_token": login["refresh_token"]}
        )

        assert response.status_code == 200
        assert response.json()["token_type"] == "bearer"

    def test_access_token_rejected_as_refresh_token(self, client, alice):
        login = client.post(
            f"{BASE}/login", json={"email": alice.email, "password": "OldPass123"}
        ).json()

        response = client.post(
            f"{BASE}/refresh-token", json={"refresh_token": login["access_token"]}
        )

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
        assert response.json()["code"] == "invalid_or_expired_token"

    def test_profile_requires_valid_access_token(self, client, alice):
        login = client.post(
            f"{BASE}/login", json={"email": alice.email, "password": "OldPass123"}
        ).json()

        with_refresh = client.get(
            f"{BASE}/profile",
            headers={"Authorization": f"Bearer {login['refresh_token']}"},
        )
        with_access = client.get(
            f"{BASE}/profile",
            headers={"Authorization": f"Bearer {login['access_token']}"},
        )

        assert with_refresh.status_code == 401
        assert with_access.status_code == 200
        assert with_access.json()["email"] == alice.email

    def test_profile_without_token_is_rejected(self, client):
        response = client.get(f"{BASE}/profile")

        assert response.status_code in (401, 403)
        assert "title" in response.json()

    async def test_suspended_account_token_forbidden(
        self, client, alice, account_repository
    ):
        headers = _login_headers(client, alice.email, "OldPass123")
        await account_repository.update(alice.id, status=AccountStatus.SUSPENDED)

        response = client.get(f"{BASE}/profile", headers=headers)

        assert response.status_code == 403
        assert response.json()["title"] == "Access Denied"

    def test_token_for_unknown_account_rejected(self, client, token_service):
        stranger = create_account(email="stranger@example.com")
        token = token_service.issue_access_token(stranger)

        response = client.get(
            f"{BASE}/profile", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    async def test_logout_records_timestamp(self, client, alice, account_repository):
        headers = _login_headers(client, alice.email, "OldPass123")

        response = client.post(f"{BASE}/logout", headers=headers)

        assert response.status_code == 200
        stored = await account_repository.find_by_id(alice.id)
        assert stored.last_logout_at is not None


# =============================================================================
# Tests: password recovery
# =============================================================================


@pytest.mark.api
class TestPasswordRecovery:
    def test_forgot_password_same_response_for_unknown_email(self, client, alice):
        known = client.post(f"{BASE}/forgot-password", json={"email": alice.email})
        unknown = client.post(
            f"{BASE}/forgot-password", json={"email": "ghost@example.com"}
        )

        assert known.status_code == unknown.status_code == 200
        assert known.json() == unknown.json()

    def test_reset_password_round_trip(self, client, alice, reset_outbox):
        client.post(f"{BASE}/forgot-password", json={"email": alice.email})
        (_, reset_token), = reset_outbox.sent

        response = client.post(
            f"{BASE}/reset-password",
            json={"token": reset_token, "new_password": "NewPass123"},
        )

        assert response.status_code == 200
        login = client.post(
            f"{BASE}/login", json={"email": alice.email, "password": "NewPass123"}
        )
        assert login.status_code == 200

    def test_reset_password_rejects_garbage_token(self, client):
        response = client.post(
            f"{BASE}/reset-password",
            json={"token": "aaaaaaaa.bbbbbbbb.cccccccc", "new_password": "NewPass123"},
        )

        assert response.status_code == 401

    def test_change_password(self, client, alice):
        headers = _login_headers(client, alice.email, "OldPass123")

        response = client.post(
            f"{BASE}/change-password",
            headers=headers,
            json={"current_password": "OldPass123", "new_password": "NewPass123"},
        )

        assert response.status_code == 200
        assert _login_headers(client, alice.email, "NewPass123")


# =============================================================================
# Tests: admin endpoints
# =============================================================================


@pytest.mark.api
class TestAdminEndpoints:
    async def test_verify_email_activates_account(
        self, client, admin_headers, account_repository
    ):
        pending = create_account(
            email="pending@example.com", status=AccountStatus.PENDING_VERIFICATION
        )
        await account_repository.save(pending)

        response = client.post(
            f"{BASE}/verify-email/{pending.id}", headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json()["status"] == "active"

    def test_verify_email_unknown_account_returns_404(self, client, admin_headers):
        response = client.post(f"{BASE}/verify-email/{uuid7()}", headers=admin_headers)

        assert response.status_code == 404
        assert response.json()["code"] == "account_not_found"

    async def test_unlock(self, client, admin_headers, alice, account_repository):
        await account_repository.update(
            alice.id, failed_login_attempts=5, locked_until=datetime(2099, 1, 1, tzinfo=UTC)
        )

        response = client.post(f"{BASE}/unlock/{alice.id}", headers=admin_headers)

        assert response.status_code == 200
        stored = await account_repository.find_by_id(alice.id)
        assert stored.locked_until is None

    def test_non_admin_forbidden(self, client, alice):
        headers = _login_headers(client, alice.email, "OldPass123")

        response = client.post(f"{BASE}/unlock/{alice.id}", headers=headers)

        assert response.status_code == 403

    async def test_demoted_admin_forbidden(
        self, client, admin_headers, alice, account_repository
    ):
        admin = await account_repository.find_by_email("admin@example.com")
        await account_repository.update(admin.id, role=AccountRole.USER)

        response = client.post(f"{BASE}/unlock/{alice.id}", headers=admin_headers)

        assert response.status_code == 403

    async def test_suspended_admin_forbidden(
        self, client, admin_headers, alice, account_repository
    ):
        admin = await account_repository.find_by_email("admin@example.com")
        await account_repository.update(admin.id, status=AccountStatus.SUSPENDED)

        response = client.post(f"{BASE}/unlock/{alice.id}", headers=admin_headers)

        assert response.status_code == 403
