"""
Unit tests for the protected dashboard view and the require_identity gate.
"""

from unittest.mock import Mock

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from credgate.adapters.session import JwtSessionManager
from credgate.api.dashboard import router
from credgate.api.dependencies import get_session_manager, require_identity
from credgate.api.errors import register_exception_handlers
from credgate.config.settings import Settings, get_settings
from credgate.domain.models import Account, Identity

SECRET = "test_session_secret_for_testing_only"


@pytest.fixture
def sessions() -> JwtSessionManager:
    return JwtSessionManager(secret_key=SECRET, ttl_seconds=3600)


@pytest.fixture
def app(sessions: JwtSessionManager) -> FastAPI:
    test_app = FastAPI()
    test_app.include_router(router)
    register_exception_handlers(test_app)
    test_app.dependency_overrides[get_session_manager] = lambda: sessions
    return test_app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app, follow_redirects=False)


def sign_in(client: TestClient, sessions: JwtSessionManager, account: Account) -> None:
    client.cookies.set(get_settings().session_cookie_name, sessions.issue(account))


class TestUnauthenticated:
    """Requests without a valid session are redirected."""

    def test_no_cookie_redirects_to_login(self, client: TestClient) -> None:
        response = client.get("/dashboard")

        assert response.status_code == 303
        assert response.headers["location"] == get_settings().login_url
        assert response.content == b""

    @pytest.mark.parametrize("token", ["", "invalid.jwt.token", "garbage"])
    def test_invalid_cookie_redirects(self, client: TestClient, token: str) -> None:
        client.cookies.set(get_settings().session_cookie_name, token)

        response = client.get("/dashboard")

        assert response.status_code == 303

    def test_expired_session_redirects(self, client: TestClient) -> None:
        expired = JwtSessionManager(secret_key=SECRET, ttl_seconds=-60)
        account = Account(id="acc-1", name="Al", email="al@example.com", password_hash="x")
        client.cookies.set(get_settings().session_cookie_name, expired.issue(account))

        assert client.get("/dashboard").status_code == 303

    def test_redirect_target_follows_settings_override(self, app: FastAPI) -> None:
        """The redirect reads login_url from the same settings the routes use."""
        app.dependency_overrides[get_settings] = lambda: Settings(login_url="/signin")

        response = TestClient(app, follow_redirects=False).get("/dashboard")

        assert response.status_code == 303
        assert response.headers["location"] == "/signin"

    def test_protected_work_never_starts_without_session(self, app: FastAPI) -> None:
        """The gate runs before any data access in the handler."""
        fetch_protected_data = Mock(return_value={"secret": "value"})

        @app.get("/reports")
        async def reports(identity: Identity = Depends(require_identity)) -> dict:
            return fetch_protected_data(identity.account_id)

        response = TestClient(app, follow_redirects=False).get("/reports")

        assert response.status_code == 303
        fetch_protected_data.assert_not_called()


class TestAuthenticated:
    """Requests with a valid session see their identity."""

    def test_dashboard_shows_name_and_email(
        self, client: TestClient, sessions: JwtSessionManager
    ) -> None:
        sign_in(client, sessions, Account(id="acc-1", name="Al", email="al@example.com", password_hash="x"))

        response = client.get("/dashboard")

        assert response.status_code == 200
        assert response.json() == {
            "message": "Welcome, Al!",
            "name": "Al",
            "email": "al@example.com",
        }

    def test_dashboard_falls_back_to_email(
        self, client: TestClient, sessions: JwtSessionManager
    ) -> None:
        sign_in(client, sessions, Account(id="acc-1", name="", email="al@example.com", password_hash="x"))

        response = client.get("/dashboard")

        assert response.status_code == 200
        assert response.json()["message"] == "Welcome, al@example.com!"
        assert response.json()["name"] is None

    def test_gate_receives_cookie_token(self, app: FastAPI) -> None:
        """The session token is passed to the resolver explicitly."""
        resolver = Mock()
        resolver.resolve.return_value = Identity(account_id="acc-1", email="al@example.com")
        app.dependency_overrides[get_session_manager] = lambda: resolver
        client = TestClient(app, follow_redirects=False)
        client.cookies.set(get_settings().session_cookie_name, "opaque-token")

        response = client.get("/dashboard")

        assert response.status_code == 200
        resolver.resolve.assert_called_once_with("opaque-token")
