"""
Integration tests for OpenAPI documentation.

Verifies OpenAPI schema is correctly generated for all endpoints.
"""

import pytest
from fastapi.testclient import TestClient

from credgate.api.main import app


@pytest.fixture
def schema() -> dict:
    """Fetch the generated OpenAPI schema."""
    response = TestClient(app).get("/openapi.json")
    assert response.status_code == 200
    return response.json()


class TestOpenAPISchema:
    """Tests for OpenAPI schema generation."""

    def test_title_and_version(self, schema: dict) -> None:
        assert schema["info"]["title"] == "credgate"
        assert schema["info"]["version"] == "0.1.0"

    def test_register_endpoint_documented(self, schema: dict) -> None:
        register = schema["paths"]["/v1/register"]["post"]
        assert register["summary"] == "Register a new user"
        assert {"201", "400", "500"} <= set(register["responses"])

    def test_register_request_body_documented(self, schema: dict) -> None:
        """RegisterRequest schema has name, email and password fields."""
        body = schema["paths"]["/v1/register"]["post"]["requestBody"]
        properties = body["content"]["application/json"]["schema"]["properties"]
        assert set(properties) == {"name", "email", "password"}

    def test_login_and_logout_documented(self, schema: dict) -> None:
        assert "post" in schema["paths"]["/v1/login"]
        assert "post" in schema["paths"]["/v1/logout"]

    def test_dashboard_documented(self, schema: dict) -> None:
        dashboard = schema["paths"]["/dashboard"]["get"]
        assert "303" in dashboard["responses"]

    def test_tags(self, schema: dict) -> None:
        assert {tag["name"] for tag in schema["tags"]} == {"v1", "dashboard"}
