"""
Central pytest configuration for the sweet shop tests.

Every app fixture gets its own in-memory SQLite database, so tests never
share state. Password hashing runs at the bcrypt minimum cost to keep the
suite fast.
"""

import pytest

from sweet_shop.core.config import Settings
from sweet_shop.main import create_app

# Markers and shared fixtures
from tests.config.markers import *  # noqa: F401,F403
from tests.fixtures.database_fixtures import *  # noqa: F401,F403

TEST_JWT_SECRET = "test-jwt-secret-key-that-is-long-enough"
TEST_PASSWORD = "sweet-password"


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        environment="testing",
        database_url="sqlite:///:memory:",
        jwt_secret_key=TEST_JWT_SECRET,
        bcrypt_rounds=4,
        log_level="WARNING",
        slow_query_ms=10_000,
    )


@pytest.fixture
def app(test_settings):
    """Create a fresh application bound to a private in-memory database."""
    application = create_app(test_settings)
    yield application
    application.extensions["sweet_shop"].engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def registered_user(client):
    """Register a user through the API and return its email and token."""
    response = client.post(
        "/api/auth/register",
        json={"email": "buyer@example.com", "password": TEST_PASSWORD},
    )
    assert response.status_code == 201
    data = response.get_json()["data"]
    return {"email": data["user"]["email"], "token": data["token"]}


@pytest.fixture
def auth_headers(registered_user):
    return {"Authorization": f"Bearer {registered_user['token']}"}


@pytest.fixture
def create_sweet(client, auth_headers):
    """Factory fixture that creates a sweet through the API."""

    def _create(name="Chocolate Bar", category="chocolate", price=2.5, quantity=10):
        response = client.post(
            "/api/sweets",
            json={
                "name": name,
                "category": category,
                "price": price,
                "quantity": quantity,
            },
            headers=auth_headers,
        )
        assert response.status_code == 201, response.get_json()
        return response.get_json()["data"]

    return _create
