"""
Integration tests for the registration flow.

Drives the full application (lifespan included) with the in-memory
persistence backend and a spy message client in place of the console one.
"""

import logging
import re
from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from src.api.main import app

LINK_PATTERN = re.compile(r"https?://[^/\s]+(/confirm/\S+)")


@pytest.fixture
def client(message_client) -> Iterator[TestClient]:
    """Create test client with a fresh in-memory backend and a spy message client."""
    with TestClient(app) as client:
        app.state.message_client = message_client
        yield client


def confirmation_path(message_client) -> str:
    """Path of the confirmation link in the latest sent message."""
    _, message = message_client.sent[-1]
    match = LINK_PATTERN.search(message.body)
    assert match is not None, f"No confirmation link in: {message.body}"
    return match.group(1)


class TestRegistrationFlow:
    """End-to-end flows through the HTTP API."""

    def test_register_and_confirm_through_link(self, client: TestClient, message_client) -> None:
        response = client.post("/v1/users", json={"name": "alice", "email": "alice@x.com"})
        assert response.status_code == 201

        assert client.get("/v1/users/alice").json() == {"name": "alice", "exists": True}
        assert client.get("/v1/users/alice/email").status_code == 403

        response = client.get(confirmation_path(message_client))
        assert response.status_code == 200

        assert client.get("/v1/users/alice/confirmation").json() == {
            "name": "alice",
            "confirmed": True,
        }
        assert client.get("/v1/users/alice/email").json() == {
            "name": "alice",
            "email": "alice@x.com",
        }

    def test_wrong_code_then_right_code(self, client: TestClient, message_client) -> None:
        client.post("/v1/users", json={"name": "alice", "email": "alice@x.com"})
        code = confirmation_path(message_client).rsplit("/", 1)[1]

        response = client.post("/v1/users/alice/confirmation", json={"code": "000000"})
        assert response.status_code == 400
        assert client.get("/v1/users/alice/confirmation").json()["confirmed"] is False

        response = client.post("/v1/users/alice/confirmation", json={"code": code})
        assert response.status_code == 200
        assert client.get("/v1/users/alice/email").json()["email"] == "alice@x.com"

    def test_duplicate_registration_returns_409(self, client: TestClient, message_client) -> None:
        client.post("/v1/users", json={"name": "alice", "email": "alice@x.com"})

        response = client.post("/v1/users", json={"name": "alice", "email": "other@x.com"})

        assert response.status_code == 409
        assert len(message_client.sent) == 1

    def test_resend_invalidates_previous_link(self, client: TestClient, message_client) -> None:
        client.post("/v1/users", json={"name": "alice", "email": "alice@x.com"})
        first_link = confirmation_path(message_client)

        assert client.post("/v1/users/alice/confirmation-code").status_code == 202
        second_link = confirmation_path(message_client)

        assert client.get(first_link).status_code == 400
        assert client.get(second_link).status_code == 200
        assert client.post("/v1/users/alice/confirmation-code").status_code == 409

    def test_dotted_name_link_is_followable(self, client: TestClient, message_client) -> None:
        client.post("/v1/users", json={"name": "a.lice-1", "email": "alice@x.com"})

        assert client.get(confirmation_path(message_client)).status_code == 200
        assert client.get("/v1/users/a.lice-1/confirmation").json()["confirmed"] is True

    @pytest.mark.parametrize("name", [".", ".."])
    def test_dot_only_name_is_not_registered(
        self, client: TestClient, message_client, name: str
    ) -> None:
        response = client.post("/v1/users", json={"name": name, "email": "alice@x.com"})

        assert response.status_code == 422
        assert message_client.sent == []

    def test_unknown_user(self, client: TestClient) -> None:
        assert client.get("/v1/users/bob").json() == {"name": "bob", "exists": False}
        assert client.get("/v1/users/bob/email").status_code == 404
        assert client.get("/v1/users/bob/confirmation").status_code == 404
        assert client.get("/confirm/bob/whatever").status_code == 404

    def test_console_client_logs_link(self, caplog: pytest.LogCaptureFixture) -> None:
        """With the default console client the confirmation link shows up in logs."""
        with TestClient(app) as client, caplog.at_level(logging.INFO):
            response = client.post("/v1/users", json={"name": "dave", "email": "dave@x.com"})

        assert response.status_code == 201
        assert "[CONFIRMATION]" in caplog.text
        assert "/confirm/dave/" in caplog.text

    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}
