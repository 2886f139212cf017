"""Fixtures for end-to-end API tests."""

from dataclasses import dataclass

import pytest
from fastapi.testclient import TestClient

from commentary.config import AuthSettings
from commentary.domain.model import User
from commentary.interface.api.app import create_app
from commentary.persistence.repository.inmemory import InMemoryDatabase
from tests.conftest import make_token
from tests.di import build_test_container


@dataclass
class Api:
    """Test client plus the state behind it."""

    client: TestClient
    db: InMemoryDatabase
    auth_settings: AuthSettings

    def auth(self, user: User, is_admin: bool = False) -> dict[str, str]:
        """Cookie header authenticating as ``user``."""
        token = make_token(user, self.auth_settings, is_admin=is_admin)
        return {"cookie": f"auth_token={token}"}


def _build_app(unmock: set):
    container = build_test_container(unmock=unmock)
    return container, create_app(container)


@pytest.fixture
def api():
    """API with in-memory persistence and recorded events."""
    container, app = _build_app(set())
    with TestClient(app) as client:
        yield Api(
            client=client,
            db=client.portal.call(container.get, InMemoryDatabase),
            auth_settings=client.portal.call(container.get, AuthSettings),
        )


@pytest.fixture
def live_api():
    """API with in-memory persistence and the real notification relay."""
    container, app = _build_app({"notification"})
    with TestClient(app) as client:
        yield Api(
            client=client,
            db=client.portal.call(container.get, InMemoryDatabase),
            auth_settings=client.portal.call(container.get, AuthSettings),
        )
