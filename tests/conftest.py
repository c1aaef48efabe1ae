"""
Shared fixtures.

Every app is built from an injected configuration backed by an in-memory
SQLite database, with rate limiting off. Apps are built during fixture
setup because ``create_app`` reconfigures the root logger.
"""

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from kiosk_api.core.config import ConfigStore
from kiosk_api.infrastructure.role.models import RoleModel, UserModel
from kiosk_api.main import create_app

TEST_SETTINGS = {
    "server": {"rate_limit": {"enabled": False}},
    "database": {"sql": {"url": "sqlite://", "sync": True}},
}

SEED_ROLES = [
    (1, 100, "admin"),
    (2, 200, "staff"),
    (3, 300, "guest"),
]


def build_configuration(**overrides) -> ConfigStore:
    """Test settings with ``overrides`` merged on top (one level deep per section)."""
    settings = {section: dict(values) for section, values in TEST_SETTINGS.items()}
    for section, values in overrides.items():
        settings.setdefault(section, {}).update(values)
    return ConfigStore.from_overrides(settings)


@pytest.fixture
def configuration() -> ConfigStore:
    return build_configuration()


@pytest.fixture
def make_app():
    """Build an app from the test settings plus per-section overrides."""

    def _make_app(**overrides):
        return create_app(build_configuration(**overrides))

    return _make_app


@pytest.fixture
def app(configuration):
    return create_app(configuration)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def session_factory(app, client):
    """Session factory of the running app; tables exist once ``client`` started."""
    return app.state.database.session_factory


@pytest.fixture
def seeded_roles(session_factory):
    with session_factory() as session, session.begin():
        for role_id, role_code, role_name in SEED_ROLES:
            session.add(RoleModel(id=role_id, role_code=role_code, role_name=role_name))
    return SEED_ROLES


@pytest.fixture
def make_user(session_factory, seeded_roles):
    """Insert a user under the ``admin`` role and return its id."""

    def _make_user(**fields) -> int:
        values = {
            "user_name": "kiosk-operator",
            "birth": datetime(1990, 1, 1),
            "start_day": datetime(2024, 1, 1),
            "role": 100,
        }
        values.update(fields)
        with session_factory() as session, session.begin():
            user = UserModel(**values)
            session.add(user)
            session.flush()
            return user.id

    return _make_user
