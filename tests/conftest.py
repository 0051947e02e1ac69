from __future__ import annotations

from datetime import date, datetime

import pytest

from src.site_ledger.site_ledger.container import wire
from src.site_ledger.site_ledger.core.enums import Role
from src.site_ledger.site_ledger.main import create_app
from tests.fakes import make_repositories


@pytest.fixture
def fixed_now():
    return datetime(2025, 3, 10, 9, 0, 0)


@pytest.fixture
def day():
    """Build dates in March 2025: ``day(3)`` is 2025-03-03."""
    return lambda n: date(2025, 3, n)


@pytest.fixture
def repos():
    return make_repositories()


@pytest.fixture
def container(repos):
    return wire(repos)


@pytest.fixture
def site(repos):
    """Two projects and two workers most tests start from."""
    return {
        "tower": repos.projects.add("Tower A"),
        "villa": repos.projects.add("Villa B"),
        "ahmad": repos.workers.add("Ahmad", daily_wage="150"),
        "samir": repos.workers.add("Samir", daily_wage="120", type="mason"),
    }


@pytest.fixture
def app(monkeypatch, container, repos):
    monkeypatch.setenv("APP_ENV", "testing")
    repos.users.add(username="admin", password="admin123", role=Role.ADMIN)
    repos.users.add(username="clerk", password="clerk123", role=Role.STAFF)
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(username: str = "admin", password: str = "admin123"):
        res = client.post("/api/auth/login", json={"username": username, "password": password})
        assert res.status_code == 200, res.get_json()
        return res

    return _login
