"""Pytest shared fixtures for provider tests."""
import pathlib
import sys
from unittest.mock import MagicMock

# Add project root to Python path
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
import requests

from stytch_provider.core.stytch import LegacyProject, StytchClient

STYTCH_ENV_VARS = (
    "STYTCH_WORKSPACE_KEY_ID",
    "STYTCH_WORKSPACE_KEY_SECRET",
    "STYTCH_MANAGEMENT_BASE_URL",
    "STYTCH_REQUEST_TIMEOUT",
    "STYTCH_LOG_LEVEL",
)


# ─────────────────────────────────────────────────────────────────────────────
# Network Guard Rails
# ─────────────────────────────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def _block_network(monkeypatch):
    """Fail loudly if a test reaches the real Management API."""
    def _refuse(method, url, *args, **kwargs):
        raise RuntimeError(f"Unexpected network access in tests: {method} {url}")
    
    monkeypatch.setattr(requests, "request", _refuse)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in STYTCH_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


# ─────────────────────────────────────────────────────────────────────────────
# API doubles
# ─────────────────────────────────────────────────────────────────────────────

@pytest.fixture()
def api():
    """MagicMock standing in for StytchClient; configure .get/.post/... per test."""
    return MagicMock(spec=StytchClient)


@pytest.fixture()
def legacy_project():
    return LegacyProject(
        project_slug="myproj",
        live_project_id="project-live-abc123",
        test_project_id="project-test-xyz789",
        live_environment_slug="production",
        test_environment_slug="test",
    )


@pytest.fixture()
def migration_body(legacy_project):
    """GET body of the migration endpoint for ``legacy_project``."""
    return {
        "project": {
            "project_slug": legacy_project.project_slug,
            "live_project_id": legacy_project.live_project_id,
            "test_project_id": legacy_project.test_project_id,
            "live_environment_slug": legacy_project.live_environment_slug,
            "test_environment_slug": legacy_project.test_environment_slug,
        }
    }


@pytest.fixture()
def route():
    """Return a helper making a client verb answer by path."""
    return _route


def _route(mock_method, responses):
    """Make a client verb answer by path: ``{path: body_or_exception}``."""
    def _answer(path, *args, **kwargs):
        if path not in responses:
            raise AssertionError(f"Unexpected API path in test: {path}")
        answer = responses[path]
        if isinstance(answer, Exception):
            raise answer
        return answer

    mock_method.side_effect = _answer
    return mock_method
