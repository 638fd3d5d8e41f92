"""Pytest configuration for the WXOrca backend tests."""
import os
import sys
import textwrap

# Settings are read at import time, so pin them before any backend import
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AGENT_EXECUTOR"] = "local"
os.environ["DEBUG"] = "false"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from backend.app.services.agent_bridge import ProcessAgentExecutor  # noqa: E402
from backend.app.services.session_store import SessionStore  # noqa: E402
from backend.main import app  # noqa: E402


@pytest.fixture
def client():
    """Client with a running lifespan, so every test gets a fresh session store"""
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def store():
    return SessionStore()


@pytest.fixture
def worker(tmp_path):
    """
    Build a ProcessAgentExecutor around a throwaway Python script.

    The script receives the usual worker arguments in ``sys.argv``.
    """
    def make(source: str, timeout: float = 10.0) -> ProcessAgentExecutor:
        script = tmp_path / "worker.py"
        script.write_text(textwrap.dedent(source))
        return ProcessAgentExecutor(
            command=[sys.executable, str(script)],
            timeout_seconds=timeout,
            healthcheck_timeout_seconds=timeout,
        )

    return make
