"""Pytest configuration and fixtures for the sandbox tests."""

import pytest
from fastapi.testclient import TestClient

from core.config import settings
from sandbox.orchestrator import Sandbox
from sandbox.workspace import prepare_scratch_dir


@pytest.fixture
def scratch_dir(tmp_path):
    return prepare_scratch_dir(tmp_path / "scratch")


@pytest.fixture
def sandbox(scratch_dir):
    return Sandbox(scratch_dir, timeout_seconds=5, kill_grace_seconds=0.2)


@pytest.fixture
def fast_sandbox(scratch_dir):
    """Sandbox with a short budget for timeout tests."""
    return Sandbox(scratch_dir, timeout_seconds=1, kill_grace_seconds=0.2)


@pytest.fixture
def api_scratch_dir(tmp_path):
    return tmp_path / "api-scratch"


@pytest.fixture
def client(api_scratch_dir, monkeypatch):
    monkeypatch.setattr(settings, "SCRATCH_DIR", str(api_scratch_dir))
    monkeypatch.setattr(settings, "EXECUTION_TIMEOUT_SECONDS", 5.0)

    from main import app

    with TestClient(app) as test_client:
        yield test_client
