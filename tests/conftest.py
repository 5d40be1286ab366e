"""Pytest configuration and fixtures."""

import sys
from pathlib import Path
from unittest.mock import AsyncMock, patch

import httpx
import pytest

# Add project root (and tests/ for helpers) to sys.path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))
sys.path.insert(0, str(Path(__file__).parent))

from config import RelayConfig  # noqa: E402
from helpers import APP_SECRET, CAMUNDA_URL, VERIFY_TOKEN  # noqa: E402


@pytest.fixture
def relay_config() -> RelayConfig:
    return RelayConfig(
        port=3000,
        host="127.0.0.1",
        verify_token=VERIFY_TOKEN,
        app_secret=APP_SECRET,
        camunda_webhook_url=CAMUNDA_URL,
        camunda_basic_user="webhook",
        camunda_basic_pass="s3cret",
        camunda_timeout_seconds=5.0,
        log_level="debug",
    )


@pytest.fixture
def client(relay_config):
    from fastapi.testclient import TestClient

    from main import create_app

    with TestClient(create_app(relay_config)) as test_client:
        yield test_client


@pytest.fixture
def mock_camunda():
    """Patch httpx.AsyncClient; yields the client instance whose .post is recorded."""
    with patch("httpx.AsyncClient") as mock_class:
        mock_instance = AsyncMock()
        mock_instance.__aenter__ = AsyncMock(return_value=mock_instance)
        mock_instance.__aexit__ = AsyncMock(return_value=False)
        mock_instance.post.return_value = httpx.Response(200, text="ok")
        mock_class.return_value = mock_instance
        yield mock_instance
