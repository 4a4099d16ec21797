"""
Pytest configuration and shared fixtures for storefront tests.

Provides sample catalogs, a mocked HTTP transport and a recording
install handler.
"""

import json
import pytest
from unittest.mock import MagicMock, patch
from pathlib import Path
from typing import Any, Dict, List
import sys

import httpx

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from storefront.config import StoreConfig
from storefront.client import CatalogClient
from storefront.installer import InstallHandler, InstallRequest
from storefront.models import App


CATALOG_URL = "https://store.example.com/api/index.php"


def make_app_data(app_id: int, **overrides) -> Dict[str, Any]:
    """Build one catalog entry in wire format."""
    data = {
        "id": app_id,
        "name": f"App {app_id}",
        "subtitle": f"Subtitle {app_id}",
        "icon": f"https://cdn.example.com/icons/{app_id}.png",
        "screenshots": [
            f"https://cdn.example.com/shots/{app_id}-1.png",
            f"https://cdn.example.com/shots/{app_id}-2.png",
            f"https://cdn.example.com/shots/{app_id}-3.png",
        ],
        "description": f"Description of app {app_id}",
        "rating": 4.5,
        "reviews": 120,
        "size": "12 MB",
        "version": "1.0.0",
        "apk_url": f"https://example.com/apps/{app_id}.apk",
        "category": "tools",
    }
    data.update(overrides)
    return data


def make_client(handler, config: StoreConfig = None) -> CatalogClient:
    """CatalogClient backed by an httpx.MockTransport handler."""
    config = config or StoreConfig(catalog_url=CATALOG_URL, display_delay=0)
    return CatalogClient(config, transport=httpx.MockTransport(handler))


def json_responder(payload: Any, status_code: int = 200, calls: List = None):
    """Mock transport handler answering every request with a JSON body."""
    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        return httpx.Response(status_code, content=json.dumps(payload).encode())
    return handler


class RecordingHandler(InstallHandler):
    """Install handler that keeps every submitted request."""

    def __init__(self):
        self.requests: List[InstallRequest] = []

    def submit(self, request: InstallRequest) -> None:
        self.requests.append(request)


# ============ Catalog Fixtures ============

@pytest.fixture
def sample_payload() -> Dict[str, Any]:
    """A successful catalog response with three apps."""
    return {
        "success": True,
        "apps": [
            make_app_data(3, name="Charlie"),
            make_app_data(1, name="Alpha", featured=True),
            make_app_data(2, name="Bravo", screenshots=[]),
        ],
    }


@pytest.fixture
def sample_app() -> App:
    """A single decoded app."""
    return App.from_dict(make_app_data(7, name="Seven"))


@pytest.fixture
def app_without_screenshots() -> App:
    return App.from_dict(make_app_data(8, screenshots=[]))


@pytest.fixture
def recording_handler() -> RecordingHandler:
    return RecordingHandler()


@pytest.fixture
def test_config() -> StoreConfig:
    """Configuration pointing at the mocked endpoint with no display delay."""
    return StoreConfig(catalog_url=CATALOG_URL, display_delay=0)


# ============ Subprocess Fixtures ============

@pytest.fixture
def mock_subprocess():
    """Mock subprocess.run for tests."""
    with patch('subprocess.run') as mock_run:
        mock_run.return_value = MagicMock(
            returncode=0,
            stdout="",
            stderr="",
        )
        yield mock_run


@pytest.fixture
def mock_subprocess_popen():
    """Mock subprocess.Popen for tests."""
    with patch('subprocess.Popen') as mock_popen:
        mock_proc = MagicMock()
        mock_proc.returncode = 0
        mock_proc.communicate.return_value = ("", "")
        mock_proc.wait.return_value = 0
        mock_popen.return_value = mock_proc
        yield mock_popen
