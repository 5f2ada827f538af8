"""Pytest configuration and shared fixtures."""

import copy
import json
import tempfile
from pathlib import Path
from unittest.mock import MagicMock

import httpx
import pytest

from strava_box.config import GITHUB_API_URL
from strava_box.gist_client import GistClient


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_activity():
    """A single run as returned by the Strava activities endpoint."""
    return {
        "id": 1234567890,
        "name": "Morning Run",
        "type": "Run",
        "distance": 5000.0,
        "moving_time": 2000,
        "elapsed_time": 2050,
        "average_speed": 2.5,
        "start_date": "2023-04-01T10:00:00Z",
        "start_date_local": "2023-04-01T12:00:00Z",
    }


@pytest.fixture
def sample_activities(sample_activity):
    """Two activities, newest first."""
    ride = {
        "id": 1234567000,
        "name": "Evening Ride",
        "type": "Ride",
        "distance": 42170.0,
        "moving_time": 5400,
        "elapsed_time": 5600,
        "average_speed": 7.809,
        "start_date": "2023-03-30T17:45:12Z",
        "start_date_local": "2023-03-30T19:45:12Z",
    }
    return [sample_activity, ride]


@pytest.fixture
def mock_env_file(temp_dir):
    """Create a mock .env.local file."""
    env_content = """
# strava-box
GIST_ID=gist123
GITHUB_TOKEN=ghp_test
STRAVA_ATHLETE_ID=42
STRAVA_CLIENT_ID=12345
STRAVA_CLIENT_SECRET=secret123
STRAVA_REFRESH_TOKEN="refresh123"
"""
    env_file = temp_dir / ".env.local"
    env_file.write_text(env_content)
    return env_file


class FakeGistServer:
    """In-memory stand-in for the GitHub gists endpoints."""

    def __init__(self, gists=None):
        self.gists = gists or {}
        self.requests = []
        self.fail_get = None
        self.fail_patch = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        gist_id = request.url.path.rsplit("/", 1)[-1]

        if request.method == "GET":
            if self.fail_get is not None:
                return self._fail(self.fail_get, request)
            if gist_id not in self.gists:
                return httpx.Response(404, json={"message": "Not Found"})
            return httpx.Response(200, json=self._document(gist_id))

        if request.method == "PATCH":
            if self.fail_patch is not None:
                return self._fail(self.fail_patch, request)
            body = json.loads(request.content)
            files = self.gists[gist_id]
            for key, patch in body["files"].items():
                files[key] = {
                    "filename": patch.get("filename", files[key]["filename"]),
                    "content": patch["content"],
                }
            return httpx.Response(200, json=self._document(gist_id))

        return httpx.Response(405)

    @staticmethod
    def _fail(failure, request):
        if isinstance(failure, int):
            return httpx.Response(failure, json={"message": "error"})
        raise failure

    def _document(self, gist_id):
        return {"id": gist_id, "files": copy.deepcopy(self.gists[gist_id])}

    def methods(self):
        return [request.method for request in self.requests]


@pytest.fixture
def gist_server():
    return FakeGistServer(
        {
            "gist123": {"a.txt": {"filename": "a.txt", "content": "old"}},
        }
    )


@pytest.fixture
def gist_client(gist_server):
    http_client = httpx.Client(base_url=GITHUB_API_URL, transport=httpx.MockTransport(gist_server.handler))
    client = GistClient("ghp_test", http_client=http_client)
    yield client
    client.close()


@pytest.fixture
def strava_api(sample_activities):
    """Stubbed stravalib client with a fixed token response."""
    client = MagicMock()
    client.refresh_access_token.return_value = {
        "access_token": "access-fixed-token",
        "refresh_token": "refresh-rotated-token",
        "expires_at": 1700000000,
    }
    client.protocol.get.return_value = sample_activities
    return client
