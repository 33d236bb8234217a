"""Shared fixtures for the MBKM Activity Notifier tests."""

import json
from unittest.mock import MagicMock

import pytest
import requests

from mbkm_notifier.config import Settings

WEBHOOK_URL = "https://discord.test/api/webhooks/1/abc"


def make_response(status_code: int = 200, body="") -> requests.Response:
    """Build a real requests.Response with the given status and body."""
    if not isinstance(body, (str, bytes)):
        body = json.dumps(body)
    if isinstance(body, str):
        body = body.encode("utf-8")
    
    response = requests.Response()
    response.status_code = status_code
    response._content = body
    response.encoding = "utf-8"
    response.url = "https://api.test/activities"
    return response


def activity_record(activity_id=1, status="ACTIVE", name="A", partner="B", logo="http://x/img.png"):
    return {
        "id": activity_id,
        "status": status,
        "nama_kegiatan": name,
        "mitra_brand_name": partner,
        "mitra_logo": logo,
    }


def payload(*records) -> str:
    return json.dumps({"data": list(records)})


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        bearer_token="secret-token",
        discord_webhook=WEBHOOK_URL,
        api_url="https://api.test/activities",
        poll_interval_seconds=60,
        request_timeout=5,
    )


@pytest.fixture
def http_session():
    """A real requests session whose get/post never touch the network."""
    session = requests.Session()
    session.get = MagicMock(return_value=make_response(200, {"data": []}))
    session.post = MagicMock(return_value=make_response(204))
    return session
