"""Tests for the activities API client."""

import pytest
import requests

from mbkm_notifier.api import ActivityClient
from mbkm_notifier.exceptions import FetchError
from tests.conftest import make_response


def test_fetch_sends_bearer_token(settings, http_session):
    http_session.get.return_value = make_response(200, '{"data": []}')
    client = ActivityClient(settings, session=http_session)
    
    body = client.fetch()
    
    assert body == '{"data": []}'
    http_session.get.assert_called_once_with("https://api.test/activities", timeout=5)
    assert http_session.headers["Authorization"] == "Bearer secret-token"
    assert http_session.headers["Accept"] == "application/json"


def test_fetch_returns_body_verbatim(settings, http_session):
    http_session.get.return_value = make_response(200, "not json at all")
    client = ActivityClient(settings, session=http_session)
    
    assert client.fetch() == "not json at all"


def test_http_error_status_raises_fetch_error(settings, http_session):
    http_session.get.return_value = make_response(401, {"message": "Unauthorized"})
    client = ActivityClient(settings, session=http_session)
    
    with pytest.raises(FetchError) as exc_info:
        client.fetch()
    
    assert exc_info.value.status_code == 401
    assert "401" in str(exc_info.value)


def test_connection_error_raises_fetch_error(settings, http_session):
    http_session.get.side_effect = requests.exceptions.ConnectionError("connection refused")
    client = ActivityClient(settings, session=http_session)
    
    with pytest.raises(FetchError, match="connection refused"):
        client.fetch()


def test_timeout_raises_fetch_error(settings, http_session):
    http_session.get.side_effect = requests.exceptions.Timeout()
    client = ActivityClient(settings, session=http_session)
    
    with pytest.raises(FetchError, match="timed out"):
        client.fetch()
