"""Tests for the Discord webhook notifier."""

import logging

import pytest
import requests

from mbkm_notifier.notify import DiscordNotifier
from tests.conftest import WEBHOOK_URL, make_response


@pytest.fixture
def notifier(settings, http_session):
    return DiscordNotifier(settings=settings, session=http_session)


def test_payload_is_a_single_embed(notifier):
    payload = notifier.build_payload("Status: ACTIVE", "http://x/img.png")
    
    assert payload == {
        "embeds": [
            {
                "title": "New Activity Update",
                "description": "Status: ACTIVE",
                "image": {"url": "http://x/img.png"},
            }
        ]
    }


def test_payload_without_image_omits_image(notifier):
    embed = notifier.build_payload("hello", None, title="Custom")["embeds"][0]
    
    assert embed["title"] == "Custom"
    assert "image" not in embed


@pytest.mark.parametrize("status_code", [200, 204])
def test_success_statuses(notifier, http_session, status_code):
    http_session.post.return_value = make_response(status_code)
    
    assert notifier.send_embed("hello", "http://x/img.png") is True
    
    http_session.post.assert_called_once_with(
        WEBHOOK_URL,
        json=notifier.build_payload("hello", "http://x/img.png"),
        timeout=5,
    )


@pytest.mark.parametrize("status_code", [201, 400, 429, 500])
def test_other_statuses_are_failures(notifier, http_session, status_code, caplog):
    http_session.post.return_value = make_response(status_code, "nope")
    
    with caplog.at_level(logging.ERROR):
        assert notifier.send_embed("hello") is False
    
    assert f"Discord webhook error: {status_code}" in caplog.text


def test_transport_error_is_logged_not_raised(notifier, http_session, caplog):
    http_session.post.side_effect = requests.exceptions.ConnectionError("boom")
    
    with caplog.at_level(logging.ERROR):
        assert notifier.send_embed("hello") is False
    
    assert "boom" in caplog.text


def test_empty_message_skips_the_request(notifier, http_session):
    assert notifier.send_embed("", "http://x/img.png") is False
    http_session.post.assert_not_called()


def test_explicit_webhook_url_overrides_settings(settings, http_session):
    notifier = DiscordNotifier("https://discord.test/other", settings=settings, session=http_session)
    
    notifier.send_embed("hello")
    
    assert http_session.post.call_args.args[0] == "https://discord.test/other"
