"""Tests for the external notification dispatcher."""

import hashlib
import logging
from datetime import datetime, timezone
from unittest.mock import Mock

import httpx
import pytest

from domains.note_reminders.notifier import (
    NotificationDispatcher,
    build_payload,
    is_valid_endpoint,
    parse_header_values,
)
from domains.note_reminders.settings import ReminderSettings
from domains.note_reminders.types import ReminderInfo

INFO = ReminderInfo(
    event_date="2024-03-10",
    remind_date="2024-03-08T09:00:00.000+00:00",
    document_title="Dentist",
    document_path="Events/Dentist.md",
    document_uri="obsidian://open?vault=My%20Vault&file=Events%2FDentist.md",
)


def make_dispatcher(**overrides):
    values = {
        "send_reminder_to_external_api": True,
        "api_endpoint": "https://ntfy.example.com/",
    }
    values.update(overrides)
    notices = []
    return NotificationDispatcher(ReminderSettings(**values), notices.append), notices


def response(status_code, body=None):
    return Mock(
        status_code=status_code,
        text=str(body),
        json=Mock(return_value=body),
    )


def errors(caplog):
    return [r for r in caplog.records if r.name == "note_reminders" and r.levelno == logging.ERROR]


class TestHelpers:
    """Endpoint validation, header parsing and payload."""

    def test_valid_endpoints(self):
        assert is_valid_endpoint("https://ntfy.sh/")
        assert is_valid_endpoint("http://localhost:8080/notify")

    def test_invalid_endpoints(self):
        assert not is_valid_endpoint("")
        assert not is_valid_endpoint("ntfy.sh/topic")
        assert not is_valid_endpoint("/relative/path")
        assert not is_valid_endpoint("ftp://files.example.com/")

    def test_header_parsing(self):
        text = "Authorization: Bearer abc:def\n\n  X-Priority :  high \nmalformed line\n: no-key\nNoValue:\n"
        assert parse_header_values(text) == {
            "Authorization": "Bearer abc:def",
            "X-Priority": "high",
        }

    def test_header_parsing_empty(self):
        assert parse_header_values("") == {}

    def test_payload(self, local_tz):
        payload = build_payload(INFO)

        assert payload["topic"] == "obsidian-calendar-reminder"
        assert payload["message"] == "Happening on Sun 10 at 0:00"
        assert payload["title"] == "Reminder : Dentist"
        assert payload["tags"] == ["alarm_clock"]
        assert payload["click"] == INFO.document_uri
        assert payload["delay"] == int(datetime(2024, 3, 8, 9, tzinfo=timezone.utc).timestamp() * 1000)
        assert payload["reminderInfo"] == {
            "event_date": "2024-03-10",
            "remind_date": "2024-03-08T09:00:00.000+00:00",
            "file_title": "Dentist",
            "hash": hashlib.md5((INFO.document_uri + "2024-03-10").encode()).hexdigest(),
        }


class TestNotify:
    """Dispatch and response classification."""

    @pytest.mark.asyncio
    async def test_disabled_makes_no_request(self, mock_httpx_client):
        dispatcher, notices = make_dispatcher(send_reminder_to_external_api=False)

        assert await dispatcher.notify(INFO) is False

        mock_httpx_client.post.assert_not_called()
        assert notices == []

    @pytest.mark.asyncio
    async def test_invalid_endpoint(self, mock_httpx_client):
        dispatcher, notices = make_dispatcher(api_endpoint="not a url")

        assert await dispatcher.notify(INFO) is False

        mock_httpx_client.post.assert_not_called()
        assert notices == ["Cannot send reminder info, invalid API endpoint configured."]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [200, 201, 204, 299])
    async def test_success_statuses(self, mock_httpx_client, status, local_tz):
        mock_httpx_client.post.return_value = response(status, {
            "id": "hwQ2YpKdmg", "time": 1709888400, "expires": 1709931600,
            "event": "message", "topic": "obsidian-calendar-reminder",
        })
        dispatcher, notices = make_dispatcher(additional_headers="Authorization: Bearer secret-token")

        assert await dispatcher.notify(INFO) is True
        assert notices == []

        call = mock_httpx_client.post.call_args
        assert call.args == ("https://ntfy.example.com/",)
        assert call.kwargs["headers"] == {
            "Authorization": "Bearer secret-token",
            "Content-Type": "application/json",
        }
        assert call.kwargs["json"]["reminderInfo"]["file_title"] == "Dentist"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [404, 500])
    async def test_error_statuses(self, mock_httpx_client, caplog, status, local_tz):
        mock_httpx_client.post.return_value = response(status, {
            "code": 40401, "http": status, "error": "page not found", "link": "https://ntfy.sh/docs",
        })
        dispatcher, notices = make_dispatcher()

        with caplog.at_level(logging.ERROR, logger="note_reminders"):
            assert await dispatcher.notify(INFO) is False

        assert notices == ["Failed to send reminder to external API. Check logs for more details."]
        logged = errors(caplog)
        assert len(logged) == 1
        assert str(status) in logged[0].getMessage()
        assert "page not found" in logged[0].getMessage()
        assert "[code 40401: page not found, see https://ntfy.sh/docs]" in logged[0].getMessage()

    @pytest.mark.asyncio
    async def test_network_error(self, mock_httpx_client, caplog, local_tz):
        mock_httpx_client.post.side_effect = httpx.ConnectError("Connection refused")
        dispatcher, notices = make_dispatcher(additional_headers="Authorization: Bearer secret-token")

        with caplog.at_level(logging.ERROR, logger="note_reminders"):
            assert await dispatcher.notify(INFO) is False

        assert notices == ["Failed to connect to external API: network error."]
        logged = errors(caplog)
        assert len(logged) == 1
        assert "Connection refused" in logged[0].getMessage()
        assert "secret-token" not in logged[0].getMessage()

    @pytest.mark.asyncio
    async def test_unencodable_header_value(self, mock_httpx_client, caplog, local_tz):
        mock_httpx_client.post.side_effect = UnicodeEncodeError(
            "ascii", "Rappel caf\u00e9", 10, 11, "ordinal not in range(128)"
        )
        dispatcher, notices = make_dispatcher(additional_headers="X-Title: Rappel caf\u00e9")

        with caplog.at_level(logging.ERROR, logger="note_reminders"):
            assert await dispatcher.notify(INFO) is False

        assert notices == ["Failed to connect to external API: network error."]
        assert len(errors(caplog)) == 1
