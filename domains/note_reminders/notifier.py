"""Forward reminders to an external notification service (e.g. ntfy).

This only hands the reminder over. Delivering it at the right time,
deduplication and retries are the receiving side's job, helped by the
fingerprint in the payload.
"""

import hashlib
from typing import Callable, Optional

import httpx

from logger import logger
from utils.log_sanitizer import sanitize_for_log, sanitize_headers
from .config import NTFY_TAGS, NTFY_TOPIC
from .dates import format_event_date, to_epoch_millis
from .settings import ReminderSettings
from .types import (
    NotificationAccepted,
    NotificationRejected,
    NotificationResult,
    ReminderInfo,
    parse_notification_response,
)


def is_valid_endpoint(endpoint: str) -> bool:
    """Check that the endpoint is an absolute http(s) URL."""
    if not endpoint:
        return False
    try:
        url = httpx.URL(endpoint)
    except (httpx.InvalidURL, TypeError):
        return False
    return url.is_absolute_url and url.scheme in ("http", "https") and bool(url.host)


def parse_header_values(custom_headers: str) -> dict[str, str]:
    """Parse 'Key: Value' lines. Blank or malformed lines are skipped."""
    headers: dict[str, str] = {}
    for line in (custom_headers or "").splitlines():
        key, sep, value = line.partition(":")
        key, value = key.strip(), value.strip()
        if sep and key and value:
            headers[key] = value
    return headers


def reminder_fingerprint(info: ReminderInfo) -> str:
    """MD5 of document link + event date, for downstream deduplication."""
    return hashlib.md5((info.document_uri + info.event_date).encode("utf-8")).hexdigest()


def build_payload(info: ReminderInfo) -> dict:
    """JSON body sent to the notification service."""
    return {
        "topic": NTFY_TOPIC,
        "message": f"Happening on {format_event_date(info.event_date)}",
        "title": f"Reminder : {info.document_title}",
        "tags": list(NTFY_TAGS),
        "click": info.document_uri,
        "delay": to_epoch_millis(info.remind_date),
        "reminderInfo": {
            "event_date": info.event_date,
            "remind_date": info.remind_date,
            "file_title": info.document_title,
            "hash": reminder_fingerprint(info),
        },
    }


def _decode_body(response: httpx.Response) -> Optional[NotificationResult]:
    try:
        return parse_notification_response(response.json())
    except (ValueError, TypeError):
        return None


class NotificationDispatcher:
    """Sends ReminderInfo to the configured endpoint."""

    def __init__(self, settings: ReminderSettings, show_notice: Callable[[str], None]):
        self.settings = settings
        self.show_notice = show_notice

    async def notify(self, info: ReminderInfo) -> bool:
        """Send a reminder to the external API.

        Args:
            info: Reminder information

        Returns:
            True if the service accepted it, False if disabled or failed
        """
        if not self.settings.send_reminder_to_external_api:
            return False

        if not is_valid_endpoint(self.settings.api_endpoint):
            logger.error(f"Invalid API endpoint configured: {self.settings.api_endpoint!r}")
            self.show_notice("Cannot send reminder info, invalid API endpoint configured.")
            return False

        headers = parse_header_values(self.settings.additional_headers)
        headers["Content-Type"] = "application/json"
        payload = build_payload(info)

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.settings.api_endpoint,
                    headers=headers,
                    json=payload,
                )
        except httpx.HTTPError as e:
            logger.error(
                f"Failed to connect to external API {self.settings.api_endpoint}: {e} "
                f"(headers: {sanitize_headers(headers)})"
            )
            self.show_notice("Failed to connect to external API: network error.")
            return False
        except Exception as e:
            logger.error(
                f"Failed to send request to external API {self.settings.api_endpoint}: {e} "
                f"(headers: {sanitize_headers(headers)})"
            )
            self.show_notice("Failed to connect to external API: network error.")
            return False

        if 200 <= response.status_code < 300:
            self._log_acknowledgement(info, _decode_body(response))
            return True

        result = _decode_body(response)
        detail = ""
        if isinstance(result, NotificationRejected):
            detail = f" [code {result.code}: {result.error}"
            if result.link:
                detail += f", see {result.link}"
            detail += "]"
        logger.error(
            f"API returned status {response.status_code}{detail}: "
            f"{sanitize_for_log(response.text)}"
        )
        self.show_notice("Failed to send reminder to external API. Check logs for more details.")
        return False

    def _log_acknowledgement(self, info: ReminderInfo, result: Optional[NotificationResult]) -> None:
        if isinstance(result, NotificationAccepted):
            logger.info(f"Reminder for {info.document_path} accepted as {result.id} (topic {result.topic})")
        elif isinstance(result, NotificationRejected):
            logger.warning(f"API reported error with success status: {result.code} {result.error}")
        else:
            logger.info(f"Reminder for {info.document_path} sent to external API")
