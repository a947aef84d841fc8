"""Pytest configuration and fixtures."""

import asyncio
import os
import sys
import tempfile
import time
from typing import Optional
from unittest.mock import AsyncMock, patch

import pytest

# Keep logs and settings out of the user's home during tests
os.environ.setdefault("NOTE_REMINDERS_HOME", tempfile.mkdtemp(prefix="note_reminders_"))

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domains.note_reminders.delay_selector import DelaySelector
from domains.note_reminders.host import Host
from domains.note_reminders.orchestrator import ReminderOrchestrator
from domains.note_reminders.settings import ReminderSettings
from domains.note_reminders.types import DelayOption


class FakeHost(Host):
    """In-memory vault that delivers notifications synchronously."""

    def __init__(self, vault_name: str = "My Vault"):
        self._vault_name = vault_name
        self.documents: dict[str, dict] = {}
        self.notices: list[str] = []
        self.prompts: list[DelaySelector] = []
        self.failing_writes: set[str] = set()

        # Delay prompt behaviour: reply automatically (close, then pick) or
        # leave the prompt open for the test to drive
        self.auto_reply = True
        self.reply: Optional[DelayOption] = None

        self._changed = []
        self._renamed = []
        self._deleted = []
        self._opened = []

    @property
    def vault_name(self) -> str:
        return self._vault_name

    def get_metadata(self, path):
        doc = self.documents.get(path)
        return dict(doc) if doc is not None else None

    async def write_metadata(self, path, mutator):
        await asyncio.sleep(0)
        if path in self.failing_writes:
            raise OSError(f"disk full while writing {path}")
        frontmatter = self.documents.setdefault(path, {})
        mutator(frontmatter)
        # The metadata index reports our own writes too
        self.emit_changed(path)

    def on_changed(self, callback):
        return self._subscribe(self._changed, callback)

    def on_renamed(self, callback):
        return self._subscribe(self._renamed, callback)

    def on_deleted(self, callback):
        return self._subscribe(self._deleted, callback)

    def on_opened(self, callback):
        return self._subscribe(self._opened, callback)

    def show_notice(self, message):
        self.notices.append(message)

    def present_delay_prompt(self, selector):
        self.prompts.append(selector)
        if self.auto_reply:
            # The UI toolkit closes the prompt before reporting the pick
            selector.close()
            if self.reply is not None:
                selector.choose(self.reply)

    # --- Test helpers ---

    @staticmethod
    def _subscribe(listeners, callback):
        listeners.append(callback)
        return lambda: listeners.remove(callback)

    @property
    def subscriber_count(self) -> int:
        return len(self._changed) + len(self._renamed) + len(self._deleted) + len(self._opened)

    def emit_changed(self, path) -> list:
        metadata = self.get_metadata(path)
        results = [callback(path, metadata) for callback in list(self._changed)]
        return [r for r in results if r is not None]

    def edit(self, path, **fields) -> list:
        """User edits front matter; returns started operations."""
        self.documents.setdefault(path, {}).update(fields)
        return self.emit_changed(path)

    def rename(self, old_path, new_path) -> None:
        self.documents[new_path] = self.documents.pop(old_path, {})
        for callback in list(self._renamed):
            callback(new_path, old_path)

    def delete(self, path) -> None:
        self.documents.pop(path, None)
        for callback in list(self._deleted):
            callback(path)

    def open(self, path) -> None:
        for callback in list(self._opened):
            callback(path)


async def settle(tasks) -> None:
    """Wait for operations started by FakeHost.edit()."""
    if tasks:
        await asyncio.gather(*tasks)


@pytest.fixture
def local_tz():
    """Pin the process-local timezone for the duration of a test."""
    original = os.environ.get("TZ")

    def _set(name: str) -> None:
        os.environ["TZ"] = name
        time.tzset()

    _set("UTC")
    yield _set

    if original is None:
        os.environ.pop("TZ", None)
    else:
        os.environ["TZ"] = original
    time.tzset()


@pytest.fixture
def settings():
    return ReminderSettings()


@pytest.fixture
def fake_host():
    return FakeHost()


@pytest.fixture
def orchestrator(fake_host, settings):
    orch = ReminderOrchestrator(fake_host, settings)
    orch.start()
    return orch


@pytest.fixture
def mock_httpx_client():
    """Create a mock httpx client."""
    with patch('httpx.AsyncClient') as mock:
        client = AsyncMock()
        mock.return_value.__aenter__.return_value = client
        yield client
