"""Reminder orchestration: reacts to remind-me toggles in front matter.

Flow per document:
- off/unknown -> on: validate event date, ask for a delay, write
  RemindDate, forward to the external API (best effort)
- on -> off: remove RemindDate

Each admitted toggle runs as its own task. While it runs, further
notifications for the same document are dropped, which also swallows the
echo of our own front matter writes.
"""

import asyncio
from pathlib import Path
from typing import Optional
from urllib.parse import quote

import config as app_config
from logger import logger
from .config import URI_SCHEME
from .dates import calculate_remind_date, parse_event_date
from .delay_selector import DelaySelector
from .host import Host, Metadata, Unsubscribe
from .notifier import NotificationDispatcher
from .settings import ReminderSettings, load_settings, save_settings
from .state import SchedulingGuard, ToggleStateTracker
from .store import ReminderStore
from .types import DocumentRef, ReminderInfo, Transition


def _encode_component(value: str) -> str:
    # Same character set as JavaScript's encodeURIComponent
    return quote(value, safe="!*'()")


def document_uri(vault_name: str, path: str) -> str:
    """Link that opens the document in the host app."""
    return f"{URI_SCHEME}://open?vault={_encode_component(vault_name)}&file={_encode_component(path)}"


class ReminderOrchestrator:
    """Long-lived facade owning toggle state and the scheduling guard."""

    def __init__(
        self,
        host: Host,
        settings: ReminderSettings,
        store: Optional[ReminderStore] = None,
        dispatcher: Optional[NotificationDispatcher] = None,
        settings_path: Optional[Path] = None,
    ):
        self.host = host
        self.settings = settings
        self.settings_path = settings_path
        self.tracker = ToggleStateTracker(settings)
        self.guard = SchedulingGuard()
        self.store = store or ReminderStore(host, settings)
        self.dispatcher = dispatcher or NotificationDispatcher(settings, host.show_notice)

        self._tasks: set[asyncio.Task] = set()
        self._unsubscribers: list[Unsubscribe] = []

    # --- Lifecycle ---

    def start(self) -> None:
        """Subscribe to host notifications."""
        if self._unsubscribers:
            return
        self._unsubscribers = [
            self.host.on_changed(self.on_metadata_changed),
            self.host.on_renamed(self.on_renamed),
            self.host.on_deleted(self.on_deleted),
            self.host.on_opened(self.on_opened),
        ]
        logger.info(f"Note reminders started (source folder: {self.settings.default_folder})")

    async def stop(self) -> None:
        """Unsubscribe, cancel in-flight operations and drop all state."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

        pending = list(self._tasks)
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

        self.tracker.clear()
        self.guard.clear()
        logger.info(f"Note reminders stopped ({len(pending)} operation(s) cancelled)")

    def update_settings(self, **changes) -> None:
        """Apply and persist settings changes."""
        self.settings.update(**changes)
        if self.settings_path is not None:
            save_settings(self.settings, self.settings_path)

    # --- Host notifications ---

    def on_metadata_changed(self, path: str, metadata: Optional[Metadata]) -> Optional[asyncio.Task]:
        """Classify a metadata change and start an operation if needed.

        Must be called from the event loop thread. Returns the started task,
        or None if the change was ignored.
        """
        current = self.tracker.read_flag(path, metadata)
        if current is None:
            return None

        # Claimed before classifying so a guarded change leaves the tracker untouched
        if not self.guard.claim(path):
            logger.debug(f"Ignoring change for {path}: reminder operation in progress")
            return None

        transition = self.tracker.observe(path, current)
        if transition is Transition.NONE:
            self.guard.release(path)
            return None

        if transition is Transition.ACTIVATE:
            operation = self._schedule_reminder(path, dict(metadata or {}))
        else:
            operation = self._cancel_reminder(path)

        task = asyncio.get_running_loop().create_task(operation)
        self._tasks.add(task)
        # Runs on every exit path, even if the task is cancelled before starting
        task.add_done_callback(lambda t: self._finish(path, t))
        return task

    def on_renamed(self, new_path: str, old_path: str) -> None:
        self.tracker.rename(old_path, new_path)

    def on_deleted(self, path: str) -> None:
        self.tracker.forget(path)

    def on_opened(self, path: str) -> None:
        """Seed toggle state; the change stream does not fire on open."""
        current = self.tracker.read_flag(path, self.host.get_metadata(path))
        if current is not None:
            self.tracker.seed(path, current)

    # --- Operations ---

    def _finish(self, path: str, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        self.guard.release(path)

    async def _schedule_reminder(self, path: str, metadata: Metadata) -> None:
        doc = DocumentRef(path)
        date_key = self.settings.frontmatter_date_key

        try:
            event_date = parse_event_date(metadata.get(date_key))
            if event_date is None:
                self.host.show_notice(
                    f'Document {doc.basename} is missing a valid "{date_key}" field '
                    f"(based on the key that was defined in settings)."
                )
                if await self.store.uncheck_reminder(path):
                    # Checkbox is gone; re-checking it must count as a new activation
                    self.tracker.observe(path, False)
                return

            selector = DelaySelector(self.host.present_delay_prompt)
            option = await selector.open_and_wait()
            if option is None:
                logger.info(f"Delay prompt dismissed for {path}, no reminder set")
                return

            remind_date = calculate_remind_date(event_date, option)
            if not await self.store.set_remind_date(path, remind_date):
                return

            info = ReminderInfo(
                event_date=event_date,
                remind_date=remind_date,
                document_title=doc.basename,
                document_path=path,
                document_uri=document_uri(self.host.vault_name, path),
            )
            await self.dispatcher.notify(info)

        except Exception as e:
            logger.error(f"Failed to schedule reminder for {path}: {e}", exc_info=True)
            self.host.show_notice("Failed to schedule reminder.")

    async def _cancel_reminder(self, path: str) -> None:
        await self.store.clear_remind_date(path)


def create_orchestrator(host: Host, settings_path: Optional[Path] = None) -> ReminderOrchestrator:
    """Load settings and build an orchestrator (call start() to subscribe)."""
    settings_path = settings_path or app_config.SETTINGS_FILE
    settings = load_settings(settings_path)
    return ReminderOrchestrator(host, settings, settings_path=settings_path)
