"""Note reminders: schedule reminders from a front matter checkbox.

Toggling the remind-me checkbox on prompts for a delay, writes a
RemindDate back into the document and optionally forwards the reminder to
an external notification service.
"""

from .types import (
    DelayOption,
    DocumentRef,
    NotificationAccepted,
    NotificationRejected,
    NotificationResult,
    ReminderInfo,
    Transition,
    parse_notification_response,
)
from .config import DELAY_OPTIONS, REMIND_DATE_KEY
from .dates import calculate_remind_date, format_event_date, parse_event_date
from .delay_selector import DelaySelector, PromptState
from .folders import normalize_folder, suggest_folders
from .host import Host
from .notifier import NotificationDispatcher
from .orchestrator import ReminderOrchestrator, create_orchestrator, document_uri
from .settings import ReminderSettings, SettingsError, load_settings, save_settings
from .state import SchedulingGuard, ToggleStateTracker
from .store import ReminderStore

__all__ = [
    "DelayOption",
    "DocumentRef",
    "NotificationAccepted",
    "NotificationRejected",
    "NotificationResult",
    "ReminderInfo",
    "Transition",
    "parse_notification_response",
    "DELAY_OPTIONS",
    "REMIND_DATE_KEY",
    "calculate_remind_date",
    "format_event_date",
    "parse_event_date",
    "DelaySelector",
    "PromptState",
    "normalize_folder",
    "suggest_folders",
    "Host",
    "NotificationDispatcher",
    "ReminderOrchestrator",
    "create_orchestrator",
    "document_uri",
    "ReminderSettings",
    "SettingsError",
    "load_settings",
    "save_settings",
    "SchedulingGuard",
    "ToggleStateTracker",
    "ReminderStore",
]
