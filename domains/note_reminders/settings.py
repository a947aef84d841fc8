"""Persisted user settings for Note Reminders.

Settings live in a small JSON file. Missing keys fall back to defaults and
unknown keys are dropped, so older or newer files still load.
"""

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path

from logger import logger
from .folders import normalize_folder


class SettingsError(Exception):
    """Raised when the settings file exists but cannot be used."""


@dataclass
class ReminderSettings:
    """User-editable settings."""
    default_folder: str = "/"
    date_format: str = "YYYY-MM-DD"
    frontmatter_date_key: str = "Date"
    frontmatter_remind_me_key: str = "RemindMe"
    send_reminder_to_external_api: bool = False
    api_endpoint: str = "https://example.com/notifyme"
    ntfy_topic: str = "sample-topic"
    additional_headers: str = ""

    def __post_init__(self) -> None:
        self.default_folder = normalize_folder(self.default_folder)

    def update(self, **changes) -> None:
        """Apply changes from the settings screen."""
        known = {f.name for f in fields(self)}
        for key, value in changes.items():
            if key not in known:
                raise KeyError(f"Unknown setting: {key}")
            setattr(self, key, value)
        self.default_folder = normalize_folder(self.default_folder)


def load_settings(path: Path) -> ReminderSettings:
    """Load settings, merging the stored values over the defaults.

    Args:
        path: JSON settings file

    Returns:
        ReminderSettings (defaults if the file does not exist)

    Raises:
        SettingsError: If the file is unreadable or not a JSON object
    """
    if not path.exists():
        logger.info(f"No settings file at {path}, using defaults")
        return ReminderSettings()

    try:
        stored = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise SettingsError(f"Cannot read settings from {path}: {e}") from e

    if not isinstance(stored, dict):
        raise SettingsError(f"Settings file {path} must contain a JSON object")

    known = {f.name for f in fields(ReminderSettings)}
    ignored = sorted(set(stored) - known)
    if ignored:
        logger.warning(f"Ignoring unknown settings: {', '.join(ignored)}")

    return ReminderSettings(**{k: v for k, v in stored.items() if k in known})


def save_settings(settings: ReminderSettings, path: Path) -> None:
    """Write settings to disk."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(settings), indent=2), encoding="utf-8")
    logger.debug(f"Saved settings to {path}")
