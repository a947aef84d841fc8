"""Configuration constants for Note Reminders."""

from typing import Final

from .types import DelayOption

# Front matter key written and cleared by this plugin only
REMIND_DATE_KEY: Final[str] = "RemindDate"

# Reminders always fire at this local hour
REMIND_HOUR: Final[int] = 9

# Only markdown documents carry front matter
SUPPORTED_EXTENSION: Final[str] = "md"

# Document links (obsidian://open?vault=...&file=...)
URI_SCHEME: Final[str] = "obsidian"

# Outbound notification payload
NTFY_TOPIC: Final[str] = "obsidian-calendar-reminder"
NTFY_TAGS: Final[list[str]] = ["alarm_clock"]

# Offsets offered by the delay prompt, in display order
DELAY_OPTIONS: Final[tuple[DelayOption, ...]] = (
    DelayOption(offset=0, label="On day of event (9:00 AM)"),
    DelayOption(offset=-1, label="1 day before (9:00 AM)"),
    DelayOption(offset=-2, label="2 days before (9:00 AM)"),
    DelayOption(offset=-3, label="3 days before (9:00 AM)"),
)
