"""Global configuration for Note Reminders."""

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

# Base directory for logs and persisted settings
NOTE_REMINDERS_HOME = Path(
    os.getenv("NOTE_REMINDERS_HOME", Path.home() / ".note-reminders")
)

# Vault name used when building obsidian:// document links
VAULT_NAME = os.getenv("NOTE_REMINDERS_VAULT", "vault")

# Persisted user settings (JSON)
SETTINGS_FILE = Path(
    os.getenv("NOTE_REMINDERS_SETTINGS", NOTE_REMINDERS_HOME / "settings.json")
)

# Logging
LOG_LEVEL = os.getenv("NOTE_REMINDERS_LOG_LEVEL", "INFO").upper()
LOG_RETENTION_DAYS = int(os.getenv("NOTE_REMINDERS_LOG_RETENTION_DAYS", 14))  # 0 keeps everything
LOG_DIR = NOTE_REMINDERS_HOME / "logs"
LOG_DIR.mkdir(parents=True, exist_ok=True)
