"""Domain modules for Note Reminders."""
