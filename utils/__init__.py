"""Utility modules for Note Reminders."""

from .log_sanitizer import sanitize_log, sanitize_for_log, sanitize_headers

__all__ = ["sanitize_log", "sanitize_for_log", "sanitize_headers"]
