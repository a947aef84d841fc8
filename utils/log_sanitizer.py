"""Log sanitizer - removes credentials from log messages.

Custom API headers and notification service responses can carry tokens.
Everything that leaves the process for a log file goes through here first.
"""

import re
from typing import Mapping, Union

# Patterns to detect and redact sensitive data
SENSITIVE_PATTERNS = [
    # API keys, tokens, secrets in key=value or key: value format
    (r'(password|secret|token|api_key|apikey|x-api-key|auth|credential)["\s:=]+[^\s,}"\']{8,}',
     r'\1=[REDACTED]'),

    # Bearer / Basic credentials
    (r'(Bearer|Basic)\s+[A-Za-z0-9\-_\.=+/]+', r'\1 [REDACTED]'),

    # ntfy access tokens
    (r'\btk_[A-Za-z0-9]{20,}\b', '[NTFY_TOKEN]'),

    # JWT tokens (three base64 segments separated by dots)
    (r'eyJ[A-Za-z0-9\-_]+\.eyJ[A-Za-z0-9\-_]+\.[A-Za-z0-9\-_]+', '[JWT_TOKEN]'),

    # Generic long alphanumeric strings that look like keys (40+ chars)
    (r'\b[A-Za-z0-9]{40,}\b', '[LONG_TOKEN]'),
]

# Header names whose values are never logged
SENSITIVE_HEADERS = {"authorization", "proxy-authorization", "cookie", "x-api-key"}

_COMPILED_PATTERNS = [(re.compile(p, re.IGNORECASE), r) for p, r in SENSITIVE_PATTERNS]


def sanitize_log(text: str) -> str:
    """Remove credentials from text for safe logging.

    Args:
        text: The text to sanitize

    Returns:
        Sanitized text with sensitive data replaced by placeholders
    """
    if not text:
        return text

    result = text
    for pattern, replacement in _COMPILED_PATTERNS:
        result = pattern.sub(replacement, result)

    return result


def sanitize_for_log(value: Union[str, bytes, None], max_length: int = 200) -> str:
    """Sanitize and truncate a value for logging.

    Args:
        value: The value to sanitize (string or bytes)
        max_length: Maximum length of returned string

    Returns:
        Sanitized, truncated string safe for logging
    """
    if value is None:
        return "<None>"

    if isinstance(value, bytes):
        text = value.decode('utf-8', errors='replace')
    else:
        text = str(value)

    sanitized = sanitize_log(text)

    if len(sanitized) > max_length:
        return sanitized[:max_length] + f"... [{len(text)} chars total]"

    return sanitized


def sanitize_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Mask values of credential-bearing headers.

    Args:
        headers: Header name to value mapping

    Returns:
        Copy of the headers with sensitive values replaced
    """
    return {
        name: "[REDACTED]" if name.lower() in SENSITIVE_HEADERS else sanitize_log(value)
        for name, value in headers.items()
    }
