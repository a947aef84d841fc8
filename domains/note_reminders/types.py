"""Type definitions for Note Reminders."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePosixPath
from typing import Any, Literal, Optional, Union


class Transition(str, Enum):
    """Classification of a toggle update."""
    ACTIVATE = "activate"      # off/unknown -> on
    DEACTIVATE = "deactivate"  # on -> off
    NONE = "none"


@dataclass(frozen=True)
class DelayOption:
    """One entry of the delay prompt."""
    offset: int  # signed day count relative to the event
    label: str


@dataclass(frozen=True)
class DocumentRef:
    """A document in the vault, identified by its vault-relative path."""
    path: str

    @property
    def basename(self) -> str:
        return PurePosixPath(self.path).stem

    @property
    def extension(self) -> str:
        return PurePosixPath(self.path).suffix.lstrip(".").lower()


@dataclass(frozen=True)
class ReminderInfo:
    """Everything known about one scheduled reminder."""
    event_date: str   # ISO-8601 as found in front matter
    remind_date: str  # ISO-8601 with local offset
    document_title: str
    document_path: str
    document_uri: str


@dataclass(frozen=True)
class NotificationAccepted:
    """Acknowledgement returned by ntfy for a published message."""
    id: str
    time: int
    expires: Optional[int] = None
    event: str = ""
    topic: str = ""
    title: str = ""
    message: str = ""
    tags: list[str] = field(default_factory=list)
    click: str = ""
    kind: Literal["accepted"] = "accepted"


@dataclass(frozen=True)
class NotificationRejected:
    """Error body returned by ntfy."""
    code: int
    error: str
    http: Optional[int] = None
    link: Optional[str] = None
    kind: Literal["rejected"] = "rejected"


NotificationResult = Union[NotificationAccepted, NotificationRejected]


def parse_notification_response(data: Any) -> Optional[NotificationResult]:
    """Turn a decoded response body into a NotificationResult.

    A body with ``id`` and ``time`` is an acknowledgement, one with ``code``
    and ``error`` is a rejection. Anything else is unrecognised.
    """
    if not isinstance(data, dict):
        return None

    if "id" in data and "time" in data:
        return NotificationAccepted(
            id=str(data["id"]),
            time=int(data["time"]),
            expires=data.get("expires"),
            event=data.get("event", ""),
            topic=data.get("topic", ""),
            title=data.get("title", ""),
            message=data.get("message", ""),
            tags=list(data.get("tags") or []),
            click=data.get("click", ""),
        )

    if "code" in data and "error" in data:
        return NotificationRejected(
            code=int(data["code"]),
            error=str(data["error"]),
            http=data.get("http"),
            link=data.get("link"),
        )

    return None
