"""Per-document toggle tracking and re-entrancy guard."""

from typing import Optional

from logger import logger
from .folders import is_in_folder
from .host import Metadata
from .settings import ReminderSettings
from .config import SUPPORTED_EXTENSION
from .types import DocumentRef, Transition


class ToggleStateTracker:
    """Remembers the last observed remind-me value per document path.

    A path with no entry has never been observed, which is not the same as
    an observed False.
    """

    def __init__(self, settings: ReminderSettings):
        self.settings = settings
        self._values: dict[str, bool] = {}

    def read_flag(self, path: str, metadata: Optional[Metadata]) -> Optional[bool]:
        """Extract the remind-me flag, or None when it does not apply."""
        doc = DocumentRef(path)
        if doc.extension != SUPPORTED_EXTENSION:
            return None

        if not is_in_folder(path, self.settings.default_folder):
            return None

        if not metadata:
            return None

        value = metadata.get(self.settings.frontmatter_remind_me_key)
        if not isinstance(value, bool):
            return None

        return value

    def observe(self, path: str, current: bool) -> Transition:
        """Classify an update against the tracked value, then record it."""
        previous = self._values.get(path)
        self._values[path] = current

        if current and not previous:
            return Transition.ACTIVATE
        if previous and not current:
            return Transition.DEACTIVATE
        return Transition.NONE

    def seed(self, path: str, current: bool) -> None:
        """Record a value only if the path has never been observed."""
        self._values.setdefault(path, current)

    def get(self, path: str) -> Optional[bool]:
        return self._values.get(path)

    def forget(self, path: str) -> None:
        self._values.pop(path, None)

    def rename(self, old_path: str, new_path: str) -> None:
        if old_path in self._values:
            self._values[new_path] = self._values.pop(old_path)
            logger.debug(f"Moved toggle state {old_path} -> {new_path}")

    def clear(self) -> None:
        self._values.clear()

    def __contains__(self, path: str) -> bool:
        return path in self._values

    def __len__(self) -> int:
        return len(self._values)


class SchedulingGuard:
    """Set of document paths with an operation in flight."""

    def __init__(self):
        self._busy: set[str] = set()

    def claim(self, path: str) -> bool:
        """Claim a path. Returns False if it is already busy.

        Check and insert happen without yielding to the event loop.
        """
        if path in self._busy:
            return False
        self._busy.add(path)
        return True

    def release(self, path: str) -> None:
        self._busy.discard(path)

    def clear(self) -> None:
        self._busy.clear()

    def __contains__(self, path: str) -> bool:
        return path in self._busy

    def __len__(self) -> int:
        return len(self._busy)
