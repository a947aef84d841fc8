"""Capabilities the reminder engine needs from the note-taking host."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Optional

if TYPE_CHECKING:
    from .delay_selector import DelaySelector

Metadata = dict[str, Any]
Unsubscribe = Callable[[], None]

ChangedCallback = Callable[[str, Optional[Metadata]], None]
RenamedCallback = Callable[[str, str], None]  # (new_path, old_path)
DeletedCallback = Callable[[str], None]
OpenedCallback = Callable[[str], None]


class Host(ABC):
    """Document store, metadata index and UI of the host application."""

    @property
    @abstractmethod
    def vault_name(self) -> str:
        """Name of the vault, used in document links."""
        pass

    @abstractmethod
    def get_metadata(self, path: str) -> Optional[Metadata]:
        """Current parsed front matter of a document (None if absent)."""
        pass

    @abstractmethod
    async def write_metadata(self, path: str, mutator: Callable[[Metadata], None]) -> None:
        """Atomically read, mutate in place and write back front matter."""
        pass

    @abstractmethod
    def on_changed(self, callback: ChangedCallback) -> Unsubscribe:
        """Subscribe to metadata changes."""
        pass

    @abstractmethod
    def on_renamed(self, callback: RenamedCallback) -> Unsubscribe:
        """Subscribe to document renames."""
        pass

    @abstractmethod
    def on_deleted(self, callback: DeletedCallback) -> Unsubscribe:
        """Subscribe to document deletions."""
        pass

    def on_opened(self, callback: OpenedCallback) -> Unsubscribe:
        """Subscribe to documents being opened (optional)."""
        return lambda: None

    @abstractmethod
    def show_notice(self, message: str) -> None:
        """Show a transient message to the user."""
        pass

    @abstractmethod
    def present_delay_prompt(self, selector: "DelaySelector") -> None:
        """Render the delay prompt.

        The host reports the outcome through ``selector.choose()`` and
        ``selector.close()``, in either order.
        """
        pass
