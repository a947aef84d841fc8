"""Front matter persistence for reminders.

Each operation is one atomic read-modify-write through the host. Failures
are logged and shown to the user, never raised.
"""

from logger import logger
from .config import REMIND_DATE_KEY
from .host import Host, Metadata
from .settings import ReminderSettings


class ReminderStore:
    """Reads and writes reminder fields in a document's front matter."""

    def __init__(self, host: Host, settings: ReminderSettings):
        self.host = host
        self.settings = settings

    async def set_remind_date(self, path: str, remind_date: str) -> bool:
        """Write the reminder date.

        Args:
            path: Document path
            remind_date: ISO-8601 reminder timestamp

        Returns:
            True if written successfully
        """
        def mutate(frontmatter: Metadata) -> None:
            frontmatter[REMIND_DATE_KEY] = remind_date

        try:
            await self.host.write_metadata(path, mutate)
            logger.info(f"Set {REMIND_DATE_KEY}={remind_date} on {path}")
            return True
        except Exception as e:
            logger.error(f"Failed to set reminder date on {path}: {e}")
            self.host.show_notice("Failed to set reminder date.")
            return False

    async def clear_remind_date(self, path: str) -> bool:
        """Remove the reminder date (no-op if absent).

        Args:
            path: Document path

        Returns:
            True if the field is absent afterwards
        """
        def mutate(frontmatter: Metadata) -> None:
            frontmatter.pop(REMIND_DATE_KEY, None)

        try:
            await self.host.write_metadata(path, mutate)
            logger.info(f"Cleared {REMIND_DATE_KEY} on {path}")
            return True
        except Exception as e:
            logger.error(f"Failed to remove reminder date on {path}: {e}")
            self.host.show_notice("Failed to remove reminder.")
            return False

    async def uncheck_reminder(self, path: str) -> bool:
        """Remove the remind-me checkbox so the user can set it again."""
        key = self.settings.frontmatter_remind_me_key

        def mutate(frontmatter: Metadata) -> None:
            frontmatter.pop(key, None)

        try:
            await self.host.write_metadata(path, mutate)
            logger.info(f"Reset {key} on {path}")
            return True
        except Exception as e:
            logger.error(f"Failed to reset {key} checkbox on {path}: {e}")
            self.host.show_notice("Failed to uncheck remind-me checkbox.")
            return False
