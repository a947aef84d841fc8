"""Interactive delay prompt.

The host UI closes the prompt *before* it reports which item was picked.
To avoid resolving with "nothing picked" on every selection, ``close()``
does not resolve directly. It schedules resolution for the next loop
iteration, by which time a pick delivered in the same turn has been
recorded.

Execution order for a pick:
1. ``close()`` runs and schedules ``_resolve``
2. ``choose(option)`` runs and records the pick
3. ``_resolve`` runs and completes the future with the pick
"""

import asyncio
from enum import Enum
from typing import Callable, Optional, Sequence

from logger import logger
from .config import DELAY_OPTIONS
from .types import DelayOption


class PromptState(Enum):
    """Delay prompt states."""
    OPEN = "open"
    CLOSED = "closed"


class DelaySelector:
    """Single-choice prompt over the fixed delay options.

    Usage:
        selector = DelaySelector(host.present_delay_prompt)
        option = await selector.open_and_wait()
        if option is None:
            # dismissed
    """

    def __init__(
        self,
        present: Callable[["DelaySelector"], None],
        options: Sequence[DelayOption] = DELAY_OPTIONS,
    ):
        self._present = present
        self._options = tuple(options)
        self._state = PromptState.OPEN
        self._chosen: Optional[DelayOption] = None
        self._future: Optional[asyncio.Future] = None

    @property
    def options(self) -> tuple[DelayOption, ...]:
        return self._options

    @property
    def state(self) -> PromptState:
        return self._state

    def item_text(self, option: DelayOption) -> str:
        return option.label

    def choose(self, option: DelayOption) -> None:
        """Record the user's pick."""
        if option not in self._options:
            raise ValueError(f"Not a delay option: {option!r}")

        if self._future is not None and self._future.done():
            logger.debug(f"Ignoring late delay pick: {option.label}")
            return

        self._chosen = option

    def close(self) -> None:
        """Close the prompt; the result is delivered on the next loop turn."""
        if self._state is PromptState.CLOSED:
            return
        self._state = PromptState.CLOSED

        if self._future is None:
            # Closed before anyone waited: resolve as soon as someone does
            return
        self._future.get_loop().call_soon(self._resolve)

    def _resolve(self) -> None:
        if self._future is not None and not self._future.done():
            self._future.set_result(self._chosen)

    async def open_and_wait(self) -> Optional[DelayOption]:
        """Present the prompt and wait for a pick or a dismissal.

        Returns:
            The chosen DelayOption, or None if dismissed
        """
        if self._future is not None:
            raise RuntimeError("Delay prompt already opened")

        loop = asyncio.get_running_loop()
        self._future = loop.create_future()

        if self._state is PromptState.CLOSED:
            loop.call_soon(self._resolve)
        else:
            self._present(self)

        return await self._future
