"""HistorySync — turn platform events into controller navigations.

Two bindings:

- A ``LinkActivated`` event whose href is root-relative (``/...``, but
  not protocol-relative ``//host``) is intercepted: its default action is
  prevented and the router navigates to the href instead of loading a
  new page.
- A ``HistoryPopped`` event (back/forward) resolves the current location
  without pushing a new history entry.

The platform is abstracted as an async iterable of events. A browser
host feeds its click/popstate listeners into one; ``MemoryEventSource``
is an anyio memory-stream source for in-process hosts and tests::

    source = MemoryEventSource()
    history = MemoryHistory(sink=source)

    async with anyio.create_task_group() as tg:
        tg.start_soon(router.sync().run, source)
        source.send_nowait(LinkActivated("/tickets/42"))
        ...
        source.close()
"""

import logging
from collections.abc import AsyncIterable, AsyncIterator, Awaitable, Callable
from typing import Any

import anyio
from anyio.streams.memory import (
    MemoryObjectReceiveStream,
    MemoryObjectSendStream,
    MemoryObjectStreamStatistics,
)

from waymark.navigation.events import HistoryPopped, LinkActivated, PlatformEvent

logger = logging.getLogger("waymark.navigation")

type Navigate = Callable[[str | None], Awaitable[Any]]


def is_in_app_link(href: str | None) -> bool:
    """Whether a link should be handled by the router instead of the platform."""
    if not href:
        return False
    return href.startswith("/") and not href.startswith("//")


class HistorySync:
    """Binds platform navigation events to a ``navigate`` callable.

    Usage::

        sync = HistorySync(router.navigate)
        await sync.handle(LinkActivated("/sprints"))   # True, navigated
        await sync.handle(HistoryPopped())             # True, resolved location
    """

    __slots__ = ("_navigate",)

    def __init__(self, navigate: Navigate) -> None:
        self._navigate = navigate

    def intercepts(self, event: PlatformEvent) -> bool:
        """Whether *event* becomes a router navigation."""
        match event:
            case LinkActivated(href=href, default_prevented=prevented):
                return not prevented and is_in_app_link(href)
            case HistoryPopped():
                return True
        return False

    async def handle(self, event: PlatformEvent) -> bool:
        """Dispatch one event. Returns ``True`` if it was turned into a navigation."""
        if not self.intercepts(event):
            return False
        match event:
            case LinkActivated(href=href):
                event.prevent_default()
                logger.debug("Intercepted link to %s", href)
                await self._navigate(href)
            case HistoryPopped():
                await self._navigate(None)
        return True

    async def run(self, source: AsyncIterable[PlatformEvent]) -> None:
        """Consume *source* until it closes.

        Each event is dispatched in its own task, so a slow navigation
        never delays the next one.
        """
        async with anyio.create_task_group() as tg:
            async for event in source:
                tg.start_soon(self.handle, event)


class MemoryEventSource:
    """An in-process platform event source backed by an anyio memory stream."""

    __slots__ = ("_receive", "_send")

    def __init__(self, max_buffer_size: float = float("inf")) -> None:
        send: MemoryObjectSendStream[PlatformEvent]
        receive: MemoryObjectReceiveStream[PlatformEvent]
        send, receive = anyio.create_memory_object_stream(max_buffer_size)
        self._send = send
        self._receive = receive

    def send_nowait(self, event: PlatformEvent) -> None:
        self._send.send_nowait(event)

    async def send(self, event: PlatformEvent) -> None:
        await self._send.send(event)

    def close(self) -> None:
        """Stop the source; ``HistorySync.run`` returns once drained."""
        self._send.close()

    async def aclose(self) -> None:
        """Close both ends, dropping any undelivered events."""
        await self._send.aclose()
        await self._receive.aclose()

    def statistics(self) -> MemoryObjectStreamStatistics:
        return self._send.statistics()

    async def __aiter__(self) -> AsyncIterator[PlatformEvent]:
        with self._receive:
            async for event in self._receive:
                yield event
