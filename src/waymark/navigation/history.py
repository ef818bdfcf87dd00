"""History capability.

The controller only needs to read the current location and to push or
replace entries. A browser host binds these to the history API; the
in-memory ``MemoryHistory`` serves headless hosts and tests.
"""

from typing import Protocol, runtime_checkable

from waymark.navigation.events import HistoryPopped


@runtime_checkable
class History(Protocol):
    """What the navigation controller needs from a history implementation."""

    @property
    def location(self) -> str: ...

    def push(self, path: str) -> None: ...

    def replace(self, path: str) -> None: ...


class _EventSink(Protocol):
    def send_nowait(self, event: HistoryPopped) -> None: ...


class MemoryHistory:
    """An in-memory history stack.

    ``push`` drops any forward entries, like a browser does. ``back`` and
    ``forward`` move through the stack and, when an event sink is
    attached, publish a ``HistoryPopped`` event the way a browser fires
    ``popstate``.

    Usage::

        history = MemoryHistory("/tickets")
        history.push("/tickets/42")
        history.back()      # True
        history.location    # "/tickets"
    """

    __slots__ = ("_entries", "_index", "_sink")

    def __init__(self, initial: str = "/", *, sink: _EventSink | None = None) -> None:
        self._entries: list[str] = [initial]
        self._index = 0
        self._sink = sink

    @property
    def location(self) -> str:
        return self._entries[self._index]

    @property
    def entries(self) -> tuple[str, ...]:
        return tuple(self._entries)

    @property
    def index(self) -> int:
        return self._index

    def attach(self, sink: _EventSink | None) -> None:
        """Publish back/forward moves to *sink* (``None`` detaches)."""
        self._sink = sink

    def push(self, path: str) -> None:
        del self._entries[self._index + 1 :]
        self._entries.append(path)
        self._index += 1

    def replace(self, path: str) -> None:
        self._entries[self._index] = path

    def back(self) -> bool:
        """Move one entry back. Returns ``False`` at the start of history."""
        return self.go(-1)

    def forward(self) -> bool:
        """Move one entry forward. Returns ``False`` at the end of history."""
        return self.go(1)

    def go(self, delta: int) -> bool:
        target = self._index + delta
        if delta == 0 or not 0 <= target < len(self._entries):
            return False
        self._index = target
        if self._sink is not None:
            self._sink.send_nowait(HistoryPopped(location=self.location))
        return True

    def __repr__(self) -> str:
        return f"<MemoryHistory {self.location!r} ({self._index + 1}/{len(self._entries)})>"
