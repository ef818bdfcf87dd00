"""Navigation — the controller, history binding, and platform capabilities.

The controller resolves paths against the route table, runs guards,
and renders views. ``HistorySync`` turns link clicks and back/forward
moves into controller navigations.
"""

from waymark.navigation.active import ActiveLinks, is_active_link
from waymark.navigation.controller import (
    NavigationController,
    NavigationResult,
    NavigationState,
    Outcome,
)
from waymark.navigation.events import HistoryPopped, LinkActivated, RouteChange
from waymark.navigation.history import History, MemoryHistory
from waymark.navigation.output import MemoryOutput, ViewOutput
from waymark.navigation.sync import HistorySync, MemoryEventSource

__all__ = [
    "ActiveLinks",
    "History",
    "HistoryPopped",
    "HistorySync",
    "LinkActivated",
    "MemoryEventSource",
    "MemoryHistory",
    "MemoryOutput",
    "NavigationController",
    "NavigationResult",
    "NavigationState",
    "Outcome",
    "RouteChange",
    "ViewOutput",
    "is_active_link",
]
