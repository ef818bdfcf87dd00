"""Navigation events.

Frozen dataclasses for the platform events HistorySync listens to, and
for the route-change notification the controller publishes after a
successful render.
"""

from dataclasses import dataclass, field

from waymark.routing.route import Route


@dataclass(slots=True)
class LinkActivated:
    """An anchor element was activated (clicked).

    Mutable on purpose: whoever handles the event marks
    ``default_prevented`` so the host skips the full page load.
    """

    href: str
    default_prevented: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True


@dataclass(frozen=True, slots=True)
class HistoryPopped:
    """The user moved back or forward through history."""

    location: str | None = None


type PlatformEvent = LinkActivated | HistoryPopped


@dataclass(frozen=True, slots=True)
class RouteChange:
    """Published after a route's handler has rendered.

    Subscribers use it for UI state that depends on which route is
    active, such as nav-bar link highlighting.
    """

    path: str
    route: Route
    params: tuple[str, ...] = field(default_factory=tuple)
    generation: int = 0
