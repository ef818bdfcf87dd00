"""Nav-bar active-link tracking.

The home link is active only on ``/``; any other link is active when the
current path starts with its href, so ``/tickets`` stays highlighted on
``/tickets/42/edit``.

Usage::

    links = ActiveLinks(["/", "/tickets", "/sprints", "/settings"])
    router.on_route_change(links)
    ...
    links.active   # frozenset({"/tickets"})
"""

from collections.abc import Iterable

from waymark.navigation.events import RouteChange


def is_active_link(href: str, pathname: str) -> bool:
    """Whether a nav link with *href* should be highlighted on *pathname*."""
    if href == "/":
        return pathname == "/"
    return pathname.startswith(href)


class ActiveLinks:
    """Route-change observer holding the set of active nav hrefs."""

    __slots__ = ("_active", "hrefs")

    def __init__(self, hrefs: Iterable[str]) -> None:
        self.hrefs: tuple[str, ...] = tuple(hrefs)
        self._active: frozenset[str] = frozenset()

    @property
    def active(self) -> frozenset[str]:
        return self._active

    def update(self, pathname: str) -> frozenset[str]:
        self._active = frozenset(h for h in self.hrefs if is_active_link(h, pathname or "/"))
        return self._active

    def __call__(self, change: RouteChange) -> None:
        self.update(change.path)
