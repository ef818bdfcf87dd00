"""The ticket tracker's route table.

Order matters: literal routes such as ``/tickets/new`` are registered
before ``/tickets/:id`` so the first-match rule sends them to the form
view instead of the detail view.

Usage::

    install(router, {
        "login": login_view,
        "tickets.list": tickets_list_view,
        ...
    })
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol

from waymark.errors import ConfigurationError
from waymark.routing.route import AccessOptions, Route, RouteHandler

GUEST = AccessOptions(guest_only=True)
MEMBER = AccessOptions(require_auth=True)
ADMIN = AccessOptions(require_auth=True, require_admin=True)
PASSWORD_CHANGE = AccessOptions(require_auth=True, allow_password_change=True)


@dataclass(frozen=True, slots=True)
class RouteEntry:
    """One row of a route table: pattern, view name, access options."""

    pattern: str
    view: str
    options: AccessOptions = MEMBER


TRACKER_ROUTES: tuple[RouteEntry, ...] = (
    RouteEntry("/login", "login", GUEST),
    RouteEntry("/force-password-change", "password.change", PASSWORD_CHANGE),
    RouteEntry("/", "tickets.list"),
    RouteEntry("/tickets", "tickets.list"),
    RouteEntry("/tickets/new", "tickets.new"),
    RouteEntry("/tickets/:id/edit", "tickets.edit"),
    RouteEntry("/tickets/:id", "tickets.detail"),
    RouteEntry("/epics", "epics.list"),
    RouteEntry("/epics/new", "epics.new"),
    RouteEntry("/epics/:id/edit", "epics.edit"),
    RouteEntry("/epics/:id", "epics.detail"),
    RouteEntry("/sprints", "sprints.list"),
    RouteEntry("/sprints/new", "sprints.new"),
    RouteEntry("/sprints/:id/board", "sprints.board"),
    RouteEntry("/sprints/:id/report", "sprints.report"),
    RouteEntry("/sprints/:id/edit", "sprints.edit"),
    RouteEntry("/sprints/:id", "sprints.detail"),
    RouteEntry("/settings", "settings"),
    RouteEntry("/admin/users", "admin.users.list", ADMIN),
    RouteEntry("/admin/users/new", "admin.users.new", ADMIN),
    RouteEntry("/admin/users/:id/edit", "admin.users.edit", ADMIN),
    RouteEntry("/admin/users/:id", "admin.users.detail", ADMIN),
)


class _RouteRegistry(Protocol):
    """Anything with the router's ``add_route`` signature."""

    def add_route(
        self,
        pattern: str,
        handler: RouteHandler,
        options: AccessOptions | None = None,
        *,
        name: str | None = None,
    ) -> Route: ...


def install(
    router: _RouteRegistry,
    views: Mapping[str, RouteHandler],
    routes: tuple[RouteEntry, ...] = TRACKER_ROUTES,
) -> list[Route]:
    """Register *routes* on *router*, looking each view up by name.

    Every view the table names must be present in *views*; the check
    runs before anything is registered.
    """
    missing = sorted({entry.view for entry in routes} - set(views))
    if missing:
        msg = f"Route table names views that were not provided: {', '.join(missing)}"
        raise ConfigurationError(msg)

    return [
        router.add_route(entry.pattern, views[entry.view], entry.options, name=entry.view)
        for entry in routes
    ]
