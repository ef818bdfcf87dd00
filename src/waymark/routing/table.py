"""Route table with first-match, registration-order path matching.

Routes are registered during setup and the table freezes when the first
navigation runs. Matching walks the routes in the order they were added,
so an earlier route wins over any later route of the same shape.
"""

from collections.abc import Iterable

from waymark.routing.route import PathSegment, Route, RouteMatch


def split_path(path: str) -> list[str]:
    """Split a path into its non-empty segments.

    Leading, trailing, and repeated slashes are ignored::

        "/"                -> []
        "/tickets/"        -> ["tickets"]
        "//tickets//42"    -> ["tickets", "42"]
    """
    return [part for part in path.split("/") if part]


def parse_path(pattern: str, marker: str = ":") -> tuple[PathSegment, ...]:
    """Parse a route pattern into segments.

    Examples::

        "/tickets"           -> (PathSegment("tickets"),)
        "/tickets/:id"       -> (PathSegment("tickets"), PathSegment(":id", is_param=True))
        "/"                  -> ()
    """
    return tuple(
        PathSegment(value=part, is_param=part.startswith(marker))
        for part in split_path(pattern)
    )


def _match_segments(segments: tuple[PathSegment, ...], parts: list[str]) -> tuple[str, ...] | None:
    if len(segments) != len(parts):
        return None
    params: list[str] = []
    for seg, part in zip(segments, parts, strict=True):
        if seg.is_param:
            params.append(part)
        elif seg.value != part:
            return None
    return tuple(params)


def match_route(routes: Iterable[Route], path: str) -> RouteMatch | None:
    """Return the first route in *routes* that fully matches *path*.

    Segment counts must agree, literal segments must be equal, and
    parameter segments match anything. No prefix or catch-all matching.
    Returns ``None`` when no route matches.
    """
    parts = split_path(path)
    for route in routes:
        params = _match_segments(route.segments, parts)
        if params is not None:
            return RouteMatch(route=route, params=params)
    return None


class RouteTable:
    """Ordered route table.

    Usage::

        table = RouteTable()
        table.add(Route("/tickets/new", new_ticket, segments=parse_path("/tickets/new")))
        table.add(Route("/tickets/:id", ticket, segments=parse_path("/tickets/:id")))
        table.freeze()
        match = table.match("/tickets/42")
    """

    __slots__ = ("_frozen", "_routes")

    def __init__(self) -> None:
        self._routes: list[Route] = []
        self._frozen = False

    def add(self, route: Route) -> None:
        """Add a route to the table. Must be called before freeze()."""
        if self._frozen:
            msg = "Cannot add routes after the router has started navigating."
            raise RuntimeError(msg)
        self._routes.append(route)

    @property
    def routes(self) -> tuple[Route, ...]:
        """All registered routes, in registration order."""
        return tuple(self._routes)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Freeze the table. No more routes can be added."""
        self._frozen = True

    def match(self, path: str) -> RouteMatch | None:
        """Match a path against the table. ``None`` means not found."""
        return match_route(self._routes, path)

    def __len__(self) -> int:
        return len(self._routes)
