"""Route, RouteMatch, and AccessOptions frozen dataclasses."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, fields
from typing import Any

from waymark.errors import ConfigurationError

# A view handler receives the matched parameters, in pattern order, and
# returns the content for the view-output region (or None if it wrote
# nothing). It may be sync or async.
type RouteHandler = Callable[[list[str]], Any]


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route pattern.

    Literal:  ``/tickets``  (is_param=False)
    Param:    ``/:id``      (is_param=True)
    """

    value: str
    is_param: bool = False


@dataclass(frozen=True, slots=True)
class AccessOptions:
    """Access requirements checked before a route's handler runs.

    Attributes:
        require_auth: The user must be authenticated.
        require_admin: The user must be an authenticated admin.
        guest_only: The user must NOT be authenticated.
        allow_password_change: Exempts the route from the forced
            password-change redirect.
    """

    require_auth: bool = False
    require_admin: bool = False
    guest_only: bool = False
    allow_password_change: bool = False

    @classmethod
    def from_mapping(cls, options: Mapping[str, bool]) -> AccessOptions:
        """Build options from a plain mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            msg = (
                f"Unknown access option(s): {', '.join(unknown)}. "
                f"Expected any of: {', '.join(sorted(known))}."
            )
            raise ConfigurationError(msg)
        for key, value in options.items():
            if not isinstance(value, bool):
                msg = f"Access option {key!r} must be a bool, got {type(value).__name__}"
                raise ConfigurationError(msg)
        return cls(**options)


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    Created at registration, immutable afterward.
    """

    pattern: str
    handler: RouteHandler
    options: AccessOptions = AccessOptions()
    segments: tuple[PathSegment, ...] = ()
    name: str | None = None

    @property
    def param_count(self) -> int:
        return sum(1 for seg in self.segments if seg.is_param)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match.

    ``params`` are ordered left to right by the position of the parameter
    segments in the pattern, never by name.
    """

    route: Route
    params: tuple[str, ...] = ()
