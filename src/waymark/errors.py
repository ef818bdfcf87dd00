"""Waymark exception hierarchy.

Shared across the route table, guards, controller, and router facade so
every module raises and catches the same types.

Unmatched paths and guard denials are not errors: they resolve to the
not-found view and to redirects respectively.
"""

from dataclasses import dataclass


class WaymarkError(Exception):
    """Base for all waymark-specific errors."""


class ConfigurationError(WaymarkError):
    """Raised when router configuration is invalid.

    Typically raised at registration time: unknown access options,
    a malformed pattern, or a route table naming a view that was not
    provided.
    """


@dataclass(frozen=True, slots=True)
class RedirectLimitExceeded(WaymarkError):
    """Guard redirects kept bouncing within a single navigation.

    Raised inside the controller when a route table sends a navigation
    through more redirects than ``RouterConfig.max_redirects`` allows.
    The controller renders the error view with it instead of looping.
    """

    path: str
    redirects: tuple[str, ...]
    limit: int

    def __str__(self) -> str:
        chain = " -> ".join((self.path, *self.redirects))
        return f"Redirect limit ({self.limit}) exceeded: {chain}"
