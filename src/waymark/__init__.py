"""Waymark — client-side navigation router for single-page apps.

Maps paths to view handlers, runs access guards (authentication,
admin-only, guest-only, forced password change) before any handler, and
keeps history in step with what is on screen.

Basic usage::

    from waymark import AuthState, Router

    auth = AuthState()
    router = Router(auth=auth)

    router.add_route("/login", login_view, {"guest_only": True})

    @router.route("/tickets/:id", require_auth=True)
    async def ticket_detail(params):
        return f"<h1>Ticket {params[0]}</h1>"

    await router.start()
"""

__version__ = "0.1.0-dev"
__all__ = [
    "AccessOptions",
    "AuthSnapshot",
    "AuthState",
    "ConfigurationError",
    "HistorySync",
    "MemoryHistory",
    "MemoryOutput",
    "NavigationResult",
    "Outcome",
    "RedirectLimitExceeded",
    "RouteChange",
    "Router",
    "RouterConfig",
    "WaymarkError",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import waymark`` fast while providing a clean top-level API.
    """
    if name == "Router":
        from waymark.router import Router

        return Router

    if name == "RouterConfig":
        from waymark.config import RouterConfig

        return RouterConfig

    if name == "AccessOptions":
        from waymark.routing.route import AccessOptions

        return AccessOptions

    if name in ("AuthSnapshot", "AuthState"):
        from waymark.security import auth as _auth

        return getattr(_auth, name)

    if name in ("HistorySync", "MemoryHistory", "MemoryOutput", "NavigationResult", "Outcome", "RouteChange"):
        from waymark import navigation as _nav

        return getattr(_nav, name)

    if name in ("ConfigurationError", "RedirectLimitExceeded", "WaymarkError"):
        from waymark import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
