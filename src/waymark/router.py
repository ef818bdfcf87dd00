"""The waymark router — registration API and navigation entry point."""

import threading
from collections.abc import Callable, Mapping

from kida import Environment

from waymark.config import RouterConfig
from waymark.errors import ConfigurationError
from waymark.navigation.controller import (
    NavigationController,
    NavigationResult,
    NavigationState,
    RouteObserver,
)
from waymark.navigation.history import History
from waymark.navigation.output import ErrorHandler, ViewOutput
from waymark.navigation.sync import HistorySync
from waymark.routing.route import AccessOptions, Route, RouteHandler
from waymark.routing.table import RouteTable, parse_path
from waymark.security.auth import AuthProvider

_ERROR_CODES = frozenset({404, 500})


class Router:
    """The waymark router.

    Mutable during setup (route registration, error views).
    Frozen when the first navigation runs.

    Thread safety:
        The setup phase is single-threaded (registration at startup).
        The freeze transition uses a Lock + double-check so exactly one
        caller freezes the route table.

    Usage::

        auth = AuthState()
        router = Router(auth=auth)

        router.add_route("/login", login_view, {"guest_only": True})

        @router.route("/tickets/:id", require_auth=True)
        async def ticket_detail(params):
            ...

        await router.start()
    """

    __slots__ = (
        "_controller",
        "_error_handlers",
        "_freeze_lock",
        "_frozen",
        "_table",
        "config",
    )

    def __init__(
        self,
        config: RouterConfig | None = None,
        *,
        auth: AuthProvider,
        history: History | None = None,
        output: ViewOutput | None = None,
        kida_env: Environment | None = None,
    ) -> None:
        self.config: RouterConfig = config or RouterConfig()
        self.config.validate()
        self._table = RouteTable()
        self._error_handlers: dict[int, ErrorHandler] = {}
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()
        self._controller = NavigationController(
            self._table,
            auth,
            config=self.config,
            history=history,
            output=output,
            error_handlers=self._error_handlers,
            kida_env=kida_env,
        )

    # -- Route registration --

    def add_route(
        self,
        pattern: str,
        handler: RouteHandler,
        options: AccessOptions | Mapping[str, bool] | None = None,
        *,
        name: str | None = None,
    ) -> Route:
        """Register a route. Earlier registrations win over later ones.

        Args:
            pattern: Path pattern. Segments starting with ``:`` capture
                parameters, e.g. ``/tickets/:id``.
            handler: Called with the captured params (a list, in pattern
                order). Sync or async; its return value is rendered.
            options: ``AccessOptions`` or a mapping with any of
                ``require_auth``, ``require_admin``, ``guest_only``,
                ``allow_password_change``. All default to False.
            name: Optional route name for introspection.
        """
        self._check_not_frozen()
        if not pattern.startswith("/"):
            msg = f"Route pattern must be root-relative, got {pattern!r}"
            raise ConfigurationError(msg)
        if not callable(handler):
            msg = f"Handler for {pattern!r} is not callable: {handler!r}"
            raise ConfigurationError(msg)

        if options is None:
            access = AccessOptions()
        elif isinstance(options, AccessOptions):
            access = options
        else:
            access = AccessOptions.from_mapping(options)

        route = Route(
            pattern=pattern,
            handler=handler,
            options=access,
            segments=parse_path(pattern, self.config.param_marker),
            name=name,
        )
        self._table.add(route)
        return route

    def route(
        self,
        pattern: str,
        *,
        name: str | None = None,
        **options: bool,
    ) -> Callable[[RouteHandler], RouteHandler]:
        """Register a route handler via decorator.

        Keyword options are the ``AccessOptions`` fields::

            @router.route("/admin/users", require_auth=True, require_admin=True)
            def users(params): ...
        """

        def decorator(func: RouteHandler) -> RouteHandler:
            self.add_route(pattern, func, options, name=name)
            return func

        return decorator

    def error(self, code: int) -> Callable[[ErrorHandler], ErrorHandler]:
        """Register the not-found (404) or error (500) view.

        The view may take no arguments, ``(path)``, or ``(path, exc)``::

            @router.error(404)
            def not_found(path):
                return f"<h2>No page at {path}</h2>"
        """
        if code not in _ERROR_CODES:
            msg = f"Only 404 and 500 views can be registered, got {code}"
            raise ConfigurationError(msg)

        def decorator(func: ErrorHandler) -> ErrorHandler:
            self._check_not_frozen()
            self._error_handlers[code] = func
            return func

        return decorator

    def on_route_change(self, observer: RouteObserver) -> Callable[[], None]:
        """Subscribe to post-render notifications; returns an unsubscribe function."""
        return self._controller.on_route_change(observer)

    # -- Navigation --

    async def navigate(self, path: str | None = None) -> NavigationResult:
        """Navigate to *path* (new history entry), or resolve the current location."""
        self._ensure_frozen()
        return await self._controller.navigate(path)

    async def start(self) -> NavigationResult:
        """Initial navigation at application start.

        Anonymous visitors outside the login page go straight to login;
        everyone else resolves the current location.
        """
        controller = self._controller
        if not controller.auth.is_authenticated() and "login" not in controller.history.location:
            return await self.navigate(self.config.login_path)
        return await self.navigate()

    def sync(self) -> HistorySync:
        """A ``HistorySync`` bound to this router."""
        return HistorySync(self.navigate)

    # -- Introspection --

    @property
    def routes(self) -> tuple[Route, ...]:
        return self._table.routes

    @property
    def controller(self) -> NavigationController:
        return self._controller

    @property
    def state(self) -> NavigationState:
        return self._controller.state

    @property
    def current_route(self) -> Route | None:
        current = self._controller.current
        return current.route if current else None

    @property
    def current_params(self) -> list[str]:
        current = self._controller.current
        return list(current.params) if current else []

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Freeze once, with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._table.freeze()
            self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the router after it has started navigating. "
                "Register routes and error views before the first navigate()."
            )
            raise RuntimeError(msg)

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "setup"
        return f"<Router {len(self._table)} routes ({state})>"
