"""Navigation controller — resolve a path, run guards, render a view.

One ``navigate()`` call walks this state machine::

    IDLE → RESOLVING → (REDIRECTING → RESOLVING)* → RENDERING → IDLE

Resolution is synchronous: match the path, evaluate the guards, and on a
denial replace the history entry with the redirect target and resolve
again. The loop is bounded by ``RouterConfig.max_redirects``; blowing the
bound renders the error view instead of looping forever.

Only the handler call suspends. Navigations are not serialized, so every
call takes a generation number and a handler that settles after a newer
navigation has started is dropped: it writes nothing and notifies
nobody.
"""

import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from kida import Environment

from waymark._internal.invoke import invoke
from waymark.config import RouterConfig
from waymark.errors import RedirectLimitExceeded, WaymarkError
from waymark.navigation.events import RouteChange
from waymark.navigation.history import History, MemoryHistory
from waymark.navigation.output import (
    ErrorHandler,
    MemoryOutput,
    ViewOutput,
    call_error_handler,
    minimal_kida_env,
    render_error,
    render_not_found,
)
from waymark.routing.route import Route, RouteMatch
from waymark.routing.table import RouteTable
from waymark.security.audit import emit_security_event
from waymark.security.auth import AuthProvider
from waymark.security.guards import check_access

logger = logging.getLogger("waymark.navigation")

type RouteObserver = Callable[[RouteChange], None | Awaitable[None]]


class NavigationState(Enum):
    IDLE = "idle"
    RESOLVING = "resolving"
    REDIRECTING = "redirecting"
    RENDERING = "rendering"


class Outcome(Enum):
    RENDERED = "rendered"
    NOT_FOUND = "not_found"
    ERROR = "error"
    STALE = "stale"


@dataclass(frozen=True, slots=True)
class NavigationResult:
    """What a single ``navigate()`` call ended up doing."""

    outcome: Outcome
    path: str
    generation: int
    route: Route | None = None
    params: tuple[str, ...] = ()
    redirects: tuple[str, ...] = field(default_factory=tuple)
    error: BaseException | None = None

    @property
    def redirected(self) -> bool:
        return bool(self.redirects)


def location_path(location: str) -> str:
    """The path part of a location, without query string or fragment."""
    return location.partition("#")[0].partition("?")[0] or "/"


class NavigationController:
    """Drives navigations against a route table.

    Usage::

        controller = NavigationController(table, auth)
        result = await controller.navigate("/tickets/42")
        result.outcome   # Outcome.RENDERED
        result.params    # ("42",)
    """

    __slots__ = (
        "_current",
        "_error_handlers",
        "_generation",
        "_kida_env",
        "_observers",
        "_state",
        "_table",
        "auth",
        "config",
        "history",
        "output",
    )

    def __init__(
        self,
        table: RouteTable,
        auth: AuthProvider,
        *,
        config: RouterConfig | None = None,
        history: History | None = None,
        output: ViewOutput | None = None,
        error_handlers: Mapping[int, ErrorHandler] | None = None,
        kida_env: Environment | None = None,
    ) -> None:
        self.config: RouterConfig = config or RouterConfig()
        self.auth = auth
        self.history: History = history if history is not None else MemoryHistory()
        self.output: ViewOutput = output if output is not None else MemoryOutput()
        self._table = table
        self._error_handlers: Mapping[int, ErrorHandler] = (
            error_handlers if error_handlers is not None else {}
        )
        self._kida_env = kida_env
        self._observers: list[RouteObserver] = []
        self._generation = 0
        self._state = NavigationState.IDLE
        self._current: RouteMatch | None = None

    # -- Observable state --

    @property
    def state(self) -> NavigationState:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def current(self) -> RouteMatch | None:
        """The route (and params) most recently chosen for rendering."""
        return self._current

    def on_route_change(self, observer: RouteObserver) -> Callable[[], None]:
        """Subscribe to post-render notifications; returns an unsubscribe function."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    # -- Navigation --

    async def navigate(self, path: str | None = None) -> NavigationResult:
        """Navigate to *path*, or resolve the current location when ``None``.

        A given path gets a new history entry first. Never raises for
        routing outcomes; inspect the returned ``NavigationResult``.
        """
        self._generation += 1
        generation = self._generation

        if path is not None:
            self.history.push(path)
            target = path
        else:
            target = self.history.location

        self._state = NavigationState.RESOLVING
        requested = target
        redirects: list[str] = []

        while True:
            pathname = location_path(target)
            match = self._table.match(pathname)
            if match is None:
                return await self._not_found(generation, pathname, tuple(redirects))

            decision = check_access(match.route.options, self.auth, self.config, path=pathname)
            if decision.allow:
                break

            redirect_to = decision.redirect_to
            if redirect_to is None:
                self._state = NavigationState.IDLE
                msg = f"Guard {decision.rule!r} denied {pathname} without a redirect target"
                raise WaymarkError(msg)
            redirects.append(redirect_to)
            if len(redirects) > self.config.max_redirects:
                exc = RedirectLimitExceeded(
                    path=requested,
                    redirects=tuple(redirects),
                    limit=self.config.max_redirects,
                )
                logger.error("%s", exc)
                emit_security_event(
                    "navigation.redirect_limit",
                    path=requested,
                    details={"redirects": list(redirects)},
                )
                return await self._failed(generation, pathname, exc, tuple(redirects))

            self._state = NavigationState.REDIRECTING
            self.history.replace(redirect_to)
            target = redirect_to
            self._state = NavigationState.RESOLVING

        self._current = match
        self._state = NavigationState.RENDERING

        try:
            content = await invoke(match.route.handler, list(match.params))
        except Exception as exc:
            if generation != self._generation:
                logger.debug("Discarding failure of stale navigation to %s", pathname)
                return self._stale(generation, pathname, match, tuple(redirects))
            logger.exception("View handler for %s failed", pathname)
            return await self._failed(generation, pathname, exc, tuple(redirects), match=match)

        if generation != self._generation:
            logger.debug(
                "Discarding stale render of %s (generation %d, current %d)",
                pathname,
                generation,
                self._generation,
            )
            return self._stale(generation, pathname, match, tuple(redirects))

        if content is not None:
            self.output.render(str(content))
        self._state = NavigationState.IDLE

        await self._notify(RouteChange(
            path=pathname,
            route=match.route,
            params=match.params,
            generation=generation,
        ))
        return NavigationResult(
            outcome=Outcome.RENDERED,
            path=pathname,
            generation=generation,
            route=match.route,
            params=match.params,
            redirects=tuple(redirects),
        )

    # -- Internal --

    def _env(self) -> Environment:
        if self._kida_env is None:
            self._kida_env = minimal_kida_env(self.config)
        return self._kida_env

    def _stale(
        self,
        generation: int,
        pathname: str,
        match: RouteMatch,
        redirects: tuple[str, ...],
    ) -> NavigationResult:
        return NavigationResult(
            outcome=Outcome.STALE,
            path=pathname,
            generation=generation,
            route=match.route,
            params=match.params,
            redirects=redirects,
        )

    async def _not_found(
        self,
        generation: int,
        pathname: str,
        redirects: tuple[str, ...],
    ) -> NavigationResult:
        logger.debug("No route matches %s", pathname)
        self._current = None
        handler = self._error_handlers.get(404)
        if handler is None:
            self.output.render(render_not_found(self._env(), pathname))
        else:
            self._state = NavigationState.RENDERING
            try:
                content = await call_error_handler(handler, pathname, None)
            except Exception as exc:
                if generation != self._generation:
                    return NavigationResult(Outcome.STALE, pathname, generation, redirects=redirects)
                logger.exception("Not-found view for %s failed", pathname)
                return await self._failed(generation, pathname, exc, redirects)
            if generation != self._generation:
                return NavigationResult(Outcome.STALE, pathname, generation, redirects=redirects)
            if content is not None:
                self.output.render(str(content))
        self._state = NavigationState.IDLE
        return NavigationResult(Outcome.NOT_FOUND, pathname, generation, redirects=redirects)

    async def _failed(
        self,
        generation: int,
        pathname: str,
        exc: BaseException,
        redirects: tuple[str, ...],
        *,
        match: RouteMatch | None = None,
    ) -> NavigationResult:
        content: Any = None
        handler = self._error_handlers.get(500)
        if handler is not None:
            try:
                content = await call_error_handler(handler, pathname, exc)
            except Exception:
                logger.exception("Error view for %s failed", pathname)
                content = render_error(self._env(), exc, debug=self.config.debug)
        else:
            content = render_error(self._env(), exc, debug=self.config.debug)

        if generation != self._generation:
            return NavigationResult(Outcome.STALE, pathname, generation, redirects=redirects, error=exc)

        if content is not None:
            self.output.render(str(content))
        self._state = NavigationState.IDLE
        return NavigationResult(
            outcome=Outcome.ERROR,
            path=pathname,
            generation=generation,
            route=match.route if match else None,
            params=match.params if match else (),
            redirects=redirects,
            error=exc,
        )

    async def _notify(self, change: RouteChange) -> None:
        for observer in list(self._observers):
            try:
                await invoke(observer, change)
            except Exception:
                logger.exception("Route-change observer %r failed", observer)
