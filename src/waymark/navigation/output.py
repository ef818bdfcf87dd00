"""View output region and the built-in not-found and error views.

Every view writes into one output region. The controller writes a
handler's return value there, or one of the fallback views below when
nothing matched or the handler failed.
"""

import inspect
from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

from kida import Environment

from waymark.config import RouterConfig

type ErrorHandler = Callable[..., Any]


@runtime_checkable
class ViewOutput(Protocol):
    """The single region views render into (the ``#view-container`` element)."""

    def render(self, content: str) -> None: ...


class MemoryOutput:
    """A ``ViewOutput`` that keeps what was written.

    ``content`` is the last write; ``writes`` is every write in order.
    """

    __slots__ = ("writes",)

    def __init__(self) -> None:
        self.writes: list[str] = []

    @property
    def content(self) -> str | None:
        return self.writes[-1] if self.writes else None

    def render(self, content: str) -> None:
        self.writes.append(content)


_NOT_FOUND_SOURCE = (
    '<div class="empty-state" data-status="404">'
    "<h2>Page not found</h2>"
    "<p>{{ path }}</p>"
    "</div>"
)

_ERROR_SOURCE = (
    '<div class="empty-state error-state" data-status="500">'
    "<h2>Something went wrong</h2>"
    "{% if detail %}<pre>{{ detail }}</pre>{% endif %}"
    "</div>"
)


def minimal_kida_env(config: RouterConfig) -> Environment:
    """Create a bare kida Environment for the built-in views."""
    return Environment(autoescape=config.autoescape)


def render_not_found(env: Environment, path: str) -> str:
    """Render the built-in not-found view for *path*."""
    tmpl = env.from_string(_NOT_FOUND_SOURCE)
    return tmpl.render({"path": path})


def render_error(env: Environment, exc: BaseException, *, debug: bool) -> str:
    """Render the built-in error view. Exception detail only in debug."""
    detail = f"{type(exc).__name__}: {exc}" if debug else ""
    tmpl = env.from_string(_ERROR_SOURCE)
    return tmpl.render({"detail": detail})


async def call_error_handler(
    handler: ErrorHandler,
    path: str,
    exc: BaseException | None,
) -> Any:
    """Invoke a user-registered error view with introspected arguments.

    Error views may accept zero, one (path), or two (path, exc) args.
    Supports both sync and async error views.
    """
    sig = inspect.signature(handler)
    params = list(sig.parameters.values())

    if len(params) >= 2:
        result = handler(path, exc)
    elif len(params) == 1:
        result = handler(path)
    else:
        result = handler()

    if inspect.isawaitable(result):
        result = await result
    return result
