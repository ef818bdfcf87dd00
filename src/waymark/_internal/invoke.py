"""Invoke helpers — call sync or async handlers uniformly.

View handlers, error views, and route-change observers can be ``def`` or
``async def``. Any code that calls a user-provided callable must handle
both cases. This module provides a single helper so the sync/async check
lives in exactly one place.

Usage::

    from waymark._internal.invoke import invoke

    result = await invoke(handler, params)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's a coroutine.

    Works with both sync and async callables::

        # plain function: the return value is used as-is
        def settings_view(params):
            return "<h1>Settings</h1>"

        # coroutine function: awaited before returning
        async def ticket_view(params):
            ticket = await api.get_ticket(params[0])
            return render_ticket(ticket)
    """
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
