"""Shared pytest fixtures for waymark tests.

Every test gets its own auth state, history, output region, and router,
so no state leaks between tests.
"""

import pytest

from waymark.navigation.history import MemoryHistory
from waymark.navigation.output import MemoryOutput
from waymark.router import Router
from waymark.security.auth import AuthState


@pytest.fixture
def auth() -> AuthState:
    return AuthState()


@pytest.fixture
def history() -> MemoryHistory:
    return MemoryHistory("/")


@pytest.fixture
def output() -> MemoryOutput:
    return MemoryOutput()


@pytest.fixture
def router(auth: AuthState, history: MemoryHistory, output: MemoryOutput) -> Router:
    return Router(auth=auth, history=history, output=output)
