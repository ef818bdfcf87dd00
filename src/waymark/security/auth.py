"""Auth provider protocol, snapshots, and an in-memory auth state.

The router never authenticates anyone. It reads three facts from an
injected provider each time it evaluates guards::

    provider.is_authenticated()  -> bool
    provider.is_admin()          -> bool
    provider.get_user()          -> user | None   # carries must_change_password

``AuthState`` is a ready-made provider for hosts that keep the current
user in memory (the REST login/refresh flow sets and clears it)::

    auth = AuthState()
    router = Router(auth=auth)

    auth.set_user({"id": "7", "role": "admin", "must_change_password": False})
    await router.navigate("/admin/users")

    auth.clear()
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

# ---------------------------------------------------------------------------
# Provider protocol
# ---------------------------------------------------------------------------


@runtime_checkable
class AuthProvider(Protocol):
    """Minimal auth protocol consumed by the guards.

    Any object with these three methods satisfies it. Hosts bring their
    own session manager.
    """

    def is_authenticated(self) -> bool: ...

    def is_admin(self) -> bool: ...

    def get_user(self) -> Any | None: ...


def _user_flag(user: Any, name: str) -> bool:
    """Read a boolean flag from a user mapping or object."""
    if user is None:
        return False
    if isinstance(user, Mapping):
        return bool(user.get(name, False))
    return bool(getattr(user, name, False))


# ---------------------------------------------------------------------------
# Snapshot
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class AuthSnapshot:
    """The auth facts guards are evaluated against.

    Captured fresh for every guard evaluation; never mutated by the router.
    """

    is_authenticated: bool = False
    is_admin: bool = False
    must_change_password: bool = False

    @classmethod
    def capture(cls, provider: AuthProvider) -> AuthSnapshot:
        """Read the current facts from *provider*."""
        return cls(
            is_authenticated=bool(provider.is_authenticated()),
            is_admin=bool(provider.is_admin()),
            must_change_password=_user_flag(provider.get_user(), "must_change_password"),
        )


ANONYMOUS = AuthSnapshot()


# ---------------------------------------------------------------------------
# In-memory provider
# ---------------------------------------------------------------------------

type AuthListener = Callable[[Any | None], None]


class AuthState:
    """In-memory ``AuthProvider`` with change notification.

    A user is any mapping or object; ``role == "admin"`` marks an admin
    and ``must_change_password`` forces the password-change redirect.
    Listeners are called with the new user (or ``None``) after every
    change, in subscription order.
    """

    __slots__ = ("_listeners", "_user")

    def __init__(self, user: Any | None = None) -> None:
        self._user = user
        self._listeners: list[AuthListener] = []

    def is_authenticated(self) -> bool:
        return self._user is not None

    def is_admin(self) -> bool:
        if self._user is None:
            return False
        if isinstance(self._user, Mapping):
            return self._user.get("role") == "admin"
        return getattr(self._user, "role", None) == "admin"

    def get_user(self) -> Any | None:
        return self._user

    def set_user(self, user: Any) -> None:
        """Mark *user* as signed in and notify listeners."""
        self._user = user
        self._notify()

    def clear(self) -> None:
        """Sign the current user out and notify listeners."""
        self._user = None
        self._notify()

    def subscribe(self, listener: AuthListener) -> Callable[[], None]:
        """Register *listener*; returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._user)
