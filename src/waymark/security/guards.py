"""Route guards — access checks that run before any view handler.

``evaluate()`` is a pure function of a route's ``AccessOptions``, an
``AuthSnapshot``, and the ``RouterConfig``. The checks run in a fixed
order and the first failing one decides the redirect:

1. ``require_auth`` and not authenticated        → login path
2. ``require_auth`` and authenticated and must change password
   and not ``allow_password_change``             → password-change path
3. ``require_admin`` and not admin               → home path
4. ``guest_only`` and authenticated              → home path

The login route must be ``guest_only`` and the password-change route
``require_auth`` + ``allow_password_change``, so a redirect to either
never fails the same check again.

Usage::

    decision = evaluate(route.options, AuthSnapshot.capture(auth), config)
    if not decision.allow:
        ...  # resolve decision.redirect_to instead
"""

import logging
from dataclasses import dataclass
from typing import Any

from waymark.config import RouterConfig
from waymark.routing.route import AccessOptions
from waymark.security.audit import emit_security_event
from waymark.security.auth import AuthProvider, AuthSnapshot

_log = logging.getLogger("waymark.security")


@dataclass(frozen=True, slots=True)
class GuardDecision:
    """Outcome of guard evaluation.

    ``rule`` names the check that failed (``require_auth``,
    ``password_change``, ``require_admin``, ``guest_only``).
    """

    allow: bool
    redirect_to: str | None = None
    rule: str | None = None


ALLOW = GuardDecision(allow=True)


def _deny(redirect_to: str, rule: str) -> GuardDecision:
    return GuardDecision(allow=False, redirect_to=redirect_to, rule=rule)


def evaluate(
    options: AccessOptions,
    auth: AuthSnapshot,
    config: RouterConfig | None = None,
) -> GuardDecision:
    """Run the guards in order; the first failing check wins."""
    cfg = config or RouterConfig()

    if options.require_auth and not auth.is_authenticated:
        return _deny(cfg.login_path, "require_auth")

    if (
        options.require_auth
        and auth.is_authenticated
        and auth.must_change_password
        and not options.allow_password_change
    ):
        return _deny(cfg.password_change_path, "password_change")

    if options.require_admin and not auth.is_admin:
        return _deny(cfg.home_path, "require_admin")

    if options.guest_only and auth.is_authenticated:
        return _deny(cfg.home_path, "guest_only")

    return ALLOW


def check_access(
    options: AccessOptions,
    provider: AuthProvider,
    config: RouterConfig,
    *,
    path: str,
) -> GuardDecision:
    """Capture a fresh snapshot from *provider* and evaluate the guards.

    Denials are logged and emitted as ``guard.redirect`` audit events.
    """
    decision = evaluate(options, AuthSnapshot.capture(provider), config)
    if not decision.allow:
        user: Any | None = provider.get_user()
        _log.debug(
            "Guard %s denied %s, redirecting to %s",
            decision.rule,
            path,
            decision.redirect_to,
        )
        emit_security_event(
            "guard.redirect",
            path=path,
            user=user,
            details={"rule": decision.rule, "redirect_to": decision.redirect_to},
        )
    return decision
