"""Security utilities — route guards, auth providers, and audit events.

Guards::

    from waymark.security import AuthSnapshot, evaluate

    decision = evaluate(route.options, AuthSnapshot(is_authenticated=False))
    decision.redirect_to  # "/login"

In-memory auth provider::

    from waymark.security import AuthState

    auth = AuthState()
    auth.set_user({"id": "1", "role": "member"})
"""

from waymark.security.audit import SecurityEvent, emit_security_event, set_security_event_sink
from waymark.security.auth import AuthProvider, AuthSnapshot, AuthState
from waymark.security.guards import GuardDecision, check_access, evaluate

__all__ = [
    "AuthProvider",
    "AuthSnapshot",
    "AuthState",
    "GuardDecision",
    "SecurityEvent",
    "check_access",
    "emit_security_event",
    "evaluate",
    "set_security_event_sink",
]
