"""Router configuration.

RouterConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass

from waymark.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(login_path="/sign-in", max_redirects=3)
    """

    # Guard redirect targets
    login_path: str = "/login"
    home_path: str = "/"
    password_change_path: str = "/force-password-change"

    # Redirects allowed within one navigation before failing safe
    max_redirects: int = 5

    # Pattern segments starting with this marker capture a parameter
    param_marker: str = ":"

    # Built-in views
    debug: bool = False  # Error view shows the exception detail
    autoescape: bool = True

    def validate(self) -> None:
        """Raise ``ConfigurationError`` for values the router cannot use."""
        if self.max_redirects < 0:
            msg = f"max_redirects must be >= 0, got {self.max_redirects}"
            raise ConfigurationError(msg)
        if not self.param_marker or "/" in self.param_marker:
            msg = f"param_marker must be a non-empty string without '/', got {self.param_marker!r}"
            raise ConfigurationError(msg)
        for field_name in ("login_path", "home_path", "password_change_path"):
            value = getattr(self, field_name)
            if not value.startswith("/"):
                msg = f"{field_name} must be root-relative, got {value!r}"
                raise ConfigurationError(msg)
