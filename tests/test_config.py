"""Tests for waymark.config — RouterConfig frozen dataclass."""

import pytest

from waymark.config import RouterConfig
from waymark.errors import ConfigurationError


class TestRouterConfig:
    def test_defaults(self) -> None:
        cfg = RouterConfig()

        assert cfg.login_path == "/login"
        assert cfg.home_path == "/"
        assert cfg.password_change_path == "/force-password-change"
        assert cfg.max_redirects == 5
        assert cfg.param_marker == ":"
        assert cfg.debug is False
        assert cfg.autoescape is True

    def test_override(self) -> None:
        cfg = RouterConfig(login_path="/sign-in", max_redirects=2, debug=True)

        assert cfg.login_path == "/sign-in"
        assert cfg.max_redirects == 2
        assert cfg.debug is True

    def test_frozen(self) -> None:
        cfg = RouterConfig()

        with pytest.raises(AttributeError):
            cfg.debug = True  # type: ignore[misc]

    def test_defaults_validate(self) -> None:
        RouterConfig().validate()

    def test_negative_max_redirects(self) -> None:
        with pytest.raises(ConfigurationError, match="max_redirects"):
            RouterConfig(max_redirects=-1).validate()

    def test_zero_max_redirects_allowed(self) -> None:
        RouterConfig(max_redirects=0).validate()

    @pytest.mark.parametrize("marker", ["", "/"])
    def test_bad_param_marker(self, marker: str) -> None:
        with pytest.raises(ConfigurationError, match="param_marker"):
            RouterConfig(param_marker=marker).validate()

    def test_relative_redirect_path(self) -> None:
        with pytest.raises(ConfigurationError, match="login_path"):
            RouterConfig(login_path="login").validate()
