"""Tests for waymark.navigation.active — nav-bar active links."""

import pytest

from waymark.navigation.active import ActiveLinks, is_active_link
from waymark.router import Router
from waymark.security.auth import AuthState

NAV = ["/", "/tickets", "/sprints", "/admin/users", "/settings"]


@pytest.mark.parametrize(
    ("href", "pathname", "active"),
    [
        ("/", "/", True),
        ("/", "/tickets", False),
        ("/tickets", "/tickets", True),
        ("/tickets", "/tickets/42/edit", True),
        ("/tickets", "/sprints", False),
        ("/admin/users", "/admin/users/7", True),
    ],
)
def test_is_active_link(href: str, pathname: str, active: bool) -> None:
    assert is_active_link(href, pathname) is active


class TestActiveLinks:
    def test_starts_empty(self) -> None:
        assert ActiveLinks(NAV).active == frozenset()

    def test_update(self) -> None:
        links = ActiveLinks(NAV)
        assert links.update("/sprints/3/board") == frozenset({"/sprints"})
        assert links.update("/") == frozenset({"/"})

    def test_empty_pathname_is_root(self) -> None:
        assert ActiveLinks(NAV).update("") == frozenset({"/"})

    @pytest.mark.anyio
    async def test_follows_route_changes(self) -> None:
        router = Router(auth=AuthState())
        router.add_route("/", lambda params: "home")
        router.add_route("/tickets/:id", lambda params: "ticket")
        links = ActiveLinks(NAV)
        router.on_route_change(links)

        await router.navigate("/tickets/9")
        assert links.active == frozenset({"/tickets"})

        await router.navigate("/")
        assert links.active == frozenset({"/"})
