"""Tests for waymark.sitemap — the tracker's route table."""

import pytest

from waymark.errors import ConfigurationError
from waymark.navigation.controller import Outcome
from waymark.navigation.output import MemoryOutput
from waymark.router import Router
from waymark.security.auth import AuthSnapshot, AuthState
from waymark.security.guards import evaluate
from waymark.sitemap import ADMIN, GUEST, PASSWORD_CHANGE, TRACKER_ROUTES, RouteEntry, install

MEMBER = {"id": "1", "role": "member", "must_change_password": False}
ADMIN_USER = {"id": "2", "role": "admin", "must_change_password": False}
NEEDS_NEW_PASSWORD = {"id": "3", "role": "member", "must_change_password": True}


def _views() -> dict:
    def make(name: str):
        def view(params: list[str]) -> str:
            return f"{name}({','.join(params)})"

        return view

    return {entry.view: make(entry.view) for entry in TRACKER_ROUTES}


def _router(user: dict | None = None) -> tuple[Router, MemoryOutput]:
    output = MemoryOutput()
    router = Router(auth=AuthState(user), output=output)
    install(router, _views())
    return router, output


class TestTable:
    def test_login_is_guest_only(self) -> None:
        login = next(e for e in TRACKER_ROUTES if e.pattern == "/login")
        assert login.options is GUEST

    def test_password_page_exempt(self) -> None:
        page = next(e for e in TRACKER_ROUTES if e.pattern == "/force-password-change")
        assert page.options is PASSWORD_CHANGE

    def test_admin_routes(self) -> None:
        admin = [e.pattern for e in TRACKER_ROUTES if e.options is ADMIN]
        assert admin and all(p.startswith("/admin/") for p in admin)

    def test_redirect_targets_do_not_fail_their_own_check(self) -> None:
        by_pattern = {e.pattern: e.options for e in TRACKER_ROUTES}
        anon = AuthSnapshot()
        must_change = AuthSnapshot(is_authenticated=True, must_change_password=True)
        assert evaluate(by_pattern["/login"], anon).allow is True
        assert evaluate(by_pattern["/force-password-change"], must_change).allow is True

    def test_literals_registered_before_params(self) -> None:
        patterns = [e.pattern for e in TRACKER_ROUTES]
        assert patterns.index("/tickets/new") < patterns.index("/tickets/:id")
        assert patterns.index("/sprints/:id/board") < patterns.index("/sprints/:id")
        assert patterns.index("/admin/users/new") < patterns.index("/admin/users/:id")


class TestInstall:
    def test_registers_every_entry_in_order(self) -> None:
        router, _ = _router()
        assert [r.pattern for r in router.routes] == [e.pattern for e in TRACKER_ROUTES]
        assert router.routes[0].name == "login"

    def test_missing_view_rejected_before_registration(self) -> None:
        router = Router(auth=AuthState())
        views = _views()
        del views["sprints.board"]

        with pytest.raises(ConfigurationError, match="sprints.board"):
            install(router, views)
        assert router.routes == ()

    def test_custom_table(self) -> None:
        router = Router(auth=AuthState())
        entries = (RouteEntry("/", "home"),)
        routes = install(router, {"home": lambda params: "home"}, entries)
        assert [r.pattern for r in routes] == ["/"]


class TestNavigation:
    @pytest.mark.anyio
    async def test_new_ticket_goes_to_form(self) -> None:
        router, output = _router(MEMBER)
        await router.navigate("/tickets/new")
        assert output.content == "tickets.new()"

    @pytest.mark.anyio
    async def test_ticket_edit(self) -> None:
        router, output = _router(MEMBER)
        await router.navigate("/tickets/12/edit")
        assert output.content == "tickets.edit(12)"

    @pytest.mark.anyio
    async def test_sprint_board(self) -> None:
        router, output = _router(MEMBER)
        await router.navigate("/sprints/4/board")
        assert output.content == "sprints.board(4)"

    @pytest.mark.anyio
    async def test_anonymous_sent_to_login(self) -> None:
        router, output = _router()
        result = await router.navigate("/epics/2")
        assert result.path == "/login"
        assert output.content == "login()"

    @pytest.mark.anyio
    async def test_member_denied_admin(self) -> None:
        router, output = _router(MEMBER)
        result = await router.navigate("/admin/users/5/edit")
        assert result.path == "/"
        assert output.content == "tickets.list()"

    @pytest.mark.anyio
    async def test_admin_user_detail(self) -> None:
        router, output = _router(ADMIN_USER)
        await router.navigate("/admin/users/5")
        assert output.content == "admin.users.detail(5)"

    @pytest.mark.anyio
    async def test_pending_password_change_can_reach_password_page_only(self) -> None:
        router, output = _router(NEEDS_NEW_PASSWORD)
        result = await router.navigate("/settings")
        assert result.path == "/force-password-change"
        assert output.content == "password.change()"

    @pytest.mark.anyio
    async def test_unknown_path_not_found(self) -> None:
        router, _ = _router(MEMBER)
        result = await router.navigate("/projects")
        assert result.outcome is Outcome.NOT_FOUND
