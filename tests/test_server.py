"""Tests for perch.server — route table host, init hooks, URL building."""

import logging
from typing import Any

import pytest

from perch.config import PerchConfig
from perch.endpoint import EndpointDefinition
from perch.methods import MethodSet
from perch.routing.route import join_path
from perch.routing.table import RouteTable
from perch.server import RestServer, get_server, set_server


def _handler(request: Any = None) -> str:
    return "ok"


def _definition(methods: str = "GET") -> EndpointDefinition:
    return EndpointDefinition(methods=MethodSet.parse(methods), callback=_handler)


class TestJoinPath:
    def test_basic(self) -> None:
        assert join_path("demo/v1", "/items") == "/demo/v1/items"

    def test_collapses_namespace_trailing_slash(self) -> None:
        assert join_path("demo/v1/", "/items") == "/demo/v1/items"

    def test_route_without_slash(self) -> None:
        assert join_path("demo/v1", "items") == "/demo/v1/items"

    def test_collapses_repeated_leading_slashes(self) -> None:
        assert join_path("demo/v1", "//items") == "/demo/v1/items"

    def test_empty_namespace(self) -> None:
        assert join_path("", "/items") == "/items"

    def test_empty_route(self) -> None:
        assert join_path("demo/v1", "") == "/demo/v1"


class TestRouteTable:
    def test_add_and_get(self) -> None:
        server = RestServer()
        server.register_route("demo/v1", "/items", _definition("GET,POST"))
        route = server.lookup("demo/v1", "/items")
        assert sorted(route) == ["GET", "POST"]

    def test_same_verb_replaced(self) -> None:
        server = RestServer()
        first = _definition()
        second = _definition()
        server.register_route("demo/v1", "/items", first)
        server.register_route("demo/v1", "/items", second)
        assert len(server.routes) == 1
        assert server.routes[0].definition is second

    def test_different_verbs_coexist(self) -> None:
        server = RestServer()
        server.register_route("demo/v1", "/items", _definition("GET"))
        server.register_route("demo/v1", "/items", _definition("DELETE"))
        assert len(server.routes) == 2
        assert sorted(server.lookup("demo/v1", "/items")) == ["DELETE", "GET"]

    def test_add_after_compile_raises(self) -> None:
        table = RouteTable()
        table.compile()
        server = RestServer()
        server.register_route("demo/v1", "/x", _definition())
        with pytest.raises(RuntimeError, match="after compilation"):
            table.add(server.routes[0])

    def test_contains_full_path(self) -> None:
        table = RouteTable()
        server = RestServer()
        server.register_route("demo/v1", "/x", _definition())
        table.add(server.routes[0])
        assert "/demo/v1/x" in table
        assert table.get("/demo/v1/x", "get") is server.routes[0]
        assert table.get("/demo/v1/x", "POST") is None


class TestRegisterRoute:
    def test_returns_true(self) -> None:
        assert RestServer().register_route("demo/v1", "/items", _definition()) is True

    def test_invalid_namespace(self, caplog: pytest.LogCaptureFixture) -> None:
        server = RestServer()
        assert server.register_route("demo", "/items", _definition()) is False
        assert server.routes == []
        assert "invalid namespace" in caplog.text

    def test_after_init_ignored(self, caplog: pytest.LogCaptureFixture) -> None:
        server = RestServer()
        server.init()
        assert server.register_route("demo/v1", "/items", _definition()) is False
        assert server.routes == []
        assert "after routing init" in caplog.text

    def test_route_carries_handler(self) -> None:
        server = RestServer()
        server.register_route("demo/v1", "/items", _definition())
        assert server.routes[0].handler is _handler


class TestInit:
    def test_hooks_run_in_order(self) -> None:
        server = RestServer()
        calls: list[str] = []
        server.on_rest_init(lambda: calls.append("a"))
        server.on_rest_init(lambda: calls.append("b"))
        server.init()
        assert calls == ["a", "b"]
        assert server.initialized

    def test_runs_once(self) -> None:
        server = RestServer()
        calls: list[int] = []
        server.on_rest_init(lambda: calls.append(1))
        server.init()
        server.init()
        assert calls == [1]

    def test_decorator_returns_function(self) -> None:
        server = RestServer()

        @server.on_rest_init
        def hook() -> None:
            pass

        assert callable(hook)

    def test_failing_hook_logged_others_run(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.ERROR, logger="perch.server")
        server = RestServer()
        calls: list[str] = []

        def broken() -> None:
            raise ValueError("boom")

        server.on_rest_init(broken)
        server.on_rest_init(lambda: calls.append("after"))
        server.init()
        assert calls == ["after"]
        assert "rest init hook" in caplog.text

    def test_hook_after_init_never_runs(self) -> None:
        server = RestServer()
        server.init()
        calls: list[int] = []
        server.on_rest_init(lambda: calls.append(1))
        server.init()
        assert calls == []

    def test_hook_calling_init_is_a_no_op(self) -> None:
        server = RestServer()
        calls: list[int] = []

        def nested() -> None:
            calls.append(1)
            server.init()

        server.on_rest_init(nested)
        server.init()
        assert calls == [1]
        assert server.initialized


class TestBuildUrl:
    def test_default(self) -> None:
        assert RestServer().build_url("demo/v1", "/items") == "http://127.0.0.1:8000/api/demo/v1/items"

    def test_base_url_and_prefix(self) -> None:
        server = RestServer(PerchConfig(base_url="https://example.com/", rest_prefix="/wp-json/"))
        assert server.build_url("demo/v1/", "/items") == "https://example.com/wp-json/demo/v1/items"

    def test_empty_prefix(self) -> None:
        server = RestServer(PerchConfig(base_url="https://example.com", rest_prefix=""))
        assert server.build_url("demo/v1", "items") == "https://example.com/demo/v1/items"

    def test_repeated_route_slashes(self) -> None:
        assert RestServer().build_url("demo/v1", "//items") == "http://127.0.0.1:8000/api/demo/v1/items"

    def test_empty_namespace(self) -> None:
        assert RestServer().build_url("", "/items") == "http://127.0.0.1:8000/api/items"


class TestDefaultServer:
    def test_get_server_is_stable(self) -> None:
        previous = set_server(None)
        try:
            assert get_server() is get_server()
        finally:
            set_server(previous)

    def test_set_server(self) -> None:
        server = RestServer()
        previous = set_server(server)
        try:
            assert get_server() is server
        finally:
            set_server(previous)
