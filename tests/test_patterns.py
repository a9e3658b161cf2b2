"""Tests for perch.routing.patterns — namespace and route syntax."""

import pytest

from perch.routing.patterns import (
    RouteParam,
    is_valid_namespace,
    is_valid_route,
    route_params,
)


class TestNamespace:
    @pytest.mark.parametrize(
        "namespace",
        ["demo/v1", "my-plugin/v2", "my_plugin/v10", "A1/v0"],
    )
    def test_valid(self, namespace: str) -> None:
        assert is_valid_namespace(namespace)

    @pytest.mark.parametrize(
        "namespace",
        ["demo", "demo/v", "demo/1", "/demo/v1", "demo/v1/", "de mo/v1", "demo/v1a", "", "a/b/v1"],
    )
    def test_invalid(self, namespace: str) -> None:
        assert not is_valid_namespace(namespace)


class TestStrictRoute:
    @pytest.mark.parametrize("route", ["/items", "/items/all", "/a_b-c/d9"])
    def test_valid(self, route: str) -> None:
        assert is_valid_route(route, strict=True)

    @pytest.mark.parametrize(
        "route",
        ["items", "/", "", "/items/(?P<id>\\d+)", "/a:b", "/a?b", "/<id>", "/items/ x"],
    )
    def test_invalid(self, route: str) -> None:
        assert not is_valid_route(route, strict=True)


class TestLenientRoute:
    @pytest.mark.parametrize("route", ["/items", "/items/all", "/a_b-c/d9"])
    def test_plain_routes_still_valid(self, route: str) -> None:
        assert is_valid_route(route)

    def test_named_group(self) -> None:
        assert is_valid_route("/items/(?P<id>\\d+)")

    def test_named_group_with_class(self) -> None:
        assert is_valid_route("/users/(?P<slug>[a-z0-9-]+)/posts")

    def test_group_with_nested_parens(self) -> None:
        assert is_valid_route("/files/(?P<name>(?:[a-z]+)\\.txt)")

    def test_escaped_paren_in_group(self) -> None:
        assert is_valid_route("/x/(?P<v>\\)+)")

    @pytest.mark.parametrize("route", ["/x/(?P<c>[])]+)", "/x/(?P<c>[^])]+)"])
    def test_bracket_first_in_class_is_literal(self, route: str) -> None:
        assert is_valid_route(route)

    @pytest.mark.parametrize(
        "route",
        [
            "/items/(id)",
            "/items/(?P<id>)",
            "/items/(?P<id>\\d+",
            "/items/(?P<1id>\\d+)",
            "/a?b",
            "/a:b",
            "/<id>",
            "/items)",
            "/(?P<a>\\d+)/(?P<a>\\d+)",
            "/items/(?P<id>[0-9)",
            "items/(?P<id>\\d+)",
        ],
    )
    def test_invalid(self, route: str) -> None:
        assert not is_valid_route(route)

    def test_non_string(self) -> None:
        assert not is_valid_route(None)  # type: ignore[arg-type]


class TestRouteParams:
    def test_empty_for_plain(self) -> None:
        assert route_params("/items") == []

    def test_collects_in_order(self) -> None:
        params = route_params("/a/(?P<x>\\d+)/b/(?P<y>[a-z]+)")
        assert params == [RouteParam("x", "\\d+"), RouteParam("y", "[a-z]+")]

    def test_class_with_literal_bracket(self) -> None:
        assert route_params("/x/(?P<c>[])]+)") == [RouteParam("c", "[])]+")]

    def test_malformed_returns_none(self) -> None:
        assert route_params("/a/(") is None
