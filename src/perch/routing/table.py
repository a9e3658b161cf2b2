"""Host route table.

Routes are registered during the routing-init phase and frozen when
that phase ends. Each ``(path, verb)`` pair holds at most one route;
registering the same pair again replaces the earlier entry.
"""

from __future__ import annotations

from perch.routing.route import RegisteredRoute


class RouteTable:
    """Route table keyed by full path, then HTTP verb.

    Usage::

        table = RouteTable()
        table.add(RegisteredRoute("demo/v1", "/items", frozenset({"GET"}), definition))
        table.compile()
        table.get("/demo/v1/items", "GET")
    """

    __slots__ = ("_compiled", "_paths")

    def __init__(self) -> None:
        # "/demo/v1/items" -> {"GET": route, "POST": route}
        self._paths: dict[str, dict[str, RegisteredRoute]] = {}
        self._compiled = False

    def add(self, route: RegisteredRoute) -> None:
        """Add a route to the table. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)

        by_method = self._paths.setdefault(route.path, {})
        for method in route.methods:
            by_method[method] = route

    def compile(self) -> None:
        """Freeze the table. No more routes can be added."""
        self._compiled = True

    @property
    def compiled(self) -> bool:
        return self._compiled

    @property
    def routes(self) -> list[RegisteredRoute]:
        """Return every distinct registered route, in registration order.

        A route that was fully replaced by later registrations is not
        included.
        """
        seen: set[int] = set()
        result: list[RegisteredRoute] = []
        for by_method in self._paths.values():
            for route in by_method.values():
                route_id = id(route)
                if route_id not in seen:
                    seen.add(route_id)
                    result.append(route)
        return result

    def get(self, path: str, method: str) -> RegisteredRoute | None:
        """Look up the route serving *method* at *path*, if any."""
        return self._paths.get(path, {}).get(method.upper())

    def methods_for(self, path: str) -> frozenset[str]:
        """Verbs registered at *path*."""
        return frozenset(self._paths.get(path, {}))

    def __len__(self) -> int:
        return len(self.routes)

    def __contains__(self, path: str) -> bool:
        return path in self._paths
