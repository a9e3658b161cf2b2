"""Endpoint manager — collect endpoint definitions, register them once.

Mutable during setup (namespace, endpoints). Registration happens when
the host's routing-init phase runs ``register_endpoints()``, either via
``attach()`` or by the caller directly::

    manager = EndpointManager("shop/v1", prefix="shop")
    manager.add_endpoints({
        "/items": {"methods": "GET", "callback": list_items},
        "/items/(?P<id>\\d+)": {"methods": "GET,DELETE", "callback": item},
    })
    manager.attach(server)  # registers when server.init() runs

Invalid input never raises. Every mutator returns ``self`` so calls
chain; rejected namespaces and endpoints are logged (in debug mode) and
dropped, and the remaining endpoints are still registered.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Protocol

from perch._internal.types import RawEndpoint
from perch.config import PerchConfig
from perch.endpoint import EndpointDefinition, normalize
from perch.errors import InvalidNamespace, Rejection
from perch.routing.patterns import is_valid_namespace
from perch.routing.route import join_path

if TYPE_CHECKING:
    from perch.server import RestServer

logger = logging.getLogger("perch.rest")


class RouteRegistrar(Protocol):
    """Anything that can take a route registration."""

    def register_route(
        self,
        namespace: str,
        route: str,
        definition: EndpointDefinition,
    ) -> Any: ...


def check_namespace(namespace: str) -> str | InvalidNamespace:
    """Return *namespace* if valid, else the rejection."""
    if is_valid_namespace(namespace):
        return namespace
    return InvalidNamespace(namespace)


class EndpointManager:
    """Collects endpoint definitions for one namespace.

    Lifecycle:
        Unconfigured → configured (any number of ``set_namespace`` /
        ``add_endpoint`` calls) → registered (``register_endpoints()``).
        Adding endpoints after registration only changes the in-memory
        collection.
    """

    __slots__ = ("_debug", "_endpoints", "_namespace", "_prefix", "_registrar", "_strict_routes")

    def __init__(
        self,
        namespace: str = "",
        prefix: str = "",
        *,
        registrar: RouteRegistrar | None = None,
        debug: bool | None = None,
        config: PerchConfig | None = None,
    ) -> None:
        if config is None:
            config = getattr(registrar, "config", None)
        if not isinstance(config, PerchConfig):
            config = PerchConfig.from_env()

        self._debug: bool = config.debug if debug is None else debug
        self._strict_routes: bool = config.strict_routes
        self._namespace: str = ""
        self._prefix: str = ""
        self._endpoints: dict[str, EndpointDefinition] = {}
        self._registrar: RouteRegistrar | None = registrar

        if namespace:
            self.set_namespace(namespace)
        if prefix:
            self.set_prefix(prefix)

    # -- Configuration --

    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def debug(self) -> bool:
        return self._debug

    @property
    def endpoints(self) -> Mapping[str, EndpointDefinition]:
        """Read-only view of the accepted endpoints, keyed by route."""
        return MappingProxyType(self._endpoints)

    def set_namespace(self, namespace: str) -> EndpointManager:
        """Set the API namespace (e.g. ``"my-plugin/v1"``).

        An invalid namespace is logged and ignored; the previous value
        stays in place.
        """
        result = check_namespace(namespace)
        if isinstance(result, Rejection):
            self._log(result.message)
            return self
        self._namespace = result
        return self

    def set_prefix(self, prefix: str) -> EndpointManager:
        """Set the tag prepended to log lines."""
        self._prefix = prefix
        return self

    # -- Endpoints --

    def add_endpoint(self, route: str, endpoint: RawEndpoint) -> EndpointManager:
        """Normalize and store one endpoint, replacing any at *route*.

        A rejected endpoint is logged and leaves the collection untouched.
        """
        result = normalize(route, endpoint, strict_routes=self._strict_routes)
        if isinstance(result, Rejection):
            self._log(result.message)
            return self
        self._endpoints[route] = result
        return self

    def add_endpoints(self, endpoints: Mapping[str, RawEndpoint]) -> EndpointManager:
        """Add each ``route → config`` entry in mapping order."""
        for route, endpoint in endpoints.items():
            self.add_endpoint(route, endpoint)
        return self

    # -- Registration --

    def attach(self, server: RestServer) -> EndpointManager:
        """Register this manager's endpoints when *server* initializes routing."""
        self._registrar = server
        server.on_rest_init(self.register_endpoints)
        return self

    def register_endpoints(self) -> int:
        """Hand every endpoint to the registrar.

        Does nothing when the namespace is unset, no endpoints were
        accepted, or there is no registrar. The registrar's return value
        is ignored; an exception for one route is logged and the
        remaining routes are still attempted.

        Returns the number of ``register_route`` calls made.
        """
        if not self._namespace or not self._endpoints:
            return 0
        if self._registrar is None:
            self._log("No route registrar attached", {"namespace": self._namespace})
            return 0

        calls = 0
        for route, endpoint in self._endpoints.items():
            calls += 1
            try:
                self._registrar.register_route(self._namespace, route, endpoint)
            except Exception as exc:
                self._log(
                    f"Failed to register endpoint: {join_path(self._namespace, route)}",
                    {"error": str(exc)},
                    level=logging.ERROR,
                )
                continue
            self._log(f"Registered endpoint: {join_path(self._namespace, route)}", level=logging.INFO)
        return calls

    # -- Internal --

    def _log(
        self,
        message: str,
        context: Mapping[str, Any] | None = None,
        *,
        level: int = logging.WARNING,
    ) -> None:
        """Emit a diagnostic line when debug mode is on."""
        if not self._debug:
            return
        tag = f"[{self._prefix}] " if self._prefix else ""
        extra = f" {json.dumps(dict(context), default=str)}" if context else ""
        logger.log(level, "%sREST: %s%s", tag, message, extra)

    def __len__(self) -> int:
        return len(self._endpoints)

    def __contains__(self, route: str) -> bool:
        return route in self._endpoints

    def __repr__(self) -> str:
        return f"EndpointManager(namespace={self._namespace!r}, endpoints={len(self._endpoints)})"
