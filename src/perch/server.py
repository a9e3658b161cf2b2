"""REST server — the host side of endpoint registration.

Owns the route table and the routing-init phase. Mutable until
``init()`` runs the registered hooks; the route table is frozen
afterwards.

Usage::

    server = RestServer(PerchConfig(debug=True))
    EndpointManager("shop/v1").add_endpoints(endpoints).attach(server)
    server.init()
    server.build_url("shop/v1", "/items")
"""

import logging
import threading
from collections.abc import Callable
from typing import Any

from perch.config import PerchConfig
from perch.endpoint import EndpointDefinition
from perch.routing.patterns import is_valid_namespace
from perch.routing.route import RegisteredRoute, join_path
from perch.routing.table import RouteTable

logger = logging.getLogger("perch.server")


class RestServer:
    """Host route table with a one-shot routing-init phase.

    Thread safety:
        Setup is single-threaded. ``init()`` uses an RLock + double-check
        so the hooks run exactly once even if two threads race to
        initialize, and a hook that calls ``init()`` itself returns
        immediately.
    """

    __slots__ = ("_init_hooks", "_init_lock", "_initialized", "_initializing", "_table", "config")

    def __init__(self, config: PerchConfig | None = None) -> None:
        self.config: PerchConfig = config or PerchConfig()
        self._table = RouteTable()
        self._init_hooks: list[Callable[[], Any]] = []
        self._initialized: bool = False
        self._initializing: bool = False
        self._init_lock = threading.RLock()

    # -- Lifecycle hooks --

    def on_rest_init(self, func: Callable[[], Any]) -> Callable[[], Any]:
        """Register a hook to run when routing initializes.

        Usable as a decorator::

            @server.on_rest_init
            def register():
                manager.register_endpoints()

        Hooks added after ``init()`` has run are kept but never called.
        """
        self._init_hooks.append(func)
        return func

    @property
    def initialized(self) -> bool:
        return self._initialized

    def init(self) -> None:
        """Run the routing-init hooks once, then freeze the route table.

        A hook that raises is logged and the remaining hooks still run.
        Later calls are no-ops.
        """
        if self._initialized:
            return
        with self._init_lock:
            if self._initialized or self._initializing:
                return
            self._initializing = True
            try:
                for hook in self._init_hooks:
                    try:
                        hook()
                    except Exception:
                        logger.exception("rest init hook %r failed", hook)
                self._table.compile()
                self._initialized = True
            finally:
                self._initializing = False

    # -- Routes --

    def register_route(
        self,
        namespace: str,
        route: str,
        definition: EndpointDefinition,
    ) -> bool:
        """Store one route. Replaces any earlier route at the same path and verb.

        Returns ``False`` (and logs) when the namespace is malformed or
        the table is already frozen.
        """
        if not is_valid_namespace(namespace):
            logger.warning("register_route: invalid namespace %r for %r", namespace, route)
            return False
        if self._table.compiled:
            logger.warning(
                "register_route: %s registered after routing init, ignored",
                join_path(namespace, route),
            )
            return False

        self._table.add(
            RegisteredRoute(
                namespace=namespace,
                route=route,
                methods=definition.methods.verbs,
                definition=definition,
            )
        )
        return True

    @property
    def routes(self) -> list[RegisteredRoute]:
        """All registered routes, in registration order."""
        return self._table.routes

    def lookup(self, namespace: str, route: str) -> dict[str, RegisteredRoute]:
        """Verb → route for the routes stored at *namespace* + *route*."""
        path = join_path(namespace, route)
        return {
            method: match
            for method in sorted(self._table.methods_for(path))
            if (match := self._table.get(path, method)) is not None
        }

    def build_url(self, namespace: str, route: str) -> str:
        """Absolute URL for an endpoint.

        ``build_url("shop/v1", "/items")`` with default config gives
        ``"http://127.0.0.1:8000/api/shop/v1/items"``.
        """
        return f"{self.config.root_url}{join_path(namespace, route)}"


# ---------------------------------------------------------------------------
# Process default
# ---------------------------------------------------------------------------

_default_server: RestServer | None = None


def get_server() -> RestServer:
    """Return the process-wide server, creating it from the environment."""
    global _default_server
    if _default_server is None:
        _default_server = RestServer(PerchConfig.from_env())
    return _default_server


def set_server(server: RestServer | None) -> RestServer | None:
    """Replace the process-wide server. Returns the previous one.

    Passing ``None`` makes the next ``get_server()`` build a fresh one.
    """
    global _default_server
    previous = _default_server
    _default_server = server
    return previous
