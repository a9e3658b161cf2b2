"""Test helpers for code that registers perch endpoints.

``RecordingRegistrar`` stands in for a ``RestServer`` and records every
``register_route`` call, so tests can assert on what was registered
without a route table::

    registrar = RecordingRegistrar()
    EndpointManager("demo/v1", registrar=registrar).add_endpoint(
        "/items", {"methods": "GET", "callback": list_items}
    ).register_endpoints()
    assert registrar.routes == ["/items"]
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from perch.config import PerchConfig
from perch.endpoint import EndpointDefinition


@dataclass(frozen=True, slots=True)
class RegistrationCall:
    """One recorded ``register_route`` call."""

    namespace: str
    route: str
    definition: EndpointDefinition


@dataclass(slots=True)
class RecordingRegistrar:
    """Registrar that records calls instead of storing routes.

    Set ``fail_on`` to a set of routes whose registration should raise,
    to exercise error handling in the caller.
    """

    config: PerchConfig = field(default_factory=PerchConfig)
    calls: list[RegistrationCall] = field(default_factory=list)
    fail_on: frozenset[str] = frozenset()
    _hooks: list[Callable[[], Any]] = field(default_factory=list)

    def register_route(
        self,
        namespace: str,
        route: str,
        definition: EndpointDefinition,
    ) -> bool:
        self.calls.append(RegistrationCall(namespace, route, definition))
        if route in self.fail_on:
            msg = f"Registration refused for {route!r}"
            raise RuntimeError(msg)
        return True

    def on_rest_init(self, func: Callable[[], Any]) -> Callable[[], Any]:
        self._hooks.append(func)
        return func

    def init(self) -> None:
        """Run the recorded init hooks."""
        for hook in self._hooks:
            hook()

    @property
    def routes(self) -> list[str]:
        return [c.route for c in self.calls]
