"""RegisteredRoute frozen dataclass."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from perch.endpoint import EndpointDefinition


@dataclass(frozen=True, slots=True)
class RegisteredRoute:
    """A route as stored by the host route table.

    Created by ``RouteTable.add()`` for each ``register_route`` call.
    """

    namespace: str
    route: str
    methods: frozenset[str]
    definition: EndpointDefinition

    @property
    def path(self) -> str:
        """Full path pattern: ``/<namespace>/<route>``."""
        return join_path(self.namespace, self.route)

    @property
    def handler(self) -> Callable[..., Any]:
        return self.definition.callback


def join_path(namespace: str, route: str) -> str:
    """Join a namespace and route with exactly one ``/`` between them.

    Slashes around *namespace* and leading slashes on *route* collapse,
    and an empty namespace contributes no segment::

        join_path("demo/v1/", "//items")  # "/demo/v1/items"
        join_path("", "/items")  # "/items"
    """
    parts = [part for part in (namespace.strip("/"), route.lstrip("/")) if part]
    return "/" + "/".join(parts)
