"""Endpoint definitions — normalize one route + raw config pair.

``normalize()`` is pure: it returns either a frozen ``EndpointDefinition``
or a ``Rejection`` value, and never logs or raises for bad input.

Usage::

    result = normalize("/items", {"methods": "GET", "callback": list_items})
    if isinstance(result, Rejection):
        print(result.message)
    else:
        result.methods  # MethodSet({READABLE})
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, TypeAlias

from perch._internal.types import Callback, PermissionCallback, RawEndpoint
from perch.errors import (
    InvalidField,
    InvalidRoute,
    MissingRequiredField,
    Rejection,
    UncallableCallback,
    UncallablePermissionCallback,
)
from perch.methods import MethodSet, coerce_methods
from perch.routing.patterns import is_valid_route

REQUIRED_FIELDS = ("methods", "callback")

# Keys with a dedicated EndpointDefinition field
_KNOWN_KEYS = frozenset({"methods", "callback", "permission_callback", "args", "schema"})


def always_allow(*args: Any, **kwargs: Any) -> bool:
    """Default permission check: every request is allowed."""
    return True


# ---------------------------------------------------------------------------
# Literal-or-producer fields
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Literal:
    """A field given as a plain value."""

    value: Any


@dataclass(frozen=True, slots=True)
class Producer:
    """A field given as a zero-argument function producing the value."""

    fn: Callable[[], Any]


Deferred: TypeAlias = Literal | Producer


def deferred(raw: Any) -> Deferred:
    """Tag a raw field value: callables become producers."""
    if isinstance(raw, (Literal, Producer)):
        return raw
    if callable(raw):
        return Producer(raw)
    return Literal(raw)


def resolve(value: Deferred) -> Any:
    """Collapse a tagged field to its concrete value. Producers run once."""
    if isinstance(value, Producer):
        return value.fn()
    return value.value


# ---------------------------------------------------------------------------
# Definition
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class EndpointDefinition:
    """A validated, normalized endpoint configuration.

    Every instance has passed route validation and carries a non-missing
    ``methods`` and a callable ``callback``. ``extra`` keeps any keys the
    caller supplied beyond the known ones, for the host to interpret.
    """

    methods: MethodSet
    callback: Callback
    permission_callback: PermissionCallback = always_allow
    args: Mapping[str, Any] = field(default_factory=dict)
    schema: Mapping[str, Any] | None = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Flatten into a plain mapping (extra keys included)."""
        return {
            **self.extra,
            "methods": self.methods,
            "callback": self.callback,
            "permission_callback": self.permission_callback,
            "args": self.args,
            "schema": self.schema,
        }


def normalize(
    route: str,
    raw: RawEndpoint,
    *,
    strict_routes: bool = False,
) -> EndpointDefinition | Rejection:
    """Validate and normalize a raw endpoint config.

    Steps, in order:

    1. Route syntax (``InvalidRoute``).
    2. ``methods`` then ``callback`` must be present (``MissingRequiredField``).
    3. ``methods`` is coerced into a ``MethodSet``; any other shape, or
       an ``args`` that is not a mapping, is an ``InvalidField``.
    4. ``callback`` must be callable (``UncallableCallback``).
    5. A callable ``schema`` is invoked once; its result replaces it.
    6. Defaults fill ``permission_callback``, ``args`` and ``schema``.
    """
    if not is_valid_route(route, strict=strict_routes):
        return InvalidRoute(route)
    if not isinstance(raw, Mapping):
        return MissingRequiredField(route, REQUIRED_FIELDS[0])

    for name in REQUIRED_FIELDS:
        if raw.get(name) is None:
            return MissingRequiredField(route, name)

    methods = coerce_methods(raw["methods"])
    if methods is None:
        return InvalidField(route, "methods")

    callback = raw["callback"]
    if not callable(callback):
        return UncallableCallback(route)

    permission_callback = raw.get("permission_callback")
    if permission_callback is None:
        permission_callback = always_allow
    elif not callable(permission_callback):
        return UncallablePermissionCallback(route)

    args = raw.get("args")
    if args and not isinstance(args, Mapping):
        return InvalidField(route, "args")

    schema = raw.get("schema")
    if schema is not None:
        schema = resolve(deferred(schema))

    return EndpointDefinition(
        methods=methods,
        callback=callback,
        permission_callback=permission_callback,
        args=dict(args) if args else {},
        schema=schema,
        extra={k: v for k, v in raw.items() if k not in _KNOWN_KEYS},
    )
