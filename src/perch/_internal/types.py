"""Shared type aliases used across perch modules."""

from collections.abc import Callable, Mapping
from typing import Any, TypeAlias

# Endpoint handler — user-defined function with variable signature
Callback: TypeAlias = Callable[..., Any]

# Permission check — receives the request, returns truthy to allow
PermissionCallback: TypeAlias = Callable[..., Any]

# Field name → field spec (JSON Schema vocabulary)
SchemaSpec: TypeAlias = Mapping[str, Any]

# Raw, caller-supplied endpoint configuration
RawEndpoint: TypeAlias = Mapping[str, Any]
