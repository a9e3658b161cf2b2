"""Perch — declarative REST endpoint registration.

Describe a namespace and its endpoints; perch validates and normalizes
them and registers them when the server initializes routing.

Basic usage::

    from perch import EndpointManager, RestServer

    server = RestServer()

    def list_items(request):
        return []

    EndpointManager("shop/v1").add_endpoints({
        "/items": {"methods": "GET", "callback": list_items},
    }).attach(server)

    server.init()

Standalone schema validation::

    from perch import validate_rest_schema

    result = validate_rest_schema({"name": {"type": "string"}}, {"name": 123})
    if result is not True:
        print(result.messages)
"""

import importlib

__version__ = "0.1.0-dev"
__all__ = [
    "Capability",
    "ConfigurationError",
    "EndpointDefinition",
    "EndpointManager",
    "FieldError",
    "MethodSet",
    "PerchConfig",
    "PerchError",
    "Rejection",
    "RestServer",
    "ValidationErrorSet",
    "get_rest_endpoint_url",
    "get_server",
    "normalize",
    "register_rest_endpoints",
    "validate",
    "validate_rest_schema",
]

# Public name → defining module. Keeps ``import perch`` cheap.
_LAZY_IMPORTS: dict[str, str] = {
    "Capability": "perch.methods",
    "ConfigurationError": "perch.errors",
    "EndpointDefinition": "perch.endpoint",
    "EndpointManager": "perch.manager",
    "FieldError": "perch.schema",
    "MethodSet": "perch.methods",
    "PerchConfig": "perch.config",
    "PerchError": "perch.errors",
    "Rejection": "perch.errors",
    "RestServer": "perch.server",
    "ValidationErrorSet": "perch.schema",
    "get_rest_endpoint_url": "perch.helpers",
    "get_server": "perch.server",
    "normalize": "perch.endpoint",
    "register_rest_endpoints": "perch.helpers",
    "validate": "perch.schema",
    "validate_rest_schema": "perch.helpers",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API."""
    module_path = _LAZY_IMPORTS.get(name)
    if module_path is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    return getattr(importlib.import_module(module_path), name)
