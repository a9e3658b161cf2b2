"""One-call helpers for the common cases.

Usage::

    from perch.helpers import register_rest_endpoints

    register_rest_endpoints("my-plugin/v1", {
        "/items": {
            "methods": "GET",
            "callback": get_items,
            "permission_callback": lambda request: request.user.can("read"),
            "args": {"page": {"type": "integer", "default": 1}},
        },
        "/items/(?P<id>\\d+)": {
            "methods": "GET,POST,DELETE",
            "callback": handle_single_item,
            "args": {"id": {"required": True, "type": "integer"}},
        },
    }, prefix="my-plugin")
"""

import logging
from collections.abc import Mapping
from typing import Any, Literal

from perch._internal.types import RawEndpoint, SchemaSpec
from perch.manager import EndpointManager
from perch.schema import ValidationErrorSet, validate
from perch.server import RestServer, get_server

logger = logging.getLogger("perch.rest")


def register_rest_endpoints(
    namespace: str,
    endpoints: Mapping[str, RawEndpoint],
    prefix: str = "",
    *,
    server: RestServer | None = None,
) -> bool:
    """Queue *endpoints* under *namespace* for the server's routing init.

    Returns ``True`` when *endpoints* is non-empty and every entry went
    through the manager. Individual endpoints may still have been
    rejected and dropped. Any unexpected error is caught and reported
    as ``False``.
    """
    target = server
    try:
        if target is None:
            target = get_server()
        manager = EndpointManager(namespace, prefix, registrar=target)
        if not endpoints:
            return False
        manager.add_endpoints(endpoints).attach(target)
    except Exception as exc:
        if target is None or target.config.debug:
            logger.error("REST registration failed: %s", exc)
        return False
    return True


def get_rest_endpoint_url(
    namespace: str,
    endpoint: str,
    *,
    server: RestServer | None = None,
) -> str:
    """Absolute URL for *endpoint* under *namespace*."""
    return (server or get_server()).build_url(namespace, endpoint)


def validate_rest_schema(
    schema: Mapping[str, SchemaSpec],
    data: Mapping[str, Any],
) -> Literal[True] | ValidationErrorSet:
    """Validate *data* against *schema*.

    Returns ``True`` when every present field is valid, otherwise the
    ``ValidationErrorSet`` listing each failing field.
    """
    errors = validate(schema, data)
    if errors:
        return errors
    return True
