"""Import-string resolution for ``perch routes``.

``"pkg.api:server"`` names a RestServer, an EndpointManager, or a
zero-argument function returning either. Without ``:attribute`` the
module's ``server`` is tried, then its ``manager``.
"""

import importlib
from typing import Any

from perch.config import PerchConfig
from perch.manager import EndpointManager
from perch.server import RestServer

DEFAULT_ATTRIBUTES = ("server", "manager")

_TARGET_TYPES = (RestServer, EndpointManager)


def load_target(import_string: str) -> RestServer | EndpointManager:
    """Import the object named by *import_string*, calling it if it is a factory.

    Raises:
        ModuleNotFoundError: The module cannot be imported.
        AttributeError: The module lacks the named (or any default) attribute.
        TypeError: The object is neither a server nor a manager, or its
            factory raised.
    """
    module_name, _, attribute = import_string.partition(":")
    module = importlib.import_module(module_name)
    names = (attribute,) if attribute else DEFAULT_ATTRIBUTES

    target: Any = None
    for name in names:
        if hasattr(module, name):
            target = getattr(module, name)
            break
    else:
        wanted = " or ".join(repr(name) for name in names)
        msg = f"module {module_name!r} has no attribute {wanted}"
        raise AttributeError(msg)

    if callable(target) and not isinstance(target, _TARGET_TYPES):
        try:
            target = target()
        except Exception as exc:
            msg = f"{import_string!r} could not be built: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(target, _TARGET_TYPES):
        msg = f"{import_string!r} is a {type(target).__name__}, expected a RestServer or EndpointManager"
        raise TypeError(msg)
    return target


def resolve_server(import_string: str) -> RestServer:
    """Resolve *import_string* to the server whose routes should be listed.

    A bare EndpointManager is attached to a fresh server configured from
    the environment, so listing it never touches the process default.
    """
    target = load_target(import_string)
    if isinstance(target, EndpointManager):
        server = RestServer(PerchConfig.from_env())
        target.attach(server)
        return server
    return target
