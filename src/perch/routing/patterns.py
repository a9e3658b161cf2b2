"""Namespace and route syntax checks.

Pure functions, no logging. The manager turns a failed check into a
logged rejection.

Namespaces look like ``"my-plugin/v1"``. Routes start with ``/`` and
use ``[A-Za-z0-9/_-]`` for their literal parts. Outside strict mode a
route may also carry named capture groups, which the host uses to
extract path parameters::

    /items/(?P<id>\\d+)
    /users/(?P<user>[a-z0-9-]+)/posts
"""

import re
from dataclasses import dataclass

NAMESPACE_RE = re.compile(r"^[a-zA-Z0-9_-]+/v\d+$")
STRICT_ROUTE_RE = re.compile(r"^/[a-zA-Z0-9/_-]+$")

_LITERAL_RE = re.compile(r"[a-zA-Z0-9/_-]*")
_GROUP_OPEN_RE = re.compile(r"\(\?P<([a-zA-Z_][a-zA-Z0-9_]*)>")


@dataclass(frozen=True, slots=True)
class RouteParam:
    """A named capture group found in a route."""

    name: str
    pattern: str


def is_valid_namespace(namespace: str) -> bool:
    """Check *namespace* is ``<segment>/v<digits>``."""
    return isinstance(namespace, str) and NAMESPACE_RE.fullmatch(namespace) is not None


def is_valid_route(route: str, *, strict: bool = False) -> bool:
    """Check *route* syntax.

    Strict mode accepts only ``^/[A-Za-z0-9/_-]+$``. Otherwise named
    capture groups ``(?P<name>pattern)`` are also accepted, provided
    each group body is a valid regex and the route as a whole compiles.
    Stray ``(``, ``)``, ``<``, ``>``, ``?`` or ``:`` are rejected in
    both modes.
    """
    if not isinstance(route, str):
        return False
    if strict:
        return STRICT_ROUTE_RE.fullmatch(route) is not None
    return route_params(route) is not None


def route_params(route: str) -> list[RouteParam] | None:
    """Parse the named groups of *route*.

    Returns the groups in order of appearance, or ``None`` when the
    route is malformed (see ``is_valid_route``).
    """
    if len(route) < 2 or not route.startswith("/"):
        return None

    params: list[RouteParam] = []
    pos = 0
    while pos < len(route):
        literal = _LITERAL_RE.match(route, pos)
        if literal is not None:
            pos = literal.end()
        if pos == len(route):
            break

        opener = _GROUP_OPEN_RE.match(route, pos)
        if opener is None:
            return None
        end = _group_end(route, opener.end())
        if end is None:
            return None
        body = route[opener.end() : end]
        if not body:
            return None
        params.append(RouteParam(name=opener.group(1), pattern=body))
        pos = end + 1

    names = [p.name for p in params]
    if len(names) != len(set(names)):
        return None
    try:
        re.compile(route)
    except re.error:
        return None
    return params


def _group_end(route: str, start: int) -> int | None:
    """Index of the ``)`` closing a group whose body begins at *start*.

    Tracks nested parentheses, escapes and character classes. A ``]``
    directly after ``[`` or ``[^`` is a literal member of the class.
    """
    depth = 1
    in_class = False
    class_start = 0
    i = start
    while i < len(route):
        char = route[i]
        if char == "\\":
            i += 2
            continue
        if in_class:
            if char == "]" and i != class_start:
                in_class = False
        elif char == "[":
            in_class = True
            class_start = i + 2 if route.startswith("^", i + 1) else i + 1
        elif char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return None
