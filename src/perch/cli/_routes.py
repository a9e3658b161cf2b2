"""``perch routes`` — show what a server registers at routing init.

Routes are grouped by namespace. Each row lists the HTTP verbs, the
capabilities they were declared as, the route pattern and the callback.
A trailing ``*`` on the callback marks a route guarded by a permission
check other than the default.
"""

import argparse
import sys

from perch.cli._resolve import resolve_server
from perch.endpoint import always_allow
from perch.errors import PerchError
from perch.routing.route import RegisteredRoute

_HEADERS = ("VERBS", "CAPABILITIES", "ROUTE", "CALLBACK")


def run_routes(args: argparse.Namespace) -> None:
    try:
        server = resolve_server(args.server)
    except (ModuleNotFoundError, AttributeError, TypeError, PerchError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    server.init()
    grouped: dict[str, list[tuple[str, ...]]] = {}
    for route in server.routes:
        if args.namespace and route.namespace != args.namespace.strip("/"):
            continue
        grouped.setdefault(route.namespace, []).append(_row(route))

    if not grouped:
        print("No routes registered.")
        return

    rows = [row for group in grouped.values() for row in group]
    widths = [max(len(header), *(len(row[i]) for row in rows)) for i, header in enumerate(_HEADERS)]
    for namespace, group in grouped.items():
        print(namespace)
        print(f"  {_format(_HEADERS, widths)}")
        for row in group:
            print(f"  {_format(row, widths)}")


def _row(route: RegisteredRoute) -> tuple[str, ...]:
    definition = route.definition
    callback = getattr(route.handler, "__name__", repr(route.handler))
    if definition.permission_callback is not always_allow:
        callback += " *"
    return (
        ", ".join(sorted(route.methods)) or "-",
        ", ".join(capability.value for capability in definition.methods) or "-",
        route.route,
        callback,
    )


def _format(cells: tuple[str, ...], widths: list[int]) -> str:
    return "  ".join(cell.ljust(width) for cell, width in zip(cells, widths, strict=True)).rstrip()
