"""Perch CLI — route listing and schema validation.

Entry point registered as ``perch`` in ``pyproject.toml``::

    [project.scripts]
    perch = "perch.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``perch`` command."""
    parser = argparse.ArgumentParser(
        prog="perch",
        description="Perch — declarative REST endpoint registration.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- perch routes -----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument(
        "server",
        help="Import string for a RestServer or EndpointManager (e.g. myapi:server)",
    )
    routes_parser.add_argument(
        "--namespace",
        default=None,
        help="Only list routes in this namespace (e.g. shop/v1)",
    )

    # -- perch validate ---------------------------------------------------
    validate_parser = subparsers.add_parser(
        "validate",
        help="Validate a JSON document against a field schema",
    )
    validate_parser.add_argument("schema", help="Path to a JSON field schema")
    validate_parser.add_argument("data", help="Path to a JSON object to validate")
    validate_parser.add_argument(
        "--enforce-required",
        action="store_true",
        help="Also report fields marked required that are missing",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from perch.cli._routes import run_routes

        run_routes(args)
    elif args.command == "validate":
        from perch.cli._validate import run_validate

        run_validate(args)
