"""``perch validate`` — check a JSON document against a field schema.

Exits 0 when the document is valid, 1 when any field fails or an input
file cannot be read.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from perch.schema import validate


def run_validate(args: argparse.Namespace) -> None:
    schema = _load_object(args.schema)
    data = _load_object(args.data)

    errors = validate(schema, data, enforce_required=args.enforce_required)
    if not errors:
        print("OK")
        return

    for error in errors:
        print(f"{error.code}  {error.message}")
    raise SystemExit(1)


def _load_object(path: str) -> dict[str, Any]:
    try:
        loaded = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        print(f"Error: cannot read {path}: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    if not isinstance(loaded, dict):
        print(f"Error: {path} must contain a JSON object", file=sys.stderr)
        raise SystemExit(1)
    return loaded
