"""HTTP method parsing — raw method strings to capability sets.

Endpoints declare their methods as a comma-separated string
(``"GET, POST"``). Perch collapses each verb to a *capability*:
GET and OPTIONS are both READABLE, PUT and PATCH are both EDITABLE.
Unknown verbs are dropped without error.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum


class Capability(Enum):
    """What an endpoint lets a client do, independent of the exact verb."""

    READABLE = "readable"
    CREATABLE = "creatable"
    EDITABLE = "editable"
    DELETABLE = "deletable"


# Raw verb → capability
METHOD_MAP: dict[str, Capability] = {
    "GET": Capability.READABLE,
    "POST": Capability.CREATABLE,
    "PUT": Capability.EDITABLE,
    "PATCH": Capability.EDITABLE,
    "DELETE": Capability.DELETABLE,
    "OPTIONS": Capability.READABLE,
}

# Capability → concrete verbs handed to the host route table
CAPABILITY_VERBS: dict[Capability, frozenset[str]] = {
    Capability.READABLE: frozenset({"GET"}),
    Capability.CREATABLE: frozenset({"POST"}),
    Capability.EDITABLE: frozenset({"POST", "PUT", "PATCH"}),
    Capability.DELETABLE: frozenset({"DELETE"}),
}


@dataclass(frozen=True, slots=True)
class MethodSet:
    """A canonical, duplicate-free set of method capabilities.

    Usage::

        methods = MethodSet.parse("get, POST, put")
        Capability.READABLE in methods  # True
        methods.verbs  # frozenset({"GET", "POST", "PUT", "PATCH"})
    """

    capabilities: frozenset[Capability] = frozenset()

    @classmethod
    def parse(cls, raw: str) -> MethodSet:
        """Parse a comma-separated, case-insensitive method string.

        Tokens are trimmed and upper-cased; unrecognized tokens are
        silently discarded, so the result may be empty.
        """
        found: set[Capability] = set()
        for token in raw.upper().split(","):
            capability = METHOD_MAP.get(token.strip())
            if capability is not None:
                found.add(capability)
        return cls(frozenset(found))

    @classmethod
    def of(cls, *capabilities: Capability) -> MethodSet:
        return cls(frozenset(capabilities))

    @property
    def verbs(self) -> frozenset[str]:
        """HTTP verbs covered by these capabilities."""
        verbs: set[str] = set()
        for capability in self.capabilities:
            verbs |= CAPABILITY_VERBS[capability]
        return frozenset(verbs)

    def __contains__(self, item: object) -> bool:
        return item in self.capabilities

    def __iter__(self) -> Iterator[Capability]:
        return iter(sorted(self.capabilities, key=lambda c: c.value))

    def __len__(self) -> int:
        return len(self.capabilities)

    def __bool__(self) -> bool:
        return bool(self.capabilities)


def coerce_methods(raw: object) -> MethodSet | None:
    """Turn a raw ``methods`` value into a MethodSet.

    Strings are parsed, a MethodSet passes through unchanged, and any
    other iterable may mix verb strings (``"GET"``, ``"put, patch"``)
    with ``Capability`` members. Returns ``None`` when *raw* is not one
    of those shapes.
    """
    if isinstance(raw, MethodSet):
        return raw
    if isinstance(raw, str):
        return MethodSet.parse(raw)
    if not isinstance(raw, Iterable):
        return None
    found: set[Capability] = set()
    for item in raw:
        if isinstance(item, Capability):
            found.add(item)
        elif isinstance(item, str):
            found |= MethodSet.parse(item).capabilities
        else:
            return None
    return MethodSet(frozenset(found))
