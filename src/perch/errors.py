"""Perch exception hierarchy and rejection reasons.

Exceptions are raised only for programmer errors in configuration.
Endpoint and namespace problems are *rejections*: frozen values returned
by the pure validators, logged by the manager, never raised.
"""

from dataclasses import dataclass


class PerchError(Exception):
    """Base for all perch-specific errors."""


class ConfigurationError(PerchError):
    """Raised when perch configuration is invalid.

    Typically raised by ``PerchConfig.from_env()`` for unparsable values.
    """


# ---------------------------------------------------------------------------
# Rejections
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Rejection:
    """Why a namespace or endpoint definition was not accepted."""

    @property
    def message(self) -> str:
        return "Rejected"

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class InvalidNamespace(Rejection):
    namespace: str

    @property
    def message(self) -> str:
        return f"Invalid API namespace: {self.namespace}"


@dataclass(frozen=True, slots=True)
class InvalidRoute(Rejection):
    route: str

    @property
    def message(self) -> str:
        return f"Invalid endpoint route: {self.route}"


@dataclass(frozen=True, slots=True)
class MissingRequiredField(Rejection):
    route: str
    name: str

    @property
    def message(self) -> str:
        return f'Missing required field "{self.name}" for endpoint: {self.route}'


@dataclass(frozen=True, slots=True)
class UncallableCallback(Rejection):
    route: str

    @property
    def message(self) -> str:
        return f"Invalid callback for endpoint: {self.route}"


@dataclass(frozen=True, slots=True)
class UncallablePermissionCallback(Rejection):
    route: str

    @property
    def message(self) -> str:
        return f"Invalid permission callback for endpoint: {self.route}"


@dataclass(frozen=True, slots=True)
class InvalidField(Rejection):
    route: str
    name: str

    @property
    def message(self) -> str:
        return f'Invalid field "{self.name}" for endpoint: {self.route}'
