"""Perch configuration.

PerchConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from perch.errors import ConfigurationError

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off", ""})


@dataclass(frozen=True, slots=True)
class PerchConfig:
    """Perch configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = PerchConfig(debug=True, rest_prefix="wp-json")

    Or read them from the host environment::

        config = PerchConfig.from_env()
    """

    # Diagnostics — rejection and registration lines are only logged when True
    debug: bool = False

    # URL building
    host: str = "127.0.0.1"
    port: int = 8000
    base_url: str = ""  # Overrides host/port when set (e.g. "https://example.com")
    rest_prefix: str = "api"

    # Route syntax — True restricts routes to [A-Za-z0-9/_-] (no capture groups)
    strict_routes: bool = False

    @property
    def root_url(self) -> str:
        """Absolute URL of the REST root, without a trailing slash."""
        base = self.base_url.rstrip("/") or f"http://{self.host}:{self.port}"
        prefix = self.rest_prefix.strip("/")
        return f"{base}/{prefix}" if prefix else base

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> PerchConfig:
        """Build a config from ``PERCH_*`` environment variables.

        Recognized: ``PERCH_DEBUG``, ``PERCH_BASE_URL``, ``PERCH_REST_PREFIX``,
        ``PERCH_STRICT_ROUTES``. Unset variables keep their defaults.

        Raises ``ConfigurationError`` for a boolean that cannot be parsed.
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            debug=_env_bool(env, "PERCH_DEBUG", defaults.debug),
            base_url=env.get("PERCH_BASE_URL", defaults.base_url),
            rest_prefix=env.get("PERCH_REST_PREFIX", defaults.rest_prefix),
            strict_routes=_env_bool(env, "PERCH_STRICT_ROUTES", defaults.strict_routes),
        )


def _env_bool(env: Mapping[str, str], key: str, default: bool) -> bool:
    raw = env.get(key)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    msg = f"{key}={raw!r} is not a boolean. Use one of: 1, 0, true, false, yes, no, on, off."
    raise ConfigurationError(msg)
