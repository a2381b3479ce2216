"""Process-wide configuration.

Settings are read from the environment once, when the package is first
imported, and never change afterwards:

- ``TRACING_SERDE_BOUNDED``: when true, owned containers are fixed-capacity
  (``BOUNDED_CAPACITY`` entries) instead of growable.
"""

import os
from dataclasses import dataclass

BOUNDED_CAPACITY = 32

_TRUE_VALUES = frozenset({"true", "1", "yes", "y", "on"})
_FALSE_VALUES = frozenset({"false", "0", "no", "n", "off"})


def _get_env_bool(name: str, default: bool) -> bool:
    """Read a boolean env var with a default."""
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    normalized = raw.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean (true/false). Got: {raw!r}")


@dataclass(frozen=True)
class Settings:
    """Container configuration.

    Attributes:
        bounded: Whether owned containers have a fixed capacity.
        capacity: Maximum entries per owned container, or None if unbounded.
    """

    bounded: bool = False

    @property
    def capacity(self) -> int | None:
        return BOUNDED_CAPACITY if self.bounded else None


def load_settings() -> Settings:
    """Build Settings from the current environment.

    Raises:
        ValueError: If an environment variable holds an invalid value.
    """
    return Settings(bounded=_get_env_bool("TRACING_SERDE_BOUNDED", False))


SETTINGS = load_settings()
