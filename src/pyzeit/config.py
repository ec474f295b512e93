"""Container configuration for pyzeit."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyzeit.exceptions import ZeitConfigError

# env var -> (field name, default)
_ENV_BOOL_MAP: dict[str, tuple[str, bool]] = {
    "PYZEIT_STRICT_CLONE": ("strict_clone", False),
    "PYZEIT_CLONE_ON_READ": ("clone_on_read", True),
    "PYZEIT_LOG_PATCHES": ("log_patches", False),
}


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class ZeitConfig:
    """Container configuration.

    Parameters
    ----------
    max_write_depth : int
        Maximum nesting of writes.  A hook that calls back into a
        mutation method starts a nested write; nesting deeper than this
        raises :class:`~pyzeit.exceptions.ZeitReentrancyError`.
    strict_clone : bool
        Raise :class:`~pyzeit.exceptions.ZeitCloneError` when a state
        value is an iterable outside the known taxonomy instead of
        sharing it as an opaque value.
    clone_on_read : bool
        Hand out deep copies from ``Zeit.state``, ``Zeit.snapshot`` and
        to lifecycle hooks.  Disable only when callers never mutate what
        they read.
    log_patches : bool
        Include (summarized) patches and states in DEBUG log lines.
    """

    max_write_depth: int = 32
    strict_clone: bool = False
    clone_on_read: bool = True
    log_patches: bool = False

    def __post_init__(self) -> None:
        if self.max_write_depth < 1:
            raise ZeitConfigError(f"max_write_depth must be >= 1, got {self.max_write_depth}")

    @classmethod
    def from_env(cls, **overrides: Any) -> ZeitConfig:
        """Create configuration from ``PYZEIT_*`` environment variables.

        Explicit keyword arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        ZeitConfig
            Populated configuration.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        depth_env = env.get("PYZEIT_MAX_WRITE_DEPTH")
        if depth_env is not None and "max_write_depth" not in overrides:
            try:
                config_kwargs["max_write_depth"] = int(depth_env)
            except ValueError as exc:
                raise ZeitConfigError(f"PYZEIT_MAX_WRITE_DEPTH must be an integer, got {depth_env!r}") from exc

        for env_key, (field_name, default) in _ENV_BOOL_MAP.items():
            if field_name not in overrides:
                config_kwargs[field_name] = _env_bool(env.get(env_key), default)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
