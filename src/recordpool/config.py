"""Reducer settings: record expiry and timestamp ordering."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from recordpool.exceptions import RecordPoolConfigError


_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"0", "false", "no", "off"})


def _env_flag(value: str | None, default: bool) -> bool:
    """Read an on/off switch; unset or unrecognised text keeps *default*."""
    flag = (value or "").strip().lower()
    if flag in _TRUTHY:
        return True
    if flag in _FALSY:
        return False
    return default


def _env_seconds(name: str, value: str) -> float | None:
    text = value.strip()
    if not text:
        return None
    try:
        seconds = float(text)
    except ValueError as exc:
        raise RecordPoolConfigError(f"{name} must be a number of seconds, got {value!r}", setting=name) from exc
    return seconds


@dataclasses.dataclass(frozen=True)
class PoolConfig:
    """Reducer configuration.

    Parameters
    ----------
    ttl_seconds : float or None
        Age after which a record that is not refreshed by a merge is
        dropped from the pool. ``None`` or ``0`` disables expiry, so stale
        records stay visible until they are overwritten or deleted.
    strictly_forward : bool
        When a refreshed record already carries a timestamp at or after the
        current instant, stamp it one microsecond later instead so that
        ``fetched_at`` never stands still or moves backwards.
    """

    ttl_seconds: float | None = None
    strictly_forward: bool = True

    def __post_init__(self) -> None:
        if self.ttl_seconds is not None and self.ttl_seconds < 0:
            raise RecordPoolConfigError("ttl_seconds must not be negative", setting="ttl_seconds")

    @property
    def expires(self) -> bool:
        return bool(self.ttl_seconds)

    @classmethod
    def from_env(cls, **overrides: Any) -> PoolConfig:
        """Create configuration from environment variables.

        Reads ``RECORDPOOL_TTL_SECONDS`` and ``RECORDPOOL_STRICTLY_FORWARD``.
        Explicit keyword arguments override environment values.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        ttl_env = env.get("RECORDPOOL_TTL_SECONDS")
        if ttl_env is not None and "ttl_seconds" not in overrides:
            config_kwargs["ttl_seconds"] = _env_seconds("RECORDPOOL_TTL_SECONDS", ttl_env)

        if "strictly_forward" not in overrides:
            config_kwargs["strictly_forward"] = _env_flag(env.get("RECORDPOOL_STRICTLY_FORWARD"), True)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
