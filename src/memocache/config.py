"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Store options and environment-driven defaults.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from .errors import CacheConfigError


class CacheOptions(BaseModel):
    """
    Immutable configuration handed to a store at construction time.

    Attributes:
        max_age: Entry lifetime in seconds. `None` or `0` disables expiry.
        max_size: Accepted for compatibility with bounded stores but not
            enforced by any shipped store.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_age: float | None = Field(
        default=None,
        ge=0,
        validation_alias=AliasChoices("max_age", "maxAge"),
    )
    max_size: int | None = Field(
        default=None,
        ge=0,
        validation_alias=AliasChoices("max_size", "maxSize"),
    )

    @property
    def expires(self) -> bool:
        """Whether entries written under these options get an expiry timer."""
        return bool(self.max_age)

    @classmethod
    def coerce(cls, value: CacheOptions | Mapping[str, Any] | None) -> CacheOptions:
        """Normalize `None`, a mapping or an instance into `CacheOptions`."""
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        if not isinstance(value, Mapping):
            raise CacheConfigError(
                f"Cache options must be a mapping or CacheOptions, got {type(value).__name__}"
            )
        try:
            return cls.model_validate(dict(value))
        except ValidationError as exc:
            raise CacheConfigError(f"Invalid cache options: {exc}") from exc


def _env_number(name: str, cast: type[int] | type[float]) -> Any:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return cast(raw.strip())
    except ValueError as exc:
        raise CacheConfigError(f"{name} must be a number, got {raw!r}") from exc


@dataclass(frozen=True, slots=True)
class CacheSettings:
    """Process-level defaults used by callers that do not pass explicit options."""

    backend: str = "ttl"
    max_age_s: float | None = None
    max_size: int | None = None

    @staticmethod
    def from_env() -> "CacheSettings":
        """Load settings from `MEMOCACHE_*` environment variables."""
        backend = (os.getenv("MEMOCACHE_BACKEND") or "ttl").strip().lower() or "ttl"
        return CacheSettings(
            backend=backend,
            max_age_s=_env_number("MEMOCACHE_MAX_AGE_S", float),
            max_size=_env_number("MEMOCACHE_MAX_SIZE", int),
        )

    def default_options(self) -> CacheOptions:
        """Build store options from these settings."""
        return CacheOptions.coerce(
            {"max_age": self.max_age_s, "max_size": self.max_size}
        )


def resolve_cache_options(
    options: CacheOptions | Mapping[str, Any] | None,
) -> CacheOptions:
    """Coerce explicit options, or fall back to `CacheSettings.from_env()`."""
    if options is None:
        return CacheSettings.from_env().default_options()
    return CacheOptions.coerce(options)
