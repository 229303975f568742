"""Runtime configuration loaded from environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "STOCKDASH_"

DEFAULT_STATIC_DIR = str(Path(__file__).resolve().parent / "static")

# Names understood by both logging and uvicorn
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ConfigError(ValueError):
    """Raised when an environment variable holds an unusable value."""


@dataclass(frozen=True, slots=True)
class Settings:
    """Server settings. Every field can be overridden with ``STOCKDASH_<FIELD>``."""

    host: str = "127.0.0.1"
    port: int = 3000
    tick_interval: float = 5.0  # seconds between price ticks
    max_delta: float = 5.0  # absolute bound on a single tick's move
    price_floor: float = 1.0
    heartbeat_interval: float = 15.0  # idle seconds before an SSE keep-alive comment
    stream_queue_size: int = 100
    static_dir: str | None = DEFAULT_STATIC_DIR
    log_level: str = "INFO"
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.tick_interval <= 0:
            raise ConfigError("tick_interval must be positive")
        if self.max_delta < 0:
            raise ConfigError("max_delta must not be negative")
        if self.price_floor <= 0:
            raise ConfigError("price_floor must be positive")
        if self.heartbeat_interval <= 0:
            raise ConfigError("heartbeat_interval must be positive")
        if self.stream_queue_size < 1:
            raise ConfigError("stream_queue_size must be at least 1")
        if not 0 < self.port < 65536:
            raise ConfigError(f"port out of range: {self.port}")
        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigError(f"unknown log_level {self.log_level!r}, expected one of {LOG_LEVELS}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from ``environ`` (defaults to ``os.environ``).

        Unset or blank variables fall back to the field defaults.
        """
        env = os.environ if environ is None else environ

        def read(name: str) -> str | None:
            value = env.get(ENV_PREFIX + name, "").strip()
            return value or None

        overrides: dict[str, object] = {}
        for name, parse in (
            ("port", int),
            ("tick_interval", float),
            ("max_delta", float),
            ("price_floor", float),
            ("heartbeat_interval", float),
            ("stream_queue_size", int),
            ("seed", int),
        ):
            raw = read(name.upper())
            if raw is None:
                continue
            try:
                overrides[name] = parse(raw)
            except ValueError as e:
                raise ConfigError(f"{ENV_PREFIX}{name.upper()}={raw!r}: {e}") from e

        for name in ("host", "static_dir"):
            raw = read(name.upper())
            if raw is not None:
                overrides[name] = raw

        log_level = read("LOG_LEVEL")
        if log_level is not None:
            overrides["log_level"] = log_level.upper()

        return cls(**overrides)
