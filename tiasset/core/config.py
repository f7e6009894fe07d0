"""
Runtime configuration for the asset builder.

Environment variables:
    TIASSET_LOG_LEVEL      root log level (default WARNING).
    TIASSET_OUTPUT_FORMAT  output format used when --format is omitted
                           (default binary).
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from tiasset.core.errors import ConfigError
from tiasset.core.output.formats import OutputType

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(frozen=True)
class Settings:
    log_level: str = "WARNING"
    output_format: OutputType = OutputType.BINARY


def load_settings() -> Settings:
    log_level = (os.getenv("TIASSET_LOG_LEVEL") or "WARNING").strip().upper()
    if log_level not in _LOG_LEVELS:
        raise ConfigError(f"TIASSET_LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}; got {log_level!r}")

    raw_format = (os.getenv("TIASSET_OUTPUT_FORMAT") or OutputType.BINARY.value).strip().lower()
    try:
        output_format = OutputType(raw_format)
    except ValueError:
        choices = ", ".join(t.value for t in OutputType)
        raise ConfigError(f"TIASSET_OUTPUT_FORMAT must be one of {choices}; got {raw_format!r}") from None

    return Settings(log_level=log_level, output_format=output_format)


def configure_logging(settings: Settings, *, verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level)
    logging.basicConfig(level=level, format=_LOG_FORMAT)
    logging.getLogger("tiasset").setLevel(level)
